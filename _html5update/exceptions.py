# Copyright (C) 2018-'25  Frank Sachsenheim
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""These are the specific html5update exceptions."""

from __future__ import annotations

from typing import Any


class Html5UpdateBaseException(Exception):
    pass


class InvalidCodePath(Html5UpdateBaseException, RuntimeError):
    """Raised when a code path that is not expected to be executed is reached."""

    def __init__(self):  # pragma: no cover
        super().__init__(
            "An unintended path was taken through the code. Please report this bug."
        )


class InvalidInputError(Html5UpdateBaseException, ValueError):
    """
    Raised when an input can't be decoded or parsed as HTML at all. The causing
    exception is available as ``__cause__``.
    """

    def __init__(self, source: Any, reason: str):
        super().__init__(source, reason)
        self.source = source
        self.reason = reason

    def __str__(self):
        source = self.source
        if isinstance(source, (bytes, str)) and len(source) > 64:
            return f"Couldn't parse {source[:64]!r}…: {self.reason}"
        return f"Couldn't parse {source!r}: {self.reason}"


class InvalidNodeError(Html5UpdateBaseException):
    """
    Raised when an operation targets a detached node where one that is part of a tree
    is required, or when an operation would corrupt a tree's structure.
    """

    pass


__all__ = (
    Html5UpdateBaseException.__name__,
    InvalidCodePath.__name__,
    InvalidInputError.__name__,
    InvalidNodeError.__name__,
)
