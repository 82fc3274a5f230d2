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

"""Node filters that can be passed to the iterating methods of :class:`TagNode`."""

from _html5update.nodes import (
    any_of,
    has_class,
    is_comment_node,
    is_tag_node,
    is_text_node,
    not_,
    tag_name_is,
)


__all__ = (
    any_of.__name__,
    has_class.__name__,
    is_comment_node.__name__,
    is_tag_node.__name__,
    is_text_node.__name__,
    not_.__name__,
    tag_name_is.__name__,
)
