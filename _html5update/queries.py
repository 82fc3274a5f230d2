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

from __future__ import annotations

from collections.abc import Collection, Sequence
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from cssselect import HTMLTranslator
from lxml import etree


if TYPE_CHECKING:
    from collections.abc import Iterable

    from _html5update.nodes import TagNode
    from _html5update.typing import Filter


_css_translator = HTMLTranslator()


class QueryResults(Sequence["TagNode"]):
    """
    A container with the results of a CSS selector query with some helpers for
    better readable Python expressions. The nodes are kept in document order as they
    were found, later mutations of the tree don't alter the container.
    """

    def __init__(self, results: Iterable[TagNode]):
        self.__items = tuple(results)

    def __eq__(self, other):
        if not isinstance(other, Collection):
            raise TypeError

        return len(self.__items) == len(other) and all(x in other for x in self.__items)

    def __getitem__(self, item):
        return self.__items[item]

    def __len__(self) -> int:
        return len(self.__items)

    def __repr__(self):
        return str([repr(x) for x in self.__items])

    def as_list(self) -> list[TagNode]:
        """The contained nodes as a new :class:`list`."""
        return list(self.__items)

    def filtered_by(self, *filters: Filter) -> QueryResults:
        """
        Returns another :class:`QueryResults` instance that contains all nodes filtered
        by the provided :term:`filter` s.
        """
        items: Sequence[TagNode] = self.__items
        for filter in filters:
            items = [x for x in items if filter(x)]
        return self.__class__(items)

    @property
    def first(self) -> Optional[TagNode]:
        """The first node from the results or :obj:`None` if there are none."""
        if len(self.__items):
            return self.__items[0]
        else:
            return None

    @property
    def last(self) -> Optional[TagNode]:
        """The last node from the results or :obj:`None` if there are none."""
        if len(self.__items):
            return self.__items[-1]
        else:
            return None

    @property
    def size(self) -> int:
        """The amount of contained nodes."""
        return len(self.__items)


@lru_cache(maxsize=64)
def _css_to_xpath(expression: str) -> str:
    return _css_translator.css_to_xpath(expression, prefix="descendant::")


def css_select(element: etree._Element, expression: str) -> list[etree._Element]:
    """
    Evaluates a CSS selector in the context of an element and returns the matching
    descendant elements in document order. Only the translation of the expression is
    memoized, the evaluation always reflects the tree's current state.
    """
    return [
        x
        for x in element.xpath(_css_to_xpath(expression))
        if isinstance(x, etree._Element) and isinstance(x.tag, str)
    ]


__all__ = (
    _css_to_xpath.__name__,  # type: ignore
    css_select.__name__,
    QueryResults.__name__,
)
