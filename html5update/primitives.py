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

"""
Parametrized transformations that apply one kind of mutation to all nodes that match
a CSS selector. The matches are collected before the first mutation, and matches that
a previous mutation of the same run removed from the tree are skipped. No match is
never an error.
"""

from __future__ import annotations

import logging
import re
from abc import abstractmethod
from typing import NamedTuple, Optional

from _html5update.nodes import TagNode, is_tag_node
from html5update.transform import Transformation


logger = logging.getLogger(__name__)


def rewrite_attribute(
    node: TagNode, attribute: str, pattern: str | re.Pattern, replacement: str
):
    """
    Replaces all occurrences of a regular expression in a node's attribute value. A
    node without that attribute is left alone.
    """
    if (value := node.get(attribute)) is not None:
        node[attribute] = re.sub(pattern, replacement, value)


class SelectingTransformation(Transformation):
    """
    The base class for transformations whose options have a ``selector`` field. The
    :meth:`transform_node` method is called with each matching node.
    """

    def transform(self):
        matches = self.root.css_select(self.options.selector)
        logger.debug(
            "%s: %d node(s) match %r.",
            self.__class__.__name__,
            matches.size,
            self.options.selector,
        )
        for node in matches:
            if node.root is self.root:
                self.transform_node(node)

    @abstractmethod
    def transform_node(self, node: TagNode):
        pass


#


class RemoveClassOptions(NamedTuple):
    selector: str
    class_name: str


class RemoveClass(SelectingTransformation):
    """
    Removes a class token and removes the ``class`` attribute when no token remains.
    """

    options_class = RemoveClassOptions

    def transform_node(self, node: TagNode):
        node.remove_class(self.options.class_name)


class RetagOptions(NamedTuple):
    selector: str
    tag: str
    class_name: Optional[str] = None
    """An optional class token that is removed from retagged nodes."""


class Retag(SelectingTransformation):
    """Changes the tag name of nodes while their attributes and children are kept."""

    options_class = RetagOptions

    def transform_node(self, node: TagNode):
        node.local_name = self.options.tag
        if self.options.class_name:
            node.remove_class(self.options.class_name)


class RewriteAttributeOptions(NamedTuple):
    selector: str
    attribute: str
    pattern: str | re.Pattern
    replacement: str


class RewriteAttribute(SelectingTransformation):
    """Rewrites an attribute value with :func:`rewrite_attribute`."""

    options_class = RewriteAttributeOptions

    def transform_node(self, node: TagNode):
        rewrite_attribute(
            node, self.options.attribute, self.options.pattern, self.options.replacement
        )


class RemoveAttributeOptions(NamedTuple):
    selector: str
    attribute: str


class RemoveAttribute(SelectingTransformation):
    options_class = RemoveAttributeOptions

    def transform_node(self, node: TagNode):
        node.attributes.pop(self.options.attribute, None)


class CollapseNestedWrapperOptions(NamedTuple):
    selector: str
    """Selects inner wrappers, e.g. ``div.source > div.source``."""


class CollapseNestedWrapper(SelectingTransformation):
    """
    Replaces the parent of each matching node with the node itself. Other child nodes
    of the parent are dropped with it.
    """

    options_class = CollapseNestedWrapperOptions

    def transform_node(self, node: TagNode):
        wrapper = node.parent
        if wrapper is None or wrapper is self.root:
            return
        wrapper.replace_with(node.detach())


class RelocateSingleChildOptions(NamedTuple):
    selector: str
    child_tag: str


class RelocateSingleChild(SelectingTransformation):
    """
    Swaps matching nodes with their first descendant of the given tag. The descendant
    takes the matching node's position, is emptied and gets the matching node as only
    child. The matching node's contents are replaced with the descendant's text.
    """

    options_class = RelocateSingleChildOptions

    def transform_node(self, node: TagNode):
        child = node.css_select(self.options.child_tag).first
        if child is None:
            return

        text = child.full_text
        child.full_text = ""
        node.replace_with(child)
        child.append_child(node)
        node.full_text = text


class PromoteRowsToHeadOptions(NamedTuple):
    selector: str
    """Selects the rows to move, e.g. ``table > tbody > tr:has(th)``."""


class PromoteRowsToHead(SelectingTransformation):
    """
    Moves matching table rows from their row group into the table's head. A ``thead``
    that is the table's first child is reused, otherwise one is created in that place.
    """

    options_class = PromoteRowsToHeadOptions

    def transform_node(self, node: TagNode):
        row_group = node.parent
        if row_group is None or (table := row_group.parent) is None:
            return

        head = next(table.iterate_children(is_tag_node), None)
        if not (isinstance(head, TagNode) and head.local_name == "thead"):
            head = table.new_tag_node("thead")
            table.prepend_child(head)

        head.append_child(node.detach())


class UnwrapOptions(NamedTuple):
    selector: str


class Unwrap(SelectingTransformation):
    """Removes matching nodes while their child nodes and text take their place."""

    options_class = UnwrapOptions

    def transform_node(self, node: TagNode):
        node.detach(retain_child_nodes=True)


__all__ = (
    CollapseNestedWrapper.__name__,
    CollapseNestedWrapperOptions.__name__,
    PromoteRowsToHead.__name__,
    PromoteRowsToHeadOptions.__name__,
    RelocateSingleChild.__name__,
    RelocateSingleChildOptions.__name__,
    RemoveAttribute.__name__,
    RemoveAttributeOptions.__name__,
    RemoveClass.__name__,
    RemoveClassOptions.__name__,
    Retag.__name__,
    RetagOptions.__name__,
    RewriteAttribute.__name__,
    RewriteAttributeOptions.__name__,
    SelectingTransformation.__name__,
    Unwrap.__name__,
    UnwrapOptions.__name__,
    rewrite_attribute.__name__,
)
