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
The node classes wrap the elements of an :mod:`lxml.html` tree. They hide lxml's
text/tail model behind a sequence of child nodes and keep it consistent when nodes
are moved around.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Final, Optional, overload

from lxml import etree, html

from _html5update.exceptions import InvalidCodePath, InvalidNodeError
from _html5update.queries import QueryResults, css_select

if TYPE_CHECKING:
    from lxml.etree import _Attrib, _Element

    from _html5update.serializer import FormatOptions
    from _html5update.typing import Filter, HTMLNodeType, _WrapperCache


DETACHED, DATA, TAIL = 0, 1, 2


# lxml helpers


def _add_text_before(element: _Element, text: Optional[str]):
    if not text:
        return
    previous = element.getprevious()
    if previous is None:
        parent = element.getparent()
        assert parent is not None
        parent.text = (parent.text or "") + text
    else:
        previous.tail = (previous.tail or "") + text


def _append_text(element: _Element, text: str):
    if len(element):
        last = element[-1]
        last.tail = (last.tail or "") + text
    else:
        element.text = (element.text or "") + text


def _insert_after(
    parent: _Element, previous: Optional[_Element], items: Iterable[_Element | str]
):
    # inserts directly after `previous` or at the very beginning of `parent`, before
    # any text that is located there
    for item in reversed(tuple(items)):
        if isinstance(item, str):
            if previous is None:
                parent.text = item + (parent.text or "")
            else:
                previous.tail = item + (previous.tail or "")
            continue

        assert item.tail is None
        if previous is None:
            item.tail, parent.text = parent.text, None
            parent.insert(0, item)
        else:
            item.tail, previous.tail = previous.tail, None
            parent.insert(parent.index(previous) + 1, item)


def _remove_element(element: _Element):
    parent = element.getparent()
    assert parent is not None
    _add_text_before(element, element.tail)
    element.tail = None
    parent.remove(element)


def _get_or_create_element_wrapper(
    element: _Element, cache: _WrapperCache
) -> _ElementNode:
    result = cache.get(id(element))
    if result is None:
        if isinstance(element.tag, str):
            result = TagNode(element, cache)
        else:
            result = CommentNode(element, cache)
        cache[id(element)] = result
    return result


# api


class NodeBase(ABC):
    __slots__ = ("_cache",)

    def __init__(self, cache: _WrapperCache):
        self._cache = cache

    def ancestors(self, *filter: Filter) -> Iterator[TagNode]:
        """Yields the ancestor nodes from bottom to top."""
        node = self.parent
        while node is not None:
            if all(f(node) for f in filter):
                yield node
            node = node.parent

    @abstractmethod
    def detach(self) -> NodeBase:
        """Removes the node from its tree and returns it."""

    @property
    def index(self) -> Optional[int]:
        """The node's position among its parent's child nodes."""
        parent = self.parent
        if parent is None:
            return None
        for index, node in enumerate(parent.iterate_children()):
            if self._is_same_node(node):
                return index
        raise InvalidCodePath

    def _is_same_node(self, other: HTMLNodeType) -> bool:
        return other is self

    @property
    @abstractmethod
    def parent(self) -> Optional[TagNode]:
        pass

    @property
    def root(self) -> NodeBase:
        """The topmost node of the tree the node belongs to."""
        result = self
        for result in self.ancestors():
            pass
        return result


class _ElementNode(NodeBase):
    __slots__ = ("_etree_obj",)

    def __init__(self, etree_element: _Element, cache: _WrapperCache):
        super().__init__(cache)
        self._etree_obj: Final = etree_element

    def _prepare_new_relatives(self, nodes: Iterable[Any]) -> list[_Element | str]:
        result: list[_Element | str] = []
        for node in nodes:
            if isinstance(node, str):
                result.append(node)
                continue
            if isinstance(node, TextNode):
                result.append(node.detach().content)
                continue
            if not isinstance(node, _ElementNode):
                raise TypeError(
                    f"Only nodes and strings can be added to a tree, got {node!r}."
                )

            if node is self or (
                isinstance(node, TagNode) and node in tuple(self.ancestors())
            ):
                raise InvalidNodeError(
                    "A node can't be added to its own subtree or be its own relative."
                )

            node.detach()
            if node._cache is not self._cache:
                self._cache.update(node._cache)
                for wrapper in tuple(node._cache.values()):
                    wrapper._cache = self._cache
            result.append(node._etree_obj)
        return result

    def add_following_sibling(self, *node: Any):
        """
        Adds one or more nodes directly after this one. Nodes that are part of a tree
        are moved, strings are added as text.
        """
        parent = self._etree_obj.getparent()
        if parent is None:
            raise InvalidNodeError("Can't add a sibling to a node without parent.")
        _insert_after(parent, self._etree_obj, self._prepare_new_relatives(node))

    def add_preceding_sibling(self, *node: Any):
        """
        Adds one or more nodes directly before this one. Nodes that are part of a tree
        are moved, strings are added as text.
        """
        parent = self._etree_obj.getparent()
        if parent is None:
            raise InvalidNodeError("Can't add a sibling to a node without parent.")
        for item in self._prepare_new_relatives(node):
            if isinstance(item, str):
                _add_text_before(self._etree_obj, item)
            else:
                parent.insert(parent.index(self._etree_obj), item)

    def detach(self) -> _ElementNode:
        """
        Removes the node from its tree. The text that follows the node stays in
        place. Detaching a node without parent is a no-op.
        """
        if self._etree_obj.getparent() is not None:
            _remove_element(self._etree_obj)
        return self

    @property
    def parent(self) -> Optional[TagNode]:
        parent = self._etree_obj.getparent()
        if parent is None:
            return None
        result = _get_or_create_element_wrapper(parent, self._cache)
        assert isinstance(result, TagNode)
        return result

    def replace_with(self, node: Any) -> _ElementNode:
        """
        Puts another node at this one's position and returns this node, which is then
        detached. A node that is part of a tree is moved.
        """
        if self._etree_obj.getparent() is None:
            raise InvalidNodeError(
                "Can't replace a node without parent, e.g. the root node of a tree."
            )
        self.add_following_sibling(node)
        return self.detach()


class CommentNode(_ElementNode):
    """
    Represents comments and other markup, e.g. processing instructions, that is kept
    as it is.
    """

    __slots__ = ()

    def __repr__(self):
        return f"<{self.__class__.__name__}({self.content!r}) [{hex(id(self))}]>"

    def __str__(self):
        return etree.tostring(
            self._etree_obj, encoding="unicode", method="html", with_tail=False
        )

    @property
    def content(self) -> str:
        return self._etree_obj.text or ""


class TagNode(_ElementNode):
    """
    Represents an HTML element. Instances are not created directly, but obtained from
    a parsed tree, :func:`new_tag_node` or :meth:`TagNode.new_tag_node`. Each element of
    a tree is always represented by the same instance.
    """

    __slots__ = ()

    def __contains__(self, item: str | NodeBase) -> bool:
        """
        Tests whether the node has an attribute with the given name or whether the
        given node is one of its child nodes.
        """
        if isinstance(item, str):
            return item in self._etree_obj.attrib
        elif isinstance(item, NodeBase):
            return any(item._is_same_node(x) for x in self.iterate_children())
        else:
            raise TypeError

    def __delitem__(self, item: str):
        del self._etree_obj.attrib[item]

    @overload
    def __getitem__(self, item: str) -> str: ...

    @overload
    def __getitem__(self, item: int) -> HTMLNodeType: ...

    def __getitem__(self, item):
        if isinstance(item, str):
            return self._etree_obj.attrib[item]
        elif isinstance(item, int):
            return tuple(self.iterate_children())[item]
        raise TypeError

    def __len__(self) -> int:
        return sum(1 for _ in self.iterate_children())

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}('{self.local_name}', "
            f"{dict(self.attributes)}) [{hex(id(self))}]>"
        )

    def __setitem__(self, item: str, value: str):
        self._etree_obj.set(item, value)

    def __str__(self):
        from _html5update.serializer import DefaultStringOptions

        return DefaultStringOptions._get_serializer().serialize_root(self)

    def add_class(self, *name: str):
        """Adds class tokens that aren't present yet to the ``class`` attribute."""
        self._set_classes(tuple(dict.fromkeys(self.classes + name)))

    def append_child(self, *node: Any):
        """
        Appends one or more nodes as last child nodes. Nodes that are part of a tree
        are moved, strings are added as text.
        """
        element = self._etree_obj
        for item in self._prepare_new_relatives(node):
            if isinstance(item, str):
                _append_text(element, item)
            else:
                element.append(item)

    @property
    def attributes(self) -> _Attrib:
        """A mutable mapping of the node's attributes in their document order."""
        return self._etree_obj.attrib

    @property
    def classes(self) -> tuple[str, ...]:
        """The class tokens from the ``class`` attribute without duplicates."""
        return tuple(dict.fromkeys(self._etree_obj.get("class", "").split()))

    def css_select(self, expression: str) -> QueryResults:
        """
        Returns the descendant nodes that match a CSS selector in document order. The
        node itself is never part of the results.
        """
        cache = self._cache
        return QueryResults(
            _get_or_create_element_wrapper(x, cache)  # type: ignore
            for x in css_select(self._etree_obj, expression)
        )

    def detach(self, retain_child_nodes: bool = False) -> TagNode:
        """
        Removes the node from its tree. The text that follows the node stays in place.

        :param retain_child_nodes: Keeps the node's child nodes in the tree at the
                                   position of the removed node.
        """
        element = self._etree_obj
        parent = element.getparent()

        if parent is None:
            if retain_child_nodes:
                raise InvalidNodeError(
                    "Can't retain the child nodes of a node without parent."
                )
            return self

        if retain_child_nodes:
            _add_text_before(element, element.text)
            element.text = None
            index = parent.index(element)
            for child in tuple(element):
                parent.insert(index, child)
                index += 1

        _remove_element(element)
        return self

    @property
    def first_child(self) -> Optional[HTMLNodeType]:
        for result in self.iterate_children():
            return result
        return None

    @property
    def full_text(self) -> str:
        """
        The concatenated contents of all descending text nodes. Setting a value
        replaces all child nodes with one text node.
        """
        return "".join(
            x.content for x in self.iterate_descendants(is_text_node)  # type: ignore
        )

    @full_text.setter
    def full_text(self, text: str):
        element = self._etree_obj
        for child in tuple(element):
            element.remove(child)
        element.text = text or None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._etree_obj.get(name, default)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def insert_child(self, index: int, *node: Any):
        """
        Inserts one or more nodes before the child node at the given index. Nodes that
        are part of a tree are moved, strings are added as text.
        """
        children = tuple(self.iterate_children())
        if not 0 <= index <= len(children):
            raise IndexError("The given index is beyond the target's size.")

        if index == len(children):
            self.append_child(*node)
            return

        anchor = children[index]
        if isinstance(anchor, _ElementNode):
            anchor.add_preceding_sibling(*node)
        elif anchor._position == DATA:
            _insert_after(self._etree_obj, None, self._prepare_new_relatives(node))
        elif anchor._position == TAIL:
            _insert_after(
                self._etree_obj, anchor._bound_to, self._prepare_new_relatives(node)
            )
        else:
            raise InvalidCodePath

    def iterate_children(self, *filter: Filter) -> Iterator[HTMLNodeType]:
        """
        Yields the node's child nodes that match all given filters. Don't alter the
        tree while iterating, rather collect the nodes first.
        """
        element, cache = self._etree_obj, self._cache

        if element.text:
            candidate: HTMLNodeType = TextNode(element, DATA, cache)
            if all(f(candidate) for f in filter):
                yield candidate

        for child in element:
            candidate = _get_or_create_element_wrapper(child, cache)  # type: ignore
            if all(f(candidate) for f in filter):
                yield candidate
            if child.tail:
                candidate = TextNode(child, TAIL, cache)
                if all(f(candidate) for f in filter):
                    yield candidate

    def iterate_descendants(self, *filter: Filter) -> Iterator[HTMLNodeType]:
        """Yields the node's descendants that match all given filters in document
        order."""
        for child in self.iterate_children():
            if all(f(child) for f in filter):
                yield child
            if isinstance(child, TagNode):
                yield from child.iterate_descendants(*filter)

    @property
    def last_child(self) -> Optional[HTMLNodeType]:
        result = None
        for result in self.iterate_children():
            pass
        return result

    @property
    def local_name(self) -> str:
        return self._etree_obj.tag

    @local_name.setter
    def local_name(self, value: str):
        self._etree_obj.tag = value

    def new_tag_node(
        self, local_name: str, attributes: Optional[dict[str, str]] = None
    ) -> TagNode:
        """
        Creates a new, detached node that can be added to this node's tree.
        """
        result = _get_or_create_element_wrapper(
            self._etree_obj.makeelement(local_name, attributes or {}), self._cache
        )
        assert isinstance(result, TagNode)
        return result

    def prepend_child(self, *node: Any):
        """
        Inserts one or more nodes before the first child node. Nodes that are part of a
        tree are moved, strings are added as text.
        """
        _insert_after(self._etree_obj, None, self._prepare_new_relatives(node))

    def remove_class(self, *name: str):
        """
        Removes class tokens from the ``class`` attribute. The attribute is removed
        altogether when no token remains.
        """
        self._set_classes(tuple(x for x in self.classes if x not in name))

    def serialize(self, format_options: Optional[FormatOptions] = None) -> str:
        """
        Returns the node's markup. Without format options the markup is not
        altered for readability.
        """
        from _html5update.serializer import _get_serializer, _StringWriter

        return _get_serializer(_StringWriter(), format_options).serialize_root(self)

    def _set_classes(self, classes: tuple[str, ...]):
        if classes:
            self._etree_obj.set("class", " ".join(classes))
        else:
            self._etree_obj.attrib.pop("class", None)

    def wrap_with(self, node: TagNode) -> TagNode:
        """
        Puts the given node at this node's position and appends this one to it.

        :return: The wrapping node.
        """
        if self._etree_obj.getparent() is None:
            raise InvalidNodeError("Can't wrap a node without parent.")
        if not isinstance(node, TagNode):
            raise TypeError
        self.replace_with(node)
        node.append_child(self)
        return node


class TextNode(NodeBase):
    """
    Represents a text between, before or after tag nodes. Instances are views on the
    underlying tree's text and are created anew when child nodes are iterated.
    """

    __slots__ = ("_bound_to", "_content", "_position")

    def __init__(
        self,
        reference_or_text: _Element | str,
        position: int = DETACHED,
        cache: Optional[_WrapperCache] = None,
    ):
        super().__init__({} if cache is None else cache)
        self._bound_to: Optional[_Element]
        self._content: Optional[str]
        self._position = position

        if position == DETACHED:
            assert isinstance(reference_or_text, str)
            self._bound_to = None
            self._content = reference_or_text
        elif position in (DATA, TAIL):
            assert not isinstance(reference_or_text, str)
            self._bound_to = reference_or_text
            self._content = None
        else:
            raise ValueError

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, TextNode):
            return self.content == other.content
        elif isinstance(other, str):
            return self.content == other
        return NotImplemented

    __hash__ = None  # type: ignore

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(text={self.content!r}, "
            f"pos={self._position}) [{hex(id(self))}]>"
        )

    def __str__(self):
        return self.content

    @property
    def content(self) -> str:
        if self._position == DATA:
            assert self._bound_to is not None
            return self._bound_to.text or ""
        elif self._position == TAIL:
            assert self._bound_to is not None
            return self._bound_to.tail or ""
        elif self._position == DETACHED:
            assert self._content is not None
            return self._content
        raise InvalidCodePath

    @content.setter
    def content(self, text: str):
        if self._position == DATA:
            assert self._bound_to is not None
            self._bound_to.text = text or None
        elif self._position == TAIL:
            assert self._bound_to is not None
            self._bound_to.tail = text or None
        else:
            self._content = text

    def detach(self) -> TextNode:
        if self._position != DETACHED:
            content = self.content
            self.content = ""
            self._bound_to = None
            self._content = content
            self._position = DETACHED
            self._cache = {}
        return self

    def _is_same_node(self, other: HTMLNodeType) -> bool:
        return (
            isinstance(other, TextNode)
            and other._position == self._position
            and other._bound_to is self._bound_to
        )

    @property
    def parent(self) -> Optional[TagNode]:
        if self._position == DATA:
            assert self._bound_to is not None
            result = _get_or_create_element_wrapper(self._bound_to, self._cache)
            assert isinstance(result, TagNode)
            return result
        elif self._position == TAIL:
            assert self._bound_to is not None
            return _get_or_create_element_wrapper(self._bound_to, self._cache).parent
        return None


def new_tag_node(
    local_name: str, attributes: Optional[dict[str, str]] = None
) -> TagNode:
    """Creates a new, detached node that is the root of its own tree."""
    result = _get_or_create_element_wrapper(
        html.Element(local_name, attributes or {}), {}
    )
    assert isinstance(result, TagNode)
    return result


# contributed node filters and filter wrappers


def any_of(*filter: Filter) -> Filter:
    """
    A node filter wrapper that matches when any of the given filters is matching, like a
    boolean ``or``.
    """

    def any_of_wrapper(node: HTMLNodeType) -> bool:
        return any(x(node) for x in filter)

    return any_of_wrapper


def has_class(name: str) -> Filter:
    """A node filter that matches tag nodes that bear the given class token."""

    def has_class_filter(node: HTMLNodeType) -> bool:
        return isinstance(node, TagNode) and node.has_class(name)

    return has_class_filter


def is_comment_node(node: HTMLNodeType) -> bool:
    """A node filter that matches :class:`CommentNode` instances."""
    return isinstance(node, CommentNode)


def is_tag_node(node: HTMLNodeType) -> bool:
    """A node filter that matches :class:`TagNode` instances."""
    return isinstance(node, TagNode)


def is_text_node(node: HTMLNodeType) -> bool:
    """A node filter that matches :class:`TextNode` instances."""
    return isinstance(node, TextNode)


def not_(*filter: Filter) -> Filter:
    """
    A node filter wrapper that matches when the given filter is not matching,
    like a boolean ``not``.
    """

    def not_wrapper(node: HTMLNodeType) -> bool:
        return not all(f(node) for f in filter)

    return not_wrapper


def tag_name_is(*name: str) -> Filter:
    """A node filter that matches tag nodes with any of the given names."""

    def tag_name_filter(node: HTMLNodeType) -> bool:
        return isinstance(node, TagNode) and node.local_name in name

    return tag_name_filter


__all__ = (
    CommentNode.__name__,
    TagNode.__name__,
    TextNode.__name__,
    any_of.__name__,
    has_class.__name__,
    is_comment_node.__name__,
    is_tag_node.__name__,
    is_text_node.__name__,
    new_tag_node.__name__,
    not_.__name__,
    tag_name_is.__name__,
)
