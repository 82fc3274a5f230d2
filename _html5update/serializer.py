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
Serializers that write node trees as HTML markup. The pretty printing mimics the
output of the jsoup library, so that reformatted pages are formatted like pages that
passed the site rendering before.
"""

from __future__ import annotations

import re
from functools import partial
from io import StringIO
from typing import TYPE_CHECKING, ClassVar, Final, NamedTuple, Optional

from _html5update.nodes import CommentNode, TagNode, TextNode
from _html5update.tags import (
    BOOLEAN_ATTRIBUTES,
    PRESERVE_WHITESPACE_TAGS,
    RAW_TEXT_TAGS,
    VOID_TAGS,
    formats_as_block,
)

if TYPE_CHECKING:
    from _html5update.typing import HTMLNodeType


# constants


CTRL_CHAR_ENTITY_NAME_MAPPING: Final = (
    ("&", "amp"),
    (">", "gt"),
    ("<", "lt"),
    ('"', "quot"),
    ("\xa0", "nbsp"),
)
CCE_TABLE_FOR_ATTRIBUTES: Final = str.maketrans(
    {ord(k): f"&{v};" for k, v in CTRL_CHAR_ENTITY_NAME_MAPPING if k not in "<>"}
)
CCE_TABLE_FOR_TEXT: Final = str.maketrans(
    {ord(k): f"&{v};" for k, v in CTRL_CHAR_ENTITY_NAME_MAPPING if k != '"'}
)

# no-break spaces are not considered as whitespace
WHITESPACE: Final = " \t\n\f\r"
_crunch_whitespace: Final = partial(re.compile(f"[{WHITESPACE}]+").sub, " ")

KEEP_CONTENTS_TAGS: Final = PRESERVE_WHITESPACE_TAGS | RAW_TEXT_TAGS


# configuration


class FormatOptions(NamedTuple):
    """
    Instances of this class define a serialization formatting that puts block elements
    on their own lines and indents them per depth level.

    When it's employed whitespace contents are collapsed and trimmed where a browser
    would not render them anyway. The contents of ``pre``, ``textarea``, ``title``,
    ``script`` and ``style`` elements are never altered.
    """

    indentation: str = " "
    """ This string prefixes descending nodes' contents one time per depth level. """


class DefaultStringOptions:
    """
    This object's class variables are used to configure the serialization parameters
    that are applied when nodes and fragments are coerced to :class:`str` objects.

    .. attention::

        Use this once to define behaviour on *application level*. For thread-safe
        serializations with diverging parameters use :meth:`TagNode.serialize` and
        :meth:`html5update.Fragment.serialize`!
    """

    newline: ClassVar[None | str] = None
    """
    See :class:`io.TextIOWrapper` for a detailed explanation of the parameter with the
    same name.
    """
    format_options: ClassVar[None | FormatOptions] = FormatOptions()
    """
    An instance of :class:`FormatOptions` configures formatting, ``None`` disables
    it.
    """

    @classmethod
    def _get_serializer(cls) -> Serializer:
        return _get_serializer(
            _StringWriter(newline=cls.newline), format_options=cls.format_options
        )

    @classmethod
    def reset_defaults(cls):
        """Restores the factory settings."""
        cls.format_options = FormatOptions()
        cls.newline = None


# serializer


def _get_serializer(
    writer: _StringWriter, format_options: Optional[FormatOptions]
) -> Serializer:
    if format_options is None:
        return Serializer(writer)

    if format_options.indentation and not format_options.indentation.isspace():
        raise ValueError("Invalid indentation characters.")

    return PrettySerializer(writer, format_options)


class Serializer:
    """Writes the markup as it is."""

    __slots__ = ("writer",)

    def __init__(self, writer: _StringWriter):
        self.writer = writer

    def _serialize_attributes(self, node: TagNode):
        for name, value in node.attributes.items():
            value = value or ""
            if name in BOOLEAN_ATTRIBUTES and value.lower() in ("", name):
                self.writer(f" {name}")
            else:
                self.writer(f' {name}="{value.translate(CCE_TABLE_FOR_ATTRIBUTES)}"')

    def _serialize_child_nodes(self, node: TagNode):
        for child_node in node.iterate_children():
            self.serialize_node(child_node)

    def serialize_children(self, root: TagNode) -> str:
        """Writes the contents of a node, but not the node itself."""
        self._serialize_child_nodes(root)
        return self.writer.result

    def serialize_node(self, node: HTMLNodeType):
        match node:
            case CommentNode():
                self.writer(str(node))
            case TagNode():
                self._serialize_tag(node)
            case TextNode():
                self._serialize_text(node)

    def serialize_root(self, root: TagNode) -> str:
        self.serialize_node(root)
        return self.writer.result

    def _serialize_tag(self, node: TagNode):
        local_name = node.local_name
        self.writer(f"<{local_name}")
        self._serialize_attributes(node)
        self.writer(">")

        if local_name in VOID_TAGS and node.first_child is None:
            return

        self._serialize_child_nodes(node)
        self.writer(f"</{local_name}>")

    def _serialize_text(self, node: TextNode):
        parent = node.parent
        if parent is not None and parent.local_name in RAW_TEXT_TAGS:
            self.writer(node.content)
        else:
            self.writer(node.content.translate(CCE_TABLE_FOR_TEXT))


class PrettySerializer(Serializer):
    """
    Puts elements that are formatted as blocks on their own, indented lines and
    collapses insignificant whitespace. The result is stripped.
    """

    __slots__ = (
        "indentation",
        "_level",
        "_space_preserving_serializer",
    )

    def __init__(self, writer: _StringWriter, format_options: FormatOptions):
        super().__init__(writer)
        self.indentation: Final = format_options.indentation
        self._level = 0
        self._space_preserving_serializer: Final = Serializer(self.writer)

    def _indent(self):
        # there's no line break at the begin of the stream
        if self.writer.buffer.tell():
            self.writer("\n" + self._level * self.indentation)

    @staticmethod
    def _is_indented(node: HTMLNodeType, parent: Optional[TagNode]) -> bool:
        if isinstance(node, CommentNode):
            return True
        if isinstance(node, TagNode):
            return formats_as_block(node.local_name) or (
                parent is not None and formats_as_block(parent.local_name)
            )
        return False

    def _serialize_child_nodes(  # type: ignore[override]
        self, parent: TagNode, child_nodes: list[HTMLNodeType]
    ):
        parent_is_block = formats_as_block(parent.local_name)
        last_index = len(child_nodes) - 1

        for index, node in enumerate(child_nodes):
            if not isinstance(node, TextNode):
                self.serialize_node(node)
                continue

            content = _crunch_whitespace(node.content)
            indent = index == 0 and parent_is_block
            if indent:
                content = content.lstrip(" ")
            if (index == last_index and parent_is_block) or (
                index < last_index and self._is_indented(child_nodes[index + 1], parent)
            ):
                content = content.rstrip(" ")

            if content:
                if indent:
                    self._indent()
                self.writer(content.translate(CCE_TABLE_FOR_TEXT))

    def _significant_child_nodes(self, node: TagNode) -> list[HTMLNodeType]:
        """
        Returns the child nodes without whitespace-only text nodes that are adjacent
        to a line break.
        """
        child_nodes = list(node.iterate_children())
        if formats_as_block(node.local_name):
            return [
                x
                for x in child_nodes
                if not (isinstance(x, TextNode) and not x.content.strip(WHITESPACE))
            ]

        result = []
        for index, child_node in enumerate(child_nodes):
            if (
                isinstance(child_node, TextNode)
                and not child_node.content.strip(WHITESPACE)
                and (
                    (index and self._is_indented(child_nodes[index - 1], node))
                    or (
                        index + 1 < len(child_nodes)
                        and self._is_indented(child_nodes[index + 1], node)
                    )
                )
            ):
                continue
            result.append(child_node)
        return result

    def serialize_children(self, root: TagNode) -> str:
        self._serialize_child_nodes(root, self._significant_child_nodes(root))
        return self.writer.result.strip()

    def serialize_node(self, node: HTMLNodeType):
        match node:
            case CommentNode():
                self._indent()
                self.writer(str(node))
            case TagNode():
                self._serialize_tag(node)
            case TextNode():
                content = _crunch_whitespace(node.content)
                self.writer(content.translate(CCE_TABLE_FOR_TEXT))

    def serialize_root(self, root: TagNode) -> str:
        self.serialize_node(root)
        return self.writer.result.strip()

    def _serialize_tag(self, node: TagNode):
        local_name = node.local_name

        if self._is_indented(node, node.parent):
            self._indent()
        self.writer(f"<{local_name}")
        self._serialize_attributes(node)
        self.writer(">")

        if local_name in KEEP_CONTENTS_TAGS:
            self._space_preserving_serializer._serialize_child_nodes(node)
            self.writer(f"</{local_name}>")
            return

        child_nodes = self._significant_child_nodes(node)
        if not child_nodes and local_name in VOID_TAGS:
            return

        self._level += 1
        self._serialize_child_nodes(node, child_nodes)
        self._level -= 1

        if child_nodes and formats_as_block(local_name):
            self._indent()
        self.writer(f"</{local_name}>")


class _StringWriter:
    __slots__ = ("buffer",)

    def __init__(self, newline: Optional[str] = None):
        self.buffer: Final = StringIO(newline=newline)

    def __call__(self, data: str):
        self.buffer.write(data)

    @property
    def result(self) -> str:
        return self.buffer.getvalue()


#


__all__ = (
    DefaultStringOptions.__name__,
    FormatOptions.__name__,
)
