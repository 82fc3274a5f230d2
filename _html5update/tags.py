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
Static knowledge about HTML elements that the serializer relies on. The categories
follow the conventions of the jsoup library's pretty printer which the markup of the
generated sites is tuned for.
"""

from __future__ import annotations

from typing import Final


BLOCK_TAGS: Final = frozenset(
    (
        "address",
        "article",
        "aside",
        "audio",
        "blockquote",
        "body",
        "canvas",
        "caption",
        "col",
        "colgroup",
        "dd",
        "del",
        "details",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "frame",
        "frameset",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "head",
        "header",
        "hgroup",
        "hr",
        "html",
        "ins",
        "li",
        "link",
        "main",
        "math",
        "menu",
        "meta",
        "nav",
        "noframes",
        "noscript",
        "ol",
        "p",
        "plaintext",
        "pre",
        "s",
        "script",
        "section",
        "style",
        "svg",
        "table",
        "tbody",
        "td",
        "template",
        "tfoot",
        "th",
        "thead",
        "title",
        "tr",
        "ul",
        "video",
    )
)

INLINE_TAGS: Final = frozenset(
    (
        "a",
        "abbr",
        "acronym",
        "area",
        "b",
        "base",
        "basefont",
        "bdi",
        "bdo",
        "bgsound",
        "big",
        "br",
        "button",
        "cite",
        "code",
        "command",
        "data",
        "datalist",
        "device",
        "dfn",
        "em",
        "embed",
        "font",
        "i",
        "iframe",
        "img",
        "input",
        "kbd",
        "keygen",
        "label",
        "legend",
        "map",
        "mark",
        "menuitem",
        "meter",
        "object",
        "optgroup",
        "option",
        "output",
        "param",
        "progress",
        "q",
        "rp",
        "rt",
        "ruby",
        "samp",
        "select",
        "small",
        "source",
        "span",
        "strike",
        "strong",
        "sub",
        "summary",
        "sup",
        "textarea",
        "time",
        "track",
        "tt",
        "u",
        "var",
        "wbr",
    )
)

# block elements whose contents are nevertheless kept on the same line
FORMAT_AS_INLINE_TAGS: Final = frozenset(
    (
        "a",
        "address",
        "del",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "ins",
        "li",
        "p",
        "pre",
        "s",
        "script",
        "style",
        "td",
        "th",
        "title",
    )
)

VOID_TAGS: Final = frozenset(
    (
        "area",
        "base",
        "basefont",
        "bgsound",
        "br",
        "col",
        "command",
        "device",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "menuitem",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    )
)

PRESERVE_WHITESPACE_TAGS: Final = frozenset(("plaintext", "pre", "textarea", "title"))

RAW_TEXT_TAGS: Final = frozenset(("script", "style"))

BOOLEAN_ATTRIBUTES: Final = frozenset(
    (
        "allowfullscreen",
        "async",
        "autofocus",
        "checked",
        "compact",
        "declare",
        "default",
        "defer",
        "disabled",
        "formnovalidate",
        "hidden",
        "inert",
        "ismap",
        "itemscope",
        "multiple",
        "muted",
        "nohref",
        "noresize",
        "noshade",
        "novalidate",
        "nowrap",
        "open",
        "readonly",
        "required",
        "reversed",
        "seamless",
        "selected",
        "sortable",
        "truespeed",
        "typemustmatch",
    )
)


def formats_as_block(local_name: str) -> bool:
    """
    Tells whether an element's start tag and its children are put on own lines by
    the pretty printer. Unknown elements are formatted as blocks.
    """
    if local_name in FORMAT_AS_INLINE_TAGS:
        return False
    return local_name in BLOCK_TAGS or local_name not in INLINE_TAGS


__all__ = (
    "BLOCK_TAGS",
    "BOOLEAN_ATTRIBUTES",
    "FORMAT_AS_INLINE_TAGS",
    "INLINE_TAGS",
    "PRESERVE_WHITESPACE_TAGS",
    "RAW_TEXT_TAGS",
    "VOID_TAGS",
    formats_as_block.__name__,
)
