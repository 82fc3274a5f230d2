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

import logging
import re
from functools import partial
from typing import TYPE_CHECKING, Final, NamedTuple

from lxml import etree, html

from _html5update.exceptions import InvalidInputError
from _html5update.nodes import TagNode, _get_or_create_element_wrapper

if TYPE_CHECKING:
    from lxml.etree import _Element


logger = logging.getLogger(__name__)


_looks_like_a_document: Final = re.compile(
    r"^\s*(?:<!--.*?-->\s*)*<(?:html|!doctype|head|body)\b",
    re.IGNORECASE | re.DOTALL,
).match
_strip_xml_declaration: Final = partial(re.compile(r"^\s*<\?xml[^>]*>").sub, "")


class ParserOptions(NamedTuple):
    """
    The configuration options that define how markup is parsed. The backend is
    :mod:`lxml.html` whose underlying parser is tolerant and recovers from any
    malformed markup. Hence only undecodable input is rejected.
    """

    encoding: str = "utf-8-sig"
    """
    The encoding that is used to decode data that is passed as :class:`bytes`. It
    doesn't affect data that is passed as :class:`str`. Default: ``"utf-8-sig"``.
    """
    full_document_detection: bool = True
    """
    Input whose first tag is ``html``, ``head``, ``body`` or a document type
    declaration, possibly preceded by an XML declaration and comments, is parsed as a
    complete document of which only the ``body`` is used. Other input is parsed as
    the contents of a ``body`` element.
    Default: :obj:`True`.
    """
    implicit_table_bodies: bool = True
    """
    Rows that are direct children of a ``table`` are wrapped in a ``tbody`` as HTML
    browsers do. Default: :obj:`True`.
    """
    remove_comments: bool = False
    """Ignore comments. Default: :obj:`False`."""


def parse_fragment(
    source: str | bytes, options: ParserOptions | None = None
) -> TagNode:
    """
    Parses markup and returns a detached ``body`` node that contains the parsed
    nodes. An empty input results in an empty ``body`` node.

    :raises InvalidInputError: When the input can't be decoded or parsed.
    """
    if options is None:
        options = ParserOptions()

    if isinstance(source, bytes):
        try:
            text = source.decode(options.encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise InvalidInputError(
                source, f"Not decodable as {options.encoding}."
            ) from e
    elif isinstance(source, str):
        text = source
    else:
        raise TypeError(f"Markup must be given as str or bytes, not {type(source)}.")

    # lxml rejects str input with an encoding declaration
    text = _strip_xml_declaration(text)

    if options.full_document_detection and _looks_like_a_document(text):
        logger.debug("Parsing the input as complete document.")
        markup = text
    else:
        markup = f"<html><body>{text}</body></html>"

    parser = html.HTMLParser(remove_comments=options.remove_comments)
    try:
        document = html.document_fromstring(markup, parser=parser)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        raise InvalidInputError(source, str(e)) from e

    body = document.find("body")
    if body is None:
        logger.debug("The parsed document has no body, adding an empty one.")
        body = document.makeelement("body", {})
    else:
        document.remove(body)
        body.tail = None

    if options.implicit_table_bodies:
        _add_implicit_table_bodies(body)

    result = _get_or_create_element_wrapper(body, {})
    assert isinstance(result, TagNode)
    return result


def _add_implicit_table_bodies(root: _Element):
    for table in tuple(root.iter("table")):
        table_body = None
        for child in tuple(table):
            if child.tag == "tr":
                if table_body is None:
                    table_body = table.makeelement("tbody", {})
                    child.addprevious(table_body)
                    logger.debug("Added an implicit tbody to a table.")
                table_body.append(child)
            elif not isinstance(child.tag, str):
                if table_body is not None:
                    table_body.append(child)
            else:
                table_body = None


__all__ = (ParserOptions.__name__, parse_fragment.__name__)
