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
*html5update* rewrites the legacy markup that the Doxia renderer of Maven sites
generates into HTML5. Each of the functions takes a fragment of HTML and returns the
rewritten fragment:

>>> update_section_divisions('<div class="section"><p>Some text</p></div>')
'<section>\\n <p>Some text</p>\\n</section>'

For more control, a :class:`Fragment` can be transformed with any combination of the
transformations in :mod:`html5update.rules` and :mod:`html5update.primitives`.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Final, Optional

from _html5update.exceptions import InvalidInputError
from _html5update.nodes import CommentNode, TagNode, TextNode, new_tag_node
from _html5update.parser import ParserOptions, parse_fragment
from _html5update.serializer import (
    DefaultStringOptions,
    FormatOptions,
    _get_serializer,
    _StringWriter,
)
from html5update.icons import TransformIcons
from html5update.primitives import (
    RemoveClass,
    RemoveClassOptions,
    Retag,
    RetagOptions,
    RewriteAttribute,
    RewriteAttributeOptions,
)
from html5update.rules import (
    FixInternalLinks,
    RemoveExternalLinkClass,
    RemoveNoHrefLinks,
    RemoveRedundantSourceDivisions,
    TransformImagesToFigures,
    UpdateCodeSections,
    UpdateSectionDivisions,
    UpdateTables,
)

if TYPE_CHECKING:
    from _html5update.queries import QueryResults
    from html5update.transform import TransformationBase


__version__: Final = "0.1"


class Fragment:
    """
    A parsed fragment of HTML. Its nodes are the child nodes of the :attr:`body` node.

    :param source: The markup as :class:`str` or encoded :class:`bytes`.
    :param parser_options: A :class:`ParserOptions` instance to configure parsing.
    :raises InvalidInputError: When the markup can't be decoded or parsed.

    The string coercion of a fragment yields the markup of its nodes, formatted
    according to :class:`DefaultStringOptions`:

    >>> str(Fragment("<p>Some <em>text</em></p>"))
    '<p>Some <em>text</em></p>'
    """

    __slots__ = ("body",)

    def __init__(
        self, source: str | bytes, parser_options: Optional[ParserOptions] = None
    ):
        self.body: Final = parse_fragment(source, parser_options)
        """The ``body`` node that contains the fragment's nodes."""

    def __str__(self) -> str:
        return DefaultStringOptions._get_serializer().serialize_children(self.body)

    def __repr__(self):
        return f"<{self.__class__.__name__} [{hex(id(self))}]>"

    def css_select(self, expression: str) -> QueryResults:
        """
        This method proxies to the :meth:`TagNode.css_select` method of the fragment's
        :attr:`body` node.
        """
        return self.body.css_select(expression)

    def serialize(self, format_options: Optional[FormatOptions] = None) -> str:
        """
        Returns the markup of the fragment's nodes.

        :param format_options: An instance of :class:`FormatOptions` can be provided to
                               configure formatting. Without the markup is returned
                               as it is.
        """
        return _get_serializer(_StringWriter(), format_options).serialize_children(
            self.body
        )

    def transform(self, transformation: TransformationBase) -> Fragment:
        """Applies a transformation to the fragment and returns the fragment."""
        transformation(self.body)
        return self


# pipelines


def _apply(transformation: TransformationBase, html: str | bytes) -> str:
    return str(Fragment(html).transform(transformation))


def update_section_divisions(html: str | bytes) -> str:
    """Turns ``div.section`` elements into ``section`` elements."""
    return _apply(UpdateSectionDivisions(), html)


def update_code_sections(html: str | bytes) -> str:
    """
    Turns source divisions, also nested ones, around code listings into ``pre`` and
    ``code`` elements.
    """
    return _apply(UpdateCodeSections(), html)


def fix_repeated_source_divisions(html: str | bytes) -> str:
    """Collapses directly nested source divisions into one."""
    return _apply(RemoveRedundantSourceDivisions(), html)


def update_tables(html: str | bytes) -> str:
    """
    Removes presentational attributes and classes from tables and moves rows with
    header cells into a ``thead``.
    """
    return _apply(UpdateTables(), html)


def fix_internal_links(html: str | bytes) -> str:
    """Removes points from ``id`` attributes and the fragment links to them."""
    return _apply(FixInternalLinks(), html)


def remove_dead_links(html: str | bytes) -> str:
    """Unwraps anchors without ``href`` attribute."""
    return _apply(RemoveNoHrefLinks(), html)


def remove_external_link_class(html: str | bytes) -> str:
    """Removes the ``externalLink`` class from anchors."""
    return _apply(RemoveExternalLinkClass(), html)


def remove_class_from(html: str | bytes, selector: str, class_name: str) -> str:
    """
    Removes a class from the elements that match a CSS selector. The ``class``
    attribute is removed when it is left empty.
    """
    return _apply(RemoveClass(RemoveClassOptions(selector, class_name)), html)


def retag_selector(
    html: str | bytes, selector: str, tag: str, class_name: Optional[str] = None
) -> str:
    """
    Changes the tag name of the elements that match a CSS selector and optionally
    removes a class from them.
    """
    return _apply(Retag(RetagOptions(selector, tag, class_name)), html)


def remove_points_from_attribute(
    html: str | bytes, selector: str, attribute: str
) -> str:
    """Removes all points from an attribute of the elements that match a selector."""
    return _apply(
        RewriteAttribute(RewriteAttributeOptions(selector, attribute, r"\.", "")),
        html,
    )


def transform_icons(html: str | bytes) -> str:
    """Replaces Doxia's status images with Font Awesome icons."""
    return _apply(TransformIcons(), html)


def transform_images_to_figures(html: str | bytes) -> str:
    """Wraps images with figures that are captioned with an image's ``alt`` text."""
    return _apply(TransformImagesToFigures(), html)


# deprecated


def update_section_div(html: str | bytes) -> str:
    """Deprecated. Use :func:`update_section_divisions`."""
    warnings.warn(
        "This function is deprecated. Use update_section_divisions instead.",
        category=DeprecationWarning,
        stacklevel=2,
    )
    return update_section_divisions(html)


def remove_external_links(html: str | bytes) -> str:
    """Deprecated. Use :func:`remove_external_link_class`."""
    warnings.warn(
        "This function is deprecated. Use remove_external_link_class instead.",
        category=DeprecationWarning,
        stacklevel=2,
    )
    return remove_external_link_class(html)


def remove_no_href_links(html: str | bytes) -> str:
    """Deprecated. Use :func:`remove_dead_links`."""
    warnings.warn(
        "This function is deprecated. Use remove_dead_links instead.",
        category=DeprecationWarning,
        stacklevel=2,
    )
    return remove_dead_links(html)


__all__ = (
    CommentNode.__name__,
    DefaultStringOptions.__name__,
    FormatOptions.__name__,
    Fragment.__name__,
    InvalidInputError.__name__,
    ParserOptions.__name__,
    TagNode.__name__,
    TextNode.__name__,
    fix_internal_links.__name__,
    fix_repeated_source_divisions.__name__,
    new_tag_node.__name__,
    remove_class_from.__name__,
    remove_dead_links.__name__,
    remove_external_link_class.__name__,
    remove_points_from_attribute.__name__,
    retag_selector.__name__,
    transform_icons.__name__,
    transform_images_to_figures.__name__,
    update_code_sections.__name__,
    update_section_divisions.__name__,
    update_tables.__name__,
)
