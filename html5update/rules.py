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
The normalization rules that update the markup that Doxia generates for Maven sites
to HTML5. Each rule can be applied repeatedly without further changes and leaves
unrelated content alone.
"""

from __future__ import annotations

import logging

from _html5update.nodes import TagNode
from html5update.primitives import (
    CollapseNestedWrapper,
    CollapseNestedWrapperOptions,
    PromoteRowsToHead,
    PromoteRowsToHeadOptions,
    RelocateSingleChild,
    RelocateSingleChildOptions,
    RemoveAttribute,
    RemoveAttributeOptions,
    RemoveClass,
    RemoveClassOptions,
    Retag,
    RetagOptions,
    RewriteAttribute,
    RewriteAttributeOptions,
    Unwrap,
    UnwrapOptions,
)
from html5update.transform import Transformation, TransformationSequence


logger = logging.getLogger(__name__)


# code sections


class UpdateSectionDivisions(Retag):
    """Turns ``div.section`` into ``section`` elements."""

    def __init__(self):
        super().__init__(RetagOptions("div.section", "section", "section"))


class RemoveRedundantSourceDivisions(CollapseNestedWrapper):
    """Collapses source divisions that are directly nested into one."""

    def __init__(self):
        super().__init__(CollapseNestedWrapperOptions("div.source > div.source"))


class TakeOutSourceDivisionPre(RelocateSingleChild):
    """Puts the ``pre`` of a source division around it."""

    def __init__(self):
        super().__init__(RelocateSingleChildOptions("div.source:has(pre)", "pre"))


class UpdateSourceDivisionsToCode(Retag):
    def __init__(self):
        super().__init__(RetagOptions("div.source", "code", "source"))


class UpdateCodeSections(TransformationSequence):
    """
    Turns the source divisions around code listings into ``pre`` and ``code``
    elements::

        <div class="source"><pre>x = 1</pre></div>

    becomes::

        <pre><code>x = 1</code></pre>
    """

    def __init__(self):
        super().__init__(
            RemoveRedundantSourceDivisions,
            TakeOutSourceDivisionPre,
            UpdateSourceDivisionsToCode,
        )


# tables


class UpdateTables(TransformationSequence):
    """
    Drops presentational attributes and classes from tables and moves header rows
    into a ``thead``.
    """

    def __init__(self):
        super().__init__(
            RemoveClass(RemoveClassOptions("table.bodyTable", "bodyTable")),
            PromoteRowsToHead(PromoteRowsToHeadOptions("table > tbody > tr:has(th)")),
            RemoveAttribute(RemoveAttributeOptions("table[border]", "border")),
            RemoveClass(RemoveClassOptions("tr.a", "a")),
            RemoveClass(RemoveClassOptions("tr.b", "b")),
        )


# links


class FixInternalLinks(TransformationSequence):
    """
    Removes points from identifiers and from the fragment links that refer to them, as
    those would be interpreted as class selectors by scripts that look targets up.
    """

    def __init__(self):
        super().__init__(
            RewriteAttribute(RewriteAttributeOptions("[id]", "id", r"\.", "")),
            RewriteAttribute(
                RewriteAttributeOptions('[href^="#"]', "href", r"\.", "")
            ),
        )


class RemoveNoHrefLinks(Unwrap):
    """Unwraps anchors without ``href`` attribute, their contents stay in place."""

    def __init__(self):
        super().__init__(UnwrapOptions("a:not([href])"))


class RemoveExternalLinkClass(RemoveClass):
    def __init__(self):
        super().__init__(RemoveClassOptions("a.externalLink", "externalLink"))


# images


class TransformImagesToFigures(Transformation):
    """
    Wraps images with a ``figure`` element. The alternative text of an image, if
    there's any, is added as ``figcaption``. Images that are already placed in a
    figure are left alone.
    """

    def transform(self):
        count = 0
        for image in self.root.css_select("img"):
            if image.root is not self.root or self._is_in_figure(image):
                continue

            count += 1
            figure = image.wrap_with(self.root.new_tag_node("figure"))
            if alternative_text := (image.get("alt") or "").strip():
                caption = figure.new_tag_node("figcaption")
                caption.full_text = alternative_text
                figure.append_child(caption)

        logger.debug("Wrapped %d image(s) with figures.", count)

    @staticmethod
    def _is_in_figure(node: TagNode) -> bool:
        return any(x.local_name == "figure" for x in node.ancestors())


__all__ = (
    FixInternalLinks.__name__,
    RemoveExternalLinkClass.__name__,
    RemoveNoHrefLinks.__name__,
    RemoveRedundantSourceDivisions.__name__,
    TakeOutSourceDivisionPre.__name__,
    TransformImagesToFigures.__name__,
    UpdateCodeSections.__name__,
    UpdateSectionDivisions.__name__,
    UpdateSourceDivisionsToCode.__name__,
    UpdateTables.__name__,
)
