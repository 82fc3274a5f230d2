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
Replaces the status icons that Doxia renders as GIF images with Font Awesome icons
and a text for screen readers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, NamedTuple

from _html5update.nodes import TagNode
from html5update.transform import Transformation

if TYPE_CHECKING:
    from _html5update.typing import Filter


logger = logging.getLogger(__name__)


def _source_ends_with(path: str) -> Filter:
    def source_filter(node: TagNode) -> bool:
        return node["src"].endswith(path)

    return source_filter


class Icon(NamedTuple):
    css_class: str
    """The Font Awesome class, e.g. ``fa-plus``."""
    label: str
    """The text that is read to users of screen readers."""


DOXIA_ICONS: Final[Mapping[str, Icon]] = MappingProxyType(
    {
        "images/add.gif": Icon("fa-plus", "Addition"),
        "images/remove.gif": Icon("fa-minus", "Remove"),
        "images/fix.gif": Icon("fa-wrench", "Fix"),
        "images/update.gif": Icon("fa-refresh", "Refresh"),
        "images/icon_help_sml.gif": Icon("fa-question", "Question"),
        "images/icon_success_sml.gif": Icon("fa-check", "Passed"),
        "images/icon_warning_sml.gif": Icon("fa-exclamation", "Warning"),
        "images/icon_error_sml.gif": Icon("fa-close", "Error"),
        "images/icon_info_sml.gif": Icon("fa-info", "Info"),
    }
)


class TransformIconsOptions(NamedTuple):
    icons: Mapping[str, Icon] = DOXIA_ICONS
    """Maps the ending of image sources to the icons that replace such images."""


class TransformIcons(Transformation):
    """
    Replaces images whose source ends with a known path with an icon::

        <img src="images/add.gif" alt="An image">

    becomes::

        <span><span class="fa fa-plus" aria-hidden="true"></span><span
        class="sr-only">Addition</span></span>
    """

    options_class = TransformIconsOptions

    def transform(self):
        for path, icon in self.options.icons.items():
            images = self.root.css_select("img[src]").filtered_by(
                _source_ends_with(path)
            )
            if images:
                logger.debug("Replacing %d image(s) of %s.", images.size, path)
            for image in images:
                image.replace_with(self.make_icon(icon))

    def make_icon(self, icon: Icon) -> TagNode:
        result = self.root.new_tag_node("span")
        label = result.new_tag_node("span", {"class": "sr-only"})
        label.full_text = icon.label
        result.append_child(
            result.new_tag_node(
                "span", {"class": f"fa {icon.css_class}", "aria-hidden": "true"}
            ),
            label,
        )
        return result


__all__ = (
    "DOXIA_ICONS",
    Icon.__name__,
    TransformIcons.__name__,
    TransformIconsOptions.__name__,
)
