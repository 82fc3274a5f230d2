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
Binds the skin configuration of a Maven site descriptor for the rendering of one
page. The configuration is read from the ``<skinConfig>`` element inside the
``<custom>`` element of a ``site.xml``. Properties that are defined for a page in
``<skinConfig><pages><{page id}>`` take precedence over the global ones::

    <custom>
      <skinConfig>
        <fluidLayout>false</fluidLayout>
        <pages>
          <index>
            <fluidLayout>true</fluidLayout>
          </index>
        </pages>
      </skinConfig>
    </custom>
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from functools import partial
from typing import TYPE_CHECKING, Any, Final, Optional

from lxml import etree

from _html5update.exceptions import InvalidInputError

if TYPE_CHECKING:
    from lxml.etree import _Element


logger = logging.getLogger(__name__)


CURRENT_FILE_NAME_KEY: Final = "currentFileName"
DECORATION_KEY: Final = "decoration"
MAVEN_PROJECT_KEY: Final = "project"
PAGES_KEY: Final = "pages"
SKIN_KEY: Final = "skinConfig"


_collapse_dashes: Final = partial(re.compile(r"-+").sub, "-")
_replace_whitespace: Final = partial(re.compile(r"\s", re.ASCII).sub, "-")
_remove_non_latin: Final = partial(re.compile(r"[^\w-]", re.ASCII).sub, "")
_separators_table: Final = str.maketrans("/\\._", "----")


def slug(text: str) -> str:
    """
    Derives an identifier from a text that can be used in URLs and as CSS class::

        >>> slug("Some_File.name")
        'some-file-name'
    """
    return _remove_non_latin(
        _replace_whitespace(_collapse_dashes(text.translate(_separators_table)))
    ).lower()


def _parse_decoration(decoration: str | bytes | _Element) -> _Element:
    if not isinstance(decoration, (str, bytes)):
        return decoration

    parser = etree.XMLParser(remove_comments=True, resolve_entities=False)
    try:
        return etree.fromstring(decoration, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise InvalidInputError(decoration, str(e)) from e


def _get_child(element: _Element, name: str) -> Optional[_Element]:
    return next((x for x in element if x.tag == name), None)


def _get_artifact_id(project: Any) -> Optional[str]:
    if isinstance(project, Mapping):
        return project.get("artifactId", project.get("artifact_id"))
    return getattr(project, "artifact_id", None)


class SkinConfig:
    """
    Exposes the skin configuration and identifiers of the page that is rendered with
    a templating context.

    :param context: A mapping that may contain the name of the rendered file
                    (``currentFileName``), the Maven project (``project``) and the
                    site descriptor's ``<custom>`` element (``decoration``) as XML
                    string or :mod:`lxml` element.
    :raises InvalidInputError: When the decoration can't be parsed or lacks the
                               ``<skinConfig>`` element.
    """

    __slots__ = ("file_id", "_page_config", "project_id", "_skin_config")

    def __init__(self, context: Mapping[str, Any]):
        self.file_id: str = self._derive_file_id(context.get(CURRENT_FILE_NAME_KEY))

        artifact_id = _get_artifact_id(context.get(MAVEN_PROJECT_KEY))
        self.project_id: str = "" if artifact_id is None else slug(artifact_id)

        self._page_config: Optional[_Element] = None
        self._skin_config: Optional[_Element] = None
        if (decoration := context.get(DECORATION_KEY)) is not None:
            self._read_decoration(_parse_decoration(decoration))

    def __getattr__(self, name: str) -> Optional[str]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(file_id={self.file_id!r}, "
            f"project_id={self.project_id!r}) [{hex(id(self))}]>"
        )

    @staticmethod
    def _derive_file_id(file_name: Any) -> str:
        if file_name is None:
            return ""
        file_name = str(file_name)
        if (index := file_name.rfind(".")) >= 0:
            file_name = file_name[:index]
        return slug(file_name)

    def _read_decoration(self, custom: _Element):
        skin_config = _get_child(custom, SKIN_KEY)
        if skin_config is None:
            raise InvalidInputError(
                custom.tag,
                "The skin configuration node is missing from the decoration. Make "
                "sure it can be found in the <custom> node, inside the site.xml file.",
            )
        self._skin_config = skin_config

        pages = _get_child(skin_config, PAGES_KEY)
        if pages is not None and self.file_id:
            self._page_config = _get_child(pages, self.file_id)
        if self._page_config is None:
            logger.debug("There's no page configuration for %r.", self.file_id)

    def get(self, name: str) -> Optional[str]:
        """
        Returns the value of a configuration property. A page's property is preferred
        over a global one.

        :return: The text of the property's element as it is or :obj:`None` if it's
                 not defined.
        """
        for config in (self._page_config, self._skin_config):
            if config is None:
                continue
            if (element := _get_child(config, name)) is not None:
                return element.text or ""
        return None

    def is_true(self, name: str) -> bool:
        """Tells whether a property's value is ``true``, ignoring the case."""
        return (self.get(name) or "").lower() == "true"


__all__ = (SkinConfig.__name__, slug.__name__)
