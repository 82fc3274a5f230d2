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
This module offers a canonical interface with the aim to make re-use of rewriting
algorithms easier.

Let's look at it with examples::

   from html5update.transform import Transformation


   class DropFontTags(Transformation):
       def transform(self):
           for node in self.root.css_select("font"):
               node.detach(retain_child_nodes=True)


From such defined transformations instances can be called with a (sub-)tree that is
altered in place and returned::

   drop_font_tags = DropFontTags()
   tree = drop_font_tags(tree)


:class:`typing.NamedTuple` are used to define options for transformations::

   from typing import NamedTuple


   class DropTagsOptions(NamedTuple):
       selector: str = "font"


   class DropTags(Transformation):
       options_class = DropTagsOptions

       def transform(self):
           for node in self.root.css_select(self.options.selector):
               node.detach(retain_child_nodes=True)


A transformation class that defines an ``options_class`` property can then either be
used with its defaults or with alternate options::

   drop_tags = DropTags()
   tree = drop_tags(tree)

   drop_tags = DropTags(DropTagsOptions(selector="big, small"))
   tree = drop_tags(tree)


Finally, concrete transformations can be chained, both as classes or instances. The
interface allows also to chain multiple chains::

   from html5update.transform import TransformationSequence

   tidy_up = TransformationSequence(DropFontTags, drop_tags)
   tree = tidy_up(tree)


An instance holds the tree it is called with while it's running, hence an instance
must not be called concurrently.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from _html5update.nodes import TagNode, new_tag_node


logger = logging.getLogger(__name__)


#


class TransformationBase(ABC):
    """This base class defines the calling interface of transformations."""

    @abstractmethod
    def __call__(self, root: TagNode) -> TagNode:
        pass


class Transformation(TransformationBase):
    """This is a base class for any transformation algorithm."""

    options_class: Optional[type] = None

    def __init__(self, options: Optional[NamedTuple] = None):
        self.root: TagNode
        if options is None and self.options_class is not None:
            options = self.options_class()
        self.options = options
        self.__set_placeholder()

    def __call__(self, root: TagNode) -> TagNode:
        logger.debug("Applying %r.", self)
        self.root = root
        self.transform()
        result = self.root
        self.__set_placeholder()
        return result

    def __repr__(self):
        if self.options is None:
            return f"{self.__class__.__name__}()"
        return f"{self.__class__.__name__}({self.options!r})"

    def __set_placeholder(self):
        self.root = new_tag_node("transformation-placeholder")

    @abstractmethod
    def transform(self):
        """
        This method needs to implement the transformation logic. When it is called,
        the instance's ``root`` attribute is the node that the transformation was
        called to transform.
        """
        pass


class TransformationSequence(TransformationBase):
    """
    A transformation sequence can be used to combine any number of both
    :class:`Transformation` (provided as class or instantiated with options) and other
    :class:`TransformationSequence` instances or classes.
    """

    def __init__(
        self,
        *transformations: TransformationBase | type[TransformationBase],
    ):
        _transformations = []
        for transformation in transformations:
            if isinstance(transformation, type) and issubclass(
                transformation, TransformationBase
            ):
                _transformations.append(transformation())
            elif isinstance(transformation, TransformationBase):
                _transformations.append(transformation)
            else:
                raise TypeError(
                    "Only subclasses of TransformationBase or instances of such are "
                    "allowed."
                )
        self.transformations = tuple(_transformations)

    def __call__(self, root: TagNode) -> TagNode:
        for transformation in self.transformations:
            root = transformation(root)
        return root


__all__ = (Transformation.__name__, TransformationSequence.__name__)
