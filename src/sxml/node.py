# src/sxml/node.py
from __future__ import annotations

import logging
from typing import List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sxml.convert import to_bool, to_float64, to_int32, to_int64
from sxml.core.normalizer import normalize
from sxml.core.pattern_cursor import PatternCursor
from sxml.core.scanner import iter_matches, iter_siblings, match_tag
from sxml.core.tag_parser import parse_tag_header
from sxml.exceptions import (
    AttributeAbsentError,
    AttributeMapEmptyError,
    ChildAbsentError,
    InnerContentUnavailableError,
    NotWellFormedError,
)
from sxml.model import read_only_attrs

logger = logging.getLogger(__name__)


class XMLNode(BaseModel):
    """
    Read-only accessor over one element of lenient XML-like markup.

    A node keeps only its own normalized text, its root tag and attributes.
    Child lookups scan the inner content on demand and return freshly built
    nodes; nothing is cached and nodes never point back to their parent.

    Usage:
        node = XMLNode.from_text('<a x="1"><b>hi</b><c/></a>')
        node.get_attribute("x")          ==> '1'
        node.get_child("b").to_text()    ==> '<b>hi</b>'
    """
    model_config = ConfigDict(frozen=True)

    text: str
    root_tag: str
    name: str
    attrs: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    has_inner_content: bool = False

    @field_validator("attrs")
    @classmethod
    def freeze_attrs(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only_attrs(value)

    @classmethod
    def from_text(cls, raw: str) -> XMLNode:
        """
        Builds a node from raw markup.

        The text is normalized, the first tag becomes the root, and the root is
        scanned for to confirm it is complete and to tell a container from a
        self-closing tag.

        Raises:
            NotWellFormedError: Empty input, no root tag, or a root that never closes.
        """
        text = normalize(raw)

        header = parse_tag_header(text)
        if header is None or header.closing or not header.name:
            raise NotWellFormedError(detail="no root tag found")

        result = match_tag(text, header.name, header.start)
        if not result.matched:
            raise NotWellFormedError(header.name, detail="root tag could not be classified")

        return cls(
            text=text,
            root_tag=header.raw,
            name=header.name,
            attrs=dict(header.attrs),
            has_inner_content=result.is_container,
        )

    def __str__(self) -> str:
        return self.text

    def to_text(self) -> str:
        """Returns the normalized markup of this node verbatim."""
        return self.text

    # -------- Children --------

    def _inner_text(self) -> str:
        if not self.has_inner_content:
            raise InnerContentUnavailableError(self.name)
        begin = self.text.find(self.root_tag) + len(self.root_tag)
        end = self.text.rfind(f"</{self.name}>")
        if end < begin:
            raise NotWellFormedError(self.name, detail="closing tag not found")
        return self.text[begin:end]

    def has_child(self, name: str) -> bool:
        """
        Cheap presence probe: True if ``<name`` occurs anywhere in this node.

        Looser than ``get_child``, which only sees direct children.
        """
        if not self.has_inner_content:
            return False
        return PatternCursor("<" + name, self.text, literal=True).find()

    def get_child(self, name: str) -> XMLNode:
        """
        Returns the first direct child named ``name``.

        Raises:
            InnerContentUnavailableError: This node's root tag is self-closing.
            ChildAbsentError: No sibling in the inner content has that name.
            NotWellFormedError: A tag in the inner content never closes.
        """
        result = match_tag(self._inner_text(), name)
        if not result.matched:
            raise ChildAbsentError(name)
        return XMLNode.from_text(result.text)

    def get_child_array(self, name: str) -> List[XMLNode]:
        """
        Returns every direct child named ``name`` in document order.

        Raises:
            InnerContentUnavailableError: This node's root tag is self-closing.
            ChildAbsentError: Not even one child has that name.
        """
        matches = [XMLNode.from_text(m.text) for m in iter_matches(self._inner_text(), name)]
        if not matches:
            raise ChildAbsentError(name)
        logger.debug("Collected %d <%s> children of <%s>.", len(matches), name, self.name)
        return matches

    def child_names(self) -> List[str]:
        """Names of the direct children, in document order."""
        if not self.has_inner_content:
            return []
        return [m.name for m in iter_siblings(self._inner_text())]

    # -------- Attributes --------

    def has_attribute(self, name: str) -> bool:
        return name in self.attrs

    def get_attribute(self, name: str) -> str:
        """
        Returns the raw string value of attribute ``name``.

        Raises:
            AttributeMapEmptyError: The root tag carries no attributes at all.
            AttributeAbsentError: The attribute is not present.
        """
        if not self.attrs:
            raise AttributeMapEmptyError(self.name)
        try:
            return self.attrs[name]
        except KeyError:
            raise AttributeAbsentError(name) from None

    def get_string_attr(self, name: str) -> str:
        return self.get_attribute(name)

    def get_bool_attr(self, name: str) -> bool:
        return to_bool(self.get_attribute(name), name)

    def get_int_attr(self, name: str) -> int:
        return to_int32(self.get_attribute(name), name)

    def get_long_attr(self, name: str) -> int:
        return to_int64(self.get_attribute(name), name)

    def get_double_attr(self, name: str) -> float:
        return to_float64(self.get_attribute(name), name)
