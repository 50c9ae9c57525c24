# src/sxml/model.py
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def read_only_attrs(attrs: Mapping[str, str]) -> Mapping[str, str]:
    """Copies an attribute map into a mapping that rejects item assignment."""
    return MappingProxyType(dict(attrs))


class MatchKind(str, Enum):
    """How a matched tag is delimited."""
    SELF_CLOSING = "self_closing"
    CONTAINER = "container"


class TagHeader(BaseModel):
    """
    An opening (or closing) delimiter located in a markup string.

    ``start`` and ``end`` are offsets into the scanned text, so that
    ``text[start:end] == raw``.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    attrs: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    raw: str
    start: int
    end: int
    closing: bool = False

    @field_validator("attrs")
    @classmethod
    def freeze_attrs(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return read_only_attrs(value)


class TagMatch(BaseModel):
    """
    Result of classifying or scanning for a tag.

    Either "no match" (``matched`` is False) or a match with a kind and the
    exact slice of the subject text spanning the whole tag, nested markup
    included verbatim.
    """
    model_config = ConfigDict(frozen=True)

    matched: bool
    kind: Optional[MatchKind] = None
    name: str = ""
    text: str = ""
    start: int = -1
    end: int = -1

    @classmethod
    def no_match(cls) -> "TagMatch":
        return cls(matched=False)

    @property
    def is_container(self) -> bool:
        return self.matched and self.kind == MatchKind.CONTAINER

    @property
    def is_self_closing(self) -> bool:
        return self.matched and self.kind == MatchKind.SELF_CLOSING
