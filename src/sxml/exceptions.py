# src/sxml/exceptions.py
from typing import Optional


class SXMLError(Exception):
    """
    Base class for every error raised by the scanner and the node accessors.

    Each subclass carries a stable integer ``code`` so callers (and the CLI)
    can branch on the error kind without string matching. ``name`` holds the
    offending tag or attribute name where one applies.
    """
    code: int = 0
    message: str = "SXML error"

    def __init__(self, name: Optional[str] = None, detail: Optional[str] = None):
        self.name = name
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        msg = self.message
        if self.name is not None:
            msg = f"{msg}: '{self.name}'"
        if self.detail:
            msg = f"{msg} ({self.detail})"
        return msg


class NotWellFormedError(SXMLError):
    """Input is empty, the root tag is missing, or a tag is opened but never closed."""
    code = 1
    message = "Not a well-formed XML fragment"


class ChildAbsentError(SXMLError):
    """A requested child tag was not found among the siblings."""
    code = 2
    message = "Child tag not found"


class InnerContentUnavailableError(SXMLError):
    """A child lookup was attempted on a node whose root tag is self-closing."""
    code = 3
    message = "Tag has no inner content"


class AttributeMapEmptyError(SXMLError):
    code = 4
    message = "Tag has no attributes"


class AttributeAbsentError(SXMLError):
    code = 5
    message = "Attribute not found"


class AttributeConversionError(SXMLError):
    """A typed attribute getter could not parse the stored string value."""
    code = 6
    message = "Attribute value cannot be converted"

    def __init__(self, name: Optional[str] = None, target_type: Optional[str] = None,
                 value: Optional[str] = None):
        self.target_type = target_type
        self.value = value
        detail = None
        if target_type is not None:
            detail = f"expected {target_type}, got {value!r}"
        super().__init__(name, detail)
