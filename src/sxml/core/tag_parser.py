# src/sxml/core/tag_parser.py
from __future__ import annotations

import re
from typing import Dict, Optional

from sxml.core.pattern_cursor import PatternCursor
from sxml.model import TagHeader

# The name runs until whitespace, '>' or '/'.
_NAME_PATTERN = re.compile(r"[^\s/>]*")
# name="value"; the value is taken verbatim and may be empty.
ATTRIBUTE_PATTERN = re.compile(r'([^\s=/<>"]+)\s*=\s*"([^"]*)"')


def find_delimiter_end(text: str, start: int) -> int:
    """
    Returns the offset one past the '>' that closes the delimiter opened at
    ``start``, skipping any '>' inside double quotes. -1 if it never closes.
    """
    in_quotes = False
    for i in range(start + 1, len(text)):
        ch = text[i]
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == ">" and not in_quotes:
            return i + 1
    return -1


def parse_attributes(body: str) -> Dict[str, str]:
    """Collects every name="value" pair in ``body``; the first occurrence of a name wins."""
    attrs: Dict[str, str] = {}
    cursor = PatternCursor(ATTRIBUTE_PATTERN, body)
    while cursor.find():
        key = cursor.group(1)
        if key not in attrs:
            attrs[key] = cursor.group(2)
    return attrs


def parse_tag_header(text: str, pos: int = 0) -> Optional[TagHeader]:
    """
    Parses the first tag delimiter at or after ``pos``.

    Name extraction and attribute extraction are independent passes over the
    delimiter text. A closing delimiter (``</name>``) is reported with
    ``closing=True`` and no attributes.

    Args:
        text (str): Normalized markup.
        pos (int): Offset to start looking for '<'.

    Returns:
        Optional[TagHeader]: The header, or None when there is no complete
                             delimiter left in the text.
    """
    start = text.find("<", pos)
    if start == -1:
        return None

    end = find_delimiter_end(text, start)
    if end == -1:
        return None

    raw = text[start:end]
    body = raw[1:-1]
    closing = body.startswith("/")
    if closing:
        body = body[1:]

    name = _NAME_PATTERN.match(body).group(0)
    attrs = {} if closing else parse_attributes(body[len(name):])

    return TagHeader(name=name, attrs=attrs, raw=raw, start=start, end=end, closing=closing)
