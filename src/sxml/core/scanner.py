# src/sxml/core/scanner.py
"""
Sibling scanner.

Finds tags by name in flat, normalized markup without building a tree.
Each tag is classified as self-closing or container by forward search
alone, and non-matching siblings are skipped in one step by jumping past
their first closing delimiter.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator

from sxml.core.pattern_cursor import PatternCursor
from sxml.core.tag_parser import parse_tag_header
from sxml.exceptions import NotWellFormedError
from sxml.model import MatchKind, TagHeader, TagMatch

logger = logging.getLogger(__name__)


class ScanState(Enum):
    SEEK_OPEN = "seek_open"
    SEEK_SELF_CLOSE_OR_NESTED_MARKER = "seek_self_close_or_nested_marker"
    SEEK_EXPLICIT_CLOSE = "seek_explicit_close"


def min_tag_length(name: str) -> int:
    """Length of the shortest tag with this name, i.e. ``<name/>``."""
    return len(name) + 3


def find_self_close_boundary(text: str, pos: int) -> int:
    """
    Returns the offset of the '>' ending the first '/ ... >' run after ``pos``.

    A '/' qualifies when a '>' follows it with no '"' in between. Every '/'
    is tried in order; -1 means none qualifies.
    """
    slash = text.find("/", pos)
    while slash != -1:
        gt = text.find(">", slash + 1)
        if gt == -1:
            return -1
        if text.find('"', slash + 1, gt) == -1:
            return gt
        slash = text.find("/", slash + 1)
    return -1


def classify_tag(text: str, name: str, pos: int = 0) -> TagMatch:
    """
    Classifies the tag ``name`` found at or after ``pos``.

    The span from ``<name`` to the first qualifying '/ ... >' boundary is a
    self-closing tag if it holds no other '<'. Otherwise real content comes
    first and the tag runs through its first ``</name>``.

    A '/' followed by '>' inside a single-quoted attribute value is taken as
    the self-close marker.

    Returns:
        TagMatch: NO_MATCH when ``<name`` has no '/ ... >' boundary at all.

    Raises:
        NotWellFormedError: The tag has content but ``</name>`` never appears.
    """
    opener = PatternCursor("<" + name, text, literal=True)
    opener.reset(pos)
    state = ScanState.SEEK_OPEN
    open_at = -1

    while True:
        if state is ScanState.SEEK_OPEN:
            if not opener.find():
                return TagMatch.no_match()
            open_at = opener.start
            state = ScanState.SEEK_SELF_CLOSE_OR_NESTED_MARKER

        elif state is ScanState.SEEK_SELF_CLOSE_OR_NESTED_MARKER:
            boundary = find_self_close_boundary(text, opener.end)
            if boundary == -1:
                state = ScanState.SEEK_OPEN
                continue
            if text.find("<", open_at + 1, boundary) == -1:
                return TagMatch(
                    matched=True,
                    kind=MatchKind.SELF_CLOSING,
                    name=name,
                    text=text[open_at:boundary + 1],
                    start=open_at,
                    end=boundary + 1,
                )
            state = ScanState.SEEK_EXPLICIT_CLOSE

        else:
            closer = PatternCursor(f"</{name}>", text, literal=True)
            closer.reset(open_at)
            if not closer.find():
                raise NotWellFormedError(name, detail="closing tag not found")
            return TagMatch(
                matched=True,
                kind=MatchKind.CONTAINER,
                name=name,
                text=text[open_at:closer.end],
                start=open_at,
                end=closer.end,
            )


def _classify_present(text: str, header: TagHeader) -> TagMatch:
    """Classifies a tag whose opening delimiter is known to sit at ``header.start``."""
    result = classify_tag(text, header.name, header.start)
    if not result.matched:
        raise NotWellFormedError(header.name, detail="tag is opened but never ends")
    return result


def _is_skippable(header: TagHeader) -> bool:
    # Stray closing delimiters and nameless '<...>' are stepped over whole.
    return header.closing or not header.name


def match_tag(text: str, target: str, start: int = 0) -> TagMatch:
    """
    Finds the first sibling tag named ``target`` starting at ``start``.

    Siblings with other names are skipped as a unit: a container jumps past
    its first closing delimiter, a self-closing tag past its marker. The
    scanner never descends, so a nested tag with the target's name is only
    reachable by scanning its parent's content.

    Args:
        text (str): Normalized markup holding the siblings.
        target (str): The tag name to find.
        start (int): Offset to start scanning from.

    Returns:
        TagMatch: The full extent of the first matching tag, or NO_MATCH when
                  the target is not among the siblings.

    Raises:
        NotWellFormedError: A tag met along the way is opened but never closed.
    """
    header = parse_tag_header(text, start)
    if header is None:
        return TagMatch.no_match()

    while _is_skippable(header) or header.name != target:
        if _is_skippable(header):
            cursor = header.end
        else:
            skipped = _classify_present(text, header)
            cursor = skipped.end
            logger.debug("Skipped <%s> (%s) at %d..%d while seeking <%s>.",
                          header.name, skipped.kind.value, skipped.start, skipped.end, target)

        if len(text) - cursor < min_tag_length(target):
            return TagMatch.no_match()

        header = parse_tag_header(text, cursor)
        if header is None:
            return TagMatch.no_match()

    result = _classify_present(text, header)
    logger.debug("Matched <%s> (%s) at %d..%d.", target, result.kind.value, result.start, result.end)
    return result


def iter_matches(text: str, target: str, start: int = 0) -> Iterator[TagMatch]:
    """
    Yields every sibling named ``target`` in document order.

    Each scan resumes at the end of the previous match, so no tag instance
    is matched twice.
    """
    pos = start
    while len(text) - pos >= min_tag_length(target):
        result = match_tag(text, target, pos)
        if not result.matched:
            return
        yield result
        pos = result.end


def iter_siblings(text: str, start: int = 0) -> Iterator[TagMatch]:
    """Yields each sibling tag in ``text`` regardless of its name."""
    pos = start
    while True:
        header = parse_tag_header(text, pos)
        if header is None:
            return
        if _is_skippable(header):
            pos = header.end
            continue
        result = _classify_present(text, header)
        yield result
        pos = result.end
