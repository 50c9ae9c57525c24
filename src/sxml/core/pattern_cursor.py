# src/sxml/core/pattern_cursor.py
from __future__ import annotations

import re
from typing import Optional, Pattern, Union


class PatternCursor:
    """
    Minimal stateful search over a subject string.

    Wraps a compiled pattern and keeps a movable cursor, so that successive
    calls to ``find()`` walk the matches left to right. ``find(n)`` restarts
    from the beginning and lands on the n-th match (0-based).

    Usage:
        cursor = PatternCursor("<b", text, literal=True)
        while cursor.find():
            print(cursor.start, cursor.found)
    """

    def __init__(self, pattern: Union[str, Pattern[str]], text: str, literal: bool = False):
        if isinstance(pattern, str):
            pattern = re.compile(re.escape(pattern) if literal else pattern)
        self._pattern = pattern
        self._text = text
        self._pos = 0
        self._match: Optional[re.Match] = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def pos(self) -> int:
        return self._pos

    def reset(self, pos: int = 0) -> None:
        """Moves the cursor to ``pos`` and forgets the current match."""
        self._pos = max(0, min(pos, len(self._text)))
        self._match = None

    def find(self, n: Optional[int] = None) -> bool:
        """
        Advances to the next match.

        Args:
            n (Optional[int]): When given, reset to the start of the text and
                               stop on the n-th match instead.

        Returns:
            bool: True if a match was found; the cursor then sits at its end.
        """
        if n is not None:
            self.reset()
            for _ in range(n + 1):
                if not self.find():
                    return False
            return True

        if self._pos > len(self._text):
            self._match = None
            return False

        m = self._pattern.search(self._text, self._pos)
        self._match = m
        if m is None:
            return False

        # An empty match would otherwise pin the cursor in place.
        self._pos = m.end() if m.end() > m.start() else m.end() + 1
        return True

    def _require_match(self) -> re.Match:
        if self._match is None:
            raise RuntimeError("No current match; call find() first.")
        return self._match

    @property
    def start(self) -> int:
        return self._require_match().start()

    @property
    def end(self) -> int:
        return self._require_match().end()

    @property
    def found(self) -> str:
        return self._require_match().group(0)

    def group(self, index: Union[int, str] = 0) -> Optional[str]:
        return self._require_match().group(index)
