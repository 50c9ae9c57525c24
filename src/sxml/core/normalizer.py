# src/sxml/core/normalizer.py
import logging
import re

from sxml.exceptions import NotWellFormedError

logger = logging.getLogger(__name__)

# Applied in order; every later lookup assumes single-line, whitespace-minimal text.
_LINE_BREAKS = re.compile(r"\r|\n")
_PROCESSING_INSTRUCTION = re.compile(r"<\?(.*?)\?>")
_SPACE_RUNS = re.compile(r" +")
_SPACE_BETWEEN_TAGS = re.compile(r"> *<")
_LOOSE_SELF_CLOSE = re.compile(r" */ *>")


def normalize(raw: str) -> str:
    """
    Reduces raw markup to a single-line, whitespace-minimal string.

    Line breaks and ``<?...?>`` processing instructions are removed, runs of
    spaces collapse to one, spaces between ``>`` and ``<`` disappear and
    ``" / >"`` becomes ``"/>"``.

    Raises:
        NotWellFormedError: If the input is empty or only whitespace.
    """
    if not raw or not raw.strip():
        raise NotWellFormedError(detail="empty input")

    text = _LINE_BREAKS.sub("", raw)
    text = _PROCESSING_INSTRUCTION.sub("", text)
    text = _SPACE_RUNS.sub(" ", text)
    text = _SPACE_BETWEEN_TAGS.sub("><", text)
    text = _LOOSE_SELF_CLOSE.sub("/>", text)
    text = text.strip(" ")

    if not text:
        raise NotWellFormedError(detail="input contains no markup")

    logger.debug("Normalized %d chars into %d chars.", len(raw), len(text))
    return text
