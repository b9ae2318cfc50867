"""
Text normalization applied before any diff.

Extracted section text arrives with inconsistent spacing around section
numbers and subsection markers ("132.Appropriations", "(1)the Secretary").
Both sides of every comparison pass through normalize() so the diff only
reports wording changes, and every renderer shares this one rule set.
"""
import logging
import re
from typing import Any

from redline_core.exceptions import NormalizationError

logger = logging.getLogger(__name__)

# "132.A" / "130A.A" -> "132. A"
SECTION_NUMBER_RE = re.compile(r"([0-9]+[A-Z]?\.)\s*([A-Z])")
# "132. Heading text.Body" -> heading isolated as its own paragraph
SECTION_HEADING_RE = re.compile(r"([0-9]+[A-Z]?\.\s*[A-Z][^.]*\.)\s*([A-Z])")
# "(1)the" -> "(1) the"
SUBSECTION_MARKER_RE = re.compile(r"(\([0-9]+\))\s*([a-z])")
PERIOD_SPACING_RE = re.compile(r"\.\s+")
WHITESPACE_RE = re.compile(r"\s+")

# Order matters: the heading break relies on the section-number spacing
# already being in place, and the final collapses fold everything to
# single spaces.
_PASSES: tuple[tuple[re.Pattern, str], ...] = (
    (SECTION_NUMBER_RE, r"\1 \2"),
    (SECTION_HEADING_RE, r"\1\n\n\2"),
    (SUBSECTION_MARKER_RE, r"\1 \2"),
    (PERIOD_SPACING_RE, ". "),
    (WHITESPACE_RE, " "),
)


def _apply_passes(text: str) -> str:
    try:
        result = text.strip()
        for pattern, replacement in _PASSES:
            result = pattern.sub(replacement, result)
        return result.strip()
    except Exception as e:
        raise NormalizationError(f"Failed to normalize text of length {len(text)}") from e


def normalize(text: Any) -> str:
    """
    Normalize raw legislative text into consistently spaced prose.

    Args:
        text: Raw section text; None, non-strings and empty values are allowed

    Returns:
        Normalized text, '' for missing input, or the untouched input if a
        pattern pass fails
    """
    if not text or not isinstance(text, str):
        return ""
    try:
        return _apply_passes(text)
    except NormalizationError:
        logger.warning("Normalization failed, using original text", exc_info=True)
        return text
