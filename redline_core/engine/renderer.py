import logging
from typing import Any, Optional, Sequence

from redline_core.engine.diff import try_diff_words
from redline_core.engine.normalizer import normalize
from redline_core.models import DiffToken, Redline, Span, TokenKind

logger = logging.getLogger(__name__)


def render(tokens: Optional[Sequence[DiffToken]]) -> Redline:
    """
    Split a diff into the source view and the final view.

    The source view keeps retained and removed text (removed is marked);
    the final view keeps retained and added text (added is marked).

    Args:
        tokens: Output of diff_words(); None when the diff could not be computed

    Returns:
        Redline, or the no-content result when there are no tokens at all
    """
    if not tokens:
        return Redline.empty()

    source_view: list[Span] = []
    final_view: list[Span] = []
    deletions = 0
    additions = 0

    for token in tokens:
        if token.kind is TokenKind.REMOVED:
            source_view.append(Span(token.value, TokenKind.REMOVED))
            deletions += 1
        elif token.kind is TokenKind.ADDED:
            final_view.append(Span(token.value, TokenKind.ADDED))
            additions += 1
        else:
            source_view.append(Span(token.value))
            final_view.append(Span(token.value))

    change_count = deletions + additions
    return Redline(
        source_view=source_view,
        final_view=final_view,
        change_count=change_count,
        identical=change_count == 0,
        deletions=deletions,
        additions=additions,
    )


def compare_two(before: Any, after: Any) -> Redline:
    """Normalize both texts, diff them and render the redline."""
    source_clean = normalize(before)
    final_clean = normalize(after)
    logger.debug(f"Comparing texts: source={len(source_clean)} chars, final={len(final_clean)} chars")
    return render(try_diff_words(source_clean, final_clean))
