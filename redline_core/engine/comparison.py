"""
Multi-source comparison: several source versions against one final text.

Design:
- The final text is normalized once and every source is diffed against it
- Each source gets its own panel rendered from its own diff
- The final panel is rendered from the FIRST source's diff only, so which
  spans show as added depends on source order
- change_count sums every source's diff
"""
import asyncio
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from redline_core.config import DEFAULT_CONFIG
from redline_core.engine.diff import try_diff_words
from redline_core.engine.normalizer import normalize
from redline_core.engine.renderer import render
from redline_core.models import (
    ComparisonPayload,
    Group,
    Panel,
    Span,
    SourceText,
    parse_agreement_phrases,
)

logger = logging.getLogger(__name__)

SourceLike = Union[SourceText, Mapping[str, Any]]


def _coerce_source(source: SourceLike, index: int) -> SourceText:
    if isinstance(source, SourceText):
        return source
    if isinstance(source, Mapping):
        text = source.get("text")
        label = source.get("label") or f"Source {index + 1}"
        return SourceText(text=text if isinstance(text, str) else "", label=str(label))
    logger.warning(f"Ignoring source {index} of unsupported type {type(source).__name__}")
    return SourceText(text="", label=f"Source {index + 1}")


def build_comparison(
    sources: Optional[Sequence[SourceLike]],
    final_text: Any,
    agreement_phrases: Any = None,
    final_label: Optional[str] = None,
) -> ComparisonPayload:
    """
    Build the multi-panel comparison payload.

    Args:
        sources: Source versions in display order ({text, label} or SourceText)
        final_text: Final enrolled text
        agreement_phrases: List of phrases or a bracketed comma-delimited string
        final_label: Heading for the final panel

    Returns:
        ComparisonPayload with len(sources) + 1 panels, or the no-content
        payload when there are no sources or no final text
    """
    phrases = parse_agreement_phrases(agreement_phrases)
    final_label = final_label or DEFAULT_CONFIG["labels"]["final"]
    final_clean = normalize(final_text)

    if not sources or not final_clean:
        logger.debug("Comparison has no sources or no final text")
        return ComparisonPayload.empty(agreement_phrases=phrases, final_label=final_label)

    panels: list[Panel] = []
    final_spans: list[Span] = []
    final_changes = 0
    total_changes = 0

    for index, raw_source in enumerate(sources):
        source = _coerce_source(raw_source, index)
        source_clean = normalize(source.text)
        tokens = try_diff_words(source_clean, final_clean)

        if tokens is None:
            logger.warning(f"Diff failed for source '{source.label}', rendering empty panel")
            panels.append(Panel(label=source.label, role="source"))
            if index == 0:
                final_spans = [Span(final_clean)]
            continue

        redline = render(tokens)
        total_changes += redline.change_count
        panels.append(Panel(
            label=source.label,
            role="source",
            spans=redline.source_view,
            change_count=redline.deletions,
        ))
        if index == 0:
            final_spans = redline.final_view
            final_changes = redline.additions

    panels.append(Panel(
        label=final_label,
        role="final",
        spans=final_spans,
        change_count=final_changes,
    ))

    logger.debug(f"Built comparison: {len(panels)} panels, {total_changes} changes")
    return ComparisonPayload(
        panels=panels,
        change_count=total_changes,
        identical=total_changes == 0,
        agreement_phrases=phrases,
        final_label=final_label,
    )


def build_group_comparison(
    group: Group,
    labels: Optional[dict[str, str]] = None,
    final_label: Optional[str] = None,
) -> ComparisonPayload:
    """
    Compare every distinct source version in a group against its final text.

    Agreement phrases come from the group's first row.
    """
    return build_comparison(
        group.comparison_sources(labels),
        group.final_text,
        group.agreement_phrases,
        final_label=final_label,
    )


async def build_comparison_async(
    sources: Optional[Sequence[SourceLike]],
    final_text: Any,
    agreement_phrases: Any = None,
    final_label: Optional[str] = None,
) -> ComparisonPayload:
    """
    Run build_comparison() in a worker thread.

    The whole normalize -> diff -> render pipeline runs as one call, so the
    awaiting caller only ever sees the finished payload.
    """
    snapshot = list(sources or [])
    return await asyncio.to_thread(
        build_comparison, snapshot, final_text, agreement_phrases, final_label
    )
