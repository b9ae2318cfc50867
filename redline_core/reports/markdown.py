from typing import Optional, TextIO

from redline_core.models import ComparisonPayload, Panel, TokenKind


def _escape(text: str) -> str:
    for ch in ("\\", "*", "~", "_", "`"):
        text = text.replace(ch, "\\" + ch)
    return text


def _mark(text: str, kind: TokenKind) -> str:
    """Wrap a span, keeping edge whitespace outside the markers."""
    core = text.strip()
    if not core or kind is TokenKind.RETAINED:
        return _escape(text)
    lead = text[: len(text) - len(text.lstrip())]
    trail = text[len(text.rstrip()):]
    marker = "~~" if kind is TokenKind.REMOVED else "**"
    return f"{lead}{marker}{_escape(core)}{marker}{trail}"


def panel_markdown(panel: Panel) -> str:
    return "".join(_mark(span.text, span.kind) for span in panel.spans)


def write_comparison_markdown(
    f: TextIO,
    payload: ComparisonPayload,
    title: Optional[str] = None,
) -> None:
    """
    Write a comparison as Markdown.

    Removed text is ~~struck~~, added text is **bold**.

    Args:
        f: File handle to write to
        payload: Result of build_comparison()
        title: Optional top-level heading
    """
    if title:
        f.write(f"# {title}\n\n")

    if payload.agreement_phrases:
        f.write("**Conference Committee Agreement:**\n\n")
        for phrase in payload.agreement_phrases:
            f.write(f"- {_escape(phrase)}\n")
        f.write("\n")

    f.write(f"_{payload.status_message}_\n\n")

    for panel in payload.panels:
        heading = panel.label
        if panel.change_count:
            noun = "additions" if panel.role == "final" else "deletions"
            heading = f"{panel.label} ({panel.change_count} {noun})"
        f.write(f"## {heading}\n\n")
        f.write(panel_markdown(panel) or "_No text_")
        f.write("\n\n")
