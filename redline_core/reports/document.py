"""
Standalone HTML comparison document.

Turns a ComparisonPayload into a self-contained page: agreement phrase
block, status bar, and one column per panel. The page carries the already
computed spans, so it always matches the inline view exactly.
"""
import html
from pathlib import Path
from typing import Optional, Union

from redline_core.config import DEFAULT_CONFIG
from redline_core.models import ComparisonPayload, Panel, TokenKind

STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: #f8f9fa; }
.diff-header { background: #ffffff; border-bottom: 1px solid #e5e7eb; padding: 16px 24px; }
.diff-title { font-size: 20px; font-weight: 600; color: #1f2937; margin-bottom: 8px; }
.diff-subtitle { color: #6b7280; font-size: 14px; }
.diff-container { display: grid; grid-template-columns: repeat(var(--panels), 1fr); }
.diff-panel { display: flex; flex-direction: column; background: white; border-right: 1px solid #e5e7eb; }
.diff-panel:last-child { border-right: none; }
.panel-header { background: #f9fafb; border-bottom: 1px solid #e5e7eb; padding: 12px 16px; font-weight: 500; color: #374151; font-size: 14px; text-align: center; }
.panel-badge { margin-left: 8px; font-size: 12px; font-weight: 400; }
.panel-content { padding: 16px; line-height: 1.6; font-size: 14px; white-space: pre-wrap; word-wrap: break-word; }
.removed { background-color: #fecaca; color: #991b1b; text-decoration: line-through; font-weight: bold; }
.added { background-color: #bbf7d0; color: #166534; font-weight: bold; }
.status-bar { padding: 8px 16px; font-size: 12px; border-bottom: 1px solid #e5e7eb; }
.status-changed { background: #eff6ff; color: #1e40af; }
.status-identical { background: #f0fdf4; color: #166534; }
.status-empty { background: #f3f4f6; color: #6b7280; }
.final-panel { background: #f0fdf4; }
.agreement-phrases { background: #fef3c7; border-bottom: 1px solid #e5e7eb; padding: 16px 24px; border-left: 4px solid #f59e0b; }
.agreement-title { font-size: 16px; font-weight: 600; color: #92400e; margin-bottom: 8px; }
.agreement-item { color: #78350f; font-size: 14px; margin-bottom: 6px; }
"""

_SPAN_CLASSES = {
    TokenKind.REMOVED: "removed",
    TokenKind.ADDED: "added",
}


def esc(s: str) -> str:
    return html.escape(s, quote=True)


def _panel_html(panel: Panel) -> str:
    body = []
    for span in panel.spans:
        css = _SPAN_CLASSES.get(span.kind)
        if css:
            body.append(f'<span class="{css}">{esc(span.text)}</span>')
        else:
            body.append(esc(span.text))

    header_class = "panel-header final-panel" if panel.role == "final" else "panel-header"
    badge = ""
    if panel.change_count:
        noun = "additions" if panel.role == "final" else "deletions"
        badge = f'<span class="panel-badge">{panel.change_count} {noun}</span>'
    return (
        '<div class="diff-panel">'
        f'<div class="{header_class}">{esc(panel.label)}{badge}</div>'
        f'<div class="panel-content">{"".join(body)}</div>'
        '</div>'
    )


def _status_class(payload: ComparisonPayload) -> str:
    if payload.no_content:
        return "status-empty"
    return "status-identical" if payload.identical else "status-changed"


def render_comparison_html(payload: ComparisonPayload, title: Optional[str] = None) -> str:
    """
    Render the standalone comparison page.

    Args:
        payload: Result of build_comparison()
        title: Page heading (default: report.title from config)

    Returns:
        Complete HTML document as a string; every text value is escaped
    """
    title = title or DEFAULT_CONFIG["report"]["title"]
    subtitle = f"{' + '.join(payload.source_labels) or 'Sources'} vs {payload.final_label}"

    parts = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{esc(title)} - {esc(subtitle)}</title>",
        f"<style>{STYLE}</style>",
        "</head>",
        "<body>",
        '<div class="diff-header">',
        f'<div class="diff-title">{esc(title)}</div>',
        f'<div class="diff-subtitle">{esc(subtitle)}</div>',
        "</div>",
    ]

    if payload.agreement_phrases:
        parts.append('<div class="agreement-phrases">')
        parts.append('<div class="agreement-title">Conference Committee Agreement</div>')
        parts.extend(
            f'<div class="agreement-item">&bull; {esc(phrase)}</div>'
            for phrase in payload.agreement_phrases
        )
        parts.append("</div>")

    parts.append(
        f'<div class="status-bar {_status_class(payload)}">{esc(payload.status_message)}</div>'
    )

    if payload.panels:
        parts.append(f'<div class="diff-container" style="--panels: {len(payload.panels)}">')
        parts.extend(_panel_html(panel) for panel in payload.panels)
        parts.append("</div>")

    parts.extend(["</body>", "</html>"])
    return "\n".join(parts)


def write_comparison_html(
    payload: ComparisonPayload,
    path: Union[str, Path],
    title: Optional[str] = None,
) -> Path:
    """Write the standalone comparison page and return its path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_comparison_html(payload, title=title), encoding="utf-8")
    return out
