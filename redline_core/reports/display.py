from typing import Optional, Sequence

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel as RichPanel
from rich.table import Table
from rich.text import Text

from redline_core.models import ComparisonPayload, Group, Panel, TokenKind

console = Console()

_SPAN_STYLES = {
    TokenKind.REMOVED: "bold strike red",
    TokenKind.ADDED: "bold green",
}


def _panel_text(panel: Panel) -> Text:
    text = Text()
    for span in panel.spans:
        text.append(span.text, style=_SPAN_STYLES.get(span.kind, ""))
    return text


def display_comparison(payload: ComparisonPayload, out: Optional[Console] = None) -> None:
    """
    Display a comparison in the console, one column per panel.

    Removed text is struck through in red, added text is bold green.

    Color Coding:
        - Changes found: BLUE status line
        - Identical: GREEN status line
        - No content: DIM status line
    """
    out = out or console

    if payload.agreement_phrases:
        phrases = "\n".join(f"• {p}" for p in payload.agreement_phrases)
        out.print(RichPanel(phrases, title="Conference Committee Agreement", border_style="yellow"))

    if payload.no_content:
        out.print(f"[dim]{payload.status_message}[/dim]")
        return

    status_color = "green" if payload.identical else "blue"
    out.print(f"[{status_color}]{payload.status_message}[/{status_color}]")

    rendered = []
    for panel in payload.panels:
        border = "green" if panel.role == "final" else "cyan"
        title = panel.label
        if panel.change_count:
            noun = "additions" if panel.role == "final" else "deletions"
            title = f"{panel.label} ({panel.change_count} {noun})"
        rendered.append(RichPanel(_panel_text(panel), title=title, border_style=border))
    out.print(Columns(rendered, equal=True, expand=True))


def display_groups(groups: Sequence[Group], out: Optional[Console] = None) -> None:
    """Display grouped sections as a table, one row per group."""
    out = out or console
    table = Table(title=f"{len(groups)} sections")
    table.add_column("Section", justify="right", style="cyan")
    table.add_column("Header")
    table.add_column("Source Types")
    table.add_column("Versions", justify="right")
    table.add_column("Final Text", justify="center")

    for group in groups:
        section = group.representative_section_number
        table.add_row(
            "" if section is None else str(section),
            group.key or "[dim](no header)[/dim]",
            ", ".join(group.source_bill_types) or "-",
            str(len(group.rows)),
            "[green]yes[/green]" if group.final_text else "[dim]no[/dim]",
        )
    out.print(table)
