from .document import render_comparison_html, write_comparison_html
from .display import display_comparison, display_groups
from .markdown import write_comparison_markdown, panel_markdown

__all__ = [
    "render_comparison_html",
    "write_comparison_html",
    "display_comparison",
    "display_groups",
    "write_comparison_markdown",
    "panel_markdown",
]
