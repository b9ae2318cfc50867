"""
Markdown rendering tests.
"""
import io

from redline_core.engine import build_comparison
from redline_core.models import ComparisonPayload, Panel, Span, SourceText, TokenKind
from redline_core.reports import panel_markdown, write_comparison_markdown


class TestPanelMarkdown:
    def test_added_bold_removed_struck(self):
        panel = Panel("P", "source", [
            Span("within "),
            Span("90", TokenKind.REMOVED),
            Span(" days"),
        ])
        assert panel_markdown(panel) == "within ~~90~~ days"

    def test_edge_whitespace_outside_markers(self):
        panel = Panel("P", "final", [Span("shall "), Span("promptly ", TokenKind.ADDED), Span("act.")])
        assert panel_markdown(panel) == "shall **promptly** act."

    def test_markdown_characters_escaped(self):
        panel = Panel("P", "final", [Span("a*b_c")])
        assert panel_markdown(panel) == "a\\*b\\_c"


class TestWriteComparisonMarkdown:
    def test_full_document(self):
        payload = build_comparison(
            [SourceText("The Secretary shall act.", "House Version")],
            "The Secretary shall promptly act.",
            "['Agreed on funding']",
        )
        f = io.StringIO()
        write_comparison_markdown(f, payload, title="Sec. 132")
        text = f.getvalue()

        assert text.startswith("# Sec. 132\n")
        assert "- Agreed on funding" in text
        assert "## House Version\n" in text
        assert "## H.R. 5009 Final (1 additions)" in text
        assert "**promptly**" in text
        assert "_1 total change detected across all sources_" in text

    def test_no_content(self):
        f = io.StringIO()
        write_comparison_markdown(f, ComparisonPayload.empty())
        assert f.getvalue() == "_No text available for comparison_\n\n"
