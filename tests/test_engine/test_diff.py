"""
Word diff tests.

The diff must reconstruct both sides exactly: the source panel is built from
non-added tokens and the final panel from non-removed tokens.
"""
import itertools

import pytest

from redline_core.engine import diff_words, normalize, tokenize, try_diff_words
from redline_core.models import DiffToken, TokenKind


def _join(tokens, skip):
    return "".join(t.value for t in tokens if t.kind is not skip)


def _lcs_length(a, b):
    rows = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i, x in enumerate(a):
        for j, y in enumerate(b):
            rows[i + 1][j + 1] = rows[i][j] + 1 if x == y else max(rows[i][j + 1], rows[i + 1][j])
    return rows[-1][-1]


def _retained_count(tokens):
    return sum(len(tokenize(t.value)) for t in tokens if t.kind is TokenKind.RETAINED)


class TestTokenize:
    def test_words_whitespace_and_punctuation(self):
        assert tokenize("The Secretary shall act.") == [
            "The", " ", "Secretary", " ", "shall", " ", "act", ".",
        ]

    def test_brackets_stand_alone(self):
        assert tokenize("(1)(a)") == ["(", "1", ")", "(", "a", ")"]

    def test_punctuation_run_kept_together(self):
        assert tokenize("U.S.C.--") == ["U", ".", "S", ".", "C", ".--"]

    def test_empty(self):
        assert tokenize("") == []

    def test_tokens_rejoin_to_input(self, house_text):
        assert "".join(tokenize(house_text)) == house_text


class TestDiffWords:
    """Tests for diff_words()."""

    def test_insertion(self):
        tokens = diff_words("The Secretary shall act.", "The Secretary shall promptly act.")
        assert tokens == [
            DiffToken("The Secretary shall ", TokenKind.RETAINED),
            DiffToken("promptly ", TokenKind.ADDED),
            DiffToken("act.", TokenKind.RETAINED),
        ]

    def test_deletion(self):
        tokens = diff_words("shall promptly act", "shall act")
        assert [t.kind for t in tokens] == [TokenKind.RETAINED, TokenKind.REMOVED, TokenKind.RETAINED]
        assert tokens[1].value == "promptly "

    def test_replacement_removed_before_added(self):
        tokens = diff_words("within 90 days", "within 120 days")
        assert tokens == [
            DiffToken("within ", TokenKind.RETAINED),
            DiffToken("90", TokenKind.REMOVED),
            DiffToken("120", TokenKind.ADDED),
            DiffToken(" days", TokenKind.RETAINED),
        ]

    def test_identical_texts_single_retained_token(self):
        tokens = diff_words("Same text.", "Same text.")
        assert tokens == [DiffToken("Same text.", TokenKind.RETAINED)]

    def test_empty_vs_empty(self):
        assert diff_words("", "") == []

    def test_empty_source_all_added(self):
        assert diff_words("", "New section.") == [DiffToken("New section.", TokenKind.ADDED)]

    def test_empty_final_all_removed(self):
        assert diff_words("Old section.", "") == [DiffToken("Old section.", TokenKind.REMOVED)]

    def test_non_string_treated_as_empty(self):
        assert diff_words(None, None) == []
        assert diff_words(None, "text") == [DiffToken("text", TokenKind.ADDED)]

    def test_no_adjacent_tokens_share_kind(self, house_text, final_text):
        tokens = diff_words(normalize(house_text), normalize(final_text))
        for prev, cur in zip(tokens, tokens[1:]):
            assert prev.kind is not cur.kind

    def test_deterministic(self, senate_text, final_text):
        before, after = normalize(senate_text), normalize(final_text)
        assert diff_words(before, after) == diff_words(before, after)


class TestReconstruction:
    """Joining tokens reproduces each normalized side."""

    @pytest.mark.parametrize("before,after", [
        ("The Secretary shall act.", "The Secretary shall promptly act."),
        ("132.Appropriations are authorized.", "132. Appropriations are hereby authorized."),
        ("(1)not later than 90 days", "(1) not later than 120 days after enactment"),
        ("", "Final only."),
        ("Source only.", ""),
        ("a b a b a b", "b a b a"),
        ("", ""),
    ])
    def test_both_sides_rebuilt(self, before, after):
        b, a = normalize(before), normalize(after)
        tokens = diff_words(b, a)
        assert _join(tokens, TokenKind.ADDED) == b
        assert _join(tokens, TokenKind.REMOVED) == a

    def test_fixture_sections_rebuilt(self, house_text, senate_text, final_text):
        final_clean = normalize(final_text)
        for source in (house_text, senate_text):
            source_clean = normalize(source)
            tokens = diff_words(source_clean, final_clean)
            assert _join(tokens, TokenKind.ADDED) == source_clean
            assert _join(tokens, TokenKind.REMOVED) == final_clean

    @pytest.mark.parametrize("before,after", [
        ("132.Appropriations   are\nauthorized.", "132. Appropriations are hereby authorized."),
        ("(1)not later than\t90 days", "  (1) not later than 120 days  "),
        ("132.Military construction.The Secretary shall act.", "132. Military construction. The Secretary shall act."),
    ])
    def test_raw_input_rebuilds_normalized_sides(self, before, after):
        """Un-normalized input is normalized before diffing."""
        tokens = diff_words(before, after)
        assert _join(tokens, TokenKind.ADDED) == normalize(before)
        assert _join(tokens, TokenKind.REMOVED) == normalize(after)

    def test_raw_and_normalized_input_diff_alike(self, house_text, final_text):
        assert diff_words(house_text, final_text) == diff_words(normalize(house_text), normalize(final_text))


class TestMinimalAlignment:
    """Retained tokens form a longest common subsequence."""

    def test_repeated_word_fully_matched(self):
        """'x x x' -> 'y y x' keeps three tokens (' ', ' ', 'x')."""
        tokens = diff_words("x x x", "y y x")
        assert _retained_count(tokens) == 3
        assert _join(tokens, TokenKind.ADDED) == "x x x"
        assert _join(tokens, TokenKind.REMOVED) == "y y x"

    def test_all_short_word_sequences(self):
        """Every pair of 1-4 word sequences over three words."""
        texts = [
            " ".join(words)
            for n in range(1, 5)
            for words in itertools.product("xyz", repeat=n)
        ]
        for before in texts:
            for after in texts:
                tokens = diff_words(before, after)
                expected = _lcs_length(tokenize(before), tokenize(after))
                assert _retained_count(tokens) == expected, (before, after)

    def test_legislative_edit_is_minimal(self, senate_text, final_text):
        before, after = normalize(senate_text), normalize(final_text)
        tokens = diff_words(before, after)
        assert _retained_count(tokens) == _lcs_length(tokenize(before), tokenize(after))


class TestTryDiffWords:
    def test_returns_tokens(self):
        assert try_diff_words("a", "a") == [DiffToken("a", TokenKind.RETAINED)]

    def test_failure_returns_none(self, monkeypatch, caplog):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("redline_core.engine.diff.diff_words", explode)
        with caplog.at_level("WARNING", logger="redline_core.engine.diff"):
            assert try_diff_words("a", "b") is None
        assert "Word diff failed" in caplog.text
