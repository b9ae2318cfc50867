"""
Word-level diff between two texts.

Both inputs are normalized first, so joining the tokens of either side gives
back that side's normalized text exactly. Tokens are word runs, whitespace
runs and punctuation; each distinct token is encoded as one character and
the encoded strings are aligned with diff-match-patch (Myers), giving a
minimal edit script over tokens. Diff_Timeout is 0 so the alignment is
never cut short into a non-minimal one.
"""
import logging
import re
from typing import Any, Optional

from diff_match_patch import diff_match_patch

from redline_core.engine.normalizer import normalize
from redline_core.exceptions import DiffComputationError
from redline_core.models import DiffToken, TokenKind

logger = logging.getLogger(__name__)

# Brackets and quotes stand alone so "(a)" and "(b)" still share "(" and ")".
TOKEN_RE = re.compile(r"\w+|\s+|[()\[\]{}'\"]|[^\w\s()\[\]{}'\"]+")

_OP_KINDS = {
    diff_match_patch.DIFF_EQUAL: TokenKind.RETAINED,
    diff_match_patch.DIFF_DELETE: TokenKind.REMOVED,
    diff_match_patch.DIFF_INSERT: TokenKind.ADDED,
}

# Token codes start above ASCII and skip the surrogate block.
_FIRST_CODE = 0x100
_SURROGATES = range(0xD800, 0xE000)


def tokenize(text: str) -> list[str]:
    if not text:
        return []
    return TOKEN_RE.findall(text)


def _encode(a_tok: list[str], b_tok: list[str]) -> tuple[str, str, dict[str, str]]:
    token_to_char: dict[str, str] = {}
    char_to_token: dict[str, str] = {}
    next_code = _FIRST_CODE

    def encode(tokens: list[str]) -> str:
        nonlocal next_code
        chars = []
        for token in tokens:
            if token not in token_to_char:
                if next_code in _SURROGATES:
                    next_code = _SURROGATES.stop
                token_to_char[token] = chr(next_code)
                char_to_token[chr(next_code)] = token
                next_code += 1
            chars.append(token_to_char[token])
        return "".join(chars)

    return encode(a_tok), encode(b_tok), char_to_token


def _append(out: list[DiffToken], value: str, kind: TokenKind) -> None:
    if not value:
        return
    if out and out[-1].kind is kind:
        out[-1] = DiffToken(out[-1].value + value, kind)
    else:
        out.append(DiffToken(value, kind))


def diff_words(before: Any, after: Any) -> list[DiffToken]:
    """
    Compute the word diff from normalize(before) to normalize(after).

    Consecutive tokens of one kind are merged into a single DiffToken; a
    replaced stretch yields its REMOVED token ahead of its ADDED token.

    Args:
        before: Source text (raw or normalized; non-strings count as '')
        after: Final text (raw or normalized; non-strings count as '')

    Returns:
        DiffTokens; empty when both sides are empty
    """
    a_enc, b_enc, char_to_token = _encode(tokenize(normalize(before)), tokenize(normalize(after)))

    dmp = diff_match_patch()
    dmp.Diff_Timeout = 0
    diffs = dmp.diff_main(a_enc, b_enc, False)

    out: list[DiffToken] = []
    for op, encoded in diffs:
        _append(out, "".join(char_to_token[c] for c in encoded), _OP_KINDS[op])
    return out


def try_diff_words(before: Any, after: Any) -> Optional[list[DiffToken]]:
    """diff_words() that logs and returns None instead of raising."""
    try:
        return _checked_diff(before, after)
    except DiffComputationError:
        logger.warning("Word diff failed", exc_info=True)
        return None


def _checked_diff(before: Any, after: Any) -> list[DiffToken]:
    try:
        return diff_words(before, after)
    except Exception as e:
        raise DiffComputationError("Could not compute word diff") from e
