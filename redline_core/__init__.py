# Legislative Text Redlining Core Library
# Main entry points: normalize, compare_two, build_comparison, group_records

from .config import load_config, DEFAULT_CONFIG

from .models import (
    Record,
    Group,
    SourceText,
    TokenKind,
    DiffToken,
    Span,
    Redline,
    Panel,
    ComparisonPayload,
    parse_agreement_phrases,
    source_label,
)

from .engine import (
    normalize,
    diff_words,
    render,
    compare_two,
    build_comparison,
    build_comparison_async,
    build_group_comparison,
    group_records,
)

__all__ = [
    # Config
    "load_config",
    "DEFAULT_CONFIG",
    # Models
    "Record",
    "Group",
    "SourceText",
    "TokenKind",
    "DiffToken",
    "Span",
    "Redline",
    "Panel",
    "ComparisonPayload",
    "parse_agreement_phrases",
    "source_label",
    # Engine
    "normalize",
    "diff_words",
    "render",
    "compare_two",
    "build_comparison",
    "build_comparison_async",
    "build_group_comparison",
    "group_records",
]
