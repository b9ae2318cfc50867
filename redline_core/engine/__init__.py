from .normalizer import normalize
from .diff import diff_words, tokenize, try_diff_words
from .renderer import render, compare_two
from .comparison import build_comparison, build_comparison_async, build_group_comparison
from .grouping import group_records, section_sort_key, MISSING_SECTION_SENTINEL

__all__ = [
    "normalize",
    "diff_words",
    "tokenize",
    "try_diff_words",
    "render",
    "compare_two",
    "build_comparison",
    "build_comparison_async",
    "build_group_comparison",
    "group_records",
    "section_sort_key",
    "MISSING_SECTION_SENTINEL",
]
