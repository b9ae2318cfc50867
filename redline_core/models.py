import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Union

from redline_core.config import DEFAULT_CONFIG
from redline_core.exceptions import RecordParseError


# =============================================================================
# SOURCE LABELS
# =============================================================================
# Bill type codes in the reference spreadsheet are pipeline identifiers, not
# display names. Panels and group headings use the readable form.

SOURCE_LABELS: dict[str, str] = dict(DEFAULT_CONFIG["labels"]["source_types"])
FALLBACK_SOURCE_LABEL: str = DEFAULT_CONFIG["labels"]["fallback_source"]


def source_label(bill_type: str, labels: Optional[dict[str, str]] = None) -> str:
    """
    Display label for a source bill type.

    Args:
        bill_type: Raw type code (e.g., "HOUSE_RDS", "SENATE_RS")
        labels: Optional override of the code -> label map

    Returns:
        Readable label; unknown codes are shown as-is
    """
    mapping = SOURCE_LABELS if labels is None else labels
    if not bill_type:
        return FALLBACK_SOURCE_LABEL
    return mapping.get(bill_type, bill_type)


# =============================================================================
# FIELD COERCION
# =============================================================================

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _as_text(value: Any) -> str:
    """Missing cells and NaN become ''; other scalars are stringified."""
    if _is_missing(value):
        return ""
    if isinstance(value, str):
        return value
    return str(value)


_PHRASE_STRIP_RE = re.compile(r"[\[\]'\"]")


def parse_agreement_phrases(value: Any) -> list[str]:
    """
    Normalize agreement phrases to an ordered list of non-empty strings.

    The spreadsheet export stores the list either as a real sequence or as
    its printed form, e.g. "['Agreed on funding', 'Agreed on timeline']".

    Args:
        value: Sequence of strings, bracketed comma-delimited string, or None

    Returns:
        Phrases in original order with blanks removed
    """
    if _is_missing(value):
        return []
    if isinstance(value, str):
        parts = _PHRASE_STRIP_RE.sub("", value).split(",")
    elif isinstance(value, (list, tuple)):
        parts = [_as_text(item) for item in value]
    else:
        return []
    return [part.strip() for part in parts if part and part.strip()]


# =============================================================================
# RECORDS AND GROUPS
# =============================================================================

# Known columns: canonical name -> accepted aliases
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "header": ("header",),
    "referenced_section_number": ("referencedSectionNumber", "referenced_section_number"),
    "source_bill_type": ("sourceBillType", "source_bill_type"),
    "source_full_section_text": ("sourceFullSectionText", "source_full_section_text"),
    "joint_explanatory_text": ("jointExplanatoryText", "joint_explanatory_text"),
    "agreement_phrases": ("agreementPhrases", "agreement_phrases"),
}


def _first_present(data: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        if key in data and not _is_missing(data[key]):
            return data[key]
    return None


@dataclass(frozen=True)
class Record:
    """One row of the bill reference dataset: a single version of a section.

    extras carries the auxiliary columns (word_count, reference_complexity,
    all_references_found, ...) untouched."""
    header: str = ""
    referenced_section_number: Union[str, int, float, None] = None
    source_bill_type: str = ""
    source_full_section_text: str = ""
    final_enrolled_text: str = ""
    joint_explanatory_text: str = ""
    agreement_phrases: tuple[str, ...] = ()
    extras: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(
        cls,
        data: dict,
        final_text_fields: Optional[Iterable[str]] = None,
    ) -> "Record":
        if not isinstance(data, dict):
            raise RecordParseError(f"Expected a mapping, got {type(data).__name__}")

        if final_text_fields is None:
            final_text_fields = DEFAULT_CONFIG["records"]["final_text_fields"]
        final_text_fields = tuple(final_text_fields)

        final_text = ""
        for key in final_text_fields:
            candidate = _as_text(data.get(key))
            if candidate.strip():
                final_text = candidate
                break

        known = {alias for aliases in _FIELD_ALIASES.values() for alias in aliases}
        known.update(final_text_fields)
        section = _first_present(data, _FIELD_ALIASES["referenced_section_number"])

        return cls(
            header=_as_text(_first_present(data, _FIELD_ALIASES["header"])),
            referenced_section_number=section,
            source_bill_type=_as_text(_first_present(data, _FIELD_ALIASES["source_bill_type"])),
            source_full_section_text=_as_text(
                _first_present(data, _FIELD_ALIASES["source_full_section_text"])
            ),
            final_enrolled_text=final_text,
            joint_explanatory_text=_as_text(
                _first_present(data, _FIELD_ALIASES["joint_explanatory_text"])
            ),
            agreement_phrases=tuple(
                parse_agreement_phrases(_first_present(data, _FIELD_ALIASES["agreement_phrases"]))
            ),
            extras={k: v for k, v in data.items() if k not in known},
        )

    @property
    def source_label(self) -> str:
        return source_label(self.source_bill_type)


@dataclass(frozen=True)
class SourceText:
    """One source version to compare against the final text."""
    text: str
    label: str


@dataclass(frozen=True)
class Group:
    """All records sharing one section header. Built by group_records()."""
    key: str
    rows: tuple[Record, ...] = ()
    section_numbers: frozenset = frozenset()
    representative_section_number: Union[str, int, float, None] = None

    @property
    def is_multi_version(self) -> bool:
        return len(self.rows) > 1

    @property
    def source_bill_types(self) -> list[str]:
        seen: list[str] = []
        for row in self.rows:
            if row.source_bill_type and row.source_bill_type not in seen:
                seen.append(row.source_bill_type)
        return seen

    @property
    def final_text(self) -> str:
        for row in self.rows:
            if row.final_enrolled_text:
                return row.final_enrolled_text
        return ""

    @property
    def agreement_phrases(self) -> list[str]:
        return list(self.rows[0].agreement_phrases) if self.rows else []

    def comparison_sources(self, labels: Optional[dict[str, str]] = None) -> list[SourceText]:
        """
        One source per distinct bill type, first row wins.

        Rows without source text are skipped so an empty version never
        claims a bill type ahead of a populated one.
        """
        sources: dict[str, SourceText] = {}
        for row in self.rows:
            if not row.source_full_section_text:
                continue
            if row.source_bill_type in sources:
                continue
            sources[row.source_bill_type] = SourceText(
                text=row.source_full_section_text,
                label=source_label(row.source_bill_type, labels),
            )
        return list(sources.values())


# =============================================================================
# DIFF RESULTS
# =============================================================================

class TokenKind(str, Enum):
    RETAINED = "retained"
    REMOVED = "removed"
    ADDED = "added"


@dataclass(frozen=True)
class DiffToken:
    value: str
    kind: TokenKind


@dataclass(frozen=True)
class Span:
    """A styled run of text inside one rendered view."""
    text: str
    kind: TokenKind = TokenKind.RETAINED

    def to_dict(self) -> dict:
        return {"text": self.text, "kind": self.kind.value}


@dataclass
class Redline:
    """Two-view rendering of a single diff.

    no_content is set when neither side had any text; that state is
    distinct from identical."""
    source_view: list[Span] = field(default_factory=list)
    final_view: list[Span] = field(default_factory=list)
    change_count: int = 0
    identical: bool = False
    no_content: bool = False
    deletions: int = 0
    additions: int = 0

    @classmethod
    def empty(cls) -> "Redline":
        return cls(no_content=True)


@dataclass
class Panel:
    label: str
    role: str  # "source" or "final"
    spans: list[Span] = field(default_factory=list)
    change_count: int = 0

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "role": self.role,
            "change_count": self.change_count,
            "spans": [span.to_dict() for span in self.spans],
        }


@dataclass
class ComparisonPayload:
    """Structured multi-panel comparison: N source panels then one final panel."""
    panels: list[Panel] = field(default_factory=list)
    change_count: int = 0
    identical: bool = False
    no_content: bool = False
    agreement_phrases: list[str] = field(default_factory=list)
    final_label: str = DEFAULT_CONFIG["labels"]["final"]

    @classmethod
    def empty(
        cls,
        agreement_phrases: Optional[list[str]] = None,
        final_label: Optional[str] = None,
    ) -> "ComparisonPayload":
        return cls(
            no_content=True,
            agreement_phrases=list(agreement_phrases or []),
            final_label=final_label or DEFAULT_CONFIG["labels"]["final"],
        )

    @property
    def source_panels(self) -> list[Panel]:
        return [p for p in self.panels if p.role == "source"]

    @property
    def final_panel(self) -> Optional[Panel]:
        for panel in self.panels:
            if panel.role == "final":
                return panel
        return None

    @property
    def source_labels(self) -> list[str]:
        return [p.label for p in self.source_panels]

    @property
    def status_message(self) -> str:
        if self.no_content:
            return "No text available for comparison"
        if self.identical:
            return "No differences found - all texts are identical"
        plural = "s" if self.change_count != 1 else ""
        return f"{self.change_count} total change{plural} detected across all sources"

    def to_dict(self) -> dict:
        return {
            "panels": [panel.to_dict() for panel in self.panels],
            "change_count": self.change_count,
            "identical": self.identical,
            "no_content": self.no_content,
            "agreement_phrases": list(self.agreement_phrases),
            "final_label": self.final_label,
            "status_message": self.status_message,
        }
