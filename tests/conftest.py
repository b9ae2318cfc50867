"""
Pytest fixtures and configuration.

- Fixtures mirror rows of the bill reference spreadsheet
- No mocks: every engine function is pure
- Each test should be independent and fast
"""
import pytest
from typing import Any
from dotenv import load_dotenv

from redline_core.models import Record, SourceText

load_dotenv()


# =============================================================================
# SAMPLE SECTION TEXT
# =============================================================================

HOUSE_TEXT = (
    "132.Appropriations for military construction.The Secretary of Defense shall "
    "submit a report.(1)not later than 90 days after enactment."
)
SENATE_TEXT = (
    "132. Appropriations for military construction. The Secretary shall submit "
    "a detailed report. (1) not later than 180 days after enactment."
)
FINAL_TEXT = (
    "132. Appropriations for military construction. The Secretary of Defense shall "
    "submit a detailed report. (1) not later than 120 days after enactment."
)


@pytest.fixture
def house_text() -> str:
    return HOUSE_TEXT


@pytest.fixture
def senate_text() -> str:
    return SENATE_TEXT


@pytest.fixture
def final_text() -> str:
    return FINAL_TEXT


@pytest.fixture
def two_sources() -> list[SourceText]:
    return [
        SourceText(text=HOUSE_TEXT, label="House Version"),
        SourceText(text=SENATE_TEXT, label="Senate Version"),
    ]


# =============================================================================
# SAMPLE RECORD FIXTURES
# =============================================================================

@pytest.fixture
def raw_rows() -> list[dict[str, Any]]:
    """Rows as exported from the reference spreadsheet (snake_case columns)."""
    return [
        {
            "header": "Military construction authorization",
            "referenced_section_number": "132",
            "source_bill_type": "HOUSE_RDS",
            "source_full_section_text": HOUSE_TEXT,
            "H.R. 5009 ENR Text": FINAL_TEXT,
            "agreement_phrases": "['Agreed on funding', 'Agreed on timeline']",
            "word_count": 24,
            "reference_complexity": "Single Reference",
        },
        {
            "header": "Military construction authorization",
            "referenced_section_number": "133",
            "source_bill_type": "SENATE_RS",
            "source_full_section_text": SENATE_TEXT,
            "H.R. 5009 ENR Text": None,
            "agreement_phrases": None,
            "word_count": 22,
            "reference_complexity": "No References",
        },
        {
            "header": "Short title",
            "referenced_section_number": "1",
            "source_bill_type": "HOUSE_RDS",
            "source_full_section_text": "1.This Act may be cited as the Defense Act.",
            "H.R. 5009 ENR Text": "1. This Act may be cited as the National Defense Act.",
            "agreement_phrases": [],
        },
    ]


@pytest.fixture
def section_101_records() -> list[Record]:
    return [
        Record(header="Sec 101", referenced_section_number="101", source_bill_type="HOUSE_RDS"),
        Record(header="Sec 101", referenced_section_number="101", source_bill_type="SENATE_RS"),
        Record(header="Sec 99", referenced_section_number="99"),
    ]
