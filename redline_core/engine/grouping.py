import logging
import math
import re
from typing import Any, Iterable, Mapping, Optional, Union

from redline_core.exceptions import RecordParseError
from redline_core.models import Group, Record

logger = logging.getLogger(__name__)

# Groups without a usable section number sort after every numbered group.
MISSING_SECTION_SENTINEL = math.inf

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def section_sort_key(value: Any) -> Union[int, float]:
    """
    Integer value of a section number, reading leading digits only.

    "101" -> 101, "130A" -> 130, 101.0 -> 101; None, NaN and text without a
    leading number -> MISSING_SECTION_SENTINEL.
    """
    if value is None or isinstance(value, bool):
        return MISSING_SECTION_SENTINEL
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return MISSING_SECTION_SENTINEL
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return MISSING_SECTION_SENTINEL
    return int(match.group(1))


def _as_record(row: Union[Record, Mapping], final_text_fields: Optional[Iterable[str]]) -> Record:
    if isinstance(row, Record):
        return row
    return Record.from_dict(dict(row) if isinstance(row, Mapping) else row, final_text_fields)


def group_records(
    records: Iterable[Union[Record, Mapping]],
    final_text_fields: Optional[Iterable[str]] = None,
) -> list[Group]:
    """
    Cluster records into one Group per exact header.

    Runs over the already filtered/sorted record set. The representative
    section number is the first record's; later records only add to
    section_numbers. Groups come back ordered by representative section
    number (stable, non-numeric last).

    Args:
        records: Record objects or raw row mappings
        final_text_fields: Column names holding the final text for raw rows

    Returns:
        Ordered list of Group
    """
    if final_text_fields is not None:
        final_text_fields = tuple(final_text_fields)

    rows_by_header: dict[str, list[Record]] = {}
    for index, row in enumerate(records or []):
        try:
            record = _as_record(row, final_text_fields)
        except RecordParseError:
            logger.warning(f"Skipping unparseable row {index}", exc_info=True)
            continue
        rows_by_header.setdefault(record.header, []).append(record)

    groups = [_build_group(header, rows) for header, rows in rows_by_header.items()]
    ordered = sorted(groups, key=lambda g: section_sort_key(g.representative_section_number))
    logger.debug(f"Grouped records into {len(ordered)} sections")
    return ordered


def _build_group(header: str, rows: list[Record]) -> Group:
    return Group(
        key=header,
        rows=tuple(rows),
        section_numbers=frozenset(r.referenced_section_number for r in rows),
        representative_section_number=rows[0].referenced_section_number,
    )
