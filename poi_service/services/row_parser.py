"""
Row parser: one uploaded sheet row -> CandidateRecord

Column labels are matched case-insensitively. When several columns normalize
to the same field, the conventional spellings win in this order: lower case
(``title``), capitalized (``Title``), upper case (``TITLE``), then any other
spelling in column order. Empty cells fall through to the next candidate.
"""
import math
from typing import Any, Mapping

from poi_service.schemas.poi import CandidateRecord

TITLE = "title"
LATITUDE = "latitude"
LONGITUDE = "longitude"


def normalize_label(label: Any) -> str:
    return str(label).strip().casefold()


def _spelling_rank(label: Any, field: str) -> int:
    label = str(label).strip()
    for rank, spelling in enumerate((field, field.capitalize(), field.upper())):
        if label == spelling:
            return rank
    return 3


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def lookup_field(row: Mapping[Any, Any], field: str) -> Any:
    """First non-blank value among the columns that spell ``field``."""
    labels = [label for label in row if normalize_label(label) == field]
    labels.sort(key=lambda label: _spelling_rank(label, field))
    for label in labels:
        value = row[label]
        if not _is_blank(value):
            return value
    return None


def parse_coordinate(value: Any) -> float:
    """Coerce a cell to a float; anything non-numeric or non-finite becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def parse_row(row: Mapping[Any, Any]) -> CandidateRecord:
    title = lookup_field(row, TITLE)
    return CandidateRecord(
        title="" if title is None else str(title).strip(),
        latitude=parse_coordinate(lookup_field(row, LATITUDE)),
        longitude=parse_coordinate(lookup_field(row, LONGITUDE)),
    )
