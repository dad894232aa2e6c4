"""Record validator: split candidates into accepted records and row diagnostics"""
from dataclasses import dataclass, field
from typing import List, Sequence

from poi_service.models.poi import TITLE_MAX_LENGTH
from poi_service.schemas.poi import CandidateRecord

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


@dataclass
class ValidationResult:
    accepted: List[CandidateRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def record_issues(record: CandidateRecord) -> List[str]:
    """Every reason the record cannot be stored, empty when it is valid."""
    issues = []
    title = (record.title or "").strip()
    if not title:
        issues.append("title is empty")
    elif len(title) > TITLE_MAX_LENGTH:
        issues.append("title is too long")
    # Exact zero is treated as a missing coordinate, including points on the
    # equator or prime meridian.
    if record.latitude == 0:
        issues.append("latitude is invalid")
    if record.longitude == 0:
        issues.append("longitude is invalid")
    if not LATITUDE_RANGE[0] <= record.latitude <= LATITUDE_RANGE[1]:
        issues.append("latitude is out of range")
    if not LONGITUDE_RANGE[0] <= record.longitude <= LONGITUDE_RANGE[1]:
        issues.append("longitude is out of range")
    return issues


def validate_records(records: Sequence[CandidateRecord]) -> ValidationResult:
    result = ValidationResult()
    for row_number, record in enumerate(records, start=1):
        issues = record_issues(record)
        if issues:
            result.errors.append(f"Row {row_number}: {', '.join(issues)}")
        else:
            result.accepted.append(record)
    return result
