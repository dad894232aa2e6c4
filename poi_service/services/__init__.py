"""POI ingestion pipeline and query services"""
from poi_service.services.envelope import OutcomeKind, build_envelope, build_err, build_ok
from poi_service.services.ingestion import PoiIngestionService
from poi_service.services.query import PoiQueryService, QueryResult
from poi_service.services.replace_engine import BatchReplaceEngine
from poi_service.services.row_parser import parse_row
from poi_service.services.validator import ValidationResult, validate_records

__all__ = [
    "OutcomeKind",
    "build_envelope",
    "build_ok",
    "build_err",
    "PoiIngestionService",
    "PoiQueryService",
    "QueryResult",
    "BatchReplaceEngine",
    "parse_row",
    "ValidationResult",
    "validate_records",
]
