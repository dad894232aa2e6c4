"""Pydantic Schemas"""
from poi_service.schemas.envelope import ApiEnvelope
from poi_service.schemas.poi import CandidateRecord, PoiResponse

__all__ = [
    "ApiEnvelope",
    "CandidateRecord",
    "PoiResponse",
]
