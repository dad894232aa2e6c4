"""
POI Schemas
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer

from poi_service.utils.datetime_utils import serialize_datetime_utc


@dataclass(frozen=True)
class CandidateRecord:
    """One parsed upload row, not yet validated"""
    title: str
    latitude: float
    longitude: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


class PoiResponse(BaseModel):
    """Persisted POI as returned to the map client"""
    id: uuid.UUID
    title: str
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    
    class Config:
        from_attributes = True

    @field_serializer("created_at")
    def _serialize_created_at(self, value: Optional[datetime]):
        return serialize_datetime_utc(value) if value else None
