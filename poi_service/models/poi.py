"""
Point of Interest Model
"""
import uuid

from sqlalchemy import Column, DateTime, Index, Numeric, String, Uuid, func

from poi_service.database import Base

TITLE_MAX_LENGTH = 500


class Poi(Base):
    """Named geographic point shown on the map"""
    __tablename__ = "poi"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    latitude = Column(Numeric(15, 10), nullable=False)
    longitude = Column(Numeric(15, 10), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_poi_title", "title"),
    )
