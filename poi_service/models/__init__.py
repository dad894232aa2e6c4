"""SQLAlchemy Models"""
from poi_service.models.poi import Poi

__all__ = ["Poi"]
