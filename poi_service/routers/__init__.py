"""API Routers"""
from poi_service.routers import poi

__all__ = ["poi"]
