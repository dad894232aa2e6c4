"""POI bulk-ingestion and map query service"""

__version__ = "1.0.0"
