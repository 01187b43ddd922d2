"""Database models."""
from poi_api.models.poi import POI

__all__ = ['POI']
