"""Services module."""
from poi_api.services.poi_service import POIService, get_poi_service

__all__ = ['POIService', 'get_poi_service']
