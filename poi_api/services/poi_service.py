"""POI Service - business logic for POI operations."""
import logging

from flask import current_app
from sqlalchemy import cast, func, text
from sqlalchemy.exc import SQLAlchemyError
from geoalchemy2 import Geography
from geoalchemy2.functions import ST_DWithin, ST_Distance, ST_MakePoint

from poi_api.errors import NotFound, SpatialCapabilityUnavailable, StoreFailure
from poi_api.models import POI
from poi_api.models.poi import SRID

logger = logging.getLogger(__name__)

# Fails when the postgis extension is missing from the connected database
SPATIAL_PROBE = text('SELECT postgis_version()')

DEFAULT_NEARBY_LIMIT = 200


class POIService:
    """
    Store access for POIs.

    Built once per application with the session it should use and
    handed to the request handlers via ``get_poi_service()``.
    """

    def __init__(self, session, nearby_limit: int = DEFAULT_NEARBY_LIMIT):
        self.session = session
        self.nearby_limit = nearby_limit

    def _store_failure(self, message: str, exc: SQLAlchemyError) -> StoreFailure:
        self.session.rollback()
        logger.error('%s: %s', message, exc, exc_info=exc)
        return StoreFailure(message, detail=str(exc))

    def get_all(self, page: int = 1, limit: int = 50) -> tuple[list[POI], int]:
        """
        Get one page of POIs, newest first.

        Returns:
            Tuple of (list of POIs, total count)
        """
        offset = (page - 1) * limit
        try:
            query = self.session.query(POI)
            total = query.count()
            pois = (
                query.order_by(POI.created_at.desc(), POI.id.desc())
                .limit(limit)
                .offset(offset)
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._store_failure('Failed to fetch POIs', exc) from exc
        return pois, total

    def get_by_id(self, poi_id: int) -> POI:
        """Get a single POI by ID, raising NotFound if absent."""
        try:
            poi = self.session.get(POI, poi_id)
        except SQLAlchemyError as exc:
            raise self._store_failure('Failed to fetch POI', exc) from exc
        if poi is None:
            raise NotFound()
        return poi

    def create(self, fields: dict) -> POI:
        """Create a POI; location is derived when both coordinates are given."""
        poi = POI(
            name=fields.get('name'),
            description=fields.get('description'),
            latitude=fields.get('latitude'),
            longitude=fields.get('longitude'),
            tags=fields.get('tags') or [],
            rating=fields.get('rating')
        )
        if poi.latitude is not None and poi.longitude is not None:
            poi.set_location(poi.latitude, poi.longitude)

        try:
            self.session.add(poi)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._store_failure('Failed to create POI', exc) from exc

        logger.info('Created POI %s', poi.id)
        return poi

    def update(self, poi_id: int, fields: dict) -> POI:
        """
        Apply the supplied fields to an existing POI.

        The stored location is re-derived only when this update carries both
        latitude and longitude. Otherwise the previous geometry is kept as-is,
        even if one of the scalar coordinates changes.
        """
        poi = self.get_by_id(poi_id)

        for key, value in fields.items():
            setattr(poi, key, value)

        latitude = fields.get('latitude')
        longitude = fields.get('longitude')
        if latitude is not None and longitude is not None:
            poi.set_location(latitude, longitude)

        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._store_failure('Failed to update POI', exc) from exc

        logger.info('Updated POI %s', poi.id)
        return poi

    def delete(self, poi_id: int) -> None:
        """Hard-delete a POI, raising NotFound if absent."""
        poi = self.get_by_id(poi_id)
        try:
            self.session.delete(poi)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._store_failure('Failed to delete POI', exc) from exc
        logger.info('Deleted POI %s', poi_id)

    def check_spatial_capability(self) -> str:
        """Return the PostGIS version string, or raise SpatialCapabilityUnavailable."""
        try:
            return self.session.execute(SPATIAL_PROBE).scalar()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error('PostGIS capability probe failed: %s', exc)
            raise SpatialCapabilityUnavailable(detail=str(exc)) from exc

    def build_nearby_query(self, lat: float, lng: float, radius_km: float):
        """Query yielding (POI, distance_meters) rows within radius_km, nearest first."""
        # Coordinates and radius are bound parameters, never interpolated
        point = cast(func.ST_SetSRID(ST_MakePoint(lng, lat), SRID), Geography)
        location = cast(POI.location, Geography)
        distance = ST_Distance(location, point).label('distance')

        return (
            self.session.query(POI, distance)
            .filter(POI.location.isnot(None))
            .filter(ST_DWithin(location, point, radius_km * 1000))
            .order_by(distance)
            .limit(self.nearby_limit)
        )

    def nearby(self, lat: float, lng: float, radius_km: float) -> list[dict]:
        """
        Find POIs within radius_km of (lat, lng), nearest first.

        Distances are geodesic (geography cast, WGS84 spheroid) in meters.
        At most ``nearby_limit`` rows are returned.

        Returns:
            List of POI dicts, each with an extra ``distance`` key (meters)
        """
        self.check_spatial_capability()

        try:
            rows = self.build_nearby_query(lat, lng, radius_km).all()
        except SQLAlchemyError as exc:
            raise self._store_failure('Failed to fetch nearby POIs', exc) from exc

        results = []
        for poi, meters in rows:
            item = poi.to_dict()
            item['distance'] = float(meters)
            results.append(item)
        return results


def get_poi_service() -> POIService:
    """Get the POIService bound to the current application."""
    return current_app.extensions['poi_service']
