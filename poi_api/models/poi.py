"""POI (Point of Interest) model with PostGIS support."""
from datetime import datetime, timezone
from geoalchemy2 import Geometry
from geoalchemy2.shape import to_shape, from_shape
from shapely.geometry import Point, mapping
from sqlalchemy.dialects.postgresql import JSONB
from poi_api.extensions import db

SRID = 4326


def utcnow():
    return datetime.now(timezone.utc)


class POI(db.Model):
    """Point of Interest with scalar coordinates and a derived PostGIS point."""

    __tablename__ = 'pois'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)

    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)

    # SRID 4326 = WGS84 (standard GPS coordinates). Kept in sync with
    # latitude/longitude on writes; distance queries cast it to geography.
    location = db.Column(Geometry(geometry_type='POINT', srid=SRID))

    tags = db.Column(JSONB, nullable=False, default=list)
    rating = db.Column(db.Float)

    # Timestamps
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Spatial index is automatically created for Geometry columns

    @classmethod
    def create_point(cls, lat: float, lon: float):
        """Create a PostGIS POINT from lat/lon."""
        point = Point(lon, lat)  # Note: PostGIS uses (lon, lat) order
        return from_shape(point, srid=SRID)

    def set_location(self, lat: float, lon: float) -> None:
        """Set location from lat/lon coordinates."""
        self.location = self.create_point(lat, lon)

    def get_location_geojson(self):
        """Get location as a GeoJSON Point."""
        if self.location is not None:
            return mapping(to_shape(self.location))
        return None

    def to_dict(self) -> dict:
        """Convert to API response format."""
        location = self.get_location_geojson()
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'location': {
                'type': location['type'],
                'coordinates': list(location['coordinates'])
            } if location else None,
            'tags': self.tags if self.tags is not None else [],
            'rating': self.rating,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self) -> str:
        return f'<POI {self.name}>'
