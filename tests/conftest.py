"""Shared fixtures."""
from datetime import datetime, timedelta, timezone

import pytest

from poi_api import create_app
from poi_api.errors import NotFound
from poi_api.models import POI


class FakePOIService:
    """In-memory stand-in for POIService, recording what the handlers asked for."""

    def __init__(self):
        self.pois = {}
        self.calls = []
        self.nearby_results = []
        self.nearby_error = None
        self._next_id = 1
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def add(self, **fields):
        poi = POI(
            id=self._next_id,
            name=fields.get('name'),
            description=fields.get('description'),
            latitude=fields.get('latitude'),
            longitude=fields.get('longitude'),
            tags=fields.get('tags') or [],
            rating=fields.get('rating'),
            created_at=self._clock,
            updated_at=self._clock
        )
        if poi.latitude is not None and poi.longitude is not None:
            poi.set_location(poi.latitude, poi.longitude)
        self.pois[poi.id] = poi
        self._next_id += 1
        self._clock += timedelta(seconds=1)
        return poi

    def get_all(self, page=1, limit=50):
        self.calls.append(('get_all', page, limit))
        ordered = sorted(self.pois.values(), key=lambda p: p.created_at, reverse=True)
        offset = (page - 1) * limit
        return ordered[offset:offset + limit], len(ordered)

    def get_by_id(self, poi_id):
        self.calls.append(('get_by_id', poi_id))
        if poi_id not in self.pois:
            raise NotFound()
        return self.pois[poi_id]

    def create(self, fields):
        self.calls.append(('create', fields))
        return self.add(**fields)

    def update(self, poi_id, fields):
        self.calls.append(('update', poi_id, fields))
        poi = self.get_by_id(poi_id)
        for key, value in fields.items():
            setattr(poi, key, value)
        return poi

    def delete(self, poi_id):
        self.calls.append(('delete', poi_id))
        self.get_by_id(poi_id)
        del self.pois[poi_id]

    def nearby(self, lat, lng, radius_km):
        self.calls.append(('nearby', lat, lng, radius_km))
        if self.nearby_error is not None:
            raise self.nearby_error
        return self.nearby_results


@pytest.fixture
def app():
    """Application configured for testing, with the store replaced by a fake."""
    app = create_app('testing')
    app.extensions['poi_service'] = FakePOIService()
    yield app


@pytest.fixture
def service(app):
    return app.extensions['poi_service']


@pytest.fixture
def client(app):
    return app.test_client()
