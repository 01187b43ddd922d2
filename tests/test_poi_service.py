"""POIService tests with a mocked session (no database needed)."""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from geoalchemy2.shape import to_shape
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from poi_api.errors import NotFound, SpatialCapabilityUnavailable, StoreFailure
from poi_api.models import POI
from poi_api.services import POIService


def make_poi(**fields):
    now = datetime(2026, 3, 1, tzinfo=timezone.utc)
    poi = POI(id=fields.pop('id', 1), created_at=now, updated_at=now, tags=[], **fields)
    if poi.latitude is not None and poi.longitude is not None:
        poi.set_location(poi.latitude, poi.longitude)
    return poi


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def service(session):
    return POIService(session)


class TestCreate:

    def test_location_derived_from_coordinates(self, service, session):
        poi = service.create({'name': 'MG Road', 'latitude': 12.9716, 'longitude': 77.5946})
        session.add.assert_called_once_with(poi)
        session.commit.assert_called_once()

        point = to_shape(poi.location)
        # Geometry converts back to exactly the supplied coordinates
        assert (point.y, point.x) == (12.9716, 77.5946)
        assert poi.location.srid == 4326

    def test_no_location_without_both_coordinates(self, service):
        poi = service.create({'name': 'Half', 'longitude': 77.5946})
        assert poi.location is None
        assert poi.tags == []

    def test_store_failure_rolls_back(self, service, session):
        session.commit.side_effect = OperationalError('INSERT', {}, Exception('server closed the connection'))
        with pytest.raises(StoreFailure) as excinfo:
            service.create({'name': 'Fort'})
        session.rollback.assert_called_once()
        assert excinfo.value.message == 'Failed to create POI'
        assert 'server closed the connection' in excinfo.value.detail


class TestUpdate:

    def test_rating_only_keeps_location(self, service, session):
        poi = make_poi(name='Fort', latitude=10.0, longitude=20.0)
        location = poi.location
        session.get.return_value = poi

        updated = service.update(1, {'rating': 4.0})

        assert updated.rating == 4.0
        assert updated.location is location
        session.commit.assert_called_once()

    def test_both_coordinates_rederive_location(self, service, session):
        poi = make_poi(name='Fort', latitude=10.0, longitude=20.0)
        session.get.return_value = poi

        service.update(1, {'latitude': 11.5, 'longitude': 21.5})

        point = to_shape(poi.location)
        assert (point.y, point.x) == (11.5, 21.5)

    def test_single_coordinate_keeps_previous_location(self, service, session):
        poi = make_poi(name='Fort', latitude=10.0, longitude=20.0)
        session.get.return_value = poi

        service.update(1, {'latitude': 50.0})

        assert poi.latitude == 50.0
        point = to_shape(poi.location)
        assert (point.y, point.x) == (10.0, 20.0)

    def test_missing_poi(self, service, session):
        session.get.return_value = None
        with pytest.raises(NotFound):
            service.update(99, {'rating': 1.0})
        session.commit.assert_not_called()


class TestGetAndDelete:

    def test_get_by_id_not_found(self, service, session):
        session.get.return_value = None
        with pytest.raises(NotFound):
            service.get_by_id(5)
        session.get.assert_called_once_with(POI, 5)

    def test_delete(self, service, session):
        poi = make_poi(name='Fort')
        session.get.return_value = poi
        service.delete(1)
        session.delete.assert_called_once_with(poi)
        session.commit.assert_called_once()

    def test_delete_missing(self, service, session):
        session.get.return_value = None
        with pytest.raises(NotFound):
            service.delete(1)
        session.delete.assert_not_called()

    def test_get_all_offset(self, service, session):
        query = session.query.return_value
        query.count.return_value = 25
        ordered = query.order_by.return_value
        ordered.limit.return_value.offset.return_value.all.return_value = []

        pois, total = service.get_all(page=3, limit=10)

        assert total == 25
        ordered.limit.assert_called_once_with(10)
        ordered.limit.return_value.offset.assert_called_once_with(20)


class TestNearby:

    def test_probe_failure_skips_query(self, service, session):
        session.execute.side_effect = ProgrammingError(
            'SELECT postgis_version()', {}, Exception('function postgis_version() does not exist')
        )
        with pytest.raises(SpatialCapabilityUnavailable):
            service.nearby(27.17, 78.04, 5)
        session.query.assert_not_called()
        session.rollback.assert_called_once()

    def test_query_failure_is_store_failure(self, service, session):
        session.query.side_effect = OperationalError('SELECT', {}, Exception('timeout'))
        with pytest.raises(StoreFailure) as excinfo:
            service.nearby(27.17, 78.04, 5)
        assert excinfo.value.message == 'Failed to fetch nearby POIs'

    def test_rows_keep_store_order_and_get_distance(self, service, session):
        near = make_poi(id=1, name='Taj Mahal', latitude=27.1750, longitude=78.0422)
        far = make_poi(id=2, name='Agra Fort', latitude=27.1795, longitude=78.0211)
        chain = session.query.return_value.filter.return_value.filter.return_value.order_by.return_value
        chain.limit.return_value.all.return_value = [(near, 661.25), (far, 2400)]

        results = service.nearby(27.17, 78.04, 5)

        assert [r['name'] for r in results] == ['Taj Mahal', 'Agra Fort']
        assert results[0]['distance'] == 661.25
        assert isinstance(results[1]['distance'], float)
        assert results[0]['location'] == {'type': 'Point', 'coordinates': [78.0422, 27.175]}
        chain.limit.assert_called_once_with(200)

    def test_query_uses_bound_parameters(self):
        # A bare Session builds the statement without connecting
        service = POIService(Session())
        query = service.build_nearby_query(27.1234, 78.5678, 2.5)
        compiled = query.statement.compile(dialect=postgresql.dialect())
        sql = str(compiled)

        assert '27.1234' not in sql
        assert '78.5678' not in sql
        assert 'ST_DWithin' in sql
        assert 'geography' in sql.lower()
        assert 'ORDER BY distance' in sql
        params = list(compiled.params.values())
        assert 27.1234 in params
        assert 78.5678 in params
        assert 2500.0 in params
        assert 200 in params
