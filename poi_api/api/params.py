"""Query string and request body parsing for POI endpoints."""
import math
from typing import Optional

from poi_api.errors import InvalidParameters, InvalidCoordinates

POI_FIELDS = ('name', 'description', 'latitude', 'longitude', 'tags', 'rating')
NUMERIC_FIELDS = ('latitude', 'longitude', 'rating')


def parse_number(value) -> Optional[float]:
    """Parse a finite float, returning None if the value is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_positive_int(args, name: str, default: int) -> int:
    raw = args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidParameters(f'{name} must be a positive integer')
    if value < 1:
        raise InvalidParameters(f'{name} must be a positive integer')
    return value


def parse_pagination(args, default_limit: int, max_limit: int) -> tuple[int, int]:
    """Return (page, limit) with limit capped at max_limit."""
    page = parse_positive_int(args, 'page', 1)
    limit = parse_positive_int(args, 'limit', default_limit)
    return page, min(limit, max_limit)


def parse_nearby(args, default_radius_km: float) -> tuple[float, float, float]:
    """
    Validate nearby-search query parameters.

    Returns:
        Tuple of (lat, lng, radius_km)

    Raises:
        InvalidParameters: lat/lng missing or not numeric, radius not numeric
        InvalidCoordinates: lat/lng outside their geographic range
    """
    lat = parse_number(args.get('lat'))
    lng = parse_number(args.get('lng'))
    if lat is None or lng is None:
        raise InvalidParameters('lat and lng are required numeric query params')

    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise InvalidCoordinates()

    raw_radius = args.get('radius')
    if raw_radius is None:
        return lat, lng, default_radius_km

    radius = parse_number(raw_radius)
    if radius is None:
        raise InvalidParameters('radius must be a number (kilometers)')
    return lat, lng, radius


def parse_poi_payload(data, partial: bool = False) -> dict:
    """
    Validate a POI JSON body and return only the recognized fields it contains.

    On create (partial=False) name is required. On update every field is
    optional, but a supplied name must still be non-empty.
    """
    if not isinstance(data, dict):
        raise InvalidParameters('Request body must be a JSON object')

    fields = {key: data[key] for key in POI_FIELDS if key in data}

    if 'name' in fields or not partial:
        name = fields.get('name')
        if not isinstance(name, str) or not name.strip():
            raise InvalidParameters('name is required')

    description = fields.get('description')
    if description is not None and not isinstance(description, str):
        raise InvalidParameters('description must be a string')

    for key in NUMERIC_FIELDS:
        if fields.get(key) is None:
            continue
        number = parse_number(fields[key])
        if number is None:
            raise InvalidParameters(f'{key} must be a number')
        fields[key] = number

    if 'tags' in fields:
        tags = fields['tags']
        if tags is None:
            fields['tags'] = []
        elif not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise InvalidParameters('tags must be an array of strings')

    return fields
