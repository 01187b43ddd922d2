"""OpenAPI template shared by the endpoint docstrings."""

POI_PROPERTIES = {
    'name': {'type': 'string', 'example': 'Taj Mahal'},
    'description': {'type': 'string'},
    'latitude': {'type': 'number', 'example': 27.175},
    'longitude': {'type': 'number', 'example': 78.0422},
    'tags': {'type': 'array', 'items': {'type': 'string'}},
    'rating': {'type': 'number'},
}

SWAGGER_TEMPLATE = {
    'info': {
        'title': 'POI API',
        'version': '1.0.0',
        'description': 'CRUD and nearby search for Points of Interest, backed by PostGIS.'
    },
    'definitions': {
        'POIInput': {
            'type': 'object',
            'required': ['name'],
            'properties': POI_PROPERTIES
        },
        'POI': {
            'type': 'object',
            'properties': {
                'id': {'type': 'integer'},
                **POI_PROPERTIES,
                'location': {
                    'type': 'object',
                    'description': 'GeoJSON Point ([lng, lat]) or null',
                    'properties': {
                        'type': {'type': 'string', 'example': 'Point'},
                        'coordinates': {'type': 'array', 'items': {'type': 'number'}}
                    }
                },
                'createdAt': {'type': 'string', 'format': 'date-time'},
                'updatedAt': {'type': 'string', 'format': 'date-time'}
            }
        }
    }
}
