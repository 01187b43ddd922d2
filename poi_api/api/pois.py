"""POI endpoints."""
from flask import current_app, jsonify, request
from poi_api.api import bp
from poi_api.api.params import parse_nearby, parse_pagination, parse_poi_payload
from poi_api.services import get_poi_service


@bp.route('/', methods=['GET'], strict_slashes=False)
def list_pois():
    """
    List POIs, newest first
    ---
    tags:
      - POIs
    parameters:
      - name: page
        in: query
        type: integer
        required: false
        default: 1
        description: 1-based page number
      - name: limit
        in: query
        type: integer
        required: false
        default: 50
        description: Page size (max 500)
    responses:
      200:
        description: One page of POIs
        schema:
          type: object
          properties:
            data:
              type: array
              items:
                $ref: '#/definitions/POI'
            page:
              type: integer
            limit:
              type: integer
            total:
              type: integer
              description: Total number of POIs
      400:
        description: page or limit is not a positive integer
    """
    page, limit = parse_pagination(
        request.args,
        default_limit=current_app.config['DEFAULT_PAGE_SIZE'],
        max_limit=current_app.config['MAX_PAGE_SIZE']
    )

    pois, total = get_poi_service().get_all(page=page, limit=limit)

    return jsonify({
        'data': [poi.to_dict() for poi in pois],
        'page': page,
        'limit': limit,
        'total': total
    }), 200


@bp.route('/nearby', methods=['GET'])
def nearby_pois():
    """
    Find POIs within a radius, nearest first
    ---
    tags:
      - POIs
    parameters:
      - name: lat
        in: query
        type: number
        required: true
        description: Latitude (-90 to 90)
      - name: lng
        in: query
        type: number
        required: true
        description: Longitude (-180 to 180)
      - name: radius
        in: query
        type: number
        required: false
        default: 5
        description: Search radius in kilometers
    responses:
      200:
        description: Up to 200 POIs ordered by geodesic distance
        schema:
          type: array
          items:
            allOf:
              - $ref: '#/definitions/POI'
              - type: object
                properties:
                  distance:
                    type: number
                    description: Distance in meters
      400:
        description: Missing, malformed or out-of-range parameters
      500:
        description: PostGIS unavailable or database failure
    """
    lat, lng, radius_km = parse_nearby(
        request.args,
        default_radius_km=current_app.config['NEARBY_DEFAULT_RADIUS_KM']
    )

    results = get_poi_service().nearby(lat, lng, radius_km)

    return jsonify(results), 200


@bp.route('/<int:poi_id>', methods=['GET'])
def get_poi(poi_id):
    """
    Get a single POI by ID
    ---
    tags:
      - POIs
    parameters:
      - name: poi_id
        in: path
        type: integer
        required: true
    responses:
      200:
        description: POI details
        schema:
          $ref: '#/definitions/POI'
      404:
        description: POI not found
    """
    poi = get_poi_service().get_by_id(poi_id)
    return jsonify(poi.to_dict()), 200


@bp.route('/', methods=['POST'], strict_slashes=False)
def create_poi():
    """
    Create a POI
    ---
    tags:
      - POIs
    parameters:
      - name: body
        in: body
        required: true
        schema:
          $ref: '#/definitions/POIInput'
    responses:
      201:
        description: Created POI
        schema:
          $ref: '#/definitions/POI'
      400:
        description: Invalid body
    """
    fields = parse_poi_payload(request.get_json(silent=True))
    poi = get_poi_service().create(fields)
    return jsonify(poi.to_dict()), 201


@bp.route('/<int:poi_id>', methods=['PUT'])
def update_poi(poi_id):
    """
    Update a POI (partial or full)
    ---
    tags:
      - POIs
    description: >
      Only the supplied fields are written. The location geometry is
      recomputed only when both latitude and longitude are supplied.
    parameters:
      - name: poi_id
        in: path
        type: integer
        required: true
      - name: body
        in: body
        required: true
        schema:
          $ref: '#/definitions/POIInput'
    responses:
      200:
        description: Updated POI
        schema:
          $ref: '#/definitions/POI'
      400:
        description: Invalid body
      404:
        description: POI not found
    """
    fields = parse_poi_payload(request.get_json(silent=True), partial=True)
    poi = get_poi_service().update(poi_id, fields)
    return jsonify(poi.to_dict()), 200


@bp.route('/<int:poi_id>', methods=['DELETE'])
def delete_poi(poi_id):
    """
    Delete a POI
    ---
    tags:
      - POIs
    parameters:
      - name: poi_id
        in: path
        type: integer
        required: true
    responses:
      204:
        description: POI deleted
      404:
        description: POI not found
    """
    get_poi_service().delete(poi_id)
    return '', 204
