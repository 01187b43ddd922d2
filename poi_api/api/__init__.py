"""POI API blueprint."""
from flask import Blueprint

bp = Blueprint('pois', __name__)

from poi_api.api import pois  # noqa: E402,F401
