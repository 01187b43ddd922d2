"""Flask extensions initialization."""
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flasgger import Swagger

from poi_api.swagger import SWAGGER_TEMPLATE

# Database
db = SQLAlchemy()

# Migrations
migrate = Migrate()

# Swagger/OpenAPI
swagger = Swagger(template=SWAGGER_TEMPLATE)
