# plant_identifier/api/__init__.py
# Import the router
from plant_identifier.api.routes import router
