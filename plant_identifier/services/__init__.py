# plant_identifier/services/__init__.py
# Import the identifier service
from plant_identifier.services.identifier import PlantIdentifierService, get_identifier_service
