# plant_identifier/models/__init__.py
# Imports for easier usage
from plant_identifier.models.plant import (
    Confidence,
    Edibility,
    ErrorResponse,
    IdentifyRequest,
    IdentifyResponse,
    Plant,
    PlantName,
    Severity,
    Toxicity,
)
