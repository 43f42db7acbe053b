from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Confidence(str, Enum):
    """How sure the model is about the identification"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Severity(str, Enum):
    """Severity of a poisoning by the plant"""
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    FATAL = "fatal"


class _Record(BaseModel):
    # strict: no "true" -> True coercion of the model output; frozen: immutable after validation
    model_config = ConfigDict(strict=True, frozen=True)


class PlantName(_Record):
    common: str = Field(..., description="Popular name in the response language")
    scientific: str = Field(..., description="Binomial scientific name")
    family: str = Field(..., description="Botanical family")


class Toxicity(_Record):
    is_toxic: bool
    toxic_to: List[str] = Field(..., description="Who can be affected, e.g. humans, dogs, cats")
    dangerous_parts: List[str]
    symptoms: List[str]
    severity: Severity


class Edibility(_Record):
    is_edible: bool
    edible_parts: List[str]
    preparation: str = Field(..., description="How to prepare, empty when not edible")
    warnings: List[str]


class Plant(_Record):
    """Identification of the plant in one image"""
    identified: bool
    not_a_plant: bool
    confidence: Confidence
    name: PlantName
    description: str = Field(..., description="Two or three sentences about the plant")
    toxicity: Toxicity
    edibility: Edibility

    @model_validator(mode="after")
    def check_identified_name(self) -> "Plant":
        if self.identified and not self.not_a_plant:
            if not (self.name.common and self.name.scientific and self.name.family):
                raise ValueError("identified plant must carry common, scientific and family names")
        return self


class IdentifyRequest(BaseModel):
    """Body of POST /api/identify"""
    image: Optional[str] = Field(None, description="Base64 image data without the data-URI prefix")
    mimeType: Optional[str] = Field(None, description="One of image/jpeg, image/png, image/gif, image/webp")


class IdentifyResponse(BaseModel):
    """Successful identification envelope"""
    plant: Plant


class ErrorResponse(BaseModel):
    error: str = Field(..., description="User-facing message")
