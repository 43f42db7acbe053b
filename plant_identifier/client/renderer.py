# plant_identifier/client/renderer.py
"""Maps a Plant to display sections. No I/O; the page only draws the result."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from plant_identifier.i18n import get_messages
from plant_identifier.models.plant import Confidence, Plant, Severity


class Tone(str, Enum):
    """Semantic color of a badge"""
    POSITIVE = "positive"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"
    CRITICAL = "critical"


CONFIDENCE_TONE = {
    Confidence.HIGH: Tone.POSITIVE,
    Confidence.MEDIUM: Tone.CAUTION,
    Confidence.LOW: Tone.WARNING,
}

SEVERITY_TONE = {
    Severity.NONE: Tone.POSITIVE,
    Severity.MILD: Tone.CAUTION,
    Severity.MODERATE: Tone.WARNING,
    Severity.SEVERE: Tone.DANGER,
    Severity.FATAL: Tone.CRITICAL,
}


@dataclass(frozen=True)
class Badge:
    text: str
    tone: Tone


@dataclass(frozen=True)
class TagList:
    label: str
    items: Tuple[str, ...]
    empty_text: str

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class Placeholder:
    title: str
    hint: str


@dataclass(frozen=True)
class IdentityHeader:
    common_name: str
    scientific_name: str
    family: str
    confidence: Badge
    description: str


@dataclass(frozen=True)
class ToxicitySection:
    title: str
    toxic: Badge
    severity: Badge
    # Empty unless the plant is toxic
    details: Tuple[TagList, ...] = ()


@dataclass(frozen=True)
class EdibilitySection:
    title: str
    edible: Badge
    edible_parts: Optional[TagList] = None
    preparation_label: str = ""
    preparation: Optional[str] = None
    warnings_label: str = ""
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PlantView:
    placeholder: Optional[Placeholder] = None
    header: Optional[IdentityHeader] = None
    toxicity: Optional[ToxicitySection] = None
    edibility: Optional[EdibilitySection] = None


def _tags(label: str, items: Sequence[str], empty_text: str) -> TagList:
    # Duplicates from the model are kept as they came
    return TagList(label=label, items=tuple(items), empty_text=empty_text)


def render_header(plant: Plant, messages: Dict[str, str]) -> IdentityHeader:
    level = messages[f"confidence_{plant.confidence.value}"]
    return IdentityHeader(
        common_name=plant.name.common,
        scientific_name=plant.name.scientific,
        family=plant.name.family,
        confidence=Badge(messages["confidence"].format(level=level), CONFIDENCE_TONE[plant.confidence]),
        description=plant.description,
    )


def render_toxicity(plant: Plant, messages: Dict[str, str]) -> ToxicitySection:
    toxicity = plant.toxicity
    severity_level = messages[f"severity_{toxicity.severity.value}"]
    details: Tuple[TagList, ...] = ()
    if toxicity.is_toxic:
        details = (
            _tags(messages["toxic_to"], toxicity.toxic_to, messages["not_informed"]),
            _tags(messages["dangerous_parts"], toxicity.dangerous_parts, messages["not_informed"]),
            _tags(messages["symptoms"], toxicity.symptoms, messages["no_symptoms"]),
        )
    return ToxicitySection(
        title=messages["toxicity_title"],
        toxic=Badge(
            messages["toxic"] if toxicity.is_toxic else messages["not_toxic"],
            Tone.DANGER if toxicity.is_toxic else Tone.POSITIVE,
        ),
        severity=Badge(messages["severity"].format(level=severity_level), SEVERITY_TONE[toxicity.severity]),
        details=details,
    )


def render_edibility(plant: Plant, messages: Dict[str, str]) -> EdibilitySection:
    edibility = plant.edibility
    edible_parts = None
    preparation = None
    if edibility.is_edible:
        edible_parts = _tags(messages["edible_parts"], edibility.edible_parts, messages["not_informed"])
        preparation = edibility.preparation or None
    return EdibilitySection(
        title=messages["edibility_title"],
        edible=Badge(
            messages["edible"] if edibility.is_edible else messages["not_edible"],
            Tone.POSITIVE if edibility.is_edible else Tone.DANGER,
        ),
        edible_parts=edible_parts,
        preparation_label=messages["preparation"],
        preparation=preparation,
        warnings_label=messages["warnings"],
        # Shown whenever present, edible or not
        warnings=tuple(edibility.warnings),
    )


def render_plant(plant: Plant, messages: Optional[Dict[str, str]] = None) -> PlantView:
    """Build the view for ``plant``; a non-plant image only gets the placeholder."""
    messages = messages or get_messages()
    if plant.not_a_plant:
        return PlantView(placeholder=Placeholder(messages["no_plant_title"], messages["no_plant_hint"]))
    return PlantView(
        header=render_header(plant, messages),
        toxicity=render_toxicity(plant, messages),
        edibility=render_edibility(plant, messages),
    )
