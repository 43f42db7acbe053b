# plant_identifier/services/prompt.py
"""Fixed instruction and response schema sent to the model.

RESPONSE_SCHEMA only asks the provider for a shape; the answer is validated
again against ``plant_identifier.models.plant.Plant`` before use.
"""
from typing import Any, Dict

from plant_identifier.i18n import get_messages

_STRING_LIST: Dict[str, Any] = {"type": "ARRAY", "items": {"type": "STRING"}}

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "identified": {"type": "BOOLEAN"},
        "not_a_plant": {"type": "BOOLEAN"},
        "confidence": {"type": "STRING", "enum": ["high", "medium", "low"]},
        "name": {
            "type": "OBJECT",
            "properties": {
                "common": {"type": "STRING"},
                "scientific": {"type": "STRING"},
                "family": {"type": "STRING"},
            },
            "required": ["common", "scientific", "family"],
        },
        "description": {"type": "STRING"},
        "toxicity": {
            "type": "OBJECT",
            "properties": {
                "is_toxic": {"type": "BOOLEAN"},
                "toxic_to": _STRING_LIST,
                "dangerous_parts": _STRING_LIST,
                "symptoms": _STRING_LIST,
                "severity": {
                    "type": "STRING",
                    "enum": ["none", "mild", "moderate", "severe", "fatal"],
                },
            },
            "required": ["is_toxic", "toxic_to", "dangerous_parts", "symptoms", "severity"],
        },
        "edibility": {
            "type": "OBJECT",
            "properties": {
                "is_edible": {"type": "BOOLEAN"},
                "edible_parts": _STRING_LIST,
                "preparation": {"type": "STRING"},
                "warnings": _STRING_LIST,
            },
            "required": ["is_edible", "edible_parts", "preparation", "warnings"],
        },
    },
    "required": [
        "identified",
        "not_a_plant",
        "confidence",
        "name",
        "description",
        "toxicity",
        "edibility",
    ],
}

PROMPT_TEMPLATE = """You are an expert in botany and plant biology. Analyze the image and identify the plant, flower, tree, shrub, fungus or any other vegetable organism in it.

ALWAYS answer in {language}.

For "description": write 2-3 sentences about the plant.
For "toxic_to": who can be affected (e.g. humans, dogs, cats).
For "dangerous_parts": the dangerous parts (e.g. leaves, seeds, all parts).
For "symptoms": the most common poisoning symptoms.
For "edible_parts": the parts that can be eaten.
For "preparation": how to prepare it for consumption, or an empty string if it is not edible.

If the image contains no plant at all: identified=false, not_a_plant=true, and fill every other field with default values (empty strings, empty lists, confidence "low", severity "none", booleans false)."""


def build_prompt(locale: str) -> str:
    """Return the instruction for ``locale``."""
    return PROMPT_TEMPLATE.format(language=get_messages(locale)["language_name"])
