"""
The fixed structured-output contract shared by the analysis and modification calls.

Every field is an English/Chinese pair. The same field list drives both the
schema sent to Gemini and the pydantic model used to validate its reply.
"""
import json
from typing import Any, Dict, List, Tuple

from google.genai import types
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ANALYSIS_ERROR_MESSAGE = "Failed to analyze image. Please try again."

PROMPT_FIELDS: List[Tuple[str, str]] = [
    ("subject", "The main subject(s) of the image in detail."),
    ("style", "The artistic style, medium, or aesthetic."),
    ("lighting", "The lighting setup and mood."),
    ("composition", "The framing and composition."),
    ("shootingAngle", "Shooting angle (e.g., low angle, high angle, eye level)."),
    ("lensSettings", "Lens settings (e.g., aperture, depth of field)."),
    ("focalLength", "Focal length (e.g., 24mm, 50mm, 85mm, macro)."),
    ("imageDimensions", "Image dimensions or aspect ratio (e.g., 16:9, 4:3, 1:1)."),
    ("colors", "The dominant color palette and tones."),
    ("fullPrompt", "A complete, cohesive prompt combining all these elements."),
]

PROMPT_FIELD_NAMES = [name for name, _ in PROMPT_FIELDS]
LANGUAGES = ("en", "zh")


def _field_schema(description: str) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        description=description,
        properties={lang: types.Schema(type=types.Type.STRING) for lang in LANGUAGES},
        required=list(LANGUAGES),
    )


PROMPT_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={name: _field_schema(description) for name, description in PROMPT_FIELDS},
    required=PROMPT_FIELD_NAMES,
    property_ordering=PROMPT_FIELD_NAMES,
)


class BilingualText(BaseModel):
    en: str
    zh: str


class PromptResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    subject: BilingualText
    style: BilingualText
    lighting: BilingualText
    composition: BilingualText
    shooting_angle: BilingualText
    lens_settings: BilingualText
    focal_length: BilingualText
    image_dimensions: BilingualText
    colors: BilingualText
    full_prompt: BilingualText

    def to_json_dict(self) -> Dict[str, Dict[str, str]]:
        return self.model_dump(by_alias=True)


def parse_prompt_result(raw_text: str) -> Dict[str, Dict[str, str]]:
    """
    Parses model output into a ten-field result dict.

    Raises json.JSONDecodeError or pydantic.ValidationError when the text is
    not a complete prompt result. Unknown keys are dropped.
    """
    payload = json.loads(raw_text.strip() or "{}")
    return PromptResult.model_validate(payload).to_json_dict()


def error_result(message: str = ANALYSIS_ERROR_MESSAGE) -> Dict[str, str]:
    return {"error": message}


def is_error_result(result: Any) -> bool:
    return isinstance(result, dict) and "error" in result
