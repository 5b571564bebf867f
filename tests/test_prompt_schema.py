"""Prompt schema: the ten-field bilingual contract."""

from __future__ import annotations

import json

from google.genai import types
from pydantic import ValidationError
import pytest

from reverse_prompt.prompt_schema import (
    ANALYSIS_ERROR_MESSAGE,
    PROMPT_FIELD_NAMES,
    PROMPT_RESPONSE_SCHEMA,
    error_result,
    is_error_result,
    parse_prompt_result,
)


def test_field_names_are_the_ten_fixed_keys():
    assert PROMPT_FIELD_NAMES == [
        "subject",
        "style",
        "lighting",
        "composition",
        "shootingAngle",
        "lensSettings",
        "focalLength",
        "imageDimensions",
        "colors",
        "fullPrompt",
    ]


def test_response_schema_requires_every_field_as_en_zh_pair():
    assert PROMPT_RESPONSE_SCHEMA.type == types.Type.OBJECT
    assert PROMPT_RESPONSE_SCHEMA.required == PROMPT_FIELD_NAMES
    for name in PROMPT_FIELD_NAMES:
        field_schema = PROMPT_RESPONSE_SCHEMA.properties[name]
        assert field_schema.required == ["en", "zh"]
        assert set(field_schema.properties) == {"en", "zh"}
        assert field_schema.description


def test_parse_yields_exactly_ten_keys_in_order(sample_result):
    payload = dict(sample_result, extra={"en": "x", "zh": "y"})

    parsed = parse_prompt_result("  " + json.dumps(payload) + "\n")

    assert list(parsed) == PROMPT_FIELD_NAMES
    for value in parsed.values():
        assert set(value) == {"en", "zh"}
        assert all(isinstance(text, str) for text in value.values())
    assert parsed["subject"] == {"en": "A cat", "zh": "一只猫"}


def test_parse_rejects_missing_field(sample_result):
    del sample_result["fullPrompt"]

    with pytest.raises(ValidationError):
        parse_prompt_result(json.dumps(sample_result))


def test_parse_rejects_missing_language(sample_result):
    sample_result["colors"] = {"en": "red"}

    with pytest.raises(ValidationError):
        parse_prompt_result(json.dumps(sample_result))


def test_parse_treats_empty_text_as_empty_object():
    with pytest.raises(ValidationError):
        parse_prompt_result("   ")


def test_parse_rejects_non_json():
    with pytest.raises(json.JSONDecodeError):
        parse_prompt_result("Sure! Here is your prompt:")


def test_error_result_shape():
    result = error_result()

    assert result == {"error": ANALYSIS_ERROR_MESSAGE}
    assert is_error_result(result)
    assert not is_error_result({"subject": {"en": "a", "zh": "b"}})
    assert not is_error_result(None)
