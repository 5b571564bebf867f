"""PromptService: the analysis and modification calls against a fake client."""

from __future__ import annotations

import json

from google.genai import types
from pydantic import ValidationError
import pytest

from reverse_prompt.prompt_schema import PROMPT_FIELD_NAMES, PROMPT_RESPONSE_SCHEMA
from reverse_prompt.prompts import ANALYSIS_INSTRUCTION
from reverse_prompt.services import PromptService


@pytest.fixture
def service(fake_client) -> PromptService:
    return PromptService(fake_client, model="test-model")


def test_analyze_sends_inline_image_and_instruction(service, fake_client, sample_result_json, png_bytes):
    fake_client.queue(sample_result_json)

    result = service.analyze_image(png_bytes, "image/png")

    assert list(result) == PROMPT_FIELD_NAMES
    call = fake_client.models.calls[0]
    assert call["model"] == "test-model"
    image_part, instruction = call["contents"]
    assert image_part.inline_data.data == png_bytes
    assert image_part.inline_data.mime_type == "image/png"
    assert instruction == ANALYSIS_INSTRUCTION.strip()
    assert "English and Chinese" in instruction


def test_requests_json_constrained_to_prompt_schema(service, fake_client, sample_result_json):
    fake_client.queue(sample_result_json)

    service.analyze_image(b"img", "image/jpeg")

    config = fake_client.models.calls[0]["config"]
    assert isinstance(config, types.GenerateContentConfig)
    assert config.response_mime_type == "application/json"
    assert config.response_schema == PROMPT_RESPONSE_SCHEMA


def test_analyze_propagates_api_errors(service, fake_client):
    fake_client.queue(ConnectionError("network down"))

    with pytest.raises(ConnectionError):
        service.analyze_image(b"img", "image/png")


def test_analyze_rejects_incomplete_output(service, fake_client):
    fake_client.queue(json.dumps({"subject": {"en": "A cat", "zh": "一只猫"}}))

    with pytest.raises(ValidationError):
        service.analyze_image(b"img", "image/png")


def test_modify_sends_current_json_and_instruction(service, fake_client, sample_result, result_factory):
    updated = result_factory("cyberpunk ")
    fake_client.queue(json.dumps(updated, ensure_ascii=False))

    result = service.modify_prompt(sample_result, "Change lighting to cyberpunk")

    assert result == updated
    (prompt_text,) = fake_client.models.calls[0]["contents"]
    assert json.dumps(sample_result, indent=2, ensure_ascii=False) in prompt_text
    assert 'User modification request: "Change lighting to cyberpunk"' in prompt_text
    assert "Keep the exact same JSON structure" in prompt_text


def test_default_model_comes_from_settings(fake_client):
    from reverse_prompt.config import settings

    assert PromptService(fake_client).model == settings.GEMINI_MODEL
