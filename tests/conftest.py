"""Pytest configuration and fixtures.

Provides a fake Gemini client, canned prompt results, and an isolated
session store per test. No test here talks to the real model service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
import json
from types import SimpleNamespace
from typing import Any

from PIL import Image
import pytest

from reverse_prompt import session_state
from reverse_prompt.prompt_schema import PROMPT_FIELD_NAMES

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeModels:
    """Stands in for ``genai.Client().models``.

    Returns queued responses in order. A queued exception is raised instead
    of returned. Every call is captured for inspection.
    """

    responses: list[Any] = field(default_factory=list)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def generate_content(self, *, model: str, contents: Any, config: Any) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.responses:
            raise RuntimeError("FakeModels has no queued response")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return SimpleNamespace(text=response)


@dataclass
class FakeGenaiClient:
    models: FakeModels = field(default_factory=FakeModels)

    def queue(self, *responses: Any) -> None:
        self.models.responses.extend(responses)


def make_result(prefix: str = "") -> dict[str, dict[str, str]]:
    return {
        name: {"en": f"{prefix}{name} en", "zh": f"{prefix}{name} 中文"}
        for name in PROMPT_FIELD_NAMES
    }


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_sessions():
    session_state.clear_all()
    yield
    session_state.clear_all()


@pytest.fixture
def fake_client() -> FakeGenaiClient:
    return FakeGenaiClient()


@pytest.fixture
def sample_result() -> dict[str, dict[str, str]]:
    result = make_result()
    result["subject"] = {"en": "A cat", "zh": "一只猫"}
    return result


@pytest.fixture
def sample_result_json(sample_result) -> str:
    return json.dumps(sample_result, ensure_ascii=False)


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (64, 32), color=(200, 40, 40)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def result_factory():
    return make_result
