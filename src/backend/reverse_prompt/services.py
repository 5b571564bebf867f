import time
import json
import logging
from typing import Dict, Any, Optional

from google.genai import types

from reverse_prompt.config import settings
from reverse_prompt.dependencies import get_genai_client
from reverse_prompt.prompt_schema import PROMPT_RESPONSE_SCHEMA, parse_prompt_result
from reverse_prompt.prompts import ANALYSIS_INSTRUCTION, MODIFICATION_PROMPT

logger = logging.getLogger(__name__)


def build_generate_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=settings.TEMPERATURE,
        response_mime_type="application/json",
        response_schema=PROMPT_RESPONSE_SCHEMA,
    )


class PromptService:
    def __init__(self, genai_client=None, model: Optional[str] = None):
        self._genai_client = genai_client
        self.model = model or settings.GEMINI_MODEL

    @property
    def genai_client(self):
        # Built on first use so missing credentials fail the task, not the request.
        if self._genai_client is None:
            self._genai_client = get_genai_client()
        return self._genai_client

    def _generate(self, contents) -> Dict[str, Dict[str, str]]:
        start_time = time.time()
        response = self.genai_client.models.generate_content(
            model=self.model,
            contents=contents,
            config=build_generate_config(),
        )
        logger.info(f"Gemini call to {self.model} took {time.time() - start_time:.2f}s")
        return parse_prompt_result(response.text or "")

    def analyze_image(self, image_bytes: bytes, mime_type: str, **kwargs) -> Dict[str, Dict[str, str]]:
        logger.info(f"Analyzing image ({mime_type}, {len(image_bytes)} bytes).")
        contents = [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            ANALYSIS_INSTRUCTION.strip(),
        ]
        return self._generate(contents)

    def modify_prompt(self, current_result: Dict[str, Any], instruction: str, **kwargs) -> Dict[str, Dict[str, str]]:
        logger.info(f"Modifying prompt with instruction: '{instruction[:50]}...'")
        prompt_text = MODIFICATION_PROMPT.format(
            prompt_json=json.dumps(current_result, indent=2, ensure_ascii=False),
            instruction=instruction,
        )
        return self._generate([prompt_text])


def get_prompt_service() -> PromptService:
    return PromptService()
