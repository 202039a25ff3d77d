"""Preference extractor: uses the LLM to turn free text into a partial travel preference."""

import json
import logging

from pydantic import ValidationError

from triponic.config import settings
from triponic.schemas.preference import PartialTravelPreference
from triponic.services.errors import EmptyResponse, InvalidRequest, MalformedResponse
from triponic.services.llm_client import LLMClient, strip_code_fences
from triponic.services.prompt_builder import EXTRACTION_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def _flatten(value):
    """Render lists and scalars as the free-text strings the preference fields hold."""
    if isinstance(value, list):
        return ", ".join(str(v) for v in value if v not in (None, ""))
    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


class PreferenceExtractor:
    """Extracts whichever preference fields the text actually mentions."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def extract(self, free_text: str) -> PartialTravelPreference:
        """
        Parse a natural language trip description.

        A result with every field absent is valid: it means nothing was
        inferable. Raises EmptyResponse / MalformedResponse when the model
        output is unusable.
        """
        if not free_text or not free_text.strip():
            raise InvalidRequest("Input text is required")

        raw = await self.llm.complete(
            [
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": free_text},
            ],
            model=settings.extraction_model,
            temperature=settings.extraction_temperature,
            json_mode=True,
        )
        if not raw or not raw.strip():
            raise EmptyResponse("Empty response from language model")

        raw = strip_code_fences(raw.strip())
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Preference extraction returned invalid JSON: {e}\nRaw: {raw[:500]}")
            raise MalformedResponse(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponse("Expected a JSON object")

        data = {key: _flatten(value) for key, value in data.items()}
        # Models sometimes emit null, "" or [] for fields they could not infer
        data = {k: v for k, v in data.items() if v not in (None, "")}

        try:
            return PartialTravelPreference.model_validate(data)
        except ValidationError as e:
            raise MalformedResponse(f"Preferences do not match schema: {e.errors()[0]['msg']}") from e
