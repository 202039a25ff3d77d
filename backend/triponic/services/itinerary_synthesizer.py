"""Itinerary synthesizer: one model request per call, validated against the day-count contract."""

import json
import logging
import math

from pydantic import ValidationError

from triponic.config import settings
from triponic.schemas.conversation import Conversation
from triponic.schemas.itinerary import GeneratedItinerary
from triponic.schemas.preference import TravelPreference
from triponic.services.conversation_window import ConversationWindow
from triponic.services.errors import DayCountMismatch, EmptyResponse, InvalidRequest, MalformedResponse
from triponic.services.llm_client import LLMClient, strip_code_fences
from triponic.services.prompt_builder import itinerary_system_prompt, itinerary_user_prompt

logger = logging.getLogger(__name__)


def trip_duration(preference: TravelPreference, default: int | None = None) -> int:
    """Number of itinerary days for a preference.

    Both dates present: whole days between them, rounded up. Otherwise the
    default. The free-text ``duration`` field is never consulted.
    """
    if default is None:
        default = settings.default_trip_days
    if preference.start_date and preference.end_date:
        delta = abs(preference.end_date - preference.start_date)
        return math.ceil(delta.total_seconds() / 86400)
    return default


class ItinerarySynthesizer:
    """Turns a stored preference (and optional conversation) into a GeneratedItinerary."""

    def __init__(self, llm: LLMClient, window: ConversationWindow | None = None):
        self.llm = llm
        self.window = window or ConversationWindow(settings.chat_history_limit)

    def build_messages(self, preference: TravelPreference, duration: int, conversation: Conversation | None = None) -> list[dict]:
        recent = self.window.window(conversation.messages if conversation else None)
        return [
            {"role": "system", "content": itinerary_system_prompt(preference, duration)},
            {"role": "user", "content": itinerary_user_prompt(recent)},
        ]

    async def synthesize(
        self,
        preference: TravelPreference,
        conversation: Conversation | None = None,
    ) -> GeneratedItinerary:
        """Generate and validate an itinerary.

        Raises:
            InvalidRequest: start and end date are the same day.
            LLMError: the model call failed.
            EmptyResponse: the model returned nothing.
            MalformedResponse: the payload is not a GeneratedItinerary.
            DayCountMismatch: the payload has the wrong number of days.
        """
        duration = trip_duration(preference)
        if duration < 1:
            raise InvalidRequest("End date must be at least one day after start date")

        messages = self.build_messages(preference, duration, conversation)
        raw = await self.llm.complete(
            messages,
            model=settings.itinerary_model,
            temperature=settings.itinerary_temperature,
            json_mode=True,
        )
        itinerary = parse_itinerary(raw)

        if len(itinerary.days) != duration:
            logger.warning(
                f"Itinerary for preference {preference.id} has {len(itinerary.days)} days, expected {duration}"
            )
            raise DayCountMismatch(expected=duration, actual=len(itinerary.days))

        logger.info(f"Generated {duration}-day itinerary for preference {preference.id}")
        return itinerary


def parse_itinerary(raw: str) -> GeneratedItinerary:
    if not raw or not raw.strip():
        raise EmptyResponse("Empty response from language model")

    raw = strip_code_fences(raw.strip())
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Itinerary response is not valid JSON: {e}\nRaw: {raw[:500]}")
        raise MalformedResponse(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponse("Expected a JSON object")

    try:
        return GeneratedItinerary.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Itinerary response failed validation: {e.error_count()} errors")
        raise MalformedResponse(f"Itinerary does not match schema: {e.errors()[0]['msg']}") from e
