import json
from datetime import date

import pytest

from conftest import FakeLLM, make_itinerary_json
from triponic.schemas.conversation import Conversation, Message, Role
from triponic.schemas.preference import TravelPreference
from triponic.services.errors import DayCountMismatch, EmptyResponse, InvalidRequest, LLMError, MalformedResponse
from triponic.services.itinerary_synthesizer import ItinerarySynthesizer, trip_duration


def test_duration_from_dates():
    pref = TravelPreference(start_date=date(2024, 5, 1), end_date=date(2024, 5, 4))
    assert trip_duration(pref) == 3


def test_duration_defaults_to_three_without_dates():
    assert trip_duration(TravelPreference()) == 3
    assert trip_duration(TravelPreference(start_date=date(2024, 5, 1))) == 3
    assert trip_duration(TravelPreference(duration="long")) == 3


def test_duration_reversed_dates_uses_absolute_difference():
    pref = TravelPreference(start_date=date(2024, 5, 10), end_date=date(2024, 5, 3))
    assert trip_duration(pref) == 7


async def test_requests_exact_day_count(beach_preference):
    llm = FakeLLM(make_itinerary_json(3))
    itinerary = await ItinerarySynthesizer(llm).synthesize(beach_preference)

    assert len(itinerary.days) == 3
    assert len(llm.calls) == 1
    call = llm.calls[0]
    assert call["json_mode"] is True
    assert call["messages"][0]["role"] == "system"
    assert "exactly 3 days" in call["messages"][0]["content"]
    assert call["messages"][1] == {
        "role": "user",
        "content": "Generate a detailed travel itinerary based on my preferences.",
    }


async def test_fewer_days_is_rejected(beach_preference):
    llm = FakeLLM(make_itinerary_json(2))
    with pytest.raises(DayCountMismatch) as exc_info:
        await ItinerarySynthesizer(llm).synthesize(beach_preference)
    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 2


async def test_extra_days_are_rejected_not_truncated(beach_preference):
    llm = FakeLLM(make_itinerary_json(4))
    with pytest.raises(DayCountMismatch) as exc_info:
        await ItinerarySynthesizer(llm).synthesize(beach_preference)
    assert exc_info.value.actual == 4


async def test_empty_response(beach_preference):
    with pytest.raises(EmptyResponse):
        await ItinerarySynthesizer(FakeLLM("   ")).synthesize(beach_preference)


async def test_invalid_json(beach_preference):
    with pytest.raises(MalformedResponse):
        await ItinerarySynthesizer(FakeLLM("not json")).synthesize(beach_preference)


async def test_wrong_shape(beach_preference):
    payload = json.dumps({"title": "x", "days": "three"})
    with pytest.raises(MalformedResponse):
        await ItinerarySynthesizer(FakeLLM(payload)).synthesize(beach_preference)


async def test_json_array_is_malformed(beach_preference):
    with pytest.raises(MalformedResponse):
        await ItinerarySynthesizer(FakeLLM("[]")).synthesize(beach_preference)


async def test_code_fences_are_stripped(beach_preference):
    fenced = "```json\n" + make_itinerary_json(3) + "\n```"
    itinerary = await ItinerarySynthesizer(FakeLLM(fenced)).synthesize(beach_preference)
    assert itinerary.trip_overview.travel_style == "leisure"


async def test_transport_failure_is_not_retried(beach_preference):
    llm = FakeLLM(LLMError("timeout"), make_itinerary_json(3))
    with pytest.raises(LLMError):
        await ItinerarySynthesizer(llm).synthesize(beach_preference)
    assert len(llm.calls) == 1


async def test_same_day_trip_is_invalid():
    pref = TravelPreference(start_date=date(2024, 6, 1), end_date=date(2024, 6, 1))
    llm = FakeLLM(make_itinerary_json(1))
    with pytest.raises(InvalidRequest):
        await ItinerarySynthesizer(llm).synthesize(pref)
    assert llm.calls == []


async def test_conversation_window_feeds_user_prompt(beach_preference):
    conversation = Conversation(
        preference_id=beach_preference.id,
        messages=[Message(role=Role.USER, content=f"note {i}") for i in range(12)],
    )
    llm = FakeLLM(make_itinerary_json(3))
    await ItinerarySynthesizer(llm).synthesize(beach_preference, conversation)

    user_prompt = llm.calls[0]["messages"][1]["content"]
    assert user_prompt.startswith("Additional context from conversation:")
    assert "USER: note 11" in user_prompt
    assert "USER: note 2" in user_prompt
    assert "USER: note 1\n" not in user_prompt


async def test_default_duration_without_dates():
    llm = FakeLLM(make_itinerary_json(3))
    itinerary = await ItinerarySynthesizer(llm).synthesize(TravelPreference(destination_type="city"))
    assert len(itinerary.days) == 3
