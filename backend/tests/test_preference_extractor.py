import json

import pytest

from conftest import FakeLLM
from triponic.services.errors import EmptyResponse, InvalidRequest, MalformedResponse
from triponic.services.preference_extractor import PreferenceExtractor


async def test_partial_result_is_valid():
    llm = FakeLLM(json.dumps({"destinationType": "beach", "companions": "family"}))
    prefs = await PreferenceExtractor(llm).extract("A beach trip with the kids")

    assert prefs.destination_type == "beach"
    assert prefs.companions == "family"
    assert prefs.budget is None
    assert prefs.start_date is None


async def test_sends_text_with_extraction_prompt():
    llm = FakeLLM("{}")
    await PreferenceExtractor(llm).extract("Somewhere warm")

    call = llm.calls[0]
    assert call["json_mode"] is True
    assert call["temperature"] == 0.3
    assert call["messages"][0]["role"] == "system"
    assert "destinationType" in call["messages"][0]["content"]
    assert call["messages"][1] == {"role": "user", "content": "Somewhere warm"}


async def test_empty_object_means_nothing_inferable():
    prefs = await PreferenceExtractor(FakeLLM("{}")).extract("hello")
    assert prefs.model_dump(exclude_none=True) == {}


async def test_nulls_lists_and_unknown_keys():
    payload = json.dumps({
        "budget": None,
        "interests": ["food", "history"],
        "pace": "",
        "favouriteColour": "blue",
    })
    prefs = await PreferenceExtractor(FakeLLM(payload)).extract("food and history")
    assert prefs.interests == "food, history"
    assert prefs.budget is None
    assert prefs.pace is None
    assert not hasattr(prefs, "favouriteColour")


async def test_dates_are_parsed():
    payload = json.dumps({"startDate": "2024-06-01", "endDate": "2024-06-04"})
    prefs = await PreferenceExtractor(FakeLLM(payload)).extract("June 1 to June 4")
    assert prefs.start_date.isoformat() == "2024-06-01"


async def test_empty_response():
    with pytest.raises(EmptyResponse):
        await PreferenceExtractor(FakeLLM("")).extract("beach")


async def test_malformed_response():
    with pytest.raises(MalformedResponse):
        await PreferenceExtractor(FakeLLM("beach, luxury")).extract("beach")


async def test_bad_date_is_malformed():
    with pytest.raises(MalformedResponse):
        await PreferenceExtractor(FakeLLM(json.dumps({"startDate": "soon"}))).extract("soon")


async def test_blank_input_skips_model():
    llm = FakeLLM("{}")
    with pytest.raises(InvalidRequest):
        await PreferenceExtractor(llm).extract("   ")
    assert llm.calls == []


async def test_numeric_and_boolean_values_become_text():
    payload = json.dumps({"destinationType": "beach", "duration": 7, "budget": 1500.5, "notes": True})
    prefs = await PreferenceExtractor(FakeLLM(payload)).extract("A week at the beach")
    assert prefs.destination_type == "beach"
    assert prefs.duration == "7"
    assert prefs.budget == "1500.5"
    assert prefs.notes == "True"


async def test_empty_list_is_treated_as_absent():
    payload = json.dumps({"destinationType": "city", "dietaryRestrictions": [], "activities": [None, ""]})
    prefs = await PreferenceExtractor(FakeLLM(payload)).extract("A city break")
    assert prefs.dietary_restrictions is None
    assert prefs.activities is None
    assert prefs.model_dump(exclude_none=True) == {"destination_type": "city"}
