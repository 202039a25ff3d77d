"""Preference router: saved preferences and natural-language extraction."""

import uuid

from fastapi import APIRouter, Depends

from triponic.dependencies import get_preference_extractor, get_preference_store
from triponic.schemas.itinerary import NaturalLanguageRequest
from triponic.schemas.preference import PartialTravelPreference, PreferenceCreate, TravelPreference
from triponic.services.preference_extractor import PreferenceExtractor
from triponic.services.stores import PreferenceStore

router = APIRouter()


@router.post("/preferences", response_model=TravelPreference, response_model_by_alias=True, status_code=201)
async def create_preference(
    req: PreferenceCreate,
    preferences: PreferenceStore = Depends(get_preference_store),
):
    return await preferences.add(req)


@router.get("/preferences/{preference_id}", response_model=TravelPreference, response_model_by_alias=True)
async def get_preference(
    preference_id: uuid.UUID,
    preferences: PreferenceStore = Depends(get_preference_store),
):
    return await preferences.get(preference_id)


@router.post(
    "/process-natural-language",
    response_model=PartialTravelPreference,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def process_natural_language(
    req: NaturalLanguageRequest,
    extractor: PreferenceExtractor = Depends(get_preference_extractor),
):
    """Extract whichever preference fields the free text mentions."""
    return await extractor.extract(req.input)
