"""Itinerary router: AI itinerary generation from a stored preference."""

import logging
import uuid

from fastapi import APIRouter, Depends

from triponic.dependencies import (
    get_conversation_store,
    get_itinerary_store,
    get_itinerary_synthesizer,
    get_preference_store,
)
from triponic.schemas.itinerary import GenerateItineraryRequest, StoredItinerary
from triponic.services.itinerary_synthesizer import ItinerarySynthesizer
from triponic.services.stores import ConversationStore, ItineraryStore, PreferenceStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-itinerary", response_model=StoredItinerary, response_model_by_alias=True)
async def generate_itinerary(
    req: GenerateItineraryRequest,
    synthesizer: ItinerarySynthesizer = Depends(get_itinerary_synthesizer),
    preferences: PreferenceStore = Depends(get_preference_store),
    conversations: ConversationStore = Depends(get_conversation_store),
    itineraries: ItineraryStore = Depends(get_itinerary_store),
):
    """Generate, validate and store an itinerary for a saved preference."""
    preference = await preferences.get(req.preference_id)
    conversation = None
    if req.conversation_id:
        conversation = await conversations.get(req.conversation_id)

    itinerary = await synthesizer.synthesize(preference, conversation)
    return await itineraries.add(preference.id, itinerary)


@router.get("/itineraries/{itinerary_id}", response_model=StoredItinerary, response_model_by_alias=True)
async def get_itinerary(
    itinerary_id: uuid.UUID,
    itineraries: ItineraryStore = Depends(get_itinerary_store),
):
    return await itineraries.get(itinerary_id)


@router.get("/preferences/{preference_id}/itineraries", response_model=list[StoredItinerary], response_model_by_alias=True)
async def list_itineraries(
    preference_id: uuid.UUID,
    itineraries: ItineraryStore = Depends(get_itinerary_store),
):
    return await itineraries.list_for_preference(preference_id)
