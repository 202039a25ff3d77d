"""In-process stores for preferences, conversations and generated itineraries."""

import logging
import uuid

from triponic.schemas.conversation import Conversation, Message
from triponic.schemas.itinerary import GeneratedItinerary, StoredItinerary
from triponic.schemas.preference import PreferenceCreate, TravelPreference
from triponic.services.errors import NotFound

logger = logging.getLogger(__name__)


class PreferenceStore:
    def __init__(self):
        self._items: dict[uuid.UUID, TravelPreference] = {}

    async def add(self, data: PreferenceCreate) -> TravelPreference:
        preference = TravelPreference(**data.model_dump())
        self._items[preference.id] = preference
        return preference

    async def get(self, preference_id: uuid.UUID) -> TravelPreference:
        try:
            return self._items[preference_id]
        except KeyError:
            raise NotFound(f"Preference {preference_id} not found") from None


class ConversationStore:
    """Conversations are append-only; stored message lists are never rewritten."""

    def __init__(self):
        self._items: dict[uuid.UUID, Conversation] = {}

    async def create(self, preference_id: uuid.UUID) -> Conversation:
        conversation = Conversation(preference_id=preference_id)
        self._items[conversation.id] = conversation
        return conversation

    async def get(self, conversation_id: uuid.UUID) -> Conversation:
        try:
            return self._items[conversation_id]
        except KeyError:
            raise NotFound(f"Conversation {conversation_id} not found") from None

    async def append(self, conversation_id: uuid.UUID, message: Message) -> Conversation:
        conversation = await self.get(conversation_id)
        conversation.messages.append(message)
        return conversation


class ItineraryStore:
    def __init__(self):
        self._items: dict[uuid.UUID, StoredItinerary] = {}

    async def add(self, preference_id: uuid.UUID, itinerary: GeneratedItinerary) -> StoredItinerary:
        stored = StoredItinerary(preference_id=preference_id, itinerary=itinerary)
        self._items[stored.id] = stored
        logger.info(f"Stored itinerary {stored.id} for preference {preference_id}")
        return stored

    async def get(self, itinerary_id: uuid.UUID) -> StoredItinerary:
        try:
            return self._items[itinerary_id]
        except KeyError:
            raise NotFound(f"Itinerary {itinerary_id} not found") from None

    async def list_for_preference(self, preference_id: uuid.UUID) -> list[StoredItinerary]:
        return [i for i in self._items.values() if i.preference_id == preference_id]
