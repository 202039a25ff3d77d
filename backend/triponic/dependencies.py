"""Process-wide service instances and their FastAPI dependency providers."""

from triponic.config import settings
from triponic.services.amadeus_client import AmadeusClient
from triponic.services.chat_responder import ChatResponder
from triponic.services.conversation_window import ConversationWindow
from triponic.services.flight_search_gateway import FlightSearchGateway
from triponic.services.itinerary_synthesizer import ItinerarySynthesizer
from triponic.services.llm_client import LLMClient
from triponic.services.preference_extractor import PreferenceExtractor
from triponic.services.search_cache import build_search_cache
from triponic.services.stores import ConversationStore, ItineraryStore, PreferenceStore

llm_client = LLMClient()
amadeus_client = AmadeusClient()
search_cache = build_search_cache(settings.search_cache_backend, settings.redis_url)

_window = ConversationWindow(settings.chat_history_limit)

itinerary_synthesizer = ItinerarySynthesizer(llm_client, _window)
preference_extractor = PreferenceExtractor(llm_client)
chat_responder = ChatResponder(llm_client, _window)
flight_search_gateway = FlightSearchGateway(amadeus_client, search_cache, settings.flight_search_cache_ttl)

preference_store = PreferenceStore()
conversation_store = ConversationStore()
itinerary_store = ItineraryStore()


def get_itinerary_synthesizer() -> ItinerarySynthesizer:
    return itinerary_synthesizer


def get_preference_extractor() -> PreferenceExtractor:
    return preference_extractor


def get_chat_responder() -> ChatResponder:
    return chat_responder


def get_flight_search_gateway() -> FlightSearchGateway:
    return flight_search_gateway


def get_preference_store() -> PreferenceStore:
    return preference_store


def get_conversation_store() -> ConversationStore:
    return conversation_store


def get_itinerary_store() -> ItineraryStore:
    return itinerary_store


async def close_clients():
    await llm_client.close()
    await amadeus_client.close()
    await search_cache.close()
