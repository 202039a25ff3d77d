import json
from datetime import date

import pytest

from triponic.schemas.preference import TravelPreference
from triponic.services.errors import LLMError


class FakeLLM:
    """Stands in for LLMClient: returns queued replies and records every call."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[dict] = []

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=None, json_mode=False):
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
        })
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self):
        pass


class FakeProvider:
    def __init__(self, envelope=None, error: Exception | None = None):
        self.envelope = envelope if envelope is not None else {"meta": {"count": 1}, "data": [{"id": "1", "price": {"total": "120.00"}}]}
        self.error = error
        self.calls: list[dict] = []

    async def search_flight_offers(self, origin, destination, departure_date, adults=1, max_results=10, currency="USD"):
        self.calls.append({
            "origin": origin,
            "destination": destination,
            "departure_date": departure_date,
            "adults": adults,
            "max_results": max_results,
            "currency": currency,
        })
        if self.error:
            raise self.error
        return self.envelope


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class ProviderFailure(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


def make_day(n: int) -> dict:
    return {
        "dayNumber": n,
        "title": f"Day {n}",
        "morning": {"activity": "Beach walk", "description": "Sunrise on the sand"},
        "afternoon": {"activity": "Snorkeling", "description": "Reef tour"},
        "evening": {"activity": "Dinner", "description": "Seafood by the harbour"},
        "travelTips": ["Bring sunscreen"],
        "image": "https://images.unsplash.com/photo-1",
    }


def make_itinerary_json(num_days: int) -> str:
    return json.dumps({
        "title": "Coastal Escape",
        "destination": "Algarve, Portugal",
        "duration": f"{num_days} days",
        "summary": "Sun, sea and seafood.",
        "tripOverview": {"budget": "midrange", "pace": "relaxed", "travelStyle": "leisure"},
        "days": [make_day(n) for n in range(1, num_days + 1)],
        "accommodations": [
            {
                "name": "Praia Hotel",
                "rating": 4.5,
                "priceRange": "$$",
                "description": "Ocean view rooms",
                "type": "hotel",
                "image": "https://images.unsplash.com/photo-2",
            }
        ],
    })


@pytest.fixture
def beach_preference() -> TravelPreference:
    return TravelPreference(
        destination_type="beach",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 4),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
