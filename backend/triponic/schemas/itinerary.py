import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSlot(_CamelModel):
    activity: str
    description: str


class TripOverview(_CamelModel):
    budget: str
    pace: str
    travel_style: str


class DayPlan(_CamelModel):
    day_number: int
    title: str
    morning: TimeSlot
    afternoon: TimeSlot
    evening: TimeSlot
    travel_tips: list[str] = Field(default_factory=list)
    image: str | None = None


class Accommodation(_CamelModel):
    name: str
    rating: float | None = None
    price_range: str | None = None
    description: str | None = None
    type: str | None = None
    image: str | None = None


class GeneratedItinerary(_CamelModel):
    title: str
    destination: str
    duration: str
    summary: str
    trip_overview: TripOverview
    days: list[DayPlan]
    accommodations: list[Accommodation] = Field(default_factory=list)


class StoredItinerary(_CamelModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    preference_id: uuid.UUID
    itinerary: GeneratedItinerary
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GenerateItineraryRequest(_CamelModel):
    preference_id: uuid.UUID
    conversation_id: uuid.UUID | None = None


class NaturalLanguageRequest(BaseModel):
    input: str
