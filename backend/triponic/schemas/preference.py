import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PreferenceFields(BaseModel):
    """Descriptive travel preference fields, all optional."""

    destination_type: str | None = None
    custom_destination: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    duration: str | None = None
    budget: str | None = None
    interests: str | None = None
    pace: str | None = None
    companions: str | None = None
    activities: str | None = None
    meal_preferences: str | None = None
    dietary_restrictions: str | None = None
    accommodation: str | None = None
    transportation_mode: str | None = None
    notes: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PreferenceCreate(PreferenceFields):
    pass


class PartialTravelPreference(PreferenceFields):
    """Fields inferred from free text. Absent fields were not mentioned."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class TravelPreference(PreferenceFields):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
