from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class FlightSearchRequest(BaseModel):
    """Inbound flight search body. Required fields are checked by the gateway."""

    origin_location_code: str | None = Field(None, alias="originLocationCode")
    destination_location_code: str | None = Field(None, alias="destinationLocationCode")
    departure_date: str | None = Field(None, alias="departureDate")
    adults: int | None = None
    max: int | None = None

    model_config = ConfigDict(populate_by_name=True)


@dataclass
class FlightSearchResult:
    payload: dict
    cached: bool
