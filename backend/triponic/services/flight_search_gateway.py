"""Flight search gateway: validate, serve from cache, otherwise call the provider and cache."""

import logging
from typing import Protocol

from triponic.config import settings
from triponic.schemas.flight import FlightSearchRequest, FlightSearchResult
from triponic.services.errors import InvalidRequest, ProviderError
from triponic.services.search_cache import SearchCache, flight_cache_key

logger = logging.getLogger(__name__)


class FlightOfferProvider(Protocol):
    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        adults: int = 1,
        max_results: int = 10,
        currency: str = "USD",
    ) -> dict: ...


class FlightSearchGateway:
    """Cache-first flight offer search.

    Concurrent misses for the same key may both reach the provider; the later
    write wins.
    """

    def __init__(self, provider: FlightOfferProvider, cache: SearchCache, ttl: int | None = None):
        self.provider = provider
        self.cache = cache
        self.ttl = ttl if ttl is not None else settings.flight_search_cache_ttl

    async def search(self, req: FlightSearchRequest) -> FlightSearchResult:
        origin = (req.origin_location_code or "").strip()
        destination = (req.destination_location_code or "").strip()
        departure_date = (req.departure_date or "").strip()
        if not origin or not destination or not departure_date:
            raise InvalidRequest("Origin, destination, and departure date are required")

        key = flight_cache_key(origin, destination, departure_date)
        try:
            return await self._lookup(key, origin, destination, departure_date, req)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Flight search failed for {key}: {e}", exc_info=True)
            raise ProviderError(str(e) or type(e).__name__) from e

    async def _lookup(
        self,
        key: str,
        origin: str,
        destination: str,
        departure_date: str,
        req: FlightSearchRequest,
    ) -> FlightSearchResult:
        cached = await self.cache.get(key)
        if cached is not None:
            logger.debug(f"Flight cache hit: {key}")
            return FlightSearchResult(payload={"data": cached}, cached=True)

        logger.info(f"Flight cache miss: {key}")
        try:
            envelope = await self.provider.search_flight_offers(
                origin,
                destination,
                departure_date,
                adults=req.adults or settings.flight_default_adults,
                max_results=req.max or settings.flight_default_max,
                currency=settings.flight_currency,
            )
        except Exception as e:
            logger.error(f"Flight provider failed for {key}: {e}")
            raise ProviderError(str(e) or type(e).__name__, code=getattr(e, "code", None)) from e

        if not isinstance(envelope, dict):
            raise ProviderError("Flight provider returned an unexpected payload")

        await self.cache.set(key, envelope.get("data", []), self.ttl)
        return FlightSearchResult(payload=envelope, cached=False)
