"""Amadeus API client: flight offer search with OAuth2 client-credentials auth."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import httpx

from triponic.config import settings

logger = logging.getLogger(__name__)


class AmadeusError(Exception):
    """Amadeus call failed. ``code`` is the provider's error code or HTTP status when known."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code


def _error_code(resp: httpx.Response) -> str | None:
    """First error code from an Amadeus error body, else the HTTP status."""
    try:
        errors = resp.json().get("errors") or []
    except ValueError:
        errors = []
    if errors and isinstance(errors[0], dict) and errors[0].get("code") is not None:
        return str(errors[0]["code"])
    return str(resp.status_code)


def _error_detail(resp: httpx.Response) -> str:
    try:
        errors = resp.json().get("errors") or []
    except ValueError:
        errors = []
    if errors and isinstance(errors[0], dict):
        return errors[0].get("detail") or errors[0].get("title") or f"HTTP {resp.status_code}"
    return f"HTTP {resp.status_code}"


class AmadeusClient:
    """Adapter for the Amadeus Self-Service flight offers API.

    Every call is a single attempt; failures surface as AmadeusError.
    """

    def __init__(self, client_id: str | None = None, client_secret: str | None = None, base_url: str | None = None):
        self._client_id = client_id if client_id is not None else settings.amadeus_client_id
        self._client_secret = client_secret if client_secret is not None else settings.amadeus_client_secret
        self._base_url = base_url or settings.amadeus_base_url
        self._token: str | None = None
        self._token_expires: datetime | None = None
        self._semaphore = asyncio.Semaphore(10)  # 10 req/s rate limit
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=30.0,
            )
        return self._client

    async def _ensure_token(self):
        """Get or refresh OAuth2 token."""
        if not self._client_id or not self._client_secret:
            raise AmadeusError("Amadeus credentials are not configured", code="MISSING_CREDENTIALS")

        if self._token and self._token_expires and datetime.now(timezone.utc) < self._token_expires:
            return

        client = await self._get_client()
        try:
            resp = await client.post(
                "/v1/security/oauth2/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            raise AmadeusError(f"Amadeus token request failed: {e}") from e

        if resp.is_error:
            raise AmadeusError(f"Amadeus authentication failed: {_error_detail(resp)}", code=_error_code(resp))

        data = resp.json()
        self._token = data["access_token"]
        self._token_expires = datetime.now(timezone.utc) + timedelta(
            seconds=data.get("expires_in", 1799) - 60
        )
        logger.info("Amadeus token refreshed")

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        adults: int = 1,
        max_results: int = 10,
        currency: str = "USD",
    ) -> dict:
        """Search flight offers for one date. Returns the Amadeus envelope unmodified."""
        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": adults,
            "max": max_results,
            "currencyCode": currency,
        }

        async with self._semaphore:
            await self._ensure_token()
            client = await self._get_client()
            try:
                resp = await client.get(
                    "/v2/shopping/flight-offers",
                    params=params,
                    headers={"Authorization": f"Bearer {self._token}"},
                )
            except httpx.RequestError as e:
                logger.error(f"Amadeus request error: {e}")
                raise AmadeusError(f"Amadeus request failed: {e}") from e

        if resp.is_error:
            logger.error(f"Amadeus search error: {resp.status_code}")
            if resp.status_code == 401:
                self._token = None
            raise AmadeusError(_error_detail(resp), code=_error_code(resp))

        try:
            return resp.json()
        except ValueError as e:
            raise AmadeusError("Amadeus returned a non-JSON response") from e

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
