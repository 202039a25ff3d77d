"""Flight search router: cache-first Amadeus flight offers."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from triponic.dependencies import get_flight_search_gateway
from triponic.schemas.flight import FlightSearchRequest
from triponic.services.errors import InvalidRequest, ProviderError
from triponic.services.flight_search_gateway import FlightSearchGateway

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search")
async def search_flights(
    req: FlightSearchRequest,
    gateway: FlightSearchGateway = Depends(get_flight_search_gateway),
):
    """Search one-way flight offers for a route and date."""
    try:
        result = await gateway.search(req)
    except InvalidRequest as e:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing required fields", "details": e.details},
        )
    except ProviderError as e:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to fetch flight data",
                "details": e.details,
                "code": e.code or "INTERNAL_SERVER_ERROR",
            },
        )
    return result.payload
