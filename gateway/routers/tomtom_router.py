from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
import logging

from gateway.models.search_models import (
    ChargingStationSearchRequest,
    ChargingStationsData,
    ChargingStationsResponse,
    POISearchRequest,
    POIsData,
    POIsResponse,
)
from gateway.providers.base import ProviderConfigurationError
from gateway.services.nearby_search_service import get_nearby_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_configured_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "TomTom API key not configured",
            "message": "TOMTOM_API_KEY environment variable is required",
        },
    )


@router.post("/charging-stations", response_model=ChargingStationsResponse)
async def search_charging_stations(request: ChargingStationSearchRequest):
    """
    Find EV charging stations near a point, merging several targeted searches.
    """
    try:
        service = get_nearby_search_service()
    except ProviderConfigurationError as e:
        logger.error(f"Charging station search rejected: {e}")
        return _not_configured_response()

    result = await service.search_charging_stations(
        latitude=request.latitude,
        longitude=request.longitude,
        radius=request.radius,
        limit=request.limit,
        charger_type=request.charger_type,
    )
    return ChargingStationsResponse(
        data=ChargingStationsData(stations=result.stations, total_results=result.total_results),
        source=service.provider.source,
    )


@router.post("/pois", response_model=POIsResponse)
async def search_pois(request: POISearchRequest):
    """
    Find POIs of the requested categories near a point.
    """
    try:
        service = get_nearby_search_service()
    except ProviderConfigurationError as e:
        logger.error(f"POI search rejected: {e}")
        return _not_configured_response()

    result = await service.search_pois(
        latitude=request.latitude,
        longitude=request.longitude,
        radius=request.radius,
        limit=request.limit,
        categories=request.categories,
    )
    return POIsResponse(
        data=POIsData(pois=result.pois, total_results=result.total_results),
        source=service.provider.source,
    )
