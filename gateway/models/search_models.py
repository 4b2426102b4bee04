from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from gateway.providers.models import CanonicalPOI
from gateway.providers.settings import get_settings


def _default_radius() -> int:
    return get_settings().search_default_radius_meters


class ChargingStationSearchRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Search center latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Search center longitude")
    radius: int = Field(default_factory=_default_radius, gt=0, description="Search radius in meters")
    limit: int = Field(100, gt=0, description="Maximum results requested per sub-query")
    charger_type: Optional[str] = Field(
        None,
        alias="chargerType",
        description="Charger filter: 'fast', 'level2', or anything else for all stations"
    )

    model_config = ConfigDict(populate_by_name=True)


class POISearchRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Search center latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Search center longitude")
    radius: int = Field(default_factory=_default_radius, gt=0, description="Search radius in meters")
    limit: int = Field(100, gt=0, description="Maximum results requested per sub-query")
    categories: List[str] = Field(
        default_factory=lambda: ["parks"],
        description="Category names (parks, attractions, museums, restaurants, hotels, scenic, camping) "
                    "or literal TomTom category codes"
    )

    @field_validator("categories")
    @classmethod
    def _no_blank_categories(cls, value: List[str]) -> List[str]:
        cleaned = [name.strip() for name in value]
        if any(not name for name in cleaned):
            raise ValueError("category names must not be blank")
        return cleaned


class ChargingStationsData(BaseModel):
    stations: List[CanonicalPOI] = Field(..., description="Stations in first-seen order")
    total_results: int = Field(..., alias="totalResults", description="Number of stations returned")

    model_config = ConfigDict(populate_by_name=True)


class ChargingStationsResponse(BaseModel):
    success: bool = Field(True)
    data: ChargingStationsData
    source: str = Field("tomtom", description="Provider that answered")


class POIsData(BaseModel):
    pois: List[CanonicalPOI] = Field(..., description="POIs in first-seen order")
    total_results: int = Field(..., alias="totalResults", description="Number of POIs returned")

    model_config = ConfigDict(populate_by_name=True)


class POIsResponse(BaseModel):
    success: bool = Field(True)
    data: POIsData
    source: str = Field("tomtom", description="Provider that answered")
