"""
Unified data models for nearby search across providers.

Provider payloads stay opaque dictionaries until they are normalized into
``CanonicalPOI``. Everything that describes *what* to ask a provider lives in
``SearchQuery`` so that URL construction stays inside the provider.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Opaque item of a provider ``results`` array
RawProviderRecord = Dict[str, Any]


class EndpointKind(str, Enum):
    """Kind of provider search endpoint a query targets."""
    CATEGORY_SEARCH = "category-search"
    KEYWORD_SEARCH = "keyword-search"


class Location(BaseModel):
    """Center point of a nearby search."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")

    model_config = ConfigDict(frozen=True)


class SearchQuery(BaseModel):
    """
    One planned call to the search provider.

    Exactly one of ``category_code`` / ``keyword`` is set, matching
    ``endpoint_kind``. ``category`` is the tag attached to every record this
    query surfaces first.
    """
    endpoint_kind: EndpointKind = Field(..., description="Provider endpoint to call")
    category_code: Optional[str] = Field(None, description="Provider category code (category search)")
    keyword: Optional[str] = Field(None, description="Free-text term (keyword search)")
    category: str = Field(..., description="Category tag assigned to surfaced records")
    label: str = Field(..., description="Free-text term placed in the provider URL path")
    location: Location = Field(..., description="Search center")
    radius_meters: int = Field(..., gt=0, description="Search radius in meters")
    result_limit: int = Field(..., gt=0, description="Maximum records requested")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_exactly_one_term(self) -> "SearchQuery":
        if self.endpoint_kind is EndpointKind.CATEGORY_SEARCH:
            if not self.category_code or self.keyword is not None:
                raise ValueError("category search requires category_code and no keyword")
        else:
            if not self.keyword or self.category_code is not None:
                raise ValueError("keyword search requires keyword and no category_code")
        return self

    @property
    def term(self) -> str:
        """The category code or keyword, whichever this query carries."""
        return self.category_code if self.category_code is not None else self.keyword


class TaggedRecord(NamedTuple):
    """A raw record kept by the aggregator with the tag of its first query."""
    record: RawProviderRecord
    category: str


class CanonicalPOI(BaseModel):
    """
    Provider-agnostic POI / charging station record returned to callers.

    Numeric fields are typed ``Any`` because provider values are passed
    through without validation.
    """
    id: str = Field(..., description="Provider-assigned identifier")
    name: str = Field(..., description="Display name")
    category: str = Field(..., description="Tag of the query that first surfaced this record")
    address: str = Field(default="", description="Free-form address")
    latitude: Optional[Any] = Field(None, description="Latitude as reported by the provider")
    longitude: Optional[Any] = Field(None, description="Longitude as reported by the provider")
    distance: Optional[Any] = Field(None, description="Distance from the search center in meters")
    phone: Optional[str] = Field(None, description="Phone number")
    url: Optional[str] = Field(None, description="Website URL")
    categories: List[Any] = Field(default_factory=list, description="Provider category entries, copied as-is")
    source: str = Field(..., description="Provider literal")


class AggregationStats(BaseModel):
    """
    Outcome counters for one aggregation call.

    Kept for observability only; HTTP callers never see them.
    """
    planned: int = Field(default=0, description="Sub-queries in the plan")
    succeeded: int = Field(default=0, description="Sub-queries that returned a payload")
    failed: int = Field(default=0, description="Sub-queries that errored")
    timed_out: int = Field(default=0, description="Sub-queries stopped by a timeout")
    duplicates: int = Field(default=0, description="Records discarded as already seen")
    elapsed_ms: float = Field(default=0.0, description="Wall time of the aggregation")

    @property
    def success_rate(self) -> float:
        """Percentage of planned sub-queries that succeeded."""
        if self.planned == 0:
            return 0.0
        return (self.succeeded / self.planned) * 100


@dataclass
class AggregationResult:
    """Id-unique tagged records in first-seen order plus counters."""
    records: List[TaggedRecord] = field(default_factory=list)
    stats: AggregationStats = field(default_factory=AggregationStats)

    @property
    def ids(self) -> List[str]:
        return [str(tagged.record.get("id")) for tagged in self.records]
