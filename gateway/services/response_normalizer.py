"""
Response normalizer - maps raw TomTom records to CanonicalPOI.

Only defaulting happens here. Numeric fields are copied as-is, even when the
provider sent something odd.
"""

from typing import Any, Dict, Iterable, List, Optional

from gateway.providers.models import CanonicalPOI, RawProviderRecord, TaggedRecord

DEFAULT_STATION_NAME = "Unknown Station"
DEFAULT_POI_NAME = "Unknown POI"
TOMTOM_SOURCE = "tomtom"


def _section(record: RawProviderRecord, key: str) -> Dict[str, Any]:
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def _text_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def normalize_record(
    record: RawProviderRecord,
    category: str,
    default_name: str = DEFAULT_POI_NAME,
    source: str = TOMTOM_SOURCE,
) -> CanonicalPOI:
    """
    Build the canonical record for one raw provider item.

    Args:
        record: Raw TomTom result item
        category: Tag of the sub-query that first surfaced the item
        default_name: Placeholder used when ``poi.name`` is missing
        source: Provider literal

    Returns:
        CanonicalPOI
    """
    poi = _section(record, "poi")
    address = _section(record, "address")
    position = _section(record, "position")

    categories = poi.get("categories")
    if not isinstance(categories, list):
        categories = []

    return CanonicalPOI(
        id=str(record.get("id")),
        name=_text_or_none(poi.get("name")) or default_name,
        category=category,
        address=_text_or_none(address.get("freeformAddress")) or "",
        latitude=position.get("lat"),
        longitude=position.get("lon"),
        distance=record.get("dist"),
        phone=_text_or_none(poi.get("phone")),
        url=_text_or_none(poi.get("url")),
        categories=list(categories),
        source=source,
    )


def normalize_records(
    records: Iterable[TaggedRecord],
    default_name: str = DEFAULT_POI_NAME,
    source: str = TOMTOM_SOURCE,
) -> List[CanonicalPOI]:
    """Normalize tagged records, keeping their order."""
    return [
        normalize_record(tagged.record, tagged.category, default_name=default_name, source=source)
        for tagged in records
    ]
