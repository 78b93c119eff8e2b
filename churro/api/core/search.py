# churro/api/core/search.py
import logging
import re
from typing import Callable, Dict, Iterable, List, Optional

from rapidfuzz import fuzz

from churro.api.core.inventory import InventoryStore
from churro.models.schemas import InventoryRecord, SearchCriteria

logger = logging.getLogger(__name__)

# Minimum rapidfuzz ratio for two feature names to count as the same feature
FEATURE_MATCH_THRESHOLD = 90


def normalize_text(s):
    """Normalize text to improve matching"""
    if not isinstance(s, str):
        return s
    s = s.strip().lower()
    s = re.sub(r'[\-–—_/]', ' ', s)
    s = re.sub(r'\s+', ' ', s)
    return s


def as_number(value) -> Optional[float]:
    """Coerce a filter value to a number, or None when it is not one."""
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def features_equivalent(requested: str, offered: str, threshold: int = FEATURE_MATCH_THRESHOLD) -> bool:
    a, b = normalize_text(requested), normalize_text(offered)
    if not isinstance(a, str) or not isinstance(b, str):
        return False
    if a == b:
        return True
    return fuzz.ratio(a, b) >= threshold


def _exact(attr: str) -> Callable[[InventoryRecord, str], bool]:
    def predicate(record, value):
        field = getattr(record, attr)
        return getattr(field, "value", field) == value
    return predicate


def _contains(attr: str) -> Callable[[InventoryRecord, str], bool]:
    def predicate(record, value):
        if not isinstance(value, str):
            return False
        return value.lower() in getattr(record, attr).lower()
    return predicate


def _at_most(attr: str):
    def predicate(record, value):
        limit = as_number(value)
        return limit is not None and getattr(record, attr) <= limit
    return predicate


def _at_least(attr: str):
    def predicate(record, value):
        limit = as_number(value)
        return limit is not None and getattr(record, attr) >= limit
    return predicate


def _any_feature(record: InventoryRecord, requested: List[str]) -> bool:
    if not requested:
        return True
    return any(
        features_equivalent(want, have)
        for want in requested
        for have in record.features
    )


def _available(record: InventoryRecord, value: bool) -> bool:
    return record.available == value


# One predicate per SearchCriteria field
PREDICATES: Dict[str, Callable] = {
    "category": _exact("category"),
    "transmission": _exact("transmission"),
    "fuel_type": _exact("fuel_type"),
    "pickup_method": _exact("pickup_method"),
    "make": _contains("make"),
    "model": _contains("model"),
    "location": _contains("location"),
    "mileage_policy": _contains("mileage_policy"),
    "max_daily_rate": _at_most("daily_rate"),
    "min_daily_rate": _at_least("daily_rate"),
    "min_seats": _at_least("seats"),
    "features": _any_feature,
    "available": _available,
}


def matches(record: InventoryRecord, criteria: SearchCriteria) -> bool:
    """True when every criterion that is set holds for the record."""
    for name, value in criteria:
        if value is None:
            continue
        if not PREDICATES[name](record, value):
            return False
    return True


def search(records: Iterable[InventoryRecord], criteria: SearchCriteria) -> List[InventoryRecord]:
    """
    Filter records by criteria, keeping their original order.

    Empty criteria return every record; no match returns an empty list.
    """
    return [record for record in records if matches(record, criteria)]


class SearchEngine:
    def __init__(self, store: InventoryStore):
        self.store = store

    def search(self, criteria: SearchCriteria) -> List[InventoryRecord]:
        results = search(self.store.all(), criteria)
        logger.info(f"Search on {criteria.present_fields()} returned {len(results)} of {len(self.store)} records")
        return results

    def search_available(self, criteria: SearchCriteria) -> List[InventoryRecord]:
        """Search with `available` forced to True, whatever the criteria asked for."""
        return self.search(criteria.model_copy(update={"available": True}))
