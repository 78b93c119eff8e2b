import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

import pandas as pd
from pydantic import ValidationError

from churro.models.schemas import InventoryRecord

logger = logging.getLogger(__name__)

FEATURE_SEPARATOR = "|"


class InventoryLoadError(RuntimeError):
    """Raised when the inventory source cannot be read or validated."""


class InventoryStore:
    """
    Read-only collection of vehicle records.

    Iteration order is the order the records were loaded in; every search
    and lookup relies on it.
    """

    def __init__(self, records: Iterable[InventoryRecord]):
        records = tuple(records)
        by_id: Dict[str, InventoryRecord] = {}
        for record in records:
            if record.id in by_id:
                raise ValueError(f"Duplicate inventory id: {record.id}")
            by_id[record.id] = record
        self._records = records
        self._by_id = by_id

    def all(self) -> Tuple[InventoryRecord, ...]:
        return self._records

    def get(self, car_id: str) -> Optional[InventoryRecord]:
        return self._by_id.get(car_id)

    def __len__(self):
        return len(self._records)

    def __iter__(self) -> Iterator[InventoryRecord]:
        return iter(self._records)


def split_features(value) -> list:
    if not isinstance(value, str):
        return []
    return [f.strip() for f in value.split(FEATURE_SEPARATOR) if f.strip()]


def records_from_df(df: pd.DataFrame) -> list:
    """Validate DataFrame rows into InventoryRecord objects"""
    records = []
    for idx, row in enumerate(df.to_dict(orient="records")):
        row["features"] = split_features(row.get("features"))
        try:
            records.append(InventoryRecord.model_validate(row))
        except ValidationError as e:
            raise InventoryLoadError(f"Invalid inventory row {idx}: {e}") from e
    return records


def load_inventory(path: str) -> InventoryStore:
    """
    Load the inventory CSV into an InventoryStore.

    Every column is read as text and converted by the record model, so
    "true"/"false" and numeric strings are handled in one place.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise InventoryLoadError(f"Could not read inventory at {path}: {e}") from e

    records = records_from_df(df)
    try:
        store = InventoryStore(records)
    except ValueError as e:
        raise InventoryLoadError(str(e)) from e

    logger.info(f"Loaded {len(store)} inventory records from {path}")
    return store
