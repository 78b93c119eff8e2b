import logging
from typing import Iterable, List, Optional, Sequence

from churro.api.core.inventory import InventoryStore
from churro.models.schemas import InventoryRecord

logger = logging.getLogger(__name__)


def resolve_spec(records: Iterable[InventoryRecord], make: str, model: str) -> Optional[InventoryRecord]:
    """
    Find the inventory record for a (make, model) pair.

    Both parts are case-insensitive substring matches, so "tesla" / "model s"
    finds "Tesla" / "Model S Plaid". The first qualifying record in store
    order wins; None when nothing qualifies.
    """
    make_q = (make or "").lower()
    model_q = (model or "").lower()
    for record in records:
        if make_q in record.make.lower() and model_q in record.model.lower():
            return record
    return None


class SpecResolver:
    def __init__(self, store: InventoryStore):
        self.store = store

    def resolve(self, make: str, model: str) -> Optional[InventoryRecord]:
        return resolve_spec(self.store.all(), make, model)

    def resolve_all(self, specs: Sequence) -> List[InventoryRecord]:
        """Resolve specs in order, dropping the ones with no match."""
        resolved = []
        for spec in specs:
            record = self.resolve(spec.make, spec.model)
            if record is None:
                logger.info(f"No inventory match for comparison spec '{spec.make} {spec.model}'")
                continue
            resolved.append(record)
        return resolved
