import logging
from typing import Optional

from churro.api.core.inventory import InventoryStore
from churro.api.core.search import SearchEngine
from churro.api.core.spec_resolver import SpecResolver
from churro.api.services.models import (
    CarsDirective,
    CarsPayload,
    CarsView,
    ComparisonDirective,
    ComparisonView,
    ParsedReply,
    ResolvedView,
)

logger = logging.getLogger(__name__)


class ViewResolver:
    """
    Replace the searchable parts of a directive with inventory records.

    "cars" runs the search engine (available cars only), "comparison" looks
    up each spec and drops the ones with no match, every other view passes
    through as the model sent it.
    """

    def __init__(self, store: InventoryStore):
        self.search_engine = SearchEngine(store)
        self.spec_resolver = SpecResolver(store)

    def resolve(self, reply: ParsedReply) -> Optional[ResolvedView]:
        directive = reply.directive
        if directive is None:
            return None

        if isinstance(directive, CarsDirective):
            cars = self.search_engine.search_available(directive.data.filters)
            return CarsView(data=CarsPayload(cars=cars))

        if isinstance(directive, ComparisonDirective):
            cars = self.spec_resolver.resolve_all(directive.data.specs)
            if len(cars) < len(directive.data.specs):
                logger.info(f"Comparison resolved {len(cars)} of {len(directive.data.specs)} specs")
            return ComparisonView(data=CarsPayload(cars=cars))

        return directive
