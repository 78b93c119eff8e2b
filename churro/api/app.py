from fastapi import FastAPI, HTTPException, Depends, Request
from contextlib import asynccontextmanager
import asyncio
import logging
from timeit import default_timer as timer
from typing import Optional

from churro.api.core.inventory import InventoryStore, load_inventory
from churro.api.core.pipeline import ChatPipeline
from churro.api.core.search import SearchEngine
from churro.api.services.config import API_TITLE, API_DESCRIPTION, API_VERSION, INVENTORY_PATH
from churro.api.services.gateway import create_gateway
from churro.api.services.models import SearchResponse
from churro.models.schemas import InventoryRecord, SearchCriteria

# Set up logging
logger = logging.getLogger(__name__)


# Define application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup/shutdown lifecycle: load the inventory and build the model
    gateway once. A missing inventory stops startup; a missing API key
    only disables /api/chat.
    """
    logger.info("Starting up, loading inventory and model gateway")
    ts1 = timer()
    try:
        store = await asyncio.to_thread(load_inventory, INVENTORY_PATH)
    except Exception as e:
        logger.exception("Startup initialization failed: %s", e)
        raise
    gateway = create_gateway()

    app.state.inventory = store
    app.state.gateway = gateway
    app.state.pipeline = ChatPipeline(store, gateway) if gateway is not None else None
    ts2 = timer()
    logger.info(f"Startup completed in {ts2 - ts1:.2f} seconds")

    yield

    # Cleanup on shutdown
    logger.info("Shutting down")


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan
)


# Dependencies reading what the lifespan loaded
def get_inventory(request: Request) -> InventoryStore:
    return request.app.state.inventory


def get_pipeline(request: Request) -> Optional[ChatPipeline]:
    return getattr(request.app.state, "pipeline", None)


# Home endpoint
@app.get("/")
def read_root():
    return {
        "message": "Churro Rental Search API",
        "docs": "/docs",
        "endpoints": [
            "/api/chat",
            "/api/search",
            "/api/cars/{car_id}",
            "/health",
            "/ready"
        ]
    }


# Search endpoint
@app.post("/api/search", response_model=SearchResponse)
def search_cars(criteria: SearchCriteria, store: InventoryStore = Depends(get_inventory)):
    """
    Run the search engine directly. Only available cars are returned.
    """
    cars = SearchEngine(store).search_available(criteria)
    return SearchResponse(count=len(cars), cars=cars)


@app.get("/api/cars/{car_id}", response_model=InventoryRecord)
def get_car(car_id: str, store: InventoryStore = Depends(get_inventory)):
    record = store.get(car_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No car with id '{car_id}'")
    return record


# Health check endpoint
@app.get("/health")
def health_check():
    return {"status": "healthy"}


# Ready check endpoint
@app.get("/ready")
def ready_check(request: Request):
    inventory = getattr(request.app.state, "inventory", None)
    return {
        "ready": inventory is not None,
        "inventory_loaded": inventory is not None and len(inventory) > 0,
        "model_configured": getattr(request.app.state, "gateway", None) is not None
    }
