# churro/api/services/models.py
from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from churro.models.schemas import CamelModel, InventoryRecord, SearchCriteria


# --- Request side ---

class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[str] = None


class InteractionEvent(BaseModel):
    """A car the user engaged with on the page, as the UI sent it."""
    type: str = "car_click"
    car: Dict[str, Any] = Field(default_factory=dict)
    timestamp: Optional[str] = None


class ChatRequest(BaseModel):
    message: str = Field(..., description="The user's new message")
    history: List[ConversationTurn] = Field(default_factory=list, description="Prior turns, oldest first")
    interactions: List[InteractionEvent] = Field(default_factory=list, description="Recent car interactions, oldest first")


# --- View directives emitted by the model ---

class ComparisonSpec(BaseModel):
    make: str
    model: str


class CarsData(BaseModel):
    filters: SearchCriteria = Field(default_factory=SearchCriteria)

    @model_validator(mode="before")
    @classmethod
    def accept_bare_filters(cls, data):
        if data is None:
            return {}
        # Models sometimes put the filter fields directly under "data"
        if isinstance(data, dict) and "filters" not in data:
            return {"filters": data}
        if isinstance(data, dict) and data["filters"] is None:
            return {**data, "filters": {}}
        return data


class ComparisonData(BaseModel):
    specs: List[ComparisonSpec] = Field(..., min_length=2, max_length=3)


class BookingData(CamelModel):
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class CarDetailData(BaseModel):
    car: Dict[str, Any]


class EmptyDirective(BaseModel):
    type: Literal["empty"] = "empty"


class CarsDirective(BaseModel):
    type: Literal["cars"] = "cars"
    data: CarsData = Field(default_factory=CarsData)

    @field_validator("data", mode="before")
    @classmethod
    def null_data_means_no_filters(cls, value):
        return {} if value is None else value


class ComparisonDirective(BaseModel):
    type: Literal["comparison"] = "comparison"
    data: ComparisonData


class BookingDirective(BaseModel):
    type: Literal["booking"] = "booking"
    data: Optional[BookingData] = None


class CarDetailDirective(BaseModel):
    type: Literal["car_detail"] = "car_detail"
    data: CarDetailData


class MapDirective(BaseModel):
    type: Literal["map"] = "map"
    data: Optional[Dict[str, Any]] = None


ViewDirective = Annotated[
    Union[EmptyDirective, CarsDirective, ComparisonDirective, BookingDirective, CarDetailDirective, MapDirective],
    Field(discriminator="type"),
]

view_directive_adapter = TypeAdapter(ViewDirective)


class ModelReply(BaseModel):
    """
    The JSON object the model is asked to produce. Only the message is
    checked here; the view is validated on its own.
    """
    message: str
    view: Optional[Any] = None


class ParsedReply(BaseModel):
    message: str
    directive: Optional[ViewDirective] = None


# --- Resolved views returned to the caller ---

class CarsPayload(BaseModel):
    cars: List[InventoryRecord]


class CarsView(BaseModel):
    type: Literal["cars"] = "cars"
    data: CarsPayload


class ComparisonView(BaseModel):
    type: Literal["comparison"] = "comparison"
    data: CarsPayload


ResolvedView = Annotated[
    Union[EmptyDirective, CarsView, ComparisonView, BookingDirective, CarDetailDirective, MapDirective],
    Field(discriminator="type"),
]


class ChatResponse(BaseModel):
    message: str
    view: Optional[ResolvedView] = None


class SearchResponse(BaseModel):
    count: int
    cars: List[InventoryRecord]
