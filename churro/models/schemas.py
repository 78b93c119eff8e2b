from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    ECONOMY = "economy"
    SEDAN = "sedan"
    SUV = "suv"
    LUXURY = "luxury"
    SPORTS = "sports"
    MINIVAN = "minivan"
    ELECTRIC = "electric"
    TRUCK = "truck"


class Transmission(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


class FuelType(str, Enum):
    GASOLINE = "gasoline"
    HYBRID = "hybrid"
    ELECTRIC = "electric"


class PickupMethod(str, Enum):
    DOWNTOWN = "Downtown"
    AIRPORT = "Airport"


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryRecord(CamelModel):
    """A rental vehicle. Loaded once at startup and never modified."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    make: str
    model: str
    year: int
    category: Category
    daily_rate: int = Field(..., ge=0, description="Daily rate in cents")
    image_url: str = ""
    features: List[str] = Field(default_factory=list)
    seats: int = Field(..., ge=1)
    transmission: Transmission
    fuel_type: FuelType
    available: bool = True
    mileage_policy: str
    location: str = Field(..., description="City, e.g. 'Austin, TX'")
    pickup_method: PickupMethod

    @property
    def display_name(self) -> str:
        return f"{self.year} {self.make} {self.model}"


# Numeric filters are not validated up front; anything that is not a number
# simply matches no records.
Numeric = Union[int, float, str]


class SearchCriteria(CamelModel):
    """Sparse filter set; a field left as None imposes no constraint."""

    category: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    transmission: Optional[str] = None
    fuel_type: Optional[str] = None
    mileage_policy: Optional[str] = None
    max_daily_rate: Optional[Numeric] = None
    min_daily_rate: Optional[Numeric] = None
    min_seats: Optional[Numeric] = None
    features: Optional[List[str]] = None
    location: Optional[str] = None
    pickup_method: Optional[str] = None
    available: Optional[bool] = None

    @field_validator("features", mode="before")
    @classmethod
    def convert_string_to_list(cls, v):
        """Accept a single feature string as a one-element list."""
        if isinstance(v, str):
            return [v]
        return v

    def present_fields(self) -> List[str]:
        """Names of the fields that constrain the search."""
        return [name for name, value in self if value is not None]
