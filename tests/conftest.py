"""Shared fixtures: a small hand-built inventory and a scripted model gateway."""

import pytest

from churro.api.core.inventory import InventoryStore, load_inventory
from churro.api.services.config import INVENTORY_PATH
from churro.models.schemas import InventoryRecord


def build_record(**overrides):
    data = dict(
        id="1",
        make="Toyota",
        model="Camry",
        year=2024,
        category="sedan",
        daily_rate=6500,
        image_url="",
        features=["Bluetooth"],
        seats=5,
        transmission="automatic",
        fuel_type="gasoline",
        available=True,
        mileage_policy="Unlimited",
        location="Austin, TX",
        pickup_method="Downtown",
    )
    data.update(overrides)
    return InventoryRecord(**data)


SAMPLE_RECORDS = [
    build_record(id="1", make="Tesla", model="Model S Plaid", category="electric", daily_rate=18900,
                 features=["Autopilot", "Premium Audio"], fuel_type="electric",
                 location="San Francisco, CA"),
    build_record(id="2", make="Porsche", model="911 Carrera", year=2023, category="sports", daily_rate=29500,
                 seats=4, transmission="manual", features=["Sport Chrono", "Bose Audio"],
                 mileage_policy="150 miles/day", location="Los Angeles, CA", pickup_method="Airport"),
    build_record(id="3", make="Chevrolet", model="Tahoe", category="suv", daily_rate=13000,
                 features=["Heated Seats", "Tow Package"], location="Denver, CO"),
    build_record(id="4", make="Jeep", model="Grand Cherokee", year=2023, category="suv", daily_rate=14000,
                 features=["All-Wheel Drive", "Heated Seats"], mileage_policy="150 miles/day",
                 location="Miami, FL", pickup_method="Airport"),
    build_record(id="5", make="Honda", model="Odyssey", year=2023, category="minivan", daily_rate=9500,
                 seats=8, features=["Apple CarPlay"], available=False),
    build_record(id="6", make="Nissan", model="Versa", year=2023, category="economy", daily_rate=4500,
                 transmission="manual", features=[], mileage_policy="100 miles/day",
                 location="Chicago, IL"),
    build_record(id="7", make="Tesla", model="Model 3", category="electric", daily_rate=9900,
                 features=["Autopilot", "Heated Seats"], fuel_type="electric",
                 location="San Francisco, CA", pickup_method="Airport"),
]


class FakeGateway:
    """Stands in for the model gateway; returns a fixed reply or raises."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, user_message, system=None, history=()):
        self.calls.append({"user_message": user_message, "system": system, "history": list(history)})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def sample_records():
    return list(SAMPLE_RECORDS)


@pytest.fixture
def sample_store():
    return InventoryStore(SAMPLE_RECORDS)


@pytest.fixture(scope="session")
def shipped_store():
    return load_inventory(INVENTORY_PATH)


@pytest.fixture
def fake_gateway():
    return FakeGateway
