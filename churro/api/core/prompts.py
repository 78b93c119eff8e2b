"""Instruction text for the rental assistant and the composer that assembles it.

The system prompt is three parts: the fixed instructions below, a catalog
block rendered from the inventory once at startup, and (only when the user
has interacted with cars on the page) a short list of those interactions.
"""

from typing import Iterable, List, Sequence

from churro.api.core.interactions import INTERACTION_HISTORY_LIMIT
from churro.api.services.models import InteractionEvent
from churro.models.schemas import Category, FuelType, InventoryRecord, PickupMethod, Transmission

BASE_SYSTEM_PROMPT = """
You are a helpful AI assistant for a premium car rental platform called Churro. Help users find the perfect car.

Respond ONLY with a valid JSON object, no markdown and no code fences, in this exact shape:
{{
  "message": "Your conversational reply to the user",
  "view": {{ "type": "cars", "data": {{ "filters": {{ "category": "suv", "maxDailyRate": 15000 }} }} }}
}}

View rules:
- "cars"       -> show a car grid. Put search filters in "data.filters". The server runs the search; never list cars yourself.
- "comparison" -> compare 2 or 3 cars side by side: "data": {{ "specs": [ {{ "make": "Tesla", "model": "Model S" }}, {{ "make": "Porsche", "model": "911" }} ] }}
- "booking"    -> show the booking form; optional "data": {{ "location": "...", "startDate": "YYYY-MM-DD", "endDate": "YYYY-MM-DD" }}
- "empty"      -> return to the welcome screen.
- Omit "view" entirely for clarifying questions or purely conversational replies.

## Filters for the "cars" view

Every filter is optional. Only include filters you have a signal for.

| filter          | matches                                                  |
|-----------------|----------------------------------------------------------|
| category        | exactly one of: {categories}                             |
| make, model     | text contained in the make / model (case-insensitive)    |
| transmission    | exactly one of: {transmissions}                          |
| fuelType        | exactly one of: {fuel_types}                             |
| mileagePolicy   | text contained in the policy, e.g. "Unlimited"           |
| maxDailyRate    | daily rate at most this many CENTS (e.g. $150 -> 15000)  |
| minDailyRate    | daily rate at least this many CENTS                      |
| minSeats        | at least this many seats                                 |
| features        | list of feature names; a car matches if it has ANY       |
| location        | text contained in the city, e.g. "Austin"                |
| pickupMethod    | exactly one of: {pickup_methods}                         |

Unavailable cars are never shown, so do not filter on availability.

## Confidence-based filtering (IMPORTANT)

You can ALWAYS show a filtered car list AND ask a follow-up question in the same response.
The view and the message are independent; use both whenever it helps.

STRONG signals (apply immediately as filters, show results):
- Vehicle type/vibe: "sporty", "electric", "SUV", "truck", "luxury", "fun", "family", "off-road"
- Budget: "cheap", "under $X", "premium", "budget-friendly"
- Use case: "road trip", "moving", "weekend", "commute", "adventure"
- Interaction signals: cars the user has clicked are strong preference indicators; weight them heavily

WEAK / NO signal:
- Completely open requests like "find me a car" or "what do you have?"
- In this case show all inventory (a "cars" view with no filters) AND ask one question to start narrowing down

Decision logic:
1. Apply every signal you have as filters. Even a single weak signal is worth acting on.
2. If you filtered but are still unsure about something useful (location, budget), add ONE short follow-up question.
3. Only withhold the view entirely if there is literally zero signal to filter on.
4. As confidence increases through the conversation, progressively tighten the filters.

Examples:
- "I need an SUV" -> cars view with {{ "category": "suv" }}, no question needed
- "under $200 a day" -> cars view with {{ "maxDailyRate": 20000 }} + "What kind of trip are you planning?"
- "family car for 7 in Denver" -> cars view with {{ "minSeats": 7, "location": "Denver" }}
- "Tesla or Porsche?" -> comparison view with both specs
"""

INTERACTIONS_HEADER = "User's recent on-page interactions (interest signals):"


def format_rate(cents) -> str:
    """Render a daily rate in cents as dollars, e.g. 18900 -> '$189'."""
    try:
        dollars = int(cents) / 100
    except (TypeError, ValueError):
        return "$?"
    if dollars == int(dollars):
        return f"${int(dollars)}"
    return f"${dollars:.2f}"


def _vocabulary(values: Iterable[str]) -> str:
    return ", ".join(f'"{v}"' for v in values)


def build_catalog_description(records: Sequence[InventoryRecord]) -> str:
    """
    Render the inventory as the catalog block of the system prompt.

    One line per car in store order, followed by the locations and features
    that actually occur, so the model picks filter values that can match.
    """
    lines = [f"Available inventory ({len(records)} cars, rates per day):"]
    for r in records:
        status = "" if r.available else " [currently unavailable]"
        lines.append(
            f"- {r.year} {r.make} {r.model} | {r.category.value} | {format_rate(r.daily_rate)} "
            f"| {r.seats} seats | {r.transmission.value} | {r.fuel_type.value} | {r.mileage_policy} "
            f"| {r.location} ({r.pickup_method.value}) | {', '.join(r.features) or 'no listed features'}{status}"
        )

    locations: List[str] = []
    features: List[str] = []
    for r in records:
        if r.location not in locations:
            locations.append(r.location)
        for f in r.features:
            if f not in features:
                features.append(f)

    lines.append("")
    lines.append(f"Locations: {_vocabulary(locations)}")
    lines.append(f"Features: {_vocabulary(features)}")
    return "\n".join(lines)


def render_interaction(event: InteractionEvent) -> str:
    car = event.car
    category = car.get("category")
    category = str(category).capitalize() if category else "?"
    return (
        f"- Viewed/clicked: {car.get('year', '?')} {car.get('make', '?')} {car.get('model', '?')} "
        f"({format_rate(car.get('dailyRate'))}/day, {category}, {car.get('location', '?')})"
    )


class PromptComposer:
    """Builds the system instruction for one chat turn."""

    def __init__(self, catalog_description: str):
        self.instructions = BASE_SYSTEM_PROMPT.format(
            categories=_vocabulary(c.value for c in Category),
            transmissions=_vocabulary(t.value for t in Transmission),
            fuel_types=_vocabulary(f.value for f in FuelType),
            pickup_methods=_vocabulary(p.value for p in PickupMethod),
        ).strip()
        self.catalog_description = catalog_description

    def compose(self, interactions: Sequence[InteractionEvent]) -> str:
        prompt = f"{self.instructions}\n\n{self.catalog_description}"
        recent = list(interactions)[-INTERACTION_HISTORY_LIMIT:]
        if not recent:
            return prompt
        lines = "\n".join(render_interaction(event) for event in recent)
        return f"{prompt}\n\n{INTERACTIONS_HEADER}\n{lines}"
