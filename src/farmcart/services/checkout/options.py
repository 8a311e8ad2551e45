"""Fixed delivery option catalog offered at checkout."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Sequence

from ...models.domain import DeliveryOption, PickupLocation

PICKUP_LOCATION = PickupLocation(
    name="Farm Fresh Distribution Center",
    address="123 Harvest Lane, Farmville, CA 94107",
)
PICKUP_TIME_SLOTS = (
    "9:00 AM - 12:00 PM",
    "12:00 PM - 3:00 PM",
    "3:00 PM - 6:00 PM",
)


def default_delivery_options(now: datetime | None = None) -> tuple[DeliveryOption, ...]:
    current = now or datetime.now(timezone.utc)
    return (
        DeliveryOption(
            id="standard",
            type="standard",
            name="Standard Delivery",
            description="Delivery within 3-5 days",
            price=Decimal("4.99"),
            estimated_delivery=current + timedelta(days=4),
        ),
        DeliveryOption(
            id="express",
            type="express",
            name="Express Delivery",
            description="Delivery within 1-2 days",
            price=Decimal("9.99"),
            estimated_delivery=current + timedelta(days=1),
        ),
        DeliveryOption(
            id="pickup",
            type="pickup",
            name="Local Pickup",
            description="Pick up from our distribution center",
            price=Decimal("0.00"),
            estimated_delivery=current + timedelta(days=1),
            pickup_location=PICKUP_LOCATION,
            available_time_slots=PICKUP_TIME_SLOTS,
        ),
    )


def get_delivery_option(option_id: str, options: Sequence[DeliveryOption] | None = None) -> DeliveryOption:
    for option in options if options is not None else default_delivery_options():
        if option.id == option_id:
            return option
    raise ValueError(f"Unknown delivery option '{option_id}'.")
