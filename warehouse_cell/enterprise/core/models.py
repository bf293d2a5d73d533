"""Domain models for the warehouse automation cell.

Enumerations and immutable records shared by the robot, product and packing
station entities. The mutable entities themselves live in their own modules;
everything here is plain data that can be compared, logged and serialised.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt


class Zone(str, enum.Enum):
    """Storage zones of the cell. Labels only, no geometry."""

    ZONE_A = "A"
    ZONE_B = "B"
    ZONE_C = "C"
    ZONE_D = "D"


class RobotState(str, enum.Enum):
    """Operational states for a robot."""

    FREE = "FREE"
    BUSY = "BUSY"
    CHARGING = "CHARGING"
    MAINTENANCE = "MAINTENANCE"


class ProductType(str, enum.Enum):
    """Product categories handled by the cell."""

    SMALL_ELECTRONICS = "small_electronics"
    LARGE_ELECTRONICS = "large_electronics"
    CLOTHING = "clothing"
    BOOKS = "books"
    FOOD = "food"
    FRAGILE = "fragile"


class EventKind(str, enum.Enum):
    """Kinds of warehouse events an orchestrator may record."""

    PRODUCT_PICKED_UP = "product_picked_up"
    PRODUCT_DELIVERED = "product_delivered"
    ROBOT_CHARGING = "robot_charging"
    COLLISION_AVOIDED = "collision_avoided"
    SYSTEM_ERROR = "system_error"
    STATION_FULL = "station_full"


class ProductTypePolicy(BaseModel):
    """Static handling requirements of one product type."""

    model_config = ConfigDict(frozen=True)

    type: ProductType
    max_weight: PositiveInt = Field(..., description="Nominal maximum weight in grams.")
    min_battery_required: NonNegativeInt = Field(..., le=100)
    requires_special_handling: bool = False

    def permits(self, battery_level: int) -> bool:
        """Base handling rule: enough battery for the type's nominal minimum."""

        return self.min_battery_required <= battery_level


class WarehouseEvent(BaseModel):
    """Immutable record of something that happened in the cell."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=datetime.utcnow)
    kind: EventKind
    robot_id: str = Field(..., min_length=1)
    zone: Zone


class RobotTelemetry(BaseModel):
    """Current snapshot of a robot's key metrics."""

    model_config = ConfigDict(frozen=True)

    robot_id: str
    state: RobotState
    zone: Zone
    battery_level: int = Field(..., ge=0, le=100, description="Battery percentage (0-100)")
    carried_product: Optional[str] = Field(None, description="Product ID currently carried.")


class StationSnapshot(BaseModel):
    """Read-only view of a packing station's queue."""

    model_config = ConfigDict(frozen=True)

    station_id: str
    zone: Zone
    active: bool
    capacity: PositiveInt
    queued_products: Sequence[str] = ()

    @property
    def queue_size(self) -> int:
        return len(self.queued_products)
