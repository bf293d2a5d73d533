"""Core domain package for the warehouse automation cell."""

from .constants import (
    BATTERY_CONSUMPTION,
    FULL_BATTERY,
    MIN_BATTERY_LEVEL,
    SPECIAL_HANDLING_MARGIN,
    STATION_CAPACITY,
)
from .models import (
    EventKind,
    ProductType,
    ProductTypePolicy,
    RobotState,
    RobotTelemetry,
    StationSnapshot,
    WarehouseEvent,
    Zone,
)
from .policies import (
    PRODUCT_TYPE_POLICIES,
    STATE_MAX_SECONDS,
    STATE_TRANSITIONS,
    can_transition,
    is_safe_to_handle,
    max_dwell_seconds,
    policy_for,
    random_robot_state,
)

__all__ = [
    "BATTERY_CONSUMPTION",
    "FULL_BATTERY",
    "MIN_BATTERY_LEVEL",
    "SPECIAL_HANDLING_MARGIN",
    "STATION_CAPACITY",
    "EventKind",
    "ProductType",
    "ProductTypePolicy",
    "RobotState",
    "RobotTelemetry",
    "StationSnapshot",
    "WarehouseEvent",
    "Zone",
    "PRODUCT_TYPE_POLICIES",
    "STATE_MAX_SECONDS",
    "STATE_TRANSITIONS",
    "can_transition",
    "is_safe_to_handle",
    "max_dwell_seconds",
    "policy_for",
    "random_robot_state",
]
