"""Dispatch tables for state-transition legality and product handling.

Both tables are plain mappings so the policy data can be inspected and
tested without instantiating any robot or product.
"""

from __future__ import annotations

import random
from types import MappingProxyType
from typing import FrozenSet, Mapping

from .constants import SPECIAL_HANDLING_MARGIN
from .models import ProductType, ProductTypePolicy, RobotState

STATE_TRANSITIONS: Mapping[RobotState, FrozenSet[RobotState]] = MappingProxyType(
    {
        RobotState.FREE: frozenset({RobotState.BUSY, RobotState.CHARGING}),
        RobotState.BUSY: frozenset(
            {RobotState.FREE, RobotState.CHARGING, RobotState.MAINTENANCE}
        ),
        RobotState.CHARGING: frozenset({RobotState.FREE, RobotState.MAINTENANCE}),
        RobotState.MAINTENANCE: frozenset({RobotState.FREE}),
    }
)

# Longest time, in seconds, a robot is expected to dwell in each state.
STATE_MAX_SECONDS: Mapping[RobotState, int] = MappingProxyType(
    {
        RobotState.FREE: 1,
        RobotState.BUSY: 2,
        RobotState.CHARGING: 3,
        RobotState.MAINTENANCE: 4,
    }
)


PRODUCT_TYPE_POLICIES: Mapping[ProductType, ProductTypePolicy] = MappingProxyType(
    {
        policy.type: policy
        for policy in (
            ProductTypePolicy(
                type=ProductType.SMALL_ELECTRONICS,
                max_weight=1000,
                min_battery_required=60,
                requires_special_handling=True,
            ),
            ProductTypePolicy(
                type=ProductType.LARGE_ELECTRONICS,
                max_weight=5000,
                min_battery_required=80,
                requires_special_handling=True,
            ),
            ProductTypePolicy(
                type=ProductType.CLOTHING,
                max_weight=500,
                min_battery_required=20,
            ),
            ProductTypePolicy(
                type=ProductType.BOOKS,
                max_weight=800,
                min_battery_required=30,
            ),
            ProductTypePolicy(
                type=ProductType.FOOD,
                max_weight=2000,
                min_battery_required=70,
                requires_special_handling=True,
            ),
            ProductTypePolicy(
                type=ProductType.FRAGILE,
                max_weight=1500,
                min_battery_required=75,
                requires_special_handling=True,
            ),
        )
    }
)


def can_transition(current: RobotState, target: RobotState) -> bool:
    """Return ``True`` if ``current -> target`` is a legal robot transition."""

    return target in STATE_TRANSITIONS[current]


def max_dwell_seconds(state: RobotState) -> int:
    return STATE_MAX_SECONDS[RobotState(state)]


def policy_for(product_type: ProductType) -> ProductTypePolicy:
    return PRODUCT_TYPE_POLICIES[ProductType(product_type)]


def handling_threshold(policy: ProductTypePolicy) -> int:
    """Battery bound for handling the type.

    Special-handling types must strictly exceed the bound, others only reach it.
    """

    if policy.requires_special_handling:
        return policy.min_battery_required + SPECIAL_HANDLING_MARGIN
    return policy.min_battery_required


def is_safe_to_handle(policy: ProductTypePolicy, battery_level: int) -> bool:
    if policy.requires_special_handling:
        return handling_threshold(policy) < battery_level
    return policy.permits(battery_level)


def random_robot_state(rng: random.Random) -> RobotState:
    """Draw a robot state uniformly using the supplied generator."""

    return rng.choice(list(RobotState))
