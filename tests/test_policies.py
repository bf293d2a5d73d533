import random

import pytest
from pydantic import ValidationError

from warehouse_cell.enterprise.core import (
    PRODUCT_TYPE_POLICIES,
    STATE_MAX_SECONDS,
    STATE_TRANSITIONS,
    ProductType,
    RobotState,
    can_transition,
    max_dwell_seconds,
    policy_for,
    random_robot_state,
)


def test_every_product_type_has_a_policy():
    assert set(PRODUCT_TYPE_POLICIES) == set(ProductType)

    fragile = policy_for(ProductType.FRAGILE)
    assert fragile.max_weight == 1500
    assert fragile.min_battery_required == 75
    assert fragile.requires_special_handling

    clothing = policy_for(ProductType.CLOTHING)
    assert clothing.min_battery_required == 20
    assert not clothing.requires_special_handling


def test_special_handling_flags():
    special = {ptype for ptype, policy in PRODUCT_TYPE_POLICIES.items() if policy.requires_special_handling}
    assert special == {
        ProductType.SMALL_ELECTRONICS,
        ProductType.LARGE_ELECTRONICS,
        ProductType.FOOD,
        ProductType.FRAGILE,
    }


def test_policy_table_is_read_only():
    with pytest.raises(TypeError):
        PRODUCT_TYPE_POLICIES[ProductType.BOOKS] = policy_for(ProductType.CLOTHING)  # type: ignore[index]

    with pytest.raises(ValidationError):
        policy_for(ProductType.BOOKS).min_battery_required = 5


def test_transition_table():
    assert STATE_TRANSITIONS[RobotState.FREE] == {RobotState.BUSY, RobotState.CHARGING}
    assert STATE_TRANSITIONS[RobotState.MAINTENANCE] == {RobotState.FREE}

    assert can_transition(RobotState.BUSY, RobotState.MAINTENANCE)
    assert can_transition(RobotState.CHARGING, RobotState.FREE)
    assert not can_transition(RobotState.FREE, RobotState.MAINTENANCE)
    assert not can_transition(RobotState.CHARGING, RobotState.BUSY)
    assert not can_transition(RobotState.MAINTENANCE, RobotState.CHARGING)


def test_no_state_transitions_to_itself():
    for state, targets in STATE_TRANSITIONS.items():
        assert state not in targets


def test_dwell_limits_per_state():
    assert set(STATE_MAX_SECONDS) == set(RobotState)
    assert max_dwell_seconds(RobotState.FREE) == 1
    assert max_dwell_seconds(RobotState.BUSY) == 2
    assert max_dwell_seconds(RobotState.CHARGING) == 3
    assert max_dwell_seconds("MAINTENANCE") == 4

def test_random_robot_state_uses_injected_generator():
    first = [random_robot_state(random.Random(42)) for _ in range(5)]
    second = [random_robot_state(random.Random(42)) for _ in range(5)]
    assert first == second

    rng = random.Random(3)
    drawn = {random_robot_state(rng) for _ in range(200)}
    assert drawn == set(RobotState)
