"""Robot state machine for the automation cell.

A robot is driven entirely from outside: an orchestrator calls
:meth:`Robot.move_to`, :meth:`Robot.pick_up` or :meth:`Robot.deliver` and
gets back a success flag. Refused operations never raise and leave the robot
unchanged, except that every movement attempt costs battery.

Every state change goes through :data:`STATE_TRANSITIONS`; an operation that
would need an illegal transition is refused.
"""

from __future__ import annotations

import threading
from typing import Optional

import structlog

from warehouse_cell.enterprise.core import (
    BATTERY_CONSUMPTION,
    FULL_BATTERY,
    MIN_BATTERY_LEVEL,
    RobotState,
    RobotTelemetry,
    Zone,
    can_transition,
)
from warehouse_cell.observability.metrics import record_operation
from warehouse_cell.packing_station import PackingStation
from warehouse_cell.product import Product

logger = structlog.get_logger(__name__)


class Robot:
    """Mobile robot carrying at most one product between zones."""

    def __init__(self, robot_id: str, zone: Zone) -> None:
        if not isinstance(robot_id, str) or not robot_id.strip():
            raise ValueError("A robot needs a non-empty id")
        if zone is None:
            raise ValueError("A robot needs a starting zone")

        self._id = robot_id
        self._zone = Zone(zone)
        self._state = RobotState.FREE
        self._battery = FULL_BATTERY
        self._carried: Optional[Product] = None
        self._lock = threading.RLock()

    @property
    def id(self) -> str:
        return self._id

    @property
    def state(self) -> RobotState:
        return self._state

    @property
    def battery(self) -> int:
        return self._battery

    @property
    def zone(self) -> Zone:
        return self._zone

    @property
    def carried_product(self) -> Optional[Product]:
        return self._carried

    def _refuse(self, operation: str, reason: str) -> bool:
        logger.debug(f"robot.{operation}.refused", robot_id=self._id, reason=reason)
        record_operation(f"robot.{operation}", False)
        return False

    def _accept(self, operation: str, **details: object) -> bool:
        logger.info(f"robot.{operation}", robot_id=self._id, **details)
        record_operation(f"robot.{operation}", True)
        return True

    def _transition(self, target: RobotState) -> bool:
        if not can_transition(self._state, target):
            return False
        logger.debug(
            "robot.transition",
            robot_id=self._id,
            source=self._state.value,
            target=target.value,
        )
        self._state = target
        return True

    def _consume_battery(self) -> None:
        # Never below zero.
        self._battery = max(0, self._battery - BATTERY_CONSUMPTION)

    def move_to(self, zone: Optional[Zone]) -> bool:
        """Move to ``zone``.

        The attempt always consumes battery, whether or not the robot moves.
        A destination outside the zone set is refused like any other bad target.
        A carried product's handling requirements are not checked here.
        """

        with self._lock:
            try:
                if self._battery <= MIN_BATTERY_LEVEL:
                    return self._refuse("move", "battery_low")
                if zone is None:
                    return self._refuse("move", "no_destination")
                if zone not in set(Zone):
                    return self._refuse("move", "unknown_zone")
                if zone == self._zone:
                    return self._refuse("move", "already_there")

                source = self._zone
                self._zone = Zone(zone)
                return self._accept("move", source=source.value, target=self._zone.value)
            finally:
                self._consume_battery()

    def requires_charge(self) -> bool:
        """Pure check of whether the battery is too low to keep working.

        While carrying, the carried product's type minimum also counts.
        """

        if self._carried is not None:
            threshold = max(MIN_BATTERY_LEVEL, self._carried.policy.min_battery_required)
            return self._battery <= threshold
        return self._battery <= MIN_BATTERY_LEVEL

    def needs_charging(self) -> bool:
        """Check whether the robot needs charging. The check can change the state.

        An empty-handed robot at or below the minimum battery level is moved to
        CHARGING, when the transition table allows it. If you only want to read
        the battery condition, call :meth:`requires_charge`.
        """

        with self._lock:
            required = self.requires_charge()
            if required and self._carried is None and self._state != RobotState.CHARGING:
                if self._transition(RobotState.CHARGING):
                    logger.info("robot.charging", robot_id=self._id, battery=self._battery)
            return required

    def pick_up(self, product: Optional[Product]) -> bool:
        """Reserve ``product`` and start carrying it."""

        with self._lock:
            if self._state != RobotState.FREE:
                return self._refuse("pick_up", f"state_{self._state.value.lower()}")
            if self.needs_charging():
                return self._refuse("pick_up", "needs_charging")
            if product is None:
                return self._refuse("pick_up", "no_product")
            if product.zone != self._zone:
                return self._refuse("pick_up", "wrong_zone")
            if not product.can_be_handled_safely(self._battery):
                return self._refuse("pick_up", "unsafe_handling")
            if not product.reserve():
                return self._refuse("pick_up", "already_reserved")

            self._carried = product
            self._transition(RobotState.BUSY)
            return self._accept("pick_up", product_id=product.id, zone=self._zone.value)

    def deliver(self, station: Optional[PackingStation]) -> bool:
        """Hand the carried product to ``station`` and become free again."""

        with self._lock:
            product = self._carried
            if product is None:
                return self._refuse("deliver", "not_carrying")
            if not can_transition(self._state, RobotState.FREE):
                return self._refuse("deliver", f"state_{self._state.value.lower()}")
            if station is None:
                return self._refuse("deliver", "no_station")
            if station.is_full():
                return self._refuse("deliver", "station_full")
            if station.zone != self._zone:
                return self._refuse("deliver", "wrong_zone")
            if not station.active:
                return self._refuse("deliver", "station_inactive")
            if self.needs_charging():
                return self._refuse("deliver", "needs_charging")
            if not station.receive(product):
                return self._refuse("deliver", "station_rejected")

            product.relocate(station.zone)
            self._carried = None
            self._transition(RobotState.FREE)
            return self._accept("deliver", product_id=product.id, station_id=station.id)

    def charge(self) -> bool:
        """Finish a charging cycle: battery back to full and the robot FREE."""

        with self._lock:
            if self._state != RobotState.CHARGING:
                return self._refuse("charge", f"state_{self._state.value.lower()}")
            self._battery = FULL_BATTERY
            self._transition(RobotState.FREE)
            return self._accept("charge", battery=self._battery)

    def start_maintenance(self) -> bool:
        """Take the robot out of service.

        A carried product is dropped and its reservation released so another
        robot can claim it.
        """

        with self._lock:
            if not can_transition(self._state, RobotState.MAINTENANCE):
                return self._refuse("start_maintenance", f"state_{self._state.value.lower()}")
            dropped = self._carried
            if dropped is not None:
                dropped.release()
                self._carried = None
            self._transition(RobotState.MAINTENANCE)
            return self._accept(
                "start_maintenance",
                dropped_product=dropped.id if dropped else None,
            )

    def finish_maintenance(self) -> bool:
        with self._lock:
            if self._state != RobotState.MAINTENANCE:
                return self._refuse("finish_maintenance", f"state_{self._state.value.lower()}")
            self._transition(RobotState.FREE)
            return self._accept("finish_maintenance")

    def telemetry(self) -> RobotTelemetry:
        with self._lock:
            return RobotTelemetry(
                robot_id=self._id,
                state=self._state,
                zone=self._zone,
                battery_level=self._battery,
                carried_product=self._carried.id if self._carried else None,
            )

    def __repr__(self) -> str:
        return (
            f"Robot(id={self._id!r}, state={self._state.value}, battery={self._battery}, "
            f"zone={self._zone.value}, carried={self._carried.id if self._carried else None})"
        )
