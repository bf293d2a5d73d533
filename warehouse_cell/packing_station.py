"""Packing stations: bounded admission queues tied to a zone."""

from __future__ import annotations

import threading
import uuid
from collections import deque
from typing import Deque, Optional

import structlog

from warehouse_cell.enterprise.core import STATION_CAPACITY, StationSnapshot, Zone
from warehouse_cell.observability.metrics import record_operation, record_station_drain
from warehouse_cell.product import Product

logger = structlog.get_logger(__name__)


class PackingStation:
    """Accepts delivered products until full, then waits to be drained."""

    def __init__(
        self,
        station_id: str,
        zone: Zone,
        capacity: int = STATION_CAPACITY,
    ) -> None:
        if not isinstance(station_id, str) or zone is None:
            raise ValueError("A packing station needs an id and a zone")
        if capacity <= 0:
            raise ValueError("Station capacity must be positive")

        self.id = station_id if station_id.strip() else str(uuid.uuid4())
        self.zone = Zone(zone)
        self.capacity = capacity
        self._queue: Deque[Product] = deque()
        self._active = True
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._active

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    def is_full(self) -> bool:
        return len(self._queue) >= self.capacity

    def activate(self) -> None:
        with self._lock:
            self._active = True

    def deactivate(self) -> None:
        with self._lock:
            self._active = False

    def receive(self, product: Optional[Product]) -> bool:
        """Admit ``product`` if the station is active and has room."""

        with self._lock:
            if not self._active:
                reason = "inactive"
            elif len(self._queue) >= self.capacity:
                reason = "full"
            elif product is None:
                reason = "no_product"
            else:
                self._queue.append(product)
                record_operation("station.receive", True)
                return True

        logger.debug("station.receive.refused", station_id=self.id, reason=reason)
        record_operation("station.receive", False)
        return False

    def drain(self) -> bool:
        """Process every queued product at once, freeing the whole capacity."""

        with self._lock:
            if not self._active or not self._queue:
                return False
            processed = len(self._queue)
            self._queue.clear()

        logger.info("station.drained", station_id=self.id, processed=processed)
        record_station_drain()
        return True

    def snapshot(self) -> StationSnapshot:
        with self._lock:
            queued = [product.id for product in self._queue]
            active = self._active
        return StationSnapshot(
            station_id=self.id,
            zone=self.zone,
            active=active,
            capacity=self.capacity,
            queued_products=queued,
        )

    def __repr__(self) -> str:
        return (
            f"PackingStation(id={self.id!r}, zone={self.zone.value}, "
            f"queued={len(self._queue)}/{self.capacity}, active={self._active})"
        )
