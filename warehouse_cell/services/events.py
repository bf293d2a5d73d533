"""In-memory event recording for orchestrators driving the cell."""

from __future__ import annotations

import threading
from typing import List, Optional, Protocol

from warehouse_cell.enterprise.core import EventKind, WarehouseEvent


class EventRecorder(Protocol):
	"""Sink for immutable warehouse events. The cell itself never calls it."""

	def record(self, event: WarehouseEvent) -> None:  # pragma: no cover - interface
		...


class InMemoryEventRecorder:
	"""Append-only event log kept in process memory."""

	def __init__(self) -> None:
		self._events: List[WarehouseEvent] = []
		self._lock = threading.Lock()

	def record(self, event: WarehouseEvent) -> None:
		if event is None:
			raise ValueError("Cannot record a missing event")
		with self._lock:
			self._events.append(event)

	def events(self, kind: Optional[EventKind] = None) -> List[WarehouseEvent]:
		with self._lock:
			if kind is None:
				return list(self._events)
			return [event for event in self._events if event.kind == kind]

	def recent(self, limit: int = 50) -> List[WarehouseEvent]:
		with self._lock:
			return list(reversed(self._events))[:limit]

	def __len__(self) -> int:
		return len(self._events)

	def reset(self) -> None:
		with self._lock:
			self._events.clear()
