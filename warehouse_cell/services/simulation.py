"""Demo orchestration of the automation cell.

The cell only defines what one operation does; something outside it has to
decide which robot acts and with what target. :class:`CellSimulation` is that
outside caller for demos and soak tests. It picks robots and targets with an
injected :class:`random.Random`, so a seeded run is fully reproducible, and
records what happened through an :class:`EventRecorder`.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from warehouse_cell.enterprise.config.settings import AppSettings, get_settings
from warehouse_cell.enterprise.core import EventKind, ProductType, RobotState, WarehouseEvent, Zone
from warehouse_cell.packing_station import PackingStation
from warehouse_cell.product import Product
from warehouse_cell.robot import Robot
from warehouse_cell.services.events import EventRecorder, InMemoryEventRecorder

logger = structlog.get_logger(__name__)


@dataclass
class SimulationReport:
	"""Counters accumulated over a simulation run."""

	steps: int = 0
	moves: int = 0
	pickups: int = 0
	deliveries: int = 0
	charges: int = 0
	maintenance_stops: int = 0
	drains: int = 0
	refused: int = 0


@dataclass
class CellContext:
	settings: AppSettings
	robots: List[Robot]
	stations: Dict[Zone, PackingStation]
	products: List[Product] = field(default_factory=list)


class CellSimulation:
	"""Drives robots through pick-up and delivery cycles."""

	def __init__(
		self,
		settings: Optional[AppSettings] = None,
		rng: Optional[random.Random] = None,
		recorder: Optional[EventRecorder] = None,
	) -> None:
		self.settings = settings if settings is not None else get_settings()
		options = self.settings.simulation
		self.rng = rng if rng is not None else random.Random(options.seed)
		self.recorder = recorder if recorder is not None else InMemoryEventRecorder()
		self.report = SimulationReport()

		zones = list(Zone)
		self.robots = [Robot(f"AGV-{i + 1}", zones[i % len(zones)]) for i in range(options.robots)]
		self.stations = {zone: PackingStation(f"station-{zone.value}", zone) for zone in zones}
		self.products: List[Product] = []
		self._destinations: Dict[str, Zone] = {}

		for _ in range(options.products):
			self.spawn_product()

	@property
	def context(self) -> CellContext:
		return CellContext(
			settings=self.settings,
			robots=list(self.robots),
			stations=dict(self.stations),
			products=list(self.products),
		)

	def spawn_product(self, zone: Optional[Zone] = None) -> Product:
		product = Product(
			type=self.rng.choice(list(ProductType)),
			zone=zone or self.rng.choice(list(Zone)),
		)
		self.products.append(product)
		return product

	def available_products(self, zone: Zone) -> List[Product]:
		return [product for product in self.products if product.zone == zone and not product.reserved]

	def _record(self, kind: EventKind, robot: Robot) -> None:
		self.recorder.record(WarehouseEvent(kind=kind, robot_id=robot.id, zone=robot.zone))

	def _move(self, robot: Robot, target: Zone) -> None:
		if robot.move_to(target):
			self.report.moves += 1
		else:
			self.report.refused += 1

	def _wander(self, robot: Robot) -> None:
		others = [zone for zone in Zone if zone != robot.zone]
		self._move(robot, self.rng.choice(others))

	def _act_carrying(self, robot: Robot) -> None:
		product = robot.carried_product
		if robot.requires_charge():
			# Cannot charge while loaded: take it out of service and free the product.
			if robot.start_maintenance():
				self.report.maintenance_stops += 1
				self._destinations.pop(robot.id, None)
				self._record(EventKind.SYSTEM_ERROR, robot)
				logger.warning("simulation.robot_stranded", robot_id=robot.id, product_id=product.id)
			return

		destination = self._destinations.setdefault(robot.id, robot.zone)
		if robot.zone != destination:
			self._move(robot, destination)
			return

		station = self.stations[destination]
		if robot.deliver(station):
			self.report.deliveries += 1
			self._destinations.pop(robot.id, None)
			self._record(EventKind.PRODUCT_DELIVERED, robot)
			return

		self.report.refused += 1
		if station.is_full():
			self._record(EventKind.STATION_FULL, robot)

	def _act_free(self, robot: Robot) -> None:
		if robot.needs_charging():
			self._record(EventKind.ROBOT_CHARGING, robot)
			return

		candidates = self.available_products(robot.zone)
		if not candidates:
			self._wander(robot)
			return

		product = self.rng.choice(candidates)
		if robot.pick_up(product):
			self.report.pickups += 1
			self._destinations[robot.id] = self.rng.choice(list(Zone))
			self._record(EventKind.PRODUCT_PICKED_UP, robot)
		else:
			self.report.refused += 1
			self._wander(robot)

	def step(self) -> None:
		"""Let one randomly chosen robot perform one action."""

		robot = self.rng.choice(self.robots)
		if robot.state == RobotState.CHARGING:
			if robot.charge():
				self.report.charges += 1
		elif robot.state == RobotState.MAINTENANCE:
			robot.finish_maintenance()
		elif robot.carried_product is not None:
			self._act_carrying(robot)
		else:
			self._act_free(robot)

		self.report.steps += 1
		if self.report.steps % self.settings.simulation.drain_every == 0:
			self.drain_stations()

	def drain_stations(self) -> int:
		drained = sum(1 for station in self.stations.values() if station.drain())
		self.report.drains += drained
		return drained

	def run(self, steps: Optional[int] = None) -> SimulationReport:
		total = steps if steps is not None else self.settings.simulation.steps
		for _ in range(total):
			self.step()
		logger.info("simulation.completed", **vars(self.report))
		return self.report
