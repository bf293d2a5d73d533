"""Service layer exports for the warehouse automation cell."""

from .events import EventRecorder, InMemoryEventRecorder
from .simulation import CellContext, CellSimulation, SimulationReport

__all__ = [
	"EventRecorder",
	"InMemoryEventRecorder",
	"CellContext",
	"CellSimulation",
	"SimulationReport",
]
