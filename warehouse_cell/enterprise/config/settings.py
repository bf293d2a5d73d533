"""Unified configuration system for the warehouse automation cell.

This module centralises application settings using :mod:`pydantic-settings`.
Configuration values are assembled from (in order of precedence):

1. Explicit keyword arguments when instantiating :class:`AppSettings`.
2. Environment variables prefixed with ``WC_`` (supports nested fields using ``__``).
3. A ``.env`` file located in the working directory.
4. YAML configuration files: ``config/settings.yaml`` (base) and
   ``config/environments/<environment>.yaml`` (environment-specific overrides).

The cell's operating constants (battery thresholds, station capacity) are
fixed and are not part of this configuration.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
	"LoggingSettings",
	"TelemetrySettings",
	"SimulationSettings",
	"AppSettings",
	"get_settings",
]


_ENVIRONMENT_VAR = "WC_ENVIRONMENT"
_CONFIG_DIR_ENV_VAR = "WC_CONFIG_DIR"


def _project_root() -> Path:
	"""Return the absolute project root directory."""

	return Path(__file__).resolve().parents[3]


DEFAULT_CONFIG_DIR = _project_root() / "config"


class LoggingSettings(BaseModel):
	"""Logging verbosity and related tuning parameters."""

	level: str = Field("INFO", description="Root log level (DEBUG, INFO, etc.).")
	json: bool = Field(False, description="Emit logs as JSON for aggregators.")


class TelemetrySettings(BaseModel):
	"""Metrics configuration."""

	metrics_enabled: bool = Field(True, description="Enable Prometheus metrics collection.")


class SimulationSettings(BaseModel):
	"""Parameters of the demo driver that exercises the cell."""

	robots: PositiveInt = Field(4, description="Number of robots, placed round-robin over zones.")
	products: NonNegativeInt = Field(20, description="Products seeded at start-up.")
	steps: PositiveInt = Field(200, description="Robot actions performed per run.")
	seed: Optional[int] = Field(None, description="Seed for the injected random generator.")
	drain_every: PositiveInt = Field(5, description="Drain packing stations every N steps.")


def _load_yaml_file(path: Path) -> Dict[str, Any]:
	"""Safely load a YAML file into a dictionary.

	Parameters
	----------
	path:
		Path to the YAML file.

	Returns
	-------
	dict
		Parsed YAML content or an empty dict if the file does not exist.
	"""

	if not path.exists() or path.is_dir():
		return {}

	with path.open("r", encoding="utf-8") as handle:
		data = yaml.safe_load(handle)
		return data or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
	"""Recursively merge ``override`` into ``base``."""

	result = base.copy()
	for key, value in override.items():
		if key in result and isinstance(result[key], dict) and isinstance(value, dict):
			result[key] = _deep_merge(result[key], value)
		else:
			result[key] = value
	return result


class AppSettings(BaseSettings):
	"""Primary configuration model for the application."""

	environment: str = Field("dev", description="Active environment name (dev, test, prod, ...).")
	logging: LoggingSettings = LoggingSettings()
	telemetry: TelemetrySettings = TelemetrySettings()
	simulation: SimulationSettings = SimulationSettings()

	model_config = SettingsConfigDict(
		env_prefix="WC_",
		env_file=".env",
		env_file_encoding="utf-8",
		env_nested_delimiter="__",
		extra="ignore",
		validate_assignment=True,
	)

	@classmethod
	def _yaml_settings_source(cls) -> Dict[str, Any]:
		"""Produce settings from YAML configuration files."""

		config_dir = Path(os.getenv(_CONFIG_DIR_ENV_VAR, DEFAULT_CONFIG_DIR))
		base = _load_yaml_file(config_dir / "settings.yaml")
		env_name = os.getenv(_ENVIRONMENT_VAR, base.get("environment", "dev"))
		env_override = _load_yaml_file(config_dir / "environments" / f"{env_name}.yaml")

		merged = _deep_merge(base, env_override)
		merged.setdefault("environment", env_name)
		return merged

	@classmethod
	def settings_customise_sources(
		cls,
		_settings_cls,
		init_settings,
		env_settings,
		dotenv_settings,
		file_secret_settings,
	):
		"""Inject YAML files as the lowest-precedence settings source."""

		return (
			init_settings,
			env_settings,
			dotenv_settings,
			cls._yaml_settings_source,
			file_secret_settings,
		)


@lru_cache()
def get_settings(**overrides: Any) -> AppSettings:
	"""Return a cached :class:`AppSettings` instance.

	Keyword arguments are forwarded to :class:`AppSettings` and therefore have
	the highest precedence.
	"""

	return AppSettings(**overrides)
