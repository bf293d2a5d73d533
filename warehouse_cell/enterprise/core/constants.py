"""Fixed operating constants of the automation cell."""

from __future__ import annotations

# Battery levels are percentages.
FULL_BATTERY = 100
MIN_BATTERY_LEVEL = 10
BATTERY_CONSUMPTION = 5

# Extra battery a special-handling product demands above its type minimum.
SPECIAL_HANDLING_MARGIN = MIN_BATTERY_LEVEL

STATION_CAPACITY = 10
