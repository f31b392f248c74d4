from __future__ import annotations

# CO2 level (ppm) considered ideal; projections and time-to-target aim here.
IDEAL_PPM: int = 550

# Upper bounds (inclusive) of the Good and Concerning tiers.
GOOD_PPM: int = 800
CONCERNING_PPM: int = 1000

TIER_COLORS: dict[str, str] = {
    "Ideal": "#10b981",
    "Good": "#3b82f6",
    "Concerning": "#eab308",
    "Poor": "#ef4444",
}

MINUTES_PER_DAY: int = 24 * 60

# Chart y-axis floor and headroom above the highest plotted value.
CHART_Y_FLOOR: int = 300
CHART_Y_HEADROOM: int = 100
# Top of the shaded Poor band when readings stay below it.
CHART_BAND_CEILING: int = 2000

# Durations longer than this are displayed in hours.
DURATION_HOURS_CUTOFF: int = 120

LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
