from __future__ import annotations

import logging
import math
from typing import Optional

import pandas as pd

from constants import IDEAL_PPM
from trend import (
    InvalidNumberError,
    Measurement,
    ProjectedPoint,
    Status,
    TimeToTarget,
    build_projection,
    canonical_wall_clock,
    classify,
    estimate_time_to_target,
    normalize,
    round_half_up,
)
from utils.time import clock_from_elapsed

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["wall_clock", "elapsed_minutes", "concentration_ppm", "status_label"]


def parse_concentration(text: str) -> int:
    """
    Parse a ppm reading typed by the user. Decimal input is accepted and rounded
    to whole ppm; empty, non-numeric, non-finite and non-positive values are rejected.
    """
    cleaned = str(text).strip() if text is not None else ""
    if not cleaned:
        raise InvalidNumberError("CO2 level is required.")
    try:
        value = float(cleaned)
    except ValueError:
        raise InvalidNumberError(f"CO2 level must be a number, got {text!r}.") from None
    if not math.isfinite(value) or round_half_up(value) <= 0:
        raise InvalidNumberError(f"CO2 level must be a positive number, got {text!r}.")
    return round_half_up(value)


class VentilationSession:
    """
    In-memory log of one ventilation session.

    Owns the measurement sequence; the projected segment is derived from the two
    most recent readings every time it is asked for.
    """

    def __init__(self, target: float = IDEAL_PPM) -> None:
        self.target = target
        self._measurements: list[Measurement] = []

    @property
    def measurements(self) -> tuple[Measurement, ...]:
        return tuple(self._measurements)

    @property
    def latest(self) -> Optional[Measurement]:
        return self._measurements[-1] if self._measurements else None

    @property
    def previous(self) -> Optional[Measurement]:
        return self._measurements[-2] if len(self._measurements) >= 2 else None

    def __len__(self) -> int:
        return len(self._measurements)

    # Transitions
    def submit_reading(self, wall_clock: str, concentration: str) -> Measurement:
        try:
            clock = canonical_wall_clock(wall_clock)
            ppm = parse_concentration(concentration)
        except ValueError as e:
            logger.warning(f"Rejected reading ({wall_clock!r}, {concentration!r}): {e}")
            raise
        elapsed = normalize(clock, self._measurements)
        measurement = Measurement(
            wall_clock=clock, elapsed_minutes=elapsed, concentration_ppm=ppm
        )
        self._measurements.append(measurement)
        logger.info(
            f"Recorded {ppm} ppm at {clock} (+{elapsed} min), "
            f"{len(self._measurements)} reading(s) in session"
        )
        return measurement

    def remove_last(self) -> Optional[Measurement]:
        if not self._measurements:
            return None
        removed = self._measurements.pop()
        logger.info(f"Removed reading {removed.concentration_ppm} ppm at {removed.wall_clock}")
        return removed

    def reset(self) -> None:
        count = len(self._measurements)
        self._measurements.clear()
        logger.info(f"Session cleared ({count} reading(s) discarded)")

    # Derived state
    def projection(self) -> list[ProjectedPoint]:
        if self.previous is None:
            return []
        return build_projection(self.latest, self.previous, self.target)

    def has_degenerate_interval(self) -> bool:
        return (
            self.previous is not None
            and self.previous.elapsed_minutes == self.latest.elapsed_minutes
        )

    def status(self) -> Optional[Status]:
        if self.latest is None:
            return None
        return classify(self.latest.concentration_ppm)

    def time_to_target(self) -> Optional[TimeToTarget]:
        if self.latest is None:
            return None
        return estimate_time_to_target(self.latest, self.previous, self.target)

    def chart_series(self) -> dict[str, list[dict[str, float]]]:
        return {
            "measured": [
                {"x": m.elapsed_minutes, "y": m.concentration_ppm}
                for m in self._measurements
            ],
            "projected": [
                {"x": p.elapsed_minutes, "y": p.concentration_ppm}
                for p in self.projection()
            ],
        }

    def table_rows(self) -> list[dict]:
        return [
            {
                "wall_clock": m.wall_clock,
                "elapsed_minutes": m.elapsed_minutes,
                "concentration_ppm": m.concentration_ppm,
                "status_label": classify(m.concentration_ppm).label,
            }
            for m in self._measurements
        ]

    def projected_rows(self) -> list[dict]:
        points = self.projection()
        if not points:
            return []
        origin = self._measurements[0].wall_clock
        return [
            {
                "wall_clock": clock_from_elapsed(origin, p.elapsed_minutes),
                "elapsed_minutes": p.elapsed_minutes,
                "concentration_ppm": p.concentration_ppm,
                "status_label": classify(p.concentration_ppm).label,
            }
            for p in points
        ]

    def measurements_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.table_rows(), columns=TABLE_COLUMNS)

    def projections_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.projected_rows(), columns=TABLE_COLUMNS)
