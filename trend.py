from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from constants import (
    CONCERNING_PPM,
    GOOD_PPM,
    IDEAL_PPM,
    MINUTES_PER_DAY,
    TIER_COLORS,
)

logger = logging.getLogger(__name__)

# 24-hour clock; a single-digit hour ("9:05") is accepted like the input form does.
_WALL_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


class ReadingError(ValueError):
    """Base class for rejected readings. Always recoverable at the input boundary."""


class InvalidFormatError(ReadingError):
    pass


class InvalidNumberError(ReadingError):
    pass


class DegenerateIntervalError(ReadingError):
    pass


class RateSignal(Enum):
    NOT_DECREASING = "not_decreasing"


NOT_DECREASING = RateSignal.NOT_DECREASING


class StatusTier(Enum):
    IDEAL = 1
    GOOD = 2
    CONCERNING = 3
    POOR = 4


@dataclass(frozen=True)
class Measurement:
    wall_clock: str
    elapsed_minutes: int
    concentration_ppm: int


@dataclass(frozen=True)
class ProjectedPoint:
    elapsed_minutes: float
    concentration_ppm: float


@dataclass(frozen=True)
class Status:
    label: str
    tier: StatusTier
    color: str


@dataclass(frozen=True)
class TimeToTarget:
    minutes: int
    rate_per_hour: float


def round_half_up(value: float) -> int:
    """Round .5 away from the floor (22.5 -> 23), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def parse_wall_clock(wall_clock: str) -> int:
    """Return minutes since midnight for an 'HH:MM' string."""
    match = _WALL_CLOCK_RE.match(str(wall_clock))
    if match is None:
        raise InvalidFormatError(
            f"Time must be in 24-hour HH:MM format, got {wall_clock!r}."
        )
    hours, minutes = int(match.group(1)), int(match.group(2))
    return hours * 60 + minutes


def canonical_wall_clock(wall_clock: str) -> str:
    total = parse_wall_clock(wall_clock)
    return f"{total // 60:02d}:{total % 60:02d}"


def normalize(wall_clock: str, prior_measurements: Sequence[Measurement]) -> int:
    """
    Convert a wall-clock reading into minutes elapsed since the first measurement.

    The first measurement is the time origin (0). A negative difference means the
    session crossed midnight once, so a full day is added. Sessions spanning more
    than one midnight are not representable.
    """
    this_minutes = parse_wall_clock(wall_clock)
    if not prior_measurements:
        return 0
    origin_minutes = parse_wall_clock(prior_measurements[0].wall_clock)
    delta = this_minutes - origin_minutes
    if delta < 0:
        delta += MINUTES_PER_DAY
    return delta


def estimate_rate(point_a, point_b) -> Union[float, RateSignal]:
    """
    Rate of change in ppm/minute going from ``point_a`` to ``point_b``.

    Both points only need ``elapsed_minutes`` and ``concentration_ppm``.
    Returns ``NOT_DECREASING`` when the level is flat or rising.
    """
    interval = point_b.elapsed_minutes - point_a.elapsed_minutes
    if interval == 0:
        raise DegenerateIntervalError(
            f"Readings share the same elapsed time ({point_b.elapsed_minutes} min); "
            "cannot estimate a rate."
        )
    rate = (point_b.concentration_ppm - point_a.concentration_ppm) / interval
    if rate >= 0:
        return NOT_DECREASING
    return rate


def minutes_to_target(
    latest: Measurement, previous: Measurement, target: float = IDEAL_PPM
) -> Optional[tuple[float, float]]:
    """
    Return ``(minutes, rate)`` until ``latest`` reaches ``target`` at the current rate,
    or None when no forward estimate applies.
    """
    try:
        rate = estimate_rate(previous, latest)
    except DegenerateIntervalError as e:
        logger.debug("No estimate: %s", e)
        return None
    if rate is NOT_DECREASING:
        logger.debug("No estimate: CO2 is not decreasing")
        return None
    minutes = (target - latest.concentration_ppm) / rate
    if minutes <= 0:
        logger.debug("No estimate: target %s already reached", target)
        return None
    return minutes, rate


def build_projection(
    latest: Measurement, previous: Measurement, target: float = IDEAL_PPM
) -> list[ProjectedPoint]:
    """Straight segment from the latest reading down to ``target``, or [] if none applies."""
    estimate = minutes_to_target(latest, previous, target)
    if estimate is None:
        return []
    minutes, _ = estimate
    end_minute = latest.elapsed_minutes + minutes
    return [
        ProjectedPoint(latest.elapsed_minutes, latest.concentration_ppm),
        ProjectedPoint(round_half_up(end_minute), target),
    ]


def classify(concentration_ppm: float) -> Status:
    if concentration_ppm <= IDEAL_PPM:
        label, tier = "Ideal", StatusTier.IDEAL
    elif concentration_ppm <= GOOD_PPM:
        label, tier = "Good", StatusTier.GOOD
    elif concentration_ppm <= CONCERNING_PPM:
        label, tier = "Concerning", StatusTier.CONCERNING
    else:
        label, tier = "Poor", StatusTier.POOR
    return Status(label=label, tier=tier, color=TIER_COLORS[label])


def estimate_time_to_target(
    latest: Measurement,
    previous: Optional[Measurement],
    target: float = IDEAL_PPM,
) -> Optional[TimeToTarget]:
    if previous is None or latest.concentration_ppm <= target:
        return None
    estimate = minutes_to_target(latest, previous, target)
    if estimate is None:
        return None
    minutes, rate = estimate
    return TimeToTarget(minutes=round_half_up(minutes), rate_per_hour=-rate * 60)
