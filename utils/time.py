from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from constants import DURATION_HOURS_CUTOFF, MINUTES_PER_DAY


def now_wall_clock(now: Optional[datetime] = None) -> str:
    """Current local time as 'HH:MM' (what the "Now" button fills in)."""
    now = now or datetime.now()
    return now.strftime("%H:%M")


def tidy_time_input(raw: str) -> str:
    """
    Clean up a time typed by hand: keep digits and colons, turn '1825' into
    '18:25', pad hours to two digits and clamp hours to 23 and minutes to 59.
    Incomplete input (no colon yet) is returned as typed.
    """
    value = re.sub(r"[^0-9:]", "", raw or "")
    if re.fullmatch(r"\d{3,4}", value):
        value = f"{value[:2]}:{value[2:]}"
    if ":" in value:
        hours, _, minutes = value.partition(":")
        hours = f"{min(int(hours) if hours else 0, 23):02d}"
        minutes = minutes.replace(":", "")[:2]
        if minutes and int(minutes) > 59:
            minutes = "59"
        value = f"{hours}:{minutes}"
    return value


def clock_from_elapsed(origin_wall_clock: str, elapsed_minutes: float) -> str:
    """
    Wall clock reached ``elapsed_minutes`` after ``origin_wall_clock``, wrapping
    past midnight, e.g. ('23:50', 20) -> '00:10'.
    """
    hours, minutes = (int(part) for part in origin_wall_clock.split(":"))
    total = (hours * 60 + minutes + int(round(elapsed_minutes))) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def format_duration(minutes: int) -> str:
    """'45 min' for short waits, '2.5 hrs' once past the hours cutoff."""
    if minutes > DURATION_HOURS_CUTOFF:
        return f"{minutes / 60:.1f} hrs"
    return f"{minutes} min"
