import pytest

from trend import (
    NOT_DECREASING,
    DegenerateIntervalError,
    InvalidFormatError,
    Measurement,
    ProjectedPoint,
    StatusTier,
    build_projection,
    classify,
    estimate_rate,
    estimate_time_to_target,
    normalize,
    parse_wall_clock,
    round_half_up,
)


def m(clock: str, elapsed: int, ppm: int) -> Measurement:
    return Measurement(wall_clock=clock, elapsed_minutes=elapsed, concentration_ppm=ppm)


@pytest.mark.parametrize("clock", ["00:00", "07:45", "12:30", "23:59"])
def test_normalize_first_reading_is_origin(clock):
    assert normalize(clock, []) == 0


def test_normalize_relative_to_first_reading():
    prior = [m("10:00", 0, 1000), m("10:05", 5, 950)]
    assert normalize("10:20", prior) == 20


def test_normalize_crosses_midnight():
    assert normalize("00:10", [m("23:50", 0, 1200)]) == 20


@pytest.mark.parametrize("bad", ["24:00", "12:60", "1230", "ab:cd", "", "12:5", "-1:30", " 10:00 "])
def test_parse_wall_clock_rejects_malformed(bad):
    with pytest.raises(InvalidFormatError):
        parse_wall_clock(bad)


def test_parse_wall_clock_accepts_single_digit_hour():
    assert parse_wall_clock("9:05") == 9 * 60 + 5


def test_estimate_rate_decreasing():
    assert estimate_rate(m("10:00", 0, 1000), m("10:10", 10, 800)) == pytest.approx(-20.0)


@pytest.mark.parametrize("later_ppm", [950, 900])
def test_estimate_rate_flat_or_rising_is_not_decreasing(later_ppm):
    assert estimate_rate(m("10:00", 0, 900), m("10:10", 10, later_ppm)) is NOT_DECREASING


def test_estimate_rate_same_minute_is_degenerate():
    with pytest.raises(DegenerateIntervalError):
        estimate_rate(m("10:00", 0, 900), m("10:00", 0, 850))


def test_build_projection_two_point_segment():
    points = build_projection(m("10:10", 10, 800), m("10:00", 0, 1000))
    # 250 ppm to go at -20 ppm/min -> 12.5 min, ends at 22.5 rounded up
    assert points == [ProjectedPoint(10, 800), ProjectedPoint(23, 550)]


def test_build_projection_custom_target():
    points = build_projection(m("10:10", 10, 800), m("10:00", 0, 1000), target=600)
    assert points[-1] == ProjectedPoint(20, 600)


def test_build_projection_empty_when_rising():
    assert build_projection(m("10:10", 10, 950), m("10:00", 0, 900)) == []


def test_build_projection_empty_when_degenerate():
    assert build_projection(m("10:00", 0, 800), m("10:00", 0, 1000)) == []


@pytest.mark.parametrize("latest_ppm", [550, 500])
def test_build_projection_empty_when_target_reached(latest_ppm):
    assert build_projection(m("10:10", 10, latest_ppm), m("10:00", 0, 1000)) == []


@pytest.mark.parametrize(
    "ppm, label, tier",
    [
        (400, "Ideal", StatusTier.IDEAL),
        (550, "Ideal", StatusTier.IDEAL),
        (551, "Good", StatusTier.GOOD),
        (800, "Good", StatusTier.GOOD),
        (801, "Concerning", StatusTier.CONCERNING),
        (1000, "Concerning", StatusTier.CONCERNING),
        (1001, "Poor", StatusTier.POOR),
    ],
)
def test_classify_boundaries(ppm, label, tier):
    status = classify(ppm)
    assert status.label == label
    assert status.tier is tier


def test_time_to_target_matches_projection():
    latest, previous = m("10:10", 10, 800), m("10:00", 0, 1000)
    eta = estimate_time_to_target(latest, previous)
    assert eta.minutes == 13
    assert eta.rate_per_hour == pytest.approx(1200.0)
    projection = build_projection(latest, previous)
    assert projection[-1].elapsed_minutes == latest.elapsed_minutes + eta.minutes


def test_time_to_target_none_cases():
    latest = m("10:10", 10, 800)
    assert estimate_time_to_target(latest, None) is None
    assert estimate_time_to_target(m("10:10", 10, 540), m("10:00", 0, 1000)) is None
    assert estimate_time_to_target(latest, m("10:00", 0, 700)) is None
    assert estimate_time_to_target(latest, m("10:10", 10, 1000)) is None


def test_round_half_up():
    assert round_half_up(32.5) == 33
    assert round_half_up(22.5) == 23
    assert round_half_up(22.4) == 22
