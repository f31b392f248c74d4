import plotly.graph_objects as go

from charts import build_co2_figure
from constants import CHART_Y_FLOOR, IDEAL_PPM


def make_series():
    return {
        "measured": [{"x": 0, "y": 1000}, {"x": 10, "y": 800}],
        "projected": [{"x": 10, "y": 800}, {"x": 23, "y": 550}],
    }


def test_build_co2_figure_basic_properties():
    fig = build_co2_figure(make_series(), height=500)
    assert isinstance(fig, go.Figure)

    names = [t.name for t in fig.data]
    assert names == ["Measured", "Projected"]

    projected = fig.data[1]
    assert list(projected.x) == [10, 23]
    assert projected.line.dash == "dash"

    assert fig.layout.xaxis.title.text == "Minutes from start"
    assert fig.layout.yaxis.title.text == "CO2 (ppm)"

    ann_texts = [a.text for a in fig.layout.annotations]
    assert "Ideal (buffer)" in ann_texts

    yr = fig.layout.yaxis.range
    assert yr[0] == CHART_Y_FLOOR and yr[1] >= 1100


def test_build_co2_figure_without_projection():
    series = {"measured": [{"x": 0, "y": 900}], "projected": []}
    fig = build_co2_figure(series)
    assert [t.name for t in fig.data] == ["Measured"]
    # Status bands and reference lines are drawn regardless
    assert len(fig.layout.shapes) >= 4
    assert any(s.y0 == IDEAL_PPM for s in fig.layout.shapes)
