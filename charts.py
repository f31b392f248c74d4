from __future__ import annotations

import plotly.graph_objects as go

from constants import (
    CHART_BAND_CEILING,
    CHART_Y_FLOOR,
    CHART_Y_HEADROOM,
    CONCERNING_PPM,
    GOOD_PPM,
    IDEAL_PPM,
    TIER_COLORS,
)
from trend import classify


def _band_edges(y_top: float) -> list[tuple[str, float, float]]:
    return [
        ("Ideal", 0, IDEAL_PPM),
        ("Good", IDEAL_PPM, GOOD_PPM),
        ("Concerning", GOOD_PPM, CONCERNING_PPM),
        ("Poor", CONCERNING_PPM, max(CHART_BAND_CEILING, y_top)),
    ]


def build_co2_figure(series: dict, *, height: int = 450) -> go.Figure:
    """
    Plot measured readings and the projected segment on a minutes-from-start axis.

    ``series`` is the ``{"measured": [...], "projected": [...]}`` mapping of
    ``{"x": minutes, "y": ppm}`` points produced by the session.
    """
    fig = go.Figure()
    measured = series.get("measured", [])
    projected = series.get("projected", [])

    all_y = [p["y"] for p in measured] + [p["y"] for p in projected]
    y_top = (max(all_y) if all_y else CONCERNING_PPM) + CHART_Y_HEADROOM

    # Shaded status bands behind the data
    for label, y0, y1 in _band_edges(y_top):
        fig.add_hrect(
            y0=y0,
            y1=y1,
            fillcolor=TIER_COLORS[label],
            opacity=0.15,
            line_width=0,
            layer="below",
        )

    if measured:
        # Marker colour follows the status of each reading
        marker_colors = [classify(p["y"]).color for p in measured]
        fig.add_trace(
            go.Scatter(
                x=[p["x"] for p in measured],
                y=[p["y"] for p in measured],
                mode="lines+markers",
                name="Measured",
                line=dict(color="#60a5fa", width=3),
                marker=dict(size=10, color=marker_colors, line=dict(color="#60a5fa", width=2)),
                hovertemplate="%{x} min<br>%{y} ppm<extra></extra>",
            )
        )

    if projected:
        fig.add_trace(
            go.Scatter(
                x=[p["x"] for p in projected],
                y=[p["y"] for p in projected],
                mode="lines+markers",
                name="Projected",
                line=dict(color="#a78bfa", width=2, dash="dash"),
                marker=dict(size=7, color="#a78bfa"),
                hovertemplate="%{x} min<br>%{y} ppm<extra></extra>",
            )
        )

    # Reference lines at the tier boundaries
    for y, text, color in (
        (IDEAL_PPM, "Ideal (buffer)", TIER_COLORS["Ideal"]),
        (GOOD_PPM, "Good", TIER_COLORS["Good"]),
        (CONCERNING_PPM, "Poor", TIER_COLORS["Poor"]),
    ):
        fig.add_hline(
            y=y,
            line_dash="dash",
            line_color=color,
            line_width=2,
            annotation_text=text,
            annotation_position="top left",
        )

    fig.update_layout(
        template="simple_white",
        height=height,
        margin=dict(l=40, r=20, t=40, b=40),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        xaxis_title="Minutes from start",
        yaxis_title="CO2 (ppm)",
    )
    fig.update_xaxes(tickformat="d", rangemode="tozero")
    fig.update_yaxes(range=[CHART_Y_FLOOR, y_top])
    return fig
