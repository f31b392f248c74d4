from __future__ import annotations

import logging

import streamlit as st

from charts import build_co2_figure
from constants import IDEAL_PPM, LOG_FORMAT, LOG_LEVEL
from forms import render_add_reading_form
from session import VentilationSession
from utils.time import format_duration

SESSION_KEY = "ventilation_session"


def _get_session() -> VentilationSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = VentilationSession()
    return st.session_state[SESSION_KEY]


def _render_status(session: VentilationSession) -> None:
    latest = session.latest
    if latest is None:
        return
    status = session.status()
    col_level, col_eta = st.columns(2)
    with col_level:
        st.metric("Current CO2 level", f"{latest.concentration_ppm} ppm")
        st.markdown(
            f"<span style='color:{status.color}'><b>{status.label}</b></span>",
            unsafe_allow_html=True,
        )

    if latest.concentration_ppm <= IDEAL_PPM:
        return
    with col_eta:
        st.caption("Est. time to ideal level")
        if len(session) < 2:
            st.write("Need 2+ measurements")
            return
        eta = session.time_to_target()
        if eta is not None:
            st.metric(
                "Time to ideal",
                format_duration(eta.minutes),
                delta=f"-{eta.rate_per_hour:.0f} ppm/hr",
                delta_color="inverse",
                label_visibility="collapsed",
            )
            st.caption(f"(< {IDEAL_PPM} ppm buffer)")
        elif session.has_degenerate_interval():
            st.write("Last two readings share the same time")
            st.caption("Add a reading at a later time to estimate the trend")
        else:
            st.write("CO2 not decreasing")
            st.caption("Check ventilation")


def _render_help() -> None:
    with st.expander("How to use"):
        st.markdown(
            f"""
- Enter the current time and CO2 reading, then click **Add**
- Continue adding measurements every few minutes
- The chart shows your progress and estimates the time to ideal levels
- Ideal zone is below {IDEAL_PPM} ppm (a buffer before CO2 climbs again)
- Good zone is {IDEAL_PPM}-800 ppm, concerning is 800-1000 ppm
- Click **Clear** to start a new ventilation session
"""
        )


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    st.set_page_config(page_title="CO2 Ventilation Monitor", page_icon="🌬️", layout="wide")
    st.title("🌬️ CO2 Ventilation Monitor")
    st.caption("Track CO2 levels while ventilating your space.")

    session = _get_session()
    render_add_reading_form(session)
    _render_status(session)

    if len(session) == 0:
        st.info("No data yet. Add your first CO2 measurement to get started.")
        _render_help()
        return

    st.subheader("CO2 trend & projection")
    fig = build_co2_figure(session.chart_series())
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Recorded measurements")
    st.dataframe(session.measurements_frame(), use_container_width=True, hide_index=True)

    projections = session.projections_frame()
    if not projections.empty:
        st.subheader("Projected measurements")
        st.dataframe(projections, use_container_width=True, hide_index=True)

    _render_help()


if __name__ == "__main__":
    main()
