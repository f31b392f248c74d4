from __future__ import annotations

import streamlit as st

from session import VentilationSession
from trend import ReadingError
from utils.time import now_wall_clock, tidy_time_input

TIME_KEY = "reading_time"
PPM_KEY = "reading_ppm"
FLASH_KEY = "reading_flash"


def _fill_now() -> None:
    st.session_state[TIME_KEY] = now_wall_clock()


def _tidy_time() -> None:
    st.session_state[TIME_KEY] = tidy_time_input(st.session_state.get(TIME_KEY, ""))


def _submit(session: VentilationSession) -> None:
    wall_clock = st.session_state.get(TIME_KEY, "")
    ppm_text = st.session_state.get(PPM_KEY, "")
    try:
        m = session.submit_reading(wall_clock, ppm_text)
    except ReadingError as e:
        st.session_state[FLASH_KEY] = ("error", str(e))
        return
    st.session_state[FLASH_KEY] = (
        "success",
        f"Added {m.concentration_ppm} ppm at {m.wall_clock}.",
    )
    st.session_state[TIME_KEY] = ""
    st.session_state[PPM_KEY] = ""


def _show_flash() -> None:
    flash = st.session_state.pop(FLASH_KEY, None)
    if flash is None:
        return
    kind, text = flash
    if kind == "error":
        st.error(text)
    else:
        st.success(text)


def render_add_reading_form(session: VentilationSession) -> None:
    st.subheader("Add measurement")
    col_time, col_now, col_ppm = st.columns([3, 1, 3])
    with col_time:
        st.text_input("Time", key=TIME_KEY, placeholder="HH:MM", max_chars=5, on_change=_tidy_time)
    with col_now:
        st.write("")
        st.button("Now", on_click=_fill_now, use_container_width=True)
    with col_ppm:
        st.text_input("CO2 level (ppm)", key=PPM_KEY, placeholder="e.g., 1000")

    col_add, col_undo, col_clear = st.columns(3)
    with col_add:
        st.button(
            "Add",
            type="primary",
            on_click=_submit,
            args=(session,),
            use_container_width=True,
        )
    with col_undo:
        st.button(
            "Undo last reading",
            on_click=session.remove_last,
            disabled=len(session) == 0,
            use_container_width=True,
        )
    with col_clear:
        st.button("Clear", on_click=session.reset, use_container_width=True)
    _show_flash()
