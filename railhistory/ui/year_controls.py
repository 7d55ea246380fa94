"""Year selection controls: previous / slider / next.

clamp_year and step_year are pure so they can be tested without Streamlit.
The widget row stores the year under a session_state key so the step
buttons can update the slider from their on_click callbacks.
"""

import logging

import streamlit as st

from railhistory.constants import YearConfig
from railhistory.ui.state_machine import ViewerStateMachine

logger = logging.getLogger(__name__)

YEAR_SLIDER_KEY = "year_slider"


def clamp_year(year: int, min_year: int = YearConfig.MIN_YEAR, max_year: int = YearConfig.MAX_YEAR) -> int:
    """Limit a year to the supported range."""
    if min_year > max_year:
        raise ValueError(f"min_year {min_year} is after max_year {max_year}")
    return max(min_year, min(max_year, year))


def step_year(
    year: int,
    delta: int,
    min_year: int = YearConfig.MIN_YEAR,
    max_year: int = YearConfig.MAX_YEAR,
) -> int:
    """Move the year by delta, stopping at the range bounds."""
    return clamp_year(year=year + delta, min_year=min_year, max_year=max_year)


def _shift_year(delta: int) -> None:
    """Button callback: runs before widgets are instantiated on the rerun."""
    current = st.session_state.get(YEAR_SLIDER_KEY, YearConfig.DEFAULT_YEAR)
    st.session_state[YEAR_SLIDER_KEY] = step_year(year=int(current), delta=delta)


def render_year_controls(sm: ViewerStateMachine) -> int:
    """Render the year row and push the chosen year into the context.

    Returns:
        The selected year.
    """
    if YEAR_SLIDER_KEY not in st.session_state:
        st.session_state[YEAR_SLIDER_KEY] = clamp_year(year=sm.context.year)

    current = int(st.session_state[YEAR_SLIDER_KEY])
    col_prev, col_slider, col_next = st.columns([1, 10, 1], vertical_alignment="bottom")

    with col_prev:
        st.button(
            "◀",
            key="year_prev",
            help="Previous year",
            on_click=_shift_year,
            args=(-1,),
            disabled=current <= YearConfig.MIN_YEAR,
            width="stretch",
        )
    with col_slider:
        st.slider(
            "Year",
            min_value=YearConfig.MIN_YEAR,
            max_value=YearConfig.MAX_YEAR,
            step=1,
            key=YEAR_SLIDER_KEY,
        )
    with col_next:
        st.button(
            "▶",
            key="year_next",
            help="Next year",
            on_click=_shift_year,
            args=(1,),
            disabled=current >= YearConfig.MAX_YEAR,
            width="stretch",
        )

    year = int(st.session_state[YEAR_SLIDER_KEY])
    sm.set_year(year=year)
    return year
