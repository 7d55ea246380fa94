"""Railway History Viewer - the Eurasian railway network as of any year.

Loads the station/segment catalogue and the event log, then shows which
stations and segments existed in the year picked on the slider, colored
by what happened to them that year.

Run: streamlit run railhistory/app.py
"""

import logging
import traceback

import streamlit as st

from railhistory.constants import AppConfig, ChartConfig, YearConfig
from railhistory.core.dates import MalformedDateError
from railhistory.core.network_statistics import TimelineSeries, build_timeline_series
from railhistory.core.timeline_service import TimelineService
from railhistory.data.loader import DataLoadError, DataSource, load_snapshot
from railhistory.model.annotated import YearView
from railhistory.model.message import DataLoadErrorMessage, DataLoadingMessage, NotVisibleInYearMessage
from railhistory.ui import (
    DetailPanel,
    MapRenderer,
    SidebarRenderer,
    TimelineChart,
    ViewerStateMachine,
    render_deckgl_map,
    render_year_controls,
)
from railhistory.ui.year_controls import YEAR_SLIDER_KEY

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def init_session_state() -> None:
    """Initialize session state with state machine, data source and renderer."""
    if "state_machine" not in st.session_state:
        sm, ctx = ViewerStateMachine.create()
        st.session_state.state_machine = sm
        st.session_state.context = ctx

    if "data_source" not in st.session_state:
        st.session_state.data_source = DataSource()

    if "map_renderer" not in st.session_state:
        st.session_state.map_renderer = MapRenderer()


def reset_ui_state(error: Exception | None = None) -> None:
    """Reset UI state to initial while preserving the loaded snapshot.

    Called when an error occurs to recover gracefully. Resets the state
    machine and context, and the year slider to its default. Keeps the
    TimelineService (snapshot and cache) when one exists, unless the error
    came from the snapshot itself: then the demo database is loaded instead.
    """
    logger.info("Resetting UI state due to error recovery")

    if isinstance(error, MalformedDateError):
        logger.warning(f"[UI] Dropping snapshot that cannot be resolved: {error}")
        st.session_state.pop("timeline_service", None)
        st.session_state.timeline_series = None
        st.session_state.data_source = DataSource()

    start_value = "ready" if st.session_state.get("timeline_service") is not None else None
    sm, ctx = ViewerStateMachine.create(start_value=start_value)
    old_ctx = st.session_state.get("context")
    if old_ctx is not None:
        ctx.map_version = old_ctx.map_version + 1
    st.session_state.state_machine = sm
    st.session_state.context = ctx
    st.session_state.pop(YEAR_SLIDER_KEY, None)

    logger.info(f"UI state reset complete - state={sm.get_state_name()}")


# =============================================================================
# LOADING
# =============================================================================


def load_data(sm: ViewerStateMachine) -> None:
    """Load the current data source and transition to ready or failed.

    Both transitions trigger st.rerun() through the UI listener.
    """
    DataLoadingMessage().display()
    source: DataSource = st.session_state.data_source

    try:
        with st.spinner(f"Loading {source.label}..."):
            snapshot = load_snapshot(source=source)
    except DataLoadError as e:
        logger.error(f"[LOAD] {e}")
        sm.load_failed(error=str(e))
        return

    service: TimelineService | None = st.session_state.get("timeline_service")
    if service is None:
        st.session_state.timeline_service = TimelineService(snapshot=snapshot)
    else:
        service.swap_snapshot(snapshot=snapshot)
    st.session_state.timeline_series = None
    sm.data_loaded()


def get_timeline_series(service: TimelineService) -> TimelineSeries:
    """Growth series over the slider range, built once per snapshot."""
    series = st.session_state.get("timeline_series")
    if series is None:
        series = build_timeline_series(
            service=service, start_year=YearConfig.MIN_YEAR, end_year=YearConfig.MAX_YEAR
        )
        st.session_state.timeline_series = series
    return series


# =============================================================================
# RENDERING
# =============================================================================


def _drop_invisible_selection(sm: ViewerStateMachine, view: YearView) -> None:
    """Clear the selection if the entity does not exist in the viewed year."""
    selection = sm.context.selection
    if not selection.has_selection() or selection.entity_id is None:
        return
    if selection.is_station():
        visible = view.station(station_id=selection.entity_id) is not None
    else:
        visible = view.segment(segment_id=selection.entity_id) is not None
    if not visible:
        NotVisibleInYearMessage(entity_id=selection.entity_id, year=view.year).display()
        sm.clear_selection()


def _render_map(sm: ViewerStateMachine, view: YearView) -> None:
    """Render the map and turn clicks into selection changes."""
    ctx = sm.context
    renderer: MapRenderer = st.session_state.map_renderer
    deck = renderer.render(view=view, layers=ctx.layers, selected_id=ctx.selection.entity_id)

    click = render_deckgl_map(deck=deck, key=f"main_map_{ctx.map_version}", height=ChartConfig.MAP_HEIGHT)
    if click.is_entity_click:
        assert click.kind is not None and click.entity_id is not None
        sm.select_entity(kind=click.kind, entity_id=click.entity_id)
        st.rerun()
    elif click.is_empty_click and ctx.selection.has_selection():
        sm.clear_selection()
        st.rerun()


def _render_failed(sm: ViewerStateMachine) -> None:
    DataLoadErrorMessage(error=sm.context.error).display()
    if st.button("🔄 Load demo data instead", type="primary"):
        st.session_state.data_source = DataSource()
        sm.try_transition("reload")
    if st.button("🔁 Retry"):
        sm.try_transition("reload")


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(f"{AppConfig.ICON} {AppConfig.TITLE}")
    st.caption(AppConfig.SUBTITLE)

    try:
        _run_app_ui()
    except Exception as e:
        # Log full traceback for debugging
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")

        # Reset UI state while preserving the loaded snapshot
        reset_ui_state(error=e)

        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    sm: ViewerStateMachine = st.session_state.state_machine
    logger.info(f"[MAIN] Render cycle starting: state={sm.get_state_name()}, map_version={sm.context.map_version}")

    if sm.is_loading:
        load_data(sm=sm)
        return
    if sm.is_failed:
        _render_failed(sm=sm)
        return

    service: TimelineService = st.session_state.timeline_service
    year = render_year_controls(sm=sm)
    view = service.resolve(year=year)
    _drop_invisible_selection(sm=sm, view=view)

    sidebar = SidebarRenderer(state_machine=sm, context=sm.context, snapshot=service.snapshot, view=view)
    actions = sidebar.render()
    if actions.get("source") is not None:
        st.session_state.data_source = actions["source"]
        sm.try_transition("reload")
    elif actions.get("reload"):
        sm.try_transition("reload")

    col_map, col_detail = st.columns([3, 1])
    with col_map:
        _render_map(sm=sm, view=view)
    with col_detail:
        DetailPanel(state_machine=sm, snapshot=service.snapshot, view=view).render()

    chart = TimelineChart(height=ChartConfig.TIMELINE_HEIGHT)
    fig = chart.render(series=get_timeline_series(service=service), current_year=year)
    st.plotly_chart(fig, width="stretch", key="timeline_chart")


if __name__ == "__main__":
    main()
