"""Sidebar UI renderer for the railway history viewer.

Renders the left sidebar with:
- Legend with per-state counts for the selected year
- Network summary (visible stations, segments, track length)
- Layer toggles
- Data source controls (reload, upload, URL, download)
- Data-quality warning for events referencing unknown entities
"""

import json
import logging
from typing import Any

import streamlit as st

from railhistory.constants import StyleConfig
from railhistory.core.network_statistics import count_by_state, network_length_km
from railhistory.data.loader import DataSource, SourceKind
from railhistory.model.annotated import EntityState, YearView
from railhistory.model.catalogue import DatabaseSnapshot
from railhistory.model.message import DanglingReferencesMessage
from railhistory.ui.state_machine import ViewerContext, ViewerStateMachine

logger = logging.getLogger(__name__)

# GAUGE_CHANGE is reserved: listed with its colour, its counts stay 0
LEGEND_STATES = [
    EntityState.EXISTING,
    EntityState.NEW,
    EntityState.ELECTRIFIED,
    EntityState.GAUGE_CHANGE,
    EntityState.CLOSED,
]


class SidebarRenderer:
    """Renders the sidebar UI and returns action flags."""

    def __init__(
        self,
        state_machine: ViewerStateMachine,
        context: ViewerContext,
        snapshot: DatabaseSnapshot,
        view: YearView,
    ) -> None:
        self.sm = state_machine
        self.ctx = context
        self.snapshot = snapshot
        self.view = view

    def render(self) -> dict[str, Any]:
        """Render complete sidebar and return action flags.

        Returns:
            Dict with keys: reload (bool), source (DataSource | None)
        """
        with st.sidebar:
            actions: dict[str, Any] = {"reload": False, "source": None}

            self._render_legend()
            st.divider()
            self._render_network_summary()
            st.divider()
            self._render_layer_toggles()
            st.divider()
            actions.update(self._render_data_source())

            dangling = self.snapshot.find_dangling_references()
            if dangling:
                DanglingReferencesMessage(event_ids=tuple(e.event_id for e in dangling)).display()

            return actions

    def _render_legend(self) -> None:
        st.markdown(f"### 🗺️ Network in {self.view.year}")
        counts = count_by_state(view=self.view)
        for state in LEGEND_STATES:
            color = StyleConfig.STATE_COLORS[state.value]
            label = StyleConfig.STATE_LABELS[state.value]
            n_segments = counts["segments"][state]
            n_stations = counts["stations"][state]
            st.markdown(
                f"<span style='color:{color}; font-weight:bold'>━━</span> {label}: "
                f"{n_segments} segments • {n_stations} stations",
                unsafe_allow_html=True,
            )
        st.markdown(
            f"<span style='color:{StyleConfig.APPROXIMATE_BORDER_COLOR}'>◯</span> Approximate station location",
            unsafe_allow_html=True,
        )

    def _render_network_summary(self) -> None:
        col1, col2, col3 = st.columns(3)
        col1.metric("Stations", len(self.view.stations))
        col2.metric("Segments", len(self.view.segments))
        col3.metric("Track km", f"{network_length_km(view=self.view):,.0f}")

        stats = self.snapshot.get_stats()
        st.caption(
            f"Database: {stats['stations']} stations • {stats['segments']} segments • "
            f"{stats['events']} events • {stats['station_names']} name variants"
        )

    def _render_layer_toggles(self) -> None:
        st.markdown("**Layers**")
        layers = self.ctx.layers
        layers.show_segments = st.checkbox("Segments", value=layers.show_segments, key="layer_segments")
        layers.show_stations = st.checkbox("Stations", value=layers.show_stations, key="layer_stations")
        layers.show_approximate = st.checkbox(
            "Approximate locations", value=layers.show_approximate, key="layer_approximate"
        )

    def _render_data_source(self) -> dict[str, Any]:
        actions: dict[str, Any] = {}
        with st.expander("💾 Database", expanded=False):
            st.caption(f"Source: {self.snapshot.source or 'unknown'}")

            if st.button("🔄 Reload", width="stretch", help="Read the current source again"):
                actions["reload"] = True

            if st.button("🧪 Load demo data", width="stretch"):
                actions["source"] = DataSource(kind=SourceKind.DEMO)

            url = st.text_input("Snapshot URL", key="source_url", placeholder="https://…/snapshot.json")
            if st.button("🌐 Load from URL", width="stretch", disabled=not url):
                actions["source"] = DataSource(kind=SourceKind.URL, location=url.strip())

            uploaded_file = st.file_uploader(
                "Upload snapshot",
                type=["json"],
                key=f"snapshot_uploader_{self.ctx.map_version}",
            )
            if uploaded_file is not None:
                actions["source"] = DataSource(
                    kind=SourceKind.UPLOAD,
                    location=uploaded_file.name,
                    content=uploaded_file.getvalue(),
                )

            st.download_button(
                "⬇️ Download snapshot",
                data=json.dumps(self.snapshot.to_dict(), indent=2, ensure_ascii=False),
                file_name="railway_snapshot.json",
                mime="application/json",
                width="stretch",
            )
        if actions.get("source") is not None:
            logger.info(f"[SIDEBAR] New data source requested: {actions['source'].label}")
        return actions
