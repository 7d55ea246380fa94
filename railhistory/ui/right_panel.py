"""Right panel: details of the clicked station or segment.

Shows, for the selected year:
- Station: names (primary, latin, alternative names), state, location,
  cross-reference links, notes, and its full event history
- Segment: endpoints, length, geometry quality, and its event history

Event dates are shown at their stated precision ("1851-11" for month).
"""

import logging

import streamlit as st

from railhistory.constants import StyleConfig
from railhistory.core.notes import strip_markers
from railhistory.model.annotated import AnnotatedSegment, AnnotatedStation, EntityState, YearView
from railhistory.model.catalogue import DatabaseSnapshot
from railhistory.model.event import Event
from railhistory.model.message import EmptyYearMessage, SelectionHintMessage
from railhistory.ui.state_machine import ViewerStateMachine

logger = logging.getLogger(__name__)


def format_event(event: Event, year: int) -> str:
    """One markdown bullet for an event; future events are greyed out."""
    label = event.event_type.value.replace("_", " ")
    text = f"**{event.date_label}** · {label}"
    if event.description:
        text += f" · {event.description}"
    if event.source_id:
        page = f", p. {event.source_page}" if event.source_page else ""
        text += f" _(source {event.source_id}{page})_"
    if event.year > year:
        return f"- :gray[{text}]"
    return f"- {text}"


def state_badge(state: EntityState) -> str:
    color = StyleConfig.STATE_COLORS[state.value]
    label = StyleConfig.STATE_LABELS[state.value]
    return f"<span style='color:{color}; font-weight:bold'>●</span> {label}"


class DetailPanel:
    """Renders the detail panel for the current selection.

    Example:
        DetailPanel(state_machine=sm, snapshot=snapshot, view=view).render()
    """

    def __init__(self, state_machine: ViewerStateMachine, snapshot: DatabaseSnapshot, view: YearView) -> None:
        self.sm = state_machine
        self.snapshot = snapshot
        self.view = view

    def render(self) -> None:
        selection = self.sm.context.selection
        if self.view.is_empty:
            EmptyYearMessage(year=self.view.year).display()
            return
        if not selection.has_selection():
            SelectionHintMessage().display()
            return

        assert selection.entity_id is not None
        if selection.is_station():
            station = self.view.station(station_id=selection.entity_id)
            if station is None:
                raise ValueError(f"Selected station {selection.entity_id} must be visible in {self.view.year}")
            self._render_station(annotated=station)
        else:
            segment = self.view.segment(segment_id=selection.entity_id)
            if segment is None:
                raise ValueError(f"Selected segment {selection.entity_id} must be visible in {self.view.year}")
            self._render_segment(annotated=segment)

        if st.button("✖️ Close", width="stretch", key="close_detail_panel"):
            self.sm.clear_selection()
            st.rerun()

    def _render_station(self, annotated: AnnotatedStation) -> None:
        station = annotated.station
        st.markdown(f"### 🚉 {station.name_primary}")
        if station.name_latin:
            st.caption(station.name_latin)
        st.markdown(state_badge(state=annotated.state), unsafe_allow_html=True)

        st.markdown(
            f"**ID:** `{station.station_id}`  \n"
            f"**Status today:** {station.current_status}  \n"
            f"**Country:** {station.country_code or '–'}"
        )

        radius_km = station.display_radius_km
        if radius_km is not None:
            st.markdown(f"**Location:** {station.lat:.4f}, {station.lon:.4f} (approx. ±{radius_km:g} km)")
        else:
            st.markdown(f"**Location:** {station.lat:.4f}, {station.lon:.4f}")
        if station.geometry_quality:
            st.caption(f"Geometry quality: {station.geometry_quality}")

        if annotated.alternative_names:
            st.markdown("**Other names**")
            st.markdown("\n".join(f"- `{key}` {name}" for key, name in annotated.alternative_names.items()))

        refs = station.cross_references
        links = dict(refs.links())
        if refs.items():
            st.markdown("**References**")
            lines = []
            for label, value in refs.items():
                url = links.get(label)
                lines.append(f"- {label}: [{value}]({url})" if url else f"- {label}: {value}")
            st.markdown("\n".join(lines))

        notes = strip_markers(station.notes)
        if notes:
            st.markdown(f"**Notes:** {notes}")

        self._render_history(events=self.snapshot.event_log.for_station(station_id=station.station_id))

    def _render_segment(self, annotated: AnnotatedSegment) -> None:
        segment = annotated.segment
        st.markdown(f"### 🛤️ {segment.segment_id}")
        st.markdown(state_badge(state=annotated.state), unsafe_allow_html=True)

        catalogue = self.snapshot.catalogue
        lines = []
        for label, station_id in (("From", segment.from_station_id), ("To", segment.to_station_id)):
            station = catalogue.station_by_id(station_id=station_id)
            name = station.display_name if station else "unknown station"
            lines.append(f"**{label}:** {name} (`{station_id}`)")
        lines.append(f"**Length:** {segment.length_km:,.1f} km")
        if segment.geometry_quality:
            lines.append(f"**Geometry quality:** {segment.geometry_quality}")
        if segment.geometry_source:
            lines.append(f"**Geometry source:** {segment.geometry_source}")
        st.markdown("  \n".join(lines))

        notes = strip_markers(segment.notes)
        if notes:
            st.markdown(f"**Notes:** {notes}")

        self._render_history(events=self.snapshot.event_log.for_segment(segment_id=segment.segment_id))

    def _render_history(self, events: tuple[Event, ...]) -> None:
        st.markdown("**History**")
        if not events:
            st.caption("No events recorded")
            return
        ordered = sorted(events, key=lambda e: (e.year, e.date))
        st.markdown("\n".join(format_event(event=e, year=self.view.year) for e in ordered))
