"""MapRenderer - Pydeck map of the network as it stood in one year.

Layers:
- Segments as lines colored by state (PathLayer)
- Approximate stations as uncertainty circles in meters (ScatterplotLayer)
- Exact stations as fixed-size points colored by state (ScatterplotLayer)

Conventions:
- [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- Every pickable record carries "type" and "id" so clicks map back to
  an entity (see deckgl_click_handler.py)
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import pydeck as pdk

from railhistory.constants import MapConfig, MarkerConfig, NotesConfig, StyleConfig
from railhistory.model.annotated import AnnotatedSegment, EntityState, YearView
from railhistory.model.event import SubjectKind
from railhistory.ui.state_machine import LayerToggles

logger = logging.getLogger(__name__)


def state_color(state: EntityState, alpha: int = 255) -> list[int]:
    """RGBA color for an entity state."""
    return StyleConfig.hex_to_rgba(hex_color=StyleConfig.STATE_COLORS[state.value], alpha=alpha)


@dataclass
class LayerCollection:
    """Pydeck layers in z-order (back to front): segments → uncertainty → stations.

    Stations come last so they get click priority over the lines they sit on.
    """

    segments: list[pdk.Layer] = field(default_factory=list)
    uncertainty: list[pdk.Layer] = field(default_factory=list)
    stations: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        return self.segments + self.uncertainty + self.stations


class MapRenderer:
    """Renders a YearView on a Pydeck map.

    Example:
        renderer = MapRenderer()
        deck = renderer.render(view=service.resolve(year=1900))
    """

    def __init__(
        self,
        center_lat: float = MapConfig.START_CENTER_LAT,
        center_lon: float = MapConfig.START_CENTER_LON,
        zoom: int = MapConfig.DEFAULT_ZOOM,
    ) -> None:
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom

    def get_view_state(self) -> pdk.ViewState:
        return pdk.ViewState(
            latitude=self.center_lat,
            longitude=self.center_lon,
            zoom=self.zoom,
            pitch=MapConfig.DEFAULT_PITCH,
            bearing=MapConfig.DEFAULT_BEARING,
        )

    def render(
        self,
        view: YearView,
        layers: LayerToggles | None = None,
        selected_id: str | None = None,
    ) -> pdk.Deck:
        """Render every visible entity of the year.

        Args:
            view: Resolver output for the selected year
            layers: Which layers to draw (all when None)
            selected_id: Station or segment id to highlight
        """
        layers = layers or LayerToggles()
        collection = LayerCollection()

        if layers.show_segments:
            collection.segments.append(self._create_segment_layer(view=view, selected_id=selected_id))
        if layers.show_approximate:
            collection.uncertainty.append(self._create_uncertainty_layer(view=view, selected_id=selected_id))
        if layers.show_stations:
            collection.stations.append(self._create_station_layer(view=view, selected_id=selected_id))

        logger.debug(
            f"[MAP] year={view.year}: {len(view.segments)} segments, {len(view.stations)} stations, "
            f"selected={selected_id}"
        )
        return pdk.Deck(
            map_style=MapConfig.MAP_STYLE,
            map_provider=MapConfig.MAP_PROVIDER,
            initial_view_state=self.get_view_state(),
            layers=collection.get_ordered_layers(),
            tooltip=self._create_tooltip_config(),
            parameters={"pickingRadius": MarkerConfig.PICKING_RADIUS_PX},
        )

    # =========================================================================
    # LAYER DATA
    # =========================================================================

    @staticmethod
    def build_segment_data(view: YearView, selected_id: str | None = None) -> list[dict[str, Any]]:
        """One record per visible segment with a drawable path."""
        data = []
        for annotated in view.segments:
            path = annotated.segment.path_lon_lat
            if len(path) < 2:
                continue
            is_selected = annotated.segment_id == selected_id
            data.append(
                {
                    "type": SubjectKind.SEGMENT.value,
                    "id": annotated.segment_id,
                    "path": path,
                    "color": (
                        StyleConfig.hex_to_rgba(hex_color=StyleConfig.SELECTED_COLOR)
                        if is_selected
                        else state_color(state=annotated.state)
                    ),
                    "width": MarkerConfig.SEGMENT_WIDTH_HIGHLIGHT_PX if is_selected else MarkerConfig.SEGMENT_WIDTH_PX,
                    "name": _segment_label(annotated=annotated),
                    "state": StyleConfig.STATE_LABELS[annotated.state.value],
                }
            )
        return data

    @staticmethod
    def build_station_data(view: YearView, selected_id: str | None = None) -> list[dict[str, Any]]:
        """Point records for visible stations with an exact location."""
        data = []
        for annotated in view.stations:
            if annotated.station.is_approximate:
                continue
            is_selected = annotated.station_id == selected_id
            data.append(
                {
                    "type": SubjectKind.STATION.value,
                    "id": annotated.station_id,
                    "position": [annotated.station.lon, annotated.station.lat],
                    "color": state_color(state=annotated.state),
                    "line_color": (
                        StyleConfig.hex_to_rgba(hex_color=StyleConfig.SELECTED_COLOR) if is_selected else [255, 255, 255, 255]
                    ),
                    "name": annotated.station.display_name,
                    "state": StyleConfig.STATE_LABELS[annotated.state.value],
                }
            )
        return data

    @staticmethod
    def build_uncertainty_data(view: YearView, selected_id: str | None = None) -> list[dict[str, Any]]:
        """Circle records for visible stations whose location is approximate.

        Radius is in meters: the notes marker gives kilometers.
        """
        data = []
        for annotated in view.stations:
            radius_km = annotated.station.display_radius_km
            if radius_km is None:
                continue
            is_selected = annotated.station_id == selected_id
            border = StyleConfig.SELECTED_COLOR if is_selected else StyleConfig.APPROXIMATE_BORDER_COLOR
            data.append(
                {
                    "type": SubjectKind.STATION.value,
                    "id": annotated.station_id,
                    "position": [annotated.station.lon, annotated.station.lat],
                    "radius_m": radius_km * NotesConfig.RADIUS_UNIT_M,
                    "fill_color": StyleConfig.hex_to_rgba(
                        hex_color=StyleConfig.APPROXIMATE_FILL_COLOR, alpha=MarkerConfig.UNCERTAINTY_FILL_ALPHA
                    ),
                    "line_color": StyleConfig.hex_to_rgba(hex_color=border, alpha=MarkerConfig.UNCERTAINTY_LINE_ALPHA),
                    "name": f"{annotated.station.display_name} (approx. ±{radius_km:g} km)",
                    "state": StyleConfig.STATE_LABELS[annotated.state.value],
                }
            )
        return data

    # =========================================================================
    # LAYERS
    # =========================================================================

    def _create_segment_layer(self, view: YearView, selected_id: str | None) -> pdk.Layer:
        return pdk.Layer(
            "PathLayer",
            self.build_segment_data(view=view, selected_id=selected_id),
            get_path="path",
            get_color="color",
            get_width="width",
            width_units="pixels",
            width_min_pixels=1,
            pickable=True,
            auto_highlight=True,
            id="segments",
        )

    def _create_uncertainty_layer(self, view: YearView, selected_id: str | None) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            self.build_uncertainty_data(view=view, selected_id=selected_id),
            get_position="position",
            get_radius="radius_m",
            radius_units="meters",
            radius_min_pixels=MarkerConfig.STATION_RADIUS_PX,
            get_fill_color="fill_color",
            get_line_color="line_color",
            filled=True,
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            id="approximate_stations",
        )

    def _create_station_layer(self, view: YearView, selected_id: str | None) -> pdk.Layer:
        return pdk.Layer(
            "ScatterplotLayer",
            self.build_station_data(view=view, selected_id=selected_id),
            get_position="position",
            get_radius=MarkerConfig.STATION_RADIUS_PX,
            radius_units="pixels",
            radius_min_pixels=MarkerConfig.STATION_RADIUS_MIN_PX,
            get_fill_color="color",
            get_line_color="line_color",
            stroked=True,
            line_width_min_pixels=1,
            pickable=True,
            auto_highlight=True,
            highlight_color=[255, 255, 0, 180],
            id="stations",
        )

    # =========================================================================
    # TOOLTIP CONFIGURATION
    # =========================================================================

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Name and state only, details in side panel."""
        return {
            "html": "<b>{name}</b><br/>{state}",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }


def _segment_label(annotated: AnnotatedSegment) -> str:
    segment = annotated.segment
    return f"{segment.segment_id}: {segment.from_station_id} → {segment.to_station_id}"
