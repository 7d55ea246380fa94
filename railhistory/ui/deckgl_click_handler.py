"""Map click handling using streamlit-deckgl.

st_deckgl returns the full deck.gl onClick event, with the picked
object's properties spread into the event dict (no "object" key):
- Empty map click: {coordinate: [lon, lat], eventType: "click"}
- Object click: {type: ..., id: ..., coordinate: [lon, lat], eventType: "click", ...}

Our layers set "type" to a SubjectKind value and "id" to the entity id.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
import streamlit as st
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from railhistory.constants import ChartConfig
from railhistory.model.event import SubjectKind

logger = logging.getLogger(__name__)


@dataclass
class DeckClickResult:
    """Result of one map click.

    Attributes:
        kind: Kind of entity clicked, None for empty map clicks
        entity_id: Station or segment id, None for empty map clicks
        coordinate: [lon, lat] of the click
    """

    kind: SubjectKind | None
    entity_id: str | None
    coordinate: list[float] | None

    @property
    def is_entity_click(self) -> bool:
        return self.entity_id is not None

    @property
    def is_empty_click(self) -> bool:
        """True if the map background was clicked."""
        return self.entity_id is None and self.coordinate is not None

    @property
    def click_id(self) -> str:
        """Identity used to drop repeated reports of the same click."""
        parts = []
        if self.kind is not None and self.entity_id:
            parts.append(f"{self.kind.value}_{self.entity_id}")
        if self.coordinate:
            parts.append(f"coord_{self.coordinate[0]:.5f}_{self.coordinate[1]:.5f}")
        return "_".join(parts)

    @staticmethod
    def empty() -> "DeckClickResult":
        return DeckClickResult(kind=None, entity_id=None, coordinate=None)


def parse_click_event(event: dict[str, Any] | None) -> DeckClickResult:
    """Turn a raw st_deckgl event into a DeckClickResult."""
    if not event:
        return DeckClickResult.empty()

    coordinate: list[float] | None = None
    coord = event.get("coordinate")
    if isinstance(coord, (list, tuple)) and len(coord) >= 2:
        coordinate = [float(coord[0]), float(coord[1])]

    kind: SubjectKind | None = None
    entity_id: str | None = None
    obj_type = event.get("type")
    if obj_type in {k.value for k in SubjectKind} and event.get("id"):
        kind = SubjectKind(obj_type)
        entity_id = str(event["id"])
        logger.debug(f"Object click detected: type={obj_type}, id={entity_id}")

    return DeckClickResult(kind=kind, entity_id=entity_id, coordinate=coordinate)


def render_deckgl_map(deck: pdk.Deck, key: str, height: int = ChartConfig.MAP_HEIGHT) -> DeckClickResult:
    """Render the map and return a click, or an empty result if nothing new.

    A click is reported once: Streamlit reruns return the last event again,
    so the previous click id is kept in session_state.

    Args:
        deck: Configured pydeck.Deck object
        key: Unique key for this component instance
        height: Height in pixels
    """
    last_click_key = f"_deckgl_last_click_{key}"
    if last_click_key not in st.session_state:
        st.session_state[last_click_key] = None

    # events=["click"] is required for st_deckgl to report clicks
    event = st_deckgl(deck, key=key, height=height, events=["click"])
    result = parse_click_event(event=event if isinstance(event, dict) else None)
    if not result.is_entity_click and not result.is_empty_click:
        return DeckClickResult.empty()

    click_id = result.click_id
    if click_id == st.session_state.get(last_click_key):
        return DeckClickResult.empty()
    st.session_state[last_click_key] = click_id

    logger.debug(f"Click detected: {click_id}")
    return result
