"""State machine for the railway history viewer UI.

Uses python-statemachine with the model pattern: the ViewerContext holds
everything that survives a Streamlit rerun, and the machine keeps its
current state in ViewerContext.state.

States:
    LOADING: Catalogue and event log are being read (initial)
    READY: Snapshot loaded, map/sidebar/details are interactive
    FAILED: Loading raised, error text shown with a reload button

Transitions:
    LOADING -> READY: data_loaded
    LOADING -> FAILED: load_failed
    READY | FAILED -> LOADING: reload

Year, selection and layer toggles are orthogonal to state and only
meaningful in READY. Changing them never triggers a transition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import streamlit as st
from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from railhistory.constants import YearConfig
from railhistory.model.event import SubjectKind

logger = logging.getLogger(__name__)


@dataclass
class SelectionContext:
    """Entity shown in the detail panel."""

    kind: SubjectKind | None = None
    entity_id: str | None = None

    def select(self, kind: SubjectKind, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id

    def clear(self) -> None:
        self.kind = None
        self.entity_id = None

    def has_selection(self) -> bool:
        return self.entity_id is not None

    def is_station(self) -> bool:
        return self.kind is SubjectKind.STATION

    def is_segment(self) -> bool:
        return self.kind is SubjectKind.SEGMENT


@dataclass
class LayerToggles:
    """Which map layers are drawn."""

    show_segments: bool = True
    show_stations: bool = True
    show_approximate: bool = True


@dataclass
class ViewerContext:
    """Shared context/model for the viewer state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    state: str | None = None

    year: int = YearConfig.DEFAULT_YEAR
    selection: SelectionContext = field(default_factory=SelectionContext)
    layers: LayerToggles = field(default_factory=LayerToggles)
    error: str = ""

    # Bumped to force a fresh map component (drops stale click state)
    map_version: int = 0

    def bump_map_version(self) -> None:
        self.map_version += 1

    def __repr__(self) -> str:
        return (
            f"ViewerContext(state={self.state}, year={self.year}, "
            f"selection={self.selection.kind}:{self.selection.entity_id}, "
            f"map_version={self.map_version})"
        )


class StreamlitUIListener:
    """Triggers st.rerun() after every transition so the new state renders.

    Usage:
        sm = ViewerStateMachine(context=context)
        sm.add_listener(StreamlitUIListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")
        st.rerun()


class ViewerStateMachine(StateMachine):
    """Load lifecycle of the viewer. See module docstring for transitions."""

    loading = State("Loading", initial=True)
    ready = State("Ready")
    failed = State("Failed")

    data_loaded = loading.to(ready)
    load_failed = loading.to(failed)
    reload = ready.to(loading) | failed.to(loading)

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_loading(self) -> bool:
        return self.loading.is_active

    @property
    def is_ready(self) -> bool:
        return self.ready.is_active

    @property
    def is_failed(self) -> bool:
        return self.failed.is_active

    # ==========================================================================
    # Hooks
    # ==========================================================================

    def on_enter_loading(self) -> None:
        """Hook: a fresh load starts with no error and no selection."""
        self.context.error = ""
        self.context.selection.clear()
        self.context.bump_map_version()

    def before_load_failed(self, error: str) -> None:
        self.context.error = error

    # ==========================================================================
    # Context Helpers (no state change)
    # ==========================================================================

    def set_year(self, year: int) -> None:
        if year != self.context.year:
            logger.info(f"[YEAR] {self.context.year} -> {year}")
        self.context.year = year

    def select_entity(self, kind: SubjectKind, entity_id: str) -> None:
        self.context.selection.select(kind=kind, entity_id=entity_id)
        logger.info(f"Detail panel: showing {kind.value} {entity_id}")

    def clear_selection(self) -> None:
        self.context.selection.clear()
        self.context.bump_map_version()

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: ViewerContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or ViewerContext()
        super().__init__(model=model, start_value=start_value)

    @property
    def context(self) -> ViewerContext:
        return self.model

    def get_state_name(self) -> str:
        return self.current_state.name

    def __repr__(self) -> str:
        return f"ViewerStateMachine(state={self.get_state_name()}, model={self.context!r})"

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure."""
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(
        add_ui_listener: bool = True, start_value: str | None = None
    ) -> tuple["ViewerStateMachine", ViewerContext]:
        """Factory method to create state machine with context and optional UI listener.

        Args:
            add_ui_listener: If True, adds StreamlitUIListener for auto st.rerun().
                             Set to False for testing or non-Streamlit usage.
            start_value: State to start in instead of loading (e.g. "ready" when
                         recovering with data already loaded)
        """
        context = ViewerContext()
        sm = ViewerStateMachine(context=context, start_value=start_value)
        if add_ui_listener:
            sm.add_listener(StreamlitUIListener())
            logger.info("Created ViewerStateMachine with StreamlitUIListener")
        else:
            logger.info("Created ViewerStateMachine without UI listener")
        return sm, context
