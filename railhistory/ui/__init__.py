"""User interface components for the railway history viewer.

File Structure (layout-based naming):
- left_panel.py: Sidebar with legend, counts, layer toggles, data source
- center_map.py: Pydeck map with segments and stations for one year
- right_panel.py: Detail panel for the clicked station/segment
- bottom_chart.py: Plotly network growth chart

Core Components:
- state_machine.py: ViewerStateMachine (3 states) + ViewerContext
- year_controls.py: Year slider with step buttons
- deckgl_click_handler.py: Map click capture and deduplication
"""

from railhistory.ui.bottom_chart import TimelineChart
from railhistory.ui.center_map import MapRenderer
from railhistory.ui.deckgl_click_handler import DeckClickResult, render_deckgl_map
from railhistory.ui.left_panel import SidebarRenderer
from railhistory.ui.right_panel import DetailPanel
from railhistory.ui.state_machine import (
    ViewerContext,
    ViewerStateMachine,
    StreamlitUIListener,
)
from railhistory.ui.year_controls import clamp_year, render_year_controls, step_year

__all__ = [
    "ViewerStateMachine",
    "ViewerContext",
    "StreamlitUIListener",
    "MapRenderer",
    "TimelineChart",
    "SidebarRenderer",
    "DetailPanel",
    "DeckClickResult",
    "render_deckgl_map",
    "render_year_controls",
    "clamp_year",
    "step_year",
]
