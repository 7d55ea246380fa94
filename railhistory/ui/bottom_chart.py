"""TimelineChart - Plotly network growth chart.

Shows, for every year of the slider range:
- Visible stations and segments (left axis)
- Total track length in km (right axis)
- A vertical marker at the selected year
"""

import logging
from typing import Optional

import plotly.graph_objects as go

from railhistory.constants import ChartConfig
from railhistory.core.network_statistics import TimelineSeries

logger = logging.getLogger(__name__)


class TimelineChart:
    """Renders network size over time using Plotly.

    Example:
        chart = TimelineChart()
        fig = chart.render(series=series, current_year=1900)
        st.plotly_chart(fig)
    """

    def __init__(self, height: int = ChartConfig.TIMELINE_HEIGHT) -> None:
        self.height = height

    def render(self, series: TimelineSeries, current_year: int, title: Optional[str] = None) -> go.Figure:
        """Render the growth chart.

        Args:
            series: Per-year counts from build_timeline_series
            current_year: Year to mark with a vertical line
            title: Optional chart title

        Returns:
            Plotly Figure object.
        """
        if len(series) == 0:
            raise ValueError("Series must cover at least one year to render")

        years = series.years.tolist()
        fig = go.Figure()

        fig.add_trace(
            go.Scatter(
                x=years,
                y=series.station_counts.tolist(),
                mode="lines",
                line=dict(color=ChartConfig.STATION_SERIES_COLOR, width=2, shape="hv"),
                name="Stations",
                hovertemplate="%{x}: %{y} stations<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=years,
                y=series.segment_counts.tolist(),
                mode="lines",
                line=dict(color=ChartConfig.SEGMENT_SERIES_COLOR, width=2, shape="hv"),
                name="Segments",
                hovertemplate="%{x}: %{y} segments<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=years,
                y=series.network_km.tolist(),
                mode="lines",
                line=dict(color=ChartConfig.SEGMENT_SERIES_COLOR, width=1, dash="dot"),
                name="Track km",
                yaxis="y2",
                hovertemplate="%{x}: %{y:,.0f} km<extra></extra>",
            )
        )

        fig.add_vline(
            x=current_year,
            line=dict(color=ChartConfig.CURRENT_YEAR_COLOR, width=2, dash="dash"),
            annotation_text=str(current_year),
            annotation_position="top",
        )

        fig.update_layout(
            title=dict(text=title or "Network growth", x=0.5),
            xaxis=dict(
                title="Year",
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
                range=[years[0], years[-1]],
            ),
            yaxis=dict(
                title="Count",
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
                rangemode="tozero",
            ),
            yaxis2=dict(
                title="Track (km)",
                overlaying="y",
                side="right",
                showgrid=False,
                rangemode="tozero",
            ),
            legend=dict(orientation="h", y=-0.25, x=0.5, xanchor="center"),
            height=self.height,
            margin=dict(l=50, r=50, t=40, b=40),
            plot_bgcolor="white",
        )
        return fig
