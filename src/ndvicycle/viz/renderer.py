"""Two-axis NDVI / precipitation chart built with plotly."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union

from plotly import graph_objects as go
from plotly.subplots import make_subplots

from ndvicycle.logging import get_logger
from ndvicycle.records import AlignedSeries

logger = get_logger("renderer")

NDVI_LINE = "rgba(119, 226, 24, 1)"
NDVI_FILL = "rgba(119, 226, 24, 0.2)"
PRECIP_LINE = "rgba(27, 155, 255, 1)"


class ChartRenderer(Protocol):
    """Anything that can redraw the chart for one entity."""

    def render(self, series: AlignedSeries, index: int) -> None: ...


def chart_title(index: int) -> str:
    return f"NDVI / Precipitation (Field Index: {index})"


def build_figure(series: AlignedSeries, index: int) -> go.Figure:
    """NDVI on the left axis pinned to [0, 1], precipitation on the right."""
    labels = list(series.labels)
    fig = make_subplots(specs=[[{"secondary_y": True}]])

    fig.add_trace(
        go.Scatter(x=labels, y=list(series.primary), name="NDVI", mode="lines",
                   line=dict(color=NDVI_LINE), fill="tozeroy", fillcolor=NDVI_FILL),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(x=labels, y=list(series.secondary), name="Precipitation (in)", mode="lines",
                   line=dict(color=PRECIP_LINE)),
        secondary_y=True,
    )

    fig.update_layout(title_text=chart_title(index),
                      title_font_size=15,
                      hovermode="x",
                      xaxis=dict(nticks=25, showgrid=False),
                      yaxis=dict(range=[0, 1], showgrid=False),
                      yaxis2=dict(rangemode="tozero", showgrid=False))
    fig.update_yaxes(title_text="NDVI", secondary_y=False)
    fig.update_yaxes(title_text="Precipitation (in)", secondary_y=True)
    return fig


class PlotlyRenderer:
    """
    Rebuild the figure on every refresh, optionally writing it to HTML.

    The previous figure is discarded rather than patched, so a refresh never
    leaves traces from another field behind.
    """

    def __init__(self, html_file: Optional[Union[str, Path]] = None):
        self.html_file = Path(html_file) if html_file else None
        self.figure: Optional[go.Figure] = None
        self.renders = 0

    def render(self, series: AlignedSeries, index: int) -> None:
        self.figure = build_figure(series, index)
        self.renders += 1
        if self.html_file:
            self.figure.write_html(str(self.html_file), include_plotlyjs="cdn", auto_open=False)
        logger.debug("rendered", index=index, n_obs=len(series), html=str(self.html_file))
