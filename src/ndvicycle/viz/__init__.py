"""Chart renderer collaborators."""

from ndvicycle.viz.renderer import ChartRenderer, PlotlyRenderer, build_figure, chart_title

__all__ = ["ChartRenderer", "PlotlyRenderer", "build_figure", "chart_title"]
