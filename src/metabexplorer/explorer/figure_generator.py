"""Plotly figure generation for the explorer.

Turns a ScatterDataset into a Plotly figure dictionary for ui.plotly:
numeric x positions with category tick labels and a padded y range. Plots
narrower than FIXED_WIDTH_LIMIT get their minimum width as a fixed width;
wider ones autosize and the page enforces the minimum width.
"""

from __future__ import annotations

import plotly.graph_objects as go
from plotly.colors import qualitative

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.projector import ScatterDataset
from metabexplorer.explorer.selection_state import Pivot
from metabexplorer.explorer.view_config import ViewConfig

logger = get_logger(__name__)

PLOT_HEIGHT = 1100
# narrower plots get a fixed width, wider ones fill the container
FIXED_WIDTH_LIMIT = 500
POINT_SIZE = 4
FONT_SIZE = 10
# category10
COLORWAY = list(qualitative.D3)


class FigureGenerator:
    """Generates Plotly figure dictionaries for one view.

    Attributes:
        view: ViewConfig providing axis titles.
    """

    def __init__(self, view: ViewConfig) -> None:
        self.view = view

    def hover_name_title(self, pivot: Pivot) -> str:
        """Title of the hovered point's name: condition or metabolite."""
        if pivot is Pivot.METABOLITE:
            return self.view.condition_col
        return "metabolite"

    def make_figure(self, dataset: ScatterDataset) -> dict:
        """Generate the Plotly figure dictionary for dataset.

        Returns:
            Plotly figure dictionary; an empty figure if dataset is empty.
        """
        if dataset.is_empty:
            logger.debug("make_figure: empty dataset")
            return go.Figure().to_dict()

        metabolite_pivot = dataset.pivot is Pivot.METABOLITE
        name_title = self.hover_name_title(dataset.pivot)

        fig = go.Figure()
        for series in dataset.series:
            fig.add_trace(go.Scatter(
                x=[p.x for p in series.points],
                y=[p.y for p in series.points],
                mode="markers",
                name=series.id,
                customdata=[p.name for p in series.points],
                marker=dict(size=POINT_SIZE),
                hovertemplate=f"<b>{name_title}</b>: %{{customdata}}<br><b>y</b>: %{{y}}<extra></extra>",
            ))

        tick_values = list(range(len(dataset.category_order)))
        fixed_width = dataset.min_plot_width if dataset.min_plot_width < FIXED_WIDTH_LIMIT else None
        fig.update_layout(
            width=fixed_width,
            autosize=fixed_width is None,
            height=PLOT_HEIGHT,
            margin=dict(l=90, r=20, t=80, b=40),
            font=dict(size=FONT_SIZE),
            colorway=COLORWAY,
            showlegend=False,
            uirevision="keep",
            xaxis=dict(
                title=dict(text=self.view.x_axis_title(metabolite_pivot)),
                tickmode="array",
                tickvals=tick_values,
                ticktext=list(dataset.category_order),
                tickangle=-90,
                showgrid=True,
                range=[-0.5, max(len(tick_values) - 0.5, 0.5)],
                zeroline=False,
            ),
            yaxis=dict(
                title=dict(text=self.view.y_axis_title),
                range=list(dataset.y_range),
            ),
        )
        logger.debug(
            f"Figure generated: {len(dataset.points)} points, "
            f"{len(dataset.category_order)} categories"
        )
        return fig.to_dict()
