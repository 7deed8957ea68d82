"""Project a RowTable and selection state into a categorical scatter dataset.

- Condition pivot fully selected: one point per non-zero measurement cell of
  the matching rows, categories are metabolite names.
- Metabolite pivot fully selected: one point per row of the sub-condition
  with a value for the metabolite, categories are condition display names.
- Otherwise: an empty dataset.

Category indices (x) follow the case-insensitive sort of the category names,
not the order points are encountered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.row_table import RowTable, metabolite_name
from metabexplorer.explorer.selection_state import ExplorerState, Pivot
from metabexplorer.explorer.sorting import sort_case_insensitive

logger = get_logger(__name__)

SERIES_ID = "all"
MIN_PLOT_WIDTH = 300
PLOT_WIDTH_PER_CATEGORY = 11
PLOT_WIDTH_MARGIN = 100
RANGE_PADDING = 0.1


@dataclass(frozen=True)
class ScatterPoint:
    x: int
    y: float
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "name": self.name}


@dataclass(frozen=True)
class ScatterSeries:
    id: str
    points: tuple[ScatterPoint, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "points": [p.to_dict() for p in self.points]}


@dataclass(frozen=True)
class ScatterDataset:
    """Renderer-facing scatter data.

    Attributes:
        series: Point series (one "all" series, or none for an empty dataset).
        category_order: Category label for each x index.
        y_range: Padded (min, max) for the y axis.
        pivot: Pivot the dataset was projected for, or None when empty.
    """

    series: tuple[ScatterSeries, ...] = field(default_factory=tuple)
    category_order: tuple[str, ...] = field(default_factory=tuple)
    y_range: tuple[float, float] = (0.0, 0.0)
    pivot: Optional[Pivot] = None

    @property
    def is_empty(self) -> bool:
        return not self.series

    @property
    def points(self) -> list[ScatterPoint]:
        return [p for s in self.series for p in s.points]

    def category_label(self, x: int) -> str:
        return self.category_order[x]

    @property
    def min_plot_width(self) -> int:
        return min_plot_width(len(self.category_order))

    def to_dict(self) -> dict[str, Any]:
        return {
            "series": [s.to_dict() for s in self.series],
            "categoryOrder": list(self.category_order),
            "yRange": list(self.y_range),
        }


EMPTY_DATASET = ScatterDataset()


def min_plot_width(category_count: int) -> int:
    """Suggested minimum plot width in pixels for a horizontally scrolled plot."""
    return max(MIN_PLOT_WIDTH, PLOT_WIDTH_PER_CATEGORY * category_count + PLOT_WIDTH_MARGIN)


def y_range(values: Iterable[float]) -> tuple[float, float]:
    """Padded y range for a set of values.

    Pads by 10% of (max - min) on each side. A single distinct value v gives
    (min(2v, 0), max(2v, 0)). No values gives (0, 0).
    """
    y = np.asarray(list(values), dtype=float)
    if y.size == 0:
        return (0.0, 0.0)
    y_min = float(np.min(y))
    y_max = float(np.max(y))
    span = y_max - y_min
    if span == 0:
        doubled = y_max * 2
        return (min(doubled, 0.0), max(doubled, 0.0))
    return (y_min - span * RANGE_PADDING, y_max + span * RANGE_PADDING)


def _to_numbers(values: pd.Series) -> pd.Series:
    """Numeric view of string cells; unparseable or non-finite cells become NaN."""
    y = pd.to_numeric(values.astype(str).str.strip(), errors="coerce").astype(float)
    return y.where(np.isfinite(y))


def _build_dataset(pivot: Pivot, names: list[str], ys: list[float]) -> ScatterDataset:
    category_order = sort_case_insensitive(names)
    x_index = {name: i for i, name in enumerate(category_order)}
    points = tuple(
        ScatterPoint(x=x_index[name], y=y, name=name) for name, y in zip(names, ys)
    )
    return ScatterDataset(
        series=(ScatterSeries(id=SERIES_ID, points=points),),
        category_order=tuple(category_order),
        y_range=y_range(ys),
        pivot=pivot,
    )


def _project_condition(table: RowTable, condition: str, subcondition: str) -> ScatterDataset:
    view = table.view
    rows = table.rows_where({view.condition_col: condition, view.subcondition_col: subcondition})

    names: list[str] = []
    ys: list[float] = []
    measurement_columns = [c for c in rows.columns if table.is_measurement_column(c)]
    for _, row in rows.iterrows():
        values = _to_numbers(row[measurement_columns]) if measurement_columns else pd.Series(dtype=float)
        for column, y in values.items():
            # zero means not detected
            if pd.isna(y) or y == 0:
                continue
            names.append(metabolite_name(str(column)))
            ys.append(float(y))

    logger.debug(
        f"condition pivot {condition!r}/{subcondition!r}: {len(rows)} row(s), {len(ys)} point(s)"
    )
    return _build_dataset(Pivot.CONDITION, names, ys)


def _project_metabolite(table: RowTable, metabolite: str, subcondition: str) -> ScatterDataset:
    view = table.view
    rows = table.rows_where({view.subcondition_col: subcondition})
    catalog = view.condition_catalog

    names: list[str] = []
    ys: list[float] = []
    if metabolite in rows.columns and view.condition_col in rows.columns:
        cells = rows[metabolite]
        present = rows[cells != ""]
        numbers = _to_numbers(present[metabolite])
        for condition, y in zip(present[view.condition_col], numbers):
            if pd.isna(y):
                continue
            names.append(catalog.display_name(condition))
            ys.append(float(y))

    logger.debug(
        f"metabolite pivot {metabolite!r}/{subcondition!r}: {len(rows)} row(s), {len(ys)} point(s)"
    )
    return _build_dataset(Pivot.METABOLITE, names, ys)


def project(table: RowTable, state: ExplorerState) -> ScatterDataset:
    """Scatter dataset for the current selection.

    Args:
        table: RowTable of the current view.
        state: Current ExplorerState.

    Returns:
        ScatterDataset; EMPTY_DATASET unless one pivot is fully selected.
    """
    pivot = state.active_pivot
    if pivot is Pivot.CONDITION:
        sel = state.condition
        return _project_condition(table, sel.primary, sel.secondary)
    if pivot is Pivot.METABOLITE:
        sel = state.metabolite
        return _project_metabolite(table, sel.primary, sel.secondary)
    return EMPTY_DATASET
