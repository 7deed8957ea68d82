"""View configuration for the explorer.

A view (in vitro, in vivo) is a ViewConfig: which files to load, which
columns hold the condition and sub-condition, which rows count as valid
samples, and which label tables to use. Both views run through the same
engine; nothing here subclasses anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

import pandas as pd

from metabexplorer.explorer.labels import (
    COLONIZATION_CATALOG,
    MEDIA_LABELS,
    SAMPLE_TYPE_LABELS,
    TAXONOMY_CATALOG,
    ConditionCatalog,
)


@dataclass(frozen=True)
class SampleFilter:
    """Valid-sample predicate over one column.

    A row passes if its value in ``column`` is non-empty, equals ``equals``
    (when given), and is not one of ``exclude``. A table without ``column``
    has no valid rows.
    """

    column: str
    equals: Optional[str] = None
    exclude: tuple[str, ...] = ()

    def mask(self, df: pd.DataFrame) -> pd.Series:
        """Boolean Series (aligned to df.index), True for valid sample rows."""
        if self.column not in df.columns:
            return pd.Series(False, index=df.index)
        values = df[self.column].fillna("").astype(str)
        keep = values != ""
        if self.equals is not None:
            keep = keep & (values == self.equals)
        if self.exclude:
            keep = keep & ~values.isin(self.exclude)
        return keep


@dataclass(frozen=True)
class ViewConfig:
    """Configuration of one explorer view.

    Attributes:
        name: Registry key ("in_vitro", "in_vivo").
        title: Navigation label.
        route: Page path the view is served at.
        metadata_file: Metadata table filename, relative to the data dir.
        data_file: Measurement table filename, relative to the data dir.
        condition_col: Column holding the condition (taxonomy/colonization).
        subcondition_col: Column holding the sub-condition (media/sample_type).
        sample_filter: Valid-sample predicate applied after the merge.
        condition_catalog: Condition display labels (and grouping).
        subcondition_labels: Sub-condition raw value -> display label.
        pinned_subcondition: Sub-condition listed first in dropdowns.
        condition_title: Dropdown / axis title for the condition.
        subcondition_title: Dropdown title for the sub-condition.
        y_axis_title: y-axis legend.
        intro: Paragraphs shown above the selection forms.
    """

    name: str
    title: str
    route: str
    metadata_file: str
    data_file: str
    condition_col: str
    subcondition_col: str
    sample_filter: SampleFilter
    condition_catalog: ConditionCatalog
    subcondition_labels: Mapping[str, str] = field(default_factory=dict)
    pinned_subcondition: Optional[str] = None
    condition_title: str = "Condition"
    subcondition_title: str = "Sub-condition"
    y_axis_title: str = "Relative fold change (log2)"
    intro: tuple[str, ...] = ()

    def x_axis_title(self, metabolite_pivot: bool) -> str:
        """x-axis legend: conditions for the metabolite pivot, else metabolites."""
        return self.condition_title if metabolite_pivot else "Metabolite"


IN_VITRO = ViewConfig(
    name="in_vitro",
    title="In vitro",
    route="/",
    metadata_file="in_vitro_metadata.txt",
    data_file="in_vitro_data.txt",
    condition_col="taxonomy",
    subcondition_col="media",
    sample_filter=SampleFilter(column="sample_type", equals="supernatant"),
    condition_catalog=TAXONOMY_CATALOG,
    subcondition_labels=MEDIA_LABELS,
    pinned_subcondition="mm",
    condition_title="Taxonomy",
    subcondition_title="Media",
    y_axis_title="Relative fold change versus media blank controls (log2)",
    intro=(
        "This page enables plotting in vitro data from Han and Van Treuren et al.",
        "Select a Taxonomy and Media below to plot the relative fold change across all metabolites.",
        "Alternatively, select a Metabolite and Media below to plot the relative fold change "
        "across all taxonomies.",
    ),
)

IN_VIVO = ViewConfig(
    name="in_vivo",
    title="In vivo",
    route="/invivo",
    metadata_file="mouse_metadata.txt",
    data_file="mouse_data.txt",
    condition_col="colonization",
    subcondition_col="sample_type",
    sample_filter=SampleFilter(column="colonization", exclude=("germ-free",)),
    condition_catalog=COLONIZATION_CATALOG,
    subcondition_labels=SAMPLE_TYPE_LABELS,
    pinned_subcondition=None,
    condition_title="Colonization",
    subcondition_title="Sample Type",
    y_axis_title="Relative fold change versus germ-free controls (log2)",
    intro=(
        "This page enables plotting in vivo data from Han and Van Treuren et al.",
        "Select a Colonization and Sample Type below to plot the relative fold change "
        "across all metabolites.",
        "Alternatively, select a Metabolite and Sample Type below to plot the relative fold change "
        "across all colonizations.",
    ),
)

_VIEWS: dict[str, ViewConfig] = {
    IN_VITRO.name: IN_VITRO,
    IN_VIVO.name: IN_VIVO,
}


def get_view_config(name: str) -> ViewConfig:
    """Return the ViewConfig registered under name.

    Raises:
        ValueError: If no view is registered under name.
    """
    cfg = _VIEWS.get(name)
    if cfg is None:
        raise ValueError(f"Unknown view {name!r}; expected one of {sorted(_VIEWS)}")
    return cfg


def all_views() -> list[ViewConfig]:
    """All registered views, in navigation order."""
    return list(_VIEWS.values())
