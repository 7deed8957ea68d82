"""Explorer: selection-driven projection of a metabolomics table into scatter data."""

from metabexplorer.explorer.explorer_controller import ExplorerController
from metabexplorer.explorer.projector import ScatterDataset, project
from metabexplorer.explorer.row_table import RowTable
from metabexplorer.explorer.selection_state import (
    ChoosePrimary,
    ChooseSecondary,
    ExplorerState,
    Pivot,
    transition,
)
from metabexplorer.explorer.view_config import IN_VITRO, IN_VIVO, ViewConfig, get_view_config

__all__ = [
    "ChoosePrimary",
    "ChooseSecondary",
    "ExplorerController",
    "ExplorerState",
    "IN_VITRO",
    "IN_VIVO",
    "Pivot",
    "RowTable",
    "ScatterDataset",
    "ViewConfig",
    "get_view_config",
    "project",
    "transition",
]
