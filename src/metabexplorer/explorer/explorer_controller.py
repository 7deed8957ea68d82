"""Explorer controller: selection dropdowns and scatter plot for one view.

Provides ExplorerController, the entry point for building an explorer page
with NiceGUI. The selection logic lives in selection_state.transition() and
projector.project(); this module only wires them to widgets.
"""

from __future__ import annotations

import json
from typing import Optional

from nicegui import ui

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.figure_generator import FigureGenerator
from metabexplorer.explorer.labels import UnclassifiedConditionError
from metabexplorer.explorer.option_types import (
    Option,
    OptionGroup,
    OptionList,
    find_option,
    iter_options,
)
from metabexplorer.explorer.options import build_condition_options, build_metabolite_options
from metabexplorer.explorer.projector import ScatterDataset, project
from metabexplorer.explorer.row_table import RowTable
from metabexplorer.explorer.selection_state import (
    ChoosePrimary,
    ChooseSecondary,
    ExplorerState,
    Pivot,
    SelectionEvent,
    transition,
)

logger = get_logger(__name__)

FOOTER_TEXT = (
    "About the Website: The Metabolomics Data Explorer was designed by Shuo Han. "
    "© The Sonnenburg Lab 2020, Stanford University"
)


def select_options(options: OptionList) -> dict[str, str]:
    """Convert Option/OptionGroup lists to a ui.select options dict (value -> label).

    Grouped options are flattened in group order; group_headers() gives the
    headings to show above them.
    """
    return {option.value: option.label for option in iter_options(options)}


def group_headers(options: OptionList) -> dict[int, str]:
    """Map the flattened index of each group's first option to the group label.

    Empty groups get no heading. Flat option lists give an empty dict.
    """
    headers: dict[int, str] = {}
    index = 0
    for item in options:
        if isinstance(item, OptionGroup):
            if item.options:
                headers[index] = item.label
            index += len(item.options)
        else:
            index += 1
    return headers


def option_slot_template(headers: dict[int, str]) -> str:
    """Vue template for the QSelect ``option`` slot with group headings.

    ui.select sends options as ``{value: index, label}``, so headings are
    keyed by the option index.
    """
    lookup = json.dumps({str(i): label for i, label in headers.items()})
    return (
        f"<q-item-label v-if='({lookup})[props.opt.value]' header class='q-pb-xs text-weight-bold'>"
        f"{{{{ ({lookup})[props.opt.value] }}}}"
        "</q-item-label>"
        "<q-item v-bind='props.itemProps'>"
        "<q-item-section><q-item-label>{{ props.opt.label }}</q-item-label></q-item-section>"
        "</q-item>"
    )


class ExplorerController:
    """Controller for one explorer view.

    Holds the RowTable, the option lists derived from it, and the current
    ExplorerState. Every dropdown change runs one transition() and re-projects
    the scatter dataset.

    **Public API:**

    - **__init__(table, state=None)**: Derive option lists from table.
    - **dispatch(event)**: Apply a ChoosePrimary/ChooseSecondary event.
    - **current_dataset()**: ScatterDataset for the current state.
    - **build(container=None)**: Build the NiceGUI widgets.
    """

    def __init__(self, table: RowTable, *, state: Optional[ExplorerState] = None) -> None:
        self.table = table
        self.view = table.view
        self.figure_generator = FigureGenerator(self.view)
        self.state: ExplorerState = state if state is not None else ExplorerState()
        self.config_error: Optional[str] = None

        try:
            self.condition_options: OptionList = build_condition_options(table)
        except UnclassifiedConditionError as e:
            logger.error(f"{self.view.name}: {e}")
            self.config_error = str(e)
            self.condition_options = []
        self.metabolite_options: list[Option] = build_metabolite_options(table)

        # UI handles (set in build())
        self._primary_selects: dict[Pivot, ui.select] = {}
        self._secondary_selects: dict[Pivot, ui.select] = {}
        self._description_label: Optional[ui.label] = None
        self._plot_container: Optional[ui.element] = None
        self._plot: Optional[ui.plotly] = None
        self._footer: Optional[ui.label] = None
        self._updating_programmatically = False

    # ----------------------------
    # State
    # ----------------------------

    def dispatch(self, event: SelectionEvent) -> ExplorerState:
        """Apply a selection event, refresh widgets, and return the new state."""
        self.state = transition(self.state, event, self.table)
        logger.info(f"{self.view.name}: selection {self.state.to_dict()}")
        self._refresh()
        return self.state

    def current_dataset(self) -> ScatterDataset:
        return project(self.table, self.state)

    def primary_options(self, pivot: Pivot) -> OptionList:
        return self.condition_options if pivot is Pivot.CONDITION else self.metabolite_options

    def selected_condition_description(self) -> Optional[str]:
        """Description of the selected condition (multi-line), if any."""
        option = find_option(self.condition_options, self.state.condition.primary)
        return option.description if option is not None else None

    def _on_primary_change(self, pivot: Pivot, value: Optional[str]) -> None:
        if self._updating_programmatically:
            return
        self.dispatch(ChoosePrimary(pivot, value or None))

    def _on_secondary_change(self, pivot: Pivot, value: Optional[str]) -> None:
        if self._updating_programmatically:
            return
        self.dispatch(ChooseSecondary(pivot, value or None))

    # ----------------------------
    # UI
    # ----------------------------

    def build(self, *, container: Optional[ui.element] = None) -> None:
        """Build intro text, the two selection forms, and the plot area.

        Args:
            container: Optional NiceGUI container to build into. If None, widgets
                are created at the current top level.
        """
        def _build_content():
            for paragraph in self.view.intro:
                ui.label(paragraph).classes("w-full")

            if self.config_error:
                ui.label(f"Configuration error: {self.config_error}").classes("text-negative")

            for pivot in Pivot:
                primary_title = self.view.condition_title if pivot is Pivot.CONDITION else "Metabolite"
                with ui.row().classes("w-full items-start gap-4"):
                    with ui.column().classes("flex-1"):
                        self._primary_selects[pivot] = ui.select(
                            options=select_options(self.primary_options(pivot)),
                            label=primary_title,
                            with_input=True,
                            on_change=lambda e, p=pivot: self._on_primary_change(p, e.value),
                        ).classes("w-full")
                        headers = group_headers(self.primary_options(pivot))
                        if headers:
                            self._primary_selects[pivot].add_slot("option", option_slot_template(headers))
                        if pivot is Pivot.CONDITION:
                            self._description_label = ui.label("").classes(
                                "text-gray-600 whitespace-pre-line"
                            )
                    self._secondary_selects[pivot] = ui.select(
                        options={},
                        label=self.view.subcondition_title,
                        on_change=lambda e, p=pivot: self._on_secondary_change(p, e.value),
                    ).classes("flex-1")

            self._plot_container = ui.element("div").classes("w-full overflow-x-auto overflow-y-hidden")
            with self._plot_container:
                self._plot = ui.plotly(self.figure_generator.make_figure(self.current_dataset()))
            self._footer = ui.label(FOOTER_TEXT).classes("text-gray-600")
            self._refresh()

        if container is not None:
            with container:
                _build_content()
        else:
            _build_content()

    def _refresh(self) -> None:
        """Sync widgets to self.state and redraw the plot. No-op before build()."""
        if not self._primary_selects:
            return
        self._updating_programmatically = True
        try:
            for pivot in Pivot:
                sel = self.state.selection(pivot)
                primary = self._primary_selects[pivot]
                primary.value = sel.primary

                secondary = self._secondary_selects[pivot]
                secondary.options = select_options(list(self.state.subcondition_options(pivot)))
                secondary.value = sel.secondary
                secondary.set_enabled(sel.primary is not None)
                secondary.update()
        finally:
            self._updating_programmatically = False

        if self._description_label is not None:
            self._description_label.text = self.selected_condition_description() or ""

        dataset = self.current_dataset()
        if self._plot is not None:
            self._plot.style(f"min-width: {dataset.min_plot_width}px")
            self._plot.update_figure(self.figure_generator.make_figure(dataset))
        if self._plot_container is not None:
            self._plot_container.set_visibility(not dataset.is_empty)
        if self._footer is not None:
            self._footer.set_visibility(dataset.is_empty)
