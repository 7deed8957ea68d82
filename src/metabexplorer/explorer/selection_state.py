"""Selection state for the explorer.

Two pivots, each with a primary and a secondary stage:

- condition pivot: condition (taxonomy/colonization) then sub-condition
- metabolite pivot: metabolite then sub-condition

Choosing a primary on one pivot resets the other pivot. State values are
frozen; transition() returns a new ExplorerState for every event.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Union

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.option_types import Option
from metabexplorer.explorer.options import (
    build_subcondition_options,
    subcondition_values_for_condition,
    subcondition_values_for_metabolite,
)
from metabexplorer.explorer.row_table import RowTable

logger = get_logger(__name__)


class Pivot(Enum):
    """Plotting mode."""
    CONDITION = "condition"
    METABOLITE = "metabolite"

    @property
    def other(self) -> "Pivot":
        return Pivot.METABOLITE if self is Pivot.CONDITION else Pivot.CONDITION


class Stage(Enum):
    """Progress of a single pivot selection."""
    NO_SELECTION = "no_selection"
    PRIMARY_CHOSEN = "primary_chosen"
    FULL_SELECTION = "full_selection"


@dataclass(frozen=True)
class PivotSelection:
    """Primary/secondary values of one pivot. secondary requires primary."""

    primary: Optional[str] = None
    secondary: Optional[str] = None

    def __post_init__(self) -> None:
        if self.primary is None and self.secondary is not None:
            raise ValueError("secondary selection requires a primary selection")

    @property
    def stage(self) -> Stage:
        if self.primary is None:
            return Stage.NO_SELECTION
        if self.secondary is None:
            return Stage.PRIMARY_CHOSEN
        return Stage.FULL_SELECTION

    @property
    def is_full(self) -> bool:
        return self.stage is Stage.FULL_SELECTION

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"primary": self.primary, "secondary": self.secondary}


NO_SELECTION = PivotSelection()


@dataclass(frozen=True)
class ChoosePrimary:
    """User picked (or cleared, value=None) the primary dropdown of a pivot."""
    pivot: Pivot
    value: Optional[str]


@dataclass(frozen=True)
class ChooseSecondary:
    """User picked (or cleared, value=None) the secondary dropdown of a pivot."""
    pivot: Pivot
    value: Optional[str]


SelectionEvent = Union[ChoosePrimary, ChooseSecondary]


@dataclass(frozen=True)
class ExplorerState:
    """Selections of both pivots plus their secondary option lists.

    The secondary option lists are derived on ChoosePrimary and stored so the
    sub-condition dropdowns can be rendered without recomputing them.
    """

    condition: PivotSelection = NO_SELECTION
    metabolite: PivotSelection = NO_SELECTION
    condition_subcondition_options: tuple[Option, ...] = field(default_factory=tuple)
    metabolite_subcondition_options: tuple[Option, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.condition.primary is not None and self.metabolite.primary is not None:
            raise ValueError("condition and metabolite pivots cannot both be selected")

    def selection(self, pivot: Pivot) -> PivotSelection:
        return self.condition if pivot is Pivot.CONDITION else self.metabolite

    def subcondition_options(self, pivot: Pivot) -> tuple[Option, ...]:
        if pivot is Pivot.CONDITION:
            return self.condition_subcondition_options
        return self.metabolite_subcondition_options

    @property
    def active_pivot(self) -> Optional[Pivot]:
        """Pivot with a fully selected primary+secondary, or None."""
        if self.condition.is_full:
            return Pivot.CONDITION
        if self.metabolite.is_full:
            return Pivot.METABOLITE
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the selections (option lists are re-derived, not stored)."""
        return {
            "condition": self.condition.to_dict(),
            "metabolite": self.metabolite.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], table: Optional[RowTable] = None) -> "ExplorerState":
        """Rebuild state from to_dict() output.

        If table is given, the selections are replayed through transition()
        so the secondary option lists are populated.

        Raises:
            ValueError: If both pivots carry a primary selection.
        """
        def _sel(key: str) -> PivotSelection:
            raw = data.get(key)
            if not isinstance(raw, dict):
                return NO_SELECTION
            return PivotSelection(primary=raw.get("primary"), secondary=raw.get("secondary"))

        restored = cls(condition=_sel("condition"), metabolite=_sel("metabolite"))
        if table is None:
            return restored

        state = cls()
        for pivot in Pivot:
            sel = restored.selection(pivot)
            if sel.primary is not None:
                state = transition(state, ChoosePrimary(pivot, sel.primary), table)
                if sel.secondary is not None:
                    state = transition(state, ChooseSecondary(pivot, sel.secondary), table)
        return state


def _with_selection(
    state: ExplorerState,
    pivot: Pivot,
    selection: PivotSelection,
    options: Optional[tuple[Option, ...]] = None,
) -> ExplorerState:
    if pivot is Pivot.CONDITION:
        changes: dict[str, Any] = {"condition": selection}
        if options is not None:
            changes["condition_subcondition_options"] = options
    else:
        changes = {"metabolite": selection}
        if options is not None:
            changes["metabolite_subcondition_options"] = options
    return replace(state, **changes)


def _subcondition_values(table: RowTable, pivot: Pivot, primary: str) -> list[str]:
    if pivot is Pivot.CONDITION:
        return subcondition_values_for_condition(table, primary)
    return subcondition_values_for_metabolite(table, primary)


def transition(state: ExplorerState, event: SelectionEvent, table: RowTable) -> ExplorerState:
    """Apply a selection event and return the new state.

    ChoosePrimary(value): derive the secondary options for value, clear the
    secondary, and reset the other pivot. ChoosePrimary(None) clears the pivot
    and its secondary options without touching the other pivot.

    ChooseSecondary(value): set (or clear, for None) the secondary; the
    primary and the other pivot are kept. Ignored while no primary is chosen.

    Args:
        state: Current state (not modified).
        event: ChoosePrimary or ChooseSecondary.
        table: RowTable used to derive secondary options.

    Returns:
        New ExplorerState.
    """
    pivot = event.pivot

    if isinstance(event, ChoosePrimary):
        if event.value is None:
            logger.debug(f"{pivot.value}: primary cleared")
            return _with_selection(state, pivot, NO_SELECTION, options=())

        values = _subcondition_values(table, pivot, event.value)
        options = tuple(build_subcondition_options(values, table.view))
        logger.debug(
            f"{pivot.value}: primary={event.value!r}, {len(options)} secondary option(s); "
            f"resetting {pivot.other.value}"
        )
        # clear the other pivot first so the coupling invariant holds
        cleared = _with_selection(state, pivot.other, NO_SELECTION, options=())
        return _with_selection(cleared, pivot, PivotSelection(primary=event.value), options=options)

    if isinstance(event, ChooseSecondary):
        current = state.selection(pivot)
        if current.primary is None:
            logger.warning(f"{pivot.value}: secondary {event.value!r} chosen without a primary; ignored")
            return state
        return _with_selection(state, pivot, PivotSelection(primary=current.primary, secondary=event.value))

    raise TypeError(f"Unknown selection event: {event!r}")
