"""Dropdown option builders.

Derives the condition, sub-condition and metabolite option lists from a
RowTable. All builders are pure; the UI re-derives them on demand.
"""

from __future__ import annotations

from typing import Iterable, Optional

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.labels import (
    CONDITION_CLASS_LABELS,
    ConditionClass,
    UnclassifiedConditionError,
    subcondition_label,
)
from metabexplorer.explorer.option_types import Option, OptionGroup, OptionList
from metabexplorer.explorer.row_table import RowTable, metabolite_name
from metabexplorer.explorer.sorting import (
    metabolite_option_key,
    sort_case_insensitive,
    subcondition_option_key,
)
from metabexplorer.explorer.view_config import ViewConfig

logger = get_logger(__name__)


def _distinct(values: Iterable[str]) -> list[str]:
    """Distinct non-empty values in first-seen order."""
    seen: dict[str, None] = {}
    for v in values:
        if v != "" and v not in seen:
            seen[v] = None
    return list(seen)


def build_condition_options(table: RowTable) -> OptionList:
    """Condition dropdown options.

    Flat list sorted case-insensitively by value when the view's catalog is
    not grouped (taxonomy). Otherwise one OptionGroup per ConditionClass, in
    CONDITION_CLASS_LABELS order (colonization).

    Raises:
        UnclassifiedConditionError: If the catalog is grouped and a condition
            value in the table is not in it.
    """
    view = table.view
    catalog = view.condition_catalog
    values = _distinct(table.column_values(view.condition_col))

    if not catalog.grouped:
        return [
            Option(value=v, label=catalog.display_name(v), description=_description(view, v))
            for v in sort_case_insensitive(values)
        ]

    unclassified = [v for v in values if catalog.lookup(v) is None]
    if unclassified:
        raise UnclassifiedConditionError(unclassified)

    grouped: dict[ConditionClass, list[Option]] = {c: [] for c in CONDITION_CLASS_LABELS}
    for v in values:
        entry = catalog.lookup(v)
        grouped[entry.condition_class].append(
            Option(value=v, label=entry.label, description=entry.description)
        )
    return [
        OptionGroup(label=CONDITION_CLASS_LABELS[c], options=tuple(opts))
        for c, opts in grouped.items()
    ]


def _description(view: ViewConfig, value: str) -> Optional[str]:
    entry = view.condition_catalog.lookup(value)
    return entry.description if entry is not None else None


def build_subcondition_options(values: Iterable[str], view: ViewConfig) -> list[Option]:
    """Map sub-condition values to labelled options in dropdown order.

    The view's pinned sub-condition comes first, the rest sort by label.
    """
    options = [
        Option(value=v, label=subcondition_label(v, view.subcondition_labels))
        for v in _distinct(values)
    ]
    return sorted(options, key=subcondition_option_key(view.pinned_subcondition))


def subcondition_values_for_condition(table: RowTable, condition: str) -> list[str]:
    """Distinct sub-condition values among rows whose condition equals condition."""
    view = table.view
    rows = table.rows_where({view.condition_col: condition})
    if view.subcondition_col not in rows.columns:
        return []
    return _distinct(rows[view.subcondition_col])


def subcondition_values_for_metabolite(table: RowTable, metabolite: str) -> list[str]:
    """Distinct sub-condition values among rows with a non-empty cell for metabolite."""
    view = table.view
    rows = table.rows_with_value(metabolite)
    if view.subcondition_col not in rows.columns:
        return []
    return _distinct(rows[view.subcondition_col])


def build_metabolite_options(table: RowTable) -> list[Option]:
    """Metabolite dropdown options.

    Walks the columns of the first row, skipping metadata columns, internal
    standards and columns with no value in any row. Replicate suffixes are
    stripped and names deduplicated. Labels are upper-cased; options sort by
    label, case-sensitive.
    """
    if table.is_empty:
        return []

    names: list[str] = []
    for column in table.columns:
        if not table.is_measurement_column(column):
            continue
        if not table.has_values(column):
            continue
        names.append(metabolite_name(column))

    options = [Option(value=name, label=name.upper()) for name in _distinct(names)]
    options.sort(key=metabolite_option_key)
    logger.debug(f"{table.view.name}: {len(options)} metabolite options")
    return options

