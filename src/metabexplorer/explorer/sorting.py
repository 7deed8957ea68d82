"""Ordering policies for categorical values.

Two orderings are kept apart on purpose:

- ``sort_case_insensitive`` orders raw strings ignoring case. It drives the
  condition dropdown and the category (x) axis of every scatter dataset.
- ``subcondition_option_key`` orders sub-condition dropdown options: one pinned
  value first, then the rest by display label, case-sensitive.

The axis order and the dropdown order are computed independently and can
legitimately differ for the same values.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from metabexplorer.explorer.option_types import Option


def case_insensitive_key(value: str) -> tuple[str, str]:
    """Sort key comparing lower-cased strings; ties fall back to the raw string."""
    return (value.lower(), value)


def sort_case_insensitive(values: Iterable[str]) -> list[str]:
    """Return the distinct values sorted case-insensitively."""
    return sorted(set(values), key=case_insensitive_key)


def subcondition_option_key(pinned: Optional[str]) -> Callable[[Option], tuple[bool, str]]:
    """Build a sort key for sub-condition options.

    Args:
        pinned: Raw value always listed first (e.g. "mm"), or None.

    Returns:
        Key function usable with sorted(); the pinned option sorts first,
        the rest by label with plain (case-sensitive) string comparison.
    """

    def _key(option: Option) -> tuple[bool, str]:
        return (pinned is None or option.value != pinned, option.label)

    return _key


def metabolite_option_key(option: Option) -> str:
    """Metabolite dropdown order: by label, case-sensitive."""
    return option.label
