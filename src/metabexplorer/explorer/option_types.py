"""Dropdown option types shared by the option builders and the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Option:
    """A single dropdown entry.

    ``description`` is an optional second line shown under the label
    (e.g. the full strain names of a defined community).
    """

    value: str
    label: str
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"value": self.value, "label": self.label}
        if self.description is not None:
            d["description"] = self.description
        return d


@dataclass(frozen=True)
class OptionGroup:
    """A named group of options for grouped dropdowns."""

    label: str
    options: tuple[Option, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "options": [o.to_dict() for o in self.options]}


OptionList = Union[list[Option], list[OptionGroup]]


def iter_options(options: OptionList) -> list[Option]:
    """Flatten grouped or flat options into a flat list, keeping order."""
    flat: list[Option] = []
    for item in options:
        if isinstance(item, OptionGroup):
            flat.extend(item.options)
        else:
            flat.append(item)
    return flat


def find_option(options: OptionList, value: Optional[str]) -> Optional[Option]:
    """Return the option with the given value, or None."""
    if value is None:
        return None
    for option in iter_options(options):
        if option.value == value:
            return option
    return None
