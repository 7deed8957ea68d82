"""Static display-label tables for conditions and sub-conditions.

These tables are configuration, not user data. Condition values are looked up
through a ConditionCatalog, which returns None for unknown values instead of
falling through to a default group.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


class UnclassifiedConditionError(ValueError):
    """Raised when condition values present in the data match no classification."""

    def __init__(self, values: Iterable[str]) -> None:
        self.values = sorted(set(values))
        super().__init__(f"unclassified condition value(s): {self.values}")


class ConditionClass(Enum):
    """Classification of a colonization condition."""
    COMMUNITY = "community"
    MONO = "mono"
    CONVENTIONAL = "conventional"


# Group headings in dropdown order
CONDITION_CLASS_LABELS: dict[ConditionClass, str] = {
    ConditionClass.COMMUNITY: "Defined Community",
    ConditionClass.MONO: "Mono-colonization",
    ConditionClass.CONVENTIONAL: "Conventional",
}


@dataclass(frozen=True)
class ConditionLabel:
    """Display label of one condition value, with optional description."""

    label: str
    description: Optional[str] = None
    condition_class: Optional[ConditionClass] = None


class ConditionCatalog:
    """Immutable lookup from raw condition value to ConditionLabel.

    Args:
        entries: Raw value -> ConditionLabel.
        grouped: True if the dropdown for this catalog is grouped by
            ConditionClass. A grouped catalog requires every value in the
            data to be classified.
    """

    def __init__(self, entries: Mapping[str, ConditionLabel], *, grouped: bool = False) -> None:
        self._entries = MappingProxyType(dict(entries))
        self.grouped = grouped
        if grouped:
            missing = [k for k, v in self._entries.items() if v.condition_class is None]
            if missing:
                raise ValueError(f"grouped catalog entries need a condition_class: {missing}")

    def lookup(self, value: str) -> Optional[ConditionLabel]:
        """Return the ConditionLabel for value, or None if value is not catalogued."""
        return self._entries.get(value)

    def display_name(self, value: str) -> str:
        """Label for value, or the raw value itself when not catalogued."""
        entry = self.lookup(value)
        return entry.label if entry is not None else value

    def __contains__(self, value: object) -> bool:
        return value in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _classified(
    condition_class: ConditionClass,
    labels: Mapping[str, tuple[str, Optional[str]]],
) -> dict[str, ConditionLabel]:
    return {
        value: ConditionLabel(label=label, description=description, condition_class=condition_class)
        for value, (label, description) in labels.items()
    }


MEDIA_LABELS: Mapping[str, str] = MappingProxyType({
    "mm": "Mega Media",
    "bhis": "Brain Heart Infusion-Supplemented (BHIS)",
    "cm": "Chopped Meat (CM)",
    "mml": "Mega Media with Lactate",
    "mms": "Mega Media with Starch",
    "mm_s04_citrate": "Mega Media with Sulfate, Citrate",
    "pyg": "Peptone Yeast Glucose (PYG)",
    "pyg_muc": "Peptone Yeast Glucose (PYG) with Mucus",
    "paf": "Polyamine-free Media",
    "rcm": "Reinforced Clostridial Media (RCM)",
    "rcml": "Reinforced Clostridial Media (RCM) with Lactate",
    "rcmsg": "Reinforced Clostridial Media (RCM) with Starch, Glucose",
    "rcmwoa": "Reinforced Clostridial Media (RCM) without Agar",
    "tsab": "Tryptic Soy Agar (TSA) with Blood",
    "ycfag": "Yeast, Casitone, Fatty Acids (YCFA) with Glucose",
})

SAMPLE_TYPE_LABELS: Mapping[str, str] = MappingProxyType({
    "caecal": "cecal",
})

COMMUNITY_COLONIZATIONS = _classified(ConditionClass.COMMUNITY, {
    "Bt_Ca_Er_Pd_Et": (
        "Bt, Ca, Er, Pd, Et",
        "Bacteroides thetaiotaomicron VPI 5482\n"
        "Collinsella aerofaciens ATCC 25986\n"
        "Eubacterium rectale ATCC 33656\n"
        "Parabacteroides distasonis ATCC 8503\n"
        "Edwardsiella tarda ATCC 23685",
    ),
    "Cs_Bt_Ca_Er_Pd_Et": (
        "Cs, Bt, Ca, Er, Pd, Et",
        "Clostridium sporogenes ATCC 15579\n"
        "Bacteroides thetaiotaomicron VPI 5482\n"
        "Collinsella aerofaciens ATCC 25986\n"
        "Eubacterium rectale ATCC 33656\n"
        "Parabacteroides distasonis ATCC 8503\n"
        "Edwardsiella tarda ATCC 23685",
    ),
})

MONO_COLONIZATIONS = _classified(ConditionClass.MONO, {
    "Bt": ("Bt", "Bacteroides thetaiotaomicron VPI 5482"),
    "Cs": ("Cs", "Clostridium sporogenes ATCC 15579"),
    "Cp": ("Cp", "Citrobacter portucalensis BEI HM-34"),
    "As": ("As", "Anaerostipes sp. BEI HM-220"),
})

CONVENTIONAL_COLONIZATIONS = _classified(ConditionClass.CONVENTIONAL, {
    "conventional": ("Conventional", None),
})

COLONIZATION_CATALOG = ConditionCatalog(
    {**COMMUNITY_COLONIZATIONS, **MONO_COLONIZATIONS, **CONVENTIONAL_COLONIZATIONS},
    grouped=True,
)

# Taxonomy names are displayed as-is
TAXONOMY_CATALOG = ConditionCatalog({})


def subcondition_label(value: str, labels: Mapping[str, str]) -> str:
    """Display label for a sub-condition value; falls back to the raw value."""
    return labels.get(value) or value
