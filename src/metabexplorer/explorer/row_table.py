"""Row table for the explorer.

This module provides the RowTable class: the merged, filtered, read-only
table every option list and scatter dataset is derived from.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

import pandas as pd

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.view_config import ViewConfig

logger = get_logger(__name__)

# Internal standards; never metabolites
INTERNAL_STANDARD_PREFIX = "IS_"

_REPLICATE_SUFFIX = re.compile(r"\.\d+$")


def metabolite_name(column: str) -> str:
    """Strip a trailing replicate suffix (``glucose.1`` -> ``glucose``)."""
    return _REPLICATE_SUFFIX.sub("", column)


def is_internal_standard(column: str) -> bool:
    return column.startswith(INTERNAL_STANDARD_PREFIX)


def _as_str_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of df with string cells; missing cells become empty strings."""
    out = df.reset_index(drop=True).copy()
    out.columns = [str(c) for c in out.columns]
    return out.fillna("").astype(str)


class RowTable:
    """Read-only table of merged metadata + measurement rows.

    Build with RowTable.from_tables(). Rows are string cells keyed by column;
    empty cells are ``""``.

    Attributes:
        view: ViewConfig the table was built for.
        metadata_columns: Metadata header fields, in file order.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        *,
        view: ViewConfig,
        metadata_columns: Sequence[str],
    ) -> None:
        self._df = _as_str_frame(df)
        self.view = view
        self.metadata_columns: tuple[str, ...] = tuple(str(c) for c in metadata_columns)
        self._metadata_set = frozenset(self.metadata_columns)

    @classmethod
    def from_tables(
        cls,
        metadata: pd.DataFrame,
        measurements: pd.DataFrame,
        view: ViewConfig,
    ) -> "RowTable":
        """Merge metadata and measurements row-by-row, then keep valid samples.

        Row i of metadata is merged into row i of measurements; metadata wins
        on column collisions. Ragged tables are truncated to the shorter one.

        Args:
            metadata: Metadata table (header-keyed records).
            measurements: Measurement table, one column per metabolite.
            view: ViewConfig providing the valid-sample predicate.

        Returns:
            New RowTable. Empty if either table is empty.
        """
        metadata_columns = [str(c) for c in metadata.columns]

        if metadata.empty or measurements.empty:
            logger.warning(
                f"{view.name}: empty input (metadata rows={len(metadata)}, "
                f"measurement rows={len(measurements)}); row table is empty"
            )
            return cls.empty(view, metadata_columns=metadata_columns)

        n_meta = len(metadata)
        n_meas = len(measurements)
        n = min(n_meta, n_meas)
        if n_meta != n_meas:
            logger.warning(
                f"{view.name}: metadata has {n_meta} rows but measurements have {n_meas}; "
                f"truncating both to {n} rows"
            )

        meta = _as_str_frame(metadata.iloc[:n])
        meas = _as_str_frame(measurements.iloc[:n])

        merged = meas.copy()
        for col in meta.columns:
            merged[col] = meta[col]

        mask = view.sample_filter.mask(merged)
        valid = merged[mask].reset_index(drop=True)
        logger.info(
            f"{view.name}: merged {n} rows, kept {len(valid)} valid sample rows "
            f"({view.sample_filter.column})"
        )
        return cls(valid, view=view, metadata_columns=metadata_columns)

    @classmethod
    def empty(cls, view: ViewConfig, *, metadata_columns: Iterable[str] = ()) -> "RowTable":
        return cls(pd.DataFrame(), view=view, metadata_columns=list(metadata_columns))

    @property
    def frame(self) -> pd.DataFrame:
        """Copy of the underlying string DataFrame."""
        return self._df.copy()

    @property
    def columns(self) -> list[str]:
        return list(self._df.columns)

    def __len__(self) -> int:
        return len(self._df)

    @property
    def is_empty(self) -> bool:
        return self._df.empty

    def is_metadata_column(self, column: str) -> bool:
        return column in self._metadata_set

    def is_measurement_column(self, column: str) -> bool:
        """True unless column is a metadata column or an internal standard."""
        return not self.is_metadata_column(column) and not is_internal_standard(column)

    def measurement_columns(self) -> list[str]:
        """Measurement columns in table order."""
        return [c for c in self._df.columns if self.is_measurement_column(c)]

    def column_values(self, column: str) -> pd.Series:
        """String values of column; all-empty Series if the column is absent."""
        if column not in self._df.columns:
            return pd.Series("", index=self._df.index, dtype=object)
        return self._df[column]

    def has_values(self, column: str) -> bool:
        """True if any row has a non-empty cell in column."""
        return bool((self.column_values(column) != "").any())

    def rows_where(self, selections: dict[str, Optional[str]]) -> pd.DataFrame:
        """Rows whose columns equal the selected values (AND).

        Args:
            selections: Column name -> required value. A None value matches no row.
        """
        mask = pd.Series(True, index=self._df.index)
        for column, value in selections.items():
            if value is None:
                return self._df.iloc[0:0]
            mask = mask & (self.column_values(column) == value)
        return self._df[mask]

    def rows_with_value(self, column: str) -> pd.DataFrame:
        """Rows with a non-empty cell in column."""
        return self._df[self.column_values(column) != ""]
