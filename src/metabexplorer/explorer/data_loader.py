"""Data loading for the explorer views.

Resolves the data directory, reads the metadata and measurement tables of a
view, and builds its RowTable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from metabexplorer.utils.logging import get_logger
from metabexplorer.explorer.row_table import RowTable
from metabexplorer.explorer.view_config import ViewConfig

logger = get_logger(__name__)

DATA_DIR_ENV = "METABEXPLORER_DATA_DIR"


def get_data_dir() -> Path:
    """Resolve the data directory.

    METABEXPLORER_DATA_DIR wins when set. Otherwise the ``data/`` folder at
    the project root (data_loader.py -> explorer -> metabexplorer -> src -> root).
    """
    env_dir = os.getenv(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def _guess_sep(path: Path) -> str:
    with path.open(encoding="utf-8", errors="replace") as f:
        header = f.readline()
    return "\t" if "\t" in header else ","


def read_table(path: Union[str, Path]) -> pd.DataFrame:
    """Read a delimited text table with a header row.

    Tab-separated when the header line contains a tab, else comma-separated.
    Every cell is read as a string and empty cells stay ``""``; duplicate header names get ``.1``,
    ``.2`` suffixes.

    Raises:
        FileNotFoundError: If path does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Table not found: {path}")
    if path.stat().st_size == 0:
        logger.warning(f"{path.name} is empty")
        return pd.DataFrame()
    df = pd.read_csv(
        path,
        sep=_guess_sep(path),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    logger.info(f"read {path.name}: {len(df)} rows x {len(df.columns)} columns")
    return df


def load_view_table(view: ViewConfig, data_dir: Optional[Path] = None) -> RowTable:
    """Load the metadata and measurement tables of view and build its RowTable.

    Args:
        view: ViewConfig naming the two files.
        data_dir: Directory holding the files. Defaults to get_data_dir().

    Raises:
        FileNotFoundError: If either file is missing.
    """
    data_dir = get_data_dir() if data_dir is None else Path(data_dir)
    metadata = read_table(data_dir / view.metadata_file)
    measurements = read_table(data_dir / view.data_file)
    return RowTable.from_tables(metadata, measurements, view)
