# tests/explorer/conftest.py
"""Fixtures for explorer tests: small in vitro and in vivo tables."""
from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest


def pytest_configure() -> None:
    # Ensure metabexplorer package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def in_vitro_metadata() -> pd.DataFrame:
    return pd.DataFrame({
        "sample_type": ["supernatant", "supernatant", "supernatant", "pellet", "supernatant", "supernatant"],
        "taxonomy": ["Bt", "Bt", "Bt", "Bt", "ac", "Cs"],
        "media": ["mm", "mm", "rcm", "mm", "mm", "bhis"],
    })


@pytest.fixture
def in_vitro_measurements() -> pd.DataFrame:
    return pd.DataFrame({
        "glucose": ["1.5", "2.0", "3", "9", "", "0.25"],
        "lactate": ["0", "0.5", "", "9", "-1", ""],
        "Acetate": ["abc", "", "4", "9", "2", "1"],
        "glucose.1": ["1.0", "", "", "9", "", ""],
        "IS_standard": ["100", "100", "100", "100", "100", "100"],
        "unused": ["", "", "", "9", "", ""],
    })


@pytest.fixture
def in_vitro_table(in_vitro_metadata, in_vitro_measurements):
    from metabexplorer.explorer.row_table import RowTable
    from metabexplorer.explorer.view_config import IN_VITRO

    return RowTable.from_tables(in_vitro_metadata, in_vitro_measurements, IN_VITRO)


@pytest.fixture
def in_vivo_metadata() -> pd.DataFrame:
    return pd.DataFrame({
        "colonization": ["Bt", "Bt_Ca_Er_Pd_Et", "conventional", "germ-free", "", "Cs", "Bt"],
        "sample_type": ["caecal", "caecal", "caecal", "caecal", "caecal", "urine", "urine"],
    })


@pytest.fixture
def in_vivo_measurements() -> pd.DataFrame:
    return pd.DataFrame({
        "indole": ["1.0", "-2.0", "0", "5", "5", "3", ""],
        "tryptamine": ["", "", "", "1", "", "2", "1"],
    })


@pytest.fixture
def in_vivo_table(in_vivo_metadata, in_vivo_measurements):
    from metabexplorer.explorer.row_table import RowTable
    from metabexplorer.explorer.view_config import IN_VIVO

    return RowTable.from_tables(in_vivo_metadata, in_vivo_measurements, IN_VIVO)
