"""Unit tests for projecting a RowTable and selection into a scatter dataset."""

from dataclasses import replace

import pandas as pd
import pytest

from metabexplorer.explorer.projector import (
    EMPTY_DATASET,
    SERIES_ID,
    min_plot_width,
    project,
    y_range,
)
from metabexplorer.explorer.row_table import RowTable
from metabexplorer.explorer.selection_state import (
    ChoosePrimary,
    ChooseSecondary,
    ExplorerState,
    Pivot,
    transition,
)
from metabexplorer.explorer.view_config import IN_VITRO, SampleFilter


def _select(table, pivot, primary, secondary):
    state = transition(ExplorerState(), ChoosePrimary(pivot, primary), table)
    return transition(state, ChooseSecondary(pivot, secondary), table)


def _xyn(dataset):
    return [(p.x, p.y, p.name) for p in dataset.points]


def test_condition_pivot_collapses_replicate_columns():
    """Taxonomy A, media mm: zeros dropped, replicate columns collapsed."""
    view = replace(IN_VITRO, sample_filter=SampleFilter(column="taxonomy"))
    metadata = pd.DataFrame({"taxonomy": ["A", "A", "B"], "media": ["mm", "mm", "mm"]})
    measurements = pd.DataFrame({
        "glc": ["1.5", "0", "2.0"],
        "lac": ["0", "-0.7", "0.1"],
        "glc.1": ["1.2", "", "1.9"],
    })
    table = RowTable.from_tables(metadata, measurements, view)

    dataset = project(table, _select(table, Pivot.CONDITION, "A", "mm"))

    assert dataset.pivot is Pivot.CONDITION
    assert dataset.category_order == ("glc", "lac")
    assert _xyn(dataset) == [(0, 1.5, "glc"), (0, 1.2, "glc"), (1, -0.7, "lac")]
    lo, hi = dataset.y_range
    assert lo == pytest.approx(-0.92)
    assert hi == pytest.approx(1.72)
    assert [s.id for s in dataset.series] == [SERIES_ID]


def test_condition_pivot_drops_zero_cells():
    view = replace(IN_VITRO, sample_filter=SampleFilter(column="taxonomy"))
    metadata = pd.DataFrame({"taxonomy": ["Bt", "Bt"], "media": ["mm", "mm"]})
    measurements = pd.DataFrame({"glucose": ["1.5", "2.0"], "lactate": ["0", "0.5"]})
    table = RowTable.from_tables(metadata, measurements, view)

    dataset = project(table, _select(table, Pivot.CONDITION, "Bt", "mm"))

    assert [(p.name, p.y) for p in dataset.points] == [
        ("glucose", 1.5),
        ("glucose", 2.0),
        ("lactate", 0.5),
    ]
    assert dataset.category_order == ("glucose", "lactate")


def test_condition_pivot_skips_unparseable_and_internal_standards(in_vitro_table):
    dataset = project(in_vitro_table, _select(in_vitro_table, Pivot.CONDITION, "Bt", "mm"))
    assert dataset.category_order == ("glucose", "lactate")
    assert sorted(_xyn(dataset)) == sorted([
        (0, 1.5, "glucose"),
        (0, 1.0, "glucose"),
        (0, 2.0, "glucose"),
        (1, 0.5, "lactate"),
    ])
    assert dataset.y_range == pytest.approx((0.35, 2.15))


def test_metabolite_pivot_keeps_zero(in_vitro_table):
    dataset = project(in_vitro_table, _select(in_vitro_table, Pivot.METABOLITE, "lactate", "mm"))
    assert dataset.pivot is Pivot.METABOLITE
    assert dataset.category_order == ("ac", "Bt")
    assert sorted(_xyn(dataset)) == [(0, -1.0, "ac"), (1, 0.0, "Bt"), (1, 0.5, "Bt")]
    assert dataset.y_range == pytest.approx((-1.15, 0.65))


def test_metabolite_pivot_skips_unparseable(in_vitro_table):
    """'abc' is non-empty but not a number."""
    dataset = project(in_vitro_table, _select(in_vitro_table, Pivot.METABOLITE, "Acetate", "mm"))
    assert _xyn(dataset) == [(0, 2.0, "ac")]
    assert dataset.y_range == pytest.approx((0.0, 4.0))


def test_metabolite_pivot_uses_display_names(in_vivo_table):
    dataset = project(in_vivo_table, _select(in_vivo_table, Pivot.METABOLITE, "indole", "caecal"))
    assert dataset.category_order == ("Bt", "Bt, Ca, Er, Pd, Et", "Conventional")
    assert sorted(_xyn(dataset)) == [
        (0, 1.0, "Bt"),
        (1, -2.0, "Bt, Ca, Er, Pd, Et"),
        (2, 0.0, "Conventional"),
    ]
    assert dataset.y_range == pytest.approx((-2.3, 1.3))


def test_in_vivo_condition_pivot(in_vivo_table):
    dataset = project(in_vivo_table, _select(in_vivo_table, Pivot.CONDITION, "Bt", "caecal"))
    assert dataset.category_order == ("indole",)
    assert _xyn(dataset) == [(0, 1.0, "indole")]
    assert dataset.y_range == pytest.approx((0.0, 2.0))


def test_partial_selection_is_empty(in_vitro_table):
    state = transition(ExplorerState(), ChoosePrimary(Pivot.CONDITION, "Bt"), in_vitro_table)
    assert project(in_vitro_table, state) is EMPTY_DATASET
    assert project(in_vitro_table, ExplorerState()).is_empty


def test_full_selection_without_points(in_vitro_table):
    """A selection with no matching rows gives one empty series."""
    dataset = project(in_vitro_table, _select(in_vitro_table, Pivot.CONDITION, "Bt", "bhis"))
    assert not dataset.is_empty
    assert dataset.points == []
    assert dataset.category_order == ()
    assert dataset.y_range == (0.0, 0.0)


def test_x_index_in_range(in_vivo_table):
    dataset = project(in_vivo_table, _select(in_vivo_table, Pivot.METABOLITE, "indole", "caecal"))
    for point in dataset.points:
        assert 0 <= point.x < len(dataset.category_order)
        assert dataset.category_label(point.x) == point.name


def test_to_dict_shape(in_vitro_table):
    dataset = project(in_vitro_table, _select(in_vitro_table, Pivot.METABOLITE, "Acetate", "mm"))
    assert dataset.to_dict() == {
        "series": [{"id": "all", "points": [{"x": 0, "y": 2.0, "name": "ac"}]}],
        "categoryOrder": ["ac"],
        "yRange": [0.0, 4.0],
    }


@pytest.mark.parametrize(
    "values, expected",
    [
        ([2, 10], (1.2, 10.8)),
        ([5], (0.0, 10.0)),
        ([-5], (-10.0, 0.0)),
        ([0], (0.0, 0.0)),
        ([], (0.0, 0.0)),
        ([3, 3, 3], (0.0, 6.0)),
    ],
)
def test_y_range(values, expected):
    assert y_range(values) == pytest.approx(expected)


@pytest.mark.parametrize("count, expected", [(0, 300), (10, 300), (18, 300), (19, 309), (100, 1200)])
def test_min_plot_width(count, expected):
    assert min_plot_width(count) == expected


def test_condition_pivot_ignores_numeric_metadata_columns():
    """Metadata columns never become points, even when their cells are numbers."""
    metadata = pd.DataFrame({
        "sample_type": ["supernatant"],
        "taxonomy": ["Bt"],
        "media": ["mm"],
        "replicate": ["2"],
    })
    measurements = pd.DataFrame({"glucose": ["1.5"]})
    table = RowTable.from_tables(metadata, measurements, IN_VITRO)

    dataset = project(table, _select(table, Pivot.CONDITION, "Bt", "mm"))

    assert dataset.category_order == ("glucose",)
    assert _xyn(dataset) == [(0, 1.5, "glucose")]
