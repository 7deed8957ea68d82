"""Unit tests for view configuration and the valid-sample predicates."""

import pandas as pd
import pytest

from metabexplorer.explorer.view_config import (
    IN_VITRO,
    IN_VIVO,
    SampleFilter,
    all_views,
    get_view_config,
)


def test_get_view_config():
    assert get_view_config("in_vitro") is IN_VITRO
    assert get_view_config("in_vivo") is IN_VIVO


def test_get_view_config_unknown_raises():
    with pytest.raises(ValueError) as exc_info:
        get_view_config("ex_vivo")
    assert "ex_vivo" in str(exc_info.value)


def test_all_views_in_navigation_order():
    assert [v.route for v in all_views()] == ["/", "/invivo"]


def test_in_vitro_filter():
    df = pd.DataFrame({"sample_type": ["supernatant", "pellet", "", "Supernatant"]})
    assert IN_VITRO.sample_filter.mask(df).tolist() == [True, False, False, False]


def test_in_vivo_filter():
    df = pd.DataFrame({"colonization": ["Bt", "germ-free", "", "conventional"]})
    assert IN_VIVO.sample_filter.mask(df).tolist() == [True, False, False, True]


def test_filter_missing_column():
    df = pd.DataFrame({"other": ["x", "y"]})
    assert SampleFilter(column="sample_type").mask(df).tolist() == [False, False]


def test_axis_titles():
    assert IN_VITRO.x_axis_title(metabolite_pivot=True) == "Taxonomy"
    assert IN_VITRO.x_axis_title(metabolite_pivot=False) == "Metabolite"
    assert IN_VIVO.x_axis_title(metabolite_pivot=True) == "Colonization"
    assert "germ-free" in IN_VIVO.y_axis_title
