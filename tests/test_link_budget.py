import math

import pytest

from qsomap.errors import DegenerateInput
from qsomap.fspl import fspl_db, invert_fspl_distance_km
from qsomap.link_budget import (
    DIPOLE_GAIN_DBI,
    LinkBudgetInput,
    compute_link_budget,
    qso_probability_percent,
    watts_to_dbm,
)
from qsomap.terrain import FlatTerrainModel, LinearTerrainModel, select_terrain_model


def test_two_metre_handheld_at_10_km():
    res = compute_link_budget(LinkBudgetInput(frequency_mhz=146.52, transmit_power_w=5.0, antenna_height_m=2.0, distance_km=10.0))
    expected_fsl = 32.44 + 20.0 * math.log10(146.52) + 20.0 * math.log10(10.0)
    assert abs(res.free_space_loss_db - expected_fsl) < 1e-9
    assert abs(res.free_space_loss_db - 95.76) < 0.01
    assert abs(res.terrain_loss_db - 1.0) < 1e-12
    assert abs(res.path_loss_db - (expected_fsl + 1.0)) < 1e-9
    expected_signal = 10.0 * math.log10(5000.0) - (expected_fsl + 1.0) + 2.15
    assert abs(res.signal_strength_dbm - expected_signal) < 1e-9
    assert abs(res.signal_strength_dbm - (-57.62)) < 0.01
    assert res.qso_probability_percent == 100


def test_antenna_height_does_not_change_estimate():
    low = compute_link_budget(LinkBudgetInput(146.52, 5.0, 0.0, 25.0))
    high = compute_link_budget(LinkBudgetInput(146.52, 5.0, 30.0, 25.0))
    assert low == high


def test_terrain_loss_caps_at_10_db():
    res = compute_link_budget(LinkBudgetInput(146.52, 5.0, 2.0, 500.0))
    assert res.terrain_loss_db == 10.0
    assert abs(res.path_loss_db - res.free_space_loss_db - 10.0) < 1e-9


def test_custom_terrain_model_is_used():
    class Hills:
        def terrain_loss_db(self, distance_km):
            return 20.0

    base = compute_link_budget(LinkBudgetInput(446.0, 1.0, 2.0, 5.0), terrain=FlatTerrainModel())
    hilly = compute_link_budget(LinkBudgetInput(446.0, 1.0, 2.0, 5.0), terrain=Hills())
    assert base.terrain_loss_db == 0.0
    assert abs((base.signal_strength_dbm - hilly.signal_strength_dbm) - 20.0) < 1e-9


def test_zero_distance_is_degenerate():
    with pytest.raises(DegenerateInput):
        compute_link_budget(LinkBudgetInput(146.52, 5.0, 2.0, 0.0))
    with pytest.raises(DegenerateInput):
        fspl_db(0.0, 146.52)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(frequency_mhz=0.0, transmit_power_w=5.0, antenna_height_m=2.0, distance_km=1.0),
        dict(frequency_mhz=146.52, transmit_power_w=0.0, antenna_height_m=2.0, distance_km=1.0),
        dict(frequency_mhz=146.52, transmit_power_w=5.0, antenna_height_m=-1.0, distance_km=1.0),
        dict(frequency_mhz=146.52, transmit_power_w=5.0, antenna_height_m=2.0, distance_km=-1.0),
    ],
)
def test_input_validation(kwargs):
    with pytest.raises(ValueError):
        LinkBudgetInput(**kwargs)


_GOOD_INPUT = dict(frequency_mhz=146.52, transmit_power_w=5.0, antenna_height_m=2.0, distance_km=10.0)


@pytest.mark.parametrize("field", sorted(_GOOD_INPUT))
@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_input_rejects_non_finite(field, bad):
    with pytest.raises(ValueError):
        LinkBudgetInput(**{**_GOOD_INPUT, field: bad})


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_db_helpers_reject_non_finite(bad):
    with pytest.raises(ValueError):
        watts_to_dbm(bad)
    with pytest.raises(ValueError):
        fspl_db(10.0, bad)
    with pytest.raises(ValueError):
        fspl_db(bad, 146.52)
    with pytest.raises(ValueError):
        invert_fspl_distance_km(100.0, bad)


@pytest.mark.parametrize(
    "signal,percent",
    [
        (-20.0, 100),
        (-60.0, 100),
        (-60.01, 80),
        (-79.99, 80),
        (-80.0, 60),
        (-100.0, 60),
        (-100.01, 30),
        (-120.0, 30),
        (-120.01, 10),
        (-200.0, 10),
    ],
)
def test_qso_probability_buckets(signal, percent):
    assert qso_probability_percent(signal) == percent


def test_watts_to_dbm():
    assert abs(watts_to_dbm(1.0) - 30.0) < 1e-12
    assert abs(watts_to_dbm(0.001) - 0.0) < 1e-12
    with pytest.raises(ValueError):
        watts_to_dbm(0.0)


def test_fspl_and_inverse():
    f = 432.1
    d = 37.5
    pl = fspl_db(d, f)
    d2 = invert_fspl_distance_km(pl, f)
    assert abs(d - d2) / d < 1e-9
    with pytest.raises(ValueError):
        fspl_db(1.0, 0.0)
    with pytest.raises(ValueError):
        invert_fspl_distance_km(100.0, -1.0)


def test_fspl_doubles_distance_adds_6_db():
    assert abs(fspl_db(20.0, 146.52) - fspl_db(10.0, 146.52) - 20.0 * math.log10(2.0)) < 1e-9


def test_terrain_models():
    lin = LinearTerrainModel()
    assert lin.terrain_loss_db(0.0) == 0.0
    assert abs(lin.terrain_loss_db(50.0) - 5.0) < 1e-12
    assert lin.terrain_loss_db(100.0) == 10.0
    assert lin.terrain_loss_db(1000.0) == 10.0
    assert FlatTerrainModel().terrain_loss_db(1000.0) == 0.0
    assert select_terrain_model() == lin
    assert select_terrain_model("linear") == lin
    assert isinstance(select_terrain_model("flat"), FlatTerrainModel)
    with pytest.raises(ValueError):
        select_terrain_model("itm")


def test_dipole_gain_constant():
    assert DIPOLE_GAIN_DBI == 2.15
