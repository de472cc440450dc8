import math

import pytest

from roomkit.utils import clamp, clamp_snap, damp, quantize


@pytest.mark.parametrize("step", [0.08, 0.12, 0.16, 0.25, 0.5, 5.0, 15.0])
@pytest.mark.parametrize("v", [-3.37, -1.0, -0.01, 0.0, 0.13, 1.2, 2.399, 7.77])
def test_quantize_is_idempotent(v, step):
    once = quantize(v, step)
    assert quantize(once, step) == pytest.approx(once, abs=1e-9)


def test_quantize_rounds_to_nearest_multiple():
    assert quantize(0.3, 0.25) == pytest.approx(0.25)
    assert quantize(0.4, 0.25) == pytest.approx(0.5)
    assert quantize(-1.1, 0.5) == pytest.approx(-1.0)


def test_clamp_bounds():
    assert clamp(5, 0, 3) == 3
    assert clamp(-5, 0, 3) == 0
    assert clamp(1.5, 0, 3) == 1.5


def test_clamp_snap_stays_inside_when_bound_is_off_grid():
    # 0.2 is not a multiple of 0.16: plain clamp+round would give 0.16
    assert clamp_snap(0.0, 0.2, 2.4, 0.16) == pytest.approx(0.32)
    assert clamp_snap(9.0, 0.2, 2.4, 0.16) == pytest.approx(2.4)
    assert clamp_snap(9.0, -2.8, 2.8, 0.5) == pytest.approx(2.5)


def test_clamp_snap_narrow_domain_falls_back_to_clamp():
    assert clamp_snap(0.0, 0.2, 0.25, 0.5) == pytest.approx(0.2)


def test_damp_moves_toward_target():
    assert damp(0.0, 1.0, 9.0, 1 / 60) == pytest.approx(1 - math.exp(-0.15))
    assert damp(2.0, 2.0, 9.0, 0.5) == 2.0
    assert damp(0.0, 1.0, 9.0, 10.0) == pytest.approx(1.0, abs=1e-9)


def test_quantize_rounds_halves_up():
    assert quantize(0.125, 0.25) == pytest.approx(0.25)
    assert quantize(0.375, 0.25) == pytest.approx(0.5)
    assert quantize(-0.125, 0.25) == pytest.approx(0.0)
    assert quantize(-0.375, 0.25) == pytest.approx(-0.25)
