import pytest

from homequote.mi import compute_mi, conventional_mi_factor, fha_mip_factor
from homequote.presets import CONV_MI_GRID


def test_conventional_score_on_boundary_uses_better_band():
    monthly, rate = compute_mi("Conventional", 100000, 81, 760)
    assert rate == 0.21
    assert monthly == pytest.approx(100000 * 0.0021 / 12)


def test_conventional_score_below_boundary_uses_worse_band():
    _, rate = compute_mi("Conventional", 100000, 81, 759)
    assert rate == 0.25


def test_conventional_no_mi_at_or_below_80_ltv():
    assert compute_mi("Conventional", 320000, 80, 700) == (0.0, 0.0)
    assert compute_mi("Conventional", 300000, 75, 619) == (0.0, 0.0)


@pytest.mark.parametrize(
    "ltv, score, expected",
    [
        (97, 760, 0.58),
        (96, 619, 1.86),
        (95, 740, 0.55),
        (92, 700, 0.77),
        (90, 680, 0.67),
        (88, 639, 1.19),
        (85, 660, 0.62),
        (83, 640, 0.75),
    ],
)
def test_conventional_grid_lookup(ltv, score, expected):
    assert conventional_mi_factor(ltv, score) == expected


def test_conventional_grid_is_swappable():
    grid = dict(CONV_MI_GRID)
    grid[80] = (0.10,) * 8
    assert conventional_mi_factor(82, 700, grid) == 0.10


def test_fha_mip_computed_on_loan_without_ufmip():
    monthly, rate = compute_mi("FHA", 203500, 96.5, 700)
    assert rate == 0.55
    assert monthly == pytest.approx(200000 * 0.0055 / 12)


def test_fha_mip_rate_by_ltv():
    assert fha_mip_factor(96.5) == 0.55
    assert fha_mip_factor(95) == 0.50
    assert fha_mip_factor(90) == 0.50


@pytest.mark.parametrize("loan_type", ["VA", "DSCR"])
def test_va_and_dscr_carry_no_mi(loan_type):
    assert compute_mi(loan_type, 400000, 100, 620) == (0.0, 0.0)
