"""Tests for quantity.calculator — calculate_fabric_requirement()."""

import pytest

from drapecalc.quantity.calculator import (
    DEFAULT_FULLNESS,
    FabricRequirement,
    calculate_blind_area,
    calculate_fabric_requirement,
    required_leftover_length,
)
from drapecalc.schemas.leftover import Orientation
from drapecalc.schemas.measurement import HemConfiguration


@pytest.fixture(scope="module")
def curtain_hems():
    """Header 15cm, bottom 10cm, side 5cm, seam 3cm."""
    return HemConfiguration(header_hem_cm=15.0, bottom_hem_cm=10.0, side_hem_cm=5.0, seam_hem_cm=3.0)


@pytest.fixture(scope="module")
def pair_requirement(curtain_hems):
    """150 × 200 window, fullness 2, curtain hems."""
    return calculate_fabric_requirement(150.0, 200.0, 0.0, 2.0, curtain_hems)


class TestBasicRequirement:
    def test_drop_required(self, pair_requirement):
        """200 + 0 + 15 + 10 = 225."""
        assert pair_requirement.drop_required_cm == pytest.approx(225.0)

    def test_width_required(self, pair_requirement):
        """150 × 2 = 300."""
        assert pair_requirement.width_required_cm == pytest.approx(300.0)

    def test_area_required(self, pair_requirement):
        """225 × 300 = 67 500cm²."""
        assert pair_requirement.area_required_cm2 == pytest.approx(67_500.0)

    def test_area_in_square_meters(self, pair_requirement):
        assert pair_requirement.area_required_m2 == pytest.approx(6.75)

    def test_running_linear_meters(self, pair_requirement):
        assert pair_requirement.running_linear_meters == pytest.approx(3.0)

    def test_returns_requirement_type(self, pair_requirement):
        assert isinstance(pair_requirement, FabricRequirement)

    def test_pooling_adds_to_drop(self):
        req = calculate_fabric_requirement(100.0, 200.0, pooling_cm=8.0)
        assert req.drop_required_cm == pytest.approx(208.0)

    def test_inputs_are_echoed(self, pair_requirement, curtain_hems):
        assert pair_requirement.rail_width_cm == 150.0
        assert pair_requirement.drop_cm == 200.0
        assert pair_requirement.fullness_ratio == 2.0
        assert pair_requirement.hems == curtain_hems
        assert pair_requirement.quantity == 1


class TestDefaults:
    def test_missing_fullness_is_one(self):
        req = calculate_fabric_requirement(150.0, 200.0)
        assert req.fullness_ratio == DEFAULT_FULLNESS
        assert req.width_required_cm == pytest.approx(150.0)

    def test_invalid_fullness_is_one(self):
        req = calculate_fabric_requirement(150.0, 200.0, fullness_ratio="lots")
        assert req.width_required_cm == pytest.approx(150.0)

    def test_zero_fullness_is_allowed(self):
        req = calculate_fabric_requirement(150.0, 200.0, fullness_ratio=0.0)
        assert req.width_required_cm == 0.0
        assert req.area_required_cm2 == 0.0

    def test_missing_hems_are_zero(self):
        req = calculate_fabric_requirement(150.0, 200.0)
        assert req.drop_required_cm == pytest.approx(200.0)
        assert req.hems == HemConfiguration()

    def test_invalid_pooling_is_zero(self):
        req = calculate_fabric_requirement(150.0, 200.0, pooling_cm=-5.0)
        assert req.pooling_cm == 0.0
        assert req.drop_required_cm == pytest.approx(200.0)

    def test_unparsed_strings_are_not_numbers(self):
        """Raw text goes through utilities.normalize first."""
        assert calculate_fabric_requirement("150", "200") is None

    def test_integer_inputs(self):
        req = calculate_fabric_requirement(150, 200, quantity=2)
        assert req.width_required_cm == pytest.approx(150.0)
        assert req.quantity == 2


class TestInsufficientData:
    @pytest.mark.parametrize(
        "rail_width, drop",
        [(None, 200.0), (150.0, None), ("", 200.0), ("abc", 200.0), (-1.0, 200.0), (150.0, float("nan"))],
    )
    def test_missing_or_invalid_dimensions(self, rail_width, drop):
        assert calculate_fabric_requirement(rail_width, drop) is None

    @pytest.mark.parametrize("quantity", [None, 0, -2, 1.5])
    def test_missing_or_invalid_quantity(self, quantity):
        assert calculate_fabric_requirement(150.0, 200.0, quantity=quantity) is None

    def test_insufficient_data_is_logged(self, caplog):
        with caplog.at_level("DEBUG", logger="drapecalc.quantity.calculator"):
            calculate_fabric_requirement(None, 200.0)
        assert "Insufficient data" in caplog.text


class TestAreaProperty:
    @pytest.mark.parametrize(
        "width, drop, fullness",
        [(150.0, 200.0, 2.0), (90.0, 120.0, 1.0), (333.3, 251.5, 2.5), (10.0, 10.0, 0.0)],
    )
    def test_area_without_hems_or_pooling(self, width, drop, fullness):
        req = calculate_fabric_requirement(width, drop, 0.0, fullness)
        assert req.area_required_cm2 == pytest.approx(width * fullness * drop)


class TestMonotonicity:
    def test_larger_width_never_decreases_area(self):
        areas = [
            calculate_fabric_requirement(w, 200.0, fullness_ratio=2.0).area_required_cm2
            for w in [50.0, 100.0, 150.0, 151.0, 300.0]
        ]
        assert areas == sorted(areas)

    def test_larger_drop_never_decreases_area(self):
        areas = [
            calculate_fabric_requirement(150.0, d, fullness_ratio=2.0).area_required_cm2
            for d in [50.0, 100.0, 200.0, 201.0]
        ]
        assert areas == sorted(areas)


class TestFabricWidths:
    def test_no_fabric_width_no_diagnostics(self, pair_requirement):
        assert pair_requirement.fabric_width_cm is None
        assert pair_requirement.widths_required is None
        assert pair_requirement.seams is None
        assert pair_requirement.order_length_cm is None

    def test_single_panel_widths(self, curtain_hems):
        """300cm on 140cm fabric is 3 widths joined by 2 seams; side hems add nothing."""
        req = calculate_fabric_requirement(
            150.0, 200.0, 0.0, 2.0, curtain_hems, fabric_width_cm=140.0
        )
        assert req.widths_required == 3
        assert req.seams == 2
        assert req.seam_allowance_cm == pytest.approx(12.0)
        assert req.order_length_cm == pytest.approx(3 * 225.0 + 12.0)

    def test_pair_splits_width(self, curtain_hems):
        """Each panel: 300 / 2 = 150 → 2 widths of 140cm; 4 widths need 3 seams."""
        req = calculate_fabric_requirement(
            150.0, 200.0, 0.0, 2.0, curtain_hems, fabric_width_cm=140.0, panel_count=2
        )
        assert req.widths_required == 4
        assert req.seams == 3
        assert req.seam_allowance_cm == pytest.approx(18.0)
        assert req.order_length_cm == pytest.approx(4 * 225.0 + 18.0)

    def test_exact_fit_does_not_round_up(self):
        req = calculate_fabric_requirement(150.0, 200.0, fullness_ratio=2.0, fabric_width_cm=150.0)
        assert req.widths_required == 2
        assert req.seams == 1

    def test_returns_widen_the_cut(self):
        req = calculate_fabric_requirement(
            140.0, 200.0, fabric_width_cm=140.0, return_left_cm=10.0, return_right_cm=10.0
        )
        assert req.widths_required == 2

    def test_diagnostics_do_not_change_priced_quantities(self, pair_requirement, curtain_hems):
        req = calculate_fabric_requirement(
            150.0, 200.0, 0.0, 2.0, curtain_hems, fabric_width_cm=140.0
        )
        assert req.area_required_cm2 == pair_requirement.area_required_cm2
        assert req.running_linear_meters == pair_requirement.running_linear_meters

    def test_orientation_defaults_to_vertical(self, pair_requirement):
        assert pair_requirement.orientation is Orientation.VERTICAL


class TestRailroadedWidths:
    def test_pieces_cover_the_drop(self, curtain_hems):
        """Drop 225 on 140cm fabric: 2 pieces, 1 seam, each 300 + 2 × 5 = 310 long."""
        req = calculate_fabric_requirement(
            150.0,
            200.0,
            0.0,
            2.0,
            curtain_hems,
            fabric_width_cm=140.0,
            orientation=Orientation.HORIZONTAL,
        )
        assert req.orientation is Orientation.HORIZONTAL
        assert req.widths_required == 2
        assert req.seams == 1
        assert req.seam_allowance_cm == pytest.approx(6.0)
        assert req.order_length_cm == pytest.approx(2 * 310.0 + 6.0)

    def test_wide_roll_needs_no_seam(self, curtain_hems):
        req = calculate_fabric_requirement(
            150.0,
            200.0,
            0.0,
            2.0,
            curtain_hems,
            fabric_width_cm=280.0,
            orientation=Orientation.HORIZONTAL,
        )
        assert req.widths_required == 1
        assert req.seams == 0
        assert req.order_length_cm == pytest.approx(310.0)

    def test_returns_lengthen_the_cut(self):
        req = calculate_fabric_requirement(
            100.0,
            200.0,
            fabric_width_cm=280.0,
            return_left_cm=10.0,
            return_right_cm=10.0,
            orientation=Orientation.HORIZONTAL,
        )
        assert req.order_length_cm == pytest.approx(120.0)

    def test_panel_count_is_ignored(self):
        single = calculate_fabric_requirement(
            150.0, 200.0, fabric_width_cm=140.0, orientation=Orientation.HORIZONTAL
        )
        pair = calculate_fabric_requirement(
            150.0, 200.0, fabric_width_cm=140.0, orientation=Orientation.HORIZONTAL, panel_count=2
        )
        assert single.widths_required == pair.widths_required == 2

    def test_priced_quantities_match_vertical(self, pair_requirement, curtain_hems):
        req = calculate_fabric_requirement(
            150.0,
            200.0,
            0.0,
            2.0,
            curtain_hems,
            fabric_width_cm=140.0,
            orientation=Orientation.HORIZONTAL,
        )
        assert req.area_required_cm2 == pair_requirement.area_required_cm2


class TestBlindArea:
    def test_plain_area(self):
        assert calculate_blind_area(100.0, 150.0) == pytest.approx(1.5)

    def test_hems_enlarge_the_cut(self, curtain_hems):
        """(100 + 2 × 5) × (150 + 15 + 10) = 19 250cm²."""
        assert calculate_blind_area(100.0, 150.0, curtain_hems) == pytest.approx(1.925)

    def test_waste_is_added(self, curtain_hems):
        assert calculate_blind_area(100.0, 150.0, curtain_hems, 10.0) == pytest.approx(2.1175)

    def test_invalid_waste_means_none(self):
        assert calculate_blind_area(100.0, 150.0, waste_percent="lots") == pytest.approx(1.5)

    @pytest.mark.parametrize("rail_width, drop", [(None, 150.0), (100.0, None), (-1.0, 150.0)])
    def test_missing_dimensions(self, rail_width, drop):
        assert calculate_blind_area(rail_width, drop) is None


class TestRequiredLeftoverLength:
    def test_vertical_needs_drop(self, pair_requirement):
        assert required_leftover_length(pair_requirement, Orientation.VERTICAL) == pytest.approx(225.0)

    def test_horizontal_needs_width(self, pair_requirement):
        assert required_leftover_length(pair_requirement, Orientation.HORIZONTAL) == pytest.approx(
            300.0
        )
