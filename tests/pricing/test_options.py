"""Tests for pricing.options — price_option() and price_options()."""

import pytest

from drapecalc.pricing.options import price_option, price_options
from drapecalc.quantity.calculator import calculate_fabric_requirement
from drapecalc.schemas.option import OptionPricingMethod, SelectedOption


@pytest.fixture(scope="module")
def requirement():
    """150 × 200, fullness 2, on 140cm fabric → 3 widths."""
    return calculate_fabric_requirement(150.0, 200.0, fullness_ratio=2.0, fabric_width_cm=140.0)


def _option(price: float, method: OptionPricingMethod) -> SelectedOption:
    return SelectedOption(name=method.value, price=price, method=method)


class TestPriceOption:
    def test_fixed(self, requirement):
        assert price_option(_option(15.0, OptionPricingMethod.FIXED), requirement, 0.0) == 15.0

    def test_per_meter_uses_rail_width(self, requirement):
        opt = _option(10.0, OptionPricingMethod.PER_METER)
        assert price_option(opt, requirement, 0.0) == pytest.approx(15.0)

    def test_per_sqm_uses_window_area(self, requirement):
        opt = _option(10.0, OptionPricingMethod.PER_SQM)
        assert price_option(opt, requirement, 0.0) == pytest.approx(30.0)

    def test_per_drop(self, requirement):
        opt = _option(5.0, OptionPricingMethod.PER_DROP)
        assert price_option(opt, requirement, 0.0) == pytest.approx(10.0)

    def test_per_panel(self, requirement):
        opt = _option(8.0, OptionPricingMethod.PER_PANEL)
        assert price_option(opt, requirement, 0.0, panel_count=2) == pytest.approx(16.0)

    def test_per_width(self, requirement):
        opt = _option(4.0, OptionPricingMethod.PER_WIDTH)
        assert price_option(opt, requirement, 0.0) == pytest.approx(12.0)

    def test_per_width_without_fabric_width(self):
        req = calculate_fabric_requirement(150.0, 200.0)
        opt = _option(4.0, OptionPricingMethod.PER_WIDTH)
        assert price_option(opt, req, 0.0) == pytest.approx(4.0)

    def test_percentage_of_fabric_cost(self, requirement):
        opt = _option(10.0, OptionPricingMethod.PERCENTAGE)
        assert price_option(opt, requirement, 200.0) == pytest.approx(20.0)


class TestPriceOptions:
    def test_empty(self, requirement):
        assert price_options([], requirement, 100.0) == 0.0

    def test_sum(self, requirement):
        options = [
            _option(15.0, OptionPricingMethod.FIXED),
            _option(10.0, OptionPricingMethod.PERCENTAGE),
        ]
        assert price_options(options, requirement, 100.0) == pytest.approx(25.0)

    def test_unpriced_option_costs_nothing(self, requirement):
        options = [
            SelectedOption(name="Tracks", price=None, method=OptionPricingMethod.PER_METER),
            _option(15.0, OptionPricingMethod.FIXED),
        ]
        assert price_options(options, requirement, 100.0) == pytest.approx(15.0)
