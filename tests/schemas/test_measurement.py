"""Tests for schemas.measurement — Measurement and HemConfiguration."""

import pytest

from drapecalc.schemas.measurement import HemConfiguration, Measurement


class TestMeasurement:
    def test_construction(self):
        m = Measurement(rail_width_cm=150.0, drop_cm=200.0, pooling_cm=5.0, quantity=2)
        assert m.rail_width_cm == 150.0
        assert m.drop_cm == 200.0
        assert m.pooling_cm == 5.0
        assert m.quantity == 2

    def test_defaults(self):
        m = Measurement(rail_width_cm=150.0, drop_cm=200.0)
        assert m.pooling_cm == 0.0
        assert m.quantity == 1
        assert m.return_left_cm == 0.0
        assert m.return_right_cm == 0.0

    def test_is_frozen(self):
        m = Measurement(rail_width_cm=150.0, drop_cm=200.0)
        with pytest.raises(Exception):
            m.drop_cm = 10.0  # type: ignore[misc]

    def test_missing_values_allowed(self):
        m = Measurement(rail_width_cm=None, drop_cm=None, quantity=None)
        assert not m.is_complete

    def test_is_complete(self):
        assert Measurement(rail_width_cm=150.0, drop_cm=200.0).is_complete
        assert not Measurement(rail_width_cm=150.0, drop_cm=None).is_complete

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError, match="rail_width_cm"):
            Measurement(rail_width_cm=-1.0, drop_cm=200.0)

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError, match="drop_cm"):
            Measurement(rail_width_cm=150.0, drop_cm=float("inf"))

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity"):
            Measurement(rail_width_cm=150.0, drop_cm=200.0, quantity=0)

    def test_fractional_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity"):
            Measurement(rail_width_cm=150.0, drop_cm=200.0, quantity=1.5)  # type: ignore[arg-type]

    def test_bool_quantity_rejected(self):
        with pytest.raises(ValueError, match="quantity"):
            Measurement(rail_width_cm=150.0, drop_cm=200.0, quantity=True)


class TestHemConfiguration:
    def test_defaults_are_zero(self):
        hems = HemConfiguration()
        assert hems.header_hem_cm == 0.0
        assert hems.bottom_hem_cm == 0.0
        assert hems.side_hem_cm == 0.0
        assert hems.seam_hem_cm == 0.0

    def test_vertical_allowance(self):
        hems = HemConfiguration(header_hem_cm=15.0, bottom_hem_cm=10.0, side_hem_cm=5.0)
        assert hems.vertical_allowance_cm == 25.0

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="side_hem_cm"):
            HemConfiguration(side_hem_cm=-2.0)

    def test_from_mapping(self):
        hems = HemConfiguration.from_mapping({"header_hem_cm": 15, "bottom_hem_cm": "10"})
        assert hems == HemConfiguration(header_hem_cm=15.0, bottom_hem_cm=10.0)

    def test_from_mapping_ignores_unknown_keys(self):
        hems = HemConfiguration.from_mapping({"id": "curtain", "notes": "x", "side_hem_cm": 5})
        assert hems.side_hem_cm == 5.0
        assert hems.header_hem_cm == 0.0

    def test_equality(self):
        assert HemConfiguration(header_hem_cm=1.0) == HemConfiguration(header_hem_cm=1.0)
