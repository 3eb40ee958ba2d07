"""Tests for value coercion utilities."""

import pytest

from liftmates.utils.coerce import as_flag, as_number, percentage, round_half_up


class TestAsNumber:
    """Tests for as_number."""

    @pytest.mark.parametrize("value, expected", [(5, 5.0), ("12.5", 12.5), (0, 0.0)])
    def test_numeric(self, value, expected):
        assert as_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "heavy", True, float("nan"), float("inf"), [1]])
    def test_malformed_is_zero(self, value):
        assert as_number(value) == 0.0


class TestAsFlag:
    """Tests for as_flag."""

    @pytest.mark.parametrize("value", [True, 1, 1.0, "true", "TRUE", "t", "1"])
    def test_true_like(self, value):
        assert as_flag(value) is True

    @pytest.mark.parametrize("value", [False, 0, 2, "false", "yes", "", None])
    def test_everything_else_is_false(self, value):
        assert as_flag(value) is False


class TestRounding:
    """Tests for rounding helpers."""

    @pytest.mark.parametrize("value, expected", [(62.5, 63), (0.5, 1), (33.33, 33), (99.5, 100)])
    def test_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_percentage(self):
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67
        assert percentage(3, 3) == 100

    def test_percentage_of_nothing(self):
        assert percentage(0, 0) == 0
        assert percentage(5, 0) == 0
