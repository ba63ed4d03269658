"""
Tests for the cents/dollars normalization heuristic.
"""
import pytest

from sweet_moment.services.currency import (
    NormalizationPolicy,
    PriceRole,
    coerce_price,
    normalize_price,
    parse_price,
    round_money,
)
from sweet_moment.services.diagnostics import INVALID_PRICE_ZEROED


class TestBaseRole:
    """Base prices above 100 are cents."""

    def test_large_value_is_cents(self):
        assert normalize_price(1500, PriceRole.BASE) == 15.0

    def test_exactly_threshold_is_dollars(self):
        assert normalize_price(100, PriceRole.BASE) == 100.0

    def test_small_value_is_dollars(self):
        assert normalize_price(24.99, PriceRole.BASE) == 24.99

    def test_numeric_string(self):
        assert normalize_price("2599", PriceRole.BASE) == 25.99


class TestOptionExtraRole:
    """Option extras are cents only inside [100, 500)."""

    @pytest.mark.parametrize("raw, expected", [
        (0, 0.0),
        (2.5, 2.5),
        (99, 99.0),
        (100, 1.0),
        (300, 3.0),
        (499, 4.99),
        (500, 500.0),
        (750, 750.0),
    ])
    def test_thresholds(self, raw, expected):
        assert normalize_price(raw, PriceRole.OPTION_EXTRA) == expected


def test_fee_role_is_always_cents():
    assert normalize_price(250, PriceRole.FEE) == 2.5
    assert normalize_price(50, PriceRole.FEE) == 0.5


def test_custom_policy_thresholds():
    """Thresholds come from the policy, not from the arithmetic."""
    policy = NormalizationPolicy(base_cents_threshold=1000, option_cents_min=50, option_cents_max=100)
    assert normalize_price(1500, PriceRole.BASE, policy) == 15.0
    assert normalize_price(900, PriceRole.BASE, policy) == 900.0
    assert normalize_price(75, PriceRole.OPTION_EXTRA, policy) == 0.75
    assert normalize_price(300, PriceRole.OPTION_EXTRA, policy) == 300.0


@pytest.mark.parametrize("role", [PriceRole.BASE, PriceRole.OPTION_EXTRA])
@pytest.mark.parametrize("dollars", [0.0, 1.5, 3.0, 15.0, 42.75, 99.99])
def test_normalizing_dollars_twice_is_stable(role, dollars):
    """Already-normalized dollar values below the threshold are left alone."""
    once = normalize_price(dollars, role)
    assert normalize_price(once, role) == once


class TestInvalidValues:
    """Unusable prices become 0 and are recorded."""

    def test_garbage_string_is_zero(self, recorder):
        assert normalize_price("abc", PriceRole.BASE, recorder=recorder) == 0.0
        assert recorder.codes() == [INVALID_PRICE_ZEROED]

    def test_nan_is_zero(self, recorder):
        assert coerce_price(float("nan"), recorder=recorder) == 0.0
        assert INVALID_PRICE_ZEROED in recorder.codes()

    def test_infinity_is_zero(self, recorder):
        assert coerce_price(float("inf"), recorder=recorder) == 0.0
        assert INVALID_PRICE_ZEROED in recorder.codes()

    def test_none_is_zero_without_event(self, recorder):
        assert coerce_price(None, recorder=recorder) == 0.0
        assert coerce_price("  ", recorder=recorder) == 0.0
        assert recorder.codes() == []

    def test_boolean_is_not_a_price(self, recorder):
        assert coerce_price(True, recorder=recorder) == 0.0
        assert INVALID_PRICE_ZEROED in recorder.codes()

    def test_parse_price_returns_none_for_unusable(self):
        assert parse_price("abc") is None
        assert parse_price(None) is None
        assert parse_price(" 12.5 ") == 12.5


def test_round_money_absorbs_float_drift():
    assert round_money(0.1 + 0.2) == 0.3
    assert round_money(16.499999999) == 16.5


def test_size_extra_uses_base_threshold():
    """A $6 size upgrade stored as 600 cents is $6, not $600."""
    assert normalize_price(600, PriceRole.SIZE_EXTRA) == 6.0
    assert normalize_price(150, PriceRole.SIZE_EXTRA) == 1.5
    assert normalize_price(100, PriceRole.SIZE_EXTRA) == 100.0
    assert normalize_price(4.5, PriceRole.SIZE_EXTRA) == 4.5
