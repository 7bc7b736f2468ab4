"""
Property-based tests for the depreciation engine using Hypothesis.

Generates random costs, salvage values, lives and factors and checks the
schedule invariants hold for every method:
  1. Book value never drops below the salvage used.
  2. Straight-line and FIN end exactly on salvage (FIN: zero).
  3. Total depreciation plus final book value equals cost.
  4. Every yearly charge is non-negative with at most 2 decimal places.
  5. Identical requests give identical schedules.
  6. Amounts finer than a cent, or too long to quantize, are rejected
     as validation errors before any arithmetic.
"""

from decimal import Decimal

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from fin_engines.depreciation import DepreciationEngine, DepreciationRequest
from fin_kernel.domain.money import round_money
from fin_kernel.exceptions import ValidationError

ENGINE = DepreciationEngine()

costs = st.decimals(
    min_value=Decimal("1.00"),
    max_value=Decimal("10000000.00"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
salvage_percents = st.integers(min_value=0, max_value=99)
lives = st.integers(min_value=1, max_value=50)
factors = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("0.99"),
    places=4,
    allow_nan=False,
    allow_infinity=False,
)
fin_periods = st.sampled_from([5, 7])


def _salvage(cost: Decimal, percent: int) -> Decimal:
    return round_money(cost * percent / 100)


def _assert_common(schedule, cost: Decimal, salvage: Decimal) -> None:
    cumulative = Decimal("0")
    for n, year in enumerate(schedule, start=1):
        assert year.year == n
        assert year.depreciation >= 0
        assert year.depreciation.as_tuple().exponent >= -2
        cumulative += year.depreciation
        assert year.cumulative_depreciation == cumulative
        assert year.book_value == cost - cumulative
        assert year.book_value >= salvage
    assert schedule.total_depreciation + schedule.final_book_value == cost


class TestStraightLineProperties:

    @given(cost=costs, percent=salvage_percents, life=lives)
    @settings(max_examples=200, deadline=None)
    def test_ends_on_salvage(self, cost, percent, life):
        salvage = _salvage(cost, percent)
        schedule = ENGINE.calculate(DepreciationRequest.straight_line(cost, salvage, life))

        _assert_common(schedule, cost, salvage)
        assert len(schedule) == life
        assert schedule.final_book_value == salvage
        assert schedule.total_depreciation == cost - salvage


class TestDecliningBalanceProperties:

    @given(cost=costs, percent=salvage_percents, life=lives, factor=factors)
    @settings(max_examples=200, deadline=None)
    def test_never_below_salvage(self, cost, percent, life, factor):
        salvage = _salvage(cost, percent)
        schedule = ENGINE.calculate(
            DepreciationRequest.declining_balance(cost, salvage, life, factor)
        )

        _assert_common(schedule, cost, salvage)
        assert len(schedule) == life
        assert schedule.final_book_value >= salvage

    @given(cost=costs, percent=salvage_percents, life=lives, factor=factors)
    @settings(max_examples=100, deadline=None)
    def test_nothing_after_reaching_salvage(self, cost, percent, life, factor):
        salvage = _salvage(cost, percent)
        schedule = ENGINE.calculate(
            DepreciationRequest.declining_balance(cost, salvage, life, factor)
        )

        reached = False
        for year in schedule:
            if reached:
                assert year.depreciation == 0
            reached = reached or year.book_value == salvage


class TestFinProperties:

    @given(cost=costs, period=fin_periods)
    @settings(max_examples=200, deadline=None)
    def test_fully_depreciates(self, cost, period):
        schedule = ENGINE.calculate(DepreciationRequest.for_fin(cost, period))

        _assert_common(schedule, cost, Decimal("0"))
        assert len(schedule) == period + 1
        assert schedule.final_book_value == 0
        assert schedule.total_depreciation == cost


class TestDeterminismProperties:

    @given(cost=costs, percent=salvage_percents, life=lives, factor=factors)
    @settings(max_examples=50, deadline=None)
    def test_replay_identical(self, cost, percent, life, factor):
        request = DepreciationRequest.declining_balance(cost, _salvage(cost, percent), life, factor)
        assert ENGINE.calculate(request) == ENGINE.calculate(request)


sub_cent_costs = st.decimals(
    min_value=Decimal("1.000"),
    max_value=Decimal("10000000.000"),
    places=3,
    allow_nan=False,
    allow_infinity=False,
)
methods = st.sampled_from(["straight_line", "declining_balance", "fin"])


def _request(method: str, cost, salvage="0"):
    if method == "fin":
        return DepreciationRequest.for_fin(cost, 5)
    if method == "declining_balance":
        return DepreciationRequest.declining_balance(cost, salvage, 5, "0.2")
    return DepreciationRequest.straight_line(cost, salvage, 5)


class TestPrecisionProperties:

    @given(cost=sub_cent_costs, method=methods)
    @settings(max_examples=100, deadline=None)
    def test_sub_cent_cost_rejected(self, cost, method):
        assume(round_money(cost) != cost)
        with pytest.raises(ValidationError, match="Cost cannot have more than 2 decimal places"):
            ENGINE.calculate(_request(method, cost))

    @given(cost=costs, method=st.sampled_from(["straight_line", "declining_balance"]))
    @settings(max_examples=100, deadline=None)
    def test_sub_cent_salvage_rejected(self, cost, method):
        assume(cost > Decimal("1.00"))
        with pytest.raises(ValidationError, match="Salvage value cannot have more than 2 decimal places"):
            ENGINE.calculate(_request(method, cost, salvage="0.005"))

    @given(exponent=st.integers(min_value=26, max_value=200), method=methods)
    @settings(max_examples=50, deadline=None)
    def test_oversized_cost_rejected(self, exponent, method):
        cost = Decimal(1).scaleb(exponent)
        with pytest.raises(ValidationError, match="Cost is too large"):
            ENGINE.calculate(_request(method, cost))
