"""Tests for accrual module."""
import pytest

from idleclicker.accrual import (
    MAX_OFFLINE_SECONDS,
    OFFLINE_EFFICIENCY,
    AccrualPolicy,
    accrue,
)


def test_online_has_no_penalty():
    assert accrue(10, 100, False) == pytest.approx(1000)


def test_offline_capped_and_discounted():
    assert MAX_OFFLINE_SECONDS == 28800
    assert OFFLINE_EFFICIENCY == 0.5
    assert accrue(10, 100_000, True) == pytest.approx(144_000)


def test_offline_below_cap():
    assert accrue(10, 3600, True) == pytest.approx(18_000)


@pytest.mark.parametrize("elapsed", [0, -1, -86400])
@pytest.mark.parametrize("offline", [False, True])
def test_non_positive_elapsed_earns_nothing(elapsed, offline):
    assert accrue(10, elapsed, offline) == 0.0


def test_zero_rate():
    assert accrue(0, 100, False) == 0.0


def test_online_monotonic():
    times = [0, 0.5, 1, 10, 100, 10_000, 1_000_000]
    gains = [accrue(3.5, t, False) for t in times]
    assert gains == sorted(gains)


def test_offline_saturates():
    bound = 7.0 * MAX_OFFLINE_SECONDS * OFFLINE_EFFICIENCY
    for t in [1, 28_799, 28_800, 28_801, 1e7, 1e12]:
        assert accrue(7.0, t, True) <= bound
    assert accrue(7.0, 1e12, True) == pytest.approx(bound)


def test_custom_constants():
    assert accrue(2, 100, True, max_offline_seconds=50, offline_efficiency=0.25) == 25


class TestAccrualPolicy:
    def test_defaults(self):
        policy = AccrualPolicy()
        assert policy.max_offline_seconds == MAX_OFFLINE_SECONDS
        assert policy.offline_efficiency == OFFLINE_EFFICIENCY

    def test_grace_window(self):
        policy = AccrualPolicy(online_grace_seconds=5)
        assert not policy.is_offline(1)
        assert not policy.is_offline(5)
        assert policy.is_offline(5.01)

    def test_accrue_picks_branch(self):
        policy = AccrualPolicy(online_grace_seconds=5)
        assert policy.accrue(10, 2) == pytest.approx(20)
        assert policy.accrue(10, 100_000) == pytest.approx(144_000)

    def test_max_offline_gain_per_rate(self):
        assert AccrualPolicy().max_offline_gain_per_rate == pytest.approx(14_400)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_offline_seconds": -1},
            {"offline_efficiency": 1.5},
            {"offline_efficiency": -0.1},
            {"online_grace_seconds": -1},
        ],
    )
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            AccrualPolicy(**kwargs)
