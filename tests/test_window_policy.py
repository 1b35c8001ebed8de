"""Unit tests for the fixed and sliding window policies."""

from unittest.mock import Mock

import pytest

from docgate.adapters.rate_limit.in_memory import (
    FixedWindowPolicy,
    SlidingWindowPolicy,
    create_window_policy,
)


def test_fixed_allows_up_to_limit_in_same_window() -> None:
    clock = Mock(return_value=1000.0)
    policy = FixedWindowPolicy(limit=3, window_seconds=60, clock=clock)

    assert policy.try_acquire().allowed is True
    assert policy.try_acquire().allowed is True
    decision = policy.try_acquire()
    assert decision.allowed is True
    assert decision.remaining == 0


def test_fixed_blocks_when_over_limit_and_reports_wait() -> None:
    clock = Mock(return_value=1000.0)
    policy = FixedWindowPolicy(limit=2, window_seconds=10, clock=clock)

    assert policy.try_acquire().allowed is True
    clock.return_value = 1004.0
    assert policy.try_acquire().allowed is True

    blocked = policy.try_acquire()
    assert blocked.allowed is False
    assert blocked.remaining == 0
    assert blocked.wait_seconds == pytest.approx(6.0)


def test_fixed_window_opens_at_first_admission_after_expiry() -> None:
    clock = Mock(return_value=1000.0)
    policy = FixedWindowPolicy(limit=1, window_seconds=10, clock=clock)

    assert policy.try_acquire().allowed is True
    assert policy.try_acquire().allowed is False

    clock.return_value = 1010.0
    decision = policy.try_acquire()
    assert decision.allowed is True
    assert decision.window_start == pytest.approx(1010.0)

    # After idling, the next window starts at the admission, not on a 10s grid
    clock.return_value = 1047.5
    decision = policy.try_acquire()
    assert decision.allowed is True
    assert decision.window_start == pytest.approx(1047.5)

    clock.return_value = 1056.0
    blocked = policy.try_acquire()
    assert blocked.allowed is False
    assert blocked.wait_seconds == pytest.approx(1.5)


def test_fixed_idle_time_before_first_burst_does_not_count() -> None:
    clock = Mock(return_value=0.0)
    policy = FixedWindowPolicy(limit=5, window_seconds=1.0, clock=clock)

    clock.return_value = 0.9
    assert all(policy.try_acquire().allowed for _ in range(5))

    clock.return_value = 1.05
    blocked = policy.try_acquire()
    assert blocked.allowed is False
    assert blocked.wait_seconds == pytest.approx(0.85)

    clock.return_value = 1.95
    assert policy.try_acquire().allowed is True


def test_sliding_admits_when_oldest_admission_expires() -> None:
    clock = Mock(return_value=1000.0)
    policy = SlidingWindowPolicy(limit=2, window_seconds=10, clock=clock)

    assert policy.try_acquire().allowed is True
    clock.return_value = 1006.0
    assert policy.try_acquire().allowed is True

    clock.return_value = 1009.0
    blocked = policy.try_acquire()
    assert blocked.allowed is False
    assert blocked.wait_seconds == pytest.approx(1.0)

    clock.return_value = 1010.0
    assert policy.try_acquire().allowed is True

    # The admission at 1006 is still inside (1005, 1015]
    clock.return_value = 1015.0
    assert policy.try_acquire().allowed is False
    clock.return_value = 1016.0
    assert policy.try_acquire().allowed is True


def test_sliding_never_exceeds_limit_in_any_interval() -> None:
    # Integer milliseconds keep the boundary arithmetic exact
    clock = Mock(return_value=0)
    policy = SlidingWindowPolicy(limit=3, window_seconds=1000, clock=clock)

    admitted: list[int] = []
    for now in range(0, 5000, 50):
        clock.return_value = now
        if policy.try_acquire().allowed:
            admitted.append(now)

    for start in admitted:
        in_window = [t for t in admitted if start <= t < start + 1000]
        assert len(in_window) <= 3
    assert len(admitted) == 15


@pytest.mark.parametrize("policy_cls", [FixedWindowPolicy, SlidingWindowPolicy])
@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0, "window_seconds": 60},
        {"limit": 1, "window_seconds": 0},
        {"limit": 1, "window_seconds": -1.5},
    ],
)
def test_invalid_constructor_args(policy_cls: type, kwargs: dict) -> None:
    with pytest.raises(ValueError):
        policy_cls(**kwargs)


def test_create_window_policy_by_name() -> None:
    assert isinstance(create_window_policy("fixed", limit=1, window_seconds=1), FixedWindowPolicy)
    assert isinstance(create_window_policy("SLIDING", limit=1, window_seconds=1), SlidingWindowPolicy)

    with pytest.raises(ValueError):
        create_window_policy("token-bucket", limit=1, window_seconds=1)
