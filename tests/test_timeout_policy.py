import pytest

from spot_server.models.game import Player
from spot_server.services.timeout_policy import TimeoutPolicy, wall_clock_ms


def _player():
    return Player(id='a', name='Player 1', turns_remaining=2)


def test_unlocked_by_default(clock):
    policy = TimeoutPolicy(2000, clock)
    assert not policy.is_locked(_player())
    assert policy.remaining_ms(_player()) == 0


def test_lock_lasts_for_the_window(clock):
    policy = TimeoutPolicy(2000, clock)
    player = _player()

    policy.lock(player)
    assert player.timeout_until == clock.now
    assert policy.is_locked(player)
    assert policy.remaining_ms(player) == 2000

    clock.advance(1999)
    assert policy.is_locked(player)
    assert policy.remaining_ms(player) == 1

    clock.advance(1)
    assert not policy.is_locked(player)
    assert policy.remaining_ms(player) == 0


def test_explicit_now_overrides_clock(clock):
    policy = TimeoutPolicy(2000, clock)
    player = _player()

    policy.lock(player, now=5000)
    assert policy.is_locked(player, now=6999)
    assert not policy.is_locked(player, now=7000)


def test_clear_unlocks(clock):
    policy = TimeoutPolicy(2000, clock)
    player = _player()
    policy.lock(player)

    policy.clear(player)
    assert player.timeout_until is None
    assert not policy.is_locked(player)


def test_zero_window_never_locks(clock):
    policy = TimeoutPolicy(0, clock)
    player = _player()
    policy.lock(player)
    assert not policy.is_locked(player)


def test_negative_window_is_rejected():
    with pytest.raises(ValueError):
        TimeoutPolicy(-1)


def test_default_clock_is_wall_clock_ms():
    policy = TimeoutPolicy(2000)
    assert abs(policy.now() - wall_clock_ms()) < 1000


def test_lock_taken_at_time_zero_holds():
    policy = TimeoutPolicy(2000, lambda: 0)
    player = _player()

    policy.lock(player)
    assert player.timeout_until == 0
    assert policy.is_locked(player)
    assert not policy.is_locked(player, now=2000)
