"""Tests for the throttle gate — minimum interval and upstream cooldown."""

from esim_check.errors import ErrorKind
from esim_check.services.throttle import ThrottleGate


class TestLocalThrottle:
    def test_first_call_allowed(self, gate):
        assert gate.check_and_reserve().allowed is True

    def test_first_call_allowed_at_time_zero(self):
        gate = ThrottleGate(clock=lambda: 0.0)
        assert gate.check_and_reserve().allowed is True

    def test_second_call_within_interval_rejected(self, gate, clock):
        gate.check_and_reserve()
        clock.advance(4.9)
        decision = gate.check_and_reserve()
        assert decision.allowed is False
        assert decision.reason == ErrorKind.LOCAL_THROTTLE

    def test_call_after_interval_allowed(self, gate, clock):
        gate.check_and_reserve()
        clock.advance(5.0)
        assert gate.check_and_reserve().allowed is True

    def test_reservation_happens_at_decision_time(self, gate, clock):
        gate.check_and_reserve()
        assert gate.last_call == clock.now

    def test_rejection_does_not_move_reservation(self, gate, clock):
        gate.check_and_reserve()
        reserved_at = gate.last_call
        clock.advance(3)
        gate.check_and_reserve()
        assert gate.last_call == reserved_at
        clock.advance(2)
        assert gate.check_and_reserve().allowed is True

    def test_explicit_now_overrides_clock(self, gate):
        assert gate.check_and_reserve(now=50.0).allowed is True
        assert gate.check_and_reserve(now=52.0).reason == ErrorKind.LOCAL_THROTTLE


class TestUpstreamCooldown:
    def test_block_rejects_for_cooldown(self, gate, clock):
        gate.block()
        clock.advance(10)
        decision = gate.check_and_reserve()
        assert decision.allowed is False
        assert decision.reason == ErrorKind.UPSTREAM_BLOCKED

    def test_block_rejects_until_window_ends(self, gate, clock):
        gate.block()
        clock.advance(29.9)
        assert gate.check_and_reserve().reason == ErrorKind.UPSTREAM_BLOCKED
        clock.advance(0.1)
        assert gate.check_and_reserve().allowed is True

    def test_local_throttle_checked_first(self, gate, clock):
        gate.check_and_reserve()
        gate.block()
        clock.advance(1)
        assert gate.check_and_reserve().reason == ErrorKind.LOCAL_THROTTLE

    def test_blocked_for(self, gate, clock):
        assert gate.blocked_for() == 0.0
        gate.block()
        clock.advance(12)
        assert gate.blocked_for() == 18.0
        assert gate.is_blocked() is True

    def test_custom_windows(self, clock):
        gate = ThrottleGate(min_interval=1.0, cooldown=2.0, clock=clock)
        gate.block()
        clock.advance(2)
        assert gate.check_and_reserve().allowed is True
        clock.advance(1)
        assert gate.check_and_reserve().allowed is True
