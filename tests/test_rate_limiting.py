"""
Tests for the sliding window rate limiter.

Run with: pytest tests/test_rate_limiting.py -v
"""

import threading

import pytest

from focusguard.core.security import RateLimiter


class TestSlidingWindow:
    """Admission and expiry behaviour."""

    def test_allows_up_to_limit_then_blocks(self):
        limiter = RateLimiter(limit=10, window=60)
        for i in range(10):
            assert limiter.is_limited("client", now=float(i)) is False
        assert limiter.is_limited("client", now=10.0) is True

    def test_limited_attempt_is_not_recorded(self):
        limiter = RateLimiter(limit=2, window=60)
        limiter.check("client", now=0.0)
        limiter.check("client", now=1.0)
        for t in range(2, 20):
            assert limiter.check("client", now=float(t)).allowed is False
        assert limiter.count("client", now=20.0) == 2

    def test_resets_after_window_elapses(self):
        limiter = RateLimiter(limit=3, window=60)
        for t in (0.0, 1.0, 2.0):
            limiter.check("client", now=t)
        assert limiter.is_limited("client", now=59.0) is True
        # At t=60 the request from t=0 has left (T - window, T]
        assert limiter.is_limited("client", now=60.0) is False

    def test_full_window_elapse_restores_whole_budget(self):
        limiter = RateLimiter(limit=10, window=60)
        for i in range(10):
            limiter.check("client", now=0.0)
        assert limiter.is_limited("client", now=30.0) is True
        for i in range(10):
            assert limiter.is_limited("client", now=61.0 + i * 0.1) is False

    def test_identifiers_are_independent(self):
        limiter = RateLimiter(limit=1, window=60)
        assert limiter.is_limited("a", now=0.0) is False
        assert limiter.is_limited("a", now=1.0) is True
        assert limiter.is_limited("b", now=1.0) is False

    def test_unknown_identifier_has_empty_history(self):
        limiter = RateLimiter()
        assert limiter.count("nobody", now=5.0) == 0

    def test_uses_injected_clock(self, clock):
        limiter = RateLimiter(limit=1, window=10, clock=clock)
        assert limiter.is_limited("client") is False
        assert limiter.is_limited("client") is True
        clock.advance(10)
        assert limiter.is_limited("client") is False


class TestDecision:
    """Remaining budget and reset reporting."""

    def test_remaining_counts_down(self):
        limiter = RateLimiter(limit=3, window=60)
        assert limiter.check("c", now=0.0).remaining == 2
        assert limiter.check("c", now=1.0).remaining == 1
        assert limiter.check("c", now=2.0).remaining == 0
        denied = limiter.check("c", now=3.0)
        assert denied.allowed is False
        assert denied.remaining == 0

    def test_reset_after_tracks_oldest_live_request(self):
        limiter = RateLimiter(limit=2, window=60)
        limiter.check("c", now=10.0)
        limiter.check("c", now=20.0)
        denied = limiter.check("c", now=30.0)
        assert denied.reset_after == pytest.approx(40.0)


class TestClockAnomalies:
    """History is filtered, never assumed sorted."""

    def test_out_of_order_history_is_tolerated(self):
        limiter = RateLimiter(limit=2, window=60)
        limiter.record("c", now=100.0)
        limiter.record("c", now=10.0)  # clock stepped backwards
        # At t=80 only the t=10 entry is outside (20, 80]; t=100 is not yet live
        assert limiter.count("c", now=80.0) == 0
        assert limiter.count("c", now=100.0) == 1
        assert limiter.is_limited("c", now=100.0) is False
        assert limiter.is_limited("c", now=100.0) is True

    def test_record_does_not_check(self):
        limiter = RateLimiter(limit=1, window=60)
        limiter.record("c", now=0.0)
        limiter.record("c", now=0.5)
        assert limiter.count("c", now=1.0) == 2
        assert limiter.is_limited("c", now=1.0) is True


class TestLifecycle:

    def test_reset_single_identifier(self):
        limiter = RateLimiter(limit=1, window=60)
        limiter.check("a", now=0.0)
        limiter.check("b", now=0.0)
        limiter.reset("a")
        assert limiter.is_limited("a", now=1.0) is False
        assert limiter.is_limited("b", now=1.0) is True

    def test_reset_all(self):
        limiter = RateLimiter(limit=1, window=60)
        limiter.check("a", now=0.0)
        limiter.reset()
        assert limiter.count("a", now=1.0) == 0

    def test_rejects_invalid_configuration(self):
        with pytest.raises(ValueError):
            RateLimiter(limit=0)
        with pytest.raises(ValueError):
            RateLimiter(window=0)


class TestConcurrency:

    def test_concurrent_callers_never_exceed_limit(self):
        limiter = RateLimiter(limit=25, window=60)
        admitted = []
        lock = threading.Lock()
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(20):
                if limiter.check("shared", now=5.0).allowed:
                    with lock:
                        admitted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(admitted) == 25
