import unittest

from infrastructure.http.rate_limiter import FixedWindowRateLimiter


class _FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FixedWindowRateLimiterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeClock()
        self.limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60, clock=self.clock)

    def test_allows_up_to_max_requests_per_window(self) -> None:
        first = self.limiter.hit("10.0.0.1")
        second = self.limiter.hit("10.0.0.1")
        third = self.limiter.hit("10.0.0.1")

        self.assertTrue(first.allowed)
        self.assertEqual(first.remaining, 1)
        self.assertTrue(second.allowed)
        self.assertEqual(second.remaining, 0)
        self.assertFalse(third.allowed)
        self.assertEqual(third.retry_after_seconds, 60)
        self.assertEqual(third.reset_at, 1060.0)

    def test_keys_are_counted_independently(self) -> None:
        self.limiter.hit("10.0.0.1")
        self.limiter.hit("10.0.0.1")

        self.assertTrue(self.limiter.hit("10.0.0.2").allowed)

    def test_window_expiry_resets_the_count(self) -> None:
        self.limiter.hit("10.0.0.1")
        self.limiter.hit("10.0.0.1")
        self.clock.now += 60

        decision = self.limiter.hit("10.0.0.1")

        self.assertTrue(decision.allowed)
        self.assertEqual(decision.remaining, 1)

    def test_reset_clears_a_key(self) -> None:
        self.limiter.hit("10.0.0.1")
        self.limiter.hit("10.0.0.1")
        self.limiter.reset("10.0.0.1")

        self.assertTrue(self.limiter.hit("10.0.0.1").allowed)

    def test_rejects_non_positive_limits(self) -> None:
        with self.assertRaises(ValueError):
            FixedWindowRateLimiter(max_requests=0, window_seconds=60)
        with self.assertRaises(ValueError):
            FixedWindowRateLimiter(max_requests=1, window_seconds=0)


if __name__ == "__main__":
    unittest.main()
