"""Tests for the rate limiting pure function, the limiter and middleware integration."""

from labdash.core.config import settings
from labdash.middleware.request_context import RateLimiter, check_rate_limit, rate_limiter


class TestCheckRateLimit:
    """Unit tests for the pure function — no middleware, no HTTP."""

    def test_allows_within_limit(self):
        bucket: dict = {}
        allowed, retry = check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)
        assert allowed is True
        assert retry == 0.0

    def test_denies_after_exhaustion(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)

        allowed, retry = check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)
        assert allowed is False
        assert retry > 0

    def test_refills_over_time(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)

        # 2 seconds later: ~2 tokens back
        allowed, _ = check_rate_limit(bucket, "client-a", max_per_minute=60, now=2.0)
        assert allowed is True

    def test_separate_keys_independent(self):
        bucket: dict = {}
        for _ in range(60):
            check_rate_limit(bucket, "client-a", max_per_minute=60, now=0.0)

        allowed, _ = check_rate_limit(bucket, "client-b", max_per_minute=60, now=0.0)
        assert allowed is True

    def test_zero_limit_always_allows(self):
        bucket: dict = {}
        allowed, _ = check_rate_limit(bucket, "any", max_per_minute=0, now=0.0)
        assert allowed is True
        assert bucket == {}


class TestRateLimiter:

    def test_evicts_stale_clients(self):
        limiter = RateLimiter(evict_every=2, evict_age=10.0)
        limiter.check("old", 60, now=0.0)
        limiter.check("new", 60, now=100.0)
        assert "old" not in limiter.buckets
        assert "new" in limiter.buckets

    def test_reset_clears_buckets(self):
        limiter = RateLimiter()
        limiter.check("a", 60, now=0.0)
        limiter.reset()
        assert limiter.buckets == {}


class TestMiddleware:

    def test_returns_429_with_retry_after(self, client, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_per_minute", 2)
        rate_limiter.reset()
        for _ in range(2):
            assert client.get("/api/projects").status_code == 200

        resp = client.get("/api/projects")
        assert resp.status_code == 429
        assert resp.json()["error"] == "RATE_LIMITED"
        assert int(resp.headers["retry-after"]) >= 1

    def test_health_is_exempt(self, client, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_per_minute", 1)
        rate_limiter.reset()
        for _ in range(5):
            assert client.get("/health").status_code == 200
