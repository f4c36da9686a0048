"""Simple in-memory rate limiter for the public API."""
import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Any, Optional


@dataclass
class RateLimitDecision:
    """Outcome of a single rate limit check."""
    allowed: bool
    limit: int
    remaining: int
    reset_at: datetime

    @property
    def retry_after(self) -> int:
        """Seconds until the current window resets."""
        return max(0, int((self.reset_at - datetime.now()).total_seconds()) + 1)


class RateLimiter:
    """Fixed-window request counter keyed by client address."""

    def __init__(self, max_requests: int = 100, window_seconds: int = 900, max_tracked_clients: int = 10000):
        self._windows: Dict[str, Dict[str, Any]] = {}
        self.max_tracked_clients = max_tracked_clients
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    def _make_key(self, client_id: str) -> str:
        """Generate counter key from the client address."""
        return f"client:{hashlib.md5(client_id.encode()).hexdigest()}"

    def hit(self, client_id: str, now: Optional[datetime] = None) -> RateLimitDecision:
        """Count one request for a client and report whether it is allowed."""
        now = now or datetime.now()
        key = self._make_key(client_id)

        window = self._windows.get(key)

        # Start a new window if none exists or the old one expired
        if window is None or now >= window['reset_at']:
            self._windows.pop(key, None)
            if len(self._windows) >= self.max_tracked_clients:
                self.purge_expired(now)
            while len(self._windows) >= self.max_tracked_clients:
                # Every tracked window is live; drop the one closest to resetting
                oldest = min(self._windows, key=lambda k: self._windows[k]['reset_at'])
                del self._windows[oldest]
            window = {
                'count': 0,
                'reset_at': now + timedelta(seconds=self.window_seconds),
            }
            self._windows[key] = window

        window['count'] += 1

        return RateLimitDecision(
            allowed=window['count'] <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - window['count']),
            reset_at=window['reset_at']
        )

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Drop expired windows. Returns the number removed."""
        now = now or datetime.now()
        expired = [key for key, window in self._windows.items() if now >= window['reset_at']]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def reset(self) -> None:
        """Clear all counters."""
        self._windows.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get limiter stats."""
        return {
            "tracked_clients": len(self._windows),
            "max_requests": self.max_requests,
            "window_seconds": self.window_seconds
        }
