import time
from collections import deque
import requests
from threading import Lock
from typing import Optional

from ..utils.logging import get_logger

log = get_logger(__name__)


class LimitSession(requests.Session):
    def __init__(self, calls: int = 120, period: float = 60.0, timeout: Optional[float] = 30.0):
        """
        :param calls: Maximum number of requests allowed in the period.
        :param period: Time window in seconds.
        :param timeout: Applied to every request that does not pass its own.
        """
        if calls <= 0:
            raise ValueError("calls must be positive")
        if period <= 0:
            raise ValueError("period must be positive")

        super().__init__()
        self.calls = calls
        self.period = period
        self.timeout = timeout
        self._timestamps: deque = deque(maxlen=calls)
        self._lock = Lock()  # Protects the deque in multithreaded use

    def _enforce_rate_limit(self) -> None:
        with self._lock:
            now = time.monotonic()

            # Expire old timestamps
            while self._timestamps and self._timestamps[0] <= now - self.period:
                self._timestamps.popleft()

            # If at limit, sleep until the next slot opens
            if len(self._timestamps) >= self.calls:
                sleep_time = self._timestamps[0] + self.period - now
                if sleep_time > 0:
                    log.debug("Rate limit reached, sleeping %.2fs", sleep_time)
                    time.sleep(sleep_time)
                self._timestamps.popleft()
                now = time.monotonic()

            self._timestamps.append(now)

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Enforce rate limiting and the default timeout before every request.
        Non-2xx responses are returned; failed calls are logged and re-raised.
        """
        self._enforce_rate_limit()
        kwargs.setdefault("timeout", self.timeout)

        try:
            return super().request(method, url, **kwargs)
        except requests.RequestException as e:
            log.warning(f"Request failed ({method} {url}): {e}")
            raise
