import threading
import time
from collections import deque
from typing import Callable

from fastapi import Request
from slowapi import Limiter

import config


def get_real_ip(request: Request) -> str:
    """
    Extract the real client IP from the request headers, falling back to the
    socket peer when the service is not behind a proxy.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host

    return "127.0.0.1"


# Per-client throttling of the HTTP surface. The model endpoint has its own
# process-wide window below, shared by every client.
limiter = Limiter(key_func=get_real_ip, default_limits=["200/minute", "5000/hour"])


class SlidingWindowLimiter:
    """
    Call-admission gate over a trailing time window.

    At most ``max_calls`` admissions are allowed in any ``window_seconds``
    interval. Rejection is immediate; nothing blocks or queues.
    """

    def __init__(
        self,
        max_calls: int = config.MODEL_WINDOW_MAX_CALLS,
        window_seconds: float = config.MODEL_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock
        self._calls: deque[float] = deque()
        self._lock = threading.Lock()

    def try_admit(self) -> bool:
        with self._lock:
            now = self._clock()
            while self._calls and now - self._calls[0] > self.window_seconds:
                self._calls.popleft()

            if len(self._calls) >= self.max_calls:
                return False

            self._calls.append(now)
            return True

    @property
    def in_window(self) -> int:
        with self._lock:
            return len(self._calls)

    def reset(self) -> None:
        with self._lock:
            self._calls.clear()
