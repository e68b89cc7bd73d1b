#  Copyright © 2025 Bentley Systems, Incorporated
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#      http://www.apache.org/licenses/LICENSE-2.0
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

from __future__ import annotations

import asyncio
import math
import time

from tfe.logging import getLogger

__all__ = ["RateLimiter"]

logger = getLogger("rate_limit")


class RateLimiter:
    """A token bucket that spaces out requests to stay under the API rate limit.

    The bucket holds up to `burst` tokens and refills at `rate` tokens per second. Each request consumes one token,
    waiting for the bucket to refill if it is empty. An infinite rate disables limiting.
    """

    def __init__(self, rate: float = math.inf, burst: int = 0) -> None:
        """
        :param rate: Number of requests allowed per second, on average.
        :param burst: Number of requests that may be sent at once before the rate applies.
        """
        self.__mutex = asyncio.Lock()
        self.configure(rate, burst)

    @classmethod
    def from_header(cls, raw_limit: str | None) -> RateLimiter:
        """Create a rate limiter from the value of the `X-RateLimit-Limit` response header.

        Two thirds of the limit is used as the rate, and one third as the burst. A missing or invalid value disables
        limiting.

        :param raw_limit: The header value.

        :return: The configured rate limiter.
        """
        limiter = cls()
        limiter.configure_from_header(raw_limit)
        return limiter

    def configure(self, rate: float, burst: int) -> None:
        """Reconfigure the limiter.

        :param rate: Number of requests allowed per second, on average.
        :param burst: Number of requests that may be sent at once before the rate applies.
        """
        if rate <= 0:
            raise ValueError("rate must be greater than 0")
        self._rate = rate
        self._burst = max(burst, 1)
        self._tokens = float(self._burst)
        self._updated_at = time.monotonic()

    def configure_from_header(self, raw_limit: str | None) -> None:
        """Reconfigure the limiter from the value of the `X-RateLimit-Limit` response header.

        :param raw_limit: The header value.
        """
        try:
            limit = float(raw_limit) if raw_limit else 0.0
        except ValueError:
            logger.debug(f"Ignoring invalid rate limit {raw_limit!r}")
            limit = 0.0

        if limit > 0:
            self.configure(limit * 0.66, int(limit * 0.33))
        else:
            self.configure(math.inf, 0)
        logger.debug(f"Rate limit configured: rate={self._rate}, burst={self._burst}")

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def burst(self) -> int:
        return self._burst

    @property
    def unlimited(self) -> bool:
        """Whether requests are sent without any limit."""
        return math.isinf(self._rate)

    def __refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(float(self._burst), self._tokens + (now - self._updated_at) * self._rate)
        self._updated_at = now

    async def acquire(self) -> None:
        """Wait until a request may be sent."""
        if self.unlimited:
            return

        async with self.__mutex:
            self.__refill()
            if self._tokens < 1:
                delay = (1 - self._tokens) / self._rate
                logger.debug(f"Rate limited, waiting {delay:.3f}s")
                await asyncio.sleep(delay)
                self.__refill()
            self._tokens -= 1
