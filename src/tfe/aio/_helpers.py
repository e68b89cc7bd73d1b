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
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import aiohttp
from aiohttp.typedefs import StrOrURL

from tfe.common import HTTPHeaderDict, HTTPResponse
from tfe.common.exceptions import RetryableResponseError, RetryError, TransportError
from tfe.common.utils import BackoffLinearJitter, BackoffMethod, Retry

__all__ = ["Config", "Context", "RetryBackoff", "RetryLogHook"]

RetryLogHook = Callable[[int, HTTPResponse | None], None]
"""Called with the attempt number and the response (if any) before waiting to retry a request."""


class RetryBackoff(BackoffMethod):
    """Backoff used between retried API requests.

    Rate limited responses (429) wait for the time given by the `X-RateLimit-Reset` header, but no less than
    `rate_limit_minimum`, plus up to `rate_limit_maximum - rate_limit_minimum` of jitter. Any other failure waits a
    linearly increasing delay with jitter.
    """

    def __init__(
        self,
        retry_log_hook: RetryLogHook | None = None,
        rate_limit_minimum: float = 0.1,
        rate_limit_maximum: float = 0.4,
        minimum: float = 0.7,
        maximum: float = 0.9,
    ) -> None:
        """
        :param retry_log_hook: Optional callback that is invoked before each wait.
        :param rate_limit_minimum: The shortest delay after a rate limited response, in seconds.
        :param rate_limit_maximum: The upper bound of the jittered delay after a rate limited response, in seconds.
        :param minimum: The lower bound of the linear delay, in seconds.
        :param maximum: The upper bound of the linear delay, in seconds.
        """
        super().__init__(backoff_factor=minimum)
        self.__retry_log_hook = retry_log_hook
        self.__rate_limit_minimum = rate_limit_minimum
        self.__rate_limit_maximum = rate_limit_maximum
        self.__linear = BackoffLinearJitter(minimum, maximum)

    def __rate_limit_backoff(self, response: HTTPResponse) -> float:
        delay = self.__rate_limit_minimum
        try:
            reset = float(response.getheader("X-RateLimit-Reset") or "")
        except ValueError:
            pass
        else:
            delay = max(delay, reset)
        return delay + random.uniform(0, self.__rate_limit_maximum - self.__rate_limit_minimum)

    def _calculate_backoff_time(self, attempt_number: int, exception: Exception | None) -> float:
        response = exception.response if isinstance(exception, RetryableResponseError) else None
        if self.__retry_log_hook is not None:
            self.__retry_log_hook(attempt_number, response)

        if response is not None and response.status == 429:
            return self.__rate_limit_backoff(response)
        return self.__linear.get_backoff_time(attempt_number)


@dataclass(frozen=True, kw_only=True)
class Config:
    user_agent: str
    """The value to provide in the `User-Agent` header."""

    num_pools: int
    """Number of connection pools to cache before discarding the least recently used pool."""

    verify_ssl: bool
    """Verify SSL certificates."""

    retry: Retry
    """Retry handler."""

    retry_server_errors: bool
    """Retry 5xx responses and connection errors, in addition to rate limited responses."""

    proxy: StrOrURL | None
    """Proxy server to use for the request."""

    close_grace_period_ms: int
    """Grace period (in milliseconds) to wait for connections to close gracefully. 250 is used if not set"""

    async def create_context(self) -> Context:
        return Context(
            num_pools=self.num_pools,
            verify_ssl=self.verify_ssl,
            retry_handler=self.retry,
            retry_server_errors=self.retry_server_errors,
            proxy=self.proxy,
            close_grace_period_ms=self.close_grace_period_ms,
        )


class Context:
    """Inner class to manage the aiohttp session."""

    def __init__(
        self,
        num_pools: int,
        verify_ssl: bool,
        retry_handler: Retry,
        retry_server_errors: bool,
        proxy: StrOrURL | None,
        close_grace_period_ms: int,
    ) -> None:
        """
        :param num_pools: Number of connection pools to cache before discarding the least recently used pool.
        :param verify_ssl: Verify SSL certificates.
        :param retry_handler: Retry handler.
        :param retry_server_errors: Retry 5xx responses and connection errors.
        """
        connector = aiohttp.TCPConnector(ssl=None if verify_ssl else False, limit=num_pools)

        self.__session: aiohttp.ClientSession | None = aiohttp.ClientSession(
            connector=connector, skip_auto_headers=["Accept", "Accept-Encoding"]
        )
        self.__retry_handler = retry_handler
        self.__retry_server_errors = retry_server_errors
        self.__proxy = proxy
        self._close_grace_period_ms = close_grace_period_ms

    async def close(self) -> None:
        """Close the aiohttp session."""

        session = self.__session
        self.__session = None
        await session.close()

        # Wait for the underlying SSL connections to close
        # https://docs.aiohttp.org/en/stable/client_advanced.html#graceful-shutdown
        await asyncio.sleep(self._close_grace_period_ms / 1000)

    def __should_retry(self, status: int) -> bool:
        return status == 429 or (self.__retry_server_errors and status >= 500)

    async def __perform_request(self, **kwargs: Any) -> HTTPResponse:
        """Perform an HTTP request.

        If every attempt ends with a retryable status, the last response is returned so that the caller can raise the
        appropriate API error.
        """

        if self.__session is None:
            raise TransportError("Cannot make a request after the transport has been closed.")

        retryable: tuple[type[Exception], ...] = (RetryableResponseError,)
        if self.__retry_server_errors:
            retryable += (aiohttp.ClientError, TimeoutError)

        try:
            async for request_attempt in self.__retry_handler:
                with request_attempt.suppress_errors(retryable):
                    async with self.__session.request(allow_redirects=False, **kwargs) as resp:
                        response = HTTPResponse(
                            status=resp.status,
                            data=await resp.read(),
                            reason=resp.reason,
                            headers=HTTPHeaderDict(resp.headers),
                        )
                    if self.__should_retry(response.status):
                        raise RetryableResponseError(response)
                    return response
        except RetryError as error:
            last_error = error.exceptions[-1]
            if isinstance(last_error, RetryableResponseError):
                return last_error.response
            raise TransportError("Reached maximum number of retries", caused_by=error).with_traceback(
                error.__traceback__
            )

    async def request(
        self,
        method: str,
        url: str,
        headers: HTTPHeaderDict,
        body: str | bytes | None,
        timeout: aiohttp.ClientTimeout | None,
    ) -> HTTPResponse:
        """Submit a standard HTTP request.

        :param method: HTTP method.
        :param url: Request URL.
        :param headers: Request headers.
        :param body: Serialized request body.
        :param timeout: Request timeout.

        :return: The server response.
        """
        return await self.__perform_request(
            method=method, url=url, headers=headers, data=body, timeout=timeout, proxy=self.__proxy
        )
