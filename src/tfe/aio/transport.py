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
import json
import re
from types import TracebackType

import aiohttp
from aiohttp.client_exceptions import ClientError
from aiohttp.typedefs import StrOrURL

from tfe.common import HTTPHeaderDict, HTTPResponse, RequestMethod
from tfe.common.exceptions import TransportError
from tfe.common.interfaces import ITransport
from tfe.common.utils import BackoffMethod, Retry
from tfe.logging import getLogger

from ._helpers import Config, Context, RetryBackoff, RetryLogHook

__all__ = ["AioTransport"]

logger = getLogger("aio.transport")

_RE_JSON = re.compile(r"json", re.IGNORECASE)

DEFAULT_RETRY_MAX = 30
"""Number of retries after the first attempt."""


class AioTransport(ITransport):
    """A client for managing concurrent connections to the API with a common configuration.

    Rate limited responses are always retried. Server errors and connection errors are only retried when
    `retry_server_errors` is set. See `tfe.common.interfaces.ITransport` for more detail.
    """

    def __init__(
        self,
        user_agent: str,
        max_attempts: int = DEFAULT_RETRY_MAX + 1,
        retry_server_errors: bool = False,
        retry_log_hook: RetryLogHook | None = None,
        backoff_method: BackoffMethod | None = None,
        num_pools: int = 4,
        verify_ssl: bool = True,
        proxy: StrOrURL | None = None,
        close_grace_period_ms: int = 250,
    ):
        """
        :param user_agent: The value to provide in the `User-Agent` header.
        :param max_attempts: The number of attempts, including the first, before giving up on a request.
        :param retry_server_errors: Retry 5xx responses and connection errors.
        :param retry_log_hook: Called with the attempt number and the response (if any) before each retry. Only used
            by the default backoff method.
        :param backoff_method: Configure the retry backoff implementation. Defaults to `RetryBackoff`.
        :param num_pools: Number of connection pools to cache before discarding the least recently used pool.
        :param verify_ssl: Verify SSL certificates. This should not be disabled unless you really absolutely have to,
            and never in production environments.
        :param proxy: Proxy server to use for requests.
        :param close_grace_period_ms: Grace period (in milliseconds) to wait for connections to close.
        """
        if backoff_method is None:
            backoff_method = RetryBackoff(retry_log_hook)
        self.__config = Config(
            user_agent=user_agent,
            num_pools=num_pools,
            verify_ssl=verify_ssl,
            retry=Retry(logger=logger, max_attempts=max_attempts, backoff_method=backoff_method),
            retry_server_errors=retry_server_errors,
            proxy=proxy,
            close_grace_period_ms=close_grace_period_ms,
        )
        self.__context: Context | None = None
        self.__mutex = asyncio.Lock()
        self.__num_handles = 0

    def __n_handles(self) -> str:
        """Helper method that returns a string describing the number of open handles."""
        assert self.__mutex.locked(), "This method should only be called while holding the mutex."
        return f"{self.__num_handles} handle{'' if self.__num_handles in {1, -1} else 's'}"

    async def open(self) -> None:
        logger.debug("Opening transport.")
        async with self.__mutex:
            if self.__context is None:
                logger.debug("Creating new context.")
                self.__context = await self.__config.create_context()
            self.__num_handles += 1
            logger.debug(f"Transport has {self.__n_handles()}.")
        logger.debug("Transport opened.")

    async def close(self) -> None:
        logger.debug("Closing transport.")
        async with self.__mutex:
            self.__num_handles -= 1
            logger.debug(f"{self.__n_handles()} remaining.")
            if self.__num_handles <= 0:
                logger.debug("Closing context.")
                context = self.__context
                self.__context = None
                await context.close()
            assert self.__num_handles >= 0, "Number of close calls is greater than number of open calls."
        logger.debug("Transport closed.")

    async def __aenter__(self) -> AioTransport:
        await self.open()
        return self

    async def __aexit__(
        self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: TracebackType | None
    ) -> None:
        await self.close()

    async def __unwrap(self) -> Context:
        async with self.__mutex:
            if self.__context is None:
                raise TransportError(
                    "Cannot make a request before the transport has been opened, or after it has been closed."
                )
            else:
                return self.__context

    async def request(
        self,
        method: RequestMethod,
        url: str,
        headers: HTTPHeaderDict | None = None,
        body: object | str | bytes | None = None,
        request_timeout: int | float | tuple[int | float, int | float] | None = None,
    ) -> HTTPResponse:
        headers = HTTPHeaderDict(headers or {})

        if "User-Agent" not in headers:
            headers["User-Agent"] = self.__config.user_agent

        # Resolve timeout value.
        match request_timeout:
            case int() | float():
                timeout = aiohttp.ClientTimeout(total=request_timeout)
            case (sock_connect, sock_read):
                timeout = aiohttp.ClientTimeout(sock_connect=sock_connect, sock_read=sock_read)
            case _:
                timeout = None

        ctx = await self.__unwrap()
        str_method = str(method)
        try:
            match headers.get("Content-Type"), body:
                case _, str() | bytes():
                    # Allow any content-type if the body is already serialized.
                    return await ctx.request(str_method, url, headers=headers, body=body, timeout=timeout)
                case content_type, _ if content_type is None or _RE_JSON.search(content_type):
                    # JSON:API documents and plain JSON are both serialized as JSON.
                    return await ctx.request(
                        str_method,
                        url,
                        headers=headers,
                        body=json.dumps(body) if body is not None else None,
                        timeout=timeout,
                    )
                case _, _:
                    raise TransportError(
                        msg="Cannot prepare a request message with the provided arguments. "
                        "Please check that your arguments match the declared content type."
                    )
        except (ClientError, TimeoutError) as e:
            raise TransportError(msg="Could not complete HTTP request", caused_by=e)
