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

from types import TracebackType

from pure_interface import Interface

from .data import HTTPHeaderDict, HTTPResponse, RequestMethod

__all__ = [
    "IAuthorizer",
    "ITransport",
]


class ITransport(Interface):
    """Interface for HTTP Transport.

    ITransport is responsible for sending HTTP requests and receiving responses. The open and close methods are
    used to manage the connection state. The request method is used to send an HTTP request and receive a response.

    An internal counter should be incremented when open is called and decremented when close is called. The transport
    should only release resources when the counter reaches zero.
    """

    async def open(self) -> None:
        """Open the HTTP transport.

        This method should be called before sending any requests. ITransport implementations should be reentrant,
        meaning that calling open multiple times should not have any side effects. Resources that are consumed by the
        transport should be retained until the close method is called the same number of times as open.
        """
        ...  # pragma: no cover

    async def close(self) -> None:
        """Close the transport.

        Because ITransport implementations should be reentrant, calling close does not guarantee that the transport is
        closed immediately. Resources are retained as long as there is an open call that has not been matched by a
        close call.
        """
        ...  # pragma: no cover

    async def __aenter__(self) -> ITransport:
        """Open the transport when entering an async with statement."""
        ...

    async def __aexit__(
        self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: TracebackType | None
    ) -> None:
        """Close the transport when exiting an async with statement."""
        ...

    async def request(
        self,
        method: RequestMethod,
        url: str,
        headers: HTTPHeaderDict | None = None,
        body: object | str | bytes | None = None,
        request_timeout: int | float | tuple[int | float, int | float] | None = None,
    ) -> HTTPResponse:
        """Send an asynchronous request.

        ITransport implementations *MUST NOT* automatically follow redirects.

        Implementations are responsible for retrying requests that fail with a rate limit response (429), and may
        retry server errors depending on their configuration. When every attempt fails with a retryable status, the
        last response is returned so that the caller can report the error.

        :param method: HTTP request method.
        :param url: HTTP request url.
        :param headers: Http request headers.
        :param body: Request body.
        :param request_timeout: Timeout setting for this request. If one number provided, it will be total request
            timeout. It can also be a pair (tuple) of (connection, read) timeouts.

        :return: The HTTP response object.

        :raise TransportError: If the underlying implementation encounters an error.
        """
        ...  # pragma: no cover


class IAuthorizer(Interface):
    """Interface for authorizing HTTP requests.

    IAuthorizer is responsible for providing the necessary headers to authorize HTTP requests. The refresh_token
    method will be called when authorizing a request fails.
    """

    async def get_default_headers(self) -> HTTPHeaderDict:
        """Get the default headers for authorizing HTTP requests.

        :return: A header dictionary to be included in the HTTP request by default.
        """
        ...  # pragma: no cover

    async def refresh_token(self) -> bool:
        """Refresh the token used to authorize requests.

        :return: True if the token was refreshed, False otherwise.
        """
        ...  # pragma: no cover
