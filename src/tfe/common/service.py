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

from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin

from .connector import APIConnector
from .data import HTTPResponse, RequestMethod
from .exceptions import ClientValueError
from .jsonapi import QueryOptions

__all__ = ["BaseAPIClient"]


class BaseAPIClient:
    """Base class for the resource clients.

    Each resource client wraps one family of API endpoints, and all clients share a single connector.
    """

    def __init__(self, connector: APIConnector) -> None:
        """
        :param connector: The connector object.
        """
        self._connector = connector

    @staticmethod
    def _query(*options: QueryOptions | None, **params: Any) -> dict[str, Any]:
        """Combine query options and additional query parameters into a single mapping.

        Options that are None and parameters that are None are skipped.
        """
        query: dict[str, Any] = {}
        for option in options:
            if option is not None:
                query.update(option.to_query())
        query.update((key, value) for key, value in params.items() if value is not None)
        return query

    async def _download(self, resource_path: str, path_params: Mapping[str, Any] | None = None) -> bytes:
        """Download raw content from the API.

        Download endpoints usually redirect to a temporary URL. The redirect is followed without sending the
        authorization header.

        :param resource_path: Path to the API endpoint, or an absolute URL.
        :param path_params: Path parameters to embed in the url.

        :return: The downloaded content.
        """
        result = await self._connector.call_api(
            RequestMethod.GET,
            resource_path,
            path_params=path_params,
            response_types_map={"200": bytes, "302": HTTPResponse, "307": HTTPResponse},
        )
        if not isinstance(result, HTTPResponse):
            return result

        if (location := result.getheader("Location")) is None:
            raise ClientValueError(f"Redirect ({result.status}) is missing a location.")
        return await self._connector.get_object(urljoin(self._connector.base_url, location))
