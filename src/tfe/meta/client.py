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

from datetime import datetime, timezone
from email.utils import format_datetime
from urllib.parse import urljoin

from tfe.common import APIConnector, BaseAPIClient, EmptyResponse, RequestMethod

from .data import IPRange

__all__ = ["IPRangeAPIClient", "MetaAPIClient"]


class IPRangeAPIClient(BaseAPIClient):
    async def read(self, modified_since: datetime | None = None) -> IPRange | None:
        """Read the IP ranges of HCP Terraform.

        :param modified_since: Only return the ranges if they have changed since this time. A naive datetime is
            treated as UTC.

        :return: The IP ranges, or None if they have not changed since `modified_since`.
        """
        header_params = {"Accept": "application/json"}
        if modified_since is not None:
            if modified_since.tzinfo is None:
                modified_since = modified_since.replace(tzinfo=timezone.utc)
            header_params["If-Modified-Since"] = format_datetime(modified_since.astimezone(timezone.utc), usegmt=True)

        result = await self._connector.call_api(
            RequestMethod.GET,
            urljoin(self._connector.base_url, "/api/meta/ip-ranges"),
            header_params=header_params,
            response_types_map={"200": IPRange, "304": EmptyResponse},
        )
        return None if isinstance(result, EmptyResponse) else result


class MetaAPIClient:
    """Entry point for the meta API, which describes the service itself rather than an organization."""

    def __init__(self, connector: APIConnector) -> None:
        """
        :param connector: The connector object.
        """
        self.ip_ranges = IPRangeAPIClient(connector)
