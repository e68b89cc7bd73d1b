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

from typing import TYPE_CHECKING

from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import require_id

from .data import (
    Capacity,
    Entitlements,
    Organization,
    OrganizationCreateOptions,
    OrganizationListOptions,
    OrganizationUpdateOptions,
    ReadRunQueueOptions,
)

if TYPE_CHECKING:
    from tfe.runs.data import Run

__all__ = ["OrganizationAPIClient"]


class OrganizationAPIClient(BaseAPIClient):
    """Client for the organizations API."""

    async def list(self, options: OrganizationListOptions | None = None) -> Page[Organization]:
        """List the organizations that are visible to the current user.

        :param options: Pagination and search options.

        :return: A page of organizations.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations",
            query_params=self._query(options),
            response_types_map={"200": Page[Organization]},
        )

    async def create(self, options: OrganizationCreateOptions) -> Organization:
        """Create a new organization.

        :param options: The organization settings. The name and email are required.

        :return: The created organization.

        :raises RequiredFieldError: If the name or email is missing.
        :raises InvalidValueError: If the name is not a valid organization name.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations",
            body=options,
            response_types_map={"201": Organization},
        )

    async def read(self, organization: str) -> Organization:
        """Read an organization by its name.

        :param organization: The organization name.

        :return: The organization.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}",
            path_params={"organization": require_id("organization", organization)},
            response_types_map={"200": Organization},
        )

    async def update(self, organization: str, options: OrganizationUpdateOptions) -> Organization:
        """Update the settings of an organization.

        :param organization: The organization name.
        :param options: The settings to change. Settings that are None are left unchanged.

        :return: The updated organization.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "organizations/{organization}",
            path_params={"organization": organization},
            body=options,
            response_types_map={"200": Organization},
        )

    async def delete(self, organization: str) -> None:
        """Delete an organization, along with everything it contains.

        :param organization: The organization name.
        """
        await self._connector.call_api(
            RequestMethod.DELETE,
            "organizations/{organization}",
            path_params={"organization": require_id("organization", organization)},
            response_types_map={"204": EmptyResponse},
        )

    async def read_capacity(self, organization: str) -> Capacity:
        """Read the number of runs that are pending and running in an organization.

        :param organization: The organization name.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/capacity",
            path_params={"organization": require_id("organization", organization)},
            response_types_map={"200": Capacity},
        )

    async def read_entitlements(self, organization: str) -> Entitlements:
        """Read the features that an organization is entitled to.

        :param organization: The organization name.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/entitlement-set",
            path_params={"organization": require_id("organization", organization)},
            response_types_map={"200": Entitlements},
        )

    async def read_run_queue(self, organization: str, options: ReadRunQueueOptions | None = None) -> Page[Run]:
        """Read the queue of runs in an organization.

        :param organization: The organization name.
        :param options: Pagination options.

        :return: A page of queued runs.
        """
        from tfe.runs.data import Run

        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/runs/queue",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[Run]},
        )
