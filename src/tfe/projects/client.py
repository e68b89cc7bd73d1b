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

from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import require_id

from .data import Project, ProjectCreateOptions, ProjectListOptions, ProjectUpdateOptions

__all__ = ["ProjectAPIClient"]


class ProjectAPIClient(BaseAPIClient):
    """Client for the projects API."""

    async def list(self, organization: str, options: ProjectListOptions | None = None) -> Page[Project]:
        """List the projects in an organization.

        :param organization: The organization name.
        :param options: Pagination and filter options.

        :return: A page of projects.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/projects",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[Project]},
        )

    async def create(self, organization: str, options: ProjectCreateOptions) -> Project:
        """Create a project in an organization.

        :param organization: The organization name.
        :param options: The project settings. The name is required.

        :return: The created project.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/projects",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": Project},
        )

    async def read(self, project_id: str) -> Project:
        return await self._connector.call_api(
            RequestMethod.GET,
            "projects/{project_id}",
            path_params={"project_id": require_id("project_id", project_id)},
            response_types_map={"200": Project},
        )

    async def update(self, project_id: str, options: ProjectUpdateOptions) -> Project:
        require_id("project_id", project_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "projects/{project_id}",
            path_params={"project_id": project_id},
            body=options,
            response_types_map={"200": Project},
        )

    async def delete(self, project_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "projects/{project_id}",
            path_params={"project_id": require_id("project_id", project_id)},
            response_types_map={"204": EmptyResponse},
        )
