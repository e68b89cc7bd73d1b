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

from collections.abc import Sequence

from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod, Resource
from tfe.common.jsonapi import marshal_relationships
from tfe.common.utils import require_id, require_ids
from tfe.projects.data import Project
from tfe.workspaces.data import Workspace

from .data import (
    VariableSet,
    VariableSetCreateOptions,
    VariableSetListOptions,
    VariableSetReadOptions,
    VariableSetUpdateOptions,
    VariableSetUpdateWorkspacesOptions,
)

__all__ = ["VariableSetAPIClient"]


class VariableSetAPIClient(BaseAPIClient):
    """Client for the variable sets API."""

    async def list(self, organization: str, options: VariableSetListOptions | None = None) -> Page[VariableSet]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/varsets",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[VariableSet]},
        )

    async def list_for_workspace(
        self, workspace_id: str, options: VariableSetListOptions | None = None
    ) -> Page[VariableSet]:
        """List the variable sets that apply to a workspace, including global variable sets."""
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/varsets",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[VariableSet]},
        )

    async def list_for_project(
        self, project_id: str, options: VariableSetListOptions | None = None
    ) -> Page[VariableSet]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "projects/{project_id}/varsets",
            path_params={"project_id": require_id("project_id", project_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[VariableSet]},
        )

    async def create(self, organization: str, options: VariableSetCreateOptions) -> VariableSet:
        """Create a variable set.

        :param organization: The organization name.
        :param options: The variable set. The name and the global flag are required.

        :return: The created variable set.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/varsets",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": VariableSet},
        )

    async def read(self, variable_set_id: str, options: VariableSetReadOptions | None = None) -> VariableSet:
        return await self._connector.call_api(
            RequestMethod.GET,
            "varsets/{variable_set_id}",
            path_params={"variable_set_id": require_id("variable_set_id", variable_set_id)},
            query_params=self._query(options),
            response_types_map={"200": VariableSet},
        )

    async def update(self, variable_set_id: str, options: VariableSetUpdateOptions) -> VariableSet:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "varsets/{variable_set_id}",
            path_params={"variable_set_id": require_id("variable_set_id", variable_set_id)},
            body=options,
            response_types_map={"200": VariableSet},
        )

    async def delete(self, variable_set_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "varsets/{variable_set_id}",
            path_params={"variable_set_id": require_id("variable_set_id", variable_set_id)},
            response_types_map={"204": EmptyResponse},
        )

    async def _relationship(
        self, method: RequestMethod, variable_set_id: str, relationship: str, resources: Sequence[Resource]
    ) -> None:
        await self._connector.call_api(
            method,
            "varsets/{variable_set_id}/relationships/{relationship}",
            path_params={
                "variable_set_id": require_id("variable_set_id", variable_set_id),
                "relationship": relationship,
            },
            body=marshal_relationships(resources),
            response_types_map={"204": EmptyResponse},
        )

    async def apply_to_workspaces(self, variable_set_id: str, workspace_ids: Sequence[str]) -> None:
        workspaces = [Workspace(id=workspace_id) for workspace_id in require_ids("workspaces", workspace_ids)]
        await self._relationship(RequestMethod.POST, variable_set_id, "workspaces", workspaces)

    async def remove_from_workspaces(self, variable_set_id: str, workspace_ids: Sequence[str]) -> None:
        workspaces = [Workspace(id=workspace_id) for workspace_id in require_ids("workspaces", workspace_ids)]
        await self._relationship(RequestMethod.DELETE, variable_set_id, "workspaces", workspaces)

    async def apply_to_projects(self, variable_set_id: str, project_ids: Sequence[str]) -> None:
        projects = [Project(id=project_id) for project_id in require_ids("projects", project_ids)]
        await self._relationship(RequestMethod.POST, variable_set_id, "projects", projects)

    async def remove_from_projects(self, variable_set_id: str, project_ids: Sequence[str]) -> None:
        projects = [Project(id=project_id) for project_id in require_ids("projects", project_ids)]
        await self._relationship(RequestMethod.DELETE, variable_set_id, "projects", projects)

    async def update_workspaces(self, variable_set_id: str, workspace_ids: Sequence[str]) -> VariableSet:
        """Replace the workspaces that a variable set is applied to.

        The variable set stops being global. An empty list removes the variable set from every workspace.

        :param variable_set_id: The variable set ID.
        :param workspace_ids: The IDs of the workspaces to apply the variable set to.

        :return: The updated variable set, including its workspaces.
        """
        options = VariableSetUpdateWorkspacesOptions(
            global_=False,
            workspaces=[Workspace(id=require_id("workspaces", workspace_id)) for workspace_id in workspace_ids],
        )
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "varsets/{variable_set_id}",
            path_params={"variable_set_id": require_id("variable_set_id", variable_set_id)},
            query_params={"include": "workspaces"},
            body=options,
            response_types_map={"200": VariableSet},
        )
