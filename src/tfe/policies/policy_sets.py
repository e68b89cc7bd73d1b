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
    Policy,
    PolicySet,
    PolicySetCreateOptions,
    PolicySetListOptions,
    PolicySetReadOptions,
    PolicySetUpdateOptions,
)

__all__ = ["PolicySetAPIClient"]


class PolicySetAPIClient(BaseAPIClient):
    """Client for the policy sets API.

    Policies, workspaces, workspace exclusions and projects are attached to a policy set through relationship
    endpoints. Each of those operations takes a non-empty list of IDs.
    """

    async def list(self, organization: str, options: PolicySetListOptions | None = None) -> Page[PolicySet]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/policy-sets",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[PolicySet]},
        )

    async def create(self, organization: str, options: PolicySetCreateOptions) -> PolicySet:
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/policy-sets",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": PolicySet},
        )

    async def read(self, policy_set_id: str) -> PolicySet:
        return await self.read_with_options(policy_set_id)

    async def read_with_options(self, policy_set_id: str, options: PolicySetReadOptions | None = None) -> PolicySet:
        return await self._connector.call_api(
            RequestMethod.GET,
            "policy-sets/{policy_set_id}",
            path_params={"policy_set_id": require_id("policy_set_id", policy_set_id)},
            query_params=self._query(options),
            response_types_map={"200": PolicySet},
        )

    async def update(self, policy_set_id: str, options: PolicySetUpdateOptions) -> PolicySet:
        require_id("policy_set_id", policy_set_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "policy-sets/{policy_set_id}",
            path_params={"policy_set_id": policy_set_id},
            body=options,
            response_types_map={"200": PolicySet},
        )

    async def delete(self, policy_set_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "policy-sets/{policy_set_id}",
            path_params={"policy_set_id": require_id("policy_set_id", policy_set_id)},
            response_types_map={"204": EmptyResponse},
        )

    async def _relationship(
        self, method: RequestMethod, policy_set_id: str, relationship: str, resources: Sequence[Resource]
    ) -> None:
        await self._connector.call_api(
            method,
            "policy-sets/{policy_set_id}/relationships/{relationship}",
            path_params={"policy_set_id": require_id("policy_set_id", policy_set_id), "relationship": relationship},
            body=marshal_relationships(resources),
            response_types_map={"204": EmptyResponse},
        )

    async def add_policies(self, policy_set_id: str, policy_ids: Sequence[str]) -> None:
        policies = [Policy(id=policy_id) for policy_id in require_ids("policies", policy_ids)]
        await self._relationship(RequestMethod.POST, policy_set_id, "policies", policies)

    async def remove_policies(self, policy_set_id: str, policy_ids: Sequence[str]) -> None:
        policies = [Policy(id=policy_id) for policy_id in require_ids("policies", policy_ids)]
        await self._relationship(RequestMethod.DELETE, policy_set_id, "policies", policies)

    async def add_workspaces(self, policy_set_id: str, workspace_ids: Sequence[str]) -> None:
        workspaces = [Workspace(id=workspace_id) for workspace_id in require_ids("workspaces", workspace_ids)]
        await self._relationship(RequestMethod.POST, policy_set_id, "workspaces", workspaces)

    async def remove_workspaces(self, policy_set_id: str, workspace_ids: Sequence[str]) -> None:
        workspaces = [Workspace(id=workspace_id) for workspace_id in require_ids("workspaces", workspace_ids)]
        await self._relationship(RequestMethod.DELETE, policy_set_id, "workspaces", workspaces)

    async def add_workspace_exclusions(self, policy_set_id: str, workspace_ids: Sequence[str]) -> None:
        """Exclude workspaces from a global policy set, or from the projects it is applied to."""
        workspaces = [Workspace(id=workspace_id) for workspace_id in require_ids("workspace exclusions", workspace_ids)]
        await self._relationship(RequestMethod.POST, policy_set_id, "workspace-exclusions", workspaces)

    async def remove_workspace_exclusions(self, policy_set_id: str, workspace_ids: Sequence[str]) -> None:
        workspaces = [Workspace(id=workspace_id) for workspace_id in require_ids("workspace exclusions", workspace_ids)]
        await self._relationship(RequestMethod.DELETE, policy_set_id, "workspace-exclusions", workspaces)

    async def add_projects(self, policy_set_id: str, project_ids: Sequence[str]) -> None:
        projects = [Project(id=project_id) for project_id in require_ids("projects", project_ids)]
        await self._relationship(RequestMethod.POST, policy_set_id, "projects", projects)

    async def remove_projects(self, policy_set_id: str, project_ids: Sequence[str]) -> None:
        projects = [Project(id=project_id) for project_id in require_ids("projects", project_ids)]
        await self._relationship(RequestMethod.DELETE, policy_set_id, "projects", projects)
