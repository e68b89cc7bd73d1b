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

from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import require_id
from tfe.projects.data import Project
from tfe.workspaces.data import Workspace

from .data import AgentPool, AgentPoolCreateOptions, AgentPoolListOptions, AgentPoolReadOptions, AgentPoolUpdateOptions

__all__ = ["AgentPoolAPIClient"]


class AgentPoolAPIClient(BaseAPIClient):
    """Client for the agent pools API."""

    async def list(self, organization: str, options: AgentPoolListOptions | None = None) -> Page[AgentPool]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/agent-pools",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[AgentPool]},
        )

    async def create(self, organization: str, options: AgentPoolCreateOptions) -> AgentPool:
        """Create an agent pool in an organization.

        :param organization: The organization name.
        :param options: The pool settings. The name is required.

        :return: The created agent pool.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/agent-pools",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": AgentPool},
        )

    async def read(self, agent_pool_id: str, options: AgentPoolReadOptions | None = None) -> AgentPool:
        return await self._connector.call_api(
            RequestMethod.GET,
            "agent-pools/{agent_pool_id}",
            path_params={"agent_pool_id": require_id("agent_pool_id", agent_pool_id)},
            query_params=self._query(options),
            response_types_map={"200": AgentPool},
        )

    async def update(self, agent_pool_id: str, options: AgentPoolUpdateOptions) -> AgentPool:
        require_id("agent_pool_id", agent_pool_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "agent-pools/{agent_pool_id}",
            path_params={"agent_pool_id": agent_pool_id},
            body=options,
            response_types_map={"200": AgentPool},
        )

    async def update_allowed_workspaces(self, agent_pool_id: str, workspaces: Sequence[Workspace]) -> AgentPool:
        """Replace the workspaces that are allowed to use an agent pool. An empty list removes them all."""
        return await self.update(agent_pool_id, AgentPoolUpdateOptions(allowed_workspaces=list(workspaces)))

    async def update_allowed_projects(self, agent_pool_id: str, projects: Sequence[Project]) -> AgentPool:
        """Replace the projects that are allowed to use an agent pool. An empty list removes them all."""
        return await self.update(agent_pool_id, AgentPoolUpdateOptions(allowed_projects=list(projects)))

    async def update_excluded_workspaces(self, agent_pool_id: str, workspaces: Sequence[Workspace]) -> AgentPool:
        """Replace the workspaces that are excluded from using an agent pool through an allowed project."""
        return await self.update(agent_pool_id, AgentPoolUpdateOptions(excluded_workspaces=list(workspaces)))

    async def delete(self, agent_pool_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "agent-pools/{agent_pool_id}",
            path_params={"agent_pool_id": require_id("agent_pool_id", agent_pool_id)},
            response_types_map={"204": EmptyResponse},
        )
