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

from .data import Variable, VariableCreateOptions, VariableListOptions, VariableUpdateOptions

__all__ = ["VariableAPIClient"]


class VariableAPIClient(BaseAPIClient):
    """Client for the variables of a workspace."""

    async def list(self, workspace_id: str, options: VariableListOptions | None = None) -> Page[Variable]:
        """List the variables of a workspace.

        :param workspace_id: The workspace ID.
        :param options: Pagination options.

        :return: A page of variables. The values of sensitive variables are not returned.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/vars",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[Variable]},
        )

    async def create(self, workspace_id: str, options: VariableCreateOptions) -> Variable:
        """Create a variable in a workspace.

        :param workspace_id: The workspace ID.
        :param options: The variable. The key and category are required.

        :return: The created variable.
        """
        require_id("workspace_id", workspace_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "workspaces/{workspace_id}/vars",
            path_params={"workspace_id": workspace_id},
            body=options,
            response_types_map={"201": Variable},
        )

    async def read(self, workspace_id: str, variable_id: str) -> Variable:
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/vars/{variable_id}",
            path_params={
                "workspace_id": require_id("workspace_id", workspace_id),
                "variable_id": require_id("variable_id", variable_id),
            },
            response_types_map={"200": Variable},
        )

    async def update(self, workspace_id: str, variable_id: str, options: VariableUpdateOptions) -> Variable:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "workspaces/{workspace_id}/vars/{variable_id}",
            path_params={
                "workspace_id": require_id("workspace_id", workspace_id),
                "variable_id": require_id("variable_id", variable_id),
            },
            body=options,
            response_types_map={"200": Variable},
        )

    async def delete(self, workspace_id: str, variable_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "workspaces/{workspace_id}/vars/{variable_id}",
            path_params={
                "workspace_id": require_id("workspace_id", workspace_id),
                "variable_id": require_id("variable_id", variable_id),
            },
            response_types_map={"204": EmptyResponse},
        )
