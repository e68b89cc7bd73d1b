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

from tfe.common import BaseAPIClient, Page, RequestMethod
from tfe.common.utils import require_id

from .data import StateVersionOutput, StateVersionOutputsListOptions

__all__ = ["StateVersionOutputAPIClient"]


class StateVersionOutputAPIClient(BaseAPIClient):
    """Client for the outputs of state versions."""

    async def read(self, output_id: str) -> StateVersionOutput:
        return await self._connector.call_api(
            RequestMethod.GET,
            "state-version-outputs/{output_id}",
            path_params={"output_id": require_id("output_id", output_id)},
            response_types_map={"200": StateVersionOutput},
        )

    async def read_current(
        self, workspace_id: str, options: StateVersionOutputsListOptions | None = None
    ) -> Page[StateVersionOutput]:
        """Read the outputs of the current state version of a workspace.

        Sensitive values are redacted unless the token has permission to read the state.

        :param workspace_id: The workspace ID.
        :param options: Pagination options.

        :return: A page of outputs.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/current-state-version-outputs",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[StateVersionOutput]},
        )
