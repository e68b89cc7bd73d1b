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

from .data import (
    VariableSetVariable,
    VariableSetVariableCreateOptions,
    VariableSetVariableListOptions,
    VariableSetVariableUpdateOptions,
)

__all__ = ["VariableSetVariableAPIClient"]

_VARIABLES = "varsets/{variable_set_id}/relationships/vars"
_VARIABLE = "varsets/{variable_set_id}/relationships/vars/{variable_id}"


def _ids(variable_set_id: str, variable_id: str) -> dict[str, str]:
    return {
        "variable_set_id": require_id("variable_set_id", variable_set_id),
        "variable_id": require_id("variable_id", variable_id),
    }


class VariableSetVariableAPIClient(BaseAPIClient):
    """Client for the variables of a variable set."""

    async def list(
        self, variable_set_id: str, options: VariableSetVariableListOptions | None = None
    ) -> Page[VariableSetVariable]:
        return await self._connector.call_api(
            RequestMethod.GET,
            _VARIABLES,
            path_params={"variable_set_id": require_id("variable_set_id", variable_set_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[VariableSetVariable]},
        )

    async def create(self, variable_set_id: str, options: VariableSetVariableCreateOptions) -> VariableSetVariable:
        require_id("variable_set_id", variable_set_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            _VARIABLES,
            path_params={"variable_set_id": variable_set_id},
            body=options,
            response_types_map={"201": VariableSetVariable},
        )

    async def read(self, variable_set_id: str, variable_id: str) -> VariableSetVariable:
        return await self._connector.call_api(
            RequestMethod.GET,
            _VARIABLE,
            path_params=_ids(variable_set_id, variable_id),
            response_types_map={"200": VariableSetVariable},
        )

    async def update(
        self, variable_set_id: str, variable_id: str, options: VariableSetVariableUpdateOptions
    ) -> VariableSetVariable:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _VARIABLE,
            path_params=_ids(variable_set_id, variable_id),
            body=options,
            response_types_map={"200": VariableSetVariable},
        )

    async def delete(self, variable_set_id: str, variable_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            _VARIABLE,
            path_params=_ids(variable_set_id, variable_id),
            response_types_map={"204": EmptyResponse},
        )
