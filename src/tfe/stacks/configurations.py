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

from collections.abc import AsyncIterator

from tfe.common import BaseAPIClient, Page, RequestMethod
from tfe.common.utils import await_status, require_id

from .data import (
    TERMINAL_STACK_CONFIGURATION_STATUSES,
    StackConfiguration,
    StackConfigurationListOptions,
    StackConfigurationStatus,
)

__all__ = ["StackConfigurationAPIClient"]


class StackConfigurationAPIClient(BaseAPIClient):
    """Client for the configurations of stacks."""

    async def read(self, stack_configuration_id: str) -> StackConfiguration:
        return await self._connector.call_api(
            RequestMethod.GET,
            "stack-configurations/{stack_configuration_id}",
            path_params={"stack_configuration_id": require_id("stack_configuration_id", stack_configuration_id)},
            response_types_map={"200": StackConfiguration},
        )

    async def list(
        self, stack_id: str, options: StackConfigurationListOptions | None = None
    ) -> Page[StackConfiguration]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "stacks/{stack_id}/stack-configurations",
            path_params={"stack_id": require_id("stack_id", stack_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[StackConfiguration]},
        )

    def await_completed(
        self, stack_configuration_id: str, minimum: float = 3.0, maximum: float = 5.0
    ) -> AsyncIterator[StackConfiguration]:
        """Poll a stack configuration until its preparation has finished.

        The stack configuration is yielded every time its status changes, and the last one yielded has a terminal
        status. Wrap the iteration in `asyncio.timeout()` to give up after a deadline.

        Usage::
            async with asyncio.timeout(600):
                async for configuration in client.stack_configurations.await_completed(configuration_id):
                    print(configuration.status)

        :param stack_configuration_id: The stack configuration ID.
        :param minimum: The shortest delay between reads, in seconds.
        :param maximum: The longest delay between reads, in seconds.

        :return: An async iterator over the stack configuration, each time its status changes.
        """
        return self._await(stack_configuration_id, TERMINAL_STACK_CONFIGURATION_STATUSES, minimum, maximum)

    def await_status(
        self,
        stack_configuration_id: str,
        status: StackConfigurationStatus,
        minimum: float = 3.0,
        maximum: float = 5.0,
    ) -> AsyncIterator[StackConfiguration]:
        """Poll a stack configuration until it reaches a status, or until it errors or is canceled."""
        statuses = (status, StackConfigurationStatus.ERRORED, StackConfigurationStatus.CANCELED)
        return self._await(stack_configuration_id, statuses, minimum, maximum)

    def _await(
        self,
        stack_configuration_id: str,
        statuses: tuple[StackConfigurationStatus, ...],
        minimum: float,
        maximum: float,
    ) -> AsyncIterator[StackConfiguration]:
        require_id("stack_configuration_id", stack_configuration_id)
        return await_status(
            lambda: self.read(stack_configuration_id),
            lambda configuration: configuration.status,
            lambda status: status in statuses,
            minimum=minimum,
            maximum=maximum,
        )
