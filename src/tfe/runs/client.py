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

from tfe import logging
from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import await_status, require_id

from .data import TERMINAL_RUN_STATUSES, Run, RunActionOptions, RunCreateOptions, RunListOptions, RunReadOptions

logger = logging.getLogger("runs.client")

__all__ = ["RunAPIClient"]


def _comment(comment: str | None) -> RunActionOptions:
    return RunActionOptions(comment=comment) if comment is not None else RunActionOptions()


class RunAPIClient(BaseAPIClient):
    """Client for the runs API."""

    async def list(self, workspace_id: str, options: RunListOptions | None = None) -> Page[Run]:
        """List the runs of a workspace, newest first.

        :param workspace_id: The workspace ID.
        :param options: Pagination, filter, search and include options.

        :return: A page of runs.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/runs",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[Run]},
        )

    async def create(self, options: RunCreateOptions) -> Run:
        """Queue a run.

        :param options: The run. The workspace is required.

        :return: The created run.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "runs",
            body=options,
            response_types_map={"201": Run},
        )

    async def read(self, run_id: str) -> Run:
        return await self.read_with_options(run_id)

    async def read_with_options(self, run_id: str, options: RunReadOptions | None = None) -> Run:
        return await self._connector.call_api(
            RequestMethod.GET,
            "runs/{run_id}",
            path_params={"run_id": require_id("run_id", run_id)},
            query_params=self._query(options),
            response_types_map={"200": Run},
        )

    async def _action(self, run_id: str, action: str, body: RunActionOptions | None = None) -> None:
        logger.debug(f"Requesting {action} of run {run_id}")
        await self._connector.call_api(
            RequestMethod.POST,
            "runs/{run_id}/actions/{action}",
            path_params={"run_id": require_id("run_id", run_id), "action": action},
            body=body,
            response_types_map={"202": EmptyResponse},
        )

    async def apply(self, run_id: str, comment: str | None = None) -> None:
        """Apply a run that is paused waiting for confirmation after a plan."""
        await self._action(run_id, "apply", _comment(comment))

    async def cancel(self, run_id: str, comment: str | None = None) -> None:
        """Interrupt a run that is currently planning or applying."""
        await self._action(run_id, "cancel", _comment(comment))

    async def force_cancel(self, run_id: str, comment: str | None = None) -> None:
        """Force-cancel a run that did not respond to a cancel request.

        This is only available after a cancel request, once the cool-off period has passed.
        """
        await self._action(run_id, "force-cancel", _comment(comment))

    async def discard(self, run_id: str, comment: str | None = None) -> None:
        """Skip any remaining work on a run that is paused waiting for confirmation or a policy override."""
        await self._action(run_id, "discard", _comment(comment))

    async def force_execute(self, run_id: str) -> None:
        """Cancel all runs ahead of a pending run, so that it executes next."""
        await self._action(run_id, "force-execute")

    async def await_completed(self, run_id: str, minimum: float = 3.0, maximum: float = 5.0) -> AsyncIterator[Run]:
        """Poll a run until it reaches a terminal status.

        The run is yielded every time its status changes. Wrap the iteration in `asyncio.timeout()` to give up after a
        deadline.

        :param run_id: The run ID.
        :param minimum: The shortest delay between reads, in seconds.
        :param maximum: The longest delay between reads, in seconds.

        :return: An async iterator over the run, each time its status changes.
        """
        require_id("run_id", run_id)
        async for run in await_status(
            lambda: self.read(run_id),
            lambda run: run.status,
            lambda status: status in TERMINAL_RUN_STATUSES,
            minimum=minimum,
            maximum=maximum,
        ):
            yield run
