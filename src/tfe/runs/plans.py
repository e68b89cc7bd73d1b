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

from tfe.common import BaseAPIClient, RequestMethod
from tfe.common.exceptions import ClientValueError
from tfe.common.utils import require_id

from .data import Plan, PlanStatus
from .logs import LogReader

__all__ = ["PlanAPIClient"]

_LOGS_COMPLETE = (PlanStatus.CANCELED, PlanStatus.ERRORED, PlanStatus.FINISHED, PlanStatus.UNREACHABLE)


class PlanAPIClient(BaseAPIClient):
    """Client for the plan phase of runs."""

    async def read(self, plan_id: str) -> Plan:
        return await self._connector.call_api(
            RequestMethod.GET,
            "plans/{plan_id}",
            path_params={"plan_id": require_id("plan_id", plan_id)},
            response_types_map={"200": Plan},
        )

    async def logs(self, plan_id: str) -> LogReader:
        """Stream the logs of a plan.

        :param plan_id: The plan ID.

        :return: A log reader, which yields chunks of the log until the plan has finished.

        :raises ClientValueError: If the plan does not have a log read URL.
        """
        plan = await self.read(plan_id)
        if not plan.log_read_url:
            raise ClientValueError(f"plan {plan_id} does not have a log URL")

        async def done() -> bool:
            current = await self.read(plan_id)
            return current.status in _LOGS_COMPLETE

        return LogReader(self._connector, plan.log_read_url, done)

    async def read_json_output(self, plan_id: str) -> bytes:
        """Read the JSON execution plan.

        Requires admin access to the workspace.

        :param plan_id: The plan ID.

        :return: The JSON document, as produced by `terraform show -json`.
        """
        return await self._download(
            "plans/{plan_id}/json-output",
            path_params={"plan_id": require_id("plan_id", plan_id)},
        )
