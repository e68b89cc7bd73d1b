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

from tfe import logging
from tfe.common import BaseAPIClient, Page, RequestMethod
from tfe.common.utils import await_status, require_id

from .data import PolicyCheck, PolicyCheckListOptions, PolicyStatus

logger = logging.getLogger("policies.checks")

__all__ = ["PolicyCheckAPIClient"]

_WAITING = frozenset({PolicyStatus.PENDING, PolicyStatus.QUEUED})


class PolicyCheckAPIClient(BaseAPIClient):
    """Client for the policy checks of a run."""

    async def list(self, run_id: str, options: PolicyCheckListOptions | None = None) -> Page[PolicyCheck]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "runs/{run_id}/policy-checks",
            path_params={"run_id": require_id("run_id", run_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[PolicyCheck]},
        )

    async def read(self, policy_check_id: str) -> PolicyCheck:
        return await self._connector.call_api(
            RequestMethod.GET,
            "policy-checks/{policy_check_id}",
            path_params={"policy_check_id": require_id("policy_check_id", policy_check_id)},
            response_types_map={"200": PolicyCheck},
        )

    async def override(self, policy_check_id: str) -> PolicyCheck:
        """Override a soft-mandatory policy failure, so that the run can continue."""
        return await self._connector.call_api(
            RequestMethod.POST,
            "policy-checks/{policy_check_id}/actions/override",
            path_params={"policy_check_id": require_id("policy_check_id", policy_check_id)},
            response_types_map={"200": PolicyCheck},
        )

    async def logs(self, policy_check_id: str, minimum: float = 1.0, maximum: float = 5.0) -> bytes:
        """Get the output of a policy check.

        Policy check output is not streamed. This waits until the check has left the pending and queued statuses, then
        reads the whole output.

        :param policy_check_id: The policy check ID.
        :param minimum: The shortest delay between status checks, in seconds.
        :param maximum: The longest delay between status checks, in seconds.

        :return: The output of the policy check.
        """
        require_id("policy_check_id", policy_check_id)
        async for check in await_status(
            lambda: self.read(policy_check_id),
            lambda check: check.status,
            lambda status: status not in _WAITING,
            minimum=minimum,
            maximum=maximum,
        ):
            logger.debug(f"Policy check {policy_check_id} is {check.status}")

        return await self._download(
            "policy-checks/{policy_check_id}/output",
            path_params={"policy_check_id": policy_check_id},
        )
