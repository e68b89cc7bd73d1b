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

from .data import CostEstimate, CostEstimateStatus
from .logs import LogReader

__all__ = ["CostEstimateAPIClient"]

_LOGS_COMPLETE = (
    CostEstimateStatus.CANCELED,
    CostEstimateStatus.ERRORED,
    CostEstimateStatus.FINISHED,
    CostEstimateStatus.SKIPPED_DUE_TO_TARGETING,
)


class CostEstimateAPIClient(BaseAPIClient):
    """Client for the cost estimation phase of runs."""

    async def read(self, cost_estimate_id: str) -> CostEstimate:
        return await self._connector.call_api(
            RequestMethod.GET,
            "cost-estimates/{cost_estimate_id}",
            path_params={"cost_estimate_id": require_id("cost_estimate_id", cost_estimate_id)},
            response_types_map={"200": CostEstimate},
        )

    async def logs(self, cost_estimate_id: str) -> LogReader:
        """Stream the logs of a cost estimate.

        :param cost_estimate_id: The cost estimate ID.

        :return: A log reader, which yields chunks of the log until the cost estimate has finished.

        :raises ClientValueError: If the cost estimate does not have a log read URL.
        """
        cost_estimate = await self.read(cost_estimate_id)
        if not cost_estimate.log_read_url:
            raise ClientValueError(f"cost estimate {cost_estimate_id} does not have a log URL")

        async def done() -> bool:
            current = await self.read(cost_estimate_id)
            return current.status in _LOGS_COMPLETE

        return LogReader(self._connector, cost_estimate.log_read_url, done)
