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

from .data import Apply, ApplyStatus
from .logs import LogReader

__all__ = ["ApplyAPIClient"]

_LOGS_COMPLETE = (ApplyStatus.CANCELED, ApplyStatus.ERRORED, ApplyStatus.FINISHED, ApplyStatus.UNREACHABLE)


class ApplyAPIClient(BaseAPIClient):
    """Client for the apply phase of runs."""

    async def read(self, apply_id: str) -> Apply:
        return await self._connector.call_api(
            RequestMethod.GET,
            "applies/{apply_id}",
            path_params={"apply_id": require_id("apply_id", apply_id)},
            response_types_map={"200": Apply},
        )

    async def logs(self, apply_id: str) -> LogReader:
        """Stream the logs of an apply.

        :param apply_id: The apply ID.

        :return: A log reader, which yields chunks of the log until the apply has finished.

        :raises ClientValueError: If the apply does not have a log read URL.
        """
        apply = await self.read(apply_id)
        if not apply.log_read_url:
            raise ClientValueError(f"apply {apply_id} does not have a log URL")

        async def done() -> bool:
            current = await self.read(apply_id)
            return current.status in _LOGS_COMPLETE

        return LogReader(self._connector, apply.log_read_url, done)
