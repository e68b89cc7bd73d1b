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

"""Streaming of plan and apply logs.

Logs are read in chunks from the log read URL of a plan or apply, which is a pre-signed archivist URL. Terraform
wraps its output in the STX and ETX control characters, which tell the reader when the log stream is
complete. Logs produced by older versions of Terraform do not have these markers, in which case the status of the
plan or apply is used instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from tfe import logging
from tfe.common import APIConnector

__all__ = ["DEFAULT_CHUNK_SIZE", "LogReader", "backoff"]

logger = logging.getLogger("runs.logs")

DEFAULT_CHUNK_SIZE = 65536

_STX = b"\x02"
_ETX = b"\x03"


def backoff(minimum: float, maximum: float, attempt: int) -> float:
    """Exponential backoff that doubles every 5 attempts, bounded by `maximum`.

    :param minimum: The first delay, in seconds.
    :param maximum: The largest delay, in seconds.
    :param attempt: The number of empty reads so far.

    :return: The delay, in seconds.
    """
    return min(maximum, minimum * 2 ** (attempt / 5))


class LogReader:
    """Async iterator over the chunks of a log.

    Each iteration returns the next non-empty chunk. When the log has no new content, the reader waits and polls
    again, until either new content arrives or the log is complete. Markers are returned as part of the log content.

    Usage::
        reader = await client.plans.logs(plan_id)
        async for chunk in reader:
            sys.stdout.buffer.write(chunk)
    """

    def __init__(
        self,
        connector: APIConnector,
        log_url: str,
        done: Callable[[], Awaitable[bool]],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """
        :param connector: The connector used to read from the log URL.
        :param log_url: The log read URL of a plan or apply.
        :param done: Checks whether the plan or apply has finished, which means the log will not grow any more.
        :param chunk_size: The maximum number of bytes to request at once.
        """
        self._connector = connector
        self._log_url = log_url
        self._done = done
        self._chunk_size = chunk_size
        self._offset = 0
        self._reads = 0
        self._start_of_text = False
        self._end_of_text = False
        self._finished = False

    def __aiter__(self) -> LogReader:
        return self

    async def __anext__(self) -> bytes:
        if self._finished:
            raise StopAsyncIteration

        chunk = await self._read()
        if chunk == b"":
            self._reads = 1
            while True:
                await asyncio.sleep(backoff(0.5, 2.0, self._reads))
                chunk = await self._read()
                if chunk != b"":
                    break
                self._reads += 1

        if chunk is None:
            self._finished = True
            raise StopAsyncIteration
        return chunk

    def _should_check_done(self) -> bool:
        if self._start_of_text and self._end_of_text:
            # The log stream finished without issues.
            return True
        if self._start_of_text:
            # The log stream may have terminated unexpectedly.
            return self._reads % 10 == 0
        # The log stream does not have markers.
        return self._reads > 1

    async def _read(self) -> bytes | None:
        """Read the next chunk.

        :return: The chunk, an empty byte string if there was no progress, or None if the log is complete.
        """
        chunk = await self._connector.get_object(
            self._log_url, query_params={"limit": self._chunk_size, "offset": self._offset}
        )
        if not chunk:
            if self._should_check_done() and await self._done():
                logger.debug(f"Finished reading {self._offset} bytes of logs")
                return None
            return b""

        self._offset += len(chunk)
        if not self._start_of_text and chunk.startswith(_STX):
            self._start_of_text = True
        if not self._end_of_text and chunk.endswith(_ETX):
            self._end_of_text = True
        return chunk

    async def read_all(self) -> bytes:
        """Read the whole log, waiting until it is complete.

        :return: The log content.
        """
        return b"".join([chunk async for chunk in self])
