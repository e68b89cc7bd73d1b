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

import asyncio
import random
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from tfe.logging import getLogger

__all__ = ["await_status", "poll_interval"]

logger = getLogger("polling")

_T = TypeVar("_T")


def poll_interval(minimum: float, maximum: float, attempt: int) -> float:
    """Exponential backoff between two bounds, with jitter.

    The delay doubles with every attempt, starting from `minimum`, and never exceeds `maximum`. Up to 10% of the delay
    is added as jitter, unless that would exceed the maximum.

    :param minimum: The first delay, in seconds.
    :param maximum: The largest delay, in seconds.
    :param attempt: The 0-based attempt number.

    :return: The delay, in seconds.
    """
    delay = min(maximum, minimum * 2 ** min(attempt, 32))
    jitter = delay * random.uniform(0, 0.1)
    return min(maximum, delay + jitter)


async def await_status(
    read: Callable[[], Awaitable[_T]],
    status_of: Callable[[_T], str | None],
    is_terminal: Callable[[str | None], bool],
    minimum: float = 3.0,
    maximum: float = 5.0,
) -> AsyncIterator[_T]:
    """Poll a resource until it reaches a terminal status.

    The resource is yielded whenever its status changes, including the first read. Iteration stops after a resource
    with a terminal status has been yielded. Wrap the iteration in a timeout to stop waiting after a deadline.

    :param read: Reads the current state of the resource.
    :param status_of: Gets the status of the resource.
    :param is_terminal: Whether a status is terminal.
    :param minimum: The shortest delay between reads, in seconds.
    :param maximum: The longest delay between reads, in seconds.

    :return: An async iterator over the resource, each time its status changes.
    """
    last_status: str | None = None
    attempt = 0
    while True:
        resource = await read()
        status = status_of(resource)
        if attempt == 0 or status != last_status:
            logger.debug(f"Status changed to {status!r}")
            last_status = status
            yield resource
        if is_terminal(status):
            return
        await asyncio.sleep(poll_interval(minimum, maximum, attempt))
        attempt += 1
