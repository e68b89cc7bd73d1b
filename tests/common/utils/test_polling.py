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

import unittest
from unittest import mock

from tfe.common.utils import await_status, poll_interval


class _Job:
    def __init__(self, status: str) -> None:
        self.status = status


class TestPollInterval(unittest.TestCase):
    def test_first_interval_is_minimum_with_jitter(self) -> None:
        for _ in range(20):
            delay = poll_interval(1.0, 10.0, 0)
            self.assertGreaterEqual(delay, 1.0)
            self.assertLessEqual(delay, 1.1)

    def test_interval_doubles(self) -> None:
        delay = poll_interval(1.0, 100.0, 3)
        self.assertGreaterEqual(delay, 8.0)
        self.assertLessEqual(delay, 8.8)

    def test_interval_is_bounded(self) -> None:
        self.assertEqual(5.0, poll_interval(1.0, 5.0, 10))
        self.assertEqual(5.0, poll_interval(1.0, 5.0, 1000))


class TestAwaitStatus(unittest.IsolatedAsyncioTestCase):
    def _reader(self, *statuses: str) -> mock.AsyncMock:
        return mock.AsyncMock(side_effect=[_Job(status) for status in statuses])

    @mock.patch("asyncio.sleep", spec_set=True)
    async def test_yields_on_status_change(self, mock_sleep: mock.MagicMock) -> None:
        read = self._reader("pending", "pending", "running", "running", "finished")
        seen = [
            job.status
            async for job in await_status(read, lambda job: job.status, lambda status: status == "finished")
        ]

        self.assertEqual(["pending", "running", "finished"], seen)
        self.assertEqual(5, read.await_count)
        self.assertEqual(4, mock_sleep.call_count)

    @mock.patch("asyncio.sleep", spec_set=True)
    async def test_terminal_on_first_read(self, mock_sleep: mock.MagicMock) -> None:
        read = self._reader("errored")
        seen = [job async for job in await_status(read, lambda job: job.status, lambda status: status == "errored")]

        self.assertEqual(1, len(seen))
        mock_sleep.assert_not_called()

    @mock.patch("asyncio.sleep", spec_set=True)
    async def test_delays_are_bounded(self, mock_sleep: mock.MagicMock) -> None:
        read = self._reader(*(["queued"] * 10), "done")
        async for _ in await_status(read, lambda job: job.status, lambda s: s == "done", minimum=0.5, maximum=2.0):
            pass

        for call in mock_sleep.call_args_list:
            self.assertGreaterEqual(call.args[0], 0.5)
            self.assertLessEqual(call.args[0], 2.0)

    async def test_read_errors_propagate(self) -> None:
        read = mock.AsyncMock(side_effect=RuntimeError("boom"))
        with self.assertRaises(RuntimeError):
            async for _ in await_status(read, lambda job: job.status, lambda status: True):
                pass
