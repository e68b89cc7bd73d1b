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

import json
from datetime import datetime, timedelta, timezone

from tfe.common import RequestMethod
from tfe.common.test_tools import TestWithConnector
from tfe.meta import IPRange, MetaAPIClient

IP_RANGES_URL = "http://unittest.localhost/api/meta/ip-ranges"
IP_RANGES = {
    "api": ["75.2.98.97/32", "99.83.150.238/32"],
    "notifications": ["52.86.200.106/32"],
    "sentinel": ["52.86.200.106/32"],
    "vcs": ["52.86.200.106/32", "52.86.201.227/32"],
}


class TestIPRangeClient(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.meta_client = MetaAPIClient(self.connector)

    async def test_read(self) -> None:
        with self.transport.set_http_response(200, json.dumps(IP_RANGES)):
            ip_ranges = await self.meta_client.ip_ranges.read()
        self.assert_request_made(RequestMethod.GET, IP_RANGES_URL, headers={"Accept": "application/json"})
        self.assertEqual(IPRange(**IP_RANGES), ip_ranges)

    async def test_read_modified_since(self) -> None:
        with self.transport.set_http_response(200, json.dumps(IP_RANGES)):
            await self.meta_client.ip_ranges.read(datetime(2023, 8, 1, 12, 0, tzinfo=timezone.utc))
        self.assert_request_made(
            RequestMethod.GET,
            IP_RANGES_URL,
            headers={"Accept": "application/json", "If-Modified-Since": "Tue, 01 Aug 2023 12:00:00 GMT"},
        )

    async def test_read_modified_since_is_sent_in_utc(self) -> None:
        modified_since = datetime(2023, 8, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        with self.transport.set_http_response(200, json.dumps(IP_RANGES)):
            await self.meta_client.ip_ranges.read(modified_since)
        self.assert_request_made(
            RequestMethod.GET,
            IP_RANGES_URL,
            headers={"Accept": "application/json", "If-Modified-Since": "Tue, 01 Aug 2023 12:00:00 GMT"},
        )

    async def test_read_naive_datetime_is_utc(self) -> None:
        with self.transport.set_http_response(200, json.dumps(IP_RANGES)):
            await self.meta_client.ip_ranges.read(datetime(2023, 8, 1, 12, 0))
        self.assert_request_made(
            RequestMethod.GET,
            IP_RANGES_URL,
            headers={"Accept": "application/json", "If-Modified-Since": "Tue, 01 Aug 2023 12:00:00 GMT"},
        )

    async def test_read_not_modified(self) -> None:
        with self.transport.set_http_response(304):
            ip_ranges = await self.meta_client.ip_ranges.read(datetime(2023, 8, 1, 12, 0, tzinfo=timezone.utc))
        self.assertIsNone(ip_ranges)
