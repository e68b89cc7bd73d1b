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

import math
import os
import unittest
from unittest import mock

from tfe.client import DEFAULT_ADDRESS, Config, TFEClient
from tfe.common import RequestMethod
from tfe.common.exceptions import ClientValueError, UnauthorizedException
from tfe.common.test_tools import TestTransport

ADDRESS = "http://unittest.localhost"
TOKEN = "<not-a-real-token>"


class TestConfig(unittest.TestCase):
    def test_default_address(self) -> None:
        config = Config(token=TOKEN)
        self.assertEqual(DEFAULT_ADDRESS, config.address)
        self.assertEqual("https://app.terraform.io/api/v2/", config.base_url)

    def test_base_url_joins_address_and_path(self) -> None:
        for address, base_path in [
            ("https://tfe.example.com", "/api/v2/"),
            ("https://tfe.example.com/", "api/v2"),
            ("https://tfe.example.com//", "/api/v2"),
        ]:
            with self.subTest(address=address, base_path=base_path):
                config = Config(address=address, base_path=base_path)
                self.assertEqual("https://tfe.example.com/api/v2/", config.base_url)

    def test_from_env(self) -> None:
        env = {"TFE_ADDRESS": "https://tfe.example.com", "TFE_TOKEN": "env-token"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        self.assertEqual("https://tfe.example.com", config.address)
        self.assertEqual("env-token", config.token)

    def test_from_env_overrides(self) -> None:
        env = {"TFE_ADDRESS": "https://tfe.example.com", "TFE_TOKEN": "env-token"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = Config.from_env(token="explicit-token")
        self.assertEqual("https://tfe.example.com", config.address)
        self.assertEqual("explicit-token", config.token)

    def test_from_env_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        self.assertEqual(DEFAULT_ADDRESS, config.address)
        self.assertIsNone(config.token)


class TestTFEClient(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.transport = TestTransport()
        self.config = Config(address=ADDRESS, token=TOKEN, headers={"X-Custom": "value"})
        self.client = TFEClient(self.config, transport=self.transport)

    def test_missing_token(self) -> None:
        with self.assertRaises(ClientValueError):
            TFEClient(Config(address=ADDRESS), transport=self.transport)

    def test_missing_token_from_env(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True), self.assertRaises(ClientValueError):
            TFEClient(transport=self.transport)

    def test_connector_is_shared(self) -> None:
        self.assertEqual("http://unittest.localhost/api/v2/", self.client.connector.base_url)
        self.assertIs(self.client.connector, self.client.workspaces._connector)
        self.assertIs(self.client.connector, self.client.runs._connector)
        self.assertIs(self.client.connector, self.client.meta.ip_ranges._connector)

    async def test_ping(self) -> None:
        headers = {
            "TFP-API-Version": "2.6",
            "X-TFE-Version": "v202310-1",
            "TFP-AppName": "Terraform Enterprise",
            "X-RateLimit-Limit": "30",
        }
        with self.transport.set_http_response(204, headers=headers):
            await self.client.ping()

        self.transport.assert_request_made(
            RequestMethod.GET,
            "ping",
            headers={
                "Authorization": f"Bearer {TOKEN}",
                "Accept": "application/vnd.api+json",
                "X-Custom": "value",
            },
        )
        self.assertEqual("2.6", self.client.remote_api_version)
        self.assertEqual("v202310-1", self.client.remote_tfe_version)
        self.assertEqual("Terraform Enterprise", self.client.app_name)
        self.assertTrue(self.client.is_enterprise())
        self.assertFalse(self.client.is_cloud())

        limiter = self.client.connector.rate_limiter
        self.assertFalse(limiter.unlimited)
        self.assertAlmostEqual(19.8, limiter.rate)
        self.assertEqual(9, limiter.burst)

    async def test_ping_cloud(self) -> None:
        with self.transport.set_http_response(204, headers={"TFP-API-Version": "2.6", "TFP-AppName": "HCP Terraform"}):
            await self.client.ping()

        self.assertIsNone(self.client.remote_tfe_version)
        self.assertTrue(self.client.is_cloud())
        self.assertFalse(self.client.is_enterprise())
        self.assertTrue(self.client.connector.rate_limiter.unlimited)
        self.assertTrue(math.isinf(self.client.connector.rate_limiter.rate))

    def test_application_unknown_before_ping(self) -> None:
        self.assertIsNone(self.client.app_name)
        self.assertFalse(self.client.is_cloud())
        self.assertFalse(self.client.is_enterprise())

    async def test_context_manager(self) -> None:
        with self.transport.set_http_response(204, headers={"TFP-AppName": "Terraform Cloud"}):
            async with self.client as client:
                self.assertIs(self.client, client)
                self.transport.open.assert_awaited()
                self.transport.assert_n_requests_made(1)
                self.assertTrue(client.is_cloud())
        self.assertEqual(self.transport.open.await_count, self.transport.close.await_count)

    async def test_context_manager_closes_on_ping_error(self) -> None:
        with self.transport.set_http_response(401, '{"errors": [{"status": "401", "title": "unauthorized"}]}'):
            with self.assertRaises(UnauthorizedException):
                async with self.client:
                    self.fail("Should not enter the client")
        self.transport.assert_n_requests_made(1)
        self.assertEqual(self.transport.open.await_count, self.transport.close.await_count)
