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

import base64
import hashlib
import json
import unittest
from unittest import mock

from tfe.common import RequestMethod
from tfe.common.exceptions import NotFoundException, RequiredFieldError
from tfe.common.test_tools import ORG_NAME, MockResponse, TestWithConnector, jsonapi_response
from tfe.runs import Run
from tfe.state_versions import (
    StateVersionAPIClient,
    StateVersionCreateOptions,
    StateVersionListOptions,
    StateVersionOutputAPIClient,
    StateVersionReadOptions,
    StateVersionStatus,
)

WORKSPACE_ID = "ws-SihZTyXKfNXUWuUa"
SV_ID = "sv-DmoXecHePnNznaA4"
STATE = json.dumps({"version": 4, "serial": 3, "lineage": "b2b54b23", "outputs": {}}).encode()


def _sv_data(**attributes) -> dict:
    return {
        "id": SV_ID,
        "type": "state-versions",
        "attributes": {"serial": 3, "status": "finalized", "resources-processed": True, **attributes},
    }


class TestStateVersionCreateOptions(unittest.TestCase):
    def test_from_state(self) -> None:
        options = StateVersionCreateOptions.from_state(STATE, 3, lineage="b2b54b23")
        self.assertEqual(hashlib.md5(STATE).hexdigest(), options.md5)
        self.assertEqual(STATE, base64.b64decode(options.state))
        self.assertEqual(3, options.serial)
        self.assertEqual("b2b54b23", options.lineage)


class TestStateVersionClient(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.sv_client = StateVersionAPIClient(self.connector)

    async def test_list(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response([_sv_data()])):
            page = await self.sv_client.list(StateVersionListOptions(organization=ORG_NAME, workspace="my-ws"))
        self.assert_request_made(
            RequestMethod.GET,
            f"state-versions?filter%5Borganization%5D%5Bname%5D={ORG_NAME}&filter%5Bworkspace%5D%5Bname%5D=my-ws",
        )
        self.assertEqual([3], [sv.serial for sv in page])

    async def test_list_requires_organization_and_workspace(self) -> None:
        with self.assertRaises(RequiredFieldError):
            await self.sv_client.list(StateVersionListOptions(workspace="my-ws"))
        with self.assertRaises(RequiredFieldError):
            await self.sv_client.list(StateVersionListOptions(organization=ORG_NAME))
        self.transport.assert_no_requests()

    async def test_create(self) -> None:
        options = StateVersionCreateOptions.from_state(STATE, 3, run=Run(id="run-CZcmD7eagjhyX0vN"))
        with self.transport.set_http_response(201, jsonapi_response(_sv_data(status="pending"))):
            state_version = await self.sv_client.create(WORKSPACE_ID, options)
        self.assert_request_made(
            RequestMethod.POST,
            f"workspaces/{WORKSPACE_ID}/state-versions",
            body={
                "data": {
                    "type": "state-versions",
                    "attributes": {
                        "md5": hashlib.md5(STATE).hexdigest(),
                        "serial": 3,
                        "state": base64.b64encode(STATE).decode(),
                    },
                    "relationships": {"run": {"data": {"type": "runs", "id": "run-CZcmD7eagjhyX0vN"}}},
                }
            },
        )
        self.assertEqual(StateVersionStatus.PENDING, state_version.status)

    async def test_create_validation(self) -> None:
        cases = [
            StateVersionCreateOptions(serial=1, state="e30="),
            StateVersionCreateOptions(md5="abc", state="e30="),
            StateVersionCreateOptions(md5="abc", serial=1),
        ]
        for options in cases:
            with self.subTest(options=options):
                with self.assertRaises(RequiredFieldError):
                    await self.sv_client.create(WORKSPACE_ID, options)
        self.transport.assert_no_requests()

    async def test_read_with_outputs(self) -> None:
        content = jsonapi_response(
            {
                **_sv_data(),
                "relationships": {"outputs": {"data": [{"id": "wsout-1", "type": "state-version-outputs"}]}},
            },
            included=[
                {
                    "id": "wsout-1",
                    "type": "state-version-outputs",
                    "attributes": {"name": "ids", "sensitive": False, "type": "array", "value": ["a", "b"]},
                }
            ],
        )
        with self.transport.set_http_response(200, content):
            state_version = await self.sv_client.read_with_options(SV_ID, StateVersionReadOptions(include=["outputs"]))
        self.assert_request_made(RequestMethod.GET, f"state-versions/{SV_ID}?include=outputs")
        (output,) = state_version.outputs
        self.assertEqual(("ids", ["a", "b"]), (output.name, output.value))

    async def test_read_current(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response(_sv_data())):
            state_version = await self.sv_client.read_current(WORKSPACE_ID)
        self.assert_request_made(RequestMethod.GET, f"workspaces/{WORKSPACE_ID}/current-state-version")
        self.assertEqual(SV_ID, state_version.id)

    async def test_read_current_without_state(self) -> None:
        with self.transport.set_http_response(404):
            with self.assertRaises(NotFoundException):
                await self.sv_client.read_current(WORKSPACE_ID)

    async def test_download(self) -> None:
        url = "https://archivist.localhost/v1/object/state"
        with self.transport.set_http_response(200, STATE.decode()):
            self.assertEqual(STATE, await self.sv_client.download(url))
        self.assert_request_made(RequestMethod.GET, url, headers={"Accept": "application/json"})

    async def test_list_outputs(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response([])):
            await self.sv_client.list_outputs(SV_ID)
        self.assert_request_made(RequestMethod.GET, f"state-versions/{SV_ID}/outputs")

    @mock.patch("asyncio.sleep", spec_set=True)
    async def test_await_processed(self, mock_sleep: mock.AsyncMock) -> None:
        pending = jsonapi_response(_sv_data(status="pending", **{"resources-processed": False}))
        processed = jsonapi_response(_sv_data(status="pending", **{"resources-processed": True}))
        self.transport.request.side_effect = [
            MockResponse(status_code=200, content=pending),
            MockResponse(status_code=200, content=pending),
            MockResponse(status_code=200, content=processed),
        ]
        state_version = await self.sv_client.await_processed(SV_ID, minimum=0.1, maximum=0.1)

        self.assertTrue(state_version.resources_processed)
        self.transport.assert_n_requests_made(3)
        mock_sleep.assert_has_awaits([mock.call(0.1), mock.call(0.1)])


class TestStateVersionOutputClient(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.output_client = StateVersionOutputAPIClient(self.connector)

    async def test_read(self) -> None:
        content = jsonapi_response(
            {"id": "wsout-1", "type": "state-version-outputs", "attributes": {"name": "secret", "sensitive": True}}
        )
        with self.transport.set_http_response(200, content):
            output = await self.output_client.read("wsout-1")
        self.assert_request_made(RequestMethod.GET, "state-version-outputs/wsout-1")
        self.assertTrue(output.sensitive)
        self.assertIsNone(output.value)

    async def test_read_current(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response([])):
            await self.output_client.read_current(WORKSPACE_ID)
        self.assert_request_made(RequestMethod.GET, f"workspaces/{WORKSPACE_ID}/current-state-version-outputs")
