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

import io
import tarfile
import tempfile
from pathlib import Path

from tfe.common import HTTPHeaderDict, RequestMethod
from tfe.common.exceptions import InvalidValueError
from tfe.common.test_tools import MockResponse, TestWithConnector, jsonapi_response
from tfe.configuration_versions import (
    ConfigurationSource,
    ConfigurationStatus,
    ConfigurationVersionAPIClient,
    ConfigurationVersionCreateOptions,
    ConfigurationVersionListOptions,
)

WORKSPACE_ID = "ws-SihZTyXKfNXUWuUa"
CV_ID = "cv-ntv3HbhJqvFzamy7"
UPLOAD_URL = "https://archivist.localhost/v1/object/upload"


def _cv_content(status: str = "pending") -> str:
    return jsonapi_response(
        {
            "id": CV_ID,
            "type": "configuration-versions",
            "attributes": {
                "auto-queue-runs": False,
                "source": "tfe-api",
                "speculative": True,
                "status": status,
                "upload-url": UPLOAD_URL,
            },
        }
    )


class TestConfigurationVersionClient(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.cv_client = ConfigurationVersionAPIClient(self.connector)

    async def test_list(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response([])):
            await self.cv_client.list(WORKSPACE_ID, ConfigurationVersionListOptions(page_number=2))
        self.assert_request_made(
            RequestMethod.GET, f"workspaces/{WORKSPACE_ID}/configuration-versions?page%5Bnumber%5D=2"
        )

    async def test_create(self) -> None:
        with self.transport.set_http_response(201, _cv_content()):
            cv = await self.cv_client.create(
                WORKSPACE_ID, ConfigurationVersionCreateOptions(auto_queue_runs=False, speculative=True)
            )
        self.assert_request_made(
            RequestMethod.POST,
            f"workspaces/{WORKSPACE_ID}/configuration-versions",
            body={
                "data": {
                    "type": "configuration-versions",
                    "attributes": {"auto-queue-runs": False, "speculative": True},
                }
            },
        )
        self.assertEqual(UPLOAD_URL, cv.upload_url)
        self.assertEqual(ConfigurationStatus.PENDING, cv.status)
        self.assertEqual(ConfigurationSource.API, cv.source)

    async def test_create_without_options(self) -> None:
        with self.transport.set_http_response(201, _cv_content()):
            await self.cv_client.create(WORKSPACE_ID)
        self.assert_request_made(
            RequestMethod.POST,
            f"workspaces/{WORKSPACE_ID}/configuration-versions",
            body={"data": {"type": "configuration-versions", "attributes": {}}},
        )

    async def test_read(self) -> None:
        with self.transport.set_http_response(200, _cv_content("uploaded")):
            cv = await self.cv_client.read(CV_ID)
        self.assert_request_made(RequestMethod.GET, f"configuration-versions/{CV_ID}")
        self.assertEqual(ConfigurationStatus.UPLOADED, cv.status)

    async def test_read_invalid_id(self) -> None:
        with self.assertRaises(InvalidValueError):
            await self.cv_client.read("")
        self.transport.assert_no_requests()

    async def test_upload(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "main.tf").write_text("terraform {}\n")
            with self.transport.set_http_response(200):
                await self.cv_client.upload(UPLOAD_URL, tmp)

        self.transport.assert_n_requests_made(1)
        kwargs = self.transport.request.call_args.kwargs
        self.assertEqual(RequestMethod.PUT, kwargs["method"])
        self.assertEqual(UPLOAD_URL, kwargs["url"])
        self.assertEqual(HTTPHeaderDict({"Content-Type": "application/octet-stream"}), kwargs["headers"])
        with tarfile.open(fileobj=io.BytesIO(kwargs["body"]), mode="r:gz") as archive:
            self.assertEqual(["main.tf"], archive.getnames())

    async def test_upload_tar_gzip(self) -> None:
        with self.transport.set_http_response(200):
            await self.cv_client.upload_tar_gzip(UPLOAD_URL, b"\x1f\x8b archive")
        self.transport.assert_request_made(
            RequestMethod.PUT,
            UPLOAD_URL,
            headers=HTTPHeaderDict({"Content-Type": "application/octet-stream"}),
            body=b"\x1f\x8b archive",
        )

    async def test_archive(self) -> None:
        with self.transport.set_http_response(202):
            await self.cv_client.archive(CV_ID)
        self.assert_request_made(RequestMethod.POST, f"configuration-versions/{CV_ID}/actions/archive")

    async def test_download(self) -> None:
        self.transport.request.side_effect = [
            MockResponse(status_code=302, headers={"Location": "/_archivist/v1/object/cv"}),
            MockResponse(status_code=200, body=b"\x1f\x8b archive"),
        ]
        self.assertEqual(b"\x1f\x8b archive", await self.cv_client.download(CV_ID))
        self.assert_any_request_made(RequestMethod.GET, f"configuration-versions/{CV_ID}/download")
        self.transport.assert_request_made(
            RequestMethod.GET, "http://unittest.localhost/_archivist/v1/object/cv", headers=HTTPHeaderDict()
        )
