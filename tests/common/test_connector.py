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
from unittest import mock

from parameterized import parameterized
from pydantic import BaseModel

from tfe.common import BaseAPIClient, EmptyResponse, HTTPHeaderDict, HTTPResponse, RequestMethod
from tfe.common.exceptions import (
    BadRequestException,
    ClientValueError,
    ConflictException,
    ForbiddenException,
    InvalidIncludeValueError,
    NotFoundException,
    TFEAPIException,
    TooManyRequestsException,
    UnauthorizedException,
    UnknownResponseError,
    UnprocessableEntityException,
)
from tfe.common.test_tools import BASE_URL, MockResponse, TestWithConnector
from tfe.projects import Project, ProjectCreateOptions

DOWNLOAD_URL = "https://archivist.localhost/v1/object/dmF1bHQ6djE6"


class _PlainModel(BaseModel):
    value: str
    count: int | None = None


class TestAPIConnector(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.transport.request.return_value = MockResponse(status_code=200)

    async def test_call_api_manages_transport(self) -> None:
        self.transport.open.assert_not_called()
        self.transport.close.assert_not_called()
        await self.connector.call_api(RequestMethod.GET, "ping", response_types_map={"200": EmptyResponse})
        self.transport.open.assert_called_once()
        self.transport.close.assert_called_once()

    @parameterized.expand([(method,) for method in RequestMethod])
    async def test_request_method(self, method: RequestMethod) -> None:
        with self.transport.set_http_response(status_code=200, content='"success"'):
            result = await self.connector.call_api(method, "ping", response_types_map={"200": str})
        self.assertEqual("success", result)
        self.assert_request_made(method=method, path="ping")

    @parameterized.expand(
        [
            ("single param", "organizations/{organization}", {"organization": "hashicorp"}, "organizations/hashicorp"),
            (
                "multiple params",
                "organizations/{organization}/workspaces/{workspace}",
                {"organization": "hashicorp", "workspace": "my-ws"},
                "organizations/hashicorp/workspaces/my-ws",
            ),
            ("reserved characters", "workspaces/{workspace_id}", {"workspace_id": "a/b c"}, "workspaces/a%2Fb%20c"),
            ("leading slash", "/organizations/{organization}", {"organization": "o"}, "organizations/o"),
        ]
    )
    async def test_path_params(self, _name: str, path: str, params: dict[str, str], expected_path: str) -> None:
        with self.transport.set_http_response(status_code=204):
            await self.connector.call_api(
                RequestMethod.GET, path, path_params=params, response_types_map={"204": EmptyResponse}
            )
        self.assert_request_made(RequestMethod.GET, expected_path)

    @parameterized.expand(
        [
            ("bracketed keys", {"page[number]": 2, "page[size]": 50}, "page%5Bnumber%5D=2&page%5Bsize%5D=50"),
            (
                "lists are comma separated",
                {"include": ["organization", "current_run"]},
                "include=organization%2Ccurrent_run",
            ),
            ("booleans are lowercase", {"force": True, "safe": False}, "force=true&safe=false"),
        ]
    )
    async def test_query_params(self, _name: str, params: dict, expected_query: str) -> None:
        with self.transport.set_http_response(status_code=204):
            await self.connector.call_api(
                RequestMethod.GET, "runs", query_params=params, response_types_map={"204": EmptyResponse}
            )
        self.assert_request_made(RequestMethod.GET, "runs?" + expected_query)

    async def test_empty_query_params_are_omitted(self) -> None:
        with self.transport.set_http_response(status_code=204):
            await self.connector.call_api(
                RequestMethod.GET, "runs", query_params={}, response_types_map={"204": EmptyResponse}
            )
        self.assert_request_made(RequestMethod.GET, "runs")

    async def test_absolute_url_is_used_as_is(self) -> None:
        with self.transport.set_http_response(status_code=200, content="{}"):
            await self.connector.call_api(
                RequestMethod.GET, "https://other.localhost/api/meta/ip-ranges", response_types_map={"200": dict}
            )
        self.transport.request.assert_called_once()
        self.assertEqual("https://other.localhost/api/meta/ip-ranges", self.transport.request.call_args.kwargs["url"])

    async def test_accept_header_can_be_overridden(self) -> None:
        with self.transport.set_http_response(status_code=200, content="{}"):
            await self.connector.call_api(
                RequestMethod.GET,
                "ping",
                header_params={"Accept": "application/json"},
                response_types_map={"200": dict},
            )
        self.assert_request_made(RequestMethod.GET, "ping", headers={"Accept": "application/json"})

    async def test_header_params_list_is_comma_joined(self) -> None:
        with self.transport.set_http_response(status_code=204):
            await self.connector.call_api(
                RequestMethod.GET,
                "ping",
                header_params={"X-Values": ["a", "b"]},
                response_types_map={"204": EmptyResponse},
            )
        self.assert_request_made(RequestMethod.GET, "ping", headers={"X-Values": "a,b"})

    async def test_options_body_is_marshalled(self) -> None:
        content = json.dumps({"data": {"id": "prj-1", "type": "projects"}})
        with self.transport.set_http_response(status_code=201, content=content):
            project = await self.connector.call_api(
                RequestMethod.POST,
                "organizations/hashicorp/projects",
                body=ProjectCreateOptions(name="infra"),
                response_types_map={"201": Project},
            )
        self.assertEqual(Project(id="prj-1"), project)
        self.assert_request_made(
            RequestMethod.POST,
            "organizations/hashicorp/projects",
            body={"data": {"type": "projects", "attributes": {"name": "infra"}}},
        )

    async def test_plain_model_body_excludes_unset_fields(self) -> None:
        with self.transport.set_http_response(status_code=204):
            await self.connector.call_api(
                RequestMethod.POST,
                "runs/run-1/actions/apply",
                body=_PlainModel(value="x"),
                response_types_map={"204": EmptyResponse},
            )
        self.assert_request_made(RequestMethod.POST, "runs/run-1/actions/apply", body={"value": "x"})

    async def test_bytes_body_is_sent_as_octet_stream(self) -> None:
        with self.transport.set_http_response(status_code=204):
            await self.connector.call_api(
                RequestMethod.PUT,
                "policies/pol-1/upload",
                body=b"main = rule { true }",
                response_types_map={"204": EmptyResponse},
            )
        self.assert_request_made(
            RequestMethod.PUT,
            "policies/pol-1/upload",
            headers={"Content-Type": "application/octet-stream"},
            body=b"main = rule { true }",
        )

    async def test_rate_limiter_is_acquired_for_each_call(self) -> None:
        with mock.patch.object(self.connector.rate_limiter, "acquire") as mock_acquire:
            with self.transport.set_http_response(status_code=204):
                for _ in range(3):
                    await self.connector.call_api(RequestMethod.GET, "ping", response_types_map={"204": EmptyResponse})
        self.assertEqual(3, mock_acquire.await_count)

    @parameterized.expand(
        [
            (400, BadRequestException),
            (401, UnauthorizedException),
            (403, ForbiddenException),
            (404, NotFoundException),
            (409, ConflictException),
            (418, TFEAPIException),
            (422, UnprocessableEntityException),
            (429, TooManyRequestsException),
            (500, TFEAPIException),
        ]
    )
    async def test_error_response(self, status: int, expected_type: type[TFEAPIException]) -> None:
        with self.transport.set_http_response(status_code=status, content='{"errors": [{"status": "x"}]}'):
            with self.assertRaises(expected_type) as cm:
                await self.connector.call_api(RequestMethod.GET, "ping", response_types_map={"200": dict})
        self.assertIs(expected_type, type(cm.exception))
        self.assertEqual(status, cm.exception.status)

    async def test_error_messages(self) -> None:
        content = {"errors": [{"status": "422", "title": "invalid attribute", "detail": "Name has already been taken"}]}
        with self.transport.set_http_response(status_code=422, content=json.dumps(content)):
            with self.assertRaises(UnprocessableEntityException) as cm:
                await self.connector.call_api(RequestMethod.POST, "organizations", response_types_map={"201": dict})
        self.assertEqual(["invalid attribute\n\nName has already been taken"], cm.exception.messages)
        self.assertEqual("invalid attribute\n\nName has already been taken", str(cm.exception))

    async def test_not_found_without_messages(self) -> None:
        with self.transport.set_http_response(status_code=404, reason="Not Found"):
            with self.assertRaises(NotFoundException) as cm:
                await self.connector.call_api(RequestMethod.GET, "organizations/nope", response_types_map={"200": dict})
        self.assertEqual("resource not found", str(cm.exception))

    async def test_invalid_include_value(self) -> None:
        content = {
            "errors": [
                {
                    "status": "400",
                    "title": "Invalid include parameter",
                    "detail": "Invalid include parameter: 'nope' is not a valid include",
                }
            ]
        }
        with self.transport.set_http_response(status_code=400, content=json.dumps(content)):
            with self.assertRaises(InvalidIncludeValueError) as cm:
                await self.connector.call_api(
                    RequestMethod.GET, "runs/run-1", query_params={"include": "nope"}, response_types_map={"200": dict}
                )
        self.assertIsInstance(cm.exception, BadRequestException)

    async def test_unmapped_success_status(self) -> None:
        with self.transport.set_http_response(status_code=202):
            with self.assertRaises(UnknownResponseError):
                await self.connector.call_api(RequestMethod.POST, "runs", response_types_map={"201": dict})

    async def test_unexpected_content_for_empty_response(self) -> None:
        with self.transport.set_http_response(status_code=204, content='{"data": null}'):
            with self.assertRaises(ClientValueError):
                await self.connector.call_api(
                    RequestMethod.DELETE, "runs/run-1", response_types_map={"204": EmptyResponse}
                )

    async def test_raw_response(self) -> None:
        with self.transport.set_http_response(status_code=200, headers={"X-TFE-Version": "v202401-1"}):
            response = await self.connector.call_api(
                RequestMethod.GET, "ping", response_types_map={"200": HTTPResponse}
            )
        self.assertEqual("v202401-1", response.getheader("X-TFE-Version"))

    async def test_unauthorized_without_refresh(self) -> None:
        with self.transport.set_http_response(status_code=401):
            with self.assertRaises(UnauthorizedException) as cm:
                await self.connector.call_api(RequestMethod.GET, "ping", response_types_map={"200": dict})
        self.authorizer.refresh_token.assert_awaited_once()
        self.transport.assert_n_requests_made(1)
        self.assertEqual("unauthorized", str(cm.exception))

    async def test_refresh_on_auth_error(self) -> None:
        self.authorizer.set_next_access_token("<new-token>")
        self.transport.request.side_effect = [
            MockResponse(status_code=401),
            MockResponse(status_code=200, content="{}"),
        ]
        result = await self.connector.call_api(RequestMethod.GET, "ping", response_types_map={"200": dict})
        self.assertEqual({}, result)
        self.transport.assert_n_requests_made(2)
        self.assert_request_made(RequestMethod.GET, "ping", headers={"Authorization": "Bearer <new-token>"})


class TestRawTransfers(TestWithConnector):
    async def test_get_object_sends_no_authorization(self) -> None:
        with self.transport.set_http_response(status_code=200, content="log content"):
            data = await self.connector.get_object(DOWNLOAD_URL, query_params={"limit": 10, "offset": 0})
        self.assertEqual(b"log content", data)
        self.transport.request.assert_called_once_with(
            method=RequestMethod.GET,
            url=DOWNLOAD_URL + "?limit=10&offset=0",
            headers=HTTPHeaderDict(),
            body=None,
            request_timeout=None,
        )

    async def test_get_object_requires_absolute_url(self) -> None:
        with self.assertRaises(ClientValueError):
            await self.connector.get_object("v1/object/abc")
        self.transport.assert_no_requests()

    async def test_get_object_error(self) -> None:
        with self.transport.set_http_response(status_code=404):
            with self.assertRaises(NotFoundException):
                await self.connector.get_object(DOWNLOAD_URL)

    async def test_put_object(self) -> None:
        with self.transport.set_http_response(status_code=200):
            await self.connector.put_object(DOWNLOAD_URL, b"\x1f\x8b")
        self.transport.request.assert_called_once_with(
            method=RequestMethod.PUT,
            url=DOWNLOAD_URL,
            headers=HTTPHeaderDict({"Content-Type": "application/octet-stream"}),
            body=b"\x1f\x8b",
            request_timeout=None,
        )

    async def test_put_object_error(self) -> None:
        with self.transport.set_http_response(status_code=403):
            with self.assertRaises(ForbiddenException):
                await self.connector.put_object(DOWNLOAD_URL, b"")

    async def test_download_follows_redirect(self) -> None:
        self.transport.request.side_effect = [
            MockResponse(status_code=307, headers={"Location": DOWNLOAD_URL}),
            MockResponse(status_code=200, body=b"content"),
        ]
        data = await BaseAPIClient(self.connector)._download("policies/{policy_id}/download", {"policy_id": "pol-1"})

        self.assertEqual(b"content", data)
        self.assert_any_request_made(RequestMethod.GET, "policies/pol-1/download")
        self.transport.request.assert_called_with(
            method=RequestMethod.GET,
            url=DOWNLOAD_URL,
            headers=HTTPHeaderDict(),
            body=None,
            request_timeout=None,
        )

    async def test_download_relative_redirect(self) -> None:
        self.transport.request.side_effect = [
            MockResponse(status_code=302, headers={"Location": "/_archivist/v1/object/abc"}),
            MockResponse(status_code=200, body=b"content"),
        ]
        await BaseAPIClient(self.connector)._download("plans/plan-1/json-output")

        self.assertEqual(
            "http://unittest.localhost/_archivist/v1/object/abc", self.transport.request.call_args.kwargs["url"]
        )

    async def test_download_without_redirect(self) -> None:
        with self.transport.set_http_response(status_code=200, content="direct"):
            data = await BaseAPIClient(self.connector)._download("plans/plan-1/json-output")
        self.assertEqual(b"direct", data)
        self.transport.assert_n_requests_made(1)

    async def test_download_redirect_without_location(self) -> None:
        with self.transport.set_http_response(status_code=307):
            with self.assertRaises(ClientValueError):
                await BaseAPIClient(self.connector)._download("plans/plan-1/json-output")

    def test_base_url(self) -> None:
        self.assertEqual(BASE_URL, self.connector.base_url)
