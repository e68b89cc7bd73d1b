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

from tfe.agent_pools import (
    AgentPool,
    AgentPoolAPIClient,
    AgentPoolCreateOptions,
    AgentPoolIncludeOpt,
    AgentPoolListOptions,
    AgentPoolReadOptions,
    AgentPoolUpdateOptions,
)
from tfe.common import RequestMethod
from tfe.common.exceptions import InvalidValueError, RequiredFieldError
from tfe.common.test_tools import ORG_NAME, TestWithConnector, jsonapi_response
from tfe.organizations import Organization
from tfe.projects import Project
from tfe.workspaces import Workspace

POOL_ID = "apool-yoGUFz5zcRMMz53i"
WORKSPACE_ID = "ws-SihZTyXKfNXUWuUa"
PROJECT_ID = "prj-7HWWPGY3fYxztELU"


def _pool(**relationships) -> dict:
    return {
        "id": POOL_ID,
        "type": "agent-pools",
        "attributes": {
            "name": "builders",
            "agent-count": 2,
            "organization-scoped": False,
            "created-at": "2024-02-01T08:30:00.000Z",
        },
        "relationships": {"organization": {"data": {"id": ORG_NAME, "type": "organizations"}}, **relationships},
    }


class TestAgentPoolClient(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.pool_client = AgentPoolAPIClient(self.connector)

    async def test_list(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response([_pool()])):
            page = await self.pool_client.list(
                ORG_NAME,
                AgentPoolListOptions(include=[AgentPoolIncludeOpt.WORKSPACES], allowed_workspaces_name="network"),
            )
        self.assert_request_made(
            RequestMethod.GET,
            f"organizations/{ORG_NAME}/agent-pools?include=workspaces&filter%5Ballowed_workspaces%5D%5Bname%5D=network",
        )
        self.assertEqual([POOL_ID], [pool.id for pool in page])

    async def test_create(self) -> None:
        options = AgentPoolCreateOptions(
            name="builders", organization_scoped=False, allowed_workspaces=[Workspace(id=WORKSPACE_ID)]
        )
        content = jsonapi_response(
            _pool(**{"allowed-workspaces": {"data": [{"id": WORKSPACE_ID, "type": "workspaces"}]}})
        )
        with self.transport.set_http_response(201, content):
            pool = await self.pool_client.create(ORG_NAME, options)
        self.assert_request_made(
            RequestMethod.POST,
            f"organizations/{ORG_NAME}/agent-pools",
            body={
                "data": {
                    "type": "agent-pools",
                    "attributes": {"name": "builders", "organization-scoped": False},
                    "relationships": {
                        "allowed-workspaces": {"data": [{"type": "workspaces", "id": WORKSPACE_ID}]}
                    },
                }
            },
        )
        self.assertEqual(2, pool.agent_count)
        self.assertEqual(Organization(id=ORG_NAME), pool.organization)
        self.assertEqual([Workspace(id=WORKSPACE_ID)], pool.allowed_workspaces)

    async def test_create_validation(self) -> None:
        with self.assertRaises(RequiredFieldError):
            await self.pool_client.create(ORG_NAME, AgentPoolCreateOptions())
        with self.assertRaises(InvalidValueError):
            await self.pool_client.create(ORG_NAME, AgentPoolCreateOptions(name="build pool"))
        self.transport.assert_no_requests()

    async def test_read_with_options(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response(_pool())):
            pool = await self.pool_client.read(POOL_ID, AgentPoolReadOptions(include=[AgentPoolIncludeOpt.WORKSPACES]))
        self.assert_request_made(RequestMethod.GET, f"agent-pools/{POOL_ID}?include=workspaces")
        self.assertIsInstance(pool, AgentPool)
        self.assertEqual("builders", pool.name)

    async def test_update(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response(_pool())):
            await self.pool_client.update(POOL_ID, AgentPoolUpdateOptions(organization_scoped=True))
        self.assert_request_made(
            RequestMethod.PATCH,
            f"agent-pools/{POOL_ID}",
            body={"data": {"type": "agent-pools", "attributes": {"organization-scoped": True}}},
        )

    async def test_update_invalid_name(self) -> None:
        with self.assertRaises(InvalidValueError):
            await self.pool_client.update(POOL_ID, AgentPoolUpdateOptions(name="build pool"))
        self.transport.assert_no_requests()

    async def test_update_allowed_projects(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response(_pool())):
            await self.pool_client.update_allowed_projects(POOL_ID, [Project(id=PROJECT_ID)])
        self.assert_request_made(
            RequestMethod.PATCH,
            f"agent-pools/{POOL_ID}",
            body={
                "data": {
                    "type": "agent-pools",
                    "attributes": {},
                    "relationships": {"allowed-projects": {"data": [{"type": "projects", "id": PROJECT_ID}]}},
                }
            },
        )

    async def test_update_excluded_workspaces_empty(self) -> None:
        with self.transport.set_http_response(200, jsonapi_response(_pool())):
            await self.pool_client.update_excluded_workspaces(POOL_ID, [])
        self.assert_request_made(
            RequestMethod.PATCH,
            f"agent-pools/{POOL_ID}",
            body={
                "data": {
                    "type": "agent-pools",
                    "attributes": {},
                    "relationships": {"excluded-workspaces": {"data": []}},
                }
            },
        )

    async def test_delete(self) -> None:
        with self.transport.set_http_response(204):
            await self.pool_client.delete(POOL_ID)
        self.assert_request_made(RequestMethod.DELETE, f"agent-pools/{POOL_ID}")
