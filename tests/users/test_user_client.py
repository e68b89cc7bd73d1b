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

from tfe.common import RequestMethod
from tfe.common.exceptions import InvalidValueError, UnauthorizedException
from tfe.common.test_tools import TestWithConnector, jsonapi_response
from tfe.users import UserAPIClient, UserUpdateOptions


def _user_content(**attributes) -> str:
    return jsonapi_response(
        {
            "id": "user-V3R563qtJNcExAkN",
            "type": "users",
            "attributes": {
                "username": "admin",
                "email": "admin@hashicorp.com",
                "is-service-account": False,
                "two-factor": {"enabled": True, "verified": True},
                "permissions": {"can-create-organizations": True, "can-change-email": True},
                **attributes,
            },
        }
    )


class TestUserClient(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.user_client = UserAPIClient(self.connector)

    async def test_read_current(self) -> None:
        with self.transport.set_http_response(200, _user_content()):
            user = await self.user_client.read_current()
        self.assert_request_made(RequestMethod.GET, "account/details")
        self.assertEqual("admin", user.username)
        self.assertTrue(user.two_factor.verified)
        self.assertTrue(user.permissions.can_create_organizations)
        self.assertFalse(user.is_service_account)

    async def test_read_current_unauthorized(self) -> None:
        with self.transport.set_http_response(401, '{"errors": [{"status": "401", "title": "unauthorized"}]}'):
            with self.assertRaises(UnauthorizedException):
                await self.user_client.read_current()

    async def test_update_current(self) -> None:
        with self.transport.set_http_response(200, _user_content(**{"unconfirmed-email": "new@hashicorp.com"})):
            user = await self.user_client.update_current(UserUpdateOptions(email="new@hashicorp.com"))
        self.assert_request_made(
            RequestMethod.PATCH,
            "account/update",
            body={"data": {"type": "users", "attributes": {"email": "new@hashicorp.com"}}},
        )
        self.assertEqual("admin@hashicorp.com", user.email)
        self.assertEqual("new@hashicorp.com", user.unconfirmed_email)

    async def test_update_current_invalid_email(self) -> None:
        with self.assertRaises(InvalidValueError):
            await self.user_client.update_current(UserUpdateOptions(email="not an email"))
        self.transport.assert_no_requests()
