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

from tfe.common import Attributes, Options, Resource
from tfe.common.exceptions import InvalidValueError
from tfe.common.utils import valid_email

__all__ = [
    "TwoFactor",
    "User",
    "UserPermissions",
    "UserUpdateOptions",
]


class TwoFactor(Attributes):
    enabled: bool | None = None
    verified: bool | None = None


class UserPermissions(Attributes):
    can_create_organizations: bool | None = None
    can_change_email: bool | None = None
    can_change_username: bool | None = None
    can_manage_user_tokens: bool | None = None
    can_view_2fa_settings: bool | None = None
    can_manage_hcp_account: bool | None = None


class User(Resource):
    """A user account, or the service account of a team or organization token."""

    JSONAPI_TYPE = "users"

    username: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    is_service_account: bool | None = None
    is_admin: bool | None = None
    is_site_admin: bool | None = None
    two_factor: TwoFactor | None = None
    unconfirmed_email: str | None = None
    v2_only: bool | None = None
    permissions: UserPermissions | None = None


class UserUpdateOptions(Options):
    JSONAPI_TYPE = "users"

    username: str | None = None
    email: str | None = None

    def valid(self) -> None:
        if self.email is not None and not valid_email(self.email):
            raise InvalidValueError("email", self.email)
