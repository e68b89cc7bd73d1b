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

from datetime import datetime
from enum import Enum

from pydantic import Field

from tfe.common import Attributes, ListOptions, Options, Resource
from tfe.common.exceptions import InvalidValueError, RequiredFieldError
from tfe.common.utils import valid_string, valid_string_id

__all__ = [
    "Capacity",
    "Entitlements",
    "ExecutionMode",
    "Organization",
    "OrganizationCreateOptions",
    "OrganizationListOptions",
    "OrganizationPermissions",
    "OrganizationToken",
    "OrganizationTokenCreateOptions",
    "OrganizationUpdateOptions",
    "ReadRunQueueOptions",
]


class ExecutionMode(str, Enum):
    """Where runs are executed."""

    REMOTE = "remote"
    LOCAL = "local"
    AGENT = "agent"


class OrganizationPermissions(Attributes):
    can_create_team: bool | None = None
    can_create_workspace: bool | None = None
    can_create_workspace_migration: bool | None = None
    can_destroy: bool | None = None
    can_manage_run_tasks: bool | None = None
    can_traverse: bool | None = None
    can_update: bool | None = None
    can_update_api_token: bool | None = None
    can_update_oauth: bool | None = None
    can_update_sentinel: bool | None = None


class Organization(Resource):
    """An organization. The ID of an organization is its name."""

    JSONAPI_TYPE = "organizations"

    name: str | None = None
    email: str | None = None
    collaborator_auth_policy: str | None = None
    cost_estimation_enabled: bool | None = None
    created_at: datetime | None = None
    external_id: str | None = None
    owners_team_saml_role_id: str | None = None
    permissions: OrganizationPermissions | None = None
    saml_enabled: bool | None = None
    session_remember: int | None = None
    session_timeout: int | None = None
    trial_expires_at: datetime | None = None
    two_factor_conformant: bool | None = None
    assessments_enforced: bool | None = None
    default_execution_mode: ExecutionMode | str | None = None


class Capacity(Resource):
    """The number of runs that are pending and running in an organization."""

    JSONAPI_TYPE = "organization-capacity"

    pending: int = 0
    running: int = 0


class Entitlements(Resource):
    """The features that an organization is entitled to."""

    JSONAPI_TYPE = "entitlement-sets"

    agents: bool | None = None
    audit_logging: bool | None = None
    cost_estimation: bool | None = None
    global_run_tasks: bool | None = None
    operations: bool | None = None
    private_module_registry: bool | None = None
    run_tasks: bool | None = None
    sso: bool | None = None
    sentinel: bool | None = None
    state_storage: bool | None = None
    teams: bool | None = None
    vcs_integrations: bool | None = None
    waypoint_actions: bool | None = None


class OrganizationListOptions(ListOptions):
    query: str | None = Field(default=None, alias="q")
    """Only list organizations whose name or notification email contains this string."""


class ReadRunQueueOptions(ListOptions):
    pass


class OrganizationCreateOptions(Options):
    JSONAPI_TYPE = "organizations"

    name: str | None = None
    email: str | None = None
    session_timeout: int | None = None
    session_remember: int | None = None
    collaborator_auth_policy: str | None = None
    cost_estimation_enabled: bool | None = None
    owners_team_saml_role_id: str | None = None
    assessments_enforced: bool | None = None
    default_execution_mode: ExecutionMode | None = None

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)
        if not valid_string(self.email):
            raise RequiredFieldError("email")


class OrganizationUpdateOptions(Options):
    JSONAPI_TYPE = "organizations"

    name: str | None = None
    email: str | None = None
    session_timeout: int | None = None
    session_remember: int | None = None
    collaborator_auth_policy: str | None = None
    cost_estimation_enabled: bool | None = None
    owners_team_saml_role_id: str | None = None
    assessments_enforced: bool | None = None
    default_execution_mode: ExecutionMode | None = None

    def valid(self) -> None:
        if self.name is not None and not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)


class OrganizationToken(Resource):
    """The API token of an organization. The token value is only returned when the token is created."""

    JSONAPI_TYPE = "authentication-tokens"

    created_at: datetime | None = None
    description: str | None = None
    expired_at: datetime | None = None
    last_used_at: datetime | None = None
    token: str | None = None


class OrganizationTokenCreateOptions(Options):
    JSONAPI_TYPE = "authentication-token"

    expired_at: datetime | None = None
    """When the token expires. The token never expires if not set."""
