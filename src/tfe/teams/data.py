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

from pydantic import BaseModel, Field

from tfe.common import Attributes, ListOptions, Options, Resource, relation
from tfe.common.exceptions import ClientValueError, RequiredFieldError
from tfe.common.utils import require_ids, valid_string
from tfe.users.data import User
from tfe.workspaces.data import Workspace

__all__ = [
    "AccessType",
    "OrganizationAccess",
    "RunsPermission",
    "SentinelMocksPermission",
    "StateVersionsPermission",
    "Team",
    "TeamAccess",
    "TeamAccessAddOptions",
    "TeamAccessListOptions",
    "TeamAccessUpdateOptions",
    "TeamCreateOptions",
    "TeamListOptions",
    "TeamMemberAddOptions",
    "TeamMemberRemoveOptions",
    "TeamPermissions",
    "TeamToken",
    "TeamTokenCreateOptions",
    "TeamUpdateOptions",
    "VariablesPermission",
]


class OrganizationAccess(Attributes):
    """The organization-level permissions of a team."""

    manage_policies: bool | None = None
    manage_policy_overrides: bool | None = None
    manage_workspaces: bool | None = None
    manage_vcs_settings: bool | None = None
    manage_providers: bool | None = None
    manage_modules: bool | None = None
    manage_run_tasks: bool | None = None
    manage_projects: bool | None = None
    read_workspaces: bool | None = None
    read_projects: bool | None = None
    manage_membership: bool | None = None
    manage_teams: bool | None = None
    manage_organization_access: bool | None = None
    access_secret_teams: bool | None = None
    manage_agent_pools: bool | None = None


class TeamPermissions(Attributes):
    can_destroy: bool | None = None
    can_update_membership: bool | None = None


class Team(Resource):
    """A team of users in an organization."""

    JSONAPI_TYPE = "teams"

    name: str | None = None
    visibility: str | None = None
    """Either `secret` or `organization`."""

    organization_access: OrganizationAccess | None = None
    permissions: TeamPermissions | None = None
    user_count: int | None = Field(default=None, alias="users-count")
    sso_team_id: str | None = None
    allow_member_token_management: bool | None = None

    users: list[User] | None = relation()


class TeamListOptions(ListOptions):
    names: list[str] | None = Field(default=None, alias="filter[names]")
    """Only list teams with these names."""

    query: str | None = Field(default=None, alias="q")
    """Only list teams whose name contains this string."""

    include: list[str] | None = None
    """Related resources to include, e.g. `users`."""


class TeamCreateOptions(Options):
    JSONAPI_TYPE = "teams"

    name: str | None = None
    sso_team_id: str | None = None
    organization_access: OrganizationAccess | None = None
    visibility: str | None = None
    allow_member_token_management: bool | None = None

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")


class TeamUpdateOptions(Options):
    JSONAPI_TYPE = "teams"

    name: str | None = None
    sso_team_id: str | None = None
    organization_access: OrganizationAccess | None = None
    visibility: str | None = None
    allow_member_token_management: bool | None = None


class AccessType(str, Enum):
    ADMIN = "admin"
    READ = "read"
    PLAN = "plan"
    WRITE = "write"
    CUSTOM = "custom"


class RunsPermission(str, Enum):
    READ = "read"
    PLAN = "plan"
    APPLY = "apply"


class VariablesPermission(str, Enum):
    NONE = "none"
    READ = "read"
    WRITE = "write"


class StateVersionsPermission(str, Enum):
    NONE = "none"
    READ_OUTPUTS = "read-outputs"
    READ = "read"
    WRITE = "write"


class SentinelMocksPermission(str, Enum):
    NONE = "none"
    READ = "read"


class TeamAccess(Resource):
    """The access that a team has to a workspace.

    Fine-grained permissions only apply when the access type is `custom`.
    """

    JSONAPI_TYPE = "team-workspaces"

    access: AccessType | str | None = None
    runs: RunsPermission | str | None = None
    variables: VariablesPermission | str | None = None
    state_versions: StateVersionsPermission | str | None = None
    sentinel_mocks: SentinelMocksPermission | str | None = None
    workspace_locking: bool | None = None
    run_tasks: bool | None = None

    team: Team | None = relation()
    workspace: Workspace | None = relation()


class TeamAccessListOptions(ListOptions):
    workspace_id: str | None = Field(default=None, alias="filter[workspace][id]")
    """The workspace to list team access for. Required."""

    def valid(self) -> None:
        if not valid_string(self.workspace_id):
            raise RequiredFieldError("workspace ID")


class TeamAccessAddOptions(Options):
    JSONAPI_TYPE = "team-workspaces"

    access: AccessType | None = None
    runs: RunsPermission | None = None
    variables: VariablesPermission | None = None
    state_versions: StateVersionsPermission | None = None
    sentinel_mocks: SentinelMocksPermission | None = None
    workspace_locking: bool | None = None
    run_tasks: bool | None = None

    team: Team | None = relation()
    workspace: Workspace | None = relation()

    def valid(self) -> None:
        if self.access is None:
            raise RequiredFieldError("access")
        if self.team is None:
            raise RequiredFieldError("team")
        if self.workspace is None:
            raise RequiredFieldError("workspace")


class TeamAccessUpdateOptions(Options):
    JSONAPI_TYPE = "team-workspaces"

    access: AccessType | None = None
    runs: RunsPermission | None = None
    variables: VariablesPermission | None = None
    state_versions: StateVersionsPermission | None = None
    sentinel_mocks: SentinelMocksPermission | None = None
    workspace_locking: bool | None = None
    run_tasks: bool | None = None


class _TeamMemberOptions(BaseModel):
    usernames: list[str] | None = None
    """The users to add or remove, by username."""

    organization_membership_ids: list[str] | None = None
    """The users to add or remove, by organization membership ID."""

    def valid(self) -> None:
        if self.usernames is None and self.organization_membership_ids is None:
            raise RequiredFieldError("usernames or organization membership IDs")
        if self.usernames is not None and self.organization_membership_ids is not None:
            raise ClientValueError("only one of usernames or organization membership IDs can be provided")
        if self.usernames is not None:
            require_ids("usernames", self.usernames)
        else:
            require_ids("organization membership IDs", self.organization_membership_ids)


class TeamMemberAddOptions(_TeamMemberOptions):
    pass


class TeamMemberRemoveOptions(_TeamMemberOptions):
    pass


class TeamToken(Resource):
    """An API token that authenticates as a team.

    The token value is only returned when the token is created.
    """

    JSONAPI_TYPE = "authentication-tokens"

    created_at: datetime | None = None
    description: str | None = None
    expired_at: datetime | None = None
    last_used_at: datetime | None = None
    token: str | None = None

    team: Team | None = relation()


class TeamTokenCreateOptions(Options):
    JSONAPI_TYPE = "authentication-tokens"

    description: str | None = None
    """A description of the token. Teams can hold several tokens that have a description."""

    expired_at: datetime | None = None
    """When the token expires. The token never expires if not set."""
