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
from typing import Any

from pydantic import Field

from tfe.common import Attributes, ListOptions, Options, QueryOptions, Resource, relation
from tfe.common.exceptions import InvalidValueError, RequiredFieldError
from tfe.common.utils import valid_string, valid_string_id
from tfe.organizations.data import Organization
from tfe.projects.data import Project
from tfe.workspaces.data import VCSRepo, VCSRepoOptions, Workspace

__all__ = [
    "EnforcementLevel",
    "Enforcement",
    "EnforcementOptions",
    "Policy",
    "PolicyActions",
    "PolicyCheck",
    "PolicyCheckListOptions",
    "PolicyCheckPermissions",
    "PolicyCheckStatusTimestamps",
    "PolicyCreateOptions",
    "PolicyKind",
    "PolicyListOptions",
    "PolicyResult",
    "PolicyScope",
    "PolicySet",
    "PolicySetCreateOptions",
    "PolicySetListOptions",
    "PolicySetReadOptions",
    "PolicySetUpdateOptions",
    "PolicyStatus",
    "PolicyUpdateOptions",
]


class PolicyKind(str, Enum):
    SENTINEL = "sentinel"
    OPA = "opa"


class EnforcementLevel(str, Enum):
    ADVISORY = "advisory"
    SOFT_MANDATORY = "soft-mandatory"
    HARD_MANDATORY = "hard-mandatory"
    MANDATORY = "mandatory"


class Enforcement(Attributes):
    path: str | None = None
    mode: EnforcementLevel | str | None = None


class EnforcementOptions(Attributes):
    path: str | None = None
    mode: EnforcementLevel | None = None


class Policy(Resource):
    """A Sentinel or OPA policy."""

    JSONAPI_TYPE = "policies"

    name: str | None = None
    description: str | None = None
    kind: PolicyKind | str | None = None
    query: str | None = None
    enforcement_level: EnforcementLevel | str | None = None
    enforce: list[Enforcement] | None = None
    policy_set_count: int | None = None
    updated_at: datetime | None = None

    organization: Organization | None = relation()


class PolicyListOptions(ListOptions):
    search: str | None = Field(default=None, alias="search[name]")
    """Only list policies whose name contains this string."""

    kind: PolicyKind | None = Field(default=None, alias="filter[kind]")


def _check_enforcement(options: PolicyCreateOptions | PolicyUpdateOptions) -> None:
    for enforce in options.enforce or []:
        if not valid_string(enforce.path):
            raise RequiredFieldError("enforce path")
        if enforce.mode is None:
            raise RequiredFieldError("enforce mode")


class PolicyCreateOptions(Options):
    """Options for creating a policy.

    A policy must have an enforcement level, either through `enforcement_level` or through the older `enforce` list.
    OPA policies must also have a query.
    """

    JSONAPI_TYPE = "policies"

    name: str | None = None
    description: str | None = None
    kind: PolicyKind | None = None
    query: str | None = None
    enforcement_level: EnforcementLevel | None = None
    enforce: list[EnforcementOptions] | None = None

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)
        if self.enforcement_level is None and not self.enforce:
            raise RequiredFieldError("enforce")
        if self.kind == PolicyKind.OPA and not valid_string(self.query):
            raise RequiredFieldError("query")
        _check_enforcement(self)


class PolicyUpdateOptions(Options):
    JSONAPI_TYPE = "policies"

    description: str | None = None
    query: str | None = None
    enforcement_level: EnforcementLevel | None = None
    enforce: list[EnforcementOptions] | None = None

    def valid(self) -> None:
        _check_enforcement(self)


class PolicySet(Resource):
    """A collection of policies that is enforced on workspaces or projects."""

    JSONAPI_TYPE = "policy-sets"

    name: str | None = None
    description: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    kind: PolicyKind | str | None = None
    overridable: bool | None = None
    agent_enabled: bool | None = None
    policy_tool_version: str | None = None
    policies_path: str | None = None
    policy_count: int | None = None
    workspace_count: int | None = None
    project_count: int | None = None
    vcs_repo: VCSRepo | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    organization: Organization | None = relation()
    policies: list[Policy] | None = relation()
    workspaces: list[Workspace] | None = relation()
    projects: list[Project] | None = relation()
    workspace_exclusions: list[Workspace] | None = relation()


class PolicySetListOptions(ListOptions):
    search: str | None = Field(default=None, alias="search[name]")
    """Only list policy sets whose name contains this string."""

    kind: PolicyKind | None = Field(default=None, alias="filter[kind]")

    include: list[str] | None = None
    """Related resources to include, e.g. `policies`, `workspaces` or `projects`."""


class PolicySetReadOptions(QueryOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `current_version` or `workspace_exclusions`."""


class PolicySetCreateOptions(Options):
    JSONAPI_TYPE = "policy-sets"

    name: str | None = None
    description: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    kind: PolicyKind | None = None
    overridable: bool | None = None
    agent_enabled: bool | None = None
    policy_tool_version: str | None = None
    policies_path: str | None = None
    vcs_repo: VCSRepoOptions | None = None

    policies: list[Policy] | None = relation()
    workspaces: list[Workspace] | None = relation()
    projects: list[Project] | None = relation()
    workspace_exclusions: list[Workspace] | None = relation()

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)


class PolicySetUpdateOptions(Options):
    JSONAPI_TYPE = "policy-sets"

    name: str | None = None
    description: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    overridable: bool | None = None
    agent_enabled: bool | None = None
    policy_tool_version: str | None = None
    policies_path: str | None = None
    vcs_repo: VCSRepoOptions | None = None

    def valid(self) -> None:
        if self.name is not None and not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)


class PolicyScope(str, Enum):
    ORGANIZATION = "organization"
    WORKSPACE = "workspace"


class PolicyStatus(str, Enum):
    ERRORED = "errored"
    HARD_FAILED = "hard_failed"
    OVERRIDDEN = "overridden"
    PASSED = "passed"
    PENDING = "pending"
    QUEUED = "queued"
    SOFT_FAILED = "soft_failed"
    UNREACHABLE = "unreachable"


class PolicyActions(Attributes):
    is_overridable: bool | None = None


class PolicyCheckPermissions(Attributes):
    can_override: bool | None = None


class PolicyResult(Attributes):
    advisory_failed: int | None = None
    duration: int | None = None
    hard_failed: int | None = None
    passed: int | None = None
    result: bool | None = None
    soft_failed: int | None = None
    total_failed: int | None = None
    sentinel: Any = None


class PolicyCheckStatusTimestamps(Attributes):
    errored_at: datetime | None = None
    hard_failed_at: datetime | None = None
    passed_at: datetime | None = None
    queued_at: datetime | None = None
    soft_failed_at: datetime | None = None


class PolicyCheck(Resource):
    """The result of checking the policies of an organization against a run."""

    JSONAPI_TYPE = "policy-checks"

    actions: PolicyActions | None = None
    permissions: PolicyCheckPermissions | None = None
    result: PolicyResult | None = None
    scope: PolicyScope | str | None = None
    status: PolicyStatus | str | None = None
    status_timestamps: PolicyCheckStatusTimestamps | None = None


class PolicyCheckListOptions(ListOptions):
    include: list[str] | None = None
