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

from tfe.common import ListOptions, Options, QueryOptions, Resource, relation
from tfe.common.exceptions import InvalidValueError, RequiredFieldError
from tfe.common.utils import valid_string, valid_string_id
from tfe.organizations.data import Organization
from tfe.projects.data import Project
from tfe.workspaces.data import Workspace

__all__ = [
    "AgentPool",
    "AgentPoolCreateOptions",
    "AgentPoolIncludeOpt",
    "AgentPoolListOptions",
    "AgentPoolReadOptions",
    "AgentPoolUpdateOptions",
]


class AgentPoolIncludeOpt(str, Enum):
    WORKSPACES = "workspaces"


class AgentPool(Resource):
    """A pool of self-hosted agents that runs can be executed on.

    An organization scoped pool can be used by every workspace in the organization. Otherwise, only the allowed
    workspaces, and the workspaces in the allowed projects, can use the pool.
    """

    JSONAPI_TYPE = "agent-pools"

    name: str | None = None
    agent_count: int | None = None
    organization_scoped: bool | None = None
    created_at: datetime | None = None

    organization: Organization | None = relation()
    workspaces: list[Workspace] | None = relation()
    """The workspaces that use the pool."""

    allowed_workspaces: list[Workspace] | None = relation()
    allowed_projects: list[Project] | None = relation()
    excluded_workspaces: list[Workspace] | None = relation()
    """Workspaces in the allowed projects that cannot use the pool."""


class AgentPoolReadOptions(QueryOptions):
    include: list[AgentPoolIncludeOpt] | None = None


class AgentPoolListOptions(ListOptions):
    include: list[AgentPoolIncludeOpt] | None = None

    query: str | None = Field(default=None, alias="q")
    """Only list agent pools whose name contains this string."""

    allowed_workspaces_name: str | None = Field(default=None, alias="filter[allowed_workspaces][name]")
    """Only list agent pools that the named workspace is allowed to use."""

    allowed_projects_name: str | None = Field(default=None, alias="filter[allowed_projects][name]")
    """Only list agent pools that the named project is allowed to use."""


class _AgentPoolOptions(Options):
    JSONAPI_TYPE = "agent-pools"

    name: str | None = None
    organization_scoped: bool | None = None

    allowed_workspaces: list[Workspace] | None = relation()
    allowed_projects: list[Project] | None = relation()
    excluded_workspaces: list[Workspace] | None = relation()


class AgentPoolCreateOptions(_AgentPoolOptions):
    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)


class AgentPoolUpdateOptions(_AgentPoolOptions):
    def valid(self) -> None:
        if self.name is not None and not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)
