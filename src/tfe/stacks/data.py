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

from tfe.common import Attributes, ListOptions, Options, Resource, relation
from tfe.common.exceptions import RequiredFieldError
from tfe.common.utils import valid_string
from tfe.projects.data import Project

__all__ = [
    "Stack",
    "StackComponent",
    "StackConfiguration",
    "StackConfigurationListOptions",
    "StackConfigurationStatus",
    "StackCreateOptions",
    "StackListOptions",
    "StackSortColumn",
    "StackUpdateOptions",
    "StackVCSRepo",
    "TERMINAL_STACK_CONFIGURATION_STATUSES",
]


class StackVCSRepo(Attributes):
    identifier: str | None = None
    branch: str | None = None
    github_app_installation_id: str | None = None
    oauth_token_id: str | None = None


class StackConfigurationStatus(str, Enum):
    PENDING = "pending"
    QUEUED = "queued"
    PREPARING = "preparing"
    ENQUEUEING = "enqueueing"
    CONVERGED = "converged"
    CONVERGING = "converging"
    ERRORED = "errored"
    CANCELED = "canceled"
    COMPLETED = "completed"


TERMINAL_STACK_CONFIGURATION_STATUSES = (
    StackConfigurationStatus.CONVERGED,
    StackConfigurationStatus.CONVERGING,
    StackConfigurationStatus.COMPLETED,
    StackConfigurationStatus.ERRORED,
    StackConfigurationStatus.CANCELED,
)
"""Statuses that end the preparation of a stack configuration."""


class StackComponent(Attributes):
    name: str | None = None
    correlator: str | None = None
    expanded: bool | None = None
    removed: bool | None = None


class StackConfiguration(Resource):
    """A snapshot of the configuration of a stack, as fetched from its VCS repository."""

    JSONAPI_TYPE = "stack-configurations"

    status: StackConfigurationStatus | str | None = None
    sequence_number: int | None = None
    components: list[StackComponent] | None = None
    error_message: str | None = None
    event_stream_url: str | None = None
    preparing_event_stream_url: str | None = None
    speculative: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    stack: Stack | None = relation()


class StackSortColumn(str, Enum):
    NAME = "name"
    UPDATED_AT = "updated-at"
    NAME_DESC = "-name"
    UPDATED_AT_DESC = "-updated-at"


class Stack(Resource):
    """A stack, which deploys a set of components to one or more deployments.

    Stacks are a beta feature of HCP Terraform, so these models may change.
    """

    JSONAPI_TYPE = "stacks"

    name: str | None = None
    description: str | None = None
    deployment_names: list[str] | None = None
    vcs_repo: StackVCSRepo | None = None
    speculative_enabled: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    project: Project | None = relation()
    latest_stack_configuration: StackConfiguration | None = relation()


StackConfiguration.model_rebuild()


class StackListOptions(ListOptions):
    project_id: str | None = Field(default=None, alias="filter[project[id]]")
    """Only list stacks in this project."""

    sort: StackSortColumn | None = None
    search: str | None = Field(default=None, alias="search[name]")
    """Only list stacks whose name contains this string."""


class StackCreateOptions(Options):
    JSONAPI_TYPE = "stacks"

    name: str | None = None
    description: str | None = None
    vcs_repo: StackVCSRepo | None = None

    project: Project | None = relation()

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if self.project is None or not valid_string(self.project.id):
            raise RequiredFieldError("project")


class StackUpdateOptions(Options):
    JSONAPI_TYPE = "stacks"

    name: str | None = None
    description: str | None = None
    vcs_repo: StackVCSRepo | None = None


class StackConfigurationListOptions(ListOptions):
    pass
