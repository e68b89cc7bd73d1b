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

from tfe.common import Attributes, ListOptions, Options, QueryOptions, Resource, relation
from tfe.common.exceptions import ClientValueError, InvalidValueError, RequiredFieldError
from tfe.common.utils import valid_string, valid_string_id
from tfe.configuration_versions.data import ConfigurationVersion
from tfe.organizations.data import ExecutionMode, Organization
from tfe.projects.data import Project

__all__ = [
    "CategoryType",
    "Tag",
    "VCSRepo",
    "VCSRepoOptions",
    "Variable",
    "VariableCreateOptions",
    "VariableListOptions",
    "VariableUpdateOptions",
    "Workspace",
    "WorkspaceActions",
    "WorkspaceAddTagsOptions",
    "WorkspaceAssignSSHKeyOptions",
    "WorkspaceCreateOptions",
    "WorkspaceListOptions",
    "WorkspaceLockOptions",
    "WorkspacePermissions",
    "WorkspaceReadOptions",
    "WorkspaceRemoveTagsOptions",
    "WorkspaceTagListOptions",
    "WorkspaceUpdateOptions",
]


class VCSRepo(Attributes):
    """The VCS repository that a workspace is connected to."""

    branch: str | None = None
    display_identifier: str | None = None
    identifier: str | None = None
    ingress_submodules: bool | None = None
    oauth_token_id: str | None = None
    github_app_installation_id: str | None = None
    repository_http_url: str | None = None
    service_provider: str | None = None
    tags_regex: str | None = None
    webhook_url: str | None = None


class VCSRepoOptions(Attributes):
    branch: str | None = None
    identifier: str | None = None
    ingress_submodules: bool | None = None
    oauth_token_id: str | None = None
    github_app_installation_id: str | None = None
    tags_regex: str | None = None


class WorkspaceActions(Attributes):
    is_destroyable: bool | None = None


class WorkspacePermissions(Attributes):
    can_destroy: bool | None = None
    can_force_unlock: bool | None = None
    can_lock: bool | None = None
    can_manage_run_tasks: bool | None = None
    can_queue_apply: bool | None = None
    can_queue_destroy: bool | None = None
    can_queue_run: bool | None = None
    can_read_settings: bool | None = None
    can_unlock: bool | None = None
    can_update: bool | None = None
    can_update_variable: bool | None = None
    can_force_delete: bool | None = None


class Tag(Resource):
    """A workspace tag. Tags are identified by ID or by name."""

    JSONAPI_TYPE = "tags"

    name: str | None = None
    instance_count: int | None = None


class Workspace(Resource):
    """A workspace, which holds the state, variables and runs of one Terraform configuration."""

    JSONAPI_TYPE = "workspaces"

    name: str | None = None
    actions: WorkspaceActions | None = None
    allow_destroy_plan: bool | None = None
    assessments_enabled: bool | None = None
    auto_apply: bool | None = None
    auto_apply_run_trigger: bool | None = None
    created_at: datetime | None = None
    description: str | None = None
    environment: str | None = None
    execution_mode: ExecutionMode | str | None = None
    file_triggers_enabled: bool | None = None
    global_remote_state: bool | None = None
    locked: bool | None = None
    migration_environment: str | None = None
    operations: bool | None = None
    permissions: WorkspacePermissions | None = None
    queue_all_runs: bool | None = None
    resource_count: int | None = None
    run_failures: int | None = None
    source: str | None = None
    source_name: str | None = None
    source_url: str | None = None
    speculative_enabled: bool | None = None
    structured_run_output_enabled: bool | None = None
    terraform_version: str | None = None
    trigger_prefixes: list[str] | None = None
    trigger_patterns: list[str] | None = None
    vcs_repo: VCSRepo | None = None
    working_directory: str | None = None
    updated_at: datetime | None = None
    tag_names: list[str] | None = None

    organization: Organization | None = relation()
    project: Project | None = relation()
    # Runs and state versions refer back to workspaces, so their concrete types are resolved when unmarshalling.
    current_run: Resource | None = relation()
    current_state_version: Resource | None = relation()
    current_configuration_version: ConfigurationVersion | None = relation()


class WorkspaceListOptions(ListOptions):
    search: str | None = Field(default=None, alias="search[name]")
    """Only list workspaces whose name contains this string."""

    tags: str | None = Field(default=None, alias="search[tags]")
    """Only list workspaces with all of these tags, as a comma separated list."""

    exclude_tags: str | None = Field(default=None, alias="search[exclude-tags]")
    """Only list workspaces without any of these tags, as a comma separated list."""

    wildcard_name: str | None = Field(default=None, alias="search[wildcard-name]")
    """Only list workspaces whose name matches this wildcard pattern."""

    project_id: str | None = Field(default=None, alias="filter[project][id]")
    """Only list workspaces in this project."""

    include: list[str] | None = None
    """Related resources to include, e.g. `organization` or `current_run`."""


class WorkspaceReadOptions(QueryOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `organization` or `current_run`."""


def _check_execution_mode(options: WorkspaceCreateOptions | WorkspaceUpdateOptions) -> None:
    if options.operations is not None and options.execution_mode is not None:
        raise ClientValueError("operations is deprecated and cannot be specified when execution mode is used")
    agent_mode = options.execution_mode == ExecutionMode.AGENT
    if options.agent_pool_id is not None and not agent_mode:
        raise ClientValueError("specifying an agent pool ID requires 'agent' execution mode")
    if options.agent_pool_id is None and agent_mode:
        raise RequiredFieldError("agent pool ID")
    if options.trigger_prefixes and options.trigger_patterns:
        raise ClientValueError("trigger prefixes and trigger patterns cannot be populated at the same time")


class WorkspaceCreateOptions(Options):
    JSONAPI_TYPE = "workspaces"

    name: str | None = None
    agent_pool_id: str | None = None
    allow_destroy_plan: bool | None = None
    assessments_enabled: bool | None = None
    auto_apply: bool | None = None
    auto_apply_run_trigger: bool | None = None
    description: str | None = None
    execution_mode: ExecutionMode | None = None
    file_triggers_enabled: bool | None = None
    global_remote_state: bool | None = None
    migration_environment: str | None = None
    operations: bool | None = None
    queue_all_runs: bool | None = None
    speculative_enabled: bool | None = None
    source_name: str | None = None
    source_url: str | None = None
    structured_run_output_enabled: bool | None = None
    terraform_version: str | None = None
    trigger_prefixes: list[str] | None = None
    trigger_patterns: list[str] | None = None
    vcs_repo: VCSRepoOptions | None = None
    working_directory: str | None = None

    project: Project | None = relation()
    tags: list[Tag] | None = relation()

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)
        _check_execution_mode(self)


class WorkspaceUpdateOptions(Options):
    JSONAPI_TYPE = "workspaces"

    name: str | None = None
    agent_pool_id: str | None = None
    allow_destroy_plan: bool | None = None
    assessments_enabled: bool | None = None
    auto_apply: bool | None = None
    auto_apply_run_trigger: bool | None = None
    description: str | None = None
    execution_mode: ExecutionMode | None = None
    file_triggers_enabled: bool | None = None
    global_remote_state: bool | None = None
    operations: bool | None = None
    queue_all_runs: bool | None = None
    speculative_enabled: bool | None = None
    structured_run_output_enabled: bool | None = None
    terraform_version: str | None = None
    trigger_prefixes: list[str] | None = None
    trigger_patterns: list[str] | None = None
    vcs_repo: VCSRepoOptions | None = None
    working_directory: str | None = None

    project: Project | None = relation()

    def valid(self) -> None:
        if self.name is not None and not valid_string_id(self.name):
            raise InvalidValueError("name", self.name)
        _check_execution_mode(self)


class WorkspaceLockOptions(BaseModel):
    reason: str | None = None
    """The reason for locking the workspace."""


class WorkspaceAssignSSHKeyOptions(Options):
    JSONAPI_TYPE = "workspaces"

    ssh_key_id: str | None = Field(default=None, alias="id")
    """The ID of the SSH key to assign."""

    def valid(self) -> None:
        if not valid_string(self.ssh_key_id):
            raise RequiredFieldError("SSH key ID")
        if not valid_string_id(self.ssh_key_id):
            raise InvalidValueError("SSH key ID", self.ssh_key_id)


class WorkspaceTagListOptions(ListOptions):
    query: str | None = Field(default=None, alias="name")
    """Only list tags whose name contains this string."""


def _check_tags(tags: list[Tag]) -> None:
    if not tags:
        raise RequiredFieldError("tags")
    for tag in tags:
        if not valid_string(tag.id) and not valid_string(tag.name):
            raise ClientValueError("must specify at least one tag by ID or name")


class WorkspaceAddTagsOptions(BaseModel):
    tags: list[Tag]

    def valid(self) -> None:
        _check_tags(self.tags)


class WorkspaceRemoveTagsOptions(BaseModel):
    tags: list[Tag]

    def valid(self) -> None:
        _check_tags(self.tags)


class CategoryType(str, Enum):
    """The kind of a variable."""

    TERRAFORM = "terraform"
    ENV = "env"
    POLICY_SET = "policy-set"


class Variable(Resource):
    """A workspace variable."""

    JSONAPI_TYPE = "vars"

    key: str | None = None
    value: str | None = None
    description: str | None = None
    category: CategoryType | str | None = None
    hcl: bool | None = None
    sensitive: bool | None = None
    version_id: str | None = None

    workspace: Workspace | None = relation(alias="configurable")


class VariableListOptions(ListOptions):
    pass


class VariableCreateOptions(Options):
    JSONAPI_TYPE = "vars"

    key: str | None = None
    value: str | None = None
    description: str | None = None
    category: CategoryType | None = None
    hcl: bool | None = None
    sensitive: bool | None = None

    def valid(self) -> None:
        if not valid_string(self.key):
            raise RequiredFieldError("key")
        if self.category is None:
            raise RequiredFieldError("category")


class VariableUpdateOptions(Options):
    JSONAPI_TYPE = "vars"

    key: str | None = None
    value: str | None = None
    description: str | None = None
    category: CategoryType | None = None
    hcl: bool | None = None
    sensitive: bool | None = None
