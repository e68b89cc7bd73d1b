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
from tfe.common.utils import valid_string
from tfe.configuration_versions.data import ConfigurationVersion
from tfe.policies.data import PolicyCheck
from tfe.users.data import User
from tfe.workspaces.data import Workspace

__all__ = [
    "Apply",
    "ApplyStatus",
    "ApplyStatusTimestamps",
    "Comment",
    "CommentCreateOptions",
    "CommentListOptions",
    "CostEstimate",
    "CostEstimateStatus",
    "CostEstimateStatusTimestamps",
    "Plan",
    "PlanStatus",
    "PlanStatusTimestamps",
    "Run",
    "RunActionOptions",
    "RunActions",
    "RunCreateOptions",
    "RunListOptions",
    "RunPermissions",
    "RunReadOptions",
    "RunSource",
    "RunStatus",
    "RunStatusTimestamps",
    "RunVariable",
    "TERMINAL_RUN_STATUSES",
]


class PlanStatus(str, Enum):
    CANCELED = "canceled"
    CREATED = "created"
    ERRORED = "errored"
    FINISHED = "finished"
    MFA_WAITING = "mfa_waiting"
    PENDING = "pending"
    QUEUED = "queued"
    RUNNING = "running"
    UNREACHABLE = "unreachable"


class PlanStatusTimestamps(Attributes):
    canceled_at: datetime | None = None
    errored_at: datetime | None = None
    finished_at: datetime | None = None
    force_canceled_at: datetime | None = None
    queued_at: datetime | None = None
    started_at: datetime | None = None


class Plan(Resource):
    """The plan phase of a run."""

    JSONAPI_TYPE = "plans"

    has_changes: bool | None = None
    log_read_url: str | None = None
    resource_additions: int | None = None
    resource_changes: int | None = None
    resource_destructions: int | None = None
    resource_imports: int | None = None
    status: PlanStatus | str | None = None
    status_timestamps: PlanStatusTimestamps | None = None


class ApplyStatus(str, Enum):
    CANCELED = "canceled"
    CREATED = "created"
    ERRORED = "errored"
    FINISHED = "finished"
    MFA_WAITING = "mfa_waiting"
    PENDING = "pending"
    QUEUED = "queued"
    RUNNING = "running"
    UNREACHABLE = "unreachable"


class ApplyStatusTimestamps(Attributes):
    canceled_at: datetime | None = None
    errored_at: datetime | None = None
    finished_at: datetime | None = None
    force_canceled_at: datetime | None = None
    queued_at: datetime | None = None
    started_at: datetime | None = None


class Apply(Resource):
    """The apply phase of a run."""

    JSONAPI_TYPE = "applies"

    log_read_url: str | None = None
    resource_additions: int | None = None
    resource_changes: int | None = None
    resource_destructions: int | None = None
    resource_imports: int | None = None
    status: ApplyStatus | str | None = None
    status_timestamps: ApplyStatusTimestamps | None = None


class CostEstimateStatus(str, Enum):
    CANCELED = "canceled"
    ERRORED = "errored"
    FINISHED = "finished"
    PENDING = "pending"
    QUEUED = "queued"
    SKIPPED_DUE_TO_TARGETING = "skipped_due_to_targeting"


class CostEstimateStatusTimestamps(Attributes):
    canceled_at: datetime | None = None
    errored_at: datetime | None = None
    finished_at: datetime | None = None
    pending_at: datetime | None = None
    queued_at: datetime | None = None
    skipped_due_to_targeting_at: datetime | None = None


class CostEstimate(Resource):
    """The cost estimation phase of a run. Costs are reported as decimal strings in US dollars."""

    JSONAPI_TYPE = "cost-estimates"

    delta_monthly_cost: str | None = None
    error_message: str | None = None
    matched_resources_count: int | None = None
    prior_monthly_cost: str | None = None
    proposed_monthly_cost: str | None = None
    resources_count: int | None = None
    unmatched_resources_count: int | None = None
    log_read_url: str | None = None
    status: CostEstimateStatus | str | None = None
    status_timestamps: CostEstimateStatusTimestamps | None = None


class RunStatus(str, Enum):
    APPLIED = "applied"
    APPLYING = "applying"
    APPLY_QUEUED = "apply_queued"
    CANCELED = "canceled"
    CONFIRMED = "confirmed"
    COST_ESTIMATED = "cost_estimated"
    COST_ESTIMATING = "cost_estimating"
    DISCARDED = "discarded"
    ERRORED = "errored"
    FETCHING = "fetching"
    FETCHING_COMPLETED = "fetching_completed"
    FORCE_CANCELED = "force_canceled"
    PENDING = "pending"
    PLANNED = "planned"
    PLANNED_AND_FINISHED = "planned_and_finished"
    PLANNED_AND_SAVED = "planned_and_saved"
    PLANNING = "planning"
    PLAN_QUEUED = "plan_queued"
    POLICY_CHECKED = "policy_checked"
    POLICY_CHECKING = "policy_checking"
    POLICY_OVERRIDE = "policy_override"
    POLICY_SOFT_FAILED = "policy_soft_failed"
    POST_PLAN_AWAITING_DECISION = "post_plan_awaiting_decision"
    POST_PLAN_COMPLETED = "post_plan_completed"
    POST_PLAN_RUNNING = "post_plan_running"
    PRE_APPLY_COMPLETED = "pre_apply_completed"
    PRE_APPLY_RUNNING = "pre_apply_running"
    PRE_PLAN_COMPLETED = "pre_plan_completed"
    PRE_PLAN_RUNNING = "pre_plan_running"
    QUEUING = "queuing"
    QUEUING_APPLY = "queuing_apply"


TERMINAL_RUN_STATUSES = frozenset(
    {
        RunStatus.APPLIED,
        RunStatus.PLANNED_AND_FINISHED,
        RunStatus.ERRORED,
        RunStatus.DISCARDED,
        RunStatus.CANCELED,
        RunStatus.FORCE_CANCELED,
        RunStatus.POLICY_SOFT_FAILED,
    }
)
"""Statuses after which a run will not change any more."""


class RunSource(str, Enum):
    API = "tfe-api"
    CONFIGURATION_VERSION = "tfe-configuration-version"
    UI = "tfe-ui"
    TERRAFORM_CLOUD = "terraform+cloud"
    TERRAFORM = "terraform"


class RunActions(Attributes):
    is_cancelable: bool | None = None
    is_confirmable: bool | None = None
    is_discardable: bool | None = None
    is_force_cancelable: bool | None = None


class RunPermissions(Attributes):
    can_apply: bool | None = None
    can_cancel: bool | None = None
    can_discard: bool | None = None
    can_force_cancel: bool | None = None
    can_force_execute: bool | None = None


class RunStatusTimestamps(Attributes):
    applied_at: datetime | None = None
    applying_at: datetime | None = None
    apply_queued_at: datetime | None = None
    canceled_at: datetime | None = None
    confirmed_at: datetime | None = None
    cost_estimated_at: datetime | None = None
    cost_estimating_at: datetime | None = None
    discarded_at: datetime | None = None
    errored_at: datetime | None = None
    fetched_at: datetime | None = None
    fetching_at: datetime | None = None
    force_canceled_at: datetime | None = None
    planned_and_finished_at: datetime | None = None
    planned_at: datetime | None = None
    planning_at: datetime | None = None
    plan_queueable_at: datetime | None = None
    plan_queued_at: datetime | None = None
    policy_checked_at: datetime | None = None
    policy_soft_failed_at: datetime | None = None
    post_plan_completed_at: datetime | None = None
    post_plan_running_at: datetime | None = None
    pre_plan_completed_at: datetime | None = None
    pre_plan_running_at: datetime | None = None
    queuing_at: datetime | None = None


class RunVariable(Attributes):
    """A run-specific variable. The value must be an HCL expression, e.g. `"\\"a string\\""`."""

    key: str
    value: str


class Run(Resource):
    """A run, which plans and optionally applies a configuration version in a workspace."""

    JSONAPI_TYPE = "runs"

    actions: RunActions | None = None
    allow_config_generation: bool | None = None
    allow_empty_apply: bool | None = None
    auto_apply: bool | None = None
    created_at: datetime | None = None
    has_changes: bool | None = None
    is_destroy: bool | None = None
    message: str | None = None
    permissions: RunPermissions | None = None
    plan_only: bool | None = None
    position_in_queue: int | None = None
    refresh: bool | None = None
    refresh_only: bool | None = None
    replace_addrs: list[str] | None = None
    save_plan: bool | None = None
    source: RunSource | str | None = None
    status: RunStatus | str | None = None
    status_timestamps: RunStatusTimestamps | None = None
    target_addrs: list[str] | None = None
    terraform_version: str | None = None
    trigger_reason: str | None = None
    variables: list[RunVariable] | None = None

    apply: Apply | None = relation()
    configuration_version: ConfigurationVersion | None = relation()
    cost_estimate: CostEstimate | None = relation()
    created_by: User | None = relation()
    plan: Plan | None = relation()
    policy_checks: list[PolicyCheck] | None = relation()
    workspace: Workspace | None = relation()

    def is_finished(self) -> bool:
        """Whether the run has reached a status that it will not leave."""
        return self.status in TERMINAL_RUN_STATUSES


class RunListOptions(ListOptions):
    operation: list[str] | None = Field(default=None, alias="filter[operation]")
    """Only list runs of these operations, e.g. `plan_only`, `plan_and_apply`, `destroy`."""

    status: list[str] | None = Field(default=None, alias="filter[status]")
    """Only list runs with these statuses."""

    source: list[str] | None = Field(default=None, alias="filter[source]")
    """Only list runs from these sources, e.g. `tfe-api` or `tfe-ui`."""

    status_group: str | None = Field(default=None, alias="filter[status_group]")
    """Only list runs in this status group: `non_final`, `final` or `discardable`."""

    user: str | None = Field(default=None, alias="search[user]")
    commit: str | None = Field(default=None, alias="search[commit]")
    search: str | None = Field(default=None, alias="search[basic]")

    include: list[str] | None = None
    """Related resources to include, e.g. `plan`, `created_by` or `workspace`."""


class RunReadOptions(QueryOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `plan`, `apply`, `created_by` or `configuration_version`."""


class RunCreateOptions(Options):
    """Options for creating a run.

    The workspace is required. Without a configuration version, the run uses the current configuration version of the
    workspace.
    """

    JSONAPI_TYPE = "runs"

    allow_config_generation: bool | None = None
    allow_empty_apply: bool | None = None
    auto_apply: bool | None = None
    debugging_mode: bool | None = None
    is_destroy: bool | None = None
    message: str | None = None
    plan_only: bool | None = None
    refresh: bool | None = None
    refresh_only: bool | None = None
    replace_addrs: list[str] | None = None
    save_plan: bool | None = None
    target_addrs: list[str] | None = None
    terraform_version: str | None = None
    variables: list[RunVariable] | None = None

    configuration_version: ConfigurationVersion | None = relation()
    workspace: Workspace | None = relation()

    def valid(self) -> None:
        if self.workspace is None:
            raise RequiredFieldError("workspace")
        if self.target_addrs is not None and len(self.target_addrs) == 0:
            raise InvalidValueError("target addrs", self.target_addrs)
        if self.replace_addrs is not None and len(self.replace_addrs) == 0:
            raise InvalidValueError("replace addrs", self.replace_addrs)
        if self.terraform_version is not None and not self.plan_only:
            raise ClientValueError("setting a terraform version is only valid for plan-only runs")


class RunActionOptions(BaseModel):
    comment: str | None = None
    """A comment to attach to the run action."""


class Comment(Resource):
    """A comment on a run."""

    JSONAPI_TYPE = "comments"

    body: str | None = None


class CommentListOptions(ListOptions):
    pass


class CommentCreateOptions(Options):
    JSONAPI_TYPE = "comments"

    body: str | None = None

    def valid(self) -> None:
        if not valid_string(self.body):
            raise RequiredFieldError("comment body")
