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

from .applies import ApplyAPIClient
from .client import RunAPIClient
from .comments import CommentAPIClient
from .cost_estimates import CostEstimateAPIClient
from .data import (
    TERMINAL_RUN_STATUSES,
    Apply,
    ApplyStatus,
    ApplyStatusTimestamps,
    Comment,
    CommentCreateOptions,
    CommentListOptions,
    CostEstimate,
    CostEstimateStatus,
    CostEstimateStatusTimestamps,
    Plan,
    PlanStatus,
    PlanStatusTimestamps,
    Run,
    RunActionOptions,
    RunActions,
    RunCreateOptions,
    RunListOptions,
    RunPermissions,
    RunReadOptions,
    RunSource,
    RunStatus,
    RunStatusTimestamps,
    RunVariable,
)
from .logs import LogReader
from .plans import PlanAPIClient

__all__ = [
    "TERMINAL_RUN_STATUSES",
    "Apply",
    "ApplyAPIClient",
    "ApplyStatus",
    "ApplyStatusTimestamps",
    "Comment",
    "CommentAPIClient",
    "CommentCreateOptions",
    "CommentListOptions",
    "CostEstimate",
    "CostEstimateAPIClient",
    "CostEstimateStatus",
    "CostEstimateStatusTimestamps",
    "LogReader",
    "Plan",
    "PlanAPIClient",
    "PlanStatus",
    "PlanStatusTimestamps",
    "Run",
    "RunAPIClient",
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
]
