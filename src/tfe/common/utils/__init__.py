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

from .pagination import iter_pages
from .polling import await_status, poll_interval
from .rate_limit import RateLimiter
from .retry import (
    BackoffExponential,
    BackoffIncremental,
    BackoffLinear,
    BackoffLinearJitter,
    BackoffMethod,
    Retry,
    RetryHandler,
)
from .validation import require_id, require_ids, valid_email, valid_string, valid_string_id
from .version import get_user_agent

__all__ = [
    "BackoffExponential",
    "BackoffIncremental",
    "BackoffLinear",
    "BackoffLinearJitter",
    "BackoffMethod",
    "RateLimiter",
    "Retry",
    "RetryHandler",
    "await_status",
    "get_user_agent",
    "iter_pages",
    "poll_interval",
    "require_id",
    "require_ids",
    "valid_email",
    "valid_string",
    "valid_string_id",
]
