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

import base64
import hashlib
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from tfe.common import ListOptions, Options, QueryOptions, Resource, relation
from tfe.common.exceptions import RequiredFieldError
from tfe.common.utils import valid_string
from tfe.runs.data import Run

__all__ = [
    "StateVersion",
    "StateVersionCreateOptions",
    "StateVersionListOptions",
    "StateVersionOutput",
    "StateVersionOutputsListOptions",
    "StateVersionReadOptions",
    "StateVersionStatus",
]


class StateVersionStatus(str, Enum):
    PENDING = "pending"
    FINALIZED = "finalized"
    DISCARDED = "discarded"


class StateVersionOutput(Resource):
    """An output value of a state version. Sensitive values are only returned to users with access to the state."""

    JSONAPI_TYPE = "state-version-outputs"

    name: str | None = None
    sensitive: bool | None = None
    type: str | None = None
    value: Any = None
    detailed_type: Any = None


class StateVersion(Resource):
    """A snapshot of the Terraform state of a workspace."""

    JSONAPI_TYPE = "state-versions"

    created_at: datetime | None = None
    download_url: str | None = None
    hosted_state_download_url: str | None = None
    hosted_json_state_download_url: str | None = None
    serial: int | None = None
    size: int | None = None
    state_version: int | None = None
    resources_processed: bool | None = None
    status: StateVersionStatus | str | None = None
    terraform_version: str | None = None
    vcs_commit_sha: str | None = None
    vcs_commit_url: str | None = None

    run: Run | None = relation()
    outputs: list[StateVersionOutput] | None = relation()


class StateVersionListOptions(ListOptions):
    organization: str | None = Field(default=None, alias="filter[organization][name]")
    workspace: str | None = Field(default=None, alias="filter[workspace][name]")

    def valid(self) -> None:
        if not valid_string(self.organization):
            raise RequiredFieldError("organization")
        if not valid_string(self.workspace):
            raise RequiredFieldError("workspace")


class StateVersionReadOptions(QueryOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `outputs` or `created_by`."""


class StateVersionOutputsListOptions(ListOptions):
    pass


class StateVersionCreateOptions(Options):
    """Options for uploading a state version.

    Use `from_state()` to compute the checksum and encoding from the raw state file.
    """

    JSONAPI_TYPE = "state-versions"

    lineage: str | None = None
    md5: str | None = None
    """The hex encoded MD5 checksum of the raw state."""

    serial: int | None = None
    state: str | None = None
    """The base64 encoded raw state."""

    force: bool | None = None
    json_state: str | None = None
    """The base64 encoded JSON state, as produced by `terraform show -json`."""

    json_state_outputs: str | None = None

    run: Run | None = relation()

    @classmethod
    def from_state(cls, state: bytes, serial: int, **kwargs: Any) -> StateVersionCreateOptions:
        """Build the options for uploading a raw state file.

        :param state: The raw state.
        :param serial: The serial of the state.
        :param kwargs: Other options, e.g. `lineage`.

        :return: The options, with the checksum and the encoded state.
        """
        return cls(
            md5=hashlib.md5(state).hexdigest(),
            serial=serial,
            state=base64.b64encode(state).decode("ascii"),
            **kwargs,
        )

    def valid(self) -> None:
        if not valid_string(self.md5):
            raise RequiredFieldError("MD5")
        if self.serial is None:
            raise RequiredFieldError("serial")
        if not valid_string(self.state):
            raise RequiredFieldError("state")
