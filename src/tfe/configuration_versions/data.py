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

from tfe.common import Attributes, ListOptions, Options, QueryOptions, Resource

__all__ = [
    "ConfigurationSource",
    "ConfigurationStatus",
    "ConfigurationVersion",
    "ConfigurationVersionCreateOptions",
    "ConfigurationVersionListOptions",
    "ConfigurationVersionReadOptions",
    "ConfigurationVersionStatusTimestamps",
]


class ConfigurationStatus(str, Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    UPLOADED = "uploaded"
    ARCHIVED = "archived"
    ERRORED = "errored"


class ConfigurationSource(str, Enum):
    API = "tfe-api"
    BITBUCKET = "bitbucket"
    GITHUB = "github"
    GITLAB = "gitlab"
    ADO = "ado"
    TERRAFORM = "terraform"


class ConfigurationVersionStatusTimestamps(Attributes):
    archived_at: datetime | None = None
    errored_at: datetime | None = None
    fetching_at: datetime | None = None
    finished_at: datetime | None = None
    queued_at: datetime | None = None
    started_at: datetime | None = None
    uploaded_at: datetime | None = None


class ConfigurationVersion(Resource):
    """A version of the Terraform configuration of a workspace."""

    JSONAPI_TYPE = "configuration-versions"

    auto_queue_runs: bool | None = None
    error: str | None = None
    error_message: str | None = None
    source: ConfigurationSource | str | None = None
    speculative: bool | None = None
    provisional: bool | None = None
    status: ConfigurationStatus | str | None = None
    status_timestamps: ConfigurationVersionStatusTimestamps | None = None
    upload_url: str | None = None


class ConfigurationVersionListOptions(ListOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `ingress_attributes`."""


class ConfigurationVersionReadOptions(QueryOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `ingress_attributes`."""


class ConfigurationVersionCreateOptions(Options):
    JSONAPI_TYPE = "configuration-versions"

    auto_queue_runs: bool | None = None
    """Queue a run as soon as the configuration has been uploaded. The API defaults to true."""

    speculative: bool | None = None
    """Only allow speculative plans with this configuration."""

    provisional: bool | None = None
    """Do not make this the current configuration version of the workspace until a run using it is applied."""
