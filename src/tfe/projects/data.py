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

from pydantic import Field

from tfe.common import ListOptions, Options, Resource, relation
from tfe.common.exceptions import InvalidValueError, RequiredFieldError
from tfe.common.utils import valid_string
from tfe.organizations.data import Organization

__all__ = [
    "Project",
    "ProjectCreateOptions",
    "ProjectListOptions",
    "ProjectUpdateOptions",
]

_MIN_NAME_LENGTH = 3
_MAX_NAME_LENGTH = 40


def _check_name(name: str) -> None:
    if not _MIN_NAME_LENGTH <= len(name) <= _MAX_NAME_LENGTH:
        raise InvalidValueError("name", name)


class Project(Resource):
    """A project groups workspaces within an organization."""

    JSONAPI_TYPE = "projects"

    name: str | None = None
    description: str | None = None

    organization: Organization | None = relation()


class ProjectListOptions(ListOptions):
    names: list[str] | None = Field(default=None, alias="filter[names]")
    """Only list projects with one of these names."""

    query: str | None = Field(default=None, alias="q")
    """Only list projects whose name contains this string."""


class ProjectCreateOptions(Options):
    JSONAPI_TYPE = "projects"

    name: str | None = None
    description: str | None = None

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        _check_name(self.name)


class ProjectUpdateOptions(Options):
    JSONAPI_TYPE = "projects"

    name: str | None = None
    description: str | None = None

    def valid(self) -> None:
        if self.name is not None:
            _check_name(self.name)
