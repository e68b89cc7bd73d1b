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

from tfe.common import ListOptions, Options, QueryOptions, Resource, relation
from tfe.common.exceptions import RequiredFieldError
from tfe.common.utils import valid_string
from tfe.organizations.data import Organization
from tfe.projects.data import Project
from tfe.workspaces.data import CategoryType, Workspace

__all__ = [
    "VariableSet",
    "VariableSetCreateOptions",
    "VariableSetListOptions",
    "VariableSetReadOptions",
    "VariableSetUpdateOptions",
    "VariableSetUpdateWorkspacesOptions",
    "VariableSetVariable",
    "VariableSetVariableCreateOptions",
    "VariableSetVariableListOptions",
    "VariableSetVariableUpdateOptions",
]


class VariableSetVariable(Resource):
    """A variable that belongs to a variable set."""

    JSONAPI_TYPE = "vars"

    key: str | None = None
    value: str | None = None
    description: str | None = None
    category: CategoryType | str | None = None
    hcl: bool | None = None
    sensitive: bool | None = None
    version_id: str | None = None

    variable_set: VariableSet | None = relation(alias="varset")


class VariableSet(Resource):
    """A set of variables that is shared by workspaces or projects, or by the whole organization if it is global."""

    JSONAPI_TYPE = "varsets"

    name: str | None = None
    description: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    priority: bool | None = None
    """Whether the variables of this set override variables with the same key that are set elsewhere."""

    organization: Organization | None = relation()
    workspaces: list[Workspace] | None = relation()
    projects: list[Project] | None = relation()
    variables: list[VariableSetVariable] | None = relation(alias="vars")


VariableSetVariable.model_rebuild()


class VariableSetListOptions(ListOptions):
    query: str | None = Field(default=None, alias="q")
    """Only list variable sets whose name contains this string."""

    include: list[str] | None = None
    """Related resources to include: `workspaces`, `projects` or `vars`."""


class VariableSetReadOptions(QueryOptions):
    include: list[str] | None = None
    """Related resources to include: `workspaces`, `projects` or `vars`."""


class VariableSetCreateOptions(Options):
    JSONAPI_TYPE = "varsets"

    name: str | None = None
    description: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    priority: bool | None = None

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if self.global_ is None:
            raise RequiredFieldError("global")


class VariableSetUpdateOptions(Options):
    JSONAPI_TYPE = "varsets"

    name: str | None = None
    description: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    priority: bool | None = None


class VariableSetUpdateWorkspacesOptions(Options):
    """Replace the workspaces that a variable set is applied to. An empty list removes every workspace."""

    JSONAPI_TYPE = "varsets"

    global_: bool | None = Field(default=None, alias="global")

    workspaces: list[Workspace] | None = relation()


class VariableSetVariableListOptions(ListOptions):
    pass


class VariableSetVariableCreateOptions(Options):
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


class VariableSetVariableUpdateOptions(Options):
    JSONAPI_TYPE = "vars"

    key: str | None = None
    value: str | None = None
    description: str | None = None
    hcl: bool | None = None
    sensitive: bool | None = None
