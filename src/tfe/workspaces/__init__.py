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

from .client import WorkspaceAPIClient
from .data import (
    CategoryType,
    Tag,
    Variable,
    VariableCreateOptions,
    VariableListOptions,
    VariableUpdateOptions,
    VCSRepo,
    VCSRepoOptions,
    Workspace,
    WorkspaceActions,
    WorkspaceAddTagsOptions,
    WorkspaceAssignSSHKeyOptions,
    WorkspaceCreateOptions,
    WorkspaceListOptions,
    WorkspaceLockOptions,
    WorkspacePermissions,
    WorkspaceReadOptions,
    WorkspaceRemoveTagsOptions,
    WorkspaceTagListOptions,
    WorkspaceUpdateOptions,
)
from .variables import VariableAPIClient

__all__ = [
    "CategoryType",
    "Tag",
    "VCSRepo",
    "VCSRepoOptions",
    "Variable",
    "VariableAPIClient",
    "VariableCreateOptions",
    "VariableListOptions",
    "VariableUpdateOptions",
    "Workspace",
    "WorkspaceAPIClient",
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
