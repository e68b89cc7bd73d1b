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

from typing import Any

from tfe import logging
from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.jsonapi import linkage
from tfe.common.utils import require_id

from .data import (
    Tag,
    Workspace,
    WorkspaceAddTagsOptions,
    WorkspaceAssignSSHKeyOptions,
    WorkspaceCreateOptions,
    WorkspaceListOptions,
    WorkspaceLockOptions,
    WorkspaceReadOptions,
    WorkspaceRemoveTagsOptions,
    WorkspaceTagListOptions,
    WorkspaceUpdateOptions,
)

logger = logging.getLogger("workspaces.client")

__all__ = ["WorkspaceAPIClient"]

_BY_NAME = "organizations/{organization}/workspaces/{workspace}"
_BY_ID = "workspaces/{workspace_id}"


def _by_name(organization: str, workspace: str) -> dict[str, str]:
    return {
        "organization": require_id("organization", organization),
        "workspace": require_id("workspace", workspace),
    }


def _by_id(workspace_id: str) -> dict[str, str]:
    return {"workspace_id": require_id("workspace_id", workspace_id)}


def _without_vcs_repo() -> dict[str, Any]:
    return {"data": {"type": Workspace.JSONAPI_TYPE, "attributes": {"vcs-repo": None}}}


class WorkspaceAPIClient(BaseAPIClient):
    """Client for the workspaces API.

    Most operations can address a workspace by organization and name, or by its ID.
    """

    async def list(self, organization: str, options: WorkspaceListOptions | None = None) -> Page[Workspace]:
        """List the workspaces in an organization.

        :param organization: The organization name.
        :param options: Pagination, search, filter and include options.

        :return: A page of workspaces.

        :raises InvalidIncludeValueError: If the API does not accept the include options.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/workspaces",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[Workspace]},
        )

    async def create(self, organization: str, options: WorkspaceCreateOptions) -> Workspace:
        """Create a workspace in an organization.

        :param organization: The organization name.
        :param options: The workspace settings. The name is required.

        :return: The created workspace.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/workspaces",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": Workspace},
        )

    async def read(self, organization: str, workspace: str, options: WorkspaceReadOptions | None = None) -> Workspace:
        """Read a workspace by its organization and name.

        :param organization: The organization name.
        :param workspace: The workspace name.
        :param options: Include options.

        :return: The workspace.

        :raises InvalidIncludeValueError: If the API does not accept the include options.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            _BY_NAME,
            path_params=_by_name(organization, workspace),
            query_params=self._query(options),
            response_types_map={"200": Workspace},
        )

    async def read_by_id(self, workspace_id: str, options: WorkspaceReadOptions | None = None) -> Workspace:
        """Read a workspace by its ID.

        :param workspace_id: The workspace ID.
        :param options: Include options.

        :return: The workspace.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            _BY_ID,
            path_params=_by_id(workspace_id),
            query_params=self._query(options),
            response_types_map={"200": Workspace},
        )

    async def update(self, organization: str, workspace: str, options: WorkspaceUpdateOptions) -> Workspace:
        """Update the settings of a workspace, addressed by organization and name.

        :param organization: The organization name.
        :param workspace: The workspace name.
        :param options: The settings to change. Settings that are None are left unchanged.

        :return: The updated workspace.
        """
        path_params = _by_name(organization, workspace)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_NAME,
            path_params=path_params,
            body=options,
            response_types_map={"200": Workspace},
        )

    async def update_by_id(self, workspace_id: str, options: WorkspaceUpdateOptions) -> Workspace:
        """Update the settings of a workspace, addressed by ID.

        :param workspace_id: The workspace ID.
        :param options: The settings to change. Settings that are None are left unchanged.

        :return: The updated workspace.
        """
        path_params = _by_id(workspace_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_ID,
            path_params=path_params,
            body=options,
            response_types_map={"200": Workspace},
        )

    async def delete(self, organization: str, workspace: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            _BY_NAME,
            path_params=_by_name(organization, workspace),
            response_types_map={"204": EmptyResponse},
        )

    async def delete_by_id(self, workspace_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            _BY_ID,
            path_params=_by_id(workspace_id),
            response_types_map={"204": EmptyResponse},
        )

    async def safe_delete(self, organization: str, workspace: str) -> None:
        """Delete a workspace, but only if it is not managing any resources.

        :param organization: The organization name.
        :param workspace: The workspace name.

        :raises ConflictException: If the workspace is still managing resources.
        """
        await self._connector.call_api(
            RequestMethod.POST,
            _BY_NAME + "/actions/safe-delete",
            path_params=_by_name(organization, workspace),
            response_types_map={"204": EmptyResponse},
        )

    async def safe_delete_by_id(self, workspace_id: str) -> None:
        """Delete a workspace by ID, but only if it is not managing any resources.

        :param workspace_id: The workspace ID.

        :raises ConflictException: If the workspace is still managing resources.
        """
        await self._connector.call_api(
            RequestMethod.POST,
            _BY_ID + "/actions/safe-delete",
            path_params=_by_id(workspace_id),
            response_types_map={"204": EmptyResponse},
        )

    async def lock(self, workspace_id: str, options: WorkspaceLockOptions | None = None) -> Workspace:
        """Lock a workspace, so that no runs can be applied.

        :param workspace_id: The workspace ID.
        :param options: The reason for locking the workspace.

        :return: The locked workspace.

        :raises ConflictException: If the workspace is already locked.
        """
        return await self._connector.call_api(
            RequestMethod.POST,
            _BY_ID + "/actions/lock",
            path_params=_by_id(workspace_id),
            body=options if options is not None else WorkspaceLockOptions(),
            response_types_map={"200": Workspace},
        )

    async def unlock(self, workspace_id: str) -> Workspace:
        """Unlock a workspace that was locked by the current user.

        :param workspace_id: The workspace ID.

        :return: The unlocked workspace.
        """
        return await self._connector.call_api(
            RequestMethod.POST,
            _BY_ID + "/actions/unlock",
            path_params=_by_id(workspace_id),
            response_types_map={"200": Workspace},
        )

    async def force_unlock(self, workspace_id: str) -> Workspace:
        """Unlock a workspace, regardless of who locked it.

        :param workspace_id: The workspace ID.

        :return: The unlocked workspace.
        """
        return await self._connector.call_api(
            RequestMethod.POST,
            _BY_ID + "/actions/force-unlock",
            path_params=_by_id(workspace_id),
            response_types_map={"200": Workspace},
        )

    async def remove_vcs_connection(self, organization: str, workspace: str) -> Workspace:
        """Disconnect a workspace from its VCS repository.

        :param organization: The organization name.
        :param workspace: The workspace name.

        :return: The updated workspace.
        """
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_NAME,
            path_params=_by_name(organization, workspace),
            body=_without_vcs_repo(),
            response_types_map={"200": Workspace},
        )

    async def remove_vcs_connection_by_id(self, workspace_id: str) -> Workspace:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_ID,
            path_params=_by_id(workspace_id),
            body=_without_vcs_repo(),
            response_types_map={"200": Workspace},
        )

    async def assign_ssh_key(self, workspace_id: str, options: WorkspaceAssignSSHKeyOptions) -> Workspace:
        """Assign an SSH key to a workspace, for use when downloading private modules.

        :param workspace_id: The workspace ID.
        :param options: The SSH key to assign.

        :return: The updated workspace.
        """
        path_params = _by_id(workspace_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_ID + "/relationships/ssh-key",
            path_params=path_params,
            body=options,
            response_types_map={"200": Workspace},
        )

    async def unassign_ssh_key(self, workspace_id: str) -> Workspace:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_ID + "/relationships/ssh-key",
            path_params=_by_id(workspace_id),
            body={"data": {"type": Workspace.JSONAPI_TYPE, "attributes": {"id": None}}},
            response_types_map={"200": Workspace},
        )

    async def list_tags(self, workspace_id: str, options: WorkspaceTagListOptions | None = None) -> Page[Tag]:
        """List the tags of a workspace.

        :param workspace_id: The workspace ID.
        :param options: Pagination and search options.

        :return: A page of tags.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            _BY_ID + "/relationships/tags",
            path_params=_by_id(workspace_id),
            query_params=self._query(options),
            response_types_map={"200": Page[Tag]},
        )

    async def add_tags(self, workspace_id: str, options: WorkspaceAddTagsOptions) -> None:
        """Add tags to a workspace. Tags that do not exist yet are created.

        :param workspace_id: The workspace ID.
        :param options: The tags to add, by ID or name.
        """
        path_params = _by_id(workspace_id)
        options.valid()
        await self._connector.call_api(
            RequestMethod.POST,
            _BY_ID + "/relationships/tags",
            path_params=path_params,
            body={"data": linkage(options.tags)},
            response_types_map={"204": EmptyResponse},
        )

    async def remove_tags(self, workspace_id: str, options: WorkspaceRemoveTagsOptions) -> None:
        """Remove tags from a workspace.

        :param workspace_id: The workspace ID.
        :param options: The tags to remove, by ID or name.
        """
        path_params = _by_id(workspace_id)
        options.valid()
        logger.debug(f"Removing {len(options.tags)} tags from workspace {workspace_id}")
        await self._connector.call_api(
            RequestMethod.DELETE,
            _BY_ID + "/relationships/tags",
            path_params=path_params,
            body={"data": linkage(options.tags)},
            response_types_map={"204": EmptyResponse},
        )
