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

import asyncio
import os

from tfe import logging
from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import require_id

from .data import (
    ConfigurationVersion,
    ConfigurationVersionCreateOptions,
    ConfigurationVersionListOptions,
    ConfigurationVersionReadOptions,
)
from .io import pack

logger = logging.getLogger("configuration_versions.client")

__all__ = ["ConfigurationVersionAPIClient"]


class ConfigurationVersionAPIClient(BaseAPIClient):
    """Client for the configuration versions API."""

    async def list(
        self, workspace_id: str, options: ConfigurationVersionListOptions | None = None
    ) -> Page[ConfigurationVersion]:
        """List the configuration versions of a workspace.

        :param workspace_id: The workspace ID.
        :param options: Pagination and include options.

        :return: A page of configuration versions.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/configuration-versions",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[ConfigurationVersion]},
        )

    async def create(
        self, workspace_id: str, options: ConfigurationVersionCreateOptions | None = None
    ) -> ConfigurationVersion:
        """Create a configuration version in a workspace.

        The new configuration version is pending until a configuration is uploaded to its upload URL.

        :param workspace_id: The workspace ID.
        :param options: Creation options.

        :return: The created configuration version, including the upload URL.
        """
        return await self._connector.call_api(
            RequestMethod.POST,
            "workspaces/{workspace_id}/configuration-versions",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            body=options or ConfigurationVersionCreateOptions(),
            response_types_map={"201": ConfigurationVersion},
        )

    async def read(self, configuration_version_id: str) -> ConfigurationVersion:
        return await self.read_with_options(configuration_version_id)

    async def read_with_options(
        self, configuration_version_id: str, options: ConfigurationVersionReadOptions | None = None
    ) -> ConfigurationVersion:
        return await self._connector.call_api(
            RequestMethod.GET,
            "configuration-versions/{configuration_version_id}",
            path_params={
                "configuration_version_id": require_id("configuration_version_id", configuration_version_id)
            },
            query_params=self._query(options),
            response_types_map={"200": ConfigurationVersion},
        )

    async def upload(self, upload_url: str, path: str | os.PathLike[str]) -> None:
        """Pack a directory and upload it as the configuration.

        :param upload_url: The upload URL of a configuration version.
        :param path: The directory that holds the Terraform configuration.

        :raises ClientValueError: If `path` is not a directory.
        """
        data = await asyncio.to_thread(pack, path)
        await self.upload_tar_gzip(upload_url, data)

    async def upload_tar_gzip(self, upload_url: str, data: bytes) -> None:
        """Upload a configuration that has already been packed as a gzip compressed tarball.

        :param upload_url: The upload URL of a configuration version.
        :param data: The compressed archive.
        """
        logger.info(f"Uploading configuration ({len(data)} bytes)")
        await self._connector.put_object(upload_url, data)

    async def archive(self, configuration_version_id: str) -> None:
        """Archive a configuration version, which deletes its uploaded configuration.

        Only configuration versions that are not the current configuration of a workspace can be archived.

        :param configuration_version_id: The configuration version ID.
        """
        await self._connector.call_api(
            RequestMethod.POST,
            "configuration-versions/{configuration_version_id}/actions/archive",
            path_params={
                "configuration_version_id": require_id("configuration_version_id", configuration_version_id)
            },
            response_types_map={"202": EmptyResponse},
        )

    async def download(self, configuration_version_id: str) -> bytes:
        """Download the uploaded configuration as a gzip compressed tarball.

        :param configuration_version_id: The configuration version ID.

        :return: The compressed archive.
        """
        return await self._download(
            "configuration-versions/{configuration_version_id}/download",
            path_params={
                "configuration_version_id": require_id("configuration_version_id", configuration_version_id)
            },
        )
