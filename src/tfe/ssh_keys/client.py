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

from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import require_id

from .data import SSHKey, SSHKeyCreateOptions, SSHKeyListOptions, SSHKeyUpdateOptions

__all__ = ["SSHKeyAPIClient"]


class SSHKeyAPIClient(BaseAPIClient):
    """Client for the SSH keys of an organization."""

    async def list(self, organization: str, options: SSHKeyListOptions | None = None) -> Page[SSHKey]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/ssh-keys",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[SSHKey]},
        )

    async def create(self, organization: str, options: SSHKeyCreateOptions) -> SSHKey:
        """Upload an SSH key to an organization.

        :param organization: The organization name.
        :param options: The key name and the private key. Both are required.

        :return: The created SSH key.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/ssh-keys",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": SSHKey},
        )

    async def read(self, ssh_key_id: str) -> SSHKey:
        return await self._connector.call_api(
            RequestMethod.GET,
            "ssh-keys/{ssh_key_id}",
            path_params={"ssh_key_id": require_id("ssh_key_id", ssh_key_id)},
            response_types_map={"200": SSHKey},
        )

    async def update(self, ssh_key_id: str, options: SSHKeyUpdateOptions) -> SSHKey:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "ssh-keys/{ssh_key_id}",
            path_params={"ssh_key_id": require_id("ssh_key_id", ssh_key_id)},
            body=options,
            response_types_map={"200": SSHKey},
        )

    async def delete(self, ssh_key_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "ssh-keys/{ssh_key_id}",
            path_params={"ssh_key_id": require_id("ssh_key_id", ssh_key_id)},
            response_types_map={"204": EmptyResponse},
        )
