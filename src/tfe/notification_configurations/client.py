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

from .data import (
    NotificationConfiguration,
    NotificationConfigurationCreateOptions,
    NotificationConfigurationListOptions,
    NotificationConfigurationUpdateOptions,
)

__all__ = ["NotificationConfigurationAPIClient"]

_BY_ID = "notification-configurations/{notification_configuration_id}"


def _by_id(notification_configuration_id: str) -> dict[str, str]:
    return {
        "notification_configuration_id": require_id("notification_configuration_id", notification_configuration_id)
    }


class NotificationConfigurationAPIClient(BaseAPIClient):
    """Client for the notification configurations of workspaces."""

    async def list(
        self, workspace_id: str, options: NotificationConfigurationListOptions | None = None
    ) -> Page[NotificationConfiguration]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/notification-configurations",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[NotificationConfiguration]},
        )

    async def create(
        self, workspace_id: str, options: NotificationConfigurationCreateOptions
    ) -> NotificationConfiguration:
        """Create a notification configuration for a workspace.

        :param workspace_id: The workspace ID.
        :param options: The destination and triggers. The destination type, name and enabled flag are required, and
            so is the URL for destinations other than email.

        :return: The created notification configuration.
        """
        require_id("workspace_id", workspace_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "workspaces/{workspace_id}/notification-configurations",
            path_params={"workspace_id": workspace_id},
            body=options,
            response_types_map={"201": NotificationConfiguration},
        )

    async def read(self, notification_configuration_id: str) -> NotificationConfiguration:
        return await self._connector.call_api(
            RequestMethod.GET,
            _BY_ID,
            path_params=_by_id(notification_configuration_id),
            response_types_map={"200": NotificationConfiguration},
        )

    async def update(
        self, notification_configuration_id: str, options: NotificationConfigurationUpdateOptions
    ) -> NotificationConfiguration:
        path_params = _by_id(notification_configuration_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            _BY_ID,
            path_params=path_params,
            body=options,
            response_types_map={"200": NotificationConfiguration},
        )

    async def delete(self, notification_configuration_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            _BY_ID,
            path_params=_by_id(notification_configuration_id),
            response_types_map={"204": EmptyResponse},
        )

    async def verify(self, notification_configuration_id: str) -> NotificationConfiguration:
        """Send a test notification.

        :param notification_configuration_id: The notification configuration ID.

        :return: The notification configuration, with the response of the delivery attempt in `delivery_responses`.
        """
        return await self._connector.call_api(
            RequestMethod.POST,
            _BY_ID + "/actions/verify",
            path_params=_by_id(notification_configuration_id),
            response_types_map={"200": NotificationConfiguration},
        )
