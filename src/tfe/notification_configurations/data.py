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

from tfe.common import Attributes, ListOptions, Options, Resource, relation
from tfe.common.exceptions import RequiredFieldError
from tfe.common.utils import valid_string
from tfe.users.data import User

__all__ = [
    "DeliveryResponse",
    "NotificationConfiguration",
    "NotificationConfigurationCreateOptions",
    "NotificationConfigurationListOptions",
    "NotificationConfigurationUpdateOptions",
    "NotificationDestinationType",
    "NotificationTriggerType",
]


class NotificationDestinationType(str, Enum):
    EMAIL = "email"
    GENERIC = "generic"
    SLACK = "slack"
    MICROSOFT_TEAMS = "microsoft-teams"


class NotificationTriggerType(str, Enum):
    """The events that send a notification."""

    CREATED = "run:created"
    PLANNING = "run:planning"
    NEEDS_ATTENTION = "run:needs_attention"
    APPLYING = "run:applying"
    COMPLETED = "run:completed"
    ERRORED = "run:errored"
    ASSESSMENT_DRIFTED = "assessment:drifted"
    ASSESSMENT_FAILED = "assessment:failed"
    ASSESSMENT_CHECK_FAILED = "assessment:check_failure"
    WORKSPACE_AUTO_DESTROY_REMINDER = "workspace:auto_destroy_reminder"
    WORKSPACE_AUTO_DESTROY_RUN_RESULTS = "workspace:auto_destroy_run_results"
    CHANGE_REQUEST_CREATED = "change_request:created"


# These destinations deliver to a URL.
_URL_DESTINATIONS = (
    NotificationDestinationType.GENERIC,
    NotificationDestinationType.SLACK,
    NotificationDestinationType.MICROSOFT_TEAMS,
)


class DeliveryResponse(Attributes):
    """The response to a notification that was delivered to a URL."""

    body: str | None = None
    code: int | str | None = None
    headers: dict[str, list[str]] | None = None
    sent_at: datetime | None = None
    successful: bool | str | None = None
    url: str | None = None


class NotificationConfiguration(Resource):
    """Where and when notifications about the runs of a workspace are sent."""

    JSONAPI_TYPE = "notification-configurations"

    created_at: datetime | None = None
    delivery_responses: list[DeliveryResponse] | None = None
    destination_type: NotificationDestinationType | str | None = None
    email_addresses: list[str] | None = None
    enabled: bool | None = None
    name: str | None = None
    token: str | None = None
    triggers: list[NotificationTriggerType | str] | None = None
    updated_at: datetime | None = None
    url: str | None = None

    # A workspace, or a team.
    subscribable: Resource | None = relation()
    email_users: list[User] | None = relation(alias="users")


class NotificationConfigurationListOptions(ListOptions):
    pass


class NotificationConfigurationCreateOptions(Options):
    JSONAPI_TYPE = "notification-configurations"

    destination_type: NotificationDestinationType | None = None
    enabled: bool | None = None
    name: str | None = None
    token: str | None = None
    """A secret used to sign the payload of generic notifications."""

    triggers: list[NotificationTriggerType] | None = None
    url: str | None = None
    """The URL to deliver to. Required for the generic, Slack and Microsoft Teams destinations."""

    email_addresses: list[str] | None = None
    """Email addresses to notify. Only available on Terraform Enterprise."""

    email_users: list[User] | None = relation(alias="users")

    def valid(self) -> None:
        if self.destination_type is None:
            raise RequiredFieldError("destination type")
        if self.enabled is None:
            raise RequiredFieldError("enabled")
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if self.destination_type in _URL_DESTINATIONS and not valid_string(self.url):
            raise RequiredFieldError("url")


class NotificationConfigurationUpdateOptions(Options):
    JSONAPI_TYPE = "notification-configurations"

    enabled: bool | None = None
    name: str | None = None
    token: str | None = None
    triggers: list[NotificationTriggerType] | None = None
    url: str | None = None
    email_addresses: list[str] | None = None

    email_users: list[User] | None = relation(alias="users")

    def valid(self) -> None:
        if self.name is not None and not valid_string(self.name):
            raise RequiredFieldError("name")
