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

from enum import Enum

from pydantic import Field

from tfe.common import ListOptions, Options, QueryOptions, Resource, relation
from tfe.common.exceptions import InvalidValueError, RequiredFieldError
from tfe.common.utils import valid_email, valid_string
from tfe.organizations.data import Organization
from tfe.teams.data import Team
from tfe.users.data import User

__all__ = [
    "OrganizationMembership",
    "OrganizationMembershipCreateOptions",
    "OrganizationMembershipIncludeOpt",
    "OrganizationMembershipListOptions",
    "OrganizationMembershipReadOptions",
    "OrganizationMembershipStatus",
]


class OrganizationMembershipStatus(str, Enum):
    ACTIVE = "active"
    INVITED = "invited"


class OrganizationMembershipIncludeOpt(str, Enum):
    USER = "user"
    TEAMS = "teams"


class OrganizationMembership(Resource):
    """The membership of a user in an organization. Invited users become active once they accept the invitation."""

    JSONAPI_TYPE = "organization-memberships"

    status: OrganizationMembershipStatus | str | None = None
    email: str | None = None

    organization: Organization | None = relation()
    user: User | None = relation()
    teams: list[Team] | None = relation()


class OrganizationMembershipReadOptions(QueryOptions):
    include: list[OrganizationMembershipIncludeOpt] | None = None


class OrganizationMembershipListOptions(ListOptions):
    include: list[OrganizationMembershipIncludeOpt] | None = None

    emails: list[str] | None = Field(default=None, alias="filter[email]")
    """Only list the memberships of users with one of these email addresses."""

    status: OrganizationMembershipStatus | None = Field(default=None, alias="filter[status]")

    query: str | None = Field(default=None, alias="q")
    """Only list memberships whose user name or email contains this string."""

    def valid(self) -> None:
        for email in self.emails or ():
            if not valid_email(email):
                raise InvalidValueError("email", email)


class OrganizationMembershipCreateOptions(Options):
    JSONAPI_TYPE = "organization-memberships"

    email: str | None = None
    """The email address of the user to invite."""

    teams: list[Team] | None = relation()
    """The teams to add the user to once the invitation is accepted."""

    def valid(self) -> None:
        if not valid_string(self.email):
            raise RequiredFieldError("email")
