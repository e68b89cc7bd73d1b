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

from pydantic import Field

from tfe.agent_pools.data import AgentPool
from tfe.common import ListOptions, Options, Resource, relation
from tfe.common.exceptions import ClientValueError, RequiredFieldError
from tfe.common.utils import valid_string
from tfe.organizations.data import Organization
from tfe.projects.data import Project

__all__ = [
    "OAuthClient",
    "OAuthClientCreateOptions",
    "OAuthClientListOptions",
    "OAuthClientUpdateOptions",
    "OAuthToken",
    "OAuthTokenListOptions",
    "OAuthTokenUpdateOptions",
    "ServiceProviderType",
]


class ServiceProviderType(str, Enum):
    """The VCS provider that an OAuth client connects to."""

    AZURE_DEVOPS_SERVER = "ado_server"
    AZURE_DEVOPS_SERVICES = "ado_services"
    BITBUCKET_DATA_CENTER = "bitbucket_data_center"
    BITBUCKET = "bitbucket_hosted"
    BITBUCKET_SERVER = "bitbucket_server"
    GITHUB = "github"
    GITHUB_EE = "github_enterprise"
    GITLAB = "gitlab_hosted"
    GITLAB_CE = "gitlab_community_edition"
    GITLAB_EE = "gitlab_enterprise_edition"


class OAuthClient(Resource):
    """A connection between an organization and a VCS provider."""

    JSONAPI_TYPE = "oauth-clients"

    api_url: str | None = None
    callback_url: str | None = None
    connect_path: str | None = None
    created_at: datetime | None = None
    http_url: str | None = None
    key: str | None = None
    name: str | None = None
    organization_scoped: bool | None = None
    rsa_public_key: str | None = None
    service_provider: ServiceProviderType | str | None = None
    service_provider_name: str | None = Field(default=None, alias="service-provider-display-name")

    organization: Organization | None = relation()
    projects: list[Project] | None = relation()
    agent_pool: AgentPool | None = relation()


class OAuthToken(Resource):
    """The access token that an OAuth client uses to talk to its VCS provider."""

    JSONAPI_TYPE = "oauth-tokens"

    uid: str | None = None
    created_at: datetime | None = None
    has_ssh_key: bool | None = None
    service_provider_user: str | None = None

    oauth_client: OAuthClient | None = relation()


class OAuthClientListOptions(ListOptions):
    include: list[str] | None = None
    """Related resources to include, e.g. `oauth_tokens` or `projects`."""


class OAuthClientCreateOptions(Options):
    JSONAPI_TYPE = "oauth-clients"

    name: str | None = None
    api_url: str | None = None
    http_url: str | None = None
    oauth_token: str | None = Field(default=None, alias="oauth-token-string")
    """The token string from the VCS provider. Not required for Bitbucket Server."""

    private_key: str | None = None
    """The SSH private key. Only supported for Azure DevOps Server."""

    secret: str | None = None
    rsa_public_key: str | None = None
    key: str | None = None
    service_provider: ServiceProviderType | None = None
    organization_scoped: bool | None = None

    projects: list[Project] | None = relation()
    agent_pool: AgentPool | None = relation()

    def valid(self) -> None:
        if not valid_string(self.api_url):
            raise RequiredFieldError("API URL")
        if not valid_string(self.http_url):
            raise RequiredFieldError("HTTP URL")
        if self.service_provider is None:
            raise RequiredFieldError("service provider")
        if not valid_string(self.oauth_token) and self.service_provider != ServiceProviderType.BITBUCKET_SERVER:
            raise RequiredFieldError("OAuth token")
        if valid_string(self.private_key) and self.service_provider != ServiceProviderType.AZURE_DEVOPS_SERVER:
            raise ClientValueError("private key is only supported for Azure DevOps Server")


class OAuthClientUpdateOptions(Options):
    JSONAPI_TYPE = "oauth-clients"

    name: str | None = None
    key: str | None = None
    secret: str | None = None
    rsa_public_key: str | None = None
    oauth_token: str | None = Field(default=None, alias="oauth-token-string")
    organization_scoped: bool | None = None

    agent_pool: AgentPool | None = relation()


class OAuthTokenListOptions(ListOptions):
    pass


class OAuthTokenUpdateOptions(Options):
    JSONAPI_TYPE = "oauth-tokens"

    private_ssh_key: str | None = Field(default=None, alias="ssh-key")
    """A private SSH key, used to clone git submodules over SSH."""
