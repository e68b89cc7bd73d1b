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

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType

from tfe import logging
from tfe.admin import AdminAPIClient
from tfe.agent_pools import AgentPoolAPIClient
from tfe.aio import AioTransport, RetryLogHook
from tfe.common import APIConnector, HTTPResponse, ITransport, RequestMethod, TokenAuthorizer
from tfe.common.exceptions import ClientValueError
from tfe.common.utils import get_user_agent
from tfe.common.utils.rate_limit import RateLimiter
from tfe.configuration_versions import ConfigurationVersionAPIClient
from tfe.meta import MetaAPIClient
from tfe.notification_configurations import NotificationConfigurationAPIClient
from tfe.oauth import OAuthClientAPIClient, OAuthTokenAPIClient
from tfe.organization_memberships import OrganizationMembershipAPIClient
from tfe.organizations import OrganizationAPIClient, OrganizationTokenAPIClient
from tfe.policies import PolicyAPIClient, PolicyCheckAPIClient, PolicySetAPIClient
from tfe.projects import ProjectAPIClient
from tfe.runs import ApplyAPIClient, CommentAPIClient, CostEstimateAPIClient, PlanAPIClient, RunAPIClient
from tfe.ssh_keys import SSHKeyAPIClient
from tfe.stacks import StackAPIClient, StackConfigurationAPIClient
from tfe.state_versions import StateVersionAPIClient, StateVersionOutputAPIClient
from tfe.teams import TeamAccessAPIClient, TeamAPIClient, TeamMemberAPIClient, TeamTokenAPIClient
from tfe.users import UserAPIClient
from tfe.variable_sets import VariableSetAPIClient, VariableSetVariableAPIClient
from tfe.workspaces import VariableAPIClient, WorkspaceAPIClient

__all__ = [
    "DEFAULT_ADDRESS",
    "DEFAULT_BASE_PATH",
    "Config",
    "TFEClient",
]

logger = logging.getLogger("client")

DEFAULT_ADDRESS = "https://app.terraform.io"
DEFAULT_BASE_PATH = "/api/v2/"

_CLOUD_APP_NAMES = frozenset({"HCP Terraform", "Terraform Cloud"})


@dataclass(frozen=True, kw_only=True)
class Config:
    """Configuration for a `TFEClient`."""

    address: str = DEFAULT_ADDRESS
    """The address of the Terraform Enterprise or HCP Terraform instance."""

    base_path: str = DEFAULT_BASE_PATH
    """The base path of the API on the instance."""

    token: str | None = None
    """The API token used to authenticate requests."""

    headers: Mapping[str, str] = field(default_factory=dict)
    """Additional headers to send with every request."""

    user_agent: str = field(default_factory=get_user_agent)
    """The value to provide in the `User-Agent` header."""

    retry_server_errors: bool = False
    """Retry 5xx responses and connection errors, in addition to rate limited responses."""

    retry_max: int = 30
    """The maximum number of retries after the first attempt."""

    retry_log_hook: RetryLogHook | None = None
    """Called with the attempt number and the response (if any) before each retry."""

    verify_ssl: bool = True
    """Verify SSL certificates."""

    @classmethod
    def from_env(cls, **overrides) -> Config:
        """Create a configuration from the `TFE_ADDRESS` and `TFE_TOKEN` environment variables.

        :param overrides: Configuration values that take precedence over the environment.

        :return: The configuration.
        """
        values = {}
        if address := os.environ.get("TFE_ADDRESS"):
            values["address"] = address
        if token := os.environ.get("TFE_TOKEN"):
            values["token"] = token
        values.update(overrides)
        return cls(**values)

    @property
    def base_url(self) -> str:
        """The URL of the API, including the base path."""
        return f"{self.address.rstrip('/')}/{self.base_path.strip('/')}/"


class TFEClient:
    """Client for the Terraform Enterprise and HCP Terraform API.

    Every resource family has its own API client, and all of them share a single connector. Entering the client as an
    async context manager opens the transport and pings the API, which configures rate limiting and records the remote
    versions.

    Usage::
        async with TFEClient(Config.from_env()) as client:
            org = await client.organizations.read("my-org")
    """

    def __init__(self, config: Config | None = None, transport: ITransport | None = None) -> None:
        """
        :param config: The client configuration. Read from the environment if not given.
        :param transport: The transport to use. An `AioTransport` is created from the configuration if not given.

        :raises ClientValueError: If no API token is configured.
        """
        self._config = config = config if config is not None else Config.from_env()
        if not config.token:
            raise ClientValueError("missing API token")

        if transport is None:
            transport = AioTransport(
                user_agent=config.user_agent,
                max_attempts=config.retry_max + 1,
                retry_server_errors=config.retry_server_errors,
                retry_log_hook=config.retry_log_hook,
                verify_ssl=config.verify_ssl,
            )

        self._connector = connector = APIConnector(
            config.base_url,
            transport,
            TokenAuthorizer(config.token),
            additional_headers=dict(config.headers),
            rate_limiter=RateLimiter(),
        )

        self.remote_api_version: str | None = None
        """The API version reported by the remote instance."""

        self.remote_tfe_version: str | None = None
        """The Terraform Enterprise release of the remote instance. Not reported by HCP Terraform."""

        self.app_name: str | None = None
        """The application name reported by the remote instance."""

        self.organizations = OrganizationAPIClient(connector)
        self.organization_memberships = OrganizationMembershipAPIClient(connector)
        self.organization_tokens = OrganizationTokenAPIClient(connector)
        self.workspaces = WorkspaceAPIClient(connector)
        self.variables = VariableAPIClient(connector)
        self.projects = ProjectAPIClient(connector)
        self.variable_sets = VariableSetAPIClient(connector)
        self.variable_set_variables = VariableSetVariableAPIClient(connector)
        self.runs = RunAPIClient(connector)
        self.plans = PlanAPIClient(connector)
        self.applies = ApplyAPIClient(connector)
        self.cost_estimates = CostEstimateAPIClient(connector)
        self.comments = CommentAPIClient(connector)
        self.notification_configurations = NotificationConfigurationAPIClient(connector)
        self.configuration_versions = ConfigurationVersionAPIClient(connector)
        self.state_versions = StateVersionAPIClient(connector)
        self.state_version_outputs = StateVersionOutputAPIClient(connector)
        self.policies = PolicyAPIClient(connector)
        self.policy_sets = PolicySetAPIClient(connector)
        self.policy_checks = PolicyCheckAPIClient(connector)
        self.teams = TeamAPIClient(connector)
        self.team_access = TeamAccessAPIClient(connector)
        self.team_members = TeamMemberAPIClient(connector)
        self.team_tokens = TeamTokenAPIClient(connector)
        self.users = UserAPIClient(connector)
        self.ssh_keys = SSHKeyAPIClient(connector)
        self.agent_pools = AgentPoolAPIClient(connector)
        self.oauth_clients = OAuthClientAPIClient(connector)
        self.oauth_tokens = OAuthTokenAPIClient(connector)
        self.admin = AdminAPIClient(connector)
        self.stacks = StackAPIClient(connector)
        self.stack_configurations = StackConfigurationAPIClient(connector)
        self.meta = MetaAPIClient(connector)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def connector(self) -> APIConnector:
        """The connector shared by every API client."""
        return self._connector

    async def ping(self) -> None:
        """Read the API metadata of the remote instance.

        The remote API version, release and application name are recorded, and the rate limiter is configured from the
        rate limit that is reported by the instance.
        """
        response = await self._connector.call_api(
            RequestMethod.GET,
            "ping",
            response_types_map={"200": HTTPResponse, "204": HTTPResponse},
        )
        self.remote_api_version = response.getheader("TFP-API-Version")
        self.remote_tfe_version = response.getheader("X-TFE-Version")
        self.app_name = response.getheader("TFP-AppName")
        self._connector.rate_limiter.configure_from_header(response.getheader("X-RateLimit-Limit"))
        logger.debug(
            f"Connected to {self.app_name or 'unknown application'} "
            f"(API version {self.remote_api_version}, TFE version {self.remote_tfe_version})"
        )

    def is_cloud(self) -> bool:
        """Whether the remote instance is HCP Terraform, rather than Terraform Enterprise.

        Only known after `ping()`.
        """
        return self.app_name in _CLOUD_APP_NAMES

    def is_enterprise(self) -> bool:
        """Whether the remote instance is Terraform Enterprise. Only known after `ping()`."""
        return self.app_name is not None and not self.is_cloud()

    async def __aenter__(self) -> TFEClient:
        await self._connector.open()
        try:
            await self.ping()
        except Exception:
            await self._connector.close()
            raise
        return self

    async def __aexit__(
        self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: TracebackType | None
    ) -> None:
        await self._connector.close()
