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

from tfe.common import Options, Resource
from tfe.common.exceptions import InvalidValueError

__all__ = [
    "CostEstimationSetting",
    "CostEstimationSettingUpdateOptions",
    "CustomizationSetting",
    "CustomizationSettingUpdateOptions",
    "GeneralSetting",
    "GeneralSettingUpdateOptions",
    "SAMLSetting",
    "SAMLSettingUpdateOptions",
    "SMTPAuthType",
    "SMTPSetting",
    "SMTPSettingUpdateOptions",
    "TwilioSetting",
    "TwilioSettingUpdateOptions",
    "TwilioSettingVerifyOptions",
]


class GeneralSetting(Resource):
    JSONAPI_TYPE = "general-settings"

    limit_user_organization_creation: bool | None = None
    api_rate_limiting_enabled: bool | None = None
    api_rate_limit: int | None = None
    send_passing_statuses_enabled: bool | None = Field(
        default=None, alias="send-passing-statuses-for-untriggered-speculative-plans"
    )
    allow_speculative_plans_on_pr: bool | None = Field(
        default=None, alias="allow-speculative-plans-on-pull-requests-from-forks"
    )
    default_remote_state_access: bool | None = None


class GeneralSettingUpdateOptions(Options):
    JSONAPI_TYPE = "general-settings"

    limit_user_organization_creation: bool | None = None
    api_rate_limiting_enabled: bool | None = None
    api_rate_limit: int | None = None
    send_passing_statuses_enabled: bool | None = Field(
        default=None, alias="send-passing-statuses-for-untriggered-speculative-plans"
    )
    allow_speculative_plans_on_pr: bool | None = Field(
        default=None, alias="allow-speculative-plans-on-pull-requests-from-forks"
    )
    default_remote_state_access: bool | None = None


class CostEstimationSetting(Resource):
    JSONAPI_TYPE = "cost-estimation-settings"

    enabled: bool | None = None
    aws_access_key_id: str | None = None
    gcp_credentials: str | None = None
    azure_client_id: str | None = None
    azure_subscription_id: str | None = None
    azure_tenant_id: str | None = None


class CostEstimationSettingUpdateOptions(Options):
    JSONAPI_TYPE = "cost-estimation-settings"

    enabled: bool | None = None
    aws_access_key_id: str | None = None
    aws_secret_key: str | None = None
    gcp_credentials: str | None = None
    azure_client_id: str | None = None
    azure_client_secret: str | None = None
    azure_subscription_id: str | None = None
    azure_tenant_id: str | None = None


class CustomizationSetting(Resource):
    JSONAPI_TYPE = "customization-settings"

    support_email_address: str | None = None
    login_help: str | None = None
    footer: str | None = None
    error: str | None = None
    new_user: str | None = None


class CustomizationSettingUpdateOptions(Options):
    JSONAPI_TYPE = "customization-settings"

    support_email_address: str | None = None
    login_help: str | None = None
    footer: str | None = None
    error: str | None = None
    new_user: str | None = None


class SAMLSetting(Resource):
    JSONAPI_TYPE = "saml-settings"

    enabled: bool | None = None
    debug: bool | None = None
    authn_requests_signed: bool | None = None
    want_assertions_signed: bool | None = None
    team_management_enabled: bool | None = None
    old_idp_cert: str | None = None
    idp_cert: str | None = None
    slo_endpoint_url: str | None = None
    sso_endpoint_url: str | None = None
    attr_username: str | None = None
    attr_groups: str | None = None
    attr_site_admin: str | None = None
    site_admin_role: str | None = None
    sso_api_token_session_timeout: int | None = None
    acs_consumer_url: str | None = None
    metadata_url: str | None = None
    certificate: str | None = None
    signature_signing_method: str | None = None
    signature_digest_method: str | None = None


class SAMLSettingUpdateOptions(Options):
    JSONAPI_TYPE = "saml-settings"

    enabled: bool | None = None
    debug: bool | None = None
    authn_requests_signed: bool | None = None
    want_assertions_signed: bool | None = None
    team_management_enabled: bool | None = None
    idp_cert: str | None = None
    slo_endpoint_url: str | None = None
    sso_endpoint_url: str | None = None
    attr_username: str | None = None
    attr_groups: str | None = None
    attr_site_admin: str | None = None
    site_admin_role: str | None = None
    sso_api_token_session_timeout: int | None = None
    certificate: str | None = None
    private_key: str | None = None
    signature_signing_method: str | None = None
    signature_digest_method: str | None = None


class SMTPAuthType(str, Enum):
    NONE = "none"
    PLAIN = "plain"
    LOGIN = "login"


class SMTPSetting(Resource):
    JSONAPI_TYPE = "smtp-settings"

    enabled: bool | None = None
    host: str | None = None
    port: int | None = None
    sender: str | None = None
    auth: SMTPAuthType | str | None = None
    username: str | None = None


class SMTPSettingUpdateOptions(Options):
    """Options for updating the SMTP settings. The authentication type is required."""

    JSONAPI_TYPE = "smtp-settings"

    enabled: bool | None = None
    host: str | None = None
    port: int | None = None
    sender: str | None = None
    auth: SMTPAuthType | str | None = None
    username: str | None = None
    password: str | None = None
    test_email_address: str | None = None

    def valid(self) -> None:
        if self.auth not in tuple(SMTPAuthType):
            raise InvalidValueError("SMTP auth", self.auth)


class TwilioSetting(Resource):
    JSONAPI_TYPE = "twilio-settings"

    enabled: bool | None = None
    account_sid: str | None = None
    from_number: str | None = None


class TwilioSettingUpdateOptions(Options):
    JSONAPI_TYPE = "twilio-settings"

    enabled: bool | None = None
    account_sid: str | None = None
    auth_token: str | None = None
    from_number: str | None = None


class TwilioSettingVerifyOptions(Options):
    JSONAPI_TYPE = "twilio-settings"

    test_number: str | None = None
    """The phone number to send a test message to."""
