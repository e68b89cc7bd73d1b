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

"""Clients for the site-wide settings of a Terraform Enterprise installation.

Each setting is a singleton, which can be read and updated by site administrators. These endpoints are not available
in HCP Terraform.
"""

from __future__ import annotations

from typing import TypeVar

from tfe.common import APIConnector, BaseAPIClient, EmptyResponse, Options, RequestMethod, Resource

from .data import (
    CostEstimationSetting,
    CostEstimationSettingUpdateOptions,
    CustomizationSetting,
    CustomizationSettingUpdateOptions,
    GeneralSetting,
    GeneralSettingUpdateOptions,
    SAMLSetting,
    SAMLSettingUpdateOptions,
    SMTPSetting,
    SMTPSettingUpdateOptions,
    TwilioSetting,
    TwilioSettingUpdateOptions,
    TwilioSettingVerifyOptions,
)

__all__ = [
    "AdminSettings",
    "CostEstimationSettingAPIClient",
    "CustomizationSettingAPIClient",
    "GeneralSettingAPIClient",
    "SAMLSettingAPIClient",
    "SMTPSettingAPIClient",
    "TwilioSettingAPIClient",
]

_SettingT = TypeVar("_SettingT", bound=Resource)


class _SettingAPIClient(BaseAPIClient):
    async def _read(self, resource_path: str, setting_type: type[_SettingT]) -> _SettingT:
        return await self._connector.call_api(
            RequestMethod.GET,
            resource_path,
            response_types_map={"200": setting_type},
        )

    async def _update(self, resource_path: str, options: Options, setting_type: type[_SettingT]) -> _SettingT:
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            resource_path,
            body=options,
            response_types_map={"200": setting_type},
        )


class GeneralSettingAPIClient(_SettingAPIClient):
    async def read(self) -> GeneralSetting:
        return await self._read("admin/general-settings", GeneralSetting)

    async def update(self, options: GeneralSettingUpdateOptions) -> GeneralSetting:
        return await self._update("admin/general-settings", options, GeneralSetting)


class CostEstimationSettingAPIClient(_SettingAPIClient):
    async def read(self) -> CostEstimationSetting:
        return await self._read("admin/cost-estimation-settings", CostEstimationSetting)

    async def update(self, options: CostEstimationSettingUpdateOptions) -> CostEstimationSetting:
        return await self._update("admin/cost-estimation-settings", options, CostEstimationSetting)


class CustomizationSettingAPIClient(_SettingAPIClient):
    async def read(self) -> CustomizationSetting:
        return await self._read("admin/customization-settings", CustomizationSetting)

    async def update(self, options: CustomizationSettingUpdateOptions) -> CustomizationSetting:
        return await self._update("admin/customization-settings", options, CustomizationSetting)


class SAMLSettingAPIClient(_SettingAPIClient):
    async def read(self) -> SAMLSetting:
        return await self._read("admin/saml-settings", SAMLSetting)

    async def update(self, options: SAMLSettingUpdateOptions) -> SAMLSetting:
        return await self._update("admin/saml-settings", options, SAMLSetting)

    async def revoke_idp_cert(self) -> SAMLSetting:
        """Revoke the previous identity provider certificate, after a new one has been configured."""
        return await self._connector.call_api(
            RequestMethod.POST,
            "admin/saml-settings/actions/revoke-old-certificate",
            response_types_map={"200": SAMLSetting},
        )


class SMTPSettingAPIClient(_SettingAPIClient):
    async def read(self) -> SMTPSetting:
        return await self._read("admin/smtp-settings", SMTPSetting)

    async def update(self, options: SMTPSettingUpdateOptions) -> SMTPSetting:
        """Update the SMTP settings.

        :param options: The settings to change. The authentication type must be `none`, `plain` or `login`.

        :return: The updated settings.

        :raises InvalidValueError: If the authentication type is missing or unknown.
        """
        return await self._update("admin/smtp-settings", options, SMTPSetting)


class TwilioSettingAPIClient(_SettingAPIClient):
    async def read(self) -> TwilioSetting:
        return await self._read("admin/twilio-settings", TwilioSetting)

    async def update(self, options: TwilioSettingUpdateOptions) -> TwilioSetting:
        return await self._update("admin/twilio-settings", options, TwilioSetting)

    async def verify(self, options: TwilioSettingVerifyOptions) -> None:
        """Send a test message with the current Twilio settings."""
        await self._connector.call_api(
            RequestMethod.POST,
            "admin/twilio-settings/verify",
            body=options,
            response_types_map={"200": EmptyResponse, "204": EmptyResponse},
        )


class AdminSettings:
    """The site-wide settings, one client per setting."""

    def __init__(self, connector: APIConnector) -> None:
        self.general = GeneralSettingAPIClient(connector)
        self.cost_estimation = CostEstimationSettingAPIClient(connector)
        self.customization = CustomizationSettingAPIClient(connector)
        self.saml = SAMLSettingAPIClient(connector)
        self.smtp = SMTPSettingAPIClient(connector)
        self.twilio = TwilioSettingAPIClient(connector)
