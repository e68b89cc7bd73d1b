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

from parameterized import parameterized

from tfe.admin import (
    AdminAPIClient,
    CostEstimationSettingUpdateOptions,
    CustomizationSettingUpdateOptions,
    GeneralSettingUpdateOptions,
    SAMLSettingUpdateOptions,
    SMTPAuthType,
    SMTPSettingUpdateOptions,
    TwilioSettingUpdateOptions,
    TwilioSettingVerifyOptions,
)
from tfe.common import RequestMethod
from tfe.common.exceptions import InvalidValueError
from tfe.common.test_tools import TestWithConnector, jsonapi_response


def _setting_content(jsonapi_type: str, **attributes) -> str:
    return jsonapi_response({"id": jsonapi_type.removesuffix("s"), "type": jsonapi_type, "attributes": attributes})


class TestAdminSettings(TestWithConnector):
    def setUp(self) -> None:
        super().setUp()
        self.settings = AdminAPIClient(self.connector).settings

    @parameterized.expand(
        [
            ("general", "general-settings"),
            ("cost_estimation", "cost-estimation-settings"),
            ("customization", "customization-settings"),
            ("saml", "saml-settings"),
            ("smtp", "smtp-settings"),
            ("twilio", "twilio-settings"),
        ]
    )
    async def test_read(self, setting: str, jsonapi_type: str) -> None:
        with self.transport.set_http_response(200, _setting_content(jsonapi_type, enabled=True)):
            await getattr(self.settings, setting).read()
        self.assert_request_made(RequestMethod.GET, f"admin/{jsonapi_type}")

    async def test_read_general(self) -> None:
        content = _setting_content(
            "general-settings",
            **{
                "api-rate-limiting-enabled": True,
                "api-rate-limit": 30,
                "send-passing-statuses-for-untriggered-speculative-plans": False,
                "allow-speculative-plans-on-pull-requests-from-forks": True,
            },
        )
        with self.transport.set_http_response(200, content):
            general = await self.settings.general.read()
        self.assertEqual(30, general.api_rate_limit)
        self.assertFalse(general.send_passing_statuses_enabled)
        self.assertTrue(general.allow_speculative_plans_on_pr)

    async def test_update_general(self) -> None:
        with self.transport.set_http_response(200, _setting_content("general-settings", **{"api-rate-limit": 50})):
            general = await self.settings.general.update(
                GeneralSettingUpdateOptions(api_rate_limit=50, send_passing_statuses_enabled=True)
            )
        self.assert_request_made(
            RequestMethod.PATCH,
            "admin/general-settings",
            body={
                "data": {
                    "type": "general-settings",
                    "attributes": {
                        "api-rate-limit": 50,
                        "send-passing-statuses-for-untriggered-speculative-plans": True,
                    },
                }
            },
        )
        self.assertEqual(50, general.api_rate_limit)

    async def test_update_cost_estimation(self) -> None:
        with self.transport.set_http_response(200, _setting_content("cost-estimation-settings", enabled=True)):
            await self.settings.cost_estimation.update(
                CostEstimationSettingUpdateOptions(enabled=True, aws_access_key_id="AKIA", aws_secret_key="secret")
            )
        self.assert_request_made(
            RequestMethod.PATCH,
            "admin/cost-estimation-settings",
            body={
                "data": {
                    "type": "cost-estimation-settings",
                    "attributes": {"enabled": True, "aws-access-key-id": "AKIA", "aws-secret-key": "secret"},
                }
            },
        )

    async def test_update_customization(self) -> None:
        with self.transport.set_http_response(200, _setting_content("customization-settings")):
            await self.settings.customization.update(CustomizationSettingUpdateOptions(footer="<p>Internal</p>"))
        self.assert_request_made(
            RequestMethod.PATCH,
            "admin/customization-settings",
            body={"data": {"type": "customization-settings", "attributes": {"footer": "<p>Internal</p>"}}},
        )

    async def test_update_saml(self) -> None:
        with self.transport.set_http_response(200, _setting_content("saml-settings", enabled=True)):
            saml = await self.settings.saml.update(SAMLSettingUpdateOptions(enabled=True, attr_groups="MemberOf"))
        self.assert_request_made(
            RequestMethod.PATCH,
            "admin/saml-settings",
            body={"data": {"type": "saml-settings", "attributes": {"enabled": True, "attr-groups": "MemberOf"}}},
        )
        self.assertTrue(saml.enabled)

    async def test_revoke_idp_cert(self) -> None:
        with self.transport.set_http_response(200, _setting_content("saml-settings", **{"old-idp-cert": None})):
            saml = await self.settings.saml.revoke_idp_cert()
        self.assert_request_made(RequestMethod.POST, "admin/saml-settings/actions/revoke-old-certificate")
        self.assertIsNone(saml.old_idp_cert)

    async def test_update_smtp(self) -> None:
        options = SMTPSettingUpdateOptions(
            enabled=True, host="smtp.localhost", port=25, auth=SMTPAuthType.LOGIN, username="mailer", password="pw"
        )
        with self.transport.set_http_response(200, _setting_content("smtp-settings", auth="login", port=25)):
            smtp = await self.settings.smtp.update(options)
        self.assert_request_made(
            RequestMethod.PATCH,
            "admin/smtp-settings",
            body={
                "data": {
                    "type": "smtp-settings",
                    "attributes": {
                        "enabled": True,
                        "host": "smtp.localhost",
                        "port": 25,
                        "auth": "login",
                        "username": "mailer",
                        "password": "pw",
                    },
                }
            },
        )
        self.assertEqual(SMTPAuthType.LOGIN, smtp.auth)

    @parameterized.expand([("missing", None), ("unknown", "oauth")])
    async def test_update_smtp_requires_known_auth(self, _name: str, auth: str | None) -> None:
        with self.assertRaises(InvalidValueError):
            await self.settings.smtp.update(SMTPSettingUpdateOptions(enabled=True, auth=auth))
        self.transport.assert_no_requests()

    async def test_update_twilio(self) -> None:
        content = _setting_content("twilio-settings", **{"from-number": "+15555550100"})
        with self.transport.set_http_response(200, content):
            twilio = await self.settings.twilio.update(
                TwilioSettingUpdateOptions(enabled=True, account_sid="AC123", from_number="+15555550100")
            )
        self.assert_request_made(
            RequestMethod.PATCH,
            "admin/twilio-settings",
            body={
                "data": {
                    "type": "twilio-settings",
                    "attributes": {"enabled": True, "account-sid": "AC123", "from-number": "+15555550100"},
                }
            },
        )
        self.assertEqual("+15555550100", twilio.from_number)

    async def test_verify_twilio(self) -> None:
        with self.transport.set_http_response(204):
            await self.settings.twilio.verify(TwilioSettingVerifyOptions(test_number="+15555550101"))
        self.assert_request_made(
            RequestMethod.POST,
            "admin/twilio-settings/verify",
            body={"data": {"type": "twilio-settings", "attributes": {"test-number": "+15555550101"}}},
        )
