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

from tfe import logging

from .data import HTTPHeaderDict
from .interfaces import IAuthorizer

__all__ = ["TokenAuthorizer"]

logger = logging.getLogger("auth")


class TokenAuthorizer(IAuthorizer):
    def __init__(self, token: str) -> None:
        """An authorizer that sends a user, team or organization API token as a bearer token.

        API tokens do not expire in the way OAuth access tokens do, so this authorizer makes no attempt to refresh
        them. A request that fails with 401 will raise `UnauthorizedException`.
        """
        self._token = token

    async def refresh_token(self) -> bool:
        logger.debug("TokenAuthorizer does not support refreshing API tokens.")
        return False

    async def get_default_headers(self) -> HTTPHeaderDict:
        return HTTPHeaderDict({"Authorization": f"Bearer {self._token}"})
