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

from tfe.common import BaseAPIClient, RequestMethod

from .data import User, UserUpdateOptions

__all__ = ["UserAPIClient"]


class UserAPIClient(BaseAPIClient):
    """Client for the account of the user that owns the API token."""

    async def read_current(self) -> User:
        """Read the user that owns the API token."""
        return await self._connector.call_api(
            RequestMethod.GET,
            "account/details",
            response_types_map={"200": User},
        )

    async def update_current(self, options: UserUpdateOptions) -> User:
        """Update the username or email of the user that owns the API token.

        A changed email address must be confirmed before it takes effect, and is reported as the unconfirmed email
        until then.

        :param options: The attributes to change.

        :return: The updated user.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "account/update",
            body=options,
            response_types_map={"200": User},
        )
