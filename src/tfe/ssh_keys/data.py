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

from tfe.common import ListOptions, Options, Resource
from tfe.common.exceptions import RequiredFieldError
from tfe.common.utils import valid_string

__all__ = [
    "SSHKey",
    "SSHKeyCreateOptions",
    "SSHKeyListOptions",
    "SSHKeyUpdateOptions",
]


class SSHKey(Resource):
    """A private SSH key, used to clone Terraform modules from private git repositories.

    The key value is write-only, so only the name is returned by the API.
    """

    JSONAPI_TYPE = "ssh-keys"

    name: str | None = None


class SSHKeyListOptions(ListOptions):
    pass


class SSHKeyCreateOptions(Options):
    JSONAPI_TYPE = "ssh-keys"

    name: str | None = None
    value: str | None = None
    """The text of the private SSH key."""

    def valid(self) -> None:
        if not valid_string(self.name):
            raise RequiredFieldError("name")
        if not valid_string(self.value):
            raise RequiredFieldError("value")


class SSHKeyUpdateOptions(Options):
    JSONAPI_TYPE = "ssh-keys"

    name: str | None = None
