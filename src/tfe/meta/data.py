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

from pydantic import BaseModel

__all__ = ["IPRange"]


class IPRange(BaseModel):
    """The IP ranges, in CIDR notation, that HCP Terraform uses for each kind of outbound or inbound traffic."""

    api: list[str] = []
    """Ranges used by the API and the user interface."""

    notifications: list[str] = []
    """Ranges used to send notifications."""

    sentinel: list[str] = []
    """Ranges used by Sentinel policy checks that make HTTP requests."""

    vcs: list[str] = []
    """Ranges used to communicate with VCS providers."""
