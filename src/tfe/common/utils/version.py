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

import functools
from importlib import metadata
from typing import NamedTuple

__all__ = ["get_package_details", "get_user_agent"]


class PackageDetails(NamedTuple):
    name: str
    version: str


@functools.cache
def get_package_details(candidate: str) -> PackageDetails:
    """Get package name and version given the module __name__.

    Falls back to `tfe-sdk` if no package is found for the provided module name. If the SDK itself is not installed
    (e.g. when running from a source checkout), the version is reported as `0.0.0`.

    :param candidate: The module __name__ to start searching from.

    :return: A tuple containing the package name and version.
    """
    while candidate:
        try:
            package_metadata = metadata.metadata(candidate)
        except metadata.PackageNotFoundError:
            candidate, *_ = candidate.rpartition(".")
        else:
            return PackageDetails(
                name=package_metadata["name"],
                version=package_metadata["version"],
            )

    try:
        return PackageDetails(name="tfe-sdk", version=metadata.version("tfe-sdk"))
    except metadata.PackageNotFoundError:
        return PackageDetails(name="tfe-sdk", version="0.0.0")


def get_user_agent() -> str:
    """Get the default `User-Agent` header value for the SDK."""
    name, version = get_package_details("tfe-sdk")
    return f"{name}/{version}"
