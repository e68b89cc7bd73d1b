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

import re
from collections.abc import Sequence

from ..exceptions import InvalidValueError, RequiredFieldError

__all__ = [
    "require_id",
    "require_ids",
    "valid_email",
    "valid_string",
    "valid_string_id",
]

# A string ID may only contain letters, numbers, dashes, dots and underscores.
_RE_STRING_ID = re.compile(r"[a-zA-Z0-9\-._]+")
_RE_EMAIL = re.compile(r"[^@\s]+@[^@\s]+")


def valid_string(value: str | None) -> bool:
    """Check that a string is set and not empty."""
    return value is not None and value != ""


def valid_string_id(value: str | None) -> bool:
    """Check that a string is a valid resource ID or name."""
    return value is not None and _RE_STRING_ID.fullmatch(value) is not None


def valid_email(value: str | None) -> bool:
    return value is not None and _RE_EMAIL.fullmatch(value) is not None


def require_id(field: str, value: str | None) -> str:
    """Validate a resource ID or name that is used in a request path.

    :param field: The argument name, used in the error message.
    :param value: The value to check.

    :return: The value, if it is valid.

    :raises InvalidValueError: If the value is missing or is not a valid ID.
    """
    if not valid_string_id(value):
        raise InvalidValueError(field, value)
    return value


def require_ids(field: str, values: Sequence[str] | None) -> list[str]:
    """Validate a non-empty list of resource IDs.

    :param field: The argument name, used in the error message.
    :param values: The values to check.

    :return: The values as a list, if they are all valid.

    :raises RequiredFieldError: If the list is missing or empty.
    :raises InvalidValueError: If any value is not a valid ID.
    """
    if not values:
        raise RequiredFieldError(field)
    return [require_id(field, value) for value in values]
