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

import copy
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, TypeAlias

if TYPE_CHECKING:
    from typing import Self

    from .data import HTTPHeaderDict, HTTPResponse


class TFEClientException(Exception):
    """The base exception class for all TFE client exceptions."""


_Condition: TypeAlias = type[Exception] | tuple[type[Exception], ...] | Callable[[Exception], bool]


def _get_filter_func(condition: _Condition) -> Callable[[Exception], bool]:
    if not isinstance(condition, type) and callable(condition):
        return condition
    else:
        return lambda e: isinstance(e, condition)


class TFEExceptionGroup(TFEClientException):
    """A custom exception group type that closely resembles `ExceptionGroup` which was introduced in python 3.11

    This implementation is based off PEP 654 and the reference implementation linked within.

    TFEExceptionGroup wraps the exceptions in the sequence excs. The msg parameter must be a string.
    """

    def __new__(cls, msg: str, excs: Sequence[Exception]):
        grp = super().__new__(cls)
        grp._msg = msg
        grp._excs = tuple(excs)
        return grp

    @property
    def message(self) -> str:
        """The msg argument to the constructor. This is a read-only attribute."""
        return self._msg

    @property
    def exceptions(self) -> tuple[Exception, ...]:
        """A tuple of the exceptions in the excs sequence given to the constructor. This is a read-only attribute."""
        return copy.copy(self._excs)

    def derive(self, excs: Sequence[Exception]) -> Self:
        """Create a new instance of the current exception group type with the same message, but wrapping the exceptions
        in excs.

        :param excs: Exceptions to wrap in the derived exception group.

        :return: An exception group with the same message, but which wraps the exceptions in excs.
        """
        return type(self)(self.message, excs)

    def _derive_or_none(self, excs: Sequence[Exception]) -> Self | None:
        if len(excs) == 0:
            return None
        else:
            derived = self.derive(excs)
            # Copy the original context, cause, and traceback.
            derived.__context__ = copy.copy(self.__context__)
            derived.__cause__ = copy.copy(self.__cause__)
            derived.__traceback__ = copy.copy(self.__traceback__)
            return derived

    def split(self, condition: _Condition) -> tuple[Self | None, Self | None]:
        """Like subgroup(), but returns the pair (match, rest) where match is subgroup(condition) and rest is the
        remaining non-matching part.

        :param condition: Either a function that accepts an exception and returns true for those that should be in
            the subgroup, or an exception type or a tuple of exception types.

        :return: (match, rest) where match is subgroup(condition) and rest is the remaining non-matching part.
        """
        filter_func = _get_filter_func(condition)
        if filter_func(self):
            return self._derive_or_none(self.exceptions), None
        matched = []
        unmatched = []
        for exc in self.exceptions:
            if filter_func(exc):
                matched.append(exc)
            elif isinstance(exc, TFEExceptionGroup):
                matched_subgroup, unmatched_subgroup = exc.split(filter_func)
                if matched_subgroup is not None:
                    matched.append(matched_subgroup)
                if unmatched_subgroup is not None:
                    unmatched.append(unmatched_subgroup)
            else:
                unmatched.append(exc)

        return self._derive_or_none(matched), self._derive_or_none(unmatched)

    def subgroup(self, condition: _Condition) -> Self | None:
        """Returns an exception group that contains only the exceptions from the current group that match condition, or
        None if the result is empty.

        :param condition: Either a function that accepts an exception and returns true for those that should be in
            the subgroup, or an exception type or a tuple of exception types.

        :return: The matching exceptions, or None if there are none.
        """
        return self.split(condition)[0]

    def __str__(self) -> str:
        excs = self.exceptions
        n_sub_excs = len(excs)
        tb_lines = [
            f"{self.__class__.__name__}: {self.message} ({n_sub_excs} sub-exception{'' if n_sub_excs == 1 else 's'})"
        ]
        for i, exc in enumerate(excs):
            tb_lines.append(f"+---------------- {i + 1} ----------------")
            tb_lines.append(f"| {type(exc).__name__}:")
            for exc_line in str(exc).split("\n"):
                tb_lines.append(f"| {exc_line}")
        return "\n".join(tb_lines)


class RetryError(TFEExceptionGroup):
    """Custom ExceptionGroup for wrapping exceptions from multiple retry attempts."""


class RetryableResponseError(TFEClientException):
    """Raised inside the transport when the server responds with a status that should be retried."""

    def __init__(self, response: HTTPResponse) -> None:
        """
        :param response: The response that triggered the retry.
        """
        self.response = response
        super().__init__(f"Retryable response ({response.status})")


class _WrappedError(TFEClientException):
    """Wrapper for standard exceptions that occur while preparing requests or parsing service responses."""

    def __init__(self, msg: str, caused_by: Exception | None = None):
        """
        :param msg: The exception message.
        :param caused_by: The original error that caused the failure.
        """
        self.caused_by = caused_by
        full_msg = msg
        if caused_by:
            full_msg = f"{msg}: {str(caused_by)}"
        super(_WrappedError, self).__init__(full_msg)


class TransportError(_WrappedError):
    """Wraps errors raised by the underlying HTTP transport."""


class ClientTypeError(_WrappedError, TypeError):
    """Raised when an operation or function is applied to an object of inappropriate type."""

    def __init__(
        self,
        msg: str,
        caused_by: Exception | None = None,
        valid_classes: tuple[type, ...] | None = None,
    ):
        """
        :param msg: The exception message.
        :param caused_by: The original error that caused deserialization to fail.
        :param valid_classes: The classes that the current item should be an instance of.
        """
        super(ClientTypeError, self).__init__(msg, caused_by)
        self.valid_classes = valid_classes


class ClientValueError(_WrappedError, ValueError):
    """Raised when an operation or function receives an argument that has the right type but an inappropriate value."""


class RequiredFieldError(ClientValueError):
    """Raised when a required option or argument is missing."""

    def __init__(self, field: str) -> None:
        """
        :param field: The name of the missing field.
        """
        self.field = field
        super().__init__(f"{field} is required")


class InvalidValueError(ClientValueError):
    """Raised when an option or argument has an invalid value."""

    def __init__(self, field: str, value: Any = None) -> None:
        """
        :param field: The name of the invalid field.
        :param value: The offending value.
        """
        self.field = field
        self.value = value
        super().__init__(f"invalid value for {field}")


class TFEAPIException(TFEClientException):
    """Base class for all service errors."""

    def __init__(self, status: int, reason: str | None, content: object | None, headers: HTTPHeaderDict | None):
        """
        :param status: HTTP status code.
        :param reason: Reason.
        :param content: Deserialized content from the response.
        :param headers: Response headers
        """
        self.status = status
        self.reason = reason
        self.content = content
        self.headers = headers

    @property
    def errors(self) -> list[dict[str, Any]]:
        """The JSON:API error objects from the response body."""
        if isinstance(self.content, dict) and isinstance(errors := self.content.get("errors"), list):
            return [error if isinstance(error, dict) else {"title": str(error)} for error in errors]
        return []

    @property
    def messages(self) -> list[str]:
        """One message per JSON:API error, as the title followed by the detail when there is one."""
        messages = []
        for error in self.errors:
            message = str(error.get("title", ""))
            if detail := error.get("detail"):
                message += f"\n\n{detail}"
            messages.append(message)
        return messages

    def __str__(self) -> str:
        if messages := self.messages:
            return "\n".join(messages)
        error_message = f"({self.status})"
        if reason := self.reason:
            error_message += f" {reason}"
        if content := self.content:
            error_message += f"\n{content}"
        return error_message


class UnknownResponseError(TFEAPIException):
    """The service sent an unknown response."""


class GeneralizedAPIError(TFEAPIException):
    """Base class for service errors that are generalized based on status code.

    Generalized error types must subclass GeneralizedAPIError and define the class attribute `STATUS_CODE`, which will
    be used to map service error codes to the corresponding generalization.
    """

    __GENERALIZED_TYPES: dict[int, type[GeneralizedAPIError]] = {}

    STATUS_CODE: ClassVar[int | None] = None

    @classmethod
    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        status_code = cls.__dict__.get("STATUS_CODE")
        if status_code is None:
            return  # Specialization of an existing generalized type.
        if existing_cls := GeneralizedAPIError.__GENERALIZED_TYPES.get(status_code):
            raise ValueError(f"Duplicated STATUS_CODE between {cls} and {existing_cls}")
        GeneralizedAPIError.__GENERALIZED_TYPES[status_code] = cls

    @staticmethod
    def from_status_code(status_code: int) -> type[GeneralizedAPIError] | None:
        """Get a generalized error type, based on the status code.

        :param status_code: The status code of the error response.

        :return: The generalized implementation for the requested status code.
        """
        return GeneralizedAPIError.__GENERALIZED_TYPES.get(status_code, None)

    @classmethod
    def specialize(cls, content: object) -> type[GeneralizedAPIError]:
        """Select a more specific error type for the response content.

        :param content: The deserialized response content.

        :return: The error type to raise.
        """
        return cls


class BadRequestException(GeneralizedAPIError):
    """The service cannot process the request due to a client error (400 - Bad Request)."""

    STATUS_CODE = 400

    @classmethod
    def specialize(cls, content: object) -> type[GeneralizedAPIError]:
        if isinstance(content, dict) and "include parameter" in str(content.get("errors", "")):
            return InvalidIncludeValueError
        return cls


class InvalidIncludeValueError(BadRequestException):
    """The request contained an include value that is not supported by the endpoint."""


class UnauthorizedException(GeneralizedAPIError):
    """The client must authenticate to get a response (401 - Unauthorized)."""

    STATUS_CODE = 401

    def __str__(self) -> str:
        return super().__str__() if self.messages else "unauthorized"


class ForbiddenException(GeneralizedAPIError):
    """The client does not have access rights to the content (403 - Forbidden)."""

    STATUS_CODE = 403


class NotFoundException(GeneralizedAPIError):
    """The API could not find the requested resource (404 - Not Found).

    The API also responds with 404 when the token does not grant access to the resource.
    """

    STATUS_CODE = 404

    def __str__(self) -> str:
        return super().__str__() if self.messages else "resource not found"


class ConflictException(GeneralizedAPIError):
    """The request conflicts with the current state of the resource (409 - Conflict)."""

    STATUS_CODE = 409


class UnprocessableEntityException(GeneralizedAPIError):
    """The request was well formed but contained invalid values (422 - Unprocessable Entity)."""

    STATUS_CODE = 422


class TooManyRequestsException(GeneralizedAPIError):
    """The client exceeded the API rate limit (429 - Too Many Requests)."""

    STATUS_CODE = 429
