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

import datetime
import functools
import json
import re
from collections.abc import Mapping
from enum import Enum
from inspect import isclass
from types import GenericAlias, NoneType, TracebackType
from typing import Any, ParamSpec, TypeVar
from urllib.parse import quote, urlencode

from dateutil.parser import parse
from pydantic import BaseModel

from tfe import logging

from . import jsonapi
from .data import EmptyResponse, HTTPHeaderDict, HTTPResponse, Page, RequestMethod
from .exceptions import (
    ClientTypeError,
    ClientValueError,
    GeneralizedAPIError,
    TFEAPIException,
    TFEClientException,
    UnauthorizedException,
    UnknownResponseError,
)
from .interfaces import IAuthorizer, ITransport
from .utils.rate_limit import RateLimiter

logger = logging.getLogger("connector")

__all__ = [
    "APIConnector",
    "NoAuth",
]

T = TypeVar("T")
P = ParamSpec("P")

_RE_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)

OCTET_STREAM = "application/octet-stream"


def retry_on_auth_error(func):  # No type annotation to prevent hiding the signature of the decorated function.
    @functools.wraps(func)
    async def wrapper(self: APIConnector, *args: P.args, **kwargs: P.kwargs) -> T:
        # Always use the connector in a context manager to ensure the transport is opened and closed correctly.
        # ITransport implementations are required to be re-entrant, so this is safe.
        async with self:
            try:
                return await func(self, *args, **kwargs)
            except UnauthorizedException:
                logger.debug("Unauthorized exception caught. Attempting to refresh the access token", exc_info=True)
                if not await self._authorizer.refresh_token():
                    logger.debug("Failed to refresh the access token.", exc_info=True)
                    raise
                else:
                    logger.debug("Access token refreshed. Retrying the request.")
                    return await func(self, *args, **kwargs)
            except Exception:
                logger.debug("An error occurred while calling the API.", exc_info=True)
                raise

    return wrapper


class _NoAuth(IAuthorizer):
    """An authorizer that does not provide any authentication."""

    async def get_default_headers(self) -> HTTPHeaderDict:
        """Return an empty header dictionary."""
        return HTTPHeaderDict()

    async def refresh_token(self) -> bool:
        """Return False, as there is no token to refresh."""
        return False


NoAuth = _NoAuth()
"""An authorizer that does not provide any authentication."""


class APIConnector:
    """Generic client for facilitating JSON:API requests."""

    def __init__(
        self,
        base_url: str,
        transport: ITransport,
        authorizer: IAuthorizer = NoAuth,
        additional_headers: Mapping[str, Any] | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """
        :param base_url: The URL of the API, including the base path (e.g. `https://app.terraform.io/api/v2/`).
        :param transport: The transport to use for sending requests.
        :param authorizer: The authorizer to use for authenticating requests.
        :param additional_headers: Additional headers to include in each request.
        :param rate_limiter: Limits the rate of requests. Requests are not limited by default.
        """
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._authorizer = authorizer
        self._additional_headers = additional_headers
        self._rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()

    @property
    def base_url(self) -> str:
        """The base_url of the connected API."""
        return self._base_url + "/"

    @property
    def transport(self) -> ITransport:
        """The transport used to send requests."""
        return self._transport

    @property
    def rate_limiter(self) -> RateLimiter:
        """The rate limiter that is applied to every API call."""
        return self._rate_limiter

    async def open(self) -> None:
        """Open the HTTP transport."""
        await self._transport.open()

    async def close(self) -> None:
        """Close the HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> APIConnector:
        await self.open()
        return self

    async def __aexit__(
        self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: TracebackType | None
    ) -> None:
        await self.close()

    @retry_on_auth_error
    async def call_api(
        self,
        method: RequestMethod,
        resource_path: str,
        path_params: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
        header_params: Mapping[str, Any] | None = None,
        body: object | str | bytes | None = None,
        response_types_map: Mapping[str, type[T]] | None = None,
        request_timeout: int | float | tuple[int | float, int | float] | None = None,
    ) -> T:
        """Call the API with the given parameters and deserialize the response.

        Errors raised by `ITransport.request` are not handled by this method.

        :param method: HTTP request method.
        :param resource_path: Path to the API endpoint, relative to the base URL. Absolute URLs are used as they are.
        :param path_params: Path parameters to embed in the url.
        :param query_params: Query parameters to embed in the url.
        :param header_params: Header parameters to be placed in the request header.
        :param body: Body to send with the request. `jsonapi.Options` are marshalled into a JSON:API document, other
            pydantic models into plain JSON. Bytes are sent as they are.
        :param response_types_map: Mapping of response status codes to response data types. The response will
            be deserialized to the corresponding type.
        :param request_timeout: Timeout setting for this request. If one number is provided, it will be the
            total request timeout. It can also be a pair (tuple) of (connection, read) timeouts.

        :return: The deserialized response, in the format determined by the response types map.

        :raise BadRequestException: If the server responds with HTTP status 400.
        :raise InvalidIncludeValueError: If the server rejects the include query parameter.
        :raise UnauthorizedException: If the server responds with HTTP status 401.
        :raise NotFoundException: If the server responds with HTTP status 404.
        :raise GeneralizedAPIError: If the server responds with any other registered error status.
        :raise TFEAPIException: If the server responds with any other HTTP status between 400 and 599.
        :raise UnknownResponseError: For other HTTP status codes with no corresponding response type in
            `response_types_map`.
        """
        # Process URL parameters.
        resource_url = self._encode_url_parameters(resource_path, path_params, query_params)

        # Process request headers.
        headers = await self._authorizer.get_default_headers()
        headers.update(self._additional_headers)
        if header_params is not None:
            headers.update(dict(self._parameters_to_tuples(header_params)))

        if "Accept" not in headers:
            headers["Accept"] = jsonapi.JSONAPI_MEDIA_TYPE

        # Sanitize body
        body = self._sanitize_for_serialization(body) if body is not None else None
        if body is not None and "Content-Type" not in headers:
            headers["Content-Type"] = OCTET_STREAM if isinstance(body, bytes) else jsonapi.JSONAPI_MEDIA_TYPE

        # Perform request.
        await self._rate_limiter.acquire()
        logger.debug(f"Making {method} request to {resource_url}")
        response = await self._transport.request(
            method=method,
            url=resource_url,
            headers=headers,
            body=body,
            request_timeout=request_timeout,
        )

        # Prepare response type.
        if (default_response_type := GeneralizedAPIError.from_status_code(response.status)) is not None:
            pass  # Use the response type returned above.
        elif 400 <= response.status <= 599:  # Error status code.
            default_response_type = TFEAPIException
        else:
            default_response_type = UnknownResponseError

        if response_types_map is not None:
            # Always use the type from response_types_map if it is available.
            response_type = response_types_map.get(str(response.status), default_response_type)
        else:
            response_type = default_response_type

        # Decode response.
        response_object = self._deserialize(response, response_type)

        return response_object

    async def get_object(
        self,
        url: str,
        query_params: Mapping[str, Any] | None = None,
        request_timeout: int | float | tuple[int | float, int | float] | None = None,
    ) -> bytes:
        """Download raw data from a foreign URL, such as a log read URL or a redirect target.

        These URLs are pre-signed, so the authorization header is not sent. The rate limiter does not apply.

        :param url: The absolute URL to download from.
        :param query_params: Query parameters to append to the URL.
        :param request_timeout: Timeout setting for this request.

        :return: The response body.

        :raise TFEAPIException: If the server responds with an error status.
        """
        if not _RE_ABSOLUTE_URL.match(url):
            raise ClientValueError(f"specified URL was not valid: {url!r}")

        resource_url = self._encode_url_parameters(url, query_params=query_params)
        headers = HTTPHeaderDict(self._additional_headers or {})

        logger.debug(f"Downloading from {resource_url}")
        async with self:
            response = await self._transport.request(
                method=RequestMethod.GET,
                url=resource_url,
                headers=headers,
                body=None,
                request_timeout=request_timeout,
            )

        if response.status >= 400:
            error_type = GeneralizedAPIError.from_status_code(response.status) or TFEAPIException
            self._deserialize(response, error_type)
        return response.data

    async def put_object(
        self,
        url: str,
        data: bytes,
        request_timeout: int | float | tuple[int | float, int | float] | None = None,
    ) -> None:
        """Upload raw data to a foreign URL, such as the upload URL of a configuration version.

        Upload URLs are pre-signed, so the authorization header is not sent. The rate limiter does not apply, and the
        response body is not decoded.

        :param url: The absolute URL to upload to.
        :param data: The data to upload.
        :param request_timeout: Timeout setting for this request.

        :raise TFEAPIException: If the server responds with an error status.
        """
        if not _RE_ABSOLUTE_URL.match(url):
            raise ClientValueError(f"specified URL was not valid: {url!r}")

        headers = HTTPHeaderDict(self._additional_headers or {})
        headers["Content-Type"] = OCTET_STREAM

        logger.debug(f"Uploading {len(data)} bytes to {url}")
        async with self:
            response = await self._transport.request(
                method=RequestMethod.PUT,
                url=url,
                headers=headers,
                body=data,
                request_timeout=request_timeout,
            )

        if response.status >= 400:
            error_type = GeneralizedAPIError.from_status_code(response.status) or TFEAPIException
            self._deserialize(response, error_type)

    def _encode_url_parameters(
        self,
        resource_path: str,
        path_params: Mapping[str, Any] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> str:
        """Encode path and query parameters within the resource path.

        :param resource_path: The resource path, or an absolute URL.
        :param path_params: Parameters that are used to replace template parameters in the resource path.
        :param query_params: Query parameters that are to be encoded at the end of the URL.

        :return: A URL with all path and query parameters encoded.
        """
        if _RE_ABSOLUTE_URL.match(resource_path):
            resource_url = resource_path
        else:
            resource_url = self._base_url + "/" + resource_path.lstrip("/")

        if path_params:
            for key, value in self._parameters_to_tuples(path_params):
                resource_url = resource_url.replace(f"{{{key}}}", quote(str(value), safe=""))

        if query_params:
            separator = "&" if "?" in resource_url else "?"
            resource_url += separator + self._parameters_to_url_query(query_params)

        return resource_url

    @classmethod
    def _sanitize_for_serialization(cls, obj: Any | None) -> Any | None:
        """Builds a JSON object for serialization.

        If obj is None return None.
        If obj is an Enum sanitize the value.
        If obj is a primitive return directly.
        If obj is a date or datetime convert to string in iso8601 format.
        If obj is a list or tuple, sanitize each element.
        If obj is a dict, sanitize the dict.
        If obj is a JSON:API options model, marshal it into a JSON:API document.
        If obj is any other pydantic model, convert to dict.

        :param obj: The data to serialize.

        :return: The serialized form of data.
        """
        if obj is None:
            return None
        if isinstance(obj, Enum):
            return cls._sanitize_for_serialization(obj.value)
        elif isinstance(obj, (str, int, float, bool, bytes)):
            return obj
        elif isinstance(obj, (datetime.date, datetime.datetime)):
            return obj.isoformat()
        elif isinstance(obj, list):
            return [cls._sanitize_for_serialization(sub_obj) for sub_obj in obj]
        elif isinstance(obj, tuple):
            return tuple(cls._sanitize_for_serialization(sub_obj) for sub_obj in obj)

        if isinstance(obj, Mapping):
            obj_dict = obj
        elif isinstance(obj, jsonapi.Options):
            obj_dict = jsonapi.marshal(obj)
        elif isinstance(obj, BaseModel):
            obj_dict = obj.model_dump(mode="json", by_alias=True, exclude_unset=True)
        else:
            raise ClientTypeError(
                msg=f"{type(obj)} could not be serialized.",
                valid_classes=(NoneType, str, int, float, bool, bytes, list, tuple, dict, BaseModel),
            )

        return {str(key): cls._sanitize_for_serialization(val) for key, val in obj_dict.items()}

    @classmethod
    def _parameters_to_tuples(cls, params: Mapping | list[tuple[str, Any]]) -> list[tuple[str, Any]]:
        """Get parameters as list of tuples.

        Lists are joined with commas, which is how the API expects `include` and `filter[...]` values. Booleans are
        encoded as `true` or `false`.

        :param params: Parameters as dict or list of two-tuples.

        :return: Parameters as list of tuples.
        """
        params = cls._sanitize_for_serialization(params)
        new_params = []
        for key, value in list(params.items() if isinstance(params, dict) else params):
            if isinstance(value, (list, tuple)):
                new_params.append((key, ",".join(str(item) for item in value)))
            elif isinstance(value, bool):
                new_params.append((key, "true" if value else "false"))
            else:
                new_params.append((key, value))
        return new_params

    @classmethod
    def _parameters_to_url_query(cls, params: Mapping | list[tuple[str, Any]]) -> str:
        """Get parameters as a URL query string.

        :param params: Parameters as dict or list of two-tuples.

        :return: URL query string (e.g. a=Hello%20World&b=123)
        """
        query_params = cls._parameters_to_tuples(params)
        return urlencode(query_params)

    @classmethod
    def _deserialize(cls, response: HTTPResponse, response_type: type[T] | None) -> T:
        """Deserializes the response body into an object.

        :param response: The HTTP response.
        :param response_type: Target type to deserialize data to. Can be a class literal, list[T], dict[str, T], a
            `jsonapi.Resource` subclass, or Page[T] for a list of resources.

        :return: The deserialized object.
        """
        if response_type is not None and isclass(response_type) and issubclass(response_type, HTTPResponse):
            # Return the response object directly.
            return response

        if response_type is bytes:
            return response.data

        match = None
        content_type = response.getheader("content-type")
        if content_type is not None:
            match = re.search(r"charset=([a-zA-Z\-\d]+)[\s;]?", content_type)
        encoding = match.group(1) if match else "utf-8"
        response_data = response.data.decode(encoding)

        try:
            response_data = json.loads(response_data)
        except ValueError:
            pass  # data must not be JSON formatted.

        if response_type is None:  # Return decoded data for a known response without a schema.
            return response_data
        elif response_type is EmptyResponse and response_data == "":
            return EmptyResponse(status=response.status, reason=response.reason, headers=response.getheaders())
        elif response_type is EmptyResponse and response_data != "":
            raise ClientValueError(msg=f"Unexpected content with '{response.status}' status code")
        elif isclass(response_type) and issubclass(response_type, TFEAPIException):  # Raise if API exception.
            if issubclass(response_type, GeneralizedAPIError):
                response_type = response_type.specialize(response_data)
            raise response_type(
                status=response.status, reason=response.reason, content=response_data, headers=response.headers
            )
        else:
            try:
                return cls.__deserialize(response_data, response_type)
            except TFEClientException:
                raise
            except Exception as e:
                raise ClientValueError(msg="Could not deserialize result", caused_by=e)

    @classmethod
    def __deserialize(cls, data: dict | list | str, response_type: type[T]) -> T:
        """Deserializes dict, list, or str into an object.

        :param data: Value as dict, list, or str.
        :param response_type: Target type to deserialize data to.

        :return: The deserialized object.
        """
        if data is None:
            return None

        if isinstance(response_type, GenericAlias):  # list[T], dict[str, T], Page[T].
            return cls.__deserialize_generic(data, response_type)
        elif response_type in {str, int, float, bool, dict}:
            return cls.__deserialize_primitive(data, response_type)
        elif response_type is datetime.datetime:
            return cls.__deserialize_datetime(data)
        elif issubclass(response_type, jsonapi.Resource):  # JSON:API documents.
            return jsonapi.unmarshal_resource(data, response_type)
        elif issubclass(response_type, BaseModel):  # Plain JSON models.
            return response_type.model_validate(data)
        else:
            raise ClientValueError("Could not parse content.")

    @classmethod
    def __deserialize_generic(cls, data: list | dict, klass: GenericAlias) -> list | dict[str, Any] | Page:
        """Deserializes list or dict into a list, dict, or page of objects.

        :param data: Value as list or dict.
        :param klass: Target type to deserialize data to. Can be list[T], dict[str, T], or Page[T].

        :return: The deserialized object.

        :raises ClientTypeError: If the data could not be deserialized.
        """
        if klass.__origin__ is Page:
            (resource_type,) = klass.__args__
            return jsonapi.unmarshal_page(data, resource_type)

        elif klass.__origin__ is list and isinstance(data, list):
            (inner_klass,) = klass.__args__
            return [cls.__deserialize(sub_data, inner_klass) for sub_data in data]

        elif klass.__origin__ is dict and klass.__args__[0] is str and isinstance(data, dict):
            _, value_klass = klass.__args__
            return {str(key): cls.__deserialize(value, value_klass) for key, value in data.items()}

        else:
            raise ClientTypeError(msg=f"Could not deserialize '{type(data)}' as '{klass}'.")

    @staticmethod
    def __deserialize_primitive(data: str, klass: type):
        """Deserializes string to primitive type.

        :param data: str.
        :param klass: class literal.

        :return: str, int, float, bool, dict.

        :raises ClientTypeError: If the data could not be deserialized.
        """
        try:
            return klass(data)
        except TypeError as e:
            raise ClientTypeError(msg="Could not deserialize primitive", caused_by=e)

    @staticmethod
    def __deserialize_datetime(string: str) -> datetime.datetime:
        """Deserializes string to datetime.

        :param string: Date string.

        :return: datetime object.

        :raises ClientTypeError: If the string could not be parsed as datetime.
        """
        try:
            return parse(string)
        except ValueError as e:
            raise ClientTypeError(msg="Could not deserialize datetime", caused_by=e)
