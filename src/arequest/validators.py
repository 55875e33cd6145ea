r"""Response validators.

A validator inspects a raw response (status code, headers, body) and
either returns ``None`` or raises a classified error. Validators are pure
with respect to their input and can be combined with
``CompositeResponseValidator``, which runs them in order and stops at the
first failure.
"""

from __future__ import annotations

__all__ = [
    "BaseResponseValidator",
    "CallableResponseValidator",
    "CompositeResponseValidator",
    "DefaultResponseValidator",
    "ImageResponseValidator",
    "JSONResponseValidator",
    "StatusCodeValidator",
    "XMLResponseValidator",
    "is_client_error",
    "is_redirection",
    "is_server_error",
    "is_successful",
]

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from arequest.core.config import BODYLESS_STATUS_CODES, DEFAULT_ACCEPTABLE_STATUS_CODES
from arequest.exceptions import (
    InvalidContentTypeError,
    InvalidJSONError,
    InvalidStatusCodeError,
    NoDataError,
)
from arequest.utils.headers import media_type

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)

JSON_CONTENT_TYPES = frozenset({"application/json", "text/json"})
XML_CONTENT_TYPES = frozenset({"application/xml", "text/xml"})
IMAGE_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp", "image/svg+xml"}
)


def is_successful(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_redirection(status_code: int) -> bool:
    return 300 <= status_code < 400


def is_client_error(status_code: int) -> bool:
    return 400 <= status_code < 500


def is_server_error(status_code: int) -> bool:
    return 500 <= status_code < 600


def _request_context(response: httpx.Response) -> tuple[str | None, str | None]:
    # Responses built by hand in tests have no request attached.
    try:
        request = response.request
    except RuntimeError:
        return (None, None)
    return (str(request.url), request.method)


class BaseResponseValidator(ABC):
    """Abstract base class for response validators."""

    @abstractmethod
    def validate(self, response: httpx.Response) -> None:
        """Validate a response.

        Args:
            response: The response to validate. Its body must already be
                read.

        Raises:
            RequestError: A classified error describing the first failed
                check.
        """


class DefaultResponseValidator(BaseResponseValidator):
    """Validate status code, content type, body presence, and optionally
    JSON structure.

    Checks run in this order, failing on the first problem:

    1. the status code must be in ``acceptable_status_codes``, otherwise
       ``InvalidStatusCodeError`` is raised with the raw body and headers;
    2. when ``acceptable_content_types`` is set and the response has a
       ``Content-Type`` header, its media type (before any ``;``) must be in
       the set, otherwise ``InvalidContentTypeError``;
    3. the body must not be empty unless the status is 204, 205 or 304,
       otherwise ``NoDataError``;
    4. when ``require_json`` is set, a non-empty body must parse as JSON,
       otherwise ``InvalidJSONError``.

    Args:
        acceptable_status_codes: Accepted status codes (default
            ``range(200, 300)``).
        acceptable_content_types: Optional allow-list of media types.
        require_json: Whether the body must be structurally valid JSON.

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.validators import DefaultResponseValidator
        >>> validator = DefaultResponseValidator()
        >>> validator.validate(httpx.Response(200, content=b"[]"))
        >>> validator.validate(httpx.Response(300, content=b"[]"))
        Traceback (most recent call last):
        ...
        arequest.exceptions.InvalidStatusCodeError: invalid status code: 300

        ```
    """

    def __init__(
        self,
        acceptable_status_codes: Collection[int] = DEFAULT_ACCEPTABLE_STATUS_CODES,
        acceptable_content_types: Iterable[str] | None = None,
        require_json: bool = False,
    ) -> None:
        self.acceptable_status_codes = acceptable_status_codes
        self.acceptable_content_types = (
            frozenset(acceptable_content_types) if acceptable_content_types is not None else None
        )
        self.require_json = require_json

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(acceptable_status_codes={self.acceptable_status_codes!r}, "
            f"acceptable_content_types={self.acceptable_content_types!r}, "
            f"require_json={self.require_json})"
        )

    def validate(self, response: httpx.Response) -> None:
        url, method = _request_context(response)
        status_code = response.status_code
        body = response.content

        if status_code not in self.acceptable_status_codes:
            logger.debug(f"{method} request to {url} returned unacceptable status {status_code}")
            raise InvalidStatusCodeError(
                status_code,
                body=body,
                headers=response.headers,
                response=response,
                url=url,
                method=method,
            )

        if self.acceptable_content_types is not None:
            content_type = response.headers.get("Content-Type")
            if content_type is not None and media_type(content_type) not in self.acceptable_content_types:
                raise InvalidContentTypeError(content_type, url=url, method=method)

        if not body and status_code not in BODYLESS_STATUS_CODES:
            raise NoDataError(status_code, url=url, method=method)

        if self.require_json and body:
            try:
                json.loads(body)
            except ValueError as exc:
                msg = f"response body is not valid JSON: {exc}"
                raise InvalidJSONError(msg, cause=exc, url=url, method=method) from exc


class JSONResponseValidator(DefaultResponseValidator):
    """Validate a JSON response: default status rules, JSON media type,
    and a structurally valid body."""

    def __init__(
        self, acceptable_status_codes: Collection[int] = DEFAULT_ACCEPTABLE_STATUS_CODES
    ) -> None:
        super().__init__(
            acceptable_status_codes=acceptable_status_codes,
            acceptable_content_types=JSON_CONTENT_TYPES,
            require_json=True,
        )


class XMLResponseValidator(DefaultResponseValidator):
    """Validate an XML response by status and media type."""

    def __init__(
        self, acceptable_status_codes: Collection[int] = DEFAULT_ACCEPTABLE_STATUS_CODES
    ) -> None:
        super().__init__(
            acceptable_status_codes=acceptable_status_codes,
            acceptable_content_types=XML_CONTENT_TYPES,
        )


class ImageResponseValidator(DefaultResponseValidator):
    """Validate an image response by status and media type."""

    def __init__(
        self, acceptable_status_codes: Collection[int] = DEFAULT_ACCEPTABLE_STATUS_CODES
    ) -> None:
        super().__init__(
            acceptable_status_codes=acceptable_status_codes,
            acceptable_content_types=IMAGE_CONTENT_TYPES,
        )


class StatusCodeValidator(BaseResponseValidator):
    """Accept only an explicit set of status codes; nothing else is
    checked.

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.validators import StatusCodeValidator
        >>> StatusCodeValidator({200, 404}).validate(httpx.Response(404))

        ```
    """

    def __init__(self, acceptable_status_codes: Iterable[int]) -> None:
        self.acceptable_status_codes = frozenset(acceptable_status_codes)

    def validate(self, response: httpx.Response) -> None:
        if response.status_code not in self.acceptable_status_codes:
            url, method = _request_context(response)
            raise InvalidStatusCodeError(
                response.status_code,
                body=response.content,
                headers=response.headers,
                response=response,
                url=url,
                method=method,
            )


class CompositeResponseValidator(BaseResponseValidator):
    """Run validators in order, failing on the first failure.

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.validators import (
        ...     CompositeResponseValidator,
        ...     DefaultResponseValidator,
        ...     StatusCodeValidator,
        ... )
        >>> validator = CompositeResponseValidator(
        ...     [StatusCodeValidator({200}), DefaultResponseValidator(require_json=True)]
        ... )
        >>> validator.validate(httpx.Response(200, content=b"{}"))

        ```
    """

    def __init__(self, validators: Iterable[BaseResponseValidator]) -> None:
        self.validators = tuple(validators)

    def validate(self, response: httpx.Response) -> None:
        for validator in self.validators:
            validator.validate(response)


class CallableResponseValidator(BaseResponseValidator):
    """Adapt a plain function ``func(response) -> None`` to a validator."""

    def __init__(self, func: Callable[[httpx.Response], None]) -> None:
        self.func = func

    def validate(self, response: httpx.Response) -> None:
        self.func(response)
