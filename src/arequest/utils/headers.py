r"""Header helpers: authentication headers, layered merging, and media
type extraction."""

from __future__ import annotations

__all__ = [
    "Authentication",
    "basic_auth",
    "bearer_auth",
    "media_type",
    "merge_headers",
    "redact_headers",
]

import base64
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

AUTHORIZATION = "Authorization"

REDACTED = "***"

# Header names whose values carry credentials, e.g. ``Authorization`` or
# ``X-API-Key``.
_SENSITIVE_HEADER_PATTERN = re.compile(
    r"(auth|cookie|token|key|secret|password|credential)", re.IGNORECASE
)


def bearer_auth(token: str) -> tuple[str, str]:
    """Return the ``Authorization`` header for a bearer token.

    Example:
        ```pycon
        >>> from arequest.utils.headers import bearer_auth
        >>> bearer_auth("abc")
        ('Authorization', 'Bearer abc')

        ```
    """
    return (AUTHORIZATION, f"Bearer {token}")


def basic_auth(username: str, password: str) -> tuple[str, str]:
    """Return the ``Authorization`` header for HTTP basic auth.

    Example:
        ```pycon
        >>> from arequest.utils.headers import basic_auth
        >>> basic_auth("user", "pass")
        ('Authorization', 'Basic dXNlcjpwYXNz')

        ```
    """
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return (AUTHORIZATION, f"Basic {credentials}")


@dataclass(frozen=True)
class Authentication:
    """Authentication scheme attached to a request.

    Use the class constructors rather than instantiating directly. Secrets
    are excluded from ``repr``.

    Example:
        ```pycon
        >>> from arequest.utils.headers import Authentication
        >>> Authentication.bearer("abc").to_header()
        ('Authorization', 'Bearer abc')
        >>> Authentication.api_key("X-API-Key", "secret").to_header()
        ('X-API-Key', 'secret')
        >>> Authentication.none().to_header() is None
        True

        ```
    """

    scheme: str
    name: str = ""
    secret: str = field(default="", repr=False)
    password: str = field(default="", repr=False)

    @classmethod
    def none(cls) -> Authentication:
        return cls(scheme="none")

    @classmethod
    def bearer(cls, token: str) -> Authentication:
        return cls(scheme="bearer", secret=token)

    @classmethod
    def basic(cls, username: str, password: str) -> Authentication:
        return cls(scheme="basic", name=username, password=password)

    @classmethod
    def api_key(cls, header: str, value: str) -> Authentication:
        return cls(scheme="api_key", name=header, secret=value)

    def to_header(self) -> tuple[str, str] | None:
        """Return the header implementing this scheme, or ``None``."""
        if self.scheme == "bearer":
            return bearer_auth(self.secret)
        if self.scheme == "basic":
            return basic_auth(self.name, self.password)
        if self.scheme == "api_key":
            return (self.name, self.secret)
        return None


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings, later layers taking precedence.

    Keys collide case-insensitively; the spelling from the winning layer is
    kept.

    Args:
        *layers: Header mappings ordered from lowest to highest precedence.
            ``None`` layers are skipped.

    Returns:
        A new dictionary with the merged headers.

    Example:
        ```pycon
        >>> from arequest.utils.headers import merge_headers
        >>> merge_headers({"Accept": "text/plain", "X-A": "1"}, {"accept": "application/json"})
        {'X-A': '1', 'accept': 'application/json'}

        ```
    """
    merged: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            lowered = key.lower()
            for existing in [k for k in merged if k.lower() == lowered]:
                del merged[existing]
            merged[key] = value
    return merged


def media_type(content_type: str | None) -> str | None:
    """Extract the media type from a ``Content-Type`` header value.

    Example:
        ```pycon
        >>> from arequest.utils.headers import media_type
        >>> media_type("application/json; charset=utf-8")
        'application/json'
        >>> media_type(None) is None
        True

        ```
    """
    if content_type is None:
        return None
    return content_type.split(";", 1)[0].strip()


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` safe to write to logs.

    Values of headers whose name looks credential-like (``Authorization``,
    ``Proxy-Authorization``, ``Cookie``, ``X-API-Key``, ``X-Auth-Token``...)
    are replaced with ``"***"``.

    Example:
        ```pycon
        >>> from arequest.utils.headers import redact_headers
        >>> redact_headers({"Authorization": "Bearer abc", "Accept": "application/json"})
        {'Authorization': '***', 'Accept': 'application/json'}

        ```
    """
    return {
        key: REDACTED if _SENSITIVE_HEADER_PATTERN.search(key) else value
        for key, value in headers.items()
    }
