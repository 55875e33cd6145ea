r"""Body encoders used when constructing request descriptors.

The request pipeline only ever sees body bytes; these helpers produce
them from Python values.
"""

from __future__ import annotations

__all__ = ["encode_form", "encode_json", "encode_text"]

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from pydantic_core import PydanticSerializationError, to_json

from arequest.exceptions import EncodingError

if TYPE_CHECKING:
    from collections.abc import Mapping


def encode_json(value: Any) -> bytes:
    """Encode a value as JSON bytes.

    Supports pydantic models, dataclasses, and plain containers.

    Args:
        value: The value to encode.

    Returns:
        The UTF-8 JSON encoding of ``value``.

    Raises:
        EncodingError: If the value cannot be serialized.

    Example:
        ```pycon
        >>> from arequest.encoding import encode_json
        >>> encode_json({"id": 1, "tags": ["a"]})
        b'{"id":1,"tags":["a"]}'

        ```
    """
    try:
        return to_json(value)
    except PydanticSerializationError as exc:
        msg = f"cannot encode {type(value).__name__} as JSON: {exc}"
        raise EncodingError(msg, cause=exc) from exc


def encode_form(fields: Mapping[str, str]) -> bytes:
    """Encode a mapping as an ``application/x-www-form-urlencoded`` body.

    Example:
        ```pycon
        >>> from arequest.encoding import encode_form
        >>> encode_form({"q": "a b", "page": "2"})
        b'q=a+b&page=2'

        ```
    """
    return urlencode(list(fields.items())).encode("ascii")


def encode_text(text: str, encoding: str = "utf-8") -> bytes:
    """Encode a string body.

    Raises:
        EncodingError: If the text cannot be represented in ``encoding``.
    """
    try:
        return text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as exc:
        msg = f"cannot encode text body as {encoding}: {exc}"
        raise EncodingError(msg, cause=exc) from exc
