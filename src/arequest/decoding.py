r"""Decoders turning validated response bodies into typed values.

The executor hands the decoder the raw body bytes and the caller's
target type. Decoding failures are reported as ``DecodingError``, which
the built-in retry policies never retry: the same body would fail the
same way on every attempt.
"""

from __future__ import annotations

__all__ = ["BaseDecoder", "CallableDecoder", "JSONDecoder"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from arequest.exceptions import DecodingError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


def _type_name(target: Any) -> str:
    if hasattr(target, "__origin__"):
        return repr(target)
    return getattr(target, "__name__", repr(target))


class BaseDecoder(ABC):
    """Abstract base class for response body decoders."""

    @abstractmethod
    def decode(self, data: bytes, target: Any = None) -> Any:
        """Decode ``data`` into an instance of ``target``.

        Args:
            data: The raw response body.
            target: The type to decode into. ``None`` means the caller
                wants the raw bytes.

        Returns:
            The decoded value.

        Raises:
            DecodingError: If ``data`` does not match ``target``.
        """


class JSONDecoder(BaseDecoder):
    """Decode JSON bodies with pydantic.

    ``target`` may be anything ``pydantic.TypeAdapter`` accepts: a pydantic
    model, a dataclass, a ``TypedDict``, or a plain annotation such as
    ``list[int]``. ``None`` and ``bytes`` return the body unchanged, and
    ``str`` returns it as UTF-8 text. Adapters are cached per target.

    Example:
        ```pycon
        >>> from arequest.decoding import JSONDecoder
        >>> decoder = JSONDecoder()
        >>> decoder.decode(b"[1, 2, 3]", list[int])
        [1, 2, 3]
        >>> decoder.decode(b"raw")
        b'raw'

        ```
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def _adapter(self, target: Any) -> TypeAdapter[Any]:
        try:
            return self._adapters[target]
        except KeyError:
            adapter = self._adapters[target] = TypeAdapter(target)
            return adapter
        except TypeError:
            # Unhashable annotations are not cached.
            return TypeAdapter(target)

    def decode(self, data: bytes, target: Any = None) -> Any:
        if target is None or target is bytes:
            return data
        target_name = _type_name(target)
        try:
            if target is str:
                return data.decode("utf-8")
            return self._adapter(target).validate_json(data)
        except (ValidationError, ValueError) as exc:
            # UnicodeDecodeError is a ValueError.
            logger.debug(f"Failed to decode response body as {target_name}: {exc}")
            msg = f"cannot decode response body as {target_name}: {exc}"
            raise DecodingError(msg, cause=exc) from exc


class CallableDecoder(BaseDecoder):
    """Adapt a plain function ``func(data, target) -> value`` to a
    decoder.

    Exceptions raised by ``func`` other than ``DecodingError`` are wrapped
    in ``DecodingError``.

    Example:
        ```pycon
        >>> from arequest.decoding import CallableDecoder
        >>> decoder = CallableDecoder(lambda data, target: data.decode().upper())
        >>> decoder.decode(b"ok")
        'OK'

        ```
    """

    def __init__(self, func: Callable[[bytes, Any], Any]) -> None:
        self.func = func

    def decode(self, data: bytes, target: Any = None) -> Any:
        try:
            return self.func(data, target)
        except DecodingError:
            raise
        except Exception as exc:
            msg = f"cannot decode response body: {exc}"
            raise DecodingError(msg, cause=exc) from exc
