from __future__ import annotations

import collections.abc
import datetime
import logging
import typing
import warnings

from sessioncookie import json as jsonlib
from sessioncookie.exceptions import DeprecatedUsageWarning, InvalidArgument
from sessioncookie.serializers import CookieSerializer, serialize_cookie

__all__ = ["CookieAttributes", "SameSite", "utcnow"]

logger = logging.getLogger(__name__)

SameSite = typing.Literal["strict", "lax", "none"] | bool

_MILLISECOND = datetime.timedelta(milliseconds=1)

# plain attributes copied verbatim from options
_ATTRIBUTES = ("path", "http_only", "partitioned", "secure", "domain", "same_site", "priority")
_OPTIONS = frozenset(_ATTRIBUTES + ("max_age", "expires", "original_max_age"))
_RESERVED = "data"

_T = typing.TypeVar("_T", bound="CookieAttributes")


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _is_number(value: typing.Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CookieAttributes:
    """
    Attributes of the session cookie.

    The expiration is stored once, as an absolute UTC instant in `expires`. `max_age` is always computed from it and
    decreases as time passes. `original_max_age` keeps the lifetime captured when the expiration was last set, so the
    session layer can renew rolling sessions with the configured lifetime rather than the remaining one.
    """

    def __init__(
        self,
        options: typing.Mapping[str, typing.Any] | None = None,
        *,
        serializer: CookieSerializer = serialize_cookie,
    ) -> None:
        self.path: str = "/"
        self.http_only: bool = True
        self.partitioned: bool = False
        self.secure: bool | None = None
        self.domain: str | None = None
        self.same_site: SameSite | None = None
        self.priority: str | None = None
        self.original_max_age: int | float | None = None
        self._expires: datetime.datetime | None = None
        self._serializer = serializer

        if options is not None:
            if not isinstance(options, collections.abc.Mapping):
                raise InvalidArgument("options must be a mapping")
            self._apply_options(options)

        if self.original_max_age is None:
            self.original_max_age = self.max_age

    def _apply_options(self, options: typing.Mapping[str, typing.Any]) -> None:
        unknown = set(options) - _OPTIONS - {_RESERVED}
        if unknown:
            raise InvalidArgument("unknown cookie options: %s" % ", ".join(sorted(map(str, unknown))))

        for name in _ATTRIBUTES:
            if name in options:
                setattr(self, name, options[name])

        if "max_age" in options:
            # warnings point at the caller of CookieAttributes()
            self._set_max_age(options["max_age"], stacklevel=4)
        if "expires" in options:
            self.expires = options["expires"]

        # must run after the expiration setters, they overwrite the baseline
        if options.get("original_max_age") is not None:
            self.original_max_age = options["original_max_age"]

    @property
    def expires(self) -> datetime.datetime | None:
        return self._expires

    @expires.setter
    def expires(self, date: datetime.datetime | None) -> None:
        if isinstance(date, datetime.datetime) and date.tzinfo is None:
            date = date.replace(tzinfo=datetime.timezone.utc)
        self._expires = date or None
        self.original_max_age = self.max_age
        logger.debug("Cookie expiration set to %s.", self._expires)

    @property
    def max_age(self) -> typing.Any:
        """Remaining lifetime in whole milliseconds, or None for a session cookie."""
        if isinstance(self._expires, datetime.datetime):
            return int((self._expires - utcnow()) / _MILLISECOND)
        return self._expires

    @max_age.setter
    def max_age(self, ms: int | float | datetime.datetime | None) -> None:
        self._set_max_age(ms, stacklevel=3)

    def _set_max_age(self, ms: typing.Any, stacklevel: int) -> None:
        if ms and not _is_number(ms) and not isinstance(ms, datetime.datetime):
            raise InvalidArgument("max_age must be a number or datetime")

        if isinstance(ms, datetime.datetime):
            warnings.warn(
                "max_age as datetime; pass number of milliseconds instead",
                DeprecatedUsageWarning,
                stacklevel=stacklevel,
            )

        self.expires = utcnow() + ms * _MILLISECOND if _is_number(ms) else ms

    @property
    def is_expired(self) -> bool:
        return isinstance(self._expires, datetime.datetime) and self._expires <= utcnow()

    def reset_max_age(self) -> None:
        """Restart the lifetime from now using the configured max age."""
        self.max_age = self.original_max_age

    @property
    def data(self) -> dict[str, typing.Any]:
        return {
            "original_max_age": self.original_max_age,
            "partitioned": self.partitioned,
            "priority": self.priority,
            "expires": self._expires,
            "secure": self.secure,
            "http_only": self.http_only,
            "domain": self.domain,
            "path": self.path,
            "same_site": self.same_site,
        }

    def serialize(self, name: str, value: str) -> str:
        """Return the `Set-Cookie` header value for the cookie."""
        return self._serializer(name, value, self.data)

    def to_json(self) -> dict[str, typing.Any]:
        return self.data

    @classmethod
    def from_json(
        cls: type[_T],
        payload: str | bytes | typing.Mapping[str, typing.Any],
        *,
        serializer: CookieSerializer = serialize_cookie,
    ) -> _T:
        """
        Restore a cookie persisted with `to_json()`.

        Accepts either the mapping itself or its JSON encoded form. The stored `original_max_age` is kept as is
        instead of being derived from the remaining lifetime.
        """
        if isinstance(payload, (str, bytes)):
            payload = jsonlib.loads(payload)

        options = dict(payload)
        if isinstance(options.get("expires"), str):
            options["expires"] = datetime.datetime.fromisoformat(options["expires"])
        return cls(options, serializer=serializer)

    def copy(self: _T) -> _T:
        return type(self)(self.data, serializer=self._serializer)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.data!r}>"
