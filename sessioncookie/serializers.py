from __future__ import annotations

import datetime
import logging
import re
import typing
from starlette import responses

from sessioncookie.exceptions import InvalidArgument

if typing.TYPE_CHECKING:
    from sessioncookie.cookies import CookieAttributes

__all__ = ["serialize_cookie", "set_cookie_header", "CookieSerializer"]

logger = logging.getLogger(__name__)

CookieSerializer = typing.Callable[[str, str, typing.Mapping[str, typing.Any]], str]

_same_site_values = ("strict", "lax", "none")
_priority_values = ("low", "medium", "high")

# RFC 6265 section 4.1.1 cookie-octet, domain label and path-value grammars
_cookie_value_re = re.compile(r"[\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*")
_domain_re = re.compile(r"\.?[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?(\.[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)*", re.IGNORECASE)
_path_re = re.compile(r"[\x20-\x3A\x3D-\x7E]*")


def _validate(pattern: re.Pattern[str], option: str, value: typing.Any) -> None:
    if value is None:
        return
    if not isinstance(value, str) or not pattern.fullmatch(value):
        raise InvalidArgument(f"cookie {option} is invalid: {value!r}")


def _normalize_same_site(value: typing.Any) -> str | None:
    if value is True:
        return "Strict"
    if value is None or value is False:
        return None
    if isinstance(value, str) and value.lower() in _same_site_values:
        return value.lower().capitalize()
    raise InvalidArgument(f"same_site option is invalid: {value!r}")


def _normalize_priority(value: typing.Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str) and value.lower() in _priority_values:
        return value.lower().capitalize()
    raise InvalidArgument(f"priority option is invalid: {value!r}")


def _normalize_expires(value: typing.Any) -> typing.Any:
    if not isinstance(value, datetime.datetime):
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def serialize_cookie(name: str, value: str, attributes: typing.Mapping[str, typing.Any]) -> str:
    """
    Serialize a cookie into a `Set-Cookie` header value.

    The attributes mapping uses the keys produced by `CookieAttributes.data`. Max age is never emitted, the expiration
    is carried by `expires` only. Illegal cookie names raise `http.cookies.CookieError`, values, domains and paths
    outside of the RFC 6265 grammar raise `InvalidArgument`.
    """
    _validate(_cookie_value_re, "value", value)
    _validate(_domain_re, "domain", attributes.get("domain"))
    _validate(_path_re, "path", attributes.get("path"))
    same_site = _normalize_same_site(attributes.get("same_site"))
    priority = _normalize_priority(attributes.get("priority"))

    # starlette handles the attributes http.cookies knows about
    http_response = responses.Response()
    http_response.set_cookie(
        key=name,
        value=value,
        expires=_normalize_expires(attributes.get("expires")),
        path=attributes.get("path"),
        domain=attributes.get("domain"),
        secure=bool(attributes.get("secure")),
        httponly=bool(attributes.get("http_only")),
        samesite=same_site,  # type: ignore[arg-type]
    )
    header = http_response.headers["set-cookie"]

    if attributes.get("partitioned"):
        header = f"{header}; Partitioned"
    if priority:
        header = f"{header}; Priority={priority}"
    return header


def set_cookie_header(response: responses.Response, name: str, value: str, cookie: CookieAttributes) -> None:
    """Append the serialized cookie as a `set-cookie` header of the response."""
    header = cookie.serialize(name, value)
    response.raw_headers.append((b"set-cookie", header.encode("latin-1")))
    logger.debug("Added set-cookie header for cookie %r.", name)
