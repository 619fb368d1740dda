import typing

from starlette.config import Config

__all__ = ["cookie_options_from_config"]

# option name -> (variable suffix, cast)
_cookie_variables: dict[str, tuple[str, typing.Callable[[typing.Any], typing.Any] | None]] = {
    "path": ("PATH", None),
    "domain": ("DOMAIN", None),
    "secure": ("SECURE", bool),
    "http_only": ("HTTP_ONLY", bool),
    "partitioned": ("PARTITIONED", bool),
    "same_site": ("SAME_SITE", None),
    "priority": ("PRIORITY", None),
    "max_age": ("MAX_AGE", int),
}


def cookie_options_from_config(config: Config, prefix: str = "SESSION_COOKIE_") -> dict[str, typing.Any]:
    """
    Read session cookie options from configuration.

    Usage: CookieAttributes(cookie_options_from_config(Config(".env")))
    Variables that are not defined are omitted so the cookie defaults apply. `MAX_AGE` is in milliseconds.
    """
    options: dict[str, typing.Any] = {}
    for name, (suffix, cast) in _cookie_variables.items():
        value = config(prefix + suffix, cast=cast, default=None)
        if value is not None:
            options[name] = value
    return options
