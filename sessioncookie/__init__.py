from sessioncookie.config import cookie_options_from_config
from sessioncookie.cookies import CookieAttributes, SameSite
from sessioncookie.exceptions import DeprecatedUsageWarning, InvalidArgument, SessionCookieError
from sessioncookie.serializers import CookieSerializer, serialize_cookie, set_cookie_header

__all__ = [
    "CookieAttributes",
    "SameSite",
    "CookieSerializer",
    "serialize_cookie",
    "set_cookie_header",
    "cookie_options_from_config",
    "SessionCookieError",
    "InvalidArgument",
    "DeprecatedUsageWarning",
]

__version__ = "0.1.0"
