class SessionCookieError(Exception):
    """Base class for all session cookie errors."""


class InvalidArgument(SessionCookieError, TypeError):
    """Raised when a cookie option or attribute value has an unsupported type or value."""


class DeprecatedUsageWarning(DeprecationWarning):
    """Emitted when a deprecated calling convention is used, for example max age set as a datetime."""
