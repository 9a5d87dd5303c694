"""Cookie related errors."""

__all__ = ("CookieError", "InvalidCookieError", "CookieParseError")


class CookieError(Exception):
    """Base class for cookie errors."""


class InvalidCookieError(CookieError, ValueError):
    """Cookie attributes failed validation.

    Raised on construction, e.g. for an illegal name or SameSite value.
    """


class CookieParseError(CookieError, ValueError):
    """Set-Cookie header text could not be parsed."""
