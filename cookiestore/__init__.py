__version__ = "1.0.0.dev0"

from typing import Tuple

from . import factory, hdrs
from .abc import AbstractCookieCollection
from .client_middlewares import CookieMiddleware
from .cookie import Cookie
from .cookie_collections import (
    DEFAULT_THRESHOLD,
    AdaptiveCookieCollection,
    IndexedCookieCollection,
    LinearCookieCollection,
)
from .cookiejar import CookieJar
from .exceptions import CookieError, CookieParseError, InvalidCookieError
from .typedefs import CookieRecord

__all__: Tuple[str, ...] = (
    "factory",
    "hdrs",
    # abc
    "AbstractCookieCollection",
    # client_middlewares
    "CookieMiddleware",
    # cookie
    "Cookie",
    # cookie_collections
    "DEFAULT_THRESHOLD",
    "AdaptiveCookieCollection",
    "IndexedCookieCollection",
    "LinearCookieCollection",
    # cookiejar
    "CookieJar",
    # exceptions
    "CookieError",
    "CookieParseError",
    "InvalidCookieError",
    # typedefs
    "CookieRecord",
)
