from typing import Awaitable, Callable, Optional, Protocol, TypedDict, Union

from multidict import CIMultiDict, MultiMapping
from yarl import URL

StrOrURL = Union[str, URL]


class CookieRecord(TypedDict):
    """Snapshot shape of a single cookie, JSON serializable."""

    name: str
    value: str
    expires_at: Optional[int]
    domain: Optional[str]
    path: str
    secure: bool
    http_only: bool
    same_site: Optional[str]


class CookieRequest(Protocol):
    url: URL
    headers: "CIMultiDict[str]"


class CookieResponse(Protocol):
    headers: "MultiMapping[str]"


Handler = Callable[[CookieRequest], Awaitable[CookieResponse]]
