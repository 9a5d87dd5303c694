"""Client middleware support."""

from typing import Optional

from . import hdrs
from .cookiejar import CookieJar
from .helpers import SECURE_SCHEMES
from .typedefs import CookieRequest, CookieResponse, Handler

__all__ = ("CookieMiddleware",)


class CookieMiddleware:
    """Client middleware keeping a cookie session across requests.

    Before the request is sent the jar's cookies for its URL are added
    to the Cookie header, after the response arrives every Set-Cookie
    header is stored back into the jar.

    Usable wherever middlewares are awaited as ``middleware(request,
    handler)``::

        jar = CookieJar()
        middleware = CookieMiddleware(jar)
        response = await middleware(request, send)
    """

    def __init__(self, cookie_jar: CookieJar) -> None:
        self._cookie_jar = cookie_jar

    @classmethod
    def create(cls, cookie_jar: Optional[CookieJar] = None) -> "CookieMiddleware":
        return cls(cookie_jar if cookie_jar is not None else CookieJar())

    @classmethod
    def with_session_persistence(cls) -> "CookieMiddleware":
        return cls(CookieJar.with_session_persistence())

    @property
    def cookie_jar(self) -> CookieJar:
        return self._cookie_jar

    async def __call__(
        self, request: CookieRequest, handler: Handler
    ) -> CookieResponse:
        self._add_cookies(request)
        response = await handler(request)
        self._store_cookies(request, response)
        return response

    def _add_cookies(self, request: CookieRequest) -> None:
        url = request.url
        cookie_header = self._cookie_jar.get_cookie_header_for_url(
            url, url.scheme in SECURE_SCHEMES
        )
        if cookie_header is None:
            return

        existing = request.headers.get(hdrs.COOKIE, "")
        if existing:
            cookie_header = f"{existing}; {cookie_header}"
        request.headers[hdrs.COOKIE] = cookie_header

    def _store_cookies(self, request: CookieRequest, response: CookieResponse) -> None:
        set_cookie_headers = response.headers.getall(hdrs.SET_COOKIE, ())
        if set_cookie_headers:
            self._cookie_jar.add_from_set_cookie_headers(
                set_cookie_headers, request.url
            )
