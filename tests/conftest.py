from typing import Callable, List, Type

import pytest

from cookiestore import (
    AbstractCookieCollection,
    Cookie,
    IndexedCookieCollection,
    LinearCookieCollection,
)

pytest_plugins = ("pytester",)


@pytest.fixture(
    params=[LinearCookieCollection, IndexedCookieCollection],
    ids=["linear", "indexed"],
)
def collection_cls(request: pytest.FixtureRequest) -> Type[AbstractCookieCollection]:
    return request.param  # type: ignore[no-any-return]


@pytest.fixture
def collection(
    collection_cls: Type[AbstractCookieCollection],
) -> AbstractCookieCollection:
    return collection_cls()


@pytest.fixture
def path_cookies() -> List[Cookie]:
    return [
        Cookie("root", "r", domain="example.com", path="/"),
        Cookie("api", "a", domain="example.com", path="/api"),
        Cookie("users", "u", domain="example.com", path="/api/users"),
    ]


@pytest.fixture
def make_cookies() -> Callable[..., List[Cookie]]:
    def maker(count: int, domain: str = "example.com", **kwargs: object) -> List[Cookie]:
        return [
            Cookie(f"cookie{i}", f"value{i}", domain=domain, **kwargs)  # type: ignore[arg-type]
            for i in range(count)
        ]

    return maker
