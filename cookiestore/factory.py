"""Cookie collection selection and migration."""

from typing import Sequence, Type, TypeVar

from .abc import AbstractCookieCollection
from .cookie import Cookie
from .cookie_collections import (
    DEFAULT_THRESHOLD,
    AdaptiveCookieCollection,
    IndexedCookieCollection,
    LinearCookieCollection,
)

__all__ = (
    "DEFAULT_THRESHOLD",
    "create",
    "create_adaptive",
    "from_cookies",
    "migrate",
    "recommended_type",
    "should_use_indexed",
)

_C = TypeVar("_C", bound=AbstractCookieCollection)


def should_use_indexed(count: int, threshold: int = DEFAULT_THRESHOLD) -> bool:
    return count >= threshold


def recommended_type(
    count: int, threshold: int = DEFAULT_THRESHOLD
) -> Type[AbstractCookieCollection]:
    if should_use_indexed(count, threshold):
        return IndexedCookieCollection
    return LinearCookieCollection


def create(
    expected_count: int = 0, threshold: int = DEFAULT_THRESHOLD
) -> AbstractCookieCollection:
    """Create the collection best suited for expected_count cookies."""
    return recommended_type(expected_count, threshold)()


def create_adaptive(threshold: int = DEFAULT_THRESHOLD) -> AdaptiveCookieCollection:
    return AdaptiveCookieCollection(threshold)


def from_cookies(
    cookies: Sequence[Cookie], threshold: int = DEFAULT_THRESHOLD
) -> AbstractCookieCollection:
    collection = create(len(cookies), threshold)
    for cookie in cookies:
        collection.add(cookie)
    return collection


def migrate(
    source: AbstractCookieCollection, target_type: Type[_C]
) -> AbstractCookieCollection:
    """Copy every cookie of source into a new target_type collection.

    source itself is returned when it already is a target_type.
    """
    if isinstance(source, target_type):
        return source

    target = target_type()
    for cookie in source.all():
        target.add(cookie)
    return target
