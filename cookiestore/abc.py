from abc import abstractmethod
from collections.abc import Iterable, Sized
from typing import TYPE_CHECKING, Iterator, List, Optional

from .typedefs import StrOrURL

if TYPE_CHECKING:  # pragma: no cover
    from .cookie import Cookie

    IterableBase = Iterable["Cookie"]
else:
    IterableBase = Iterable


class AbstractCookieCollection(Sized, IterableBase):
    """Abstract cookie storage.

    Keyed by cookie identifier, adding a cookie with an identifier
    already present replaces the stored one.
    """

    @abstractmethod
    def add(self, cookie: "Cookie") -> None:
        """Store a cookie, replacing one with the same identifier."""

    @abstractmethod
    def remove(self, identifier: str) -> None:
        """Remove a cookie, missing identifiers are ignored."""

    @abstractmethod
    def get(self, identifier: str) -> Optional["Cookie"]:
        """Return the stored cookie or None."""

    @abstractmethod
    def find_for_url(
        self, url: StrOrURL, is_secure: Optional[bool] = None
    ) -> List["Cookie"]:
        """Return cookies matching the URL, most specific path first."""

    @abstractmethod
    def all(self) -> List["Cookie"]:
        """Return every stored cookie, expired ones included."""

    @abstractmethod
    def clear(self) -> None:
        """Remove all cookies."""

    @abstractmethod
    def remove_expired(self) -> int:
        """Drop expired cookies, return how many were removed."""

    @property
    def type_name(self) -> str:
        return type(self).__name__

    def count(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return not len(self)

    def __iter__(self) -> Iterator["Cookie"]:
        return iter(self.all())

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.get(identifier) is not None
