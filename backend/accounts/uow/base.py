"""Transaction boundary contract the services depend on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from accounts.repositories.user import UserRepository


class UnitOfWork(ABC):
    """
    One use-case transaction.

    Used as a context manager: a clean exit commits (read-write variants)
    and an exception rolls back. ``users`` is bound to the same transaction.
    """

    users: UserRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
