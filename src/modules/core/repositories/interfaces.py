"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).  Entities are keyed by integer ids
    assigned by the store on first save.
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def get_many(self, ids: Iterable[int]) -> Dict[int, T]:
        """Retrieve every entity whose id is in ``ids``, keyed by id.

        Unknown ids are simply absent from the result.
        """

    @abstractmethod
    def list(self) -> Iterable[T]:
        """List every entity."""

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Return ``True`` when an entity with ``id`` is stored."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove an entity by ID."""
