"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import TypeVar, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity."""
        ...

    def update(self, id: int, obj_in: Any) -> T:
        """Update an existing entity. Raises EntityNotFoundException when absent."""
        ...

    def delete(self, id: int) -> T:
        """Delete an entity by ID and return its last state. Raises EntityNotFoundException when absent."""
        ...
