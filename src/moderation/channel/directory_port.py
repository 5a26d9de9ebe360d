"""User directory port — read-only lookup of a user's display name and email."""

from abc import ABC, abstractmethod


class UserDirectoryPort(ABC):
    """Abstract interface for identity lookups."""

    @abstractmethod
    def get_contact(self, user_id: str) -> dict | None:
        """Return ``{"name": ..., "email": ...}`` for the user, or None if unknown."""
        ...
