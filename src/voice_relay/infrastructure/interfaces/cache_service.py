"""Abstract interface for the translation cache."""

from abc import ABC, abstractmethod


class CacheService(ABC):
    """Key-value store for serialized translation responses."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Looks up a serialized response by its request key.

        Raises:
            CacheServiceError: If the backend is unavailable.
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Stores a serialized response; the backend decides on expiry.

        Raises:
            CacheServiceError: If the backend is unavailable.
        """
        pass
