from abc import ABC, abstractmethod

from teamhub.models.collection import TeamCollection


class StorageError(Exception):
    """Custom exception for storage configuration errors."""

    pass


class BaseStore(ABC):
    """Persists the whole team collection as one blob under a fixed key.

    Writes replace the previous blob (last write wins); there are no
    partial or per-team updates.
    """

    def __init__(self, key: str):
        self.key = key

    @abstractmethod
    async def load(self) -> TeamCollection:
        """Returns the stored collection, or an empty one."""
        pass

    @abstractmethod
    async def save(self, collection: TeamCollection) -> bool:
        """Replaces the stored blob. Returns False on failure."""
        pass

    @abstractmethod
    async def clear(self) -> bool:
        pass
