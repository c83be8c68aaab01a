"""
Local key-value storage for a replica with version tracking.
"""

from typing import Dict, Optional, Tuple, Any, List
from consistency.version_vector import VersionVector


class ReplicaStorage:
    """
    In-memory storage for key-value pairs with version metadata.

    Each value is stamped with the replica's version vector at the time
    it was written. Versions are copied on the way in and on the way out.
    """

    def __init__(self, replica_id: str):
        """
        Initialize storage for a replica.

        Args:
            replica_id: Identifier of the replica owning this storage
        """
        self.replica_id = replica_id
        self.store: Dict[str, Tuple[Any, VersionVector]] = {}

    def put(self, key: str, value: Any, version: VersionVector) -> VersionVector:
        """
        Store a key-value pair with version metadata.

        Args:
            key: The key to store
            value: The value to store
            version: Version vector stamp for this write

        Returns:
            The version assigned to this put operation
        """
        stamp = version.copy()
        self.store[key] = (value, stamp)
        return stamp.copy()

    def get(self, key: str) -> Optional[Tuple[Any, VersionVector]]:
        """
        Retrieve a key-value pair with its version.

        Args:
            key: The key to retrieve

        Returns:
            Tuple of (value, version) or None if key doesn't exist
        """
        result = self.store.get(key)
        if result is None:
            return None
        value, version = result
        return value, version.copy()

    def get_value(self, key: str) -> Optional[Any]:
        """Retrieve just the value without version metadata."""
        result = self.store.get(key)
        return result[0] if result else None

    def get_version(self, key: str) -> Optional[VersionVector]:
        """Retrieve just the version without the value."""
        result = self.store.get(key)
        return result[1].copy() if result else None

    def delete(self, key: str) -> bool:
        """
        Delete a key-value pair.

        Args:
            key: The key to delete

        Returns:
            True if deleted, False if key didn't exist
        """
        if key in self.store:
            del self.store[key]
            return True
        return False

    def has_key(self, key: str) -> bool:
        """Check if a key exists in storage."""
        return key in self.store

    def get_all_keys(self) -> List[str]:
        """Get all keys in storage."""
        return list(self.store.keys())

    def get_all_items(self) -> Dict[str, Tuple[Any, VersionVector]]:
        """
        Get all keys with their values and versions.

        Returns:
            Dictionary of key -> (value, version)
        """
        return {key: (value, version.copy()) for key, (value, version) in self.store.items()}

    def __len__(self) -> int:
        return len(self.store)
