"""
Version vector implementation for tracking what state a replica or session has seen.
"""

from typing import Dict, Optional
import copy


class VersionVector:
    """
    Version vector mapping replica identifiers to logical clocks.

    Each replica advances its own entry on every write it accepts. Entries
    that were never set read as 0, so a freshly created vector is the
    bottom of the partial order.
    """

    def __init__(self, clocks: Optional[Dict[str, int]] = None):
        """
        Initialize a version vector.

        Args:
            clocks: Optional dictionary mapping replica_id -> clock
        """
        if clocks is not None:
            self.clocks: Dict[str, int] = {str(k): v for k, v in clocks.items()}
        else:
            self.clocks: Dict[str, int] = {}

    def get(self, replica_id: str) -> int:
        """
        Get the clock recorded for a replica.

        Args:
            replica_id: The replica to look up

        Returns:
            The clock value, or 0 if the replica was never set
        """
        return self.clocks.get(replica_id, 0)

    def set(self, replica_id: str, clock: int):
        """
        Overwrite the clock for a replica.

        No monotonicity check is made here; callers advancing a clock
        are responsible for passing the next value.

        Args:
            replica_id: The replica whose entry is set
            clock: The new clock value
        """
        self.clocks[replica_id] = clock

    def merge(self, other: 'VersionVector'):
        """
        Merge another vector into this one (take element-wise maximum).

        Entries present only in this vector are left untouched.

        Args:
            other: Another version vector to merge with
        """
        for replica_id in other.clocks:
            self.set(replica_id, max(self.get(replica_id), other.get(replica_id)))

    def dominates(self, other: 'VersionVector') -> bool:
        """
        Check if this vector dominates (is greater than or equal to) another.

        Only the entries of ``other`` are checked; entries present only in
        this vector cannot make it smaller.

        Args:
            other: Another version vector

        Returns:
            True if every entry of other is <= the matching entry here
        """
        for replica_id in other.clocks:
            if self.get(replica_id) < other.get(replica_id):
                return False

        return True

    def happens_before(self, other: 'VersionVector') -> bool:
        """
        Check if this vector strictly precedes another.

        Args:
            other: Another version vector

        Returns:
            True if other dominates this vector and they are not equal
        """
        return other.dominates(self) and self != other

    def concurrent_with(self, other: 'VersionVector') -> bool:
        """
        Check if two vectors are incomparable (neither dominates the other).
        """
        return not self.dominates(other) and not other.dominates(self)

    def copy(self) -> 'VersionVector':
        """
        Create an independent snapshot of this vector.

        Returns:
            New VersionVector instance with the same entries
        """
        return VersionVector(copy.deepcopy(self.clocks))

    def to_dict(self) -> Dict[str, int]:
        """
        Convert to a plain dictionary.

        Returns:
            Dictionary mapping replica_id -> clock
        """
        return dict(self.clocks)

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> 'VersionVector':
        """Create a VersionVector from a plain dictionary."""
        return cls(data)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors have the same logical value."""
        if not isinstance(other, VersionVector):
            return False

        return self.dominates(other) and other.dominates(self)

    def __repr__(self) -> str:
        """String representation of the version vector."""
        items = sorted(self.clocks.items())
        clock_str = ", ".join(f"{replica_id}:{clock}" for replica_id, clock in items)
        return f"VersionVector({{{clock_str}}})"

    def __str__(self) -> str:
        """Human-readable string representation."""
        items = sorted(self.clocks.items())
        return "{" + ", ".join(f"{replica_id}={clock}" for replica_id, clock in items) + "}"


def compare_versions(v1: VersionVector, v2: VersionVector) -> str:
    """
    Compare two version vectors and return their relationship.

    Args:
        v1: First version vector
        v2: Second version vector

    Returns:
        String: "v1<v2", "v1>v2", "v1=v2", or "concurrent"
    """
    if v1 == v2:
        return "v1=v2"
    elif v1.happens_before(v2):
        return "v1<v2"
    elif v2.happens_before(v1):
        return "v1>v2"
    else:
        return "concurrent"
