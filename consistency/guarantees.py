"""
Session guarantee kinds and the error raised when one is violated.
"""

from enum import Enum
from typing import Optional
from consistency.version_vector import VersionVector


class Guarantee(Enum):
    """
    The four client session guarantees.

    Each member's value is the human-readable guarantee name.
    """

    MONOTONIC_READS = "Monotonic Reads"
    READ_YOUR_WRITES = "Read Your Writes"
    WRITES_FOLLOW_READS = "Writes Follow Reads"
    MONOTONIC_WRITES = "Monotonic Writes"

    @property
    def abbreviation(self) -> str:
        """Short form used in reports (MR, RYW, WFR, MW)."""
        return _ABBREVIATIONS[self]

    @classmethod
    def from_abbreviation(cls, abbreviation: str) -> 'Guarantee':
        """
        Look up a guarantee by its short form.

        Raises:
            ValueError: If the abbreviation is unknown
        """
        for guarantee, short in _ABBREVIATIONS.items():
            if short == abbreviation.upper():
                return guarantee
        raise ValueError(f"Unknown guarantee: {abbreviation} "
                         f"(expected one of {', '.join(_ABBREVIATIONS.values())})")


_ABBREVIATIONS = {
    Guarantee.MONOTONIC_READS: "MR",
    Guarantee.READ_YOUR_WRITES: "RYW",
    Guarantee.WRITES_FOLLOW_READS: "WFR",
    Guarantee.MONOTONIC_WRITES: "MW",
}

# Guarantees checked by reads, in check order
READ_GUARANTEES = (Guarantee.MONOTONIC_READS, Guarantee.READ_YOUR_WRITES)

# Guarantees checked by writes, in check order
WRITE_GUARANTEES = (Guarantee.WRITES_FOLLOW_READS, Guarantee.MONOTONIC_WRITES)

ALL_GUARANTEES = frozenset(Guarantee)


class GuaranteeViolation(Exception):
    """
    Raised when a replica has not seen enough state to serve a session.

    Attributes:
        guarantee: The Guarantee that failed
        replica_id: Replica that refused the operation
        replica_vector: Snapshot of the replica's vector at check time
        required_vector: Snapshot of the session vector it had to dominate
    """

    def __init__(self,
                 guarantee: Guarantee,
                 replica_id: Optional[str] = None,
                 replica_vector: Optional[VersionVector] = None,
                 required_vector: Optional[VersionVector] = None):
        super().__init__(f"{guarantee.value} guarantee violated.")
        self.guarantee = guarantee
        self.replica_id = replica_id
        self.replica_vector = replica_vector
        self.required_vector = required_vector

    def describe(self) -> str:
        """Longer message including the vectors involved."""
        if self.replica_id is None:
            return str(self)
        return (f"{self} Replica {self.replica_id} has {self.replica_vector}, "
                f"session requires {self.required_vector}")
