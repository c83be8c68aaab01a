"""
Client session that enforces a chosen set of guarantees across replicas.
"""

import logging
from typing import Any, Iterable, Optional, Tuple
from consistency.version_vector import VersionVector
from consistency.guarantees import Guarantee, GuaranteeViolation, ALL_GUARANTEES
from consistency.session import SessionTracker
from replica.server import Replica


class SessionClient:
    """
    Issues reads and writes for one session with a fixed guarantee set.

    Unlike calling Replica.read directly, every successful read through
    the client is recorded in the session's read vector.
    """

    def __init__(self,
                 guarantees: Iterable[Guarantee] = ALL_GUARANTEES,
                 session: Optional[SessionTracker] = None):
        """
        Initialize a client session.

        Args:
            guarantees: Guarantees to enforce on every operation
            session: Existing tracker to use (a new one if omitted)
        """
        self.guarantees = frozenset(guarantees)
        self.session = session or SessionTracker()
        self.logger = logging.getLogger(f"Client-{self.session.session_id}")

    def enabled(self, guarantee: Guarantee) -> bool:
        """Check if a guarantee is enforced by this client."""
        return guarantee in self.guarantees

    def _read_flags(self) -> dict:
        return {
            'mr': self.enabled(Guarantee.MONOTONIC_READS),
            'ryw': self.enabled(Guarantee.READ_YOUR_WRITES),
        }

    def _write_flags(self) -> dict:
        return {
            'wfr': self.enabled(Guarantee.WRITES_FOLLOW_READS),
            'mw': self.enabled(Guarantee.MONOTONIC_WRITES),
        }

    def read(self, replica: Replica) -> VersionVector:
        """
        Read a replica's state and record it in the session.

        Args:
            replica: Replica to read from

        Returns:
            Snapshot of the replica's version vector

        Raises:
            GuaranteeViolation: If an enabled read guarantee does not hold
        """
        snapshot = replica.read(self.session, **self._read_flags())
        self.session.record_read(snapshot)
        return snapshot

    def write(self, replica: Replica) -> int:
        """
        Write to a replica.

        Returns:
            The replica's clock after the write

        Raises:
            GuaranteeViolation: If an enabled write guarantee does not hold
        """
        return replica.write(self.session, **self._write_flags())

    def get(self, replica: Replica, key: str) -> Optional[Any]:
        """
        Retrieve a value by key from a replica.

        Args:
            replica: Replica to read from
            key: Key to retrieve

        Returns:
            Value or None if the replica has no such key

        Raises:
            GuaranteeViolation: If an enabled read guarantee does not hold
        """
        value, version, snapshot = replica.lookup(self.session, key, **self._read_flags())
        self.session.record_read(snapshot)
        self.logger.info(f"GET {key} from {replica.replica_id} = {value!r} (version: {version})")
        return value

    def put(self, replica: Replica, key: str, value: Any) -> int:
        """
        Store a key-value pair on a replica.

        Returns:
            The replica's clock after the write

        Raises:
            GuaranteeViolation: If an enabled write guarantee does not hold
        """
        clock = replica.write(self.session, key=key, value=value, **self._write_flags())
        self.logger.info(f"PUT {key} = {value!r} on {replica.replica_id} (clock: {clock})")
        return clock

    def try_read(self, replica: Replica) -> Tuple[Optional[VersionVector], Optional[GuaranteeViolation]]:
        """
        Like read, but return the violation instead of raising it.

        Returns:
            Tuple of (snapshot, None) on success or (None, violation)
        """
        try:
            return self.read(replica), None
        except GuaranteeViolation as e:
            return None, e

    def try_write(self, replica: Replica) -> Tuple[Optional[int], Optional[GuaranteeViolation]]:
        """
        Like write, but return the violation instead of raising it.

        Returns:
            Tuple of (clock, None) on success or (None, violation)
        """
        try:
            return self.write(replica), None
        except GuaranteeViolation as e:
            return None, e

    def __repr__(self) -> str:
        names = ",".join(sorted(g.abbreviation for g in self.guarantees))
        return f"SessionClient({self.session.session_id}, guarantees=[{names}])"
