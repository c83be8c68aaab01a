"""
Replica server that checks session guarantees before serving reads and writes.
"""

import logging
import threading
from typing import Any, Optional, Tuple
from consistency.version_vector import VersionVector
from consistency.guarantees import Guarantee, GuaranteeViolation
from consistency.session import SessionTracker
from replica.storage import ReplicaStorage


class Replica:
    """
    A single replica of the key-value store.

    Holds a version vector describing the state it has applied and its
    own logical clock. The clock always equals the replica's entry for
    itself in its own vector and advances by exactly one per accepted
    write. Replicas never exchange state with each other; all knowledge
    crossing replicas flows through the sessions that use them.
    """

    def __init__(self, replica_id: str):
        """
        Initialize an empty replica.

        Args:
            replica_id: Unique identifier of this replica
        """
        self.replica_id = replica_id
        self.clock = 0
        self._version_vector = VersionVector()
        self.storage = ReplicaStorage(replica_id)

        # Guards the clock, the vector and storage across concurrent sessions
        self._lock = threading.Lock()

        self.logger = logging.getLogger(f"Replica-{replica_id}")

    @property
    def version_vector(self) -> VersionVector:
        """Snapshot of the replica's version vector."""
        with self._lock:
            return self._version_vector.copy()

    def get(self, replica_id: str) -> int:
        """Clock recorded for a replica in this replica's vector."""
        with self._lock:
            return self._version_vector.get(replica_id)

    def read(self, session: SessionTracker, mr: bool = False, ryw: bool = False) -> VersionVector:
        """
        Serve a read for a session.

        The session's read vector is not updated here; callers that want
        the read to count toward later checks pass the result to
        ``session.record_read``.

        Args:
            session: Session issuing the read
            mr: Enforce Monotonic Reads
            ryw: Enforce Read Your Writes

        Returns:
            A snapshot copy of this replica's version vector

        Raises:
            GuaranteeViolation: If an enabled guarantee does not hold
        """
        with self._lock:
            self._check_read(session, mr, ryw)
            snapshot = self._version_vector.copy()

        self.logger.debug(f"Read by session {session.session_id}: {snapshot}")
        return snapshot

    def lookup(self,
               session: SessionTracker,
               key: str,
               mr: bool = False,
               ryw: bool = False) -> Tuple[Optional[Any], Optional[VersionVector], VersionVector]:
        """
        Read a single key under the same guarantee checks as ``read``.

        Args:
            session: Session issuing the read
            key: Key to look up
            mr: Enforce Monotonic Reads
            ryw: Enforce Read Your Writes

        Returns:
            Tuple of (value, version, snapshot); value and version are None
            when the key is absent

        Raises:
            GuaranteeViolation: If an enabled guarantee does not hold
        """
        with self._lock:
            self._check_read(session, mr, ryw)
            snapshot = self._version_vector.copy()
            result = self.storage.get(key)

        value, version = result if result else (None, None)
        self.logger.debug(f"Lookup '{key}' by session {session.session_id}: "
                          f"value={value!r} version={version}")
        return value, version, snapshot

    def write(self,
              session: SessionTracker,
              wfr: bool = False,
              mw: bool = False,
              key: Optional[str] = None,
              value: Any = None) -> int:
        """
        Accept a write from a session.

        All checks run before any state changes. On success the clock is
        incremented, the replica's own vector entry is set to it and the
        session's write vector is updated.

        Args:
            session: Session issuing the write
            wfr: Enforce Writes Follow Reads
            mw: Enforce Monotonic Writes
            key: Optional key to store
            value: Value stored under key

        Returns:
            The replica's clock after the write

        Raises:
            GuaranteeViolation: If an enabled guarantee does not hold
        """
        with self._lock:
            if wfr:
                self._require(Guarantee.WRITES_FOLLOW_READS, session.read_vector())
            if mw:
                self._require(Guarantee.MONOTONIC_WRITES, session.write_vector())

            self.clock += 1
            self._version_vector.set(self.replica_id, self.clock)
            session.record_write(self.replica_id, self.clock)

            if key is not None:
                self.storage.put(key, value, self._version_vector)

            clock = self.clock

        self.logger.debug(f"Write by session {session.session_id}, clock now {clock}")
        return clock

    def _check_read(self, session: SessionTracker, mr: bool, ryw: bool):
        """Run the read-side checks in order (MR before RYW)."""
        if mr:
            self._require(Guarantee.MONOTONIC_READS, session.read_vector())
        if ryw:
            self._require(Guarantee.READ_YOUR_WRITES, session.write_vector())

    def _require(self, guarantee: Guarantee, required: VersionVector):
        """Raise if this replica's vector does not dominate the required one."""
        if not self._version_vector.dominates(required):
            self.logger.warning(f"{guarantee.value} violated: have {self._version_vector}, "
                                f"need {required}")
            raise GuaranteeViolation(guarantee,
                                     replica_id=self.replica_id,
                                     replica_vector=self._version_vector.copy(),
                                     required_vector=required)

    def __str__(self) -> str:
        return f"{self.replica_id} {self._version_vector}"

    def __repr__(self) -> str:
        return f"Replica({self.replica_id!r}, clock={self.clock}, vector={self._version_vector!r})"
