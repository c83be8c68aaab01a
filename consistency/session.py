"""
Per-session bookkeeping of what a client has read and written.
"""

import logging
import uuid
from typing import Optional
from consistency.version_vector import VersionVector


class SessionTracker:
    """
    Tracks the read-set and write-set vectors of one client session.

    The read vector covers replica state the session has observed; the
    write vector covers replica state the session has caused. Both only
    grow for the life of the session. A tracker belongs to a single
    session and is never shared.
    """

    def __init__(self, session_id: Optional[str] = None):
        """
        Initialize an empty session.

        Args:
            session_id: Optional label for log output (random if omitted)
        """
        self.session_id = session_id or uuid.uuid4().hex[:8]
        self._read_vector = VersionVector()
        self._write_vector = VersionVector()
        self.logger = logging.getLogger(f"Session-{self.session_id}")

    def read_vector(self) -> VersionVector:
        """Return a copy of the session's read vector."""
        return self._read_vector.copy()

    def write_vector(self) -> VersionVector:
        """Return a copy of the session's write vector."""
        return self._write_vector.copy()

    def record_read(self, vector: VersionVector):
        """
        Fold the result of a successful read into the read vector.

        Reads are not recorded automatically; callers invoke this after
        every read that should count toward later MR/RYW checks.

        Args:
            vector: Snapshot returned by Replica.read
        """
        self._read_vector.merge(vector)
        self.logger.debug(f"Recorded read, read vector now {self._read_vector}")

    def record_write(self, replica_id: str, clock: int):
        """
        Record that this session caused a replica to reach a clock value.

        Called by Replica.write on success.

        Args:
            replica_id: Replica that accepted the write
            clock: The replica's clock after the write
        """
        self._write_vector.set(replica_id, clock)
        self.logger.debug(f"Recorded write {replica_id}:{clock}, "
                          f"write vector now {self._write_vector}")

    def __repr__(self) -> str:
        return (f"SessionTracker({self.session_id}, read={self._read_vector}, "
                f"write={self._write_vector})")
