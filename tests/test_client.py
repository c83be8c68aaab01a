"""
Tests for the session client.
"""

import pytest
from consistency.version_vector import VersionVector
from consistency.guarantees import Guarantee, GuaranteeViolation, ALL_GUARANTEES
from consistency.session import SessionTracker
from client.session_client import SessionClient
from replica.server import Replica


class TestSessionClient:
    """Test guarantee selection and read recording."""

    def test_defaults(self):
        """A client enforces every guarantee by default."""
        client = SessionClient()
        assert client.guarantees == ALL_GUARANTEES
        assert isinstance(client.session, SessionTracker)
        for g in Guarantee:
            assert client.enabled(g)

    def test_uses_given_session(self):
        """An existing tracker can be supplied."""
        session = SessionTracker("mine")
        client = SessionClient([Guarantee.MONOTONIC_READS], session=session)
        assert client.session is session
        assert not client.enabled(Guarantee.MONOTONIC_WRITES)

    def test_read_records_snapshot(self):
        """Reads through the client update the read vector."""
        a = Replica("A")
        client = SessionClient()
        client.write(a)

        result = client.read(a)
        assert result == VersionVector({"A": 1})
        assert client.session.read_vector() == VersionVector({"A": 1})

    def test_put_get(self):
        """Values written through the client can be read back."""
        a = Replica("A")
        client = SessionClient()

        clock = client.put(a, "color", "blue")
        assert clock == 1
        assert client.get(a, "color") == "blue"
        assert client.get(a, "missing") is None
        assert client.session.read_vector() == VersionVector({"A": 1})

    def test_write_flags_follow_guarantees(self):
        """Only enabled guarantees are checked on writes."""
        a, b = Replica("A"), Replica("B")

        relaxed = SessionClient([])
        relaxed.write(a)
        relaxed.read(a)
        assert relaxed.write(b) == 1

        strict = SessionClient([Guarantee.MONOTONIC_WRITES])
        strict.write(a)
        with pytest.raises(GuaranteeViolation) as exc_info:
            strict.write(b)
        assert exc_info.value.guarantee is Guarantee.MONOTONIC_WRITES

    def test_read_your_writes_through_client(self):
        """RYW refuses a get from a replica missing the session's put."""
        a, b = Replica("A"), Replica("B")
        client = SessionClient([Guarantee.READ_YOUR_WRITES])
        client.put(a, "k", "v")

        with pytest.raises(GuaranteeViolation) as exc_info:
            client.get(b, "k")
        assert exc_info.value.guarantee is Guarantee.READ_YOUR_WRITES
        assert client.session.read_vector() == VersionVector()

    def test_try_read(self):
        """try_read returns the violation instead of raising."""
        a, b = Replica("A"), Replica("B")
        client = SessionClient()
        client.write(a)

        result, violation = client.try_read(a)
        assert result == VersionVector({"A": 1})
        assert violation is None

        result, violation = client.try_read(b)
        assert result is None
        assert violation.guarantee is Guarantee.MONOTONIC_READS

    def test_try_write(self):
        """try_write returns the violation instead of raising."""
        a, b = Replica("A"), Replica("B")
        client = SessionClient()

        clock, violation = client.try_write(a)
        assert clock == 1
        assert violation is None

        clock, violation = client.try_write(b)
        assert clock is None
        assert violation.guarantee is Guarantee.MONOTONIC_WRITES

    def test_continue_after_violation(self):
        """A refused operation does not end the session."""
        a, b = Replica("A"), Replica("B")
        client = SessionClient()
        client.write(a)

        _, violation = client.try_write(b)
        assert violation is not None

        assert client.write(a) == 2
        assert client.session.write_vector() == VersionVector({"A": 2})

    def test_repr(self):
        """repr lists the enabled guarantees."""
        client = SessionClient([Guarantee.MONOTONIC_READS, Guarantee.READ_YOUR_WRITES],
                               session=SessionTracker("s1"))
        assert repr(client) == "SessionClient(s1, guarantees=[MR,RYW])"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
