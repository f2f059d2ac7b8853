# Area: Server Tests
"""Tests for SessionDirectory."""

from imposter_engine._server.sessions import SessionDirectory


class TestSessionDirectory:
    """Tests for session <-> player bindings."""

    def test_bind_and_lookup(self):
        sessions = SessionDirectory()
        assert sessions.bind("s1", "r1", "p1") is None
        assert sessions.binding_for("s1") == ("r1", "p1")
        assert sessions.session_for("r1", "p1") == "s1"
        assert sessions.sessions_in_room("r1") == {"p1": "s1"}

    def test_rebind_player_replaces_old_session(self):
        sessions = SessionDirectory()
        sessions.bind("s1", "r1", "p1")

        assert sessions.bind("s2", "r1", "p1") == "s1"
        assert sessions.binding_for("s1") is None
        assert sessions.session_for("r1", "p1") == "s2"

    def test_rebind_same_session_is_not_a_replacement(self):
        sessions = SessionDirectory()
        sessions.bind("s1", "r1", "p1")
        assert sessions.bind("s1", "r1", "p1") is None
        assert sessions.session_for("r1", "p1") == "s1"

    def test_session_moves_to_another_room(self):
        sessions = SessionDirectory()
        sessions.bind("s1", "r1", "p1")
        sessions.bind("s1", "r2", "p9")
        assert sessions.sessions_in_room("r1") == {}
        assert sessions.binding_for("s1") == ("r2", "p9")

    def test_unbind(self):
        sessions = SessionDirectory()
        sessions.bind("s1", "r1", "p1")
        assert sessions.unbind("s1") == ("r1", "p1")
        assert sessions.unbind("s1") is None
        assert sessions.session_for("r1", "p1") is None

    def test_drop_room(self):
        sessions = SessionDirectory()
        sessions.bind("s1", "r1", "p1")
        sessions.bind("s2", "r1", "p2")
        sessions.bind("s3", "r2", "p3")

        assert sorted(sessions.drop_room("r1")) == ["s1", "s2"]
        assert sessions.binding_for("s1") is None
        assert sessions.binding_for("s3") == ("r2", "p3")
