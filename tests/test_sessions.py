"""
Tests for the in-memory session store
"""

from glam_store.auth.sessions import SessionStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestSessionStore:
    def test_create_and_get(self):
        store = SessionStore(ttl_seconds=60)
        s = store.create(user_id="7", name="A", is_admin=True)

        got = store.get(s.token)
        assert got is s
        assert got.identity() == {"id": "7", "name": "A", "is_admin": True}
        assert len(s.token) >= 32

    def test_tokens_are_unique(self):
        store = SessionStore(ttl_seconds=60)
        tokens = {store.create(user_id="1", name="A", is_admin=False).token for _ in range(20)}
        assert len(tokens) == 20

    def test_unknown_or_blank_token(self):
        store = SessionStore(ttl_seconds=60)
        assert store.get("nope") is None
        assert store.get(None) is None
        assert store.get("") is None

    def test_expiry(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        s = store.create(user_id="1", name="A", is_admin=False)

        clock.now += 61
        assert store.get(s.token) is None
        assert len(store) == 0

    def test_sliding_expiry(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        s = store.create(user_id="1", name="A", is_admin=False)

        clock.now += 50
        assert store.get(s.token) is not None
        clock.now += 50
        assert store.get(s.token) is not None

    def test_get_without_touch_does_not_slide(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        s = store.create(user_id="1", name="A", is_admin=False)

        clock.now += 50
        assert store.get(s.token, touch=False) is not None
        clock.now += 20
        assert store.get(s.token) is None

    def test_destroy_is_idempotent(self):
        store = SessionStore(ttl_seconds=60)
        s = store.create(user_id="1", name="A", is_admin=False)

        assert store.destroy(s.token) is True
        assert store.destroy(s.token) is False
        assert store.destroy(None) is False
        assert store.get(s.token) is None

    def test_purge_expired(self):
        clock = FakeClock()
        store = SessionStore(ttl_seconds=60, clock=clock)
        store.create(user_id="1", name="A", is_admin=False)
        clock.now += 30
        keep = store.create(user_id="2", name="B", is_admin=False)
        clock.now += 31

        assert store.purge_expired() == 1
        assert store.get(keep.token) is not None
