"""Tests for the cache-backed stores."""

from datetime import UTC, datetime
from uuid import uuid4

from django.core.cache import cache

from booking.domain import BookingDraft, DraftId, EventId
from booking.stores import CacheDraftStore, CachedEventSource
from booking.stores.cache_store import draft_cache_key, event_cache_key, validation_claim_key


class CountingSource:
    def __init__(self, event=None) -> None:
        self.event = event
        self.reads = 0

    def get_event(self, event_id, fresh=False):
        self.reads += 1
        return self.event


class TestCachedEventSource:
    """Tests for event caching."""

    def test_second_read_served_from_cache(self, make_event):
        source = CountingSource(make_event())
        cached = CachedEventSource(source, ttl=60)
        first = cached.get_event(EventId("evt-pottery"))
        second = cached.get_event(EventId("evt-pottery"))
        assert first == second
        assert source.reads == 1
        assert cache.get(event_cache_key(EventId("evt-pottery"))) == first

    def test_fresh_read_bypasses_and_refreshes_cache(self, make_event, make_schedule):
        source = CountingSource(make_event())
        cached = CachedEventSource(source, ttl=60)
        cached.get_event(EventId("evt-pottery"))

        source.event = make_event(make_schedule(available=2))
        refreshed = cached.get_event(EventId("evt-pottery"), fresh=True)
        assert source.reads == 2
        assert refreshed.schedules[0].available_seats.value == 2
        assert cached.get_event(EventId("evt-pottery")) == refreshed

    def test_missing_event_is_not_cached(self, make_event):
        source = CountingSource(None)
        cached = CachedEventSource(source, ttl=60)
        assert cached.get_event(EventId("evt-pottery")) is None

        source.event = make_event()
        assert cached.get_event(EventId("evt-pottery")) is not None
        assert source.reads == 2


class TestCacheDraftStore:
    """Tests for draft storage."""

    def _draft(self) -> BookingDraft:
        return BookingDraft(
            id=DraftId(uuid4()),
            event_id=EventId("evt-pottery"),
            currency="AED",
            created_at=datetime.now(UTC),
        )

    def test_save_and_get(self):
        store = CacheDraftStore(ttl=60)
        draft = self._draft()
        store.save(draft)
        loaded = store.get(draft.id)
        assert loaded == draft
        assert loaded is not draft

    def test_changes_require_save(self):
        store = CacheDraftStore(ttl=60)
        draft = self._draft()
        store.save(draft)
        draft.quantity = 4
        assert store.get(draft.id).quantity == 1

    def test_delete(self):
        store = CacheDraftStore(ttl=60)
        draft = self._draft()
        store.save(draft)
        store.delete(draft.id)
        assert store.get(draft.id) is None
        assert cache.get(draft_cache_key(draft.id)) is None


class TestValidationClaim:
    """Tests for the in-flight coupon validation claim."""

    def test_second_claim_fails_while_held(self):
        store = CacheDraftStore(ttl=60)
        draft_id = DraftId(uuid4())
        assert store.claim_validation(draft_id, "first", 30) is True
        assert store.claim_validation(draft_id, "second", 30) is False
        assert cache.get(validation_claim_key(draft_id)) == "first"

    def test_release_by_other_token_keeps_claim(self):
        store = CacheDraftStore(ttl=60)
        draft_id = DraftId(uuid4())
        store.claim_validation(draft_id, "first", 30)
        store.release_validation(draft_id, "second")
        assert store.claim_validation(draft_id, "third", 30) is False

    def test_release_frees_claim(self):
        store = CacheDraftStore(ttl=60)
        draft_id = DraftId(uuid4())
        store.claim_validation(draft_id, "first", 30)
        store.release_validation(draft_id, "first")
        assert store.claim_validation(draft_id, "second", 30) is True

    def test_claims_are_per_draft(self):
        store = CacheDraftStore(ttl=60)
        assert store.claim_validation(DraftId(uuid4()), "a", 30) is True
        assert store.claim_validation(DraftId(uuid4()), "b", 30) is True
