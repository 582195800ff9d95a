"""Django cache implementations of the stores.

Cache keys:
- ``events:{event_id}`` holds a fetched Event with its schedules.
- ``drafts:{draft_id}`` holds a BookingDraft until it expires.
- ``drafts:{draft_id}:validating`` holds the token of the coupon
  validation currently in flight for that draft.
"""

from django.core.cache import cache

from booking.domain import BookingDraft, DraftId, Event, EventId
from booking.stores.interfaces import DraftStore, EventSource


def event_cache_key(event_id: EventId) -> str:
    return f"events:{event_id}"


def draft_cache_key(draft_id: DraftId) -> str:
    return f"drafts:{draft_id}"


def validation_claim_key(draft_id: DraftId) -> str:
    return f"drafts:{draft_id}:validating"


class CachedEventSource(EventSource):
    """Serves events from the cache, falling back to another source.

    Misses are not cached, so an event that appears upstream becomes
    visible on the next request.
    """

    def __init__(self, source: EventSource, ttl: int) -> None:
        self._source = source
        self._ttl = ttl

    def get_event(self, event_id: EventId, fresh: bool = False) -> Event | None:
        key = event_cache_key(event_id)
        if not fresh:
            cached = cache.get(key)
            if cached is not None:
                return cached
        event = self._source.get_event(event_id)
        if event is not None:
            cache.set(key, event, self._ttl)
        return event


class CacheDraftStore(DraftStore):
    """Keeps drafts in the cache; an idle draft expires after ``ttl`` seconds."""

    def __init__(self, ttl: int) -> None:
        self._ttl = ttl

    def get(self, draft_id: DraftId) -> BookingDraft | None:
        return cache.get(draft_cache_key(draft_id))

    def save(self, draft: BookingDraft) -> None:
        cache.set(draft_cache_key(draft.id), draft, self._ttl)

    def delete(self, draft_id: DraftId) -> None:
        cache.delete(draft_cache_key(draft_id))

    def claim_validation(self, draft_id: DraftId, token: str, timeout: float) -> bool:
        return cache.add(validation_claim_key(draft_id), token, timeout)

    def release_validation(self, draft_id: DraftId, token: str) -> None:
        key = validation_claim_key(draft_id)
        if cache.get(key) == token:
            cache.delete(key)
