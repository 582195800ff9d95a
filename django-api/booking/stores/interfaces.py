"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from booking.domain import BookingDraft, CouponValidation, DraftId, Event, EventId, Money


class EventSource(ABC):
    """Read-only access to events and their schedules."""

    @abstractmethod
    def get_event(self, event_id: EventId, fresh: bool = False) -> Event | None:
        """Return an event with its schedules in catalog order, or None if not found.

        ``fresh`` asks implementations that cache to bypass the cache.
        """
        ...


class CouponValidator(ABC):
    """Remote coupon validation capability."""

    @abstractmethod
    async def validate(
        self,
        code: str,
        order_amount: Money,
        event_ids: Sequence[EventId],
        auth_token: str | None = None,
    ) -> CouponValidation:
        """Validate ``code`` for an order.

        Raises:
            CouponServiceError: If the service rejects the request or cannot
                be reached. The message is the backend's own text.
        """
        ...


class DraftStore(ABC):
    """Interface for keeping drafts between requests."""

    @abstractmethod
    def get(self, draft_id: DraftId) -> BookingDraft | None:
        """Return a draft, or None if it expired or never existed."""
        ...

    @abstractmethod
    def save(self, draft: BookingDraft) -> None:
        """Store a draft, restarting its expiry."""
        ...

    @abstractmethod
    def delete(self, draft_id: DraftId) -> None:
        ...

    @abstractmethod
    def claim_validation(self, draft_id: DraftId, token: str, timeout: float) -> bool:
        """Atomically mark a coupon validation as in flight for a draft.

        Returns False if another validation holds the claim. The claim lapses
        after ``timeout`` seconds even if it is never released.
        """
        ...

    @abstractmethod
    def release_validation(self, draft_id: DraftId, token: str) -> None:
        """Drop the claim if ``token`` still holds it."""
        ...
