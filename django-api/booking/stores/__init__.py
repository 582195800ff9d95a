from booking.stores.cache_store import CacheDraftStore, CachedEventSource
from booking.stores.http_store import HttpCouponValidator, HttpEventSource
from booking.stores.interfaces import CouponValidator, DraftStore, EventSource

__all__ = [
    "CacheDraftStore",
    "CachedEventSource",
    "CouponValidator",
    "DraftStore",
    "EventSource",
    "HttpCouponValidator",
    "HttpEventSource",
]
