from booking.services.booking_service import BookingService, EventQuote, get_booking_service

__all__ = ["BookingService", "EventQuote", "get_booking_service"]
