"""
Booking Event Handlers

Subscribed to the message bus in BookingsConfig.ready().
"""

import structlog

from apps.bookings.domain.events import BookingCommitted
from shared.application.message_bus import message_bus

logger = structlog.get_logger(__name__)


def log_booking_committed(event: BookingCommitted):
    logger.info("booking.published", **event.to_dict())


def register_handlers(bus=message_bus):
    bus.register_event_handler(BookingCommitted, log_booking_committed)
