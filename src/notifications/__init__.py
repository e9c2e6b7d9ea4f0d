"""
Booking Notification Module

Builds the human-readable messages sent when a booking is created,
rescheduled by a train delay, or cancelled, and keeps the append-only
delay_notifications log. Delivery over email/SMS is left to the dispatcher.
"""

from .service import NotificationService

__all__ = [
    "NotificationService"
]
