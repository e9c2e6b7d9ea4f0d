"""
Booking Adjustment Engine

Pure, stateless decision module that turns a train's live delay state into a
consistent view of the bookings riding on it. It includes:

- classifier.py: maps train status + delay minutes to a DelaySeverity
- calculator.py: shifts the original check-in/check-out window by the delay
- resolver.py: booking status state machine (confirmed/rescheduled/cancelled)
- composer.py: builds the notification payload for a booking event
- view.py: runs the full pipeline for dashboard reads

Nothing here performs I/O. Persisting adjusted times, status and notification
rows is the caller's job.
"""

from .classifier import classify
from .calculator import compute_adjustment
from .resolver import resolve_status, transition_event
from .composer import compose
from .view import build_booking_view
from .exceptions import EngineError, InvalidInput, InvalidBooking, MissingRelation, NotFound
from .schemas import (
    TrainStatus, BookingStatus, DelaySeverity, NotificationEvent, NotificationType,
    AdjustmentResult, NotificationPayload, BookingView
)

__all__ = [
    "classify",
    "compute_adjustment",
    "resolve_status",
    "transition_event",
    "compose",
    "build_booking_view",
    "EngineError",
    "InvalidInput",
    "InvalidBooking",
    "MissingRelation",
    "NotFound",
    "TrainStatus",
    "BookingStatus",
    "DelaySeverity",
    "NotificationEvent",
    "NotificationType",
    "AdjustmentResult",
    "NotificationPayload",
    "BookingView"
]
