from typing import Optional

from src.engine.exceptions import InvalidInput
from src.engine.schemas import BookingStatus, DelaySeverity, NotificationEvent


def parse_booking_status(value) -> BookingStatus:
    """Coerce a stored status value into BookingStatus"""
    try:
        return BookingStatus(value)
    except ValueError:
        raise InvalidInput(f"Unknown booking status: {value!r}")


def resolve_status(
    current_status: BookingStatus,
    severity: DelaySeverity,
    has_explicit_cancellation: bool = False
) -> BookingStatus:
    """Derive the booking status from train severity

    cancelled is absorbing: nothing leaves it.
    """
    current_status = parse_booking_status(current_status)

    if current_status == BookingStatus.CANCELLED or has_explicit_cancellation:
        return BookingStatus.CANCELLED

    if severity == DelaySeverity.CANCELLED:
        return BookingStatus.CANCELLED
    if severity in (DelaySeverity.MINOR, DelaySeverity.MAJOR):
        return BookingStatus.RESCHEDULED
    if severity == DelaySeverity.NONE:
        return BookingStatus.CONFIRMED

    raise InvalidInput(f"Unhandled delay severity: {severity}")


def transition_event(old_status: BookingStatus, new_status: BookingStatus) -> Optional[NotificationEvent]:
    """Notification event for a status transition, if it qualifies"""
    old_status = parse_booking_status(old_status)
    new_status = parse_booking_status(new_status)

    if old_status == new_status:
        return None
    if new_status == BookingStatus.RESCHEDULED:
        return NotificationEvent.STATUS_CHANGED_TO_RESCHEDULED
    if new_status == BookingStatus.CANCELLED:
        return NotificationEvent.STATUS_CHANGED_TO_CANCELLED
    return None
