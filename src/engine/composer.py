from src.engine.exceptions import MissingRelation
from src.engine.schemas import NotificationEvent, NotificationPayload, NotificationType

TIME_FORMAT = "%Y-%m-%d %H:%M"

EVENT_TYPES = {
    NotificationEvent.BOOKING_CREATED: NotificationType.CONFIRMATION,
    NotificationEvent.STATUS_CHANGED_TO_RESCHEDULED: NotificationType.RESCHEDULE,
    NotificationEvent.STATUS_CHANGED_TO_CANCELLED: NotificationType.CANCELLATION,
}


def event_for_type(notification_type: NotificationType) -> NotificationEvent:
    """Reverse lookup used by the dispatcher endpoint"""
    for event, mapped_type in EVENT_TYPES.items():
        if mapped_type == notification_type:
            return event
    raise ValueError(f"Unknown notification type: {notification_type}")


def _require_relations(booking):
    missing = [
        name for name in ("passenger", "train", "hotel")
        if getattr(booking, name, None) is None
    ]
    if missing:
        raise MissingRelation(
            f"Booking {booking.id} has unresolved relations: {', '.join(missing)}"
        )
    return booking.passenger, booking.train, booking.hotel


def compose(booking, event: NotificationEvent) -> NotificationPayload:
    """Build the outbound notification for a booking event"""
    passenger, train, hotel = _require_relations(booking)

    train_label = f"{train.train_name} ({train.train_number})"
    checkin = booking.adjusted_checkin or booking.original_checkin
    checkout = booking.adjusted_checkout or booking.original_checkout

    if event == NotificationEvent.BOOKING_CREATED:
        message = (
            f"Booking confirmed for {passenger.full_name} on {train_label}. "
            f"Stay at {hotel.hotel_name} from {checkin.strftime(TIME_FORMAT)} "
            f"to {checkout.strftime(TIME_FORMAT)}."
        )
    elif event == NotificationEvent.STATUS_CHANGED_TO_RESCHEDULED:
        message = (
            f"Booking rescheduled for {passenger.full_name}: {train_label} is delayed. "
            f"New check-in at {hotel.hotel_name} is {checkin.strftime(TIME_FORMAT)}."
        )
    elif event == NotificationEvent.STATUS_CHANGED_TO_CANCELLED:
        message = (
            f"Booking cancelled for {passenger.full_name} on {train_label} "
            f"at {hotel.hotel_name}."
        )
    else:
        raise ValueError(f"Unhandled notification event: {event}")

    return NotificationPayload(
        booking_id=booking.id,
        notification_type=EVENT_TYPES[event],
        message=message
    )
