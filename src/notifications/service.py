from sqlalchemy.orm import Session, joinedload
from typing import List

from src.models import Booking, DelayNotification
from src.engine import compose, NotificationEvent, NotificationPayload, NotificationType
from src.engine.composer import event_for_type
from src.engine.exceptions import NotFound
from src.notifications.schemas import BookingDetails, BookingNotificationResponse
from src.logger import setup_logger

logger = setup_logger(__name__)

class NotificationService:
    """Composes booking notifications and keeps the delay_notifications log"""

    @staticmethod
    def get_booking_with_relations(db: Session, booking_id: int) -> Booking:
        booking = db.query(Booking).options(
            joinedload(Booking.passenger),
            joinedload(Booking.train),
            joinedload(Booking.hotel)
        ).filter(Booking.id == booking_id).first()

        if not booking:
            raise NotFound(f"Booking {booking_id} not found")
        return booking

    @staticmethod
    def record(db: Session, booking: Booking, event: NotificationEvent) -> NotificationPayload:
        """Compose a notification and append it to the log

        The row is added to the session only; the caller commits it together
        with the booking change that triggered it.
        """
        payload = compose(booking, event)

        db.add(DelayNotification(
            booking_id=payload.booking_id,
            notification_type=payload.notification_type.value,
            message=payload.message
        ))

        logger.info(
            f"Booking notification: type={payload.notification_type.value} "
            f"booking={payload.booking_id} message={payload.message!r}"
        )
        return payload

    @staticmethod
    def list_for_booking(db: Session, booking_id: int) -> List[DelayNotification]:
        return db.query(DelayNotification).filter(
            DelayNotification.booking_id == booking_id
        ).order_by(DelayNotification.id).all()

    @staticmethod
    def dispatch(booking: Booking, notification_type: NotificationType) -> BookingNotificationResponse:
        """Build the dispatcher response for a booking loaded with its relations"""
        payload = compose(booking, event_for_type(notification_type))

        logger.info(
            f"Dispatching {payload.notification_type.value} for booking {booking.id} "
            f"to {booking.passenger.email}"
        )

        return BookingNotificationResponse(
            success=True,
            message=payload.message,
            booking_details=BookingDetails(
                passenger=booking.passenger.full_name,
                train=f"{booking.train.train_name} ({booking.train.train_number})",
                hotel=booking.hotel.hotel_name,
                check_in=booking.adjusted_checkin or booking.original_checkin,
                check_out=booking.adjusted_checkout or booking.original_checkout
            )
        )
