from sqlalchemy.orm import Session, joinedload

from src.config import settings
from src.models import Booking, Train
from src.engine import classify, compute_adjustment, resolve_status, transition_event
from src.engine.schemas import BookingStatus
from src.engine.resolver import parse_booking_status
from src.engine.exceptions import InvalidBooking
from src.notifications.service import NotificationService
from src.trains.schemas import DelaySyncSummary
from src.logger import setup_logger

logger = setup_logger(__name__)

class DelaySyncService:
    """Propagates a train's live status to the bookings riding on it"""

    @staticmethod
    def sync_train(db: Session, train: Train) -> DelaySyncSummary:
        """Recompute adjustment and status of every active booking on a train

        Each booking is a single-row, last-write-wins update. Bookings with a
        corrupt window are logged and skipped so the rest still sync.
        """
        severity = classify(train, settings.MAJOR_DELAY_THRESHOLD_MINUTES)
        delay_minutes = train.delay_minutes or 0

        bookings = db.query(Booking).options(
            joinedload(Booking.passenger),
            joinedload(Booking.train),
            joinedload(Booking.hotel)
        ).filter(
            Booking.train_id == train.id,
            Booking.status != BookingStatus.CANCELLED.value
        ).order_by(Booking.id).all()

        summary = DelaySyncSummary(bookings_checked=len(bookings))

        for booking in bookings:
            try:
                adjustment = compute_adjustment(booking, severity, delay_minutes)
            except InvalidBooking as e:
                logger.error(f"Skipping booking {booking.id} during delay sync: {e}")
                continue

            if adjustment.changed:
                booking.adjusted_checkin = adjustment.adjusted_checkin
                booking.adjusted_checkout = adjustment.adjusted_checkout
                summary.adjusted += 1

            old_status = parse_booking_status(booking.status)
            new_status = resolve_status(old_status, severity)

            if new_status != old_status:
                booking.status = new_status.value
                logger.info(
                    f"Booking {booking.id} {old_status.value} -> {new_status.value} "
                    f"(train {train.train_number}, severity {severity.value})"
                )
                if new_status == BookingStatus.RESCHEDULED:
                    summary.rescheduled += 1
                elif new_status == BookingStatus.CONFIRMED:
                    summary.confirmed += 1
                elif new_status == BookingStatus.CANCELLED:
                    summary.cancelled += 1

            event = transition_event(old_status, new_status)
            if event:
                NotificationService.record(db, booking, event)
                summary.notified += 1

        db.commit()
        return summary
