from sqlalchemy.orm import Session
from sqlalchemy import func
from decimal import Decimal

from src.config import settings
from src.models import Booking, Train, Hotel
from src.admin.schemas import BookingAnalytics
from src.engine.schemas import BookingStatus, TrainStatus

class AdminManagementService:
    """Service for administrative reporting"""

    def __init__(self, db: Session):
        self.db = db

    def get_booking_analytics(self) -> BookingAnalytics:
        """Aggregate booking counts, revenue and train delay figures"""
        status_counts = dict(
            self.db.query(Booking.status, func.count(Booking.id)).group_by(Booking.status).all()
        )
        total_bookings = sum(status_counts.values())
        confirmed = status_counts.get(BookingStatus.CONFIRMED.value, 0)
        rescheduled = status_counts.get(BookingStatus.RESCHEDULED.value, 0)
        cancelled = status_counts.get(BookingStatus.CANCELLED.value, 0)

        total_revenue = self.db.query(func.sum(Booking.total_amount)).scalar() or 0
        confirmed_revenue = self.db.query(func.sum(Booking.total_amount)).filter(
            Booking.status != BookingStatus.CANCELLED.value
        ).scalar() or 0

        cancellation_rate = (cancelled / total_bookings) * 100 if total_bookings > 0 else 0.0

        train_counts = dict(
            self.db.query(Train.status, func.count(Train.id)).group_by(Train.status).all()
        )

        return BookingAnalytics(
            total_bookings=total_bookings,
            confirmed_bookings=confirmed,
            rescheduled_bookings=rescheduled,
            cancelled_bookings=cancelled,
            total_revenue=Decimal(str(total_revenue)),
            confirmed_revenue=Decimal(str(confirmed_revenue)),
            cancellation_rate=round(cancellation_rate, 1),
            total_trains=sum(train_counts.values()),
            delayed_trains=train_counts.get(TrainStatus.DELAYED.value, 0),
            cancelled_trains=train_counts.get(TrainStatus.CANCELLED.value, 0),
            total_hotels=self.db.query(Hotel).count(),
            currency=settings.CURRENCY
        )
