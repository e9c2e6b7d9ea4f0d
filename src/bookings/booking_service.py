from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from decimal import Decimal
import math

from src.config import settings
from src.models import Booking, Passenger, User
from src.auth.schemas import CurrentUser, Role
from src.bookings.schemas import BookingCreate, BookingUpdate, BookingDetail
from src.engine import build_booking_view, classify, resolve_status, transition_event
from src.engine.calculator import validate_window
from src.engine.resolver import parse_booking_status
from src.engine.schemas import BookingStatus, NotificationEvent
from src.engine.exceptions import InvalidBooking, InvalidInput, NotFound
from src.hotels.service import HotelService
from src.notifications.service import NotificationService
from src.trains.service import TrainService
from src.logger import setup_logger

logger = setup_logger(__name__)

SECONDS_PER_NIGHT = 60 * 60 * 24

class BookingService:
    """Service for managing train + hotel bookings"""

    @staticmethod
    def _query(db: Session):
        return db.query(Booking).options(
            joinedload(Booking.passenger),
            joinedload(Booking.train),
            joinedload(Booking.hotel)
        )

    @staticmethod
    def get_booking(db: Session, booking_id: int) -> Booking:
        """Get booking with its relations, raising NotFound when absent"""
        booking = BookingService._query(db).filter(Booking.id == booking_id).first()
        if not booking:
            raise NotFound(f"Booking {booking_id} not found")
        return booking

    @staticmethod
    def calculate_total_amount(checkin, checkout) -> Decimal:
        """Flat nightly rate, partial nights rounded up"""
        nights = math.ceil((checkout - checkin).total_seconds() / SECONDS_PER_NIGHT)
        return Decimal(nights * settings.PRICE_PER_NIGHT)

    @staticmethod
    def get_or_create_passenger(db: Session, current_user: CurrentUser) -> Passenger:
        """Passenger record linked to the user, created from the profile if missing"""
        passenger = db.query(Passenger).filter(Passenger.user_id == current_user.id).first()
        if passenger:
            return passenger

        profile = db.query(User).filter(User.id == current_user.id).first()
        passenger = Passenger(
            user_id=current_user.id,
            full_name=(profile.full_name if profile else None) or current_user.full_name or "Guest",
            email=(profile.email if profile else None) or current_user.email,
            phone=profile.phone if profile else None
        )
        db.add(passenger)
        db.flush()
        logger.info(f"Created passenger {passenger.id} for user {current_user.id}")
        return passenger

    @staticmethod
    def create_booking(db: Session, current_user: CurrentUser, request: BookingCreate) -> Booking:
        """Create a confirmed booking and log its confirmation"""
        try:
            validate_window(request.checkin, request.checkout)
        except InvalidBooking:
            raise ValueError("Check-out date must be after check-in date")

        train = TrainService.get_train_by_id(db, request.train_id)
        hotel = HotelService.get_hotel_by_id(db, request.hotel_id)
        passenger = BookingService.get_or_create_passenger(db, current_user)

        booking = Booking(
            passenger=passenger,
            train=train,
            hotel=hotel,
            original_checkin=request.checkin,
            original_checkout=request.checkout,
            status=BookingStatus.CONFIRMED.value,
            total_amount=BookingService.calculate_total_amount(request.checkin, request.checkout),
            notes=request.notes
        )
        db.add(booking)
        db.flush()

        NotificationService.record(db, booking, NotificationEvent.BOOKING_CREATED)

        db.commit()
        db.refresh(booking)
        logger.info(f"Booking {booking.id} created for passenger {passenger.id} on train {train.train_number}")
        return booking

    @staticmethod
    def can_access(booking: Booking, current_user: CurrentUser) -> bool:
        if current_user.role in (Role.ADMIN, Role.HOTEL):
            return True
        return booking.passenger is not None and booking.passenger.user_id == current_user.id

    @staticmethod
    def cancel_booking(db: Session, booking_id: int, current_user: CurrentUser,
                       reason: Optional[str] = None) -> Booking:
        """Explicitly cancel a booking; owner or admin only"""
        booking = BookingService.get_booking(db, booking_id)

        is_owner = booking.passenger is not None and booking.passenger.user_id == current_user.id
        if not is_owner and current_user.role != Role.ADMIN:
            raise PermissionError("You can only cancel your own bookings")

        old_status = parse_booking_status(booking.status)
        if old_status == BookingStatus.CANCELLED:
            raise ValueError("Booking is already cancelled")

        new_status = resolve_status(old_status, classify(booking.train), has_explicit_cancellation=True)
        booking.status = new_status.value
        if reason:
            booking.notes = f"{booking.notes}\n{reason}" if booking.notes else reason

        event = transition_event(old_status, new_status)
        if event:
            NotificationService.record(db, booking, event)

        db.commit()
        db.refresh(booking)
        logger.info(f"Booking {booking.id} cancelled by user {current_user.id}")
        return booking

    @staticmethod
    def update_booking(db: Session, booking_id: int, update: BookingUpdate) -> Booking:
        """Administrative direct edit; cancelled bookings stay cancelled"""
        booking = BookingService.get_booking(db, booking_id)
        old_status = parse_booking_status(booking.status)
        update_data = update.dict(exclude_unset=True)

        new_status = update_data.pop("status", None)
        if new_status is not None:
            new_status = BookingStatus(new_status)
            if old_status == BookingStatus.CANCELLED and new_status != BookingStatus.CANCELLED:
                raise ValueError("Cancelled bookings cannot be reopened")

        adjusted_checkin = update_data.get("adjusted_checkin", booking.adjusted_checkin)
        adjusted_checkout = update_data.get("adjusted_checkout", booking.adjusted_checkout)
        if (adjusted_checkin is None) != (adjusted_checkout is None):
            raise ValueError("Adjusted check-in and check-out must be set together")
        if adjusted_checkin is not None:
            try:
                validate_window(adjusted_checkin, adjusted_checkout)
            except InvalidBooking:
                raise ValueError("Adjusted check-out must be after adjusted check-in")

        for field, value in update_data.items():
            setattr(booking, field, value)

        if new_status is not None:
            booking.status = new_status.value
            event = transition_event(old_status, new_status)
            if event:
                NotificationService.record(db, booking, event)

        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def to_detail(booking: Booking) -> BookingDetail:
        """Booking with relations and its live recomputed view

        Corrupt delay data or booking windows are logged as defects; the
        booking is still returned, without a view.
        """
        detail = BookingDetail.model_validate(booking)
        try:
            detail.view = build_booking_view(booking, settings.MAJOR_DELAY_THRESHOLD_MINUTES)
        except (InvalidInput, InvalidBooking) as e:
            logger.error(f"Cannot build view for booking {booking.id}: {e}")
        return detail

    @staticmethod
    def get_user_bookings(db: Session, current_user: CurrentUser) -> List[Booking]:
        """All bookings of the user's passenger record, newest first"""
        passenger = db.query(Passenger).filter(Passenger.user_id == current_user.id).first()
        if not passenger:
            return []

        return BookingService._query(db).filter(
            Booking.passenger_id == passenger.id
        ).order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_bookings(
        db: Session,
        hotel_id: Optional[int] = None,
        train_id: Optional[int] = None,
        booking_status: Optional[BookingStatus] = None
    ) -> List[Booking]:
        """Search bookings with filters, newest first"""
        query = BookingService._query(db)

        if hotel_id:
            query = query.filter(Booking.hotel_id == hotel_id)
        if train_id:
            query = query.filter(Booking.train_id == train_id)
        if booking_status:
            query = query.filter(Booking.status == booking_status.value)

        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()
