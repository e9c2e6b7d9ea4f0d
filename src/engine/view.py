from typing import Optional

from src.engine.calculator import as_utc_naive, compute_adjustment
from src.engine.classifier import classify
from src.engine.exceptions import MissingRelation
from src.engine.resolver import resolve_status
from src.engine.schemas import BookingView


def build_booking_view(booking, threshold_minutes: Optional[int] = None) -> BookingView:
    """Recompute the displayable state of a booking from its live train"""
    train = booking.train
    if train is None:
        raise MissingRelation(f"Booking {booking.id} has no train")

    severity = classify(train, threshold_minutes)
    adjustment = compute_adjustment(booking, severity, train.delay_minutes or 0)
    status = resolve_status(booking.status, severity)

    effective_checkin = adjustment.adjusted_checkin or booking.original_checkin
    effective_checkout = adjustment.adjusted_checkout or booking.original_checkout

    # Shifted check-in landing after the originally booked stay ended
    stay_warning = (
        adjustment.adjusted_checkin is not None
        and as_utc_naive(adjustment.adjusted_checkin) >= as_utc_naive(booking.original_checkout)
    )

    return BookingView(
        booking_id=booking.id,
        severity=severity,
        status=status,
        adjusted_checkin=adjustment.adjusted_checkin,
        adjusted_checkout=adjustment.adjusted_checkout,
        effective_checkin=effective_checkin,
        effective_checkout=effective_checkout,
        stay_warning=stay_warning
    )
