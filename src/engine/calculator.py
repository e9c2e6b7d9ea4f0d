from datetime import timedelta, timezone

from src.engine.exceptions import InvalidBooking, InvalidInput
from src.engine.schemas import AdjustmentResult, DelaySeverity


def as_utc_naive(value):
    """Aware datetimes become naive UTC; naive ones are taken as UTC already"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def validate_window(checkin, checkout):
    """Raise InvalidBooking unless checkout is strictly after checkin"""
    if checkin is None or checkout is None:
        raise InvalidBooking("Booking is missing its check-in or check-out time")
    if as_utc_naive(checkout) <= as_utc_naive(checkin):
        raise InvalidBooking(
            f"Check-out {checkout.isoformat()} must be after check-in {checkin.isoformat()}"
        )


def compute_adjustment(booking, severity: DelaySeverity, delay_minutes: int) -> AdjustmentResult:
    """Derive the adjusted check-in/check-out window for a booking

    Pure function of its inputs: the stay is shifted by the train delay and
    its duration is kept. The shift is applied even when it pushes check-in
    past the original check-out.
    """
    validate_window(booking.original_checkin, booking.original_checkout)

    prior_checkin = booking.adjusted_checkin
    prior_checkout = booking.adjusted_checkout

    if severity in (DelaySeverity.MINOR, DelaySeverity.MAJOR):
        if delay_minutes is None or delay_minutes < 0:
            raise InvalidInput(f"delay_minutes must be >= 0, got {delay_minutes}")
        shift = timedelta(minutes=delay_minutes)
        adjusted_checkin = booking.original_checkin + shift
        adjusted_checkout = booking.original_checkout + shift
    elif severity == DelaySeverity.NONE:
        adjusted_checkin = None
        adjusted_checkout = None
    elif severity == DelaySeverity.CANCELLED:
        # Leave any earlier adjustment in place as history
        adjusted_checkin = prior_checkin
        adjusted_checkout = prior_checkout
    else:
        raise InvalidInput(f"Unhandled delay severity: {severity}")

    changed = (adjusted_checkin, adjusted_checkout) != (prior_checkin, prior_checkout)

    return AdjustmentResult(
        adjusted_checkin=adjusted_checkin,
        adjusted_checkout=adjusted_checkout,
        changed=changed
    )
