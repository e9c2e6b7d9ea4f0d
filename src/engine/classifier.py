from typing import Optional

from src.config import settings
from src.engine.exceptions import InvalidInput
from src.engine.schemas import DelaySeverity, TrainStatus


def parse_train_status(value) -> TrainStatus:
    """Coerce a stored status value into TrainStatus"""
    try:
        return TrainStatus(value)
    except ValueError:
        raise InvalidInput(f"Unknown train status: {value!r}")


def classify(train, threshold_minutes: Optional[int] = None) -> DelaySeverity:
    """Map a train's live status and delay to a severity bucket

    Cancelled trains are CANCELLED regardless of delay. A delayed train with
    a zero delay has nothing to shift and classifies as NONE.
    """
    if threshold_minutes is None:
        threshold_minutes = settings.MAJOR_DELAY_THRESHOLD_MINUTES

    delay_minutes = train.delay_minutes or 0
    if delay_minutes < 0:
        raise InvalidInput(f"delay_minutes must be >= 0, got {delay_minutes}")

    status = parse_train_status(train.status)

    if status == TrainStatus.CANCELLED:
        return DelaySeverity.CANCELLED
    if status == TrainStatus.ON_TIME:
        return DelaySeverity.NONE
    if status == TrainStatus.DELAYED:
        if delay_minutes == 0:
            return DelaySeverity.NONE
        if delay_minutes <= threshold_minutes:
            return DelaySeverity.MINOR
        return DelaySeverity.MAJOR

    raise InvalidInput(f"Unhandled train status: {status}")
