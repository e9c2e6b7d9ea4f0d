from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum

class TrainStatus(str, Enum):
    """Live train status enumeration"""
    ON_TIME = "on_time"
    DELAYED = "delayed"
    CANCELLED = "cancelled"

class BookingStatus(str, Enum):
    """Booking status enumeration"""
    CONFIRMED = "confirmed"
    RESCHEDULED = "rescheduled"
    CANCELLED = "cancelled"

class DelaySeverity(str, Enum):
    """Severity bucket derived from a train's status and delay"""
    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"
    CANCELLED = "cancelled"

class NotificationEvent(str, Enum):
    """Booking events that produce an outbound notification"""
    BOOKING_CREATED = "booking_created"
    STATUS_CHANGED_TO_RESCHEDULED = "status_changed_to_rescheduled"
    STATUS_CHANGED_TO_CANCELLED = "status_changed_to_cancelled"

class NotificationType(str, Enum):
    """Notification type as stored and dispatched"""
    CONFIRMATION = "confirmation"
    RESCHEDULE = "reschedule"
    CANCELLATION = "cancellation"

class AdjustmentResult(BaseModel):
    """Adjusted check-in/check-out window for a booking"""
    adjusted_checkin: Optional[datetime] = None
    adjusted_checkout: Optional[datetime] = None
    changed: bool = False

class NotificationPayload(BaseModel):
    """Payload handed to the notification dispatcher"""
    booking_id: int
    notification_type: NotificationType
    message: str

class BookingView(BaseModel):
    """Recomputed, displayable state of a booking"""
    booking_id: int
    severity: DelaySeverity
    status: BookingStatus
    adjusted_checkin: Optional[datetime] = None
    adjusted_checkout: Optional[datetime] = None
    effective_checkin: datetime
    effective_checkout: datetime
    stay_warning: bool = False
