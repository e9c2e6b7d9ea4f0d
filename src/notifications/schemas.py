from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from src.engine.schemas import NotificationType

class BookingNotificationRequest(BaseModel):
    """Dispatcher input, camelCase on the wire"""
    booking_id: int = Field(..., alias="bookingId")
    notification_type: NotificationType = Field(..., alias="notificationType")

    class Config:
        populate_by_name = True

class BookingDetails(BaseModel):
    passenger: str
    train: str
    hotel: str
    check_in: datetime = Field(..., alias="checkIn")
    check_out: datetime = Field(..., alias="checkOut")

    class Config:
        populate_by_name = True

class BookingNotificationResponse(BaseModel):
    success: bool
    message: str
    booking_details: BookingDetails = Field(..., alias="bookingDetails")

    class Config:
        populate_by_name = True

class DelayNotification(BaseModel):
    id: int
    booking_id: int
    notification_type: str
    message: str
    sent_at: Optional[datetime] = None

    class Config:
        from_attributes = True
