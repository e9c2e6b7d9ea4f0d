from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from src.engine.calculator import as_utc_naive
from src.engine.schemas import BookingStatus, BookingView, TrainStatus

# Booking Request Models
class BookingCreate(BaseModel):
    """Request to book a train journey with a hotel stay"""
    train_id: int
    hotel_id: int
    checkin: datetime
    checkout: datetime
    notes: Optional[str] = None

    @validator('checkin', 'checkout')
    def to_utc(cls, v):
        return as_utc_naive(v)

    @validator('notes')
    def blank_notes_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

class BookingUpdate(BaseModel):
    """Direct administrative edit of a booking"""
    status: Optional[BookingStatus] = None
    adjusted_checkin: Optional[datetime] = None
    adjusted_checkout: Optional[datetime] = None
    total_amount: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None

    @validator('adjusted_checkin', 'adjusted_checkout')
    def to_utc(cls, v):
        return as_utc_naive(v)

class BookingCancellationRequest(BaseModel):
    """Request to cancel a booking"""
    cancellation_reason: Optional[str] = None

# Related entity summaries
class PassengerSummary(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True

class TrainSummary(BaseModel):
    id: int
    train_number: str
    train_name: str
    origin: str
    destination: str
    scheduled_arrival: datetime
    status: TrainStatus
    delay_minutes: int = 0

    class Config:
        from_attributes = True

class HotelSummary(BaseModel):
    id: int
    hotel_name: str
    location: str
    rating: Optional[float] = None

    class Config:
        from_attributes = True

# Booking Response Models
class Booking(BaseModel):
    """Booking as stored"""
    id: int
    passenger_id: int
    train_id: int
    hotel_id: int
    original_checkin: datetime
    original_checkout: datetime
    adjusted_checkin: Optional[datetime] = None
    adjusted_checkout: Optional[datetime] = None
    status: BookingStatus
    total_amount: Decimal
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BookingDetail(Booking):
    """Booking with its relations and the live recomputed view"""
    passenger: Optional[PassengerSummary] = None
    train: Optional[TrainSummary] = None
    hotel: Optional[HotelSummary] = None
    view: Optional[BookingView] = None

class BookingList(BaseModel):
    bookings: List[BookingDetail]
    total: int
