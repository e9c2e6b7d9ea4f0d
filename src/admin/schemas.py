from pydantic import BaseModel
from typing import List
from decimal import Decimal

from src.auth.schemas import User, Role
from src.trains.schemas import AffectedTrain

class AdminUserList(BaseModel):
    users: List[User]
    total: int

class RoleChangeResponse(BaseModel):
    user_id: int
    role: Role
    message: str

class BookingAnalytics(BaseModel):
    """Booking and train delay analytics"""
    total_bookings: int = 0
    confirmed_bookings: int = 0
    rescheduled_bookings: int = 0
    cancelled_bookings: int = 0
    total_revenue: Decimal = Decimal('0')
    confirmed_revenue: Decimal = Decimal('0')
    cancellation_rate: float = 0.0
    total_trains: int = 0
    delayed_trains: int = 0
    cancelled_trains: int = 0
    total_hotels: int = 0
    currency: str = "INR"

class AffectedTrainList(BaseModel):
    trains: List[AffectedTrain]
    total: int
