"""
Booking Module

This module ties a passenger's train journey to a hotel stay. It includes:

- Booking creation with flat per-night pricing
- Traveler, hotel staff and admin booking views, recomputed against the
  live train status on every read
- Explicit cancellation and administrative edits
- Delay sync that writes adjusted check-in/check-out times and status when
  a train's status changes

Key Components:
- booking_service.py: booking lifecycle and dashboard queries
- sync_service.py: propagation of train delays to bookings
- router.py: FastAPI endpoints for booking management
- schemas.py: Pydantic models for booking data structures
"""

from .booking_service import BookingService
from .sync_service import DelaySyncService
from .schemas import (
    BookingCreate, BookingUpdate, BookingCancellationRequest, Booking,
    BookingDetail, BookingList
)

__all__ = [
    "BookingService",
    "DelaySyncService",
    "BookingCreate",
    "BookingUpdate",
    "BookingCancellationRequest",
    "Booking",
    "BookingDetail",
    "BookingList"
]
