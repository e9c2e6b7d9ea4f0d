"""
Admin System Module

This module provides administrative functionality for the train/hotel
booking system. It includes:

- User management and role assignment (admin, hotel, customer)
- Booking analytics and revenue reporting
- Overview of delayed and cancelled trains with affected bookings

Train, hotel and booking maintenance endpoints live in their own modules and
are gated by the same admin role guard.
"""

from . import schemas, admin_service

__all__ = [
    "schemas",
    "admin_service"
]
