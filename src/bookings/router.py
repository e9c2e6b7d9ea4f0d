from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from src.database import get_db
from src.auth.dependencies import get_current_user, require_roles, require_admin
from src.auth.schemas import CurrentUser, Role
from src.bookings.schemas import (
    BookingCreate, BookingUpdate, BookingCancellationRequest, BookingDetail, BookingList
)
from src.bookings.booking_service import BookingService
from src.engine.schemas import BookingStatus
from src.engine.exceptions import NotFound, MissingRelation, InvalidInput, InvalidBooking
from src.notifications.schemas import DelayNotification
from src.notifications.service import NotificationService
from src.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()

def _booking_list(bookings) -> BookingList:
    details = [BookingService.to_detail(booking) for booking in bookings]
    return BookingList(bookings=details, total=len(details))

# Traveler Endpoints
@router.post("/", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreate,
    current_user: CurrentUser = Depends(require_roles(Role.CUSTOMER, Role.ADMIN)),
    db: Session = Depends(get_db)
):
    """Book a train journey together with a hotel stay"""
    try:
        booking = BookingService.create_booking(db, current_user, request)
        return BookingService.to_detail(booking)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MissingRelation as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

@router.get("/me", response_model=BookingList)
def get_my_bookings(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's bookings with live delay adjustments"""
    return _booking_list(BookingService.get_user_bookings(db, current_user))

# Hotel Staff Endpoints
@router.get("/hotel", response_model=BookingList)
def get_hotel_bookings(
    hotel_id: Optional[int] = Query(None, description="Filter by hotel ID"),
    current_user: CurrentUser = Depends(require_roles(Role.HOTEL, Role.ADMIN)),
    db: Session = Depends(get_db)
):
    """Get bookings affecting hotel check-ins"""
    return _booking_list(BookingService.get_bookings(db, hotel_id=hotel_id))

# Admin Endpoints
@router.get("/", response_model=BookingList)
def get_all_bookings(
    hotel_id: Optional[int] = Query(None, description="Filter by hotel ID"),
    train_id: Optional[int] = Query(None, description="Filter by train ID"),
    booking_status: Optional[BookingStatus] = Query(None, description="Filter by booking status"),
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get all bookings"""
    bookings = BookingService.get_bookings(
        db, hotel_id=hotel_id, train_id=train_id, booking_status=booking_status
    )
    return _booking_list(bookings)

@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(
    booking_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get booking details by ID"""
    try:
        booking = BookingService.get_booking(db, booking_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if not BookingService.can_access(booking, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")

    return BookingService.to_detail(booking)

@router.patch("/{booking_id}", response_model=BookingDetail)
def update_booking(
    booking_id: int,
    booking_update: BookingUpdate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Directly edit a booking"""
    try:
        booking = BookingService.update_booking(db, booking_id, booking_update)
        return BookingService.to_detail(booking)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MissingRelation as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

@router.post("/{booking_id}/cancel", response_model=BookingDetail)
def cancel_booking(
    booking_id: int,
    cancellation: Optional[BookingCancellationRequest] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Cancel a booking"""
    reason = cancellation.cancellation_reason if cancellation else None

    try:
        booking = BookingService.cancel_booking(db, booking_id, current_user, reason)
        return BookingService.to_detail(booking)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MissingRelation as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except (InvalidInput, InvalidBooking) as e:
        logger.error(f"Failed to cancel booking {booking_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to cancel booking"
        )

@router.get("/{booking_id}/notifications", response_model=List[DelayNotification])
def get_booking_notifications(
    booking_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the notification log of a booking"""
    try:
        booking = BookingService.get_booking(db, booking_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    if not BookingService.can_access(booking, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")

    return NotificationService.list_for_booking(db, booking_id)
