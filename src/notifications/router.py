from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.database import get_db
from src.auth.dependencies import get_current_user
from src.auth.schemas import CurrentUser
from src.bookings.booking_service import BookingService
from src.engine.exceptions import NotFound, MissingRelation
from src.notifications.schemas import BookingNotificationRequest, BookingNotificationResponse
from src.notifications.service import NotificationService
from src.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()

@router.post("/send-booking-notification", response_model=BookingNotificationResponse)
def send_booking_notification(
    request: BookingNotificationRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Build and dispatch the notification for a booking"""
    try:
        booking = NotificationService.get_booking_with_relations(db, request.booking_id)
    except NotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    if not BookingService.can_access(booking, current_user):
        logger.warning(f"User {current_user.id} denied notification for booking {booking.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    try:
        return NotificationService.dispatch(booking, request.notification_type)
    except MissingRelation as e:
        logger.error(f"Error in send-booking-notification: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
