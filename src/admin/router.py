from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .schemas import AdminUserList, RoleChangeResponse, BookingAnalytics, AffectedTrainList
from .admin_service import AdminManagementService
from ..database import get_db
from ..auth.dependencies import require_admin
from ..auth.schemas import CurrentUser, RoleUpdate
from ..auth.service import UserService
from ..trains.schemas import AffectedTrain, Train
from ..trains.service import TrainService
from ..logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])

# User Management Endpoints
@router.get("/users", response_model=AdminUserList)
def get_users(
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get all users with their roles"""
    users = UserService.list_users(db)
    return AdminUserList(users=users, total=len(users))

@router.put("/users/{user_id}/role", response_model=RoleChangeResponse)
def change_user_role(
    user_id: int,
    role_update: RoleUpdate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Assign a role to a user"""
    if not UserService.get_user_by_id(db, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    role = UserService.set_user_role(db, user_id, role_update.role)
    logger.info(f"Admin {admin_user.id} changed role of user {user_id} to {role.value}")

    return RoleChangeResponse(
        user_id=user_id,
        role=role,
        message=f"User role has been updated to {role.value}."
    )

# Analytics Endpoints
@router.get("/analytics", response_model=BookingAnalytics)
def get_analytics(
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get booking analytics"""
    return AdminManagementService(db).get_booking_analytics()

@router.get("/trains/affected", response_model=AffectedTrainList)
def get_affected_trains(
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get delayed or cancelled trains with their active booking counts"""
    rows = TrainService.get_affected_trains(db)
    trains = [AffectedTrain(train=Train.model_validate(train), active_bookings=count) for train, count in rows]
    return AffectedTrainList(trains=trains, total=len(trains))
