from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from src.database import get_db
from src.auth.dependencies import get_current_user, require_admin
from src.auth.schemas import CurrentUser
from src.engine.exceptions import NotFound, InvalidInput
from src.trains.schemas import (
    Train, TrainCreate, TrainUpdate, TrainStatusUpdate, TrainStatusResponse
)
from src.trains.service import TrainService
from src.bookings.sync_service import DelaySyncService
from src.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()

@router.get("/", response_model=List[Train])
def get_trains(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all trains"""
    return TrainService.get_trains(db)

@router.get("/{train_id}", response_model=Train)
def get_train(
    train_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get train details by ID"""
    try:
        return TrainService.get_train_by_id(db, train_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Train, status_code=status.HTTP_201_CREATED)
def create_train(
    train: TrainCreate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a train"""
    return TrainService.create_train(db, train)

@router.put("/{train_id}", response_model=Train)
def update_train(
    train_id: int,
    train_update: TrainUpdate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update train schedule details"""
    try:
        return TrainService.update_train(db, train_id, train_update)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.patch("/{train_id}/status", response_model=TrainStatusResponse)
def update_train_status(
    train_id: int,
    status_update: TrainStatusUpdate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update live train status and propagate it to the train's bookings"""
    try:
        train = TrainService.set_status(db, train_id, status_update)
        summary = DelaySyncService.sync_train(db, train)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidInput as e:
        logger.error(f"Delay sync failed for train {train_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Train delay data is inconsistent"
        )

    return TrainStatusResponse(train=Train.model_validate(train), sync=summary)

@router.delete("/{train_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_train(
    train_id: int,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a train"""
    try:
        TrainService.delete_train(db, train_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
