from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from src.database import get_db
from src.auth.dependencies import get_current_user, require_admin
from src.auth.schemas import CurrentUser
from src.engine.exceptions import NotFound
from src.hotels.schemas import Hotel, HotelCreate, HotelUpdate
from src.hotels.service import HotelService

router = APIRouter()

@router.get("/", response_model=List[Hotel])
def get_hotels(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all hotels"""
    return HotelService.get_hotels(db)

@router.get("/{hotel_id}", response_model=Hotel)
def get_hotel(
    hotel_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get hotel details by ID"""
    try:
        return HotelService.get_hotel_by_id(db, hotel_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/", response_model=Hotel, status_code=status.HTTP_201_CREATED)
def create_hotel(
    hotel: HotelCreate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Create a hotel"""
    return HotelService.create_hotel(db, hotel)

@router.put("/{hotel_id}", response_model=Hotel)
def update_hotel(
    hotel_id: int,
    hotel_update: HotelUpdate,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update hotel details"""
    try:
        return HotelService.update_hotel(db, hotel_id, hotel_update)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.delete("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_hotel(
    hotel_id: int,
    admin_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a hotel"""
    try:
        HotelService.delete_hotel(db, hotel_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
