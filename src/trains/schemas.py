from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime

from src.engine.schemas import TrainStatus

class TrainBase(BaseModel):
    train_number: str
    train_name: str
    origin: str
    destination: str
    scheduled_departure: datetime
    scheduled_arrival: datetime

class TrainCreate(TrainBase):
    @validator('scheduled_arrival')
    def validate_arrival(cls, v, values):
        departure = values.get('scheduled_departure')
        if departure and v <= departure:
            raise ValueError('Scheduled arrival must be after departure')
        return v

class TrainUpdate(BaseModel):
    train_number: Optional[str] = None
    train_name: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    scheduled_departure: Optional[datetime] = None
    scheduled_arrival: Optional[datetime] = None
    actual_arrival: Optional[datetime] = None

class TrainStatusUpdate(BaseModel):
    """Live status change entered by an admin"""
    status: TrainStatus
    delay_minutes: int = Field(0, ge=0)

class Train(TrainBase):
    id: int
    actual_arrival: Optional[datetime] = None
    status: TrainStatus
    delay_minutes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DelaySyncSummary(BaseModel):
    """Outcome of propagating a train status change to its bookings"""
    bookings_checked: int = 0
    adjusted: int = 0
    rescheduled: int = 0
    confirmed: int = 0
    cancelled: int = 0
    notified: int = 0

class TrainStatusResponse(BaseModel):
    train: Train
    sync: DelaySyncSummary

class AffectedTrain(BaseModel):
    train: Train
    active_bookings: int
