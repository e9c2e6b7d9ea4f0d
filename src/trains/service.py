from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Tuple

from src.models import Train, Booking
from src.trains.schemas import TrainCreate, TrainUpdate, TrainStatusUpdate
from src.engine.schemas import TrainStatus, BookingStatus
from src.engine.exceptions import NotFound
from src.logger import setup_logger

logger = setup_logger(__name__)

class TrainService:
    @staticmethod
    def get_train_by_id(db: Session, train_id: int) -> Train:
        """Get train by ID, raising NotFound when absent"""
        train = db.query(Train).filter(Train.id == train_id).first()
        if not train:
            raise NotFound(f"Train {train_id} not found")
        return train

    @staticmethod
    def get_trains(db: Session) -> List[Train]:
        """Get all trains ordered by number"""
        return db.query(Train).order_by(Train.train_number).all()

    @staticmethod
    def create_train(db: Session, data: TrainCreate) -> Train:
        """Create a train, on time with no delay"""
        train = Train(
            **data.dict(),
            status=TrainStatus.ON_TIME.value,
            delay_minutes=0
        )
        db.add(train)
        db.commit()
        db.refresh(train)
        logger.info(f"Created train {train.id} ({train.train_number})")
        return train

    @staticmethod
    def update_train(db: Session, train_id: int, data: TrainUpdate) -> Train:
        """Update schedule details of a train"""
        train = TrainService.get_train_by_id(db, train_id)

        update_data = data.dict(exclude_unset=True)
        for field, value in update_data.items():
            setattr(train, field, value)

        departure = train.scheduled_departure
        arrival = train.scheduled_arrival
        if departure and arrival and arrival <= departure:
            db.rollback()
            raise ValueError("Scheduled arrival must be after departure")

        db.commit()
        db.refresh(train)
        return train

    @staticmethod
    def delete_train(db: Session, train_id: int) -> None:
        """Delete a train that no booking references"""
        train = TrainService.get_train_by_id(db, train_id)

        booking_count = db.query(Booking).filter(Booking.train_id == train_id).count()
        if booking_count:
            raise ValueError(f"Train has {booking_count} bookings and cannot be deleted")

        db.delete(train)
        db.commit()
        logger.info(f"Deleted train {train_id}")

    @staticmethod
    def normalize_status(update: TrainStatusUpdate) -> Tuple[TrainStatus, int]:
        """Keep delay_minutes at 0 unless the train is delayed

        A positive delay entered against an on-time train marks it delayed.
        """
        status = update.status
        delay_minutes = update.delay_minutes

        if status == TrainStatus.ON_TIME and delay_minutes > 0:
            status = TrainStatus.DELAYED
        if status != TrainStatus.DELAYED:
            delay_minutes = 0

        return status, delay_minutes

    @staticmethod
    def set_status(db: Session, train_id: int, update: TrainStatusUpdate) -> Train:
        """Write the live status of a train"""
        train = TrainService.get_train_by_id(db, train_id)
        status, delay_minutes = TrainService.normalize_status(update)

        train.status = status.value
        train.delay_minutes = delay_minutes

        db.commit()
        db.refresh(train)
        logger.info(f"Train {train.train_number} status set to {status.value} ({delay_minutes} min)")
        return train

    @staticmethod
    def get_affected_trains(db: Session) -> List[Tuple[Train, int]]:
        """Delayed or cancelled trains with their count of active bookings"""
        active_count = func.count(Booking.id)
        rows = db.query(Train, active_count).outerjoin(
            Booking,
            (Booking.train_id == Train.id) & (Booking.status != BookingStatus.CANCELLED.value)
        ).filter(
            Train.status.in_([TrainStatus.DELAYED.value, TrainStatus.CANCELLED.value])
        ).group_by(Train.id).order_by(Train.train_number).all()

        return [(train, count) for train, count in rows]
