from sqlalchemy.orm import Session
from typing import List

from src.models import Hotel, Booking
from src.hotels.schemas import HotelCreate, HotelUpdate
from src.engine.exceptions import NotFound
from src.logger import setup_logger

logger = setup_logger(__name__)

class HotelService:
    @staticmethod
    def get_hotel_by_id(db: Session, hotel_id: int) -> Hotel:
        """Get hotel by ID, raising NotFound when absent"""
        hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
        if not hotel:
            raise NotFound(f"Hotel {hotel_id} not found")
        return hotel

    @staticmethod
    def get_hotels(db: Session) -> List[Hotel]:
        """Get all hotels ordered by name"""
        return db.query(Hotel).order_by(Hotel.hotel_name).all()

    @staticmethod
    def create_hotel(db: Session, data: HotelCreate) -> Hotel:
        hotel = Hotel(**data.dict())
        db.add(hotel)
        db.commit()
        db.refresh(hotel)
        logger.info(f"Created hotel {hotel.id} ({hotel.hotel_name})")
        return hotel

    @staticmethod
    def update_hotel(db: Session, hotel_id: int, data: HotelUpdate) -> Hotel:
        hotel = HotelService.get_hotel_by_id(db, hotel_id)

        for field, value in data.dict(exclude_unset=True).items():
            setattr(hotel, field, value)

        db.commit()
        db.refresh(hotel)
        return hotel

    @staticmethod
    def delete_hotel(db: Session, hotel_id: int) -> None:
        """Delete a hotel that no booking references"""
        hotel = HotelService.get_hotel_by_id(db, hotel_id)

        booking_count = db.query(Booking).filter(Booking.hotel_id == hotel_id).count()
        if booking_count:
            raise ValueError(f"Hotel has {booking_count} bookings and cannot be deleted")

        db.delete(hotel)
        db.commit()
        logger.info(f"Deleted hotel {hotel_id}")
