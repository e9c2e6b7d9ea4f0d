from .service import HotelService

__all__ = ["HotelService"]
