from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class HotelBase(BaseModel):
    hotel_name: str
    location: str
    address: str
    rating: Optional[float] = Field(None, ge=1.0, le=5.0)
    contact_email: EmailStr
    contact_phone: str

class HotelCreate(HotelBase):
    pass

class HotelUpdate(BaseModel):
    hotel_name: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    rating: Optional[float] = Field(None, ge=1.0, le=5.0)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None

class Hotel(HotelBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
