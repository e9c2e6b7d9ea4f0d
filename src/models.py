from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Text, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from src.database import Base

# BIGINT primary keys do not autoincrement on SQLite
IdType = BigInteger().with_variant(Integer, "sqlite")

# ================================
# Users & Roles
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(IdType, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    full_name = Column(String(255))
    phone = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user_role = relationship("UserRole", back_populates="user", uselist=False)
    passenger = relationship("Passenger", back_populates="user", uselist=False)

class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(IdType, primary_key=True, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id"), unique=True, nullable=False)
    role = Column(String(20), nullable=False)  # admin, hotel, customer
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="user_role")

# ================================
# Trains & Hotels
# ================================
class Train(Base):
    __tablename__ = "trains"

    id = Column(IdType, primary_key=True, index=True)
    train_number = Column(String(50), nullable=False, index=True)
    train_name = Column(String(255), nullable=False)
    origin = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    scheduled_departure = Column(DateTime(timezone=True), nullable=False)
    scheduled_arrival = Column(DateTime(timezone=True), nullable=False)
    actual_arrival = Column(DateTime(timezone=True))
    status = Column(String(20), nullable=False, default="on_time")  # on_time, delayed, cancelled
    delay_minutes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="train")

class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(IdType, primary_key=True, index=True)
    hotel_name = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    rating = Column(Numeric(2, 1))
    contact_email = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="hotel")

# ================================
# Passengers & Bookings
# ================================
class Passenger(Base):
    __tablename__ = "passengers"

    id = Column(IdType, primary_key=True, index=True)
    user_id = Column(BigInteger, ForeignKey("users.id"), nullable=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="passenger")
    bookings = relationship("Booking", back_populates="passenger")

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(IdType, primary_key=True, index=True)
    passenger_id = Column(BigInteger, ForeignKey("passengers.id"), nullable=False, index=True)
    train_id = Column(BigInteger, ForeignKey("trains.id"), nullable=False, index=True)
    hotel_id = Column(BigInteger, ForeignKey("hotels.id"), nullable=False, index=True)
    original_checkin = Column(DateTime(timezone=True), nullable=False)
    original_checkout = Column(DateTime(timezone=True), nullable=False)
    adjusted_checkin = Column(DateTime(timezone=True))
    adjusted_checkout = Column(DateTime(timezone=True))
    status = Column(String(20), nullable=False, default="confirmed")  # confirmed, rescheduled, cancelled
    total_amount = Column(Numeric(12, 2), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    passenger = relationship("Passenger", back_populates="bookings")
    train = relationship("Train", back_populates="bookings")
    hotel = relationship("Hotel", back_populates="bookings")
    notifications = relationship(
        "DelayNotification", back_populates="booking", order_by="DelayNotification.id"
    )

class DelayNotification(Base):
    __tablename__ = "delay_notifications"

    id = Column(IdType, primary_key=True, index=True)
    booking_id = Column(BigInteger, ForeignKey("bookings.id"), nullable=False, index=True)
    notification_type = Column(String(50), nullable=False)  # confirmation, reschedule, cancellation
    message = Column(Text, nullable=False)
    sent_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    booking = relationship("Booking", back_populates="notifications")
