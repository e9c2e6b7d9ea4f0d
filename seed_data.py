#!/usr/bin/env python3

from datetime import datetime

from src.database import SessionLocal, engine, Base
from src.models import DelayNotification, Booking, Passenger, Hotel, Train, UserRole, User
from src.auth.schemas import Role, UserCreate
from src.auth.service import UserService
from src.trains.schemas import TrainCreate, TrainStatusUpdate
from src.trains.service import TrainService
from src.hotels.schemas import HotelCreate
from src.hotels.service import HotelService
from src.bookings.schemas import BookingCreate
from src.bookings.booking_service import BookingService
from src.bookings.sync_service import DelaySyncService

def create_seed_data():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for train-hotel booking coordination...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(DelayNotification).delete()
        db.query(Booking).delete()
        db.query(Passenger).delete()
        db.query(Hotel).delete()
        db.query(Train).delete()
        db.query(UserRole).delete()
        db.query(User).delete()
        db.commit()

        # 1. Users, one per role
        print("Creating users...")
        users = [
            (UserCreate(email="admin@trainsync.io", full_name="Operations Admin", password="Admin123!"), Role.ADMIN),
            (UserCreate(email="frontdesk@trainsync.io", full_name="Front Desk", password="Hotel123!"), Role.HOTEL),
            (UserCreate(email="asha@trainsync.io", full_name="Asha Rao", phone="+91 98450 12345",
                        password="Customer123!"), Role.CUSTOMER),
        ]
        created_users = [UserService.create_user(db, user, role) for user, role in users]
        customer = UserService.to_current_user(db, created_users[2])

        # 2. Trains
        print("Creating trains...")
        trains = [
            TrainCreate(train_number="12951", train_name="Rajdhani Express", origin="Mumbai Central",
                        destination="New Delhi", scheduled_departure=datetime(2024, 1, 9, 17, 0),
                        scheduled_arrival=datetime(2024, 1, 10, 8, 32)),
            TrainCreate(train_number="12002", train_name="Shatabdi Express", origin="New Delhi",
                        destination="Bhopal", scheduled_departure=datetime(2024, 1, 10, 6, 0),
                        scheduled_arrival=datetime(2024, 1, 10, 14, 25)),
            TrainCreate(train_number="11077", train_name="Jhelum Express", origin="Pune",
                        destination="Jammu Tawi", scheduled_departure=datetime(2024, 1, 8, 17, 20),
                        scheduled_arrival=datetime(2024, 1, 10, 11, 40)),
        ]
        created_trains = [TrainService.create_train(db, train) for train in trains]

        # 3. Hotels
        print("Creating hotels...")
        hotels = [
            HotelCreate(hotel_name="The Imperial", location="New Delhi", address="Janpath, Connaught Place",
                        rating=4.8, contact_email="reservations@theimperialindia.com", contact_phone="+91 11 4150 1234"),
            HotelCreate(hotel_name="Jehan Numa Palace", location="Bhopal", address="157 Shamla Hill",
                        rating=4.5, contact_email="reservations@jehannumapalace.com", contact_phone="+91 755 266 1100"),
            HotelCreate(hotel_name="Vivanta Dal View", location="Srinagar", address="Kralsangri, Brein",
                        rating=4.6, contact_email="reservations@vivantahotels.com", contact_phone="+91 194 246 1111"),
        ]
        created_hotels = [HotelService.create_hotel(db, hotel) for hotel in hotels]

        # 4. Bookings for the customer
        print("Creating bookings...")
        bookings = [
            BookingCreate(train_id=created_trains[0].id, hotel_id=created_hotels[0].id,
                          checkin=datetime(2024, 1, 10, 14, 0), checkout=datetime(2024, 1, 12, 11, 0),
                          notes="Early arrival by Rajdhani"),
            BookingCreate(train_id=created_trains[1].id, hotel_id=created_hotels[1].id,
                          checkin=datetime(2024, 1, 10, 15, 0), checkout=datetime(2024, 1, 11, 11, 0)),
            BookingCreate(train_id=created_trains[2].id, hotel_id=created_hotels[2].id,
                          checkin=datetime(2024, 1, 11, 14, 0), checkout=datetime(2024, 1, 13, 11, 0)),
        ]
        created_bookings = [BookingService.create_booking(db, customer, booking) for booking in bookings]

        # 5. Live delays, propagated to the bookings
        print("Applying live train status...")
        delays = [
            (created_trains[0], TrainStatusUpdate(status="delayed", delay_minutes=45)),
            (created_trains[2], TrainStatusUpdate(status="delayed", delay_minutes=150)),
        ]
        for train, update in delays:
            train = TrainService.set_status(db, train.id, update)
            summary = DelaySyncService.sync_train(db, train)
            print(f"  - {train.train_number}: {summary.rescheduled} rescheduled, {summary.notified} notified")

        print("✅ Successfully created seed data!")
        print(f"Created:")
        print(f"  - {len(created_users)} users")
        print(f"  - {len(created_trains)} trains")
        print(f"  - {len(created_hotels)} hotels")
        print(f"  - {len(created_bookings)} bookings")
        print(f"  - {db.query(DelayNotification).count()} notifications")
        print("Logins:")
        for user, role in users:
            print(f"  - {user.email} / {user.password} ({role.value})")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
