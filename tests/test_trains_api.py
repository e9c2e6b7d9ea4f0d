import unittest

from src.auth.schemas import Role
from src.models import Booking, DelayNotification
from tests.api_base import ApiTestCase, API


class TrainApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.login_as(Role.ADMIN)
        self.customer = self.login_as(Role.CUSTOMER, full_name="Asha Rao")
        self.train = self.create_train()
        self.hotel = self.create_hotel()

    def set_status(self, status, delay_minutes=0, train_id=None):
        return self.client.patch(
            f"{API}/trains/{train_id or self.train.id}/status",
            json={"status": status, "delay_minutes": delay_minutes},
            headers=self.admin,
        )

    def stored_booking(self, booking_id):
        self.db.expire_all()
        return self.db.query(Booking).filter(Booking.id == booking_id).one()

    def notification_types(self, booking_id):
        self.db.expire_all()
        rows = self.db.query(DelayNotification).filter(
            DelayNotification.booking_id == booking_id
        ).order_by(DelayNotification.id).all()
        return [row.notification_type for row in rows]

    def test_create_train_starts_on_time(self):
        response = self.client.post(f"{API}/trains/", json={
            "train_number": "12002",
            "train_name": "Shatabdi Express",
            "origin": "New Delhi",
            "destination": "Bhopal",
            "scheduled_departure": "2024-01-10T06:00:00",
            "scheduled_arrival": "2024-01-10T14:25:00",
        }, headers=self.admin)

        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["status"], "on_time")
        self.assertEqual(response.json()["delay_minutes"], 0)

    def test_create_train_requires_admin(self):
        response = self.client.post(f"{API}/trains/", json={
            "train_number": "12002",
            "train_name": "Shatabdi Express",
            "origin": "New Delhi",
            "destination": "Bhopal",
            "scheduled_departure": "2024-01-10T06:00:00",
            "scheduled_arrival": "2024-01-10T14:25:00",
        }, headers=self.customer)
        self.assertEqual(response.status_code, 403)

    def test_list_trains_ordered_by_number(self):
        self.create_train(train_number="11077", train_name="Jhelum Express")
        response = self.client.get(f"{API}/trains/", headers=self.customer)

        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["train_number"] for t in response.json()], ["11077", "12951"])

    def test_minor_delay_reschedules_booking(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]

        response = self.set_status("delayed", 45)

        self.assertEqual(response.status_code, 200, response.text)
        sync = response.json()["sync"]
        self.assertEqual(sync["bookings_checked"], 1)
        self.assertEqual(sync["adjusted"], 1)
        self.assertEqual(sync["rescheduled"], 1)
        self.assertEqual(sync["notified"], 1)

        booking = self.stored_booking(booking_id)
        self.assertEqual(booking.status, "rescheduled")
        self.assertEqual(booking.adjusted_checkin.isoformat(), "2024-01-10T14:45:00")
        self.assertEqual(booking.adjusted_checkout.isoformat(), "2024-01-11T11:45:00")
        self.assertEqual(self.notification_types(booking_id), ["confirmation", "reschedule"])

    def test_booking_with_corrupt_window_is_skipped(self):
        corrupt_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        healthy_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        # Checkout equal to checkin, as an out-of-band write could leave it
        self.db.query(Booking).filter(Booking.id == corrupt_id).update(
            {"original_checkout": Booking.original_checkin}, synchronize_session=False
        )
        self.db.commit()

        with self.assertLogs("src.bookings.sync_service", level="ERROR") as logs:
            response = self.set_status("delayed", 45)

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["sync"], {
            "bookings_checked": 2,
            "adjusted": 1,
            "rescheduled": 1,
            "confirmed": 0,
            "cancelled": 0,
            "notified": 1,
        })
        self.assertIn(f"Skipping booking {corrupt_id}", logs.output[0])

        corrupt = self.stored_booking(corrupt_id)
        self.assertEqual(corrupt.status, "confirmed")
        self.assertIsNone(corrupt.adjusted_checkin)
        self.assertEqual(self.notification_types(corrupt_id), ["confirmation"])

        healthy = self.stored_booking(healthy_id)
        self.assertEqual(healthy.status, "rescheduled")
        self.assertEqual(healthy.adjusted_checkin.isoformat(), "2024-01-10T14:45:00")
        self.assertEqual(self.notification_types(healthy_id), ["confirmation", "reschedule"])

    def test_growing_delay_does_not_notify_twice(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.set_status("delayed", 45)

        response = self.set_status("delayed", 90)

        sync = response.json()["sync"]
        self.assertEqual(sync["adjusted"], 1)
        self.assertEqual(sync["notified"], 0)
        booking = self.stored_booking(booking_id)
        self.assertEqual(booking.adjusted_checkin.isoformat(), "2024-01-10T15:30:00")
        self.assertEqual(self.notification_types(booking_id), ["confirmation", "reschedule"])

    def test_delay_resolved_reverts_to_confirmed(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.set_status("delayed", 45)

        response = self.set_status("on_time")

        self.assertEqual(response.json()["train"]["delay_minutes"], 0)
        self.assertEqual(response.json()["sync"]["confirmed"], 1)
        booking = self.stored_booking(booking_id)
        self.assertEqual(booking.status, "confirmed")
        self.assertIsNone(booking.adjusted_checkin)
        self.assertIsNone(booking.adjusted_checkout)

    def test_cancelled_train_cancels_booking_without_adjustment(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]

        response = self.set_status("cancelled", 30)

        self.assertEqual(response.json()["train"]["status"], "cancelled")
        self.assertEqual(response.json()["train"]["delay_minutes"], 0)
        self.assertEqual(response.json()["sync"]["cancelled"], 1)
        booking = self.stored_booking(booking_id)
        self.assertEqual(booking.status, "cancelled")
        self.assertIsNone(booking.adjusted_checkin)
        self.assertEqual(self.notification_types(booking_id), ["confirmation", "cancellation"])

    def test_cancelled_booking_is_not_revived(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.set_status("cancelled")

        response = self.set_status("on_time")

        self.assertEqual(response.json()["sync"]["bookings_checked"], 0)
        self.assertEqual(self.stored_booking(booking_id).status, "cancelled")

    def test_positive_delay_on_on_time_train_marks_it_delayed(self):
        response = self.set_status("on_time", 20)

        self.assertEqual(response.json()["train"]["status"], "delayed")
        self.assertEqual(response.json()["train"]["delay_minutes"], 20)

    def test_negative_delay_is_rejected(self):
        response = self.set_status("delayed", -10)
        self.assertEqual(response.status_code, 422)

    def test_status_of_unknown_train(self):
        response = self.set_status("delayed", 10, train_id=9999)
        self.assertEqual(response.status_code, 404)

    def test_train_with_bookings_cannot_be_deleted(self):
        self.book(self.customer, self.train.id, self.hotel.id)
        response = self.client.delete(f"{API}/trains/{self.train.id}", headers=self.admin)
        self.assertEqual(response.status_code, 400)

    def test_delete_train(self):
        train = self.create_train(train_number="11077", train_name="Jhelum Express")
        response = self.client.delete(f"{API}/trains/{train.id}", headers=self.admin)

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"{API}/trains/{train.id}", headers=self.admin).status_code, 404)


if __name__ == "__main__":
    unittest.main()
