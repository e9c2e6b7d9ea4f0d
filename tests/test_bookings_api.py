import unittest

from src.auth.schemas import Role
from src.models import Train
from tests.api_base import ApiTestCase, API


class BookingApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.login_as(Role.ADMIN)
        self.customer = self.login_as(Role.CUSTOMER, email="asha@trainsync.io", full_name="Asha Rao")
        self.train = self.create_train()
        self.hotel = self.create_hotel()

    def delay_train(self, status, delay_minutes):
        # Direct store write, as a delay feed would do, without running the sync
        self.db.query(Train).filter(Train.id == self.train.id).update(
            {"status": status, "delay_minutes": delay_minutes}
        )
        self.db.commit()

    def test_create_booking(self):
        response = self.book(self.customer, self.train.id, self.hotel.id, notes="Late check-in please")

        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertEqual(body["status"], "confirmed")
        self.assertEqual(float(body["total_amount"]), 2500.0)
        self.assertIsNone(body["adjusted_checkin"])
        self.assertEqual(body["passenger"]["full_name"], "Asha Rao")
        self.assertEqual(body["passenger"]["email"], "asha@trainsync.io")
        self.assertEqual(body["train"]["train_number"], "12951")
        self.assertEqual(body["hotel"]["hotel_name"], "The Imperial")
        self.assertEqual(body["view"]["severity"], "none")

    def test_partial_nights_are_rounded_up(self):
        response = self.book(
            self.customer, self.train.id, self.hotel.id,
            checkin="2024-01-10T14:00:00", checkout="2024-01-12T16:00:00",
        )
        self.assertEqual(float(response.json()["total_amount"]), 7500.0)

    def test_passenger_is_reused_across_bookings(self):
        first = self.book(self.customer, self.train.id, self.hotel.id).json()
        second = self.book(self.customer, self.train.id, self.hotel.id).json()
        self.assertEqual(first["passenger_id"], second["passenger_id"])

    def test_checkout_must_follow_checkin(self):
        response = self.book(
            self.customer, self.train.id, self.hotel.id,
            checkin="2024-01-11T11:00:00", checkout="2024-01-10T14:00:00",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Check-out date must be after check-in date")

    def test_timezone_aware_times_are_stored_as_utc(self):
        response = self.book(
            self.customer, self.train.id, self.hotel.id,
            checkin="2024-01-10T19:30:00+05:30", checkout="2024-01-11T11:00:00",
        )

        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["original_checkin"], "2024-01-10T14:00:00")
        self.assertEqual(float(response.json()["total_amount"]), 2500.0)

    def test_mixed_timezone_window_violation_is_rejected(self):
        response = self.book(
            self.customer, self.train.id, self.hotel.id,
            checkin="2024-01-11T11:00:00Z", checkout="2024-01-10T14:00:00",
        )
        self.assertEqual(response.status_code, 400)

    def test_admin_edit_compares_aware_adjusted_time_with_stored_one(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.client.patch(
            f"{API}/trains/{self.train.id}/status",
            json={"status": "delayed", "delay_minutes": 45},
            headers=self.admin,
        )

        rejected = self.client.patch(
            f"{API}/bookings/{booking_id}",
            json={"adjusted_checkout": "2024-01-10T12:00:00Z"},
            headers=self.admin,
        )
        accepted = self.client.patch(
            f"{API}/bookings/{booking_id}",
            json={"adjusted_checkout": "2024-01-11T17:30:00+05:30"},
            headers=self.admin,
        )

        self.assertEqual(rejected.status_code, 400)
        self.assertEqual(rejected.json()["detail"], "Adjusted check-out must be after adjusted check-in")
        self.assertEqual(accepted.status_code, 200, accepted.text)
        self.assertEqual(accepted.json()["adjusted_checkout"], "2024-01-11T12:00:00")

    def test_unknown_train_or_hotel(self):
        self.assertEqual(self.book(self.customer, 9999, self.hotel.id).status_code, 404)
        self.assertEqual(self.book(self.customer, self.train.id, 9999).status_code, 404)

    def test_hotel_staff_cannot_book(self):
        headers = self.login_as(Role.HOTEL)
        self.assertEqual(self.book(headers, self.train.id, self.hotel.id).status_code, 403)

    def test_my_bookings_recompute_live_delay(self):
        self.book(self.customer, self.train.id, self.hotel.id)
        self.delay_train("delayed", 45)

        response = self.client.get(f"{API}/bookings/me", headers=self.customer)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total"], 1)
        booking = response.json()["bookings"][0]
        self.assertEqual(booking["status"], "confirmed")
        self.assertEqual(booking["view"]["status"], "rescheduled")
        self.assertEqual(booking["view"]["severity"], "minor")
        self.assertEqual(booking["view"]["effective_checkin"], "2024-01-10T14:45:00")
        self.assertEqual(booking["view"]["effective_checkout"], "2024-01-11T11:45:00")

    def test_my_bookings_only_lists_own(self):
        other = self.login_as(Role.CUSTOMER, email="ravi@trainsync.io")
        self.book(other, self.train.id, self.hotel.id)

        response = self.client.get(f"{API}/bookings/me", headers=self.customer)

        self.assertEqual(response.json()["total"], 0)

    def test_cancel_booking(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]

        response = self.client.post(
            f"{API}/bookings/{booking_id}/cancel",
            json={"cancellation_reason": "Plans changed"},
            headers=self.customer,
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["status"], "cancelled")
        self.assertEqual(response.json()["notes"], "Plans changed")

        log = self.client.get(f"{API}/bookings/{booking_id}/notifications", headers=self.customer).json()
        self.assertEqual([n["notification_type"] for n in log], ["confirmation", "cancellation"])

    def test_cancel_twice_is_rejected(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.client.post(f"{API}/bookings/{booking_id}/cancel", headers=self.customer)

        response = self.client.post(f"{API}/bookings/{booking_id}/cancel", headers=self.customer)

        self.assertEqual(response.status_code, 400)

    def test_cannot_cancel_someone_elses_booking(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        other = self.login_as(Role.CUSTOMER, email="ravi@trainsync.io")

        response = self.client.post(f"{API}/bookings/{booking_id}/cancel", headers=other)

        self.assertEqual(response.status_code, 403)

    def test_hotel_dashboard_shows_affected_bookings(self):
        other_hotel = self.create_hotel(hotel_name="Taj Palace")
        self.book(self.customer, self.train.id, self.hotel.id)
        self.book(self.customer, self.train.id, other_hotel.id)
        self.delay_train("delayed", 90)
        hotel_staff = self.login_as(Role.HOTEL)

        response = self.client.get(
            f"{API}/bookings/hotel", params={"hotel_id": self.hotel.id}, headers=hotel_staff
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total"], 1)
        booking = response.json()["bookings"][0]
        self.assertEqual(booking["train"]["delay_minutes"], 90)
        self.assertEqual(booking["view"]["severity"], "major")
        self.assertEqual(booking["view"]["adjusted_checkin"], "2024-01-10T15:30:00")

    def test_customer_cannot_open_hotel_dashboard(self):
        response = self.client.get(f"{API}/bookings/hotel", headers=self.customer)
        self.assertEqual(response.status_code, 403)

    def test_admin_edit_cannot_reopen_cancelled_booking(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.client.post(f"{API}/bookings/{booking_id}/cancel", headers=self.customer)

        response = self.client.patch(
            f"{API}/bookings/{booking_id}", json={"status": "confirmed"}, headers=self.admin
        )

        self.assertEqual(response.status_code, 400)

    def test_admin_edit_notes_and_amount(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]

        response = self.client.patch(
            f"{API}/bookings/{booking_id}",
            json={"notes": "VIP guest", "total_amount": "3000.00"},
            headers=self.admin,
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["notes"], "VIP guest")
        self.assertEqual(float(response.json()["total_amount"]), 3000.0)

    def test_admin_edit_rejects_negative_amount(self):
        booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        response = self.client.patch(
            f"{API}/bookings/{booking_id}", json={"total_amount": "-1"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 422)

    def test_admin_lists_bookings_by_status(self):
        first = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]
        self.book(self.customer, self.train.id, self.hotel.id)
        self.client.post(f"{API}/bookings/{first}/cancel", headers=self.customer)

        response = self.client.get(
            f"{API}/bookings/", params={"booking_status": "cancelled"}, headers=self.admin
        )

        self.assertEqual(response.json()["total"], 1)
        self.assertEqual(response.json()["bookings"][0]["id"], first)

    def test_corrupt_train_delay_is_logged_not_raised(self):
        self.book(self.customer, self.train.id, self.hotel.id)
        self.delay_train("delayed", -15)

        with self.assertLogs("src.bookings.booking_service", level="ERROR"):
            response = self.client.get(f"{API}/bookings/me", headers=self.customer)

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["bookings"][0]["view"])


if __name__ == "__main__":
    unittest.main()
