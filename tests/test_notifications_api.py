import unittest

from src.auth.schemas import Role
from tests.api_base import ApiTestCase, API


class BookingNotificationApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.login_as(Role.ADMIN)
        self.customer = self.login_as(Role.CUSTOMER, email="asha@trainsync.io", full_name="Asha Rao")
        self.train = self.create_train()
        self.hotel = self.create_hotel()
        self.booking_id = self.book(self.customer, self.train.id, self.hotel.id).json()["id"]

    def send(self, booking_id, notification_type):
        return self.client.post(
            f"{API}/notifications/send-booking-notification",
            json={"bookingId": booking_id, "notificationType": notification_type},
            headers=self.customer,
        )

    def test_confirmation(self):
        response = self.send(self.booking_id, "confirmation")

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertTrue(body["message"].startswith("Booking confirmed for Asha Rao on Rajdhani Express (12951)"))
        self.assertEqual(body["bookingDetails"], {
            "passenger": "Asha Rao",
            "train": "Rajdhani Express (12951)",
            "hotel": "The Imperial",
            "checkIn": "2024-01-10T14:00:00",
            "checkOut": "2024-01-11T11:00:00",
        })

    def test_reschedule_uses_adjusted_times(self):
        self.client.patch(
            f"{API}/trains/{self.train.id}/status",
            json={"status": "delayed", "delay_minutes": 45},
            headers=self.admin,
        )

        response = self.send(self.booking_id, "reschedule")

        body = response.json()
        self.assertIn("New check-in at The Imperial is 2024-01-10 14:45.", body["message"])
        self.assertEqual(body["bookingDetails"]["checkIn"], "2024-01-10T14:45:00")

    def test_cancellation(self):
        response = self.send(self.booking_id, "cancellation")
        self.assertEqual(
            response.json()["message"],
            "Booking cancelled for Asha Rao on Rajdhani Express (12951) at The Imperial.",
        )

    def test_unknown_booking(self):
        response = self.send(9999, "confirmation")
        self.assertEqual(response.status_code, 404)

    def test_other_customer_cannot_read_booking_details(self):
        other = self.login_as(Role.CUSTOMER, email="ravi@trainsync.io", full_name="Ravi Kumar")

        response = self.client.post(
            f"{API}/notifications/send-booking-notification",
            json={"bookingId": self.booking_id, "notificationType": "confirmation"},
            headers=other,
        )

        self.assertEqual(response.status_code, 403)
        self.assertNotIn("Asha Rao", response.text)

    def test_hotel_staff_can_dispatch(self):
        hotel_staff = self.login_as(Role.HOTEL)

        response = self.client.post(
            f"{API}/notifications/send-booking-notification",
            json={"bookingId": self.booking_id, "notificationType": "reschedule"},
            headers=hotel_staff,
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["bookingDetails"]["passenger"], "Asha Rao")

    def test_unknown_type_is_rejected(self):
        response = self.send(self.booking_id, "sms_blast")
        self.assertEqual(response.status_code, 422)

    def test_dispatch_does_not_write_to_the_log(self):
        self.send(self.booking_id, "confirmation")
        log = self.client.get(f"{API}/bookings/{self.booking_id}/notifications", headers=self.customer).json()
        self.assertEqual(len(log), 1)


if __name__ == "__main__":
    unittest.main()
