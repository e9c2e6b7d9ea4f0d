import unittest

from src.engine import (
    resolve_status, transition_event, BookingStatus, DelaySeverity, NotificationEvent, InvalidInput
)


class BookingStatusResolverTests(unittest.TestCase):
    def test_cancelled_is_absorbing(self):
        for severity in DelaySeverity:
            for explicit in (True, False):
                with self.subTest(severity=severity, explicit=explicit):
                    self.assertEqual(
                        resolve_status(BookingStatus.CANCELLED, severity, explicit),
                        BookingStatus.CANCELLED,
                    )

    def test_explicit_cancellation_wins(self):
        for current in (BookingStatus.CONFIRMED, BookingStatus.RESCHEDULED):
            for severity in DelaySeverity:
                with self.subTest(current=current, severity=severity):
                    self.assertEqual(resolve_status(current, severity, True), BookingStatus.CANCELLED)

    def test_transitions_from_confirmed(self):
        expected = {
            DelaySeverity.NONE: BookingStatus.CONFIRMED,
            DelaySeverity.MINOR: BookingStatus.RESCHEDULED,
            DelaySeverity.MAJOR: BookingStatus.RESCHEDULED,
            DelaySeverity.CANCELLED: BookingStatus.CANCELLED,
        }
        for severity, status in expected.items():
            with self.subTest(severity=severity):
                self.assertEqual(resolve_status(BookingStatus.CONFIRMED, severity, False), status)

    def test_transitions_from_rescheduled(self):
        expected = {
            DelaySeverity.NONE: BookingStatus.CONFIRMED,
            DelaySeverity.MINOR: BookingStatus.RESCHEDULED,
            DelaySeverity.MAJOR: BookingStatus.RESCHEDULED,
            DelaySeverity.CANCELLED: BookingStatus.CANCELLED,
        }
        for severity, status in expected.items():
            with self.subTest(severity=severity):
                self.assertEqual(resolve_status(BookingStatus.RESCHEDULED, severity, False), status)

    def test_accepts_stored_string_values(self):
        self.assertEqual(resolve_status("rescheduled", DelaySeverity.NONE), BookingStatus.CONFIRMED)

    def test_unknown_status_is_invalid(self):
        with self.assertRaises(InvalidInput):
            resolve_status("modified", DelaySeverity.NONE)

    def test_transition_events(self):
        self.assertEqual(
            transition_event(BookingStatus.CONFIRMED, BookingStatus.RESCHEDULED),
            NotificationEvent.STATUS_CHANGED_TO_RESCHEDULED,
        )
        self.assertEqual(
            transition_event(BookingStatus.RESCHEDULED, BookingStatus.CANCELLED),
            NotificationEvent.STATUS_CHANGED_TO_CANCELLED,
        )
        self.assertIsNone(transition_event(BookingStatus.RESCHEDULED, BookingStatus.CONFIRMED))
        self.assertIsNone(transition_event(BookingStatus.RESCHEDULED, BookingStatus.RESCHEDULED))
        self.assertIsNone(transition_event(BookingStatus.CANCELLED, BookingStatus.CANCELLED))


if __name__ == "__main__":
    unittest.main()
