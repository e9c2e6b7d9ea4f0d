"""
Train Management Module

Admin-maintained train timetable and live status. Changing a train's status
or delay runs the delay sync, which moves the check-in/check-out window and
status of every active booking on that train and logs the notifications the
transitions trigger.
"""

from .service import TrainService

__all__ = ["TrainService"]
