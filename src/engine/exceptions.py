class EngineError(Exception):
    """Base class for booking adjustment errors"""


class InvalidInput(EngineError):
    """Train delay data is malformed (negative delay, unknown status)"""


class InvalidBooking(EngineError):
    """Booking window violates checkout > checkin"""


class MissingRelation(EngineError):
    """Booking passenger, train or hotel could not be resolved"""


class NotFound(EngineError):
    """Entity is absent from the store"""
