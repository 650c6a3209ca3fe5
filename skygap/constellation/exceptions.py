"""skygap/constellation/exceptions.py"""


class ConstellationError(Exception):
    """Base exception for all constellation retrieval errors."""
    pass


class SnapshotFormatError(ConstellationError):
    """Raised when an hourly payload is not the expected JSON array."""
    pass


class HourFetchError(ConstellationError):
    """A single hourly request failed."""
    def __init__(self, hour: int, reason: str):
        self.hour = hour
        self.reason = reason
        super().__init__(f"Hour {hour:02d}: {reason}")
