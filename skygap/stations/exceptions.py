"""skygap/stations/exceptions.py"""


class StationDataError(Exception):
    """Base exception for station reference data errors."""
    pass


class StationFileNotFound(StationDataError):
    """Raised when the station JSON cache does not exist."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Station data file not found: {path}")


class StationDownloadError(StationDataError):
    """Raised when the station history could not be downloaded."""
    pass
