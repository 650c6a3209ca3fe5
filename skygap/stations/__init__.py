"""
stations - Weather station reference data for coverage analysis
"""

from .loader import StationLoader
from .data_models import ReferenceStation
from .exceptions import StationDataError, StationFileNotFound, StationDownloadError

__all__ = [
    'StationLoader',
    'ReferenceStation',
    'StationDataError',
    'StationFileNotFound',
    'StationDownloadError'
]
