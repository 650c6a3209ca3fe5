"""
constellation - Retrieval of the hourly balloon position snapshots

Exposes the ConstellationClient, the snapshot data models and the
sample validation helpers.
"""

from .core import ConstellationClient
from .data_models import Position, FetchError, ConstellationSnapshot
from .exceptions import ConstellationError, SnapshotFormatError, HourFetchError
from .validation import parse_positions, parse_sample

__all__ = [
    'ConstellationClient',
    'Position',
    'FetchError',
    'ConstellationSnapshot',
    'ConstellationError',
    'SnapshotFormatError',
    'HourFetchError',
    'parse_positions',
    'parse_sample'
]
