# skygap/constellation/validation.py
import math
import logging
from typing import Any, List, Optional

from .data_models import Position
from ..constants.geodesy import GeoConstants
from ..utils.coordinates import CoordinateCalculations

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def parse_sample(sample: Any, hour: int, fetched_at: float) -> Optional[Position]:
    """
    Validates one raw `[lat, lon, alt, ...]` sample. Returns None for anything
    with the wrong arity, non-numeric fields or out-of-range values.
    """
    if not isinstance(sample, (list, tuple)) or len(sample) < 3:
        return None
    lat, lon, alt = sample[0], sample[1], sample[2]
    if not (_is_number(lat) and _is_number(lon) and _is_number(alt)):
        return None
    if not CoordinateCalculations.is_valid_coord(lat, lon) or alt < 0:
        return None
    return Position(
        latitude=float(lat),
        longitude=float(lon),
        altitude=float(alt),
        hour=hour,
        timestamp=fetched_at - hour * GeoConstants.SECONDS_PER_HOUR
    )


def parse_positions(samples: List[Any], hour: int, fetched_at: float) -> List[Position]:
    """Validates a whole hourly payload, silently dropping invalid samples."""
    positions = []
    for sample in samples:
        position = parse_sample(sample, hour, fetched_at)
        if position is not None:
            positions.append(position)
    dropped = len(samples) - len(positions)
    if dropped:
        logger.debug(f"Hour {hour:02d}: dropped {dropped} invalid samples")
    return positions
