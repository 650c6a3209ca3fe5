# skygap/utils/coordinates.py
"""
Provides the great-circle distance calculations shared by the coverage and
trajectory modules. Inputs are signed decimal degrees; `distance_km` also
accepts numpy arrays so a whole candidate set can be measured in one call.
"""
import numpy as np
from typing import Any, Sequence

from ..constants.geodesy import GeoConstants


class CoordinateCalculations:
    """A collection of static methods for coordinate-based calculations."""

    @staticmethod
    def distance_km(lat1, lon1, lat2, lon2):
        """Calculates the Haversine distance between two points in kilometers."""
        R = GeoConstants.EARTH_RADIUS_KM
        d_lat = np.radians(np.subtract(lat2, lat1))
        d_lon = np.radians(np.subtract(lon2, lon1))
        a = np.sin(d_lat / 2)**2 + np.cos(np.radians(lat1)) * np.cos(np.radians(lat2)) * np.sin(d_lon / 2)**2
        # Rounding can push `a` just outside [0, 1] for antipodal points.
        a = np.clip(a, 0.0, 1.0)
        c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
        distance = R * c
        if np.ndim(distance) == 0:
            return float(distance)
        return distance

    @staticmethod
    def distance_between(a: Any, b: Any) -> float:
        """Distance in km between two objects exposing latitude/longitude."""
        return CoordinateCalculations.distance_km(a.latitude, a.longitude, b.latitude, b.longitude)

    @staticmethod
    def nearest_distance_km(lat: float, lon: float, lats: Sequence[float], lons: Sequence[float]) -> float:
        """Minimum distance from a point to a set of points, inf for an empty set."""
        if len(lats) == 0:
            return float('inf')
        distances = CoordinateCalculations.distance_km(
            lat, lon, np.asarray(lats, dtype=float), np.asarray(lons, dtype=float)
        )
        return float(np.min(distances))

    @staticmethod
    def is_valid_coord(lat: float, lon: float) -> bool:
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0
