# skygap/coverage/spatial_index.py
"""
Grid-based spatial index over the weather stations.

The globe is split into fixed-size latitude/longitude cells (5 degrees by
default, 36 x 72 = 2,592 cells). A radius query collects every station in
the square of cells around the query point, so a 200 km lookup touches 9
cells instead of the full station list. The result is a candidate superset;
callers filter it by exact distance.

Cell spans are derived from 111 km per degree. That holds for latitude but
overstates the width of a longitude degree away from the equator, so at high
latitude the default square can be too narrow. `scale_longitude=True` widens
the longitude span for the highest parallel the search circle can reach.
Latitude never wraps over the poles; the cell size is expected to divide 360.
"""
import math
from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from skygap.constants.geodesy import GeoConstants
from skygap.stations.data_models import ReferenceStation


CellIndex = Tuple[int, int]


class StationGrid:
    """Immutable mapping from grid cells to the stations inside them."""

    def __init__(self, cells: Dict[CellIndex, Tuple[ReferenceStation, ...]],
                 cell_size_deg: float = GeoConstants.DEFAULT_CELL_SIZE_DEG,
                 scale_longitude: bool = False):
        self.cell_size_deg = self._checked_cell_size(cell_size_deg)
        self.scale_longitude = scale_longitude
        self._lon_cells = max(1, round(360 / cell_size_deg))
        self._cells: Mapping[CellIndex, Tuple[ReferenceStation, ...]] = MappingProxyType(dict(cells))
        self._station_count = sum(len(v) for v in self._cells.values())

    @classmethod
    def build(cls, stations: Iterable[ReferenceStation],
              cell_size_deg: float = GeoConstants.DEFAULT_CELL_SIZE_DEG,
              scale_longitude: bool = False) -> "StationGrid":
        """Buckets every station into its cell. An empty input yields an empty index."""
        cell_size_deg = cls._checked_cell_size(cell_size_deg)
        buckets = defaultdict(list)
        for station in stations:
            buckets[cls.cell_index(station.latitude, station.longitude, cell_size_deg)].append(station)
        return cls({k: tuple(v) for k, v in buckets.items()}, cell_size_deg, scale_longitude)

    @property
    def cell_count(self) -> int:
        """Number of populated cells."""
        return len(self._cells)

    @property
    def station_count(self) -> int:
        return self._station_count

    def cell_key(self, lat: float, lon: float) -> Tuple[float, float]:
        """South-west corner of the cell containing the point, in degrees."""
        i, j = self._index(lat, lon)
        return (i * self.cell_size_deg, j * self.cell_size_deg)

    def stations_in_cell(self, lat: float, lon: float) -> Tuple[ReferenceStation, ...]:
        return self._cells.get(self._index(lat, lon), ())

    def candidates_within_radius(self, lat: float, lon: float, radius_km: float) -> List[ReferenceStation]:
        """
        Returns every station in the cells around the point that could lie
        within `radius_km`. Each cell is visited once, so a station appears at
        most once even when the longitude span wraps the whole globe.
        """
        radius_deg = radius_km / GeoConstants.KM_PER_DEGREE
        lat_reach = math.ceil(radius_deg / self.cell_size_deg)
        lon_reach = self._lon_reach(lat, radius_km, radius_deg) if self.scale_longitude else lat_reach

        i0, j0 = self._index(lat, lon)
        visited = set()
        candidates = []
        for di in range(-lat_reach, lat_reach + 1):
            for dj in range(-lon_reach, lon_reach + 1):
                cell = (i0 + di, self._wrap(j0 + dj))
                if cell in visited:
                    continue
                visited.add(cell)
                candidates.extend(self._cells.get(cell, ()))
        return candidates

    @staticmethod
    def _checked_cell_size(cell_size_deg: float) -> float:
        if cell_size_deg <= 0:
            raise ValueError(f"cell_size_deg must be positive, got {cell_size_deg}")
        return cell_size_deg

    @staticmethod
    def cell_index(lat: float, lon: float, cell_size_deg: float) -> CellIndex:
        """Integer (row, column) of the cell holding the point, column wrapped."""
        i = math.floor(lat / cell_size_deg)
        j = math.floor(lon / cell_size_deg)
        return (i, StationGrid.wrap_column(j, cell_size_deg))

    @staticmethod
    def wrap_column(j: int, cell_size_deg: float) -> int:
        """Normalises a longitude cell so its west edge lies in [-180, 180)."""
        lon_cells = max(1, round(360 / cell_size_deg))
        while j * cell_size_deg >= 180:
            j -= lon_cells
        while j * cell_size_deg < -180:
            j += lon_cells
        return j

    def _index(self, lat: float, lon: float) -> CellIndex:
        return self.cell_index(lat, lon, self.cell_size_deg)

    def _wrap(self, j: int) -> int:
        return self.wrap_column(j, self.cell_size_deg)

    def _lon_reach(self, lat: float, radius_km: float, radius_deg: float) -> int:
        full_circle = self._lon_cells // 2 + 1
        edge_lat = min(90.0, abs(lat) + radius_deg)
        cos_edge = math.cos(math.radians(edge_lat))
        half_angle = math.sin(radius_km / (2 * GeoConstants.EARTH_RADIUS_KM))
        if cos_edge <= half_angle:
            return full_circle
        span_deg = math.degrees(2 * math.asin(half_angle / cos_edge))
        return min(full_circle, math.ceil(span_deg / self.cell_size_deg))
