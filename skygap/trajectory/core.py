# skygap/trajectory/core.py
"""
Greedy trajectory reconstruction for anonymous hourly balloon positions.

Every position in the earliest available hour seeds a path. Each seed then
walks forward hour by hour, claiming the nearest unclaimed position within
the travel bound. This is a best-effort heuristic, not identity tracking:
two balloons that pass close to each other can swap paths.

Each hour's candidates are held as coordinate arrays so one walk step is a
single vectorised distance call. Claims are tracked per hour as a boolean
mask indexed by candidate position.
"""
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .data_models import ConsumedSet, Path, TieBreak
from skygap.constellation.data_models import Position
from skygap.constants.geodesy import GeoConstants
from skygap.utils.coordinates import CoordinateCalculations

logger = logging.getLogger(__name__)


class HourColumn:
    """The positions of one hour, with their coordinates as numpy arrays."""

    def __init__(self, positions: List[Position]):
        self.positions = positions
        self.lats = np.array([p.latitude for p in positions], dtype=float)
        self.lons = np.array([p.longitude for p in positions], dtype=float)

    def __len__(self) -> int:
        return len(self.positions)

    def same_key_mask(self, index: int) -> np.ndarray:
        """Marks every position in this hour sharing the key of `index`."""
        return (self.lats == self.lats[index]) & (self.lons == self.lons[index])

    def consumed_mask(self, consumed: ConsumedSet) -> np.ndarray:
        return np.array([p in consumed for p in self.positions], dtype=bool)


class TrajectoryReconstructor:
    """Links per-hour positions into paths by nearest-candidate search."""

    def __init__(self, max_travel_km: float = GeoConstants.MAX_HOURLY_TRAVEL_KM,
                 tie_break: TieBreak = TieBreak.ENCOUNTER,
                 hours_per_day: int = GeoConstants.HOURS_PER_DAY):
        self.max_travel_km = max_travel_km
        self.tie_break = tie_break
        self.hours_per_day = hours_per_day

    def reconstruct(self, positions: Iterable[Position]) -> List[Path]:
        """Returns one path per position in the earliest hour that has data."""
        columns = self._columns(self._group_by_hour(positions))
        if not columns:
            return []

        start_hour = min(columns)
        taken = {hour: np.zeros(len(column), dtype=bool) for hour, column in columns.items()}
        paths = []
        for seed in columns[start_hour].positions:
            chain, claims = self._walk(seed, columns, taken)
            for hour, index in claims:
                taken[hour] |= columns[hour].same_key_mask(index)
            paths.append(Path(tuple(chain)))

        linked = sum(len(p) for p in paths)
        logger.info(f"Reconstructed {len(paths)} paths from hour {start_hour:02d} ({linked} positions linked)")
        return paths

    def walk(self, seed: Position, by_hour: Dict[int, List[Position]],
             consumed: ConsumedSet) -> Tuple[Path, ConsumedSet]:
        """
        Extends a single seed through the later hours.

        Hours without an acceptable candidate are skipped and the walk keeps
        the last accepted position as its anchor. Returns the finished path
        together with the consumed set updated by this walk.
        """
        columns = self._columns(by_hour)
        taken = {hour: column.consumed_mask(consumed) for hour, column in columns.items()}
        chain, claims = self._walk(seed, columns, taken)
        claimed = [columns[hour].positions[index] for hour, index in claims]
        return Path(tuple(chain)), consumed.with_positions(claimed)

    def _walk(self, seed: Position, columns: Dict[int, HourColumn],
              taken: Dict[int, np.ndarray]) -> Tuple[List[Position], List[Tuple[int, int]]]:
        chain = [seed]
        claims = []
        anchor = seed
        for hour in range(seed.hour + 1, self.hours_per_day):
            column = columns.get(hour)
            if column is None:
                continue
            index = self._select(anchor, column, taken[hour])
            if index is None:
                continue
            anchor = column.positions[index]
            chain.append(anchor)
            claims.append((hour, index))
        return chain, claims

    def _select(self, anchor: Position, column: HourColumn, taken: np.ndarray) -> Optional[int]:
        """Index of the best unclaimed candidate strictly inside the travel bound."""
        distances = np.asarray(CoordinateCalculations.distance_km(
            anchor.latitude, anchor.longitude, column.lats, column.lons
        ), dtype=float)
        distances[taken | (distances >= self.max_travel_km)] = np.inf

        if self.tie_break is TieBreak.COORDINATE:
            # lexsort orders by its last key first.
            index = int(np.lexsort((column.lats, column.lons, distances))[0])
        else:
            # argmin returns the first minimum, keeping input order on ties.
            index = int(np.argmin(distances))
        if not np.isfinite(distances[index]):
            return None
        return index

    @staticmethod
    def _group_by_hour(positions: Iterable[Position]) -> Dict[int, List[Position]]:
        by_hour = defaultdict(list)
        for position in positions:
            by_hour[position.hour].append(position)
        return dict(by_hour)

    @staticmethod
    def _columns(by_hour: Dict[int, List[Position]]) -> Dict[int, HourColumn]:
        return {hour: HourColumn(list(ps)) for hour, ps in by_hour.items() if ps}


def reconstruct_paths(positions: Iterable[Position], **kwargs) -> List[Path]:
    """Public-facing shortcut for a one-off reconstruction."""
    return TrajectoryReconstructor(**kwargs).reconstruct(positions)
