# skygap/coverage/core.py
"""
The core orchestrator for the coverage analysis. It builds the station grid
once per run, classifies every balloon position as land or ocean, and
decides for each position whether any weather station lies within the gap
threshold.
"""
import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from .classifier import BoundingBoxClassifier, SurfaceClassifier
from .data_models import AnalysisConfig, CoverageReport, CoverageStatistics, DataQuality, SurfaceType
from .spatial_index import StationGrid
from skygap.constants.geodesy import GeoConstants
from skygap.constellation.data_models import ConstellationSnapshot, Position
from skygap.stations.data_models import ReferenceStation
from skygap.trajectory.core import TrajectoryReconstructor
from skygap.utils.coordinates import CoordinateCalculations


def _percentage(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(part / total * 100, 1)


class CoverageAnalyzer:
    """Main class to measure where balloons observe beyond the station network."""

    def __init__(self, config: Optional[AnalysisConfig] = None,
                 classifier: Optional[SurfaceClassifier] = None):
        self.config = config or AnalysisConfig()
        self.classifier = classifier or BoundingBoxClassifier()
        self.reconstructor = TrajectoryReconstructor(
            max_travel_km=self.config.max_hourly_travel_km,
            tie_break=self.config.tie_break
        )
        logging.info("CoverageAnalyzer initialized and all components linked.")

    def build_index(self, stations: Sequence[ReferenceStation]) -> StationGrid:
        logging.info(f"Building spatial index for {len(stations):,} stations...")
        start = time.time()
        index = StationGrid.build(stations, self.config.cell_size_deg, self.config.scale_longitude)
        logging.info(f"Spatial index built in {(time.time() - start) * 1000:.0f}ms ({index.cell_count} cells)")
        return index

    def is_gap_coverage(self, position: Position, index: StationGrid) -> bool:
        """True when no station lies within the gap threshold of the position."""
        threshold = self.config.gap_threshold_km
        candidates = index.candidates_within_radius(position.latitude, position.longitude, threshold)
        if not candidates:
            return True
        nearest = CoordinateCalculations.nearest_distance_km(
            position.latitude, position.longitude,
            [s.latitude for s in candidates], [s.longitude for s in candidates]
        )
        return nearest > threshold

    def analyze(self, positions: Sequence[Position], index: StationGrid,
                path_count: int = 0, data_quality: Optional[DataQuality] = None) -> CoverageStatistics:
        """Computes the land/ocean split and gap coverage for a set of positions."""
        positions = list(positions)
        total = len(positions)

        over_ocean = sum(
            1 for p in positions
            if self.classifier.classify(p.latitude, p.longitude) is SurfaceType.OCEAN
        )
        over_land = total - over_ocean

        logging.info(f"Analyzing unique coverage for {total:,} balloon positions...")
        start = time.time()
        gap_flags = self._gap_flags(positions, index)
        gap_count = sum(gap_flags)
        logging.info(f"Coverage analysis completed in {(time.time() - start) * 1000:.0f}ms")

        return CoverageStatistics(
            total_positions=total,
            path_count=path_count,
            over_ocean=over_ocean,
            over_land=over_land,
            ocean_percentage=_percentage(over_ocean, total),
            land_percentage=_percentage(over_land, total),
            gap_coverage_positions=gap_count,
            gap_coverage_percentage=_percentage(gap_count, total),
            station_count=index.station_count,
            data_quality=data_quality or self._observed_quality(positions)
        )

    def run(self, snapshot: ConstellationSnapshot, stations: Sequence[ReferenceStation]) -> CoverageReport:
        """The main operational method: reconstruct paths, index stations, analyze."""
        positions = snapshot.positions
        paths = self.reconstructor.reconstruct(positions)
        index = self.build_index(stations)
        quality = DataQuality(
            hours_available=snapshot.success_count,
            hours_missing=snapshot.total_requests - snapshot.success_count,
            errors=list(snapshot.errors)
        )
        statistics = self.analyze(positions, index, path_count=len(paths), data_quality=quality)
        if snapshot.errors:
            logging.warning(f"Analysis ran on partial data: {len(snapshot.errors)} hourly fetches failed.")
        return CoverageReport(statistics=statistics, paths=paths, errors=list(snapshot.errors))

    def _gap_flags(self, positions: List[Position], index: StationGrid) -> List[bool]:
        if self.config.max_workers > 1 and len(positions) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                return list(pool.map(lambda p: self.is_gap_coverage(p, index), positions))
        return [self.is_gap_coverage(p, index) for p in positions]

    @staticmethod
    def _observed_quality(positions: Iterable[Position]) -> DataQuality:
        hours = {p.hour for p in positions}
        return DataQuality(
            hours_available=len(hours),
            hours_missing=GeoConstants.HOURS_PER_DAY - len(hours)
        )
