# skygap/coverage/data_models.py
"""
Defines the configuration and result structures of the coverage analysis.
Statistics are immutable value objects; `to_dict` produces the camelCase
payload served by the HTTP layer.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any

from skygap.constants.geodesy import GeoConstants
from skygap.constellation.data_models import FetchError
from skygap.trajectory.data_models import Path, TieBreak


class SurfaceType(Enum):
    LAND = "land"
    OCEAN = "ocean"


@dataclass
class AnalysisConfig:
    """Configuration parameters for a coverage analysis run."""
    cell_size_deg: float = GeoConstants.DEFAULT_CELL_SIZE_DEG
    gap_threshold_km: float = GeoConstants.GAP_THRESHOLD_KM
    max_hourly_travel_km: float = GeoConstants.MAX_HOURLY_TRAVEL_KM
    scale_longitude: bool = False
    tie_break: TieBreak = TieBreak.ENCOUNTER
    max_workers: int = 1


@dataclass(frozen=True)
class DataQuality:
    """How much of the 24 hour window actually arrived."""
    hours_available: int = 0
    hours_missing: int = 0
    errors: List[FetchError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hoursAvailable": self.hours_available,
            "hoursMissing": self.hours_missing,
            "errorCount": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class CoverageStatistics:
    """The summary of one analysis run."""
    total_positions: int
    path_count: int
    over_ocean: int
    over_land: int
    ocean_percentage: float
    land_percentage: float
    gap_coverage_positions: int
    gap_coverage_percentage: float
    station_count: int
    data_quality: DataQuality = field(default_factory=DataQuality)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalBalloonPositions": self.total_positions,
            "uniqueBalloons": self.path_count,
            "overOcean": self.over_ocean,
            "overLand": self.over_land,
            "oceanPercentage": self.ocean_percentage,
            "landPercentage": self.land_percentage,
            "uniqueCoveragePositions": self.gap_coverage_positions,
            "uniqueCoveragePercentage": self.gap_coverage_percentage,
            "weatherStationCount": self.station_count,
            "dataQuality": self.data_quality.to_dict(),
        }


@dataclass
class CoverageReport:
    """The final output object containing statistics, paths and fetch errors."""
    statistics: CoverageStatistics
    paths: List[Path]
    errors: List[FetchError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statistics": self.statistics.to_dict(),
            "balloonData": [path.to_list() for path in self.paths],
            "errors": [e.to_dict() for e in self.errors],
        }
