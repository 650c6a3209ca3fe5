# skygap/constellation/data_models.py
"""
Defines the data structures produced by the constellation retrieval layer.
`Position` is the canonical sample type used by the trajectory and coverage
modules; it is only ever built from validated raw samples.
"""
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Tuple, Any


@dataclass(frozen=True)
class Position:
    """A single validated balloon observation."""
    latitude: float
    longitude: float
    altitude: float
    hour: int
    timestamp: float

    @property
    def key(self) -> Tuple[float, float, int]:
        """Identity used for consumption tracking during reconstruction."""
        return (self.latitude, self.longitude, self.hour)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FetchError:
    """One failed hourly request."""
    hour: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"hour": f"{self.hour:02d}", "error": self.reason}


@dataclass
class ConstellationSnapshot:
    """Everything retrieved for one 24 hour window, including the failures."""
    positions_by_hour: Dict[int, List[Position]] = field(default_factory=dict)
    errors: List[FetchError] = field(default_factory=list)
    success_count: int = 0
    total_requests: int = 24

    @property
    def positions(self) -> List[Position]:
        """All positions flattened in ascending hour order."""
        flat = []
        for hour in sorted(self.positions_by_hour):
            flat.extend(self.positions_by_hour[hour])
        return flat

    @property
    def failed_count(self) -> int:
        return self.total_requests - self.success_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "balloons": [p.to_dict() for p in self.positions],
            "hourlyData": {
                f"{hour:02d}": [p.to_dict() for p in positions]
                for hour, positions in sorted(self.positions_by_hour.items())
            },
            "errors": [e.to_dict() for e in sorted(self.errors, key=lambda e: e.hour)],
            "successCount": self.success_count,
            "totalRequests": self.total_requests,
        }
