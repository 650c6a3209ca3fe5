# skygap/coverage/classifier.py
"""
Land/ocean classification. The analyzer only depends on the SurfaceClassifier
protocol, so a polygon or raster classifier can replace the bounding boxes.
"""
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

from .data_models import SurfaceType


@dataclass(frozen=True)
class LandRegion:
    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.lat_min <= lat <= self.lat_max and self.lon_min <= lon <= self.lon_max


# Coarse continental boxes. Islands, Antarctica and anything else outside
# them read as ocean.
CONTINENTAL_REGIONS = (
    LandRegion('north_america', 15, 70, -170, -50),
    LandRegion('south_america', -55, 15, -82, -35),
    LandRegion('europe', 35, 71, -10, 40),
    LandRegion('africa', -35, 37, -18, 52),
    LandRegion('asia', -10, 75, 40, 150),
    LandRegion('australia', -45, -10, 110, 155),
)


@runtime_checkable
class SurfaceClassifier(Protocol):
    def classify(self, lat: float, lon: float) -> SurfaceType:
        ...


class BoundingBoxClassifier:
    """Classifies a point as land when it falls in any continental box."""

    def __init__(self, regions: Sequence[LandRegion] = CONTINENTAL_REGIONS):
        self.regions = tuple(regions)

    def classify(self, lat: float, lon: float) -> SurfaceType:
        for region in self.regions:
            if region.contains(lat, lon):
                return SurfaceType.LAND
        return SurfaceType.OCEAN

    def is_over_ocean(self, lat: float, lon: float) -> bool:
        return self.classify(lat, lon) is SurfaceType.OCEAN


_DEFAULT_CLASSIFIER = BoundingBoxClassifier()


def is_over_ocean(lat: float, lon: float) -> bool:
    return _DEFAULT_CLASSIFIER.is_over_ocean(lat, lon)
