"""
SkyGap - Coverage Analysis Module
Finds where balloon observations fill gaps left by the ground station network.
"""

from .core import CoverageAnalyzer
from .classifier import BoundingBoxClassifier, SurfaceClassifier, LandRegion, is_over_ocean
from .data_models import AnalysisConfig, CoverageStatistics, CoverageReport, DataQuality, SurfaceType
from .spatial_index import StationGrid

__all__ = [
    "CoverageAnalyzer",
    "BoundingBoxClassifier",
    "SurfaceClassifier",
    "LandRegion",
    "is_over_ocean",
    "AnalysisConfig",
    "CoverageStatistics",
    "CoverageReport",
    "DataQuality",
    "SurfaceType",
    "StationGrid"
]
