"""
SkyGap - Trajectory Module
Reconstructs balloon paths from unlabeled hourly positions.
"""

from .core import TrajectoryReconstructor, reconstruct_paths
from .data_models import Path, ConsumedSet, TieBreak

__all__ = [
    "TrajectoryReconstructor",
    "reconstruct_paths",
    "Path",
    "ConsumedSet",
    "TieBreak"
]
