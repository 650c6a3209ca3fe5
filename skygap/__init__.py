"""
SkyGap - Balloon constellation coverage analysis

Compares hourly balloon positions against the ground weather station network
and reconstructs balloon paths from unlabeled snapshots.
"""

__version__ = "0.1.0"
