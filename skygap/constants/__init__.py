from .geodesy import GeoConstants
from .sources import ConstellationConfig, StationSourceConstants

__all__ = ['GeoConstants', 'ConstellationConfig', 'StationSourceConstants']
