from .coordinates import CoordinateCalculations

__all__ = ["CoordinateCalculations"]
