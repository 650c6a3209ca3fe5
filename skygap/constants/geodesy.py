# skygap/constants/geodesy.py


class GeoConstants:
    """Shared geodesy and policy constants."""

    EARTH_RADIUS_KM = 6371.0
    # One degree of latitude at the equator; also used for longitude.
    KM_PER_DEGREE = 111.0

    HOURS_PER_DAY = 24
    SECONDS_PER_HOUR = 3600

    DEFAULT_CELL_SIZE_DEG = 5.0
    GAP_THRESHOLD_KM = 200.0
    # Generous bound on hourly drift at float altitude, not a speed limit.
    MAX_HOURLY_TRAVEL_KM = 500.0
