"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_GEOFENCE_RADIUS_METERS = 100
DEFAULT_LATE_GRACE_MINUTES = 0

ON_TIME_ATTENDANCE_POINTS = 20
LATE_ATTENDANCE_POINTS = 10

CHECK_IN_PATH = "/attendance/check-in"
