"""Store defaults and the domain limits enforced by the services."""

DEFAULT_DB_PORT = 3306
DEFAULT_DB_NAME = "PilgrimSystem"

MIN_PILGRIM_AGE = 0
MAX_PILGRIM_AGE = 130
MIN_ACCOMMODATION_CAPACITY = 1

TIME_FORMAT = "%H:%M"

# Seconds a unit of work waits for a pooled connection before the store counts as unavailable.
DEFAULT_POOL_WAIT_SECONDS = 30.0
