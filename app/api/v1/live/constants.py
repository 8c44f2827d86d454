"""Constants for live listing routes."""

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 24

MISSING_CONFIG_ERROR = "missing_crak_config"
INTERNAL_ERROR = "internal_error"

TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})
