"""Internal constants shared across the library."""

BASE_URL = "https://omi.zonarsystems.net"
INTERFACE_PATH = "/interface.php"
USER_AGENT = "pyzonar"

# Query parameters for the "current position of every asset" report.
SHOWPOSITION_PARAMS: dict[str, str] = {
    "action": "showposition",
    "operation": "current",
    "format": "xml",
}
DEFAULT_LOGVERS = "3.2"

# Root / member element names of the showposition XML document.
CURRENT_LOCATIONS_TAG = "currentlocations"
ASSET_TAG = "asset"
ERROR_TAG = "error"

# Threshold to distinguish seconds from milliseconds.
MS_THRESHOLD = 1_000_000_000_000
