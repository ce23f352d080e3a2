"""pyzonar - Tool-calling bridge for the Zonar vehicle position feed."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyzonar")
except PackageNotFoundError:
    __version__ = "0+local"
from pyzonar.client import ZonarClient
from pyzonar.config import MalformedRecordPolicy, ZonarConfig
from pyzonar.dispatcher import ToolDispatcher, ToolResult
from pyzonar.exceptions import (
    ZonarConfigError,
    ZonarEmptyFeedError,
    ZonarError,
    ZonarInvalidArgumentsError,
    ZonarNotFoundError,
    ZonarParseError,
    ZonarTransportError,
    ZonarUnknownToolError,
    ZonarUpstreamError,
)
from pyzonar.ingestion.feed import normalize_feed
from pyzonar.lookup import IdType, find_exact, search_substring
from pyzonar.models import Asset, FeedSnapshot
from pyzonar.tools import TOOLS, ToolDescriptor

__all__ = [
    "__version__",
    "TOOLS",
    "Asset",
    "FeedSnapshot",
    "IdType",
    "MalformedRecordPolicy",
    "ToolDescriptor",
    "ToolDispatcher",
    "ToolResult",
    "ZonarClient",
    "ZonarConfig",
    "ZonarConfigError",
    "ZonarEmptyFeedError",
    "ZonarError",
    "ZonarInvalidArgumentsError",
    "ZonarNotFoundError",
    "ZonarParseError",
    "ZonarTransportError",
    "ZonarUnknownToolError",
    "ZonarUpstreamError",
    "find_exact",
    "normalize_feed",
    "search_substring",
]
