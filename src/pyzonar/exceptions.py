"""Custom exception hierarchy for pyzonar."""

from __future__ import annotations


class ZonarError(Exception):
    """Base exception for all pyzonar errors."""


class ZonarConfigError(ZonarError):
    """Invalid or missing configuration."""


class ZonarTransportError(ZonarError):
    """HTTP-level failure (network, DNS, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ZonarParseError(ZonarError):
    """Feed text could not be turned into a snapshot.

    Raised for XML that is not well formed, and for malformed asset
    entries when the strict record policy is active.
    """


class ZonarUpstreamError(ZonarError):
    """Zonar answered with its own ``<error>`` envelope."""

    def __init__(self, message: str, *, code: str = "") -> None:
        self.code = code
        super().__init__(message)


class ZonarEmptyFeedError(ZonarError):
    """The ``<currentlocations>`` container is absent or has no assets."""


class ZonarNotFoundError(ZonarError):
    """No asset matched the requested identifier."""

    def __init__(self, message: str, *, query: str = "", id_type: str = "fleet") -> None:
        self.query = query
        self.id_type = id_type
        super().__init__(message)


class ZonarUnknownToolError(ZonarError):
    """A tool call named a tool that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name!r}")


class ZonarInvalidArgumentsError(ZonarError):
    """Tool arguments did not match the tool's input schema."""
