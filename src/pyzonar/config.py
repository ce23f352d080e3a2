"""Client configuration for pyzonar."""

from __future__ import annotations

import dataclasses
import enum
import os
from typing import Any

from pyzonar._constants import BASE_URL, DEFAULT_LOGVERS
from pyzonar.exceptions import ZonarConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


class MalformedRecordPolicy(enum.StrEnum):
    """What the normalizer does with an asset entry missing required fields."""

    EXCLUDE = "exclude"
    """Drop the entry and keep every other asset."""
    STRICT = "strict"
    """Fail the whole parse with :class:`~pyzonar.exceptions.ZonarParseError`."""


@dataclasses.dataclass(frozen=True)
class ZonarConfig:
    """Client configuration.

    Parameters
    ----------
    customer : str
        Zonar customer (account) code.
    username : str
        Zonar API user name.
    password : str
        Zonar API password. Sent as a query parameter, as the
        ``interface.php`` API requires.
    base_url : str
        API base URL. Defaults to the OMI endpoint.
    logvers : str
        Report layout version requested from ``showposition``.
    time_zone : str or None
        IANA time zone used to render readable timestamps. ``None``
        uses the time zone of the running process.
    request_timeout : float or None
        Total seconds allowed for one feed fetch. ``None`` keeps the
        aiohttp session default.
    strict_tools : bool
        Reject calls to unregistered tools with HTTP 400 instead of the
        ``{"ok": true}`` acknowledgment.
    malformed_policy : MalformedRecordPolicy
        Exclude malformed asset entries (default) or fail the parse.
    """

    customer: str
    username: str
    password: str
    base_url: str = BASE_URL
    logvers: str = DEFAULT_LOGVERS
    time_zone: str | None = None
    request_timeout: float | None = None
    strict_tools: bool = False
    malformed_policy: MalformedRecordPolicy = MalformedRecordPolicy.EXCLUDE

    def __post_init__(self) -> None:
        try:
            policy = MalformedRecordPolicy(self.malformed_policy)
        except ValueError as exc:
            raise ZonarConfigError(f"malformed_policy must be 'exclude' or 'strict': {self.malformed_policy!r}") from exc
        object.__setattr__(self, "malformed_policy", policy)

    @classmethod
    def from_env(cls, **overrides: Any) -> ZonarConfig:
        """Create configuration from environment variables.

        Reads ``ZONAR_CUSTOMER``, ``ZONAR_USERNAME``, ``ZONAR_PASSWORD``
        and optional ``ZONAR_*`` variables. Explicit keyword arguments
        override environment values.

        Raises
        ------
        ZonarConfigError
            If a credential is missing or a numeric/enum value is invalid.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ZONAR_CUSTOMER": "customer",
            "ZONAR_USERNAME": "username",
            "ZONAR_PASSWORD": "password",
            "ZONAR_BASE_URL": "base_url",
            "ZONAR_LOGVERS": "logvers",
            "ZONAR_TIME_ZONE": "time_zone",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("ZONAR_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise ZonarConfigError(f"ZONAR_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "strict_tools" not in overrides:
            config_kwargs["strict_tools"] = _env_bool(env.get("ZONAR_STRICT_TOOLS"), False)

        policy_env = env.get("ZONAR_MALFORMED_POLICY")
        if policy_env is not None and "malformed_policy" not in overrides:
            try:
                config_kwargs["malformed_policy"] = MalformedRecordPolicy(policy_env.strip().lower())
            except ValueError as exc:
                raise ZonarConfigError(f"ZONAR_MALFORMED_POLICY must be 'exclude' or 'strict': {policy_env!r}") from exc

        config_kwargs.update(overrides)

        missing = [name for name in ("customer", "username", "password") if not config_kwargs.get(name)]
        if missing:
            raise ZonarConfigError(f"Missing Zonar credentials: {', '.join(missing)}")

        return cls(**config_kwargs)
