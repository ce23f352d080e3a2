from __future__ import annotations

from dataclasses import dataclass

import pytest

from pyzonar.client import ZonarClient
from pyzonar.config import ZonarConfig

TWO_BUS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<currentlocations>
  <asset id="5001" fleet="101" type="Standard">
    <long>20.0</long>
    <lat>10.0</lat>
    <heading>90</heading>
    <speed unit="Mile/Hour">5</speed>
    <power>on</power>
    <time>1700000000</time>
  </asset>
  <asset id="5002" fleet="102" type="Standard">
    <long>21.5</long>
    <lat>11.25</lat>
    <speed unit="Mile/Hour">0</speed>
    <time>1700000100</time>
  </asset>
</currentlocations>
"""

ERROR_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<error>
  <code>3</code>
  <message>Invalid username or password</message>
</error>
"""

EMPTY_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<currentlocations></currentlocations>
"""


@dataclass
class FakeFeedTransport:
    """Transport double returning canned report text."""

    text: str = TWO_BUS_FEED
    error: Exception | None = None
    calls: int = 0

    async def fetch_current_positions(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


def make_config(**overrides: object) -> ZonarConfig:
    values: dict[str, object] = {"customer": "acme1234", "username": "api-user", "password": "secret-pw"}
    values.update(overrides)
    return ZonarConfig(**values)  # type: ignore[arg-type]


@pytest.fixture
def fake_transport() -> FakeFeedTransport:
    return FakeFeedTransport()


@pytest.fixture
def client(fake_transport: FakeFeedTransport) -> ZonarClient:
    return ZonarClient(make_config(), transport=fake_transport)
