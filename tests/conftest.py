# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from collections.abc import Generator

import pytest

from statsd_client import StatsdClient, StatsdConfig
from tests.helpers import RecordingChannel, TCPStatsdServer, UDPStatsdServer


@pytest.fixture
def channel() -> RecordingChannel:
    """Return a channel that records every line it is sent."""
    return RecordingChannel()


@pytest.fixture
def client(channel: RecordingChannel) -> StatsdClient:
    """Return a client with no prefix or postfix wired to ``channel``."""
    return StatsdClient(StatsdConfig(host="localhost", port=12000), output_channel=channel)


@pytest.fixture
def udp_server() -> Generator[UDPStatsdServer]:
    """Provide a running loopback UDP statsd server."""
    server = UDPStatsdServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def tcp_server() -> Generator[TCPStatsdServer]:
    """Provide a running loopback TCP statsd server."""
    server = TCPStatsdServer()
    server.start()
    yield server
    server.stop()
