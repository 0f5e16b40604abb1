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

"""Asyncio client for statsd-compatible metric servers.

Quick Start::

    from statsd_client import ConnectionType, StatsdClient, StatsdConfig

    config = StatsdConfig(
        host="localhost",
        port=8125,
        prefix="some.datacenter",
        postfix="host",
    )

    async with StatsdClient(config) as statsd:
        # some.datacenter.some.stat.host:1|c
        await statsd.log_count("some.stat")
        await statsd.log_timing("db.query", 42)
        await statsd.log_gauge("queue.depth", 7)
        await statsd.log_set("users.unique", 1234)
        await statsd.log_raw("my.raw.stat", 12934, epoch=1700000000)
        await statsd.log_calendargram("users.active", "user-17", "d")

TCP with reconnect::

    config = StatsdConfig(
        host="statsd.internal",
        connection_type=ConnectionType.TCP,
        retry_on_disconnect=True,
        retry_attempts=3,
    )

Configuration from the environment::

    statsd = StatsdClient(StatsdConfig.from_env())

A client that cannot resolve its host logs an error and drops metrics
instead of raising, unless ``rethrow_on_error=True``.
"""

from __future__ import annotations

from .channels import (
    NullOutputChannel,
    OutputChannel,
    TcpOutputChannel,
    UdpOutputChannel,
)
from .client import StatsdClient
from .config import ConnectionType, StatsdConfig
from .errors import ChannelSendError, InvalidMetricError, StatsdError
from .metrics import MetricType, format_metric

__all__ = [
    "ChannelSendError",
    "ConnectionType",
    "InvalidMetricError",
    "MetricType",
    "NullOutputChannel",
    "OutputChannel",
    "StatsdClient",
    "StatsdConfig",
    "StatsdError",
    "TcpOutputChannel",
    "UdpOutputChannel",
    "format_metric",
]
