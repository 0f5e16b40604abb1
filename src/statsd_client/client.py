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

"""Statsd client facade."""

from __future__ import annotations

import math
from types import TracebackType
from typing import Self

from .channels import (
    NullOutputChannel,
    OutputChannel,
    TcpOutputChannel,
    UdpOutputChannel,
)
from .config import ConnectionType, StatsdConfig
from .errors import InvalidMetricError
from .logging import StructuredLogger, get_logger
from .metrics import MetricType, format_metric

logger: StructuredLogger = get_logger(__name__, context={"component": "client"})

type Number = int | float


class StatsdClient:
    """Validate, format and send metrics to a statsd server.

    The output channel is chosen once, from ``config``, when the client is
    constructed. Construction never raises for an unreachable or malformed
    host unless ``config.rethrow_on_error`` is set: the failure is logged and
    the client falls back to :class:`NullOutputChannel`, dropping every
    metric.

    Every ``log_*`` coroutine validates its arguments, formats exactly one
    line and awaits the channel. Invalid arguments raise
    :class:`InvalidMetricError` before anything is sent. Any numeric value
    below zero, NaN, infinite or boolean is invalid, whatever the metric
    kind, as is a line break in a name, string value or suffix.

    Args:
        config: Connection and naming settings. Defaults to UDP on
            ``localhost:8125``.
        output_channel: Channel to use instead of the one ``config`` selects.

    Example::

        config = StatsdConfig(host="statsd.internal", prefix="api", postfix="web-1")
        async with StatsdClient(config) as statsd:
            await statsd.log_count("requests")  # api.requests.web-1:1|c
            await statsd.log_timing("db.query", 12)
    """

    def __init__(
        self,
        config: StatsdConfig | None = None,
        *,
        output_channel: OutputChannel | None = None,
    ) -> None:
        super().__init__()
        self._config = config if config is not None else StatsdConfig()
        self._channel: OutputChannel = (
            output_channel
            if output_channel is not None
            else _create_channel(self._config)
        )

    @property
    def config(self) -> StatsdConfig:
        """Settings this client was built from."""
        return self._config

    @property
    def output_channel(self) -> OutputChannel:
        """Channel every metric line is handed to."""
        return self._channel

    @property
    def prefix(self) -> str:
        """Normalised name prefix (no trailing ``.``)."""
        return self._config.prefix or ""

    @property
    def postfix(self) -> str:
        """Normalised name postfix (leading ``.`` when non-empty)."""
        return self._config.postfix or ""

    async def log_count(self, name: str, count: int = 1) -> None:
        """Log a counter increment.

        Args:
            name: Metric name.
            count: Amount to add; defaults to 1.

        Raises:
            InvalidMetricError: ``name`` is empty or ``count`` is negative.
        """
        await self._send_numeric(MetricType.COUNT, name, count)

    async def log_timing(self, name: str, milliseconds: Number) -> None:
        """Log a duration in milliseconds.

        Raises:
            InvalidMetricError: ``name`` is empty or ``milliseconds`` is negative.
        """
        await self._send_numeric(MetricType.TIMING, name, milliseconds)

    async def log_gauge(self, name: str, value: Number) -> None:
        """Log a point-in-time value.

        Raises:
            InvalidMetricError: ``name`` is empty or ``value`` is negative.
        """
        await self._send_numeric(MetricType.GAUGE, name, value)

    async def log_set(self, name: str, value: Number) -> None:
        """Log a value into a set; the server counts distinct values.

        Raises:
            InvalidMetricError: ``name`` is empty or ``value`` is negative.
        """
        await self._send_numeric(MetricType.SET, name, value)

    async def log_raw(self, name: str, value: Number, epoch: int | None = None) -> None:
        """Log a metric the server stores without aggregation.

        Args:
            name: Metric name.
            value: Metric value.
            epoch: Timestamp appended verbatim. Leave unset to let the server
                assign one.

        Raises:
            InvalidMetricError: ``name`` is empty or ``value`` is negative.
        """
        await self._send_numeric(MetricType.RAW, name, value, suffix=epoch)

    async def log_calendargram(
        self, name: str, value: str | Number, period: str
    ) -> None:
        """Log a value counted once per calendar period.

        Args:
            name: Metric namespace.
            value: The unique value to count. Strings are sent as-is.
            period: Period tag, passed through unchecked. statsd.net accepts
                ``h``, ``d``, ``dow``, ``w`` and ``m``.

        Raises:
            InvalidMetricError: ``name`` is empty or a numeric ``value`` is
                negative.
        """
        if isinstance(value, str):
            await self._send(MetricType.CALENDARGRAM, name, value, suffix=period)
        else:
            await self._send_numeric(
                MetricType.CALENDARGRAM, name, value, suffix=period
            )

    async def close(self) -> None:
        """Release the output channel."""
        await self._channel.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    async def _send_numeric(
        self,
        metric_type: MetricType,
        name: str,
        value: Number,
        *,
        suffix: object | None = None,
    ) -> None:
        _require_name(name)
        # bool is an int subclass; NaN slips past ordering checks.
        if isinstance(value, bool) or not math.isfinite(value) or value < 0:
            raise InvalidMetricError(
                f"{metric_type.name.lower()} value for {name!r} must be a "
                f"finite non-negative number, got {value!r}"
            )
        await self._send(metric_type, name, value, suffix=suffix)

    async def _send(
        self,
        metric_type: MetricType,
        name: str,
        value: object,
        *,
        suffix: object | None = None,
    ) -> None:
        _require_name(name)
        if isinstance(value, str):
            _require_single_line("value", value)
        if suffix is not None:
            _require_single_line("suffix", str(suffix))
        line = format_metric(
            metric_type,
            name,
            value=value,
            prefix=self.prefix,
            name_postfix=self.postfix,
            suffix=suffix,
        )
        await self._channel.send(line)

    def __repr__(self) -> str:
        return f"StatsdClient(channel={self._channel!r}, prefix={self.prefix!r})"


def _require_name(name: str | None) -> None:
    if not name:
        raise InvalidMetricError("Metric name must be a non-empty string.")
    _require_single_line("name", name)


def _require_single_line(field: str, text: str) -> None:
    if "\n" in text or "\r" in text:
        raise InvalidMetricError(
            f"Metric {field} must not contain line breaks: {text!r}"
        )


def _create_channel(config: StatsdConfig) -> OutputChannel:
    """Build the channel ``config`` asks for, falling back to a null channel."""
    if not config.host:
        logger.warning(
            "Statsd client configured with an empty host; metrics will be dropped",
            event="statsd.channel.empty_host",
            context={"port": config.port},
        )
        return NullOutputChannel()

    try:
        if config.connection_type is ConnectionType.TCP:
            return TcpOutputChannel(
                config.host,
                config.port,
                retry_on_disconnect=config.retry_on_disconnect,
                retry_attempts=config.retry_attempts,
                timeout=config.timeout,
            )
        return UdpOutputChannel(config.host, config.port)
    except (OSError, UnicodeError) as error:
        if config.rethrow_on_error:
            raise
        logger.error(
            "Could not initialise the statsd channel; falling back to NullOutputChannel",
            event="statsd.channel.fallback",
            context={
                "host": config.host,
                "port": config.port,
                "connection_type": config.connection_type,
                "error": repr(error),
            },
        )
        return NullOutputChannel()


__all__ = ["StatsdClient"]
