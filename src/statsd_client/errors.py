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

"""Base exception hierarchy for :mod:`statsd_client`."""

from __future__ import annotations


class StatsdError(Exception):
    """Base class for all statsd_client exceptions.

    Catching this class handles every library-specific failure while letting
    standard Python exceptions (for example resolver ``OSError`` raised with
    ``rethrow_on_error=True``) propagate normally.

    Example::

        try:
            await client.log_count("jobs.completed")
        except StatsdError as e:
            logger.error("Metric not sent: %s", e)

    Note:
        Subclasses also inherit from a builtin exception type so callers can
        use the more familiar handler when they prefer.
    """


class InvalidMetricError(StatsdError, ValueError):
    """Raised when a metric is rejected before it reaches the wire.

    Causes:

    - Empty or missing metric name
    - Negative numeric value (counts, timings, gauges, sets, raw metrics,
      numeric calendargram values)

    Nothing is transmitted when this error is raised.

    Example::

        try:
            await client.log_timing("db.query", elapsed_ms)
        except InvalidMetricError:
            pass  # clock went backwards; drop the sample
    """


class ChannelSendError(StatsdError, ConnectionError):
    """Raised when a stream channel cannot deliver a line.

    Only the TCP channel raises this, once its retry policy is exhausted or
    when retrying is disabled. The final transport error is available as
    ``__cause__``. Datagram channels never raise it: UDP delivery is
    best-effort and failures are logged instead.
    """


__all__ = [
    "ChannelSendError",
    "InvalidMetricError",
    "StatsdError",
]
