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

"""Metric kinds and their statsd wire tags."""

from __future__ import annotations

from enum import Enum


class MetricType(Enum):
    """Metric kinds understood by statsd-compatible servers.

    The enum value is the type tag written after the ``|`` on the wire.

    COUNT: Incrementable counter, summed per flush window.
    TIMING: Duration in milliseconds, aggregated into percentiles.
    GAUGE: Point-in-time value, last write wins.
    SET: Distinct values seen per flush window.
    RAW: Value stored without aggregation, optionally timestamped.
    CALENDARGRAM: Distinct values per calendar period (statsd.net extension).
    """

    COUNT = "c"
    TIMING = "ms"
    GAUGE = "g"
    SET = "s"
    RAW = "r"
    CALENDARGRAM = "cg"

    @property
    def tag(self) -> str:
        """Return the wire tag for this metric kind."""
        return self.value


__all__ = ["MetricType"]
