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

"""Metric kinds and statsd line formatting.

Wire format::

    [prefix.]name[name_postfix]:value|type[|suffix]

Type tags
---------

- :attr:`MetricType.COUNT`: ``c``
- :attr:`MetricType.TIMING`: ``ms``
- :attr:`MetricType.GAUGE`: ``g``
- :attr:`MetricType.SET`: ``s``
- :attr:`MetricType.RAW`: ``r``
- :attr:`MetricType.CALENDARGRAM`: ``cg``
"""

from __future__ import annotations

from ._format import format_metric
from ._types import MetricType

__all__ = [
    "MetricType",
    "format_metric",
]
