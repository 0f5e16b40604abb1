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

"""Statsd line formatting."""

from __future__ import annotations

from ._types import MetricType


def format_metric(
    metric_type: MetricType,
    name: str,
    *,
    value: object,
    prefix: str | None = None,
    name_postfix: str | None = None,
    suffix: object | None = None,
) -> str:
    """Render one metric as a statsd protocol line.

    The result has the shape ``[prefix.]name[name_postfix]:value|tag[|suffix]``.

    Args:
        metric_type: Metric kind; supplies the type tag.
        name: Metric name, ``.``-delimited.
        value: Metric value, rendered with ``str``.
        prefix: Namespace prepended with a ``.`` separator. Omitted when empty.
        name_postfix: Appended to the name verbatim. Callers normalise it to
            start with ``.``.
        suffix: Extra field appended as ``|suffix`` when non-empty (raw epoch,
            calendargram period).

    Returns:
        The formatted line, without a trailing newline.

    Example::

        >>> format_metric(MetricType.COUNT, "jobs", value=1, prefix="app")
        'app.jobs:1|c'
    """
    parts: list[str] = []
    if prefix:
        parts.append(prefix)
        parts.append(".")
    parts.append(name)
    if name_postfix:
        parts.append(name_postfix)
    parts.append(":")
    parts.append(str(value))
    parts.append("|")
    parts.append(metric_type.tag)

    suffix_text = "" if suffix is None else str(suffix)
    if suffix_text:
        parts.append("|")
        parts.append(suffix_text)
    return "".join(parts)


__all__ = ["format_metric"]
