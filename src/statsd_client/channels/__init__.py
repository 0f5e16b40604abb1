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

"""Output channels that carry metric lines to a statsd server.

Channels
--------

- :class:`NullOutputChannel`: Discards everything; fallback when no
  transport could be configured.
- :class:`UdpOutputChannel`: One datagram per line, best-effort.
- :class:`TcpOutputChannel`: Persistent stream with reconnect-and-retry.

Custom channels only need to satisfy :class:`OutputChannel`::

    class RecordingChannel:
        def __init__(self) -> None:
            self.lines: list[str] = []

        async def send(self, line: str) -> None:
            self.lines.append(line)

        async def close(self) -> None:
            pass
"""

from __future__ import annotations

from ._null import NullOutputChannel
from ._protocol import Address, OutputChannel, resolve_endpoint
from ._tcp import TcpOutputChannel
from ._udp import UdpOutputChannel

__all__ = [
    "Address",
    "NullOutputChannel",
    "OutputChannel",
    "TcpOutputChannel",
    "UdpOutputChannel",
    "resolve_endpoint",
]
