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

"""Output channel protocol and shared endpoint helpers."""

from __future__ import annotations

import socket
from typing import Protocol, runtime_checkable

type Address = tuple[str, int]


@runtime_checkable
class OutputChannel(Protocol):
    """Protocol for transmitting formatted statsd lines.

    One channel instance is shared by every call made through a client, so
    implementations must tolerate concurrent ``send`` coroutines.
    """

    async def send(self, line: str) -> None:
        """Transmit one metric line.

        Args:
            line: Formatted metric without a line terminator.
        """
        ...

    async def close(self) -> None:
        """Release the underlying transport. Safe to call more than once."""
        ...


def resolve_endpoint(
    host: str, port: int, socktype: socket.SocketKind
) -> list[tuple[socket.AddressFamily, Address]]:
    """Resolve ``host``/``port`` to candidate addresses, in resolver order.

    Raises:
        OSError: The resolver could not find the host (``socket.gaierror``).
        UnicodeError: ``host`` is not a valid IDNA name.
    """
    infos = socket.getaddrinfo(host, port, type=socktype)
    if not infos:  # pragma: no cover - getaddrinfo raises instead
        raise socket.gaierror(f"No addresses found for {host}:{port}")
    return [
        (family, (str(sockaddr[0]), int(sockaddr[1])))
        for family, _, _, _, sockaddr in infos
    ]


__all__ = ["Address", "OutputChannel", "resolve_endpoint"]
