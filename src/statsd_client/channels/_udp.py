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

"""Datagram output channel."""

from __future__ import annotations

import socket

from ..logging import StructuredLogger, get_logger
from ._protocol import Address, resolve_endpoint

logger: StructuredLogger = get_logger(__name__, context={"component": "channel.udp"})


class UdpOutputChannel:
    """Send each metric line as one UDP datagram.

    The endpoint is resolved once, at construction, so a bad host surfaces
    immediately instead of on every send. Delivery is best-effort: send
    failures are logged and dropped.

    Args:
        host: Statsd server hostname or IP address.
        port: Statsd server port.

    Raises:
        OSError: ``host`` could not be resolved.
        UnicodeError: ``host`` is not a valid hostname.
    """

    def __init__(self, host: str, port: int) -> None:
        super().__init__()
        self._host = host
        self._port = port
        self._logger = logger.bind(host=host, port=port)
        self._socket: socket.socket | None
        self._socket, self._address = _open_socket(host, port)

    @property
    def address(self) -> Address:
        """Resolved ``(ip, port)`` datagrams are sent to."""
        return self._address

    async def send(self, line: str) -> None:
        """Send ``line`` as a single datagram; failures are logged, not raised."""
        sock = self._socket
        if sock is None:
            self._logger.warning(
                "Dropping metric sent on a closed UDP channel",
                event="statsd.udp.send_failed",
                context={"closed": True},
            )
            return
        try:
            _ = sock.sendto(line.encode("utf-8"), self._address)
        except OSError:
            self._logger.warning(
                "Failed to send metric to statsd",
                event="statsd.udp.send_failed",
                exc_info=True,
            )

    async def close(self) -> None:
        """Close the socket."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __repr__(self) -> str:
        return f"UdpOutputChannel(host={self._host!r}, port={self._port})"


def _open_socket(host: str, port: int) -> tuple[socket.socket, Address]:
    """Open a non-blocking datagram socket for the first usable address."""
    last_error: OSError | None = None
    for family, address in resolve_endpoint(host, port, socket.SOCK_DGRAM):
        try:
            sock = socket.socket(family, socket.SOCK_DGRAM)
        except OSError as error:
            # Address family unsupported here, e.g. IPv6 disabled.
            last_error = error
            continue
        sock.setblocking(False)
        return sock, address
    if last_error is None:
        raise socket.gaierror(f"No addresses found for {host}:{port}")
    raise last_error


__all__ = ["UdpOutputChannel"]
