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

"""Stream output channel with reconnect-and-retry."""

from __future__ import annotations

import asyncio
import contextlib
import socket

from ..errors import ChannelSendError
from ..logging import StructuredLogger, get_logger
from ._protocol import Address, resolve_endpoint

logger: StructuredLogger = get_logger(__name__, context={"component": "channel.tcp"})

_LINE_TERMINATOR = b"\n"


class TcpOutputChannel:
    """Write newline-terminated metric lines over a persistent TCP stream.

    The endpoint is resolved at construction; the connection itself is
    opened lazily by the first :meth:`send`. Connect and write run under one
    :class:`asyncio.Lock` per event loop, so lines from concurrent callers never
    interleave on the wire.

    When a write fails the connection is discarded. With
    ``retry_on_disconnect`` enabled the channel reconnects and resends up to
    ``retry_attempts`` more times before raising :class:`ChannelSendError`.

    Args:
        host: Statsd server hostname or IP address.
        port: Statsd server port.
        retry_on_disconnect: Reconnect and resend after a failed write.
        retry_attempts: Extra attempts after the first failure.
        timeout: Seconds allowed for each connect and each drain.

    Raises:
        OSError: ``host`` could not be resolved.
        UnicodeError: ``host`` is not a valid hostname.
        ValueError: ``retry_attempts`` is negative or ``timeout`` is not
            positive.
    """

    def __init__(  # noqa: PLR0913
        self,
        host: str,
        port: int,
        *,
        retry_on_disconnect: bool = True,
        retry_attempts: int = 3,
        timeout: float = 5.0,
    ) -> None:
        super().__init__()
        if retry_attempts < 0:
            raise ValueError("retry_attempts must be greater than or equal to 0")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._host = host
        self._port = port
        self._logger = logger.bind(host=host, port=port)
        self._retry_on_disconnect = retry_on_disconnect
        self._retry_attempts = retry_attempts
        self._timeout = timeout
        self._address = resolve_endpoint(host, port, socket.SOCK_STREAM)[0][1]
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def address(self) -> Address:
        """First ``(ip, port)`` the host resolves to."""
        return self._address

    @property
    def connected(self) -> bool:
        """Return ``True`` while a usable stream is open."""
        return self._writer is not None and not self._writer.is_closing()

    @property
    def max_attempts(self) -> int:
        """Total write attempts per line, including the first."""
        return 1 + (self._retry_attempts if self._retry_on_disconnect else 0)

    async def send(self, line: str) -> None:
        """Write ``line`` to the stream, reconnecting per the retry policy.

        Raises:
            ChannelSendError: Every permitted attempt failed.
        """
        payload = line.encode("utf-8") + _LINE_TERMINATOR
        attempts = self.max_attempts
        async with self._loop_lock():
            last_error: OSError | None = None
            for attempt in range(1, attempts + 1):
                try:
                    writer = await self._ensure_connected()
                    writer.write(payload)
                    await asyncio.wait_for(writer.drain(), timeout=self._timeout)
                except OSError as error:
                    last_error = error
                    self._logger.warning(
                        "Failed to write metric to statsd stream",
                        event="statsd.tcp.send_failed",
                        context={
                            "attempt": attempt,
                            "max_attempts": attempts,
                            "error": repr(error),
                        },
                    )
                    await self._disconnect()
                else:
                    return
        raise ChannelSendError(
            f"Could not send metric to {self._host}:{self._port} "
            f"after {attempts} attempt(s)."
        ) from last_error

    async def close(self) -> None:
        """Close the stream if one is open."""
        async with self._loop_lock():
            await self._disconnect()

    def _loop_lock(self) -> asyncio.Lock:
        # An asyncio.Lock binds to the first loop that waits on it.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def _ensure_connected(self) -> asyncio.StreamWriter:
        loop = asyncio.get_running_loop()
        if self._writer is not None and (
            self._loop is not loop
            or self._writer.is_closing()
            or (self._reader is not None and self._reader.at_eof())
        ):
            # Stale stream: peer hung up, or the previous event loop is gone.
            await self._disconnect()

        if self._writer is None:
            # By name, so the loop falls back across every resolved address.
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                timeout=self._timeout,
            )
            self._loop = loop
            self._logger.debug(
                "Connected to statsd stream", event="statsd.tcp.connected"
            )
        return self._writer

    async def _disconnect(self) -> None:
        writer, loop = self._writer, self._loop
        self._reader = None
        self._writer = None
        self._loop = None
        if writer is None or (loop is not None and loop.is_closed()):
            return
        writer.close()
        if loop is asyncio.get_running_loop():
            with contextlib.suppress(OSError):
                await writer.wait_closed()

    def __repr__(self) -> str:
        return (
            f"TcpOutputChannel(host={self._host!r}, port={self._port}, "
            f"retry_on_disconnect={self._retry_on_disconnect}, "
            f"retry_attempts={self._retry_attempts})"
        )


__all__ = ["TcpOutputChannel"]
