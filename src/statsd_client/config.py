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

"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Final, Literal

from .dataclasses import FrozenDataclass

DEFAULT_HOST: Final = "localhost"
DEFAULT_PORT: Final = 8125
DEFAULT_RETRY_ATTEMPTS: Final = 3
DEFAULT_TIMEOUT: Final = 5.0
_MAX_PORT: Final = 65535

_ENV_PREFIX: Final = "STATSD_"
_TRUE_VALUES: Final = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final = frozenset({"0", "false", "no", "off"})


class ConnectionType(Enum):
    """Transport used to reach the statsd server.

    UDP: Connectionless datagrams (recommended; statsd's native transport).
    TCP: Persistent stream with optional reconnect-and-retry.
    """

    UDP = "udp"
    TCP = "tcp"


@FrozenDataclass()
class StatsdConfig:
    """Immutable settings consumed once when a client is constructed.

    Attributes:
        host: Statsd server hostname or IP. Empty disables sending.
        port: Statsd server port.
        connection_type: UDP or TCP. Strings ``"udp"``/``"tcp"`` are accepted.
        prefix: Namespace prepended to every metric name. A trailing ``.`` is
            removed.
        postfix: Appended to every metric name. A trailing ``.`` is removed
            and a leading ``.`` added when missing.
        retry_on_disconnect: Reconnect and resend after a failed write
            (TCP only).
        retry_attempts: Extra attempts after a failed write (TCP only).
        rethrow_on_error: Raise transport construction errors instead of
            falling back to a channel that drops everything.
        timeout: Seconds allowed for TCP connects and writes.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    connection_type: ConnectionType | Literal["udp", "tcp"] = ConnectionType.UDP
    prefix: str | None = ""
    postfix: str | None = ""
    retry_on_disconnect: bool = True
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    rethrow_on_error: bool = False
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def __pre_init__(  # noqa: PLR0913
        cls,
        *,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        connection_type: ConnectionType
        | Literal["udp", "tcp"] = ConnectionType.UDP,
        prefix: str | None = "",
        postfix: str | None = "",
        retry_on_disconnect: bool = True,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        rethrow_on_error: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Mapping[str, object]:
        """Normalise names and transport, and reject impossible values."""
        if isinstance(connection_type, str):
            connection_type = ConnectionType(connection_type.lower())
        if not 0 <= port <= _MAX_PORT:
            raise ValueError(f"port must be between 0 and {_MAX_PORT}, got {port}")
        if retry_attempts < 0:
            raise ValueError("retry_attempts must be greater than or equal to 0")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        for label, text in (("prefix", prefix), ("postfix", postfix)):
            if text and ("\n" in text or "\r" in text):
                raise ValueError(f"{label} must not contain line breaks: {text!r}")
        return {
            "host": host or "",
            "port": port,
            "connection_type": connection_type,
            "prefix": normalize_prefix(prefix),
            "postfix": normalize_postfix(postfix),
            "retry_on_disconnect": retry_on_disconnect,
            "retry_attempts": retry_attempts,
            "rethrow_on_error": rethrow_on_error,
            "timeout": timeout,
        }

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> StatsdConfig:
        """Build a config from ``STATSD_*`` environment variables.

        Recognised keys: ``STATSD_HOST``, ``STATSD_PORT``,
        ``STATSD_CONNECTION_TYPE``, ``STATSD_PREFIX``, ``STATSD_POSTFIX``,
        ``STATSD_RETRY_ON_DISCONNECT``, ``STATSD_RETRY_ATTEMPTS``,
        ``STATSD_RETHROW_ON_ERROR`` and ``STATSD_TIMEOUT``. Missing keys keep
        their defaults.

        Raises:
            ValueError: A value cannot be parsed.
        """
        env = env if env is not None else os.environ
        values: dict[str, object] = {}

        for key in ("host", "prefix", "postfix", "connection_type"):
            raw = env.get(_ENV_PREFIX + key.upper())
            if raw is not None:
                values[key] = raw
        for key in ("port", "retry_attempts"):
            raw = env.get(_ENV_PREFIX + key.upper())
            if raw is not None:
                values[key] = int(raw)
        for key in ("retry_on_disconnect", "rethrow_on_error"):
            raw = env.get(_ENV_PREFIX + key.upper())
            if raw is not None:
                values[key] = _parse_bool(_ENV_PREFIX + key.upper(), raw)
        raw_timeout = env.get(_ENV_PREFIX + "TIMEOUT")
        if raw_timeout is not None:
            values["timeout"] = float(raw_timeout)

        return cls(**values)  # type: ignore[arg-type]


def normalize_prefix(prefix: str | None) -> str:
    """Strip trailing ``.`` characters from ``prefix``; ``None`` becomes ``""``."""
    if not prefix:
        return ""
    return prefix.rstrip(".")


def normalize_postfix(postfix: str | None) -> str:
    """Return ``postfix`` with no trailing ``.`` and a leading ``.``.

    ``None``, empty and all-dot values become ``""``.
    """
    postfix = (postfix or "").rstrip(".")
    if not postfix:
        return ""
    if not postfix.startswith("."):
        postfix = "." + postfix
    return postfix


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be a boolean, got {raw!r}")


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ConnectionType",
    "StatsdConfig",
    "normalize_postfix",
    "normalize_prefix",
]
