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

"""Channel that discards every line."""

from __future__ import annotations


class NullOutputChannel:
    """Output channel that drops all metrics.

    Used when no transport could be configured, keeping the client usable
    but inert.
    """

    async def send(self, line: str) -> None:
        """Discard ``line``."""

    async def close(self) -> None:
        """No-op."""

    def __repr__(self) -> str:
        return "NullOutputChannel()"


__all__ = ["NullOutputChannel"]
