# Copyright 2026 Firefly Software Solutions Inc.
#
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
"""Configuration store — rename and ignore rules per type pair.

Rename rules are keyed by ``(source_type, target_type)``. Ignore rules are
keyed by target type alone and apply to every source mapped into it.

Every mutation notifies the registered listeners with the affected pair;
``source_type`` is ``None`` when the change touches every pair with the given
target type.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import MappingProxyType

from pymapper.mapping.types import TypePair

logger = logging.getLogger("pymapper.mapping.store")

ChangeListener = Callable[[type | None, type], None]


class ConfigurationStore:
    """Holds the rename and ignore rules of one Mapper."""

    def __init__(self) -> None:
        self._renames: dict[TypePair, dict[str, str]] = {}
        self._ignored: dict[type, set[str]] = {}
        self._listeners: list[ChangeListener] = []

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def set_rename(self, source_type: type, target_type: type, source_name: str, target_name: str) -> None:
        """Feed ``target_name`` from ``source_name`` when mapping this pair. Last write wins."""
        pair = TypePair(source_type, target_type)
        self._renames.setdefault(pair, {})[target_name] = source_name
        logger.debug("Registered rename for %s: %s <- %s", pair, target_name, source_name)
        self._notify(source_type, target_type)

    def set_ignored(self, target_type: type, target_name: str) -> None:
        """Never assign ``target_name`` on instances of ``target_type``."""
        self._ignored.setdefault(target_type, set()).add(target_name)
        logger.debug("Registered ignore for %s.%s", target_type.__qualname__, target_name)
        self._notify(None, target_type)

    def get_rename_for(self, source_type: type, target_type: type, target_name: str) -> str | None:
        return self._renames.get(TypePair(source_type, target_type), {}).get(target_name)

    def is_ignored(self, target_type: type, target_name: str) -> bool:
        return target_name in self._ignored.get(target_type, ())

    def renames_for(self, source_type: type, target_type: type) -> MappingProxyType[str, str]:
        """Read-only view of ``{target_name: source_name}`` for one pair."""
        return MappingProxyType(dict(self._renames.get(TypePair(source_type, target_type), {})))

    def ignored_for(self, target_type: type) -> frozenset[str]:
        return frozenset(self._ignored.get(target_type, ()))

    def _notify(self, source_type: type | None, target_type: type) -> None:
        for listener in self._listeners:
            listener(source_type, target_type)
