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
"""Mapping routine cache — one planned routine per type pair.

Unbounded: the number of pairs is bounded by the program's own classes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from pymapper.mapping.planner import MappingRoutine
from pymapper.mapping.types import TypePair

logger = logging.getLogger("pymapper.mapping.cache")

RoutineBuilder = Callable[[type, type], MappingRoutine]


class RoutineCache:
    """Memoizes routines by :class:`TypePair`.

    The lock is shared with the owning Mapper's configuration writes, so a
    routine is always planned against a complete rule set.
    """

    def __init__(self, build: RoutineBuilder, lock: threading.RLock | None = None) -> None:
        self._build = build
        self._lock = lock if lock is not None else threading.RLock()
        self._routines: dict[TypePair, MappingRoutine] = {}

    def get_or_build(self, source_type: type, target_type: type) -> MappingRoutine:
        pair = TypePair(source_type, target_type)
        routine = self._routines.get(pair)
        if routine is not None:
            return routine
        with self._lock:
            routine = self._routines.get(pair)
            if routine is None:
                routine = self._build(source_type, target_type)
                self._routines[pair] = routine
            return routine

    def invalidate(self, source_type: type | None, target_type: type) -> None:
        """Drop the routine for a pair; ``source_type=None`` drops every pair into *target_type*."""
        with self._lock:
            if source_type is None:
                stale = [pair for pair in self._routines if pair.target is target_type]
            else:
                stale = [TypePair(source_type, target_type)]
            for pair in stale:
                if self._routines.pop(pair, None) is not None:
                    logger.debug("Invalidated routine %s", pair)

    def clear(self) -> None:
        with self._lock:
            self._routines.clear()

    def __contains__(self, pair: object) -> bool:
        return pair in self._routines

    def __len__(self) -> int:
        return len(self._routines)
