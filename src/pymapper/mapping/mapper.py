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
"""Generic object-graph mapper inspired by MapStruct and AutoMapper.

Maps between any two types (dataclasses, pydantic models, plain classes)
by matching property names, converting nested objects, collections, enums
and primitive values recursively. The conversion routine for each
``(source type, target type)`` pair is planned once and cached.

Example::

    mapper = Mapper()
    dto = mapper.map(user_entity, UserDTO)

    # Renamed and ignored properties
    (
        mapper.configure(User, UserDTO)
        .for_member(lambda u: u.username, lambda d: d.name)
        .ignore(lambda d: d.password)
    )
    dtos = mapper.map_all(users, UserDTO)
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any, TypeVar

from pymapper.core.config import Config
from pymapper.mapping.builder import MappingBuilder
from pymapper.mapping.cache import RoutineCache
from pymapper.mapping.planner import ConversionPlanner, MappingContext, MappingRoutine
from pymapper.mapping.settings import MapperSettings
from pymapper.mapping.store import ConfigurationStore
from pymapper.mapping.types import TypePair

S = TypeVar("S")
D = TypeVar("D")


class Mapper:
    """Maps object graphs between differently shaped types.

    Each Mapper owns its rules and its routine cache; two instances never
    see each other's configuration.

    Usage::

        mapper = Mapper()
        mapper.configure(SourcePerson, TargetPerson).for_member("name", "full_name")
        person = mapper.map(source_person, TargetPerson)
    """

    def __init__(self, settings: MapperSettings | None = None) -> None:
        self.settings = settings or MapperSettings()
        self._lock = threading.RLock()
        self._store = ConfigurationStore()
        self._planner = ConversionPlanner(self._store, self._routine_for, self.settings)
        self._cache = RoutineCache(self._planner.plan, lock=self._lock)
        self._store.add_listener(self._cache.invalidate)

    @classmethod
    def from_config(cls, config: Config) -> Mapper:
        """Create a Mapper with settings bound from the ``pymapper.mapping`` section."""
        return cls(config.bind(MapperSettings))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, source_type: type[S], target_type: type[D]) -> MappingBuilder[S, D]:
        """Return a fluent builder for the rules of ``source_type -> target_type``."""
        return MappingBuilder(self, source_type, target_type)

    def add_mapping(
        self,
        source_type: type[S],
        target_type: type[D],
        *,
        field_map: dict[str, str] | None = None,
        exclude: set[str] | None = None,
    ) -> MappingBuilder[S, D]:
        """Register several rules at once.

        Args:
            source_type: The source type to map from.
            target_type: The destination type to map to.
            field_map: Maps source property names to target property names.
            exclude: Target properties that are never assigned.
        """
        builder = self.configure(source_type, target_type)
        for source_name, target_name in (field_map or {}).items():
            builder.for_member(source_name, target_name)
        for target_name in sorted(exclude or ()):
            builder.ignore(target_name)
        return builder

    def set_rename(self, source_type: type, target_type: type, source_name: str, target_name: str) -> None:
        with self._lock:
            self._store.set_rename(source_type, target_type, source_name, target_name)

    def set_ignored(self, target_type: type, target_name: str) -> None:
        with self._lock:
            self._store.set_ignored(target_type, target_name)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def map(self, source: Any, target_type: type[D], *, source_type: type | None = None) -> D | None:
        """Map *source* to a new *target_type* instance.

        Returns ``None`` for a ``None`` source. The routine is looked up for
        *source_type* when given, else for the runtime type of *source*.
        """
        if source is None:
            return None
        routine = self._routine_for(source_type or type(source), target_type)
        return routine(source, MappingContext(self.settings.max_depth))

    def map_all(
        self,
        sources: Iterable[Any] | None,
        target_type: type[D],
        *,
        source_type: type | None = None,
    ) -> list[D | None]:
        """Map every element of *sources*, preserving order. ``None`` gives ``[]``."""
        if sources is None:
            return []
        return [self.map(source, target_type, source_type=source_type) for source in sources]

    def compile(self, source_type: type[S], target_type: type[D]) -> MappingRoutine:
        """Return the (cached) routine for a pair, planning it if needed."""
        return self._routine_for(source_type, target_type)

    def is_cached(self, source_type: type, target_type: type) -> bool:
        return TypePair(source_type, target_type) in self._cache

    def _routine_for(self, source_type: type, target_type: type) -> MappingRoutine:
        return self._cache.get_or_build(source_type, target_type)
