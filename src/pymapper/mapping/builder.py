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
"""Fluent configuration of one type pair.

Usage::

    (
        mapper.configure(PersonEntity, PersonDTO)
        .for_member(lambda src: src.name, lambda dst: dst.full_name)
        .ignore(lambda dst: dst.password_hash)
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from pymapper.mapping.accessors import Accessor, resolve_accessor

if TYPE_CHECKING:
    from pymapper.mapping.mapper import Mapper

S = TypeVar("S")
D = TypeVar("D")


class MappingBuilder(Generic[S, D]):
    """Registers rename and ignore rules for ``source_type -> target_type``.

    Accessors are resolved to property names immediately, so a bad accessor
    raises ``ConfigurationException`` at the call that introduced it.
    """

    def __init__(self, mapper: Mapper, source_type: type[S], target_type: type[D]) -> None:
        self._mapper = mapper
        self.source_type = source_type
        self.target_type = target_type

    def for_member(self, source: Accessor, target: Accessor) -> MappingBuilder[S, D]:
        """Feed the *target* property from the *source* property."""
        source_name = resolve_accessor(source, self.source_type, "source")
        target_name = resolve_accessor(target, self.target_type, "target")
        self._mapper.set_rename(self.source_type, self.target_type, source_name, target_name)
        return self

    def ignore(self, target: Accessor) -> MappingBuilder[S, D]:
        """Never assign the *target* property, whatever the source provides."""
        target_name = resolve_accessor(target, self.target_type, "target")
        self._mapper.set_ignored(self.target_type, target_name)
        return self
