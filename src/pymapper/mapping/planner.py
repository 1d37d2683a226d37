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
"""Conversion planner — turns a type pair into a reusable mapping routine.

For every writable property of the target type the planner decides:

1. whether it takes part at all (ignore rules),
2. which source property feeds it (rename rules, else the same name),
3. how the value is converted (:class:`ConversionStrategy`).

Strategy selection compares the *declared* types, in priority order:
``DIRECT`` (assignable as-is), ``ENUM_COERCE`` (both enums),
``NESTED_COLLECTION`` (both ordered sequences), ``NESTED_OBJECT`` (both
composite classes), ``PRIMITIVE_COERCE`` (both scalar values). Any other
combination is ``UNSUPPORTED``. Source properties declared as ``Any`` are
resolved per value at execution time (``RUNTIME``).

Nested routines are not captured by their parent; they are fetched through
the resolver on every call so a configuration change for a nested pair is
seen by every routine that reaches it.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Final, get_origin

from pymapper.kernel.exceptions import (
    ConversionException,
    CyclicGraphException,
    MappingDepthExceededException,
)
from pymapper.mapping.coercion import coerce
from pymapper.mapping.descriptors import PropertyDescriptor, TypeDescriptor, describe
from pymapper.mapping.settings import MapperSettings
from pymapper.mapping.store import ConfigurationStore
from pymapper.mapping.types import (
    ConversionStrategy,
    TypePair,
    accepts_none,
    default_value,
    element_type,
    is_assignable,
    is_composite,
    is_enum,
    is_sequence,
    is_tuple,
    unwrap_optional,
)

logger = logging.getLogger("pymapper.mapping.planner")

_MAPPING_OR_SET: Final = frozenset({dict, set, frozenset, collections.abc.Mapping, collections.abc.Set})


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset()
"""Returned by a converter when the target property must keep its default."""


class MappingContext:
    """Recursion state of one top-level ``map`` call."""

    def __init__(self, max_depth: int = 64) -> None:
        self.max_depth = max_depth
        self.depth = 0
        self._path: set[int] = set()

    @contextmanager
    def enter(self, source: Any, pair: TypePair | None = None) -> Iterator[None]:
        key = id(source)
        if key in self._path:
            raise CyclicGraphException(
                f"Cyclic object graph: {type(source).__qualname__} instance is already being mapped",
                code="CYCLIC_GRAPH",
                context={"source_type": type(source).__qualname__, "pair": str(pair) if pair else None},
            )
        if self.depth >= self.max_depth:
            raise MappingDepthExceededException(
                f"Object graph is nested deeper than {self.max_depth} levels",
                code="DEPTH_EXCEEDED",
                context={"max_depth": self.max_depth, "pair": str(pair) if pair else None},
            )
        self._path.add(key)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            self._path.discard(key)


Converter = Callable[[Any, MappingContext], Any]
RoutineResolver = Callable[[type, type], "MappingRoutine"]


@dataclasses.dataclass(frozen=True)
class PropertyPlan:
    """One planned assignment: where the value comes from and how it is converted."""

    target: PropertyDescriptor
    source: PropertyDescriptor
    strategy: ConversionStrategy
    convert: Converter = dataclasses.field(repr=False, compare=False)


class MappingRoutine:
    """Builds a new target instance from a source instance for one type pair.

    Immutable once planned; a configuration change replaces the routine in
    the cache instead of altering it.
    """

    __slots__ = ("pair", "plans", "max_depth", "_target")

    def __init__(
        self,
        pair: TypePair,
        target: TypeDescriptor,
        plans: tuple[PropertyPlan, ...],
        max_depth: int = 64,
    ) -> None:
        self.pair = pair
        self.plans = plans
        self.max_depth = max_depth
        self._target = target

    def __call__(self, source: Any, context: MappingContext | None = None) -> Any:
        context = context if context is not None else MappingContext(self.max_depth)
        values: dict[str, Any] = {}
        with context.enter(source, self.pair):
            for plan in self.plans:
                value = plan.convert(getattr(source, plan.source.name, None), context)
                if value is not UNSET:
                    values[plan.target.name] = value
        return self._target.create(values)

    def plan_for(self, target_name: str) -> PropertyPlan | None:
        return next((p for p in self.plans if p.target.name == target_name), None)

    def __repr__(self) -> str:
        return f"MappingRoutine({self.pair}, properties={[p.target.name for p in self.plans]})"


def select_strategy(source_type: Any, target_type: Any) -> ConversionStrategy:
    """Pick the conversion strategy for a declared source/target annotation pair."""
    if is_assignable(source_type, target_type):
        return ConversionStrategy.DIRECT
    source, _ = unwrap_optional(source_type)
    target, _ = unwrap_optional(target_type)
    if source is Any:
        return ConversionStrategy.RUNTIME
    if is_enum(source) and is_enum(target):
        return ConversionStrategy.ENUM_COERCE
    if is_sequence(source) and is_sequence(target):
        return ConversionStrategy.NESTED_COLLECTION
    if is_composite(source) and is_composite(target):
        return ConversionStrategy.NESTED_OBJECT
    if _is_scalar(source) and _is_scalar(target):
        return ConversionStrategy.PRIMITIVE_COERCE
    return ConversionStrategy.UNSUPPORTED


def _is_scalar(tp: Any) -> bool:
    if tp is Any or is_composite(tp) or is_sequence(tp):
        return False
    return (get_origin(tp) or tp) not in _MAPPING_OR_SET


class ConversionPlanner:
    """Plans mapping routines from type descriptors and configured rules."""

    def __init__(
        self,
        store: ConfigurationStore,
        resolve: RoutineResolver,
        settings: MapperSettings | None = None,
    ) -> None:
        self._store = store
        self._resolve = resolve
        self._settings = settings or MapperSettings()

    def plan(self, source_type: type, target_type: type) -> MappingRoutine:
        pair = TypePair(source_type, target_type)
        readable = {p.name: p for p in describe(source_type).readable()}
        target = describe(target_type)

        plans: list[PropertyPlan] = []
        for prop in target.writable():
            if self._store.is_ignored(target_type, prop.name):
                continue
            source_name = self._store.get_rename_for(source_type, target_type, prop.name) or prop.name
            source_prop = readable.get(source_name)
            if source_prop is None:
                continue
            strategy = select_strategy(source_prop.value_type, prop.value_type)
            convert = self._converter(strategy, source_prop.value_type, prop.value_type, f"{pair}.{prop.name}")
            plans.append(PropertyPlan(prop, source_prop, strategy, convert))

        logger.debug("Planned routine %s: %s", pair, {p.target.name: p.strategy.value for p in plans})
        return MappingRoutine(pair, target, tuple(plans), self._settings.max_depth)

    # ------------------------------------------------------------------
    # Converter construction
    # ------------------------------------------------------------------

    def _converter(self, strategy: ConversionStrategy, source_type: Any, target_type: Any, where: str) -> Converter:
        if strategy is ConversionStrategy.DIRECT:
            return self._direct(target_type)

        target, _ = unwrap_optional(target_type)
        builders: dict[ConversionStrategy, Callable[[], Converter]] = {
            ConversionStrategy.ENUM_COERCE: lambda: self._enum(target),
            ConversionStrategy.NESTED_OBJECT: lambda: self._nested_object(unwrap_optional(source_type)[0], target),
            ConversionStrategy.NESTED_COLLECTION: lambda: self._nested_collection(
                unwrap_optional(source_type)[0], target, where
            ),
            ConversionStrategy.PRIMITIVE_COERCE: lambda: self._primitive(target_type),
            ConversionStrategy.RUNTIME: lambda: self._runtime(target_type, where),
            ConversionStrategy.UNSUPPORTED: lambda: self._unsupported(source_type, target_type),
        }
        return self._guard(builders[strategy](), strategy, where)

    def _guard(self, convert: Converter, strategy: ConversionStrategy, where: str) -> Converter:
        strict = self._settings.strict

        def guarded(value: Any, context: MappingContext) -> Any:
            try:
                return convert(value, context)
            except ConversionException as exc:
                if strict:
                    exc.context.setdefault("property", where)
                    raise
                logger.debug("Skipped %s (%s): %s", where, strategy.value, exc)
                return UNSET

        return guarded

    @staticmethod
    def _direct(target_type: Any) -> Converter:
        nullable = accepts_none(target_type)

        def direct(value: Any, context: MappingContext) -> Any:
            if value is None and not nullable:
                return UNSET
            return value

        return direct

    @staticmethod
    def _enum(target: Any) -> Converter:
        def enum_coerce(value: Any, context: MappingContext) -> Any:
            if value is None:
                return UNSET
            try:
                return target(value.value)
            except ValueError as exc:
                raise ConversionException(
                    f"{target.__qualname__} has no member with value {value.value!r}",
                    code="CONVERSION_FAILED",
                    context={"value": repr(value), "target_type": target.__qualname__},
                ) from exc

        return enum_coerce

    def _nested_object(self, source: type, target: type) -> Converter:
        resolve = self._resolve

        def nested_object(value: Any, context: MappingContext) -> Any:
            if value is None:
                return UNSET
            source_type = source if isinstance(value, source) else type(value)
            return resolve(source_type, target)(value, context)

        return nested_object

    def _nested_collection(self, source: Any, target: Any, where: str) -> Converter:
        source_element = element_type(source)
        target_element = element_type(target)
        element_strategy = select_strategy(source_element, target_element)
        convert_element = self._converter(element_strategy, source_element, target_element, f"{where}[]")
        build = tuple if is_tuple(target) else list

        def nested_collection(value: Any, context: MappingContext) -> Any:
            if value is None:
                return UNSET
            items: list[Any] = []
            with context.enter(value):
                for item in value:
                    converted = convert_element(item, context)
                    # Keep the cardinality: an unconvertible element becomes its default.
                    items.append(default_value(target_element) if converted is UNSET else converted)
            return build(items)

        return nested_collection

    @staticmethod
    def _primitive(target_type: Any) -> Converter:
        def primitive_coerce(value: Any, context: MappingContext) -> Any:
            if value is None:
                return UNSET
            return coerce(value, target_type)

        return primitive_coerce

    def _runtime(self, target_type: Any, where: str) -> Converter:
        nullable = accepts_none(target_type)

        def runtime(value: Any, context: MappingContext) -> Any:
            if value is None:
                return None if nullable else UNSET
            strategy = select_strategy(type(value), target_type)
            return self._converter(strategy, type(value), target_type, where)(value, context)

        return runtime

    @staticmethod
    def _unsupported(source_type: Any, target_type: Any) -> Converter:
        def unsupported(value: Any, context: MappingContext) -> Any:
            if value is None:
                return UNSET
            raise ConversionException(
                f"No conversion strategy from {source_type} to {target_type}",
                code="CONVERSION_FAILED",
                context={"source_type": str(source_type), "target_type": str(target_type)},
            )

        return unsupported
