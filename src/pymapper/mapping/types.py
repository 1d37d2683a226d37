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
"""Shared mapping types and the type-annotation predicates the planner relies on.

All predicates take *annotations*, not values: ``int``, ``list[Skill]``,
``Status | None`` and ``typing.Any`` are all valid inputs.
"""

from __future__ import annotations

import collections.abc
import types
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple, Union, get_args, get_origin

NoneType = type(None)

PRIMITIVE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    date,
    datetime,
    time,
    timedelta,
    uuid.UUID,
)

_UNION_ORIGINS = (Union, types.UnionType)

_SEQUENCE_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)

_CONTAINER_TYPES: tuple[type, ...] = (list, tuple, set, frozenset, dict)

_ZERO_VALUES: dict[Any, Any] = {
    bool: bool,
    int: int,
    float: float,
    complex: complex,
    str: str,
    bytes: bytes,
    Decimal: Decimal,
}

_EMPTY_CONTAINERS: dict[Any, Any] = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    tuple: tuple,
    set: set,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    frozenset: frozenset,
    dict: dict,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
}


class TypePair(NamedTuple):
    """Identity of one mapping configuration and one cached routine."""

    source: type
    target: type

    def __str__(self) -> str:
        return f"{self.source.__qualname__} -> {self.target.__qualname__}"


class ConversionStrategy(Enum):
    """How a single target property value is produced from its source value."""

    DIRECT = "direct"
    PRIMITIVE_COERCE = "primitive-coerce"
    ENUM_COERCE = "enum-coerce"
    NESTED_OBJECT = "nested-object"
    NESTED_COLLECTION = "nested-collection"
    UNSUPPORTED = "unsupported"
    # Source declared as Any: one of the above, picked per value.
    RUNTIME = "runtime"


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; other annotations give ``(tp, accepts_none(tp))``."""
    if get_origin(tp) in _UNION_ORIGINS:
        args = get_args(tp)
        members = tuple(a for a in args if a is not NoneType)
        nullable = len(members) != len(args)
        if len(members) == 1:
            return members[0], nullable
        return Union[members], nullable  # type: ignore[return-value]
    return tp, accepts_none(tp)


def is_union(tp: Any) -> bool:
    return get_origin(tp) in _UNION_ORIGINS


def accepts_none(tp: Any) -> bool:
    if tp is Any or tp is None or tp is NoneType or tp is object:
        return True
    if get_origin(tp) in _UNION_ORIGINS:
        return any(accepts_none(a) for a in get_args(tp))
    return False


def is_enum(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Enum)


def is_sequence(tp: Any) -> bool:
    """True for ordered sequence annotations (``list[X]``, ``tuple[X, ...]``, ``Sequence[X]``)."""
    return (get_origin(tp) or tp) in _SEQUENCE_ORIGINS


def is_tuple(tp: Any) -> bool:
    return (get_origin(tp) or tp) is tuple


def element_type(tp: Any) -> Any:
    """Return the element annotation of a sequence annotation, ``Any`` when unparametrised."""
    args = get_args(tp)
    if not args:
        return Any
    if is_tuple(tp):
        # Only homogeneous tuple[X, ...] has a single element type.
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return Any
    return args[0]


def is_composite(tp: Any) -> bool:
    """True for user classes whose properties can be described and mapped one by one."""
    if get_origin(tp) is not None or not isinstance(tp, type):
        return False
    # typing.Any is a class on 3.11+
    if tp is object or tp is Any or issubclass(tp, PRIMITIVE_TYPES + _CONTAINER_TYPES):
        return False
    return not issubclass(tp, Enum)


def is_assignable(source: Any, target: Any) -> bool:
    """True when a value declared as *source* can be stored as-is in a *target* property."""
    if target is Any or target is object or source == target:
        return True
    if get_origin(target) in _UNION_ORIGINS:
        return any(is_assignable(source, member) for member in get_args(target))
    if get_origin(source) in _UNION_ORIGINS:
        return all(is_assignable(member, target) for member in get_args(source))
    if get_origin(target) is not None:
        # list[A] -> list[B] needs element conversion unless A == B (handled above)
        return False
    source_class = get_origin(source) or source
    if isinstance(source_class, type) and isinstance(target, type):
        if target in PRIMITIVE_TYPES:
            # bool and IntEnum are ints, datetime is a date: the target gets the plain value via coercion.
            return False
        return issubclass(source_class, target)
    return False


def default_value(tp: Any) -> Any:
    """The value a target property holds when nothing was mapped into it.

    Optional annotations default to ``None``, primitives to their zero value,
    containers to an empty container and everything else to ``None``.
    """
    core, nullable = unwrap_optional(tp)
    if nullable:
        return None
    origin = get_origin(core) or core
    if origin in _ZERO_VALUES:
        return _ZERO_VALUES[origin]()
    if origin in _EMPTY_CONTAINERS:
        return _EMPTY_CONTAINERS[origin]()
    return None
