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
"""Type descriptors — enumerate the readable and writable properties of a class.

Three kinds of classes are understood:

* **dataclasses**: every field is a property; ``init`` fields are passed to
  the constructor.
* **pydantic models**: every entry of ``model_fields``; instances are built
  with ``model_construct`` so that mapping never triggers validation.
* **plain classes**: public class-level annotations, plus ``property``
  objects (readable through ``fget``, writable through ``fset``).  The class
  must be constructible without arguments.

Example::

    descriptor = describe(UserEntity)
    [p.name for p in descriptor.writable()]
    user = descriptor.create({"id": 1, "username": "alice"})
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator, Mapping
from typing import Any, ClassVar, get_origin, get_type_hints

from pydantic import BaseModel

from pymapper.kernel.exceptions import TargetConstructionException
from pymapper.mapping.types import default_value

logger = logging.getLogger("pymapper.mapping.descriptors")


@dataclasses.dataclass(frozen=True)
class PropertyDescriptor:
    """A single named property of a described class.

    Attributes:
        name: Attribute name.
        value_type: Declared annotation (``Any`` when undeclared).
        readable: Value can be read from an instance.
        writable: Value can be supplied when building an instance.
        init: Value is passed as a constructor keyword rather than set afterwards.
        has_default: The class supplies its own default when the value is omitted.
    """

    name: str
    value_type: Any = Any
    readable: bool = True
    writable: bool = True
    init: bool = False
    has_default: bool = False


class TypeDescriptor:
    """Ordered property view of one class, plus the means to instantiate it."""

    def __init__(self, cls: type, properties: tuple[PropertyDescriptor, ...]) -> None:
        self.cls = cls
        self.properties = properties
        self._by_name = {p.name: p for p in properties}

    def __iter__(self) -> Iterator[PropertyDescriptor]:
        return iter(self.properties)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> PropertyDescriptor | None:
        return self._by_name.get(name)

    def readable(self) -> tuple[PropertyDescriptor, ...]:
        return tuple(p for p in self.properties if p.readable)

    def writable(self) -> tuple[PropertyDescriptor, ...]:
        return tuple(p for p in self.properties if p.writable)

    def create(self, values: Mapping[str, Any]) -> Any:
        """Build a new instance from *values* keyed by property name.

        Writable properties absent from *values* keep the class default or,
        when the class has none, the default of their declared type.
        """
        init_kwargs: dict[str, Any] = {}
        for prop in self.properties:
            if not prop.init:
                continue
            if prop.name in values:
                init_kwargs[prop.name] = values[prop.name]
            elif not prop.has_default:
                init_kwargs[prop.name] = default_value(prop.value_type)

        try:
            if issubclass(self.cls, BaseModel):
                instance = self.cls.model_construct(**init_kwargs)
            else:
                instance = self.cls(**init_kwargs)
        except TypeError as exc:
            raise TargetConstructionException(
                f"Cannot instantiate {self.cls.__qualname__}: {exc}",
                code="TARGET_CONSTRUCTION_FAILED",
                context={"target_type": self.cls.__qualname__},
            ) from exc

        for prop in self.properties:
            if prop.init or not prop.writable:
                continue
            if prop.name in values:
                setattr(instance, prop.name, values[prop.name])
            elif not prop.has_default and not hasattr(instance, prop.name):
                setattr(instance, prop.name, default_value(prop.value_type))
        return instance


def describe(cls: type) -> TypeDescriptor:
    """Describe *cls*. Deterministic and side-effect free; callers cache if they need to."""
    if dataclasses.is_dataclass(cls):
        properties = _dataclass_properties(cls)
    elif issubclass(cls, BaseModel):
        properties = _pydantic_properties(cls)
    else:
        properties = _annotated_properties(cls)

    seen = {p.name for p in properties}
    properties.extend(p for p in _property_objects(cls) if p.name not in seen)
    return TypeDescriptor(cls, tuple(properties))


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj)
    except NameError as exc:
        # Unresolvable forward reference: keep the names, lose the types.
        logger.debug("Could not resolve type hints of %s: %s", getattr(obj, "__qualname__", obj), exc)
        annotations: dict[str, Any] = {}
        for klass in reversed(getattr(obj, "__mro__", (obj,))):
            annotations.update(getattr(klass, "__annotations__", {}))
        return {name: Any for name in annotations}


def _dataclass_properties(cls: type) -> list[PropertyDescriptor]:
    hints = _type_hints(cls)
    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return [
        PropertyDescriptor(
            name=f.name,
            value_type=hints.get(f.name, Any),
            writable=f.init or not frozen,
            init=f.init,
            has_default=(f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING),
        )
        for f in dataclasses.fields(cls)
        if not f.name.startswith("_")
    ]


def _pydantic_properties(cls: type[BaseModel]) -> list[PropertyDescriptor]:
    return [
        PropertyDescriptor(
            name=name,
            value_type=field.annotation if field.annotation is not None else Any,
            init=True,
            has_default=not field.is_required(),
        )
        for name, field in cls.model_fields.items()
        if not name.startswith("_")
    ]


def _annotated_properties(cls: type) -> list[PropertyDescriptor]:
    properties: list[PropertyDescriptor] = []
    for name, hint in _type_hints(cls).items():
        if name.startswith("_") or get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        if isinstance(getattr(cls, name, None), property):
            continue
        has_default = any(name in vars(klass) for klass in cls.__mro__)
        properties.append(PropertyDescriptor(name=name, value_type=hint, has_default=has_default))
    return properties


def _property_objects(cls: type) -> Iterator[PropertyDescriptor]:
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, member in vars(klass).items():
            if name in seen or name.startswith("_") or not isinstance(member, property):
                continue
            seen.add(name)
            value_type = _type_hints(member.fget).get("return", Any) if member.fget else Any
            yield PropertyDescriptor(
                name=name,
                value_type=value_type,
                readable=member.fget is not None,
                writable=member.fset is not None,
                has_default=True,
            )
