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
"""Resolve property accessors to property names at configuration time.

An accessor is one of:

* a property name: ``"full_name"``
* a one-argument callable doing a single attribute access: ``lambda p: p.full_name``
* a ``property`` object taken from the class: ``Person.full_name``

Callables are never evaluated against real objects; they run once against a
recording proxy that remembers which attributes were touched.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pymapper.kernel.exceptions import ConfigurationException
from pymapper.mapping.descriptors import describe

Accessor = str | Callable[[Any], Any] | property

Role = Literal["source", "target"]


class _AttributeRecorder:
    __slots__ = ("_path",)

    def __init__(self, path: tuple[str, ...] = ()) -> None:
        object.__setattr__(self, "_path", path)

    def __getattr__(self, name: str) -> _AttributeRecorder:
        if name.startswith("__"):
            raise AttributeError(name)
        return _AttributeRecorder(self._path + (name,))


def accessor_name(accessor: Accessor, owner: type | None = None) -> str:
    """Return the single property name an accessor denotes.

    A ``property`` object is named by the attribute it is bound to on *owner*
    (``x = property(_get_x)`` is ``x``); without an owner the getter's name is used.
    """
    if isinstance(accessor, str):
        if not accessor.isidentifier():
            raise ConfigurationException(
                f"'{accessor}' is not a property name",
                code="CONFIG_INVALID_ACCESSOR",
                context={"accessor": accessor},
            )
        return accessor

    if isinstance(accessor, property):
        bound = _bound_name(accessor, owner)
        if bound is not None:
            return bound
        if accessor.fget is None:
            raise ConfigurationException("Write-only property has no name to resolve", code="CONFIG_INVALID_ACCESSOR")
        return accessor.fget.__name__

    if callable(accessor):
        try:
            recorded = accessor(_AttributeRecorder())
        except Exception as exc:
            raise ConfigurationException(
                f"Accessor {accessor!r} is not a simple property access: {exc}",
                code="CONFIG_INVALID_ACCESSOR",
                context={"accessor": repr(accessor)},
            ) from exc
        if isinstance(recorded, _AttributeRecorder) and len(recorded._path) == 1:
            return recorded._path[0]
        raise ConfigurationException(
            f"Accessor {accessor!r} must access exactly one property of its argument",
            code="CONFIG_INVALID_ACCESSOR",
            context={"accessor": repr(accessor)},
        )

    raise ConfigurationException(
        f"Unsupported accessor {accessor!r}; expected a name, a lambda or a property",
        code="CONFIG_INVALID_ACCESSOR",
        context={"accessor": repr(accessor)},
    )


def _bound_name(prop: property, owner: type | None) -> str | None:
    for klass in getattr(owner, "__mro__", ()):
        for name, value in vars(klass).items():
            if value is prop:
                return name
    return None


def resolve_accessor(accessor: Accessor, owner: type, role: Role) -> str:
    """Resolve *accessor* and check that *owner* has a matching readable/writable property."""
    name = accessor_name(accessor, owner)
    prop = describe(owner).get(name)
    usable = prop is not None and (prop.readable if role == "source" else prop.writable)
    if not usable:
        kind = "readable" if role == "source" else "writable"
        raise ConfigurationException(
            f"{owner.__qualname__} has no {kind} property '{name}'",
            code="CONFIG_UNKNOWN_PROPERTY",
            context={"type": owner.__qualname__, "property": name, "role": role},
        )
    return name
