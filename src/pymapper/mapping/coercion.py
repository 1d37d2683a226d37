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
"""Best-effort coercion between primitive value types.

Supported conversions:

* numeric widening (``int -> float``, ``int -> Decimal``) and narrowing only
  when lossless (``2.0 -> 2``, never ``2.5 -> 2``)
* any value to text (enums by member name, dates in ISO 8601)
* text to value where unambiguous (``"42" -> 42``, ``"yes" -> True``,
  ``"1985-05-15" -> date``, ``"ACTIVE" -> Status.ACTIVE``)
* ``datetime -> date``, ``date -> datetime`` (midnight), ``str -> UUID``

Anything else raises :class:`ConversionException`; the caller decides
whether that is fatal.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, get_args

from pymapper.kernel.exceptions import ConversionException
from pymapper.mapping.types import is_enum, is_union, unwrap_optional

_TRUE_TEXT = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_TEXT = frozenset({"false", "0", "no", "n", "off"})


def _unsupported(value: Any, target: type) -> TypeError:
    return TypeError(f"no coercion from {type(value).__qualname__} to {target.__qualname__}")


def _to_str(value: Any, target: type) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _to_int(value: Any, target: type) -> int:
    if isinstance(value, Enum):
        return _to_int(value.value, target)
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, (float, Decimal)):
        if value != int(value):
            raise ValueError(f"{value!r} is not integral")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise _unsupported(value, target)


def _to_float(value: Any, target: type) -> float:
    if isinstance(value, Enum):
        return _to_float(value.value, target)
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise _unsupported(value, target)


def _to_complex(value: Any, target: type) -> complex:
    if isinstance(value, (int, float, complex, Decimal)):
        return complex(value)
    if isinstance(value, str):
        return complex(value.strip())
    raise _unsupported(value, target)


def _to_decimal(value: Any, target: type) -> Decimal:
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, (int, float, str)):
        return Decimal(str(value).strip())
    raise _unsupported(value, target)


def _to_bool(value: Any, target: type) -> bool:
    if isinstance(value, (int, float, Decimal)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_TEXT:
            return True
        if text in _FALSE_TEXT:
            return False
        raise ValueError(f"{value!r} is not a boolean")
    raise _unsupported(value, target)


def _to_bytes(value: Any, target: type) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    raise _unsupported(value, target)


def _to_date(value: Any, target: type) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise _unsupported(value, target)


def _to_datetime(value: Any, target: type) -> datetime:
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise _unsupported(value, target)


def _to_time(value: Any, target: type) -> time:
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise _unsupported(value, target)


def _to_uuid(value: Any, target: type) -> uuid.UUID:
    if isinstance(value, str):
        return uuid.UUID(value.strip())
    if isinstance(value, bytes) and len(value) == 16:
        return uuid.UUID(bytes=value)
    if isinstance(value, int) and not isinstance(value, bool):
        return uuid.UUID(int=value)
    raise _unsupported(value, target)


def _to_enum(value: Any, target: type[Enum]) -> Enum:
    if isinstance(value, Enum):
        return target(value.value)
    if isinstance(value, str) and value in target.__members__:
        return target[value]
    return target(value)


_COERCERS: dict[type, Callable[[Any, Any], Any]] = {
    str: _to_str,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    complex: _to_complex,
    Decimal: _to_decimal,
    bytes: _to_bytes,
    datetime: _to_datetime,
    date: _to_date,
    time: _to_time,
    uuid.UUID: _to_uuid,
}


def coerce(value: Any, target_type: Any) -> Any:
    """Coerce *value* to *target_type* or raise :class:`ConversionException`."""
    target, _ = unwrap_optional(target_type)
    if target is Any or _is_exact_instance(value, target):
        return value

    if is_union(target):
        members = get_args(target)
        # Union of several non-None members: first member that accepts the value wins.
        for member in members:
            if _is_exact_instance(value, member):
                return value
        for member in members:
            try:
                return coerce(value, member)
            except ConversionException:
                continue
        raise ConversionException(
            f"Cannot coerce {type(value).__qualname__} to any member of {target}",
            code="CONVERSION_FAILED",
            context={"value_type": type(value).__qualname__, "target_type": str(target)},
        )

    converter = _to_enum if is_enum(target) else _COERCERS.get(target)
    if converter is None:
        raise ConversionException(
            f"No coercion to {getattr(target, '__qualname__', target)}",
            code="CONVERSION_FAILED",
            context={"value_type": type(value).__qualname__, "target_type": str(target)},
        )
    try:
        return converter(value, target)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ConversionException(
            f"Cannot coerce {value!r} to {target.__qualname__}: {exc}",
            code="CONVERSION_FAILED",
            context={"value_type": type(value).__qualname__, "target_type": target.__qualname__},
        ) from exc


def _is_exact_instance(value: Any, target: Any) -> bool:
    if not isinstance(target, type) or not isinstance(value, target):
        return False
    # bool is an int, an IntEnum member is an int and datetime is a date, but none is what the target asked for.
    if isinstance(value, bool) and target is not bool:
        return False
    if isinstance(value, Enum) and not is_enum(target):
        return False
    return not (isinstance(value, datetime) and target is date)
