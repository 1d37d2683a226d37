"""Unified exception hierarchy for pymapper.

All mapper exceptions inherit from MapperException, enabling unified
error handling: catch MapperException to handle every mapping failure,
or catch specific subclasses for targeted handling.

Categories:
- ConfigurationException: invalid mapping configuration (raised at configure time)
- ConversionException: unresolvable property conversion (strict mode only)
- CyclicGraphException / MappingDepthExceededException: unbounded recursion
- TargetConstructionException: the target type cannot be instantiated
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class MapperException(Exception):
    """Base exception for all pymapper errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_INVALID_ACCESSOR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(MapperException):
    """A mapping rule could not be registered (bad accessor, unknown property)."""


# =============================================================================
# Mapping Exceptions
# =============================================================================


class MappingException(MapperException):
    """Failure while executing a mapping routine."""


class ConversionException(MappingException):
    """A property value could not be converted to the target property type."""


class CyclicGraphException(MappingException):
    """The source object graph refers back to an object already being mapped."""


class MappingDepthExceededException(MappingException):
    """The source object graph is nested deeper than the configured limit."""


class TargetConstructionException(MappingException):
    """The target type could not be instantiated."""
