"""Tests for accessor resolution at configuration time."""

from dataclasses import dataclass

import pytest

from pymapper.kernel.exceptions import ConfigurationException
from pymapper.mapping.accessors import accessor_name, resolve_accessor


@dataclass
class Address:
    street: str = ""


@dataclass
class Person:
    name: str = ""
    address: Address | None = None


class Badge:
    def __init__(self) -> None:
        self._label = ""

    @property
    def label(self) -> str:
        return self._label


class Gauge:
    def __init__(self) -> None:
        self._level = 0

    def _get_level(self) -> int:
        return self._level

    def _set_level(self, value: int) -> None:
        self._level = value

    level = property(_get_level, _set_level)


class TestAccessorName:
    def test_string_is_taken_as_is(self):
        assert accessor_name("name") == "name"

    def test_lambda_attribute_access(self):
        assert accessor_name(lambda p: p.name) == "name"

    def test_property_object(self):
        assert accessor_name(Badge.label) == "label"

    def test_nested_access_is_rejected(self):
        with pytest.raises(ConfigurationException) as exc_info:
            accessor_name(lambda p: p.address.street)

        assert exc_info.value.code == "CONFIG_INVALID_ACCESSOR"

    def test_identity_lambda_is_rejected(self):
        with pytest.raises(ConfigurationException):
            accessor_name(lambda p: p)

    def test_method_call_is_rejected(self):
        with pytest.raises(ConfigurationException):
            accessor_name(lambda p: p.name.upper())

    def test_expression_is_rejected(self):
        with pytest.raises(ConfigurationException):
            accessor_name(lambda p: p.name + "!")

    def test_constant_is_rejected(self):
        with pytest.raises(ConfigurationException):
            accessor_name(lambda p: "name")

    def test_non_identifier_string_is_rejected(self):
        with pytest.raises(ConfigurationException):
            accessor_name("address.street")

    def test_other_objects_are_rejected(self):
        with pytest.raises(ConfigurationException):
            accessor_name(42)  # type: ignore[arg-type]


class TestResolveAccessor:
    def test_existing_property(self):
        assert resolve_accessor(lambda p: p.address, Person, "source") == "address"

    def test_unknown_property(self):
        with pytest.raises(ConfigurationException) as exc_info:
            resolve_accessor(lambda p: p.nickname, Person, "target")

        assert exc_info.value.code == "CONFIG_UNKNOWN_PROPERTY"
        assert exc_info.value.context["property"] == "nickname"

    def test_read_only_property_is_not_a_target(self):
        with pytest.raises(ConfigurationException):
            resolve_accessor(Badge.label, Badge, "target")

    def test_read_only_property_is_a_source(self):
        assert resolve_accessor(Badge.label, Badge, "source") == "label"

    def test_property_built_from_private_functions_uses_attribute_name(self):
        assert resolve_accessor(Gauge.level, Gauge, "target") == "level"
        assert resolve_accessor(Gauge.level, Gauge, "source") == "level"

    def test_inherited_property_resolves_on_subclass(self):
        class Tank(Gauge):
            pass

        assert resolve_accessor(Gauge.level, Tank, "target") == "level"
