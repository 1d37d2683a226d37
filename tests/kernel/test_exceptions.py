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
"""Tests for the pymapper exception hierarchy."""

from pymapper.kernel import (
    ConfigurationException,
    ConversionException,
    CyclicGraphException,
    MapperException,
    MappingDepthExceededException,
    MappingException,
    TargetConstructionException,
)


class TestMapperException:
    def test_basic_creation(self):
        exc = MapperException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = MapperException("bad accessor", code="CONFIG_INVALID_ACCESSOR")
        assert exc.code == "CONFIG_INVALID_ACCESSOR"

    def test_with_context(self):
        exc = MapperException("no property", code="CONFIG_UNKNOWN_PROPERTY", context={"property": "name"})
        assert exc.context["property"] == "name"

    def test_context_defaults_to_empty_dict(self):
        exc = MapperException("test")
        exc.context["key"] = "value"
        exc2 = MapperException("test2")
        assert exc2.context == {}


class TestExceptionHierarchy:
    def test_configuration_is_mapper_exception(self):
        assert issubclass(ConfigurationException, MapperException)
        assert not issubclass(ConfigurationException, MappingException)

    def test_mapping_errors_share_a_base(self):
        for exc_type in (
            ConversionException,
            CyclicGraphException,
            MappingDepthExceededException,
            TargetConstructionException,
        ):
            assert issubclass(exc_type, MappingException)
            assert issubclass(exc_type, MapperException)

    def test_graph_errors_are_not_conversion_errors(self):
        assert not issubclass(CyclicGraphException, ConversionException)
        assert not issubclass(MappingDepthExceededException, ConversionException)
