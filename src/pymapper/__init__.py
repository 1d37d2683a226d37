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
"""pymapper — object-graph mapping between differently shaped types."""

__version__ = "0.1.0"

from pymapper.kernel.exceptions import (
    ConfigurationException,
    ConversionException,
    CyclicGraphException,
    MapperException,
    MappingDepthExceededException,
    MappingException,
    TargetConstructionException,
)
from pymapper.mapping import ConversionStrategy, Mapper, MapperSettings, MappingBuilder

__all__ = [
    "ConfigurationException",
    "ConversionException",
    "ConversionStrategy",
    "CyclicGraphException",
    "Mapper",
    "MapperException",
    "MapperSettings",
    "MappingBuilder",
    "MappingDepthExceededException",
    "MappingException",
    "TargetConstructionException",
]
