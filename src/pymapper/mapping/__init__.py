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
"""pymapper Mapping — descriptors, rules, planner, routine cache and the Mapper facade."""

from pymapper.mapping.builder import MappingBuilder
from pymapper.mapping.cache import RoutineCache
from pymapper.mapping.descriptors import PropertyDescriptor, TypeDescriptor, describe
from pymapper.mapping.mapper import Mapper
from pymapper.mapping.planner import (
    ConversionPlanner,
    MappingContext,
    MappingRoutine,
    PropertyPlan,
    select_strategy,
)
from pymapper.mapping.settings import MapperSettings
from pymapper.mapping.store import ConfigurationStore
from pymapper.mapping.types import ConversionStrategy, TypePair

__all__ = [
    # Facade
    "Mapper",
    "MappingBuilder",
    "MapperSettings",
    # Engine
    "ConfigurationStore",
    "ConversionPlanner",
    "ConversionStrategy",
    "MappingContext",
    "MappingRoutine",
    "PropertyPlan",
    "RoutineCache",
    "TypePair",
    "select_strategy",
    # Descriptors
    "PropertyDescriptor",
    "TypeDescriptor",
    "describe",
]
