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
"""Mapper settings, bindable from the ``pymapper.mapping`` config section.

Example ``pymapper.yaml``::

    pymapper:
      mapping:
        strict: true
        max_depth: 32
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pymapper.core.config import config_properties


@config_properties(prefix="pymapper.mapping")
class MapperSettings(BaseModel):
    """Behaviour switches of a Mapper.

    Attributes:
        strict: Raise ``ConversionException`` for a property that cannot be
            converted. When false (the default) the property keeps its
            default value and the mapping carries on.
        max_depth: Deepest nesting level a single ``map`` call may reach.
    """

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    max_depth: int = Field(default=64, ge=1)
