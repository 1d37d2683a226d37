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
"""StructlogAdapter — renders pymapper's log records through structlog.

The engine modules log with plain ``logging.getLogger("pymapper.mapping.*")``
and stay silent until an application configures logging. Calling
:meth:`StructlogAdapter.configure` installs one root handler whose
``ProcessorFormatter`` renders both those stdlib records and structlog
events as console lines or JSON.

Configuration::

    pymapper:
      logging:
        format: json            # console (default) | json
        level:
          root: INFO
          pymapper.mapping: DEBUG
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from pymapper.core.config import Config


def render_types(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace class objects in an event with their qualified names.

    Rendered through ``repr`` a class reads as ``<class '...'>`` and the
    JSON renderer cannot serialize it at all.
    """
    for key, value in event_dict.items():
        if isinstance(value, type):
            event_dict[key] = f"{value.__module__}.{value.__qualname__}"
    return event_dict


class StructlogAdapter:
    """Configures structlog and the stdlib root logger from ``pymapper.logging``."""

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        level_section = dict(config.get_section("pymapper.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("pymapper.logging.format", "console")).lower()

        shared = self._shared_processors()
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                *shared,
                structlog.processors.StackInfoRenderer(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, self._renderer()],
            )
        )
        logging.basicConfig(
            handlers=[handler],
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )
        for name, level in self._module_levels.items():
            logging.getLogger(name).setLevel(getattr(logging, level, logging.INFO))

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    @staticmethod
    def _shared_processors() -> list[structlog.types.Processor]:
        return [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            render_types,
        ]

    def _renderer(self) -> structlog.types.Processor:
        if self._format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer()
