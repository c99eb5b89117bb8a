# Copyright 2026 Google LLC
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
#
# SPDX-License-Identifier: Apache-2.0

"""Structured logging for semtag.

Events are snake_case names with key/value context (``bump_resolved``,
``prerelease_tag_found``, ``next_version_calculated``). They are routed
through the ``semtag`` stdlib logger to a single stderr handler; stdout
carries only what scripts consume (a tag name, a JSON plan, a changelog
fragment), so ``semtag next | xargs git tag`` works with ``--verbose``.

The handler hangs off the ``semtag`` logger, not the root logger, so an
application embedding the engine keeps its own logging setup.

Usage::

    from semtag.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.debug('bump_resolved', bump=BumpType.MINOR)
"""

from __future__ import annotations

import enum
import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = 'semtag'

_HANDLER_NAME = 'semtag-stderr'


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is when a record is emitted."""

    def __init__(self) -> None:
        super().__init__()
        self.set_name(_HANDLER_NAME)

    @property
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, _value: object) -> None:
        pass


def _level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def _plain_values(
    _logger: object,
    _method: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Render enums by value and engine objects by ``str()``.

    ``BumpType.MINOR`` logs as ``minor`` and ``Version(1, 3, 0)`` as
    ``1.3.0`` in both renderers.
    """
    for key, value in event_dict.items():
        if isinstance(value, enum.Enum):
            event_dict[key] = value.value
        elif not isinstance(value, (str, int, float, bool, type(None))):
            event_dict[key] = str(value)
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Route semtag events to stderr.

    Reconfiguring replaces the previous handler.

    Args:
        verbose: Debug events too.
        quiet: Warnings and errors only.
        json_log: One JSON object per line, with timestamps.
    """
    base = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in base.handlers if h.get_name() == _HANDLER_NAME]:
        base.removeHandler(handler)

    renderer: structlog.types.Processor
    stamps: list[structlog.types.Processor] = []
    if json_log:
        stamps.append(structlog.processors.TimeStamper(fmt='iso'))
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = _StderrHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                *stamps,
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        ),
    )
    base.addHandler(handler)
    base.setLevel(_level(verbose=verbose, quiet=quiet))
    base.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _plain_values,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Logger for a ``semtag.*`` module."""
    return structlog.get_logger(name)


__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]
