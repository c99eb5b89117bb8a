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

"""Configuration reader for semtag.

Reads ``semtag.toml`` and returns a validated :class:`SemtagConfig`.
Keys are flat, top-level only.

Validation pipeline::

    semtag.toml
    ┌──────────────────┐
    │ tag_fromat = ... │  ← typo!
    └────────┬─────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 1. Unknown key   │────→│ ST-CONFIG-INVALID-KEY:       │
    │    detection     │     │ hint: "Did you mean          │
    └────────┬─────────┘     │       'tag_format'?"         │
             ▼               └──────────────────────────────┘
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 2. Type check    │────→│ ST-CONFIG-INVALID-VALUE:     │
    │    each value    │     │ 'changelog' must be bool     │
    └────────┬─────────┘     └──────────────────────────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 3. Value check   │────→│ ST-CONFIG-INVALID-VALUE:     │
    │    (enums)       │     │ prerelease must be one of ...│
    └────────┬─────────┘     └──────────────────────────────┘
             ▼
    ┌──────────────────┐
    │ SemtagConfig()   │  ← frozen dataclass
    └──────────────────┘

Supported keys::

    tag_format             = "v{{.Major}}.{{.Minor}}.{{.Patch}}{{.Prerelease}}"
    default_branch         = "main"     # empty: main or master
    prerelease             = "auto"     # "auto", "always" or "never"
    changelog              = false      # render a fragment for releases
    validate_latest_commit = true       # invalid latest commit aborts
"""

from __future__ import annotations

import dataclasses
import difflib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from semtag.errors import E, SemtagError
from semtag.logging import get_logger
from semtag.tags import DEFAULT_TAG_FORMAT
from semtag.versioning import PRERELEASE_MODES

logger = get_logger(__name__)

CONFIG_FILENAME = 'semtag.toml'

VALID_KEYS: frozenset[str] = frozenset({
    'tag_format',
    'default_branch',
    'prerelease',
    'changelog',
    'validate_latest_commit',
})

_TYPE_MAP: dict[str, type] = {
    'tag_format': str,
    'default_branch': str,
    'prerelease': str,
    'changelog': bool,
    'validate_latest_commit': bool,
}


@dataclass(frozen=True)
class SemtagConfig:
    """Validated settings.

    Attributes:
        tag_format: Tag template with ``{{.Major}}``-style placeholders.
        default_branch: Trunk name; empty means ``main`` or ``master``.
        prerelease: ``auto``, ``always`` or ``never``.
        changelog: Render a changelog fragment for release plans.
        validate_latest_commit: Abort the plan when the designated
            commit message is invalid.
        config_path: File the settings came from, if any.
    """

    tag_format: str = DEFAULT_TAG_FORMAT
    default_branch: str = ''
    prerelease: str = 'auto'
    changelog: bool = False
    validate_latest_commit: bool = True
    config_path: Path | None = None


def _suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _validate_value_type(key: str, value: Any, *, source: str) -> None:  # noqa: ANN401 - dynamic config values
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP[key]
    if not isinstance(value, expected):
        raise SemtagError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {expected.__name__}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {source}.',
        )


def _validate_prerelease(value: str) -> None:
    """Raise if prerelease is not a recognized mode."""
    if value not in PRERELEASE_MODES:
        raise SemtagError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"prerelease must be one of {sorted(PRERELEASE_MODES)}, got '{value}'",
            hint="Use 'auto' to pre-release every branch except the default one.",
        )


def parse_config(text: str, *, source: str = CONFIG_FILENAME) -> SemtagConfig:
    """Parse and validate ``semtag.toml`` content.

    Args:
        text: TOML text.
        source: Name used in error messages.

    Returns:
        A validated :class:`SemtagConfig` (``config_path`` unset).

    Raises:
        SemtagError: On malformed TOML, unknown keys or bad values.
    """
    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise SemtagError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {source}: {exc}',
            hint='Check the file for unbalanced quotes or brackets.',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()

    for key in raw:
        if key not in VALID_KEYS:
            suggestion = _suggest_key(key)
            hint = f"Did you mean '{suggestion}'?" if suggestion else f'Valid keys: {", ".join(sorted(VALID_KEYS))}.'
            raise SemtagError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {source}",
                hint=hint,
            )

    for key, value in raw.items():
        _validate_value_type(key, value, source=source)

    if 'prerelease' in raw:
        _validate_prerelease(raw['prerelease'])

    return SemtagConfig(**raw)


def load_config(path: Path, *, required: bool = False) -> SemtagConfig:
    """Load configuration from a file.

    Args:
        path: Path to ``semtag.toml``.
        required: Raise when the file is missing instead of falling back
            to defaults. Set when the path was given explicitly.

    Returns:
        A validated :class:`SemtagConfig`.

    Raises:
        SemtagError: If the file is missing (and required), unreadable
            or invalid.
    """
    if not path.is_file():
        if required:
            raise SemtagError(
                code=E.CONFIG_NOT_FOUND,
                message=f'Config file {path} does not exist',
                hint='Check the --config path.',
            )
        logger.debug('no_semtag_config', path=str(path))
        return SemtagConfig()

    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise SemtagError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {path}: {exc}',
        ) from exc

    config = parse_config(text, source=str(path))
    logger.debug('semtag_config_loaded', path=str(path))
    return dataclasses.replace(config, config_path=path)


__all__ = [
    'CONFIG_FILENAME',
    'VALID_KEYS',
    'SemtagConfig',
    'load_config',
    'parse_config',
]
