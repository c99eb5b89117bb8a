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

"""Structured errors for semtag.

Every error has a unique ``ST-NAMED-KEY`` code, a human-readable message
and an optional hint.

Errors travel in two shapes::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Shape               │ Where it is used                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ErrorInfo (value)   │ Returned inside results by the version engine  │
    │                     │ (VersionResult.error, ReleasePlan.error). The  │
    │                     │ caller decides whether to abort.               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ SemtagError (raise) │ Config loading, strict Version.parse, and the  │
    │                     │ CLI turning a failed plan into an exit code.   │
    └─────────────────────┴────────────────────────────────────────────────┘

Code categories::

    ST-CONFIG-*     Configuration errors
    ST-VERSION-*    Version input errors (override, current version)
    ST-COMMIT-*     Commit message validation

Usage::

    from semtag.errors import E, SemtagError

    raise SemtagError(
        code=E.CONFIG_INVALID_KEY,
        message="Unknown key 'tag_fromat' in semtag.toml",
        hint="Did you mean 'tag_format'?",
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """All semtag diagnostic codes."""

    # Configuration
    CONFIG_NOT_FOUND = 'ST-CONFIG-NOT-FOUND'
    CONFIG_PARSE_ERROR = 'ST-CONFIG-PARSE-ERROR'
    CONFIG_INVALID_KEY = 'ST-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'ST-CONFIG-INVALID-VALUE'

    # Versioning
    VERSION_INVALID = 'ST-VERSION-INVALID'
    VERSION_TAG_EXISTS = 'ST-VERSION-TAG-EXISTS'

    # Commit validation
    COMMIT_INVALID_FORMAT = 'ST-COMMIT-INVALID-FORMAT'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error.

    Attributes:
        code: The ``ST-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class SemtagError(Exception):
    """Base exception for all semtag errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @classmethod
    def from_info(cls, info: ErrorInfo) -> SemtagError:
        """Raise-able wrapper around an error value."""
        return cls(code=info.code, message=info.message, hint=info.hint)

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='semtag.toml is not valid TOML.',
        hint='Check the file for unbalanced quotes or brackets.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='semtag.toml contains an unknown key.',
        hint='Valid keys: tag_format, default_branch, prerelease, changelog, validate_latest_commit.',
    ),
    E.VERSION_INVALID: ErrorInfo(
        code=E.VERSION_INVALID,
        message='A version string is not valid semantic versioning.',
        hint='Use MAJOR.MINOR.PATCH with an optional -prerelease, e.g. 1.2.3 or 1.2.3-rc.1.',
    ),
    E.VERSION_TAG_EXISTS: ErrorInfo(
        code=E.VERSION_TAG_EXISTS,
        message='The requested version is already tagged.',
        hint='Pick a version that has not been released, or drop --set-version.',
    ),
    E.COMMIT_INVALID_FORMAT: ErrorInfo(
        code=E.COMMIT_INVALID_FORMAT,
        message='The latest commit message does not follow Conventional Commits.',
        hint='Reword it as <type>[optional scope]: <description>, e.g. feat(auth): add login.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"ST-VERSION-INVALID"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: SemtagError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style.

    Output format::

        error[ST-VERSION-INVALID]: Invalid version format: '1.2'
          |
          = hint: Use MAJOR.MINOR.PATCH ...

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'ErrorCode',
    'ErrorInfo',
    'SemtagError',
    'explain',
    'render_error',
]
