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

"""Conventional Commits parser.

Pure implementation: depends only on ``re`` and :mod:`._types`.
No I/O, no logging, no side effects.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from semtag.commit_parsing._types import (
    ALLOWED_TYPES,
    CommitType,
    ParsedCommit,
    ValidationResult,
)

# Marker that flags a breaking change anywhere in the message.
BREAKING_MARKER = 'BREAKING CHANGE:'

# Merge commits are always valid and never scored.
MERGE_PREFIX = 'Merge '

_FORMAT_ERROR_TEMPLATE = """
Invalid commit message format: "{message}"

Please follow the Conventional Commits specification:
<type>[optional scope]: <description>

Available types: {types}

Example: feat(auth): add login functionality"""


def _compile_grammar(types: Iterable[CommitType]) -> re.Pattern[str]:
    """Build the first-line pattern ``type(scope)!: subject``.

    A dangling ``(`` with no closing paren is tolerated and yields no scope.
    """
    alternation = '|'.join(re.escape(t.value) for t in types)
    return re.compile(
        rf'^(?P<type>{alternation})'
        r'(?:\((?P<scope>[^()\r\n]*)\)|\()?'
        r'(?P<breaking>!)?'
        r': (?P<subject>.*)$',
    )


class ConventionalCommitParser:
    """Parser for `Conventional Commits <https://www.conventionalcommits.org/>`_.

    The grammar is compiled once in the constructor and never mutated,
    so a single instance can be shared by the bump resolver and the
    changelog builder.
    """

    def __init__(self, types: Iterable[CommitType] = ALLOWED_TYPES) -> None:
        """Compile the grammar for the given commit types."""
        self.types: tuple[CommitType, ...] = tuple(t for t in types if t is not CommitType.UNRECOGNIZED)
        self.pattern: re.Pattern[str] = _compile_grammar(self.types)

    def parse(self, message: str) -> ParsedCommit:
        """Classify a commit message.

        Only the first line is matched against the grammar; the rest of
        the message becomes :attr:`ParsedCommit.body` and is searched for
        the ``BREAKING CHANGE:`` marker.

        Args:
            message: The full commit message.

        Returns:
            A :class:`ParsedCommit`. Merges and non-matching messages
            come back with ``type=CommitType.UNRECOGNIZED``.
        """
        stripped = message.strip()
        lines = stripped.splitlines()
        first_line = lines[0] if lines else ''
        body = '\n'.join(lines[1:]).strip()

        if stripped.startswith(MERGE_PREFIX):
            return ParsedCommit(
                raw=message,
                type=CommitType.UNRECOGNIZED,
                subject=first_line,
                body=body,
                is_merge=True,
            )

        match = self.pattern.match(first_line)
        if match is None:
            return ParsedCommit(
                raw=message,
                type=CommitType.UNRECOGNIZED,
                subject=first_line,
                body=body,
            )

        breaking = bool(match.group('breaking')) or BREAKING_MARKER in stripped
        return ParsedCommit(
            raw=message,
            type=CommitType(match.group('type')),
            subject=match.group('subject'),
            scope=match.group('scope') or '',
            breaking=breaking,
            body=body,
        )

    def validate(self, message: str) -> ValidationResult:
        """Check one commit message, typically the latest on the branch.

        Args:
            message: The full commit message.

        Returns:
            A valid verdict for merges and matches, otherwise an invalid
            verdict carrying :meth:`format_error`.
        """
        cc = self.parse(message)
        if cc.is_merge or cc.recognized:
            return ValidationResult(valid=True)
        return ValidationResult(valid=False, message=self.format_error(message))

    def format_error(self, message: str) -> str:
        """Render the format-error text listing the allowed types."""
        return _FORMAT_ERROR_TEMPLATE.format(
            message=message.strip(),
            types=', '.join(t.value for t in self.types),
        )
