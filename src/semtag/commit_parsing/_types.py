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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass, enum, or protocol: no I/O, no
logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class CommitType(Enum):
    """Conventional Commit types accepted by the grammar.

    ``UNRECOGNIZED`` tags every message that does not match, including
    merge commits (see :attr:`ParsedCommit.is_merge`).
    """

    FEAT = 'feat'
    FIX = 'fix'
    DOCS = 'docs'
    STYLE = 'style'
    REFACTOR = 'refactor'
    PERF = 'perf'
    TEST = 'test'
    BUILD = 'build'
    CI = 'ci'
    CHORE = 'chore'
    REVERT = 'revert'
    UNRECOGNIZED = 'unrecognized'


# Types the grammar accepts, in the order they are listed to users.
ALLOWED_TYPES: tuple[CommitType, ...] = tuple(t for t in CommitType if t is not CommitType.UNRECOGNIZED)


class BumpType(Enum):
    """Semver bump decisions, ordered by precedence (highest first).

    The strongest bump wins: ``feat:`` plus ``fix:`` is ``MINOR``.
    """

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    NONE = 'none'


# Bump precedence: lower index = higher precedence.
BUMP_PRECEDENCE: list[BumpType] = [
    BumpType.MAJOR,
    BumpType.MINOR,
    BumpType.PATCH,
    BumpType.NONE,
]


def max_bump(a: BumpType, b: BumpType) -> BumpType:
    """Return the higher-precedence bump type.

    >>> max_bump(BumpType.MINOR, BumpType.PATCH)
    <BumpType.MINOR: 'minor'>
    >>> max_bump(BumpType.NONE, BumpType.MAJOR)
    <BumpType.MAJOR: 'major'>
    """
    a_idx = BUMP_PRECEDENCE.index(a)
    b_idx = BUMP_PRECEDENCE.index(b)
    return BUMP_PRECEDENCE[min(a_idx, b_idx)]


@dataclass(frozen=True)
class ParsedCommit:
    """One commit message classified against the grammar.

    Derived entirely from :attr:`raw`; never persisted.

    Attributes:
        raw: The original commit message, body included.
        type: The commit type, or ``CommitType.UNRECOGNIZED``.
        subject: Text after ``": "`` on the first line. For unrecognized
            commits, the whole first line.
        scope: The scope between parentheses, or ``""``.
        breaking: ``!`` before the colon or a ``BREAKING CHANGE:``
            marker anywhere in the message.
        body: Everything after the first line, stripped.
        is_merge: The message starts with ``"Merge "``.
    """

    raw: str
    type: CommitType
    subject: str
    scope: str = ''
    breaking: bool = False
    body: str = ''
    is_merge: bool = False

    @property
    def recognized(self) -> bool:
        """Whether the message matched the Conventional Commit grammar."""
        return self.type is not CommitType.UNRECOGNIZED


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for a single designated commit message.

    Attributes:
        valid: Merge commits and grammar matches are valid.
        message: Human-readable format error, empty when valid.
    """

    valid: bool
    message: str = ''


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    The bump resolver and the changelog builder accept any object that
    implements this protocol, so both share one grammar instance.
    """

    def parse(self, message: str) -> ParsedCommit:
        """Classify a commit message.

        Args:
            message: The full commit message.

        Returns:
            A :class:`ParsedCommit`; unrecognized messages are returned
            with ``type=CommitType.UNRECOGNIZED``, never raised.
        """
        ...

    def validate(self, message: str) -> ValidationResult:
        """Check a single commit message for correct formatting."""
        ...
