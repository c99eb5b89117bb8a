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

"""Conventional Commit grammar shared by bump resolution and changelogs.

Usage::

    from semtag.commit_parsing import CommitType, parse_commit

    cc = parse_commit('feat(auth)!: drop OAuth1')
    assert cc.type is CommitType.FEAT
    assert cc.scope == 'auth'
    assert cc.breaking

    # Unrecognized messages are values, not errors.
    assert not parse_commit('Updated the readme').recognized
"""

from semtag.commit_parsing._conventional import (
    BREAKING_MARKER,
    MERGE_PREFIX,
    ConventionalCommitParser,
)
from semtag.commit_parsing._log import LOG_SEPARATOR, split_commit_log
from semtag.commit_parsing._types import (
    ALLOWED_TYPES,
    BUMP_PRECEDENCE,
    BumpType,
    CommitParser,
    CommitType,
    ParsedCommit,
    ValidationResult,
    max_bump,
)

# Module-level grammar shared by every caller that does not inject one.
DEFAULT_PARSER = ConventionalCommitParser()


def parse_commit(message: str) -> ParsedCommit:
    """Classify a commit message with the default grammar."""
    return DEFAULT_PARSER.parse(message)


def validate_commit_message(message: str) -> ValidationResult:
    """Check a single commit message with the default grammar."""
    return DEFAULT_PARSER.validate(message)


__all__ = [
    'ALLOWED_TYPES',
    'BREAKING_MARKER',
    'BUMP_PRECEDENCE',
    'DEFAULT_PARSER',
    'LOG_SEPARATOR',
    'MERGE_PREFIX',
    'BumpType',
    'CommitParser',
    'CommitType',
    'ConventionalCommitParser',
    'ParsedCommit',
    'ValidationResult',
    'max_bump',
    'parse_commit',
    'split_commit_log',
    'validate_commit_message',
]
