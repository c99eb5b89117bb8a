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

"""Bump resolution: reduce a commit range to one semver decision.

Conventional Commit to bump mapping::

    BREAKING CHANGE (or ``!``)  →  major   (ends the scan)
    feat:                       →  minor
    fix:                        →  patch
    everything else             →  none
    merges, unrecognized        →  skipped

The decision is a left fold of :func:`commit_bump` over the range with
:func:`~semtag.commit_parsing.max_bump` as the join, so it only ever
rises and the order of the commits does not matter.

Usage::

    from semtag.bump import resolve_bump

    resolve_bump(['fix: typo', 'feat: add X', 'docs: readme'])
    # BumpType.MINOR
"""

from __future__ import annotations

from collections.abc import Iterable

from semtag.commit_parsing import (
    DEFAULT_PARSER,
    BumpType,
    CommitParser,
    CommitType,
    ParsedCommit,
    max_bump,
)
from semtag.logging import get_logger

logger = get_logger(__name__)

_TYPE_BUMPS: dict[CommitType, BumpType] = {
    CommitType.FEAT: BumpType.MINOR,
    CommitType.FIX: BumpType.PATCH,
}


def commit_bump(cc: ParsedCommit) -> BumpType:
    """Return the bump a single parsed commit asks for."""
    if cc.is_merge or not cc.recognized:
        return BumpType.NONE
    if cc.breaking:
        return BumpType.MAJOR
    return _TYPE_BUMPS.get(cc.type, BumpType.NONE)


def fold_bumps(commits: Iterable[ParsedCommit]) -> BumpType:
    """Fold parsed commits into one decision, stopping at the first major."""
    decision = BumpType.NONE
    for cc in commits:
        decision = max_bump(decision, commit_bump(cc))
        if decision is BumpType.MAJOR:
            logger.debug('breaking_change_found', subject=cc.subject)
            break
    return decision


def resolve_bump(
    messages: Iterable[str],
    *,
    parser: CommitParser | None = None,
) -> BumpType:
    """Resolve the bump for an ordered sequence of raw commit messages.

    Args:
        messages: Raw commit messages for the range being released.
        parser: Grammar to classify with. Defaults to the shared
            Conventional Commit parser.

    Returns:
        The strongest bump in the range, ``BumpType.NONE`` when nothing
        bump-worthy was found.
    """
    grammar = parser or DEFAULT_PARSER
    decision = fold_bumps(grammar.parse(msg) for msg in messages if msg.strip())
    logger.debug('bump_resolved', bump=decision)
    return decision


__all__ = [
    'commit_bump',
    'fold_bumps',
    'resolve_bump',
]
