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

"""Branch-scoped pre-release lines.

Every non-default branch gets its own pre-release counter, encoded in
the tag name::

    branch feature/X  →  sanitized "feature-X"

    v1.4.0-feature-X.0   first pre-release: the last release, unbumped
    v1.5.0-feature-X.1   next one: bump applied to 1.4.0, counter + 1
    v1.5.1-feature-X.2   ...

Only tags of the exact sanitized branch count. ``feature-X`` never sees
the counters of ``feature-X-2``.

Usage::

    from semtag.prerelease import highest_branch_prerelease, sanitize_branch

    sanitize_branch('feature/X')    # 'feature-X'
    highest_branch_prerelease(snapshot, 'feature-X')
    # BranchPrerelease(tag='v1.4.0-feature-X.0', version=..., counter=0)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from semtag.logging import get_logger
from semtag.tags import VERSION_TAG_PREFIX, TagSnapshot
from semtag.versions import Version, parse_version

logger = get_logger(__name__)

_UNSAFE_BRANCH_CHARS = re.compile(r'[^a-zA-Z0-9-]')


def sanitize_branch(branch: str) -> str:
    """Replace every character outside ``[a-zA-Z0-9-]`` with ``-``."""
    return _UNSAFE_BRANCH_CHARS.sub('-', branch)


def branch_tag_pattern(sanitized_branch: str) -> re.Pattern[str]:
    """Regex for ``v<M>.<m>.<p>-<branch>.<N>`` capturing ``N``."""
    return re.compile(
        re.escape(VERSION_TAG_PREFIX) + r'\d+\.\d+\.\d+-' + re.escape(sanitized_branch) + r'\.(\d+)$',
    )


def prerelease_label(sanitized_branch: str, counter: int) -> str:
    """Pre-release identifier for a branch counter, e.g. ``feature-X.3``."""
    return f'{sanitized_branch}.{counter}'


@dataclass(frozen=True)
class BranchPrerelease:
    """The newest pre-release tag of one branch.

    Attributes:
        tag: The tag name.
        version: The parsed version of the tag.
        counter: The trailing pre-release counter.
    """

    tag: str
    version: Version
    counter: int


def highest_branch_prerelease(snapshot: TagSnapshot, sanitized_branch: str) -> BranchPrerelease | None:
    """Find the branch pre-release tag with the highest counter.

    Tags that match the pattern but do not parse as semver are skipped.
    Equal counters are broken by version precedence so the result does
    not depend on tag order.

    Args:
        snapshot: Existing tags.
        sanitized_branch: Output of :func:`sanitize_branch`.

    Returns:
        The highest :class:`BranchPrerelease`, or ``None``.
    """
    pattern = branch_tag_pattern(sanitized_branch)
    best: BranchPrerelease | None = None
    for tag in snapshot.tags:
        m = pattern.match(tag)
        if m is None:
            continue
        version = parse_version(tag[len(VERSION_TAG_PREFIX) :])
        if version is None:
            logger.debug('prerelease_tag_skipped', tag=tag)
            continue
        candidate = BranchPrerelease(tag=tag, version=version, counter=int(m.group(1)))
        if best is None or (candidate.counter, candidate.version) > (best.counter, best.version):
            best = candidate

    if best is not None:
        logger.debug('prerelease_tag_found', branch=sanitized_branch, tag=best.tag, counter=best.counter)
    return best


__all__ = [
    'BranchPrerelease',
    'branch_tag_pattern',
    'highest_branch_prerelease',
    'prerelease_label',
    'sanitize_branch',
]
