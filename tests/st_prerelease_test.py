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

"""Tests for semtag.prerelease."""

from __future__ import annotations

import pytest
from semtag.prerelease import (
    branch_tag_pattern,
    highest_branch_prerelease,
    prerelease_label,
    sanitize_branch,
)
from semtag.tags import TagSnapshot
from semtag.versions import Version


class TestSanitizeBranch:
    """Tests for sanitize_branch."""

    @pytest.mark.parametrize(
        ('branch', 'expected'),
        [
            ('feature/X', 'feature-X'),
            ('fix/issue_42', 'fix-issue-42'),
            ('release-1.x', 'release-1-x'),
            ('plain', 'plain'),
            ('a b/c.d', 'a-b-c-d'),
        ],
    )
    def test_sanitize(self, branch: str, expected: str) -> None:
        """Characters outside [a-zA-Z0-9-] become hyphens."""
        assert sanitize_branch(branch) == expected

    def test_label(self) -> None:
        """Labels are <branch>.<counter>."""
        assert prerelease_label('feature-X', 3) == 'feature-X.3'


class TestBranchTagPattern:
    """Tests for the per-branch tag pattern."""

    def test_matches_own_branch(self) -> None:
        """Captures the counter."""
        m = branch_tag_pattern('feature-X').match('v1.4.0-feature-X.7')
        assert m is not None
        assert m.group(1) == '7'

    def test_rejects_other_branches(self) -> None:
        """A longer branch name with the same prefix does not match."""
        assert branch_tag_pattern('feature').match('v1.4.0-feature-X.0') is None

    def test_rejects_non_numeric_counter(self) -> None:
        """The counter must be an integer."""
        assert branch_tag_pattern('feature-X').match('v1.4.0-feature-X.beta') is None


class TestHighestBranchPrerelease:
    """Tests for highest_branch_prerelease."""

    def test_none_when_no_tags(self) -> None:
        """No branch tags gives None."""
        snapshot = TagSnapshot.from_names(['v1.4.0', 'v1.5.0-other.3'])
        assert highest_branch_prerelease(snapshot, 'feature-X') is None

    def test_highest_counter_wins(self) -> None:
        """The counter decides, numerically."""
        snapshot = TagSnapshot.from_names(
            ['v1.4.0-feature-X.2', 'v1.4.0-feature-X.10', 'v1.5.0-feature-X.9'],
        )
        best = highest_branch_prerelease(snapshot, 'feature-X')
        assert best is not None
        assert best.counter == 10
        assert best.tag == 'v1.4.0-feature-X.10'
        assert best.version == Version(1, 4, 0, 'feature-X.10')

    def test_tie_broken_by_version(self) -> None:
        """Equal counters pick the higher version regardless of order."""
        names = ['v1.5.0-feature-X.1', 'v1.4.0-feature-X.1']
        for order in (names, list(reversed(names))):
            best = highest_branch_prerelease(TagSnapshot.from_names(order), 'feature-X')
            assert best is not None
            assert best.version == Version(1, 5, 0, 'feature-X.1')

    def test_unparsable_skipped(self) -> None:
        """Matching tags that are not semver are skipped."""
        snapshot = TagSnapshot.from_names(['v01.4.0-feature-X.5', 'v1.4.0-feature-X.1'])
        best = highest_branch_prerelease(snapshot, 'feature-X')
        assert best is not None
        assert best.counter == 1
