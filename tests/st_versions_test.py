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

"""Tests for semtag.versions."""

from __future__ import annotations

import pytest
from semtag.commit_parsing import BumpType
from semtag.errors import E, SemtagError
from semtag.versions import ZERO, Version, parse_version


class TestParse:
    """Tests for Version.parse."""

    def test_release(self) -> None:
        """Plain major.minor.patch."""
        assert Version.parse('1.2.3') == Version(1, 2, 3)

    def test_leading_v(self) -> None:
        """A leading v is accepted."""
        assert Version.parse('v1.2.3') == Version(1, 2, 3)

    def test_prerelease(self) -> None:
        """Pre-release identifiers are kept."""
        v = Version.parse('1.4.0-feature-X.2')
        assert v.prerelease == 'feature-X.2'
        assert v.is_prerelease

    def test_build_metadata_dropped(self) -> None:
        """Build metadata is discarded."""
        assert Version.parse('1.2.3+build.7') == Version(1, 2, 3)

    @pytest.mark.parametrize('text', ['1.2', 'abc', '', 'v', '1.2.3.4', '01.2.3', '1.2.3-'])
    def test_invalid(self, text: str) -> None:
        """Malformed versions raise ST-VERSION-INVALID."""
        with pytest.raises(SemtagError) as exc_info:
            Version.parse(text)
        assert exc_info.value.code is E.VERSION_INVALID

    def test_soft_parse(self) -> None:
        """parse_version returns None instead of raising."""
        assert parse_version('nightly') is None
        assert parse_version('2.0.0') == Version(2)


class TestConstruction:
    """Tests for Version invariants."""

    def test_negative_rejected(self) -> None:
        """Components must be non-negative."""
        with pytest.raises(SemtagError):
            Version(-1, 0, 0)

    @pytest.mark.parametrize('pre', ['a..b', '.a', 'a.', 'a_b', 'rc 1'])
    def test_bad_prerelease_rejected(self, pre: str) -> None:
        """Pre-release identifiers must be dot-separated and non-empty."""
        with pytest.raises(SemtagError):
            Version(1, 0, 0, pre)

    def test_str(self) -> None:
        """String form with and without pre-release."""
        assert str(Version(1, 2, 3)) == '1.2.3'
        assert str(Version(2, 0, 0, 'rc.1')) == '2.0.0-rc.1'
        assert str(ZERO) == '0.0.0'

    def test_immutable(self) -> None:
        """Versions are frozen."""
        v = Version(1, 2, 3)
        with pytest.raises(AttributeError):
            v.major = 9  # type: ignore[misc]


class TestBump:
    """Tests for bump arithmetic."""

    @pytest.mark.parametrize(
        ('bump', 'expected'),
        [
            (BumpType.MAJOR, Version(2, 0, 0)),
            (BumpType.MINOR, Version(1, 3, 0)),
            (BumpType.PATCH, Version(1, 2, 4)),
            (BumpType.NONE, Version(1, 2, 3)),
        ],
    )
    def test_arithmetic(self, bump: BumpType, expected: Version) -> None:
        """major, minor and patch from 1.2.3."""
        assert Version(1, 2, 3).bump(bump) == expected

    def test_bump_ignores_prerelease(self) -> None:
        """The bump applies to the base and clears the pre-release."""
        assert Version(1, 4, 0, 'feature-X.0').bump(BumpType.MINOR) == Version(1, 5, 0)
        assert Version(1, 4, 0, 'feature-X.0').bump(BumpType.PATCH) == Version(1, 4, 1)

    def test_bump_returns_new_value(self) -> None:
        """The original is untouched."""
        v = Version(1, 2, 3)
        v.bump(BumpType.MAJOR)
        assert v == Version(1, 2, 3)

    def test_base_and_with_prerelease(self) -> None:
        """base drops and with_prerelease sets the suffix."""
        v = Version(1, 0, 0).with_prerelease('beta.1')
        assert v == Version(1, 0, 0, 'beta.1')
        assert v.base == Version(1, 0, 0)


class TestOrdering:
    """Tests for semver precedence."""

    def test_release_above_prerelease(self) -> None:
        """1.0.0 > 1.0.0-rc.1."""
        assert Version(1, 0, 0) > Version(1, 0, 0, 'rc.1')

    def test_numeric_prerelease_segments(self) -> None:
        """rc.10 > rc.2."""
        assert Version(1, 0, 0, 'rc.10') > Version(1, 0, 0, 'rc.2')

    def test_major_dominates(self) -> None:
        """2.0.0 > 1.99.99."""
        assert Version(2, 0, 0) > Version(1, 99, 99)

    def test_sorting(self) -> None:
        """sorted() follows precedence."""
        versions = [Version(1, 0, 0), Version(0, 9, 0), Version(1, 0, 0, 'alpha'), Version(1, 0, 1)]
        assert sorted(versions) == [Version(0, 9, 0), Version(1, 0, 0, 'alpha'), Version(1, 0, 0), Version(1, 0, 1)]
