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

"""Semantic version value type.

:class:`Version` is an immutable ``major.minor.patch[-prerelease]``
record. Parsing and precedence come from the
`semver <https://python-semver.readthedocs.io/>`_ package; bump
arithmetic is done here so that it always works on the
``major.minor.patch`` base and never depends on the pre-release field.

Precedence follows semver: ``1.4.0-rc.1 < 1.4.0`` and numeric
pre-release identifiers compare numerically (``rc.2 < rc.10``).

Usage::

    from semtag.versions import Version

    v = Version.parse('v1.2.3')
    v.bump(BumpType.MINOR)                  # Version(1, 3, 0)
    v.with_prerelease('feature-x.0')        # 1.2.3-feature-x.0
    Version.parse('1.4.0-rc.1') < Version.parse('1.4.0')   # True
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, replace

import semver

from semtag.commit_parsing import BumpType
from semtag.errors import E, SemtagError

# Dot-separated, non-empty identifiers of [0-9A-Za-z-].
_PRERELEASE_RE = re.compile(r'^[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*$')


@functools.total_ordering
@dataclass(frozen=True)
class Version:
    """An immutable semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dot-separated pre-release identifiers, or ``""`` for
            a release.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: str = ''

    def __post_init__(self) -> None:
        """Reject negative numbers and malformed pre-release strings."""
        if min(self.major, self.minor, self.patch) < 0:
            raise SemtagError(
                code=E.VERSION_INVALID,
                message=f'Version components must be non-negative, got {self.major}.{self.minor}.{self.patch}',
            )
        if self.prerelease and not _PRERELEASE_RE.match(self.prerelease):
            raise SemtagError(
                code=E.VERSION_INVALID,
                message=f'Invalid pre-release identifier {self.prerelease!r}',
                hint='Pre-release identifiers are dot-separated and use only [0-9A-Za-z-].',
            )

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string, with or without a leading ``v``.

        Build metadata (``+build.5``) is accepted and dropped.

        Raises:
            SemtagError: ``ST-VERSION-INVALID`` if the text is not semver.
        """
        candidate = text.strip()
        if candidate.startswith('v'):
            candidate = candidate[1:]
        try:
            parsed = semver.Version.parse(candidate)
        except ValueError as exc:
            raise SemtagError(
                code=E.VERSION_INVALID,
                message=f'Invalid version format: {text!r}',
                hint='Use MAJOR.MINOR.PATCH with an optional -prerelease, e.g. 1.2.3 or 1.2.3-rc.1.',
            ) from exc
        return cls(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=parsed.prerelease or '',
        )

    @property
    def is_prerelease(self) -> bool:
        """Whether a pre-release suffix is set."""
        return bool(self.prerelease)

    @property
    def base(self) -> Version:
        """The ``major.minor.patch`` part without pre-release."""
        return replace(self, prerelease='')

    def bump(self, bump: BumpType) -> Version:
        """Apply a bump to the ``major.minor.patch`` base.

        The pre-release field is ignored and cleared. ``BumpType.NONE``
        returns the base unchanged.
        """
        if bump is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump is BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self.base

    def with_prerelease(self, prerelease: str) -> Version:
        """Return a copy carrying ``prerelease``."""
        return replace(self, prerelease=prerelease)

    def to_semver(self) -> semver.Version:
        """Convert to a :class:`semver.Version` for precedence checks."""
        return semver.Version(self.major, self.minor, self.patch, prerelease=self.prerelease or None)

    def __lt__(self, other: object) -> bool:
        """Semver precedence."""
        if not isinstance(other, Version):
            return NotImplemented
        return self.to_semver() < other.to_semver()

    def __str__(self) -> str:
        """Format as ``1.2.3`` or ``1.2.3-rc.1``."""
        core = f'{self.major}.{self.minor}.{self.patch}'
        return f'{core}-{self.prerelease}' if self.prerelease else core


# Base for repositories without any version tags.
ZERO = Version()


def parse_version(text: str) -> Version | None:
    """Parse ``text`` or return ``None`` when it is not a version.

    For scanning tag lists, where non-version tags are expected.
    """
    try:
        return Version.parse(text)
    except SemtagError:
        return None


__all__ = [
    'ZERO',
    'Version',
    'parse_version',
]
