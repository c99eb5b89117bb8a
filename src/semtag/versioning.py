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

"""Next-version calculation.

Two regimes decide the next version::

    release regime (trunk)
        current ──bump──▶ next            1.2.3 + minor → 1.3.0
        (a "none" bump falls back to patch)

    pre-release regime (any other branch)
        highest v<M.m.p>-<branch>.<N> tag?
          yes → bump(M.m.p) + "-<branch>.<N+1>"   v1.4.0-feat-x.0 + minor → 1.5.0-feat-x.1
          no  → latest release + "-<branch>.0"    bump ignored: 1.4.0 → 1.4.0-feat-x.0

The first pre-release of a branch is a snapshot of the last release, not
a bump. Downstream tooling relies on that numbering.

Every public function here returns a :class:`VersionResult` instead of
raising: input-format problems come back as
:class:`~semtag.errors.ErrorInfo` values and the caller decides whether
to abort.

Usage::

    from semtag.versioning import calculate_next_version

    result = calculate_next_version(
        Version(1, 4, 0),
        BumpType.MINOR,
        branch='feature/X',
        prerelease=True,
        snapshot=TagSnapshot.from_names(['v1.4.0']),
    )
    assert str(result.version) == '1.4.0-feature-X.0'
"""

from __future__ import annotations

from dataclasses import dataclass

from semtag.commit_parsing import BumpType
from semtag.errors import E, ErrorInfo, SemtagError
from semtag.logging import get_logger
from semtag.prerelease import highest_branch_prerelease, prerelease_label, sanitize_branch
from semtag.tags import VERSION_TAG_PREFIX, TagSnapshot
from semtag.versions import ZERO, Version

logger = get_logger(__name__)

# Trunk names assumed when no default branch is configured.
FALLBACK_DEFAULT_BRANCHES: frozenset[str] = frozenset({'main', 'master'})

# Accepted values of the ``prerelease`` config key.
PRERELEASE_MODES: frozenset[str] = frozenset({'auto', 'always', 'never'})


@dataclass(frozen=True)
class VersionResult:
    """A calculated version or the reason there is none.

    Attributes:
        version: The version, when calculation succeeded.
        error: The input error, when it did not.
    """

    version: Version | None = None
    error: ErrorInfo | None = None

    @property
    def ok(self) -> bool:
        """Return True if a version was produced."""
        return self.error is None and self.version is not None


def is_default_branch(branch: str, default_branch: str = '') -> bool:
    """Whether ``branch`` is the trunk.

    Args:
        branch: The branch being released.
        default_branch: The configured or detected trunk name. Empty
            means ``main`` or ``master``.
    """
    if default_branch:
        return branch == default_branch
    return branch in FALLBACK_DEFAULT_BRANCHES


def resolve_prerelease_mode(
    branch: str,
    *,
    requested: bool = False,
    mode: str = 'auto',
    default_branch: str = '',
) -> bool:
    """Decide whether a run is on a pre-release line.

    An explicit request always wins. Otherwise ``always`` and ``never``
    are taken literally and ``auto`` turns every non-default branch into
    a pre-release line.
    """
    if requested or mode == 'always':
        return True
    if mode == 'never':
        return False
    prerelease = not is_default_branch(branch, default_branch)
    if prerelease:
        logger.info('prerelease_auto_enabled', branch=branch)
    return prerelease


def _coerce_current(current: Version | str | None) -> Version:
    """Turn the caller's current version into a :class:`Version`."""
    if current is None:
        return ZERO
    if isinstance(current, Version):
        return current
    return Version.parse(current)


def _next_release(current: Version, bump: BumpType) -> Version:
    """Release regime: bump the current version, patch by default."""
    effective = bump if bump is not BumpType.NONE else BumpType.PATCH
    return current.bump(effective)


def _next_prerelease(
    bump: BumpType,
    branch: str,
    snapshot: TagSnapshot,
    latest_release: Version | None,
) -> Version:
    """Pre-release regime, keyed on the sanitized branch name."""
    sanitized = sanitize_branch(branch)
    highest = highest_branch_prerelease(snapshot, sanitized)

    if highest is not None:
        next_version = highest.version.bump(bump).with_prerelease(
            prerelease_label(sanitized, highest.counter + 1),
        )
        logger.debug('prerelease_incremented', previous=highest.tag, version=next_version)
        return next_version

    base = latest_release if latest_release is not None else snapshot.latest_release()
    first = (base or ZERO).base.with_prerelease(prerelease_label(sanitized, 0))
    logger.debug('prerelease_started', branch=sanitized, base=base or ZERO, version=first)
    return first


def calculate_next_version(
    current: Version | str | None,
    bump: BumpType,
    *,
    branch: str = '',
    prerelease: bool = False,
    snapshot: TagSnapshot | None = None,
    latest_release: Version | None = None,
) -> VersionResult:
    """Calculate the next version.

    Args:
        current: Highest existing version (``None`` means ``0.0.0``). A
            string is parsed; an unparsable one is an input error.
        bump: The resolved bump decision.
        branch: Branch being released; names the pre-release line.
        prerelease: Use the pre-release regime.
        snapshot: Existing tags, scanned for this branch's pre-releases.
        latest_release: Highest release version. Looked up in
            ``snapshot`` when omitted.

    Returns:
        A :class:`VersionResult`; ``error`` is set for input-format
        problems (``ST-VERSION-INVALID``).
    """
    tags = snapshot or TagSnapshot()
    try:
        current_version = _coerce_current(current)
        if prerelease:
            version = _next_prerelease(bump, branch, tags, latest_release)
        else:
            version = _next_release(current_version, bump)
    except SemtagError as exc:
        logger.debug('version_calculation_failed', code=exc.code, message=exc.info.message)
        return VersionResult(error=exc.info)

    logger.info(
        'next_version_calculated',
        current=current_version,
        bump=bump,
        prerelease=prerelease,
        version=version,
    )
    return VersionResult(version=version)


def resolve_override(text: str, snapshot: TagSnapshot | None = None) -> VersionResult:
    """Validate an explicit ``--set-version`` override.

    Args:
        text: The override, with or without a leading ``v``.
        snapshot: Existing tags; the override must not be tagged yet.

    Returns:
        A :class:`VersionResult` with ``ST-VERSION-INVALID`` or
        ``ST-VERSION-TAG-EXISTS`` on failure. Never corrected silently.
    """
    tags = snapshot or TagSnapshot()
    try:
        version = Version.parse(text)
    except SemtagError as exc:
        return VersionResult(error=exc.info)

    tag = f'{VERSION_TAG_PREFIX}{version}'
    if tags.exists(tag):
        return VersionResult(
            error=ErrorInfo(
                code=E.VERSION_TAG_EXISTS,
                message=f'Version {tag} already exists as a tag.',
                hint='Pick a version that has not been released, or drop --set-version.',
            ),
        )

    logger.info('version_override', version=version)
    return VersionResult(version=version)


__all__ = [
    'FALLBACK_DEFAULT_BRANCHES',
    'PRERELEASE_MODES',
    'VersionResult',
    'calculate_next_version',
    'is_default_branch',
    'resolve_override',
    'resolve_prerelease_mode',
]
