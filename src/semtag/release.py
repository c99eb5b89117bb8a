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

"""End-to-end release planning.

:func:`plan_release` wires the engine together for one invocation. It
takes plain data the caller gathered from the repository and returns a
:class:`ReleasePlan` describing what to do; it never touches git, the
network or the filesystem, so running it twice on the same inputs is a
dry run by construction.

Pipeline::

    latest commit ──▶ validate ──(invalid + validate_latest_commit)──▶ error
    messages ─────▶ resolve_bump ──(none)──▶ plan, should_tag=False
                        │
                        ▼
    override? ──yes──▶ resolve_override ──▶ version
        │no
        ▼
    calculate_next_version (release / pre-release regime) ──▶ version
                        │
                        ▼
                   format_tag ──▶ tag, tag message
                        │
    messages ─────▶ build_changelog (release regime only) ──▶ fragment

Usage::

    from semtag.release import ReleaseInputs, plan_release

    plan = plan_release(
        ReleaseInputs(
            messages=('feat: add X', 'fix: typo'),
            branch='main',
            tags=TagSnapshot.from_names(['v1.2.3']),
        ),
    )
    assert plan.tag == 'v1.3.0'
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any

from semtag.bump import resolve_bump
from semtag.changelog import build_changelog, render_changelog
from semtag.commit_parsing import DEFAULT_PARSER, BumpType, CommitParser, ValidationResult
from semtag.config import SemtagConfig
from semtag.errors import E, ErrorInfo
from semtag.logging import get_logger
from semtag.tags import VERSION_TAG_PREFIX, TagSnapshot, format_tag
from semtag.versioning import (
    VersionResult,
    calculate_next_version,
    resolve_override,
    resolve_prerelease_mode,
)
from semtag.versions import ZERO, Version

logger = get_logger(__name__)


def commit_range_start(current: Version | None) -> str:
    """Ref the commit range starts after; empty means all history."""
    if current is None or current == ZERO:
        return ''
    return f'{VERSION_TAG_PREFIX}{current}'


def tag_message(tag: str) -> str:
    """Annotation for the release tag."""
    return f'Release {tag} [skip-ci]'


def changelog_commit_message(tag: str) -> str:
    """Commit message for the changelog update."""
    return f'chore(release): update changelog for {tag} [skip-ci]'


@dataclass(frozen=True)
class ReleaseInputs:
    """Snapshot of repository state for one planning run.

    Attributes:
        messages: Commit messages since the last version tag.
        branch: Active branch name.
        tags: Every existing tag name.
        current: Highest version tag. Looked up in ``tags`` when unset;
            a string is parsed and an unparsable one is an error.
        latest_release: Highest release version. Looked up in ``tags``
            when unset.
        latest_commit: Message of the commit being released, checked
            against the grammar. ``None`` skips the check.
        override: Explicit version (``--set-version``).
        tag_format: Tag template; empty means the configured one.
        date: Changelog date; today when unset.
        prerelease_requested: Force the pre-release regime.
        changelog: Render a changelog; ``None`` means the configured
            setting.
    """

    messages: tuple[str, ...] = ()
    branch: str = ''
    tags: TagSnapshot = field(default_factory=TagSnapshot)
    current: Version | str | None = None
    latest_release: Version | None = None
    latest_commit: str | None = None
    override: str = ''
    tag_format: str = ''
    date: datetime.date | None = None
    prerelease_requested: bool = False
    changelog: bool | None = None


@dataclass(frozen=True)
class ReleasePlan:
    """Everything the caller needs to tag and publish a release.

    Attributes:
        bump: The resolved bump decision.
        version: Next version, unset for ``none`` or on error.
        tag: Rendered tag name, empty when there is nothing to tag.
        prerelease: Whether the pre-release regime was used.
        should_tag: Whether the caller should create ``tag``.
        validation: Verdict for ``latest_commit``, if one was given.
        changelog: Markdown fragment to prepend, empty when none.
        changelog_has_content: Whether the fragment lists any change.
        tag_message: Annotation for the tag.
        changelog_commit_message: Message for committing the changelog.
        error: Why the run must be aborted, if it must.
    """

    bump: BumpType = BumpType.NONE
    version: Version | None = None
    tag: str = ''
    prerelease: bool = False
    should_tag: bool = False
    validation: ValidationResult | None = None
    changelog: str = ''
    changelog_has_content: bool = False
    tag_message: str = ''
    changelog_commit_message: str = ''
    error: ErrorInfo | None = None

    @property
    def ok(self) -> bool:
        """Return True if the run need not be aborted."""
        return self.error is None

    def as_dict(self) -> dict[str, Any]:
        """JSON-friendly view of the plan."""
        return {
            'bump': self.bump.value,
            'version': str(self.version) if self.version is not None else None,
            'tag': self.tag,
            'prerelease': self.prerelease,
            'should_tag': self.should_tag,
            'valid': self.validation.valid if self.validation is not None else None,
            'changelog': self.changelog,
            'changelog_has_content': self.changelog_has_content,
            'tag_message': self.tag_message,
            'changelog_commit_message': self.changelog_commit_message,
            'error': (
                {'code': self.error.code.value, 'message': self.error.message, 'hint': self.error.hint}
                if self.error is not None
                else None
            ),
        }


def plan_release(
    inputs: ReleaseInputs,
    config: SemtagConfig | None = None,
    *,
    parser: CommitParser | None = None,
) -> ReleasePlan:
    """Plan the next release from a snapshot of repository state.

    Args:
        inputs: Commit messages, tags, branch and overrides.
        config: Settings; defaults when omitted.
        parser: Grammar shared by validation, bump resolution and the
            changelog. Defaults to the Conventional Commit parser.

    Returns:
        A :class:`ReleasePlan`. Check :attr:`ReleasePlan.ok` before
        acting on it; errors are values, never raised.
    """
    cfg = config or SemtagConfig()
    grammar = parser or DEFAULT_PARSER
    prerelease = resolve_prerelease_mode(
        inputs.branch,
        requested=inputs.prerelease_requested,
        mode=cfg.prerelease,
        default_branch=cfg.default_branch,
    )

    validation: ValidationResult | None = None
    if inputs.latest_commit is not None:
        validation = grammar.validate(inputs.latest_commit)
        if not validation.valid:
            logger.warning('latest_commit_invalid', strict=cfg.validate_latest_commit)
            if cfg.validate_latest_commit:
                return ReleasePlan(
                    prerelease=prerelease,
                    validation=validation,
                    error=ErrorInfo(
                        code=E.COMMIT_INVALID_FORMAT,
                        message=validation.message.strip(),
                        hint='Reword the commit, or set validate_latest_commit = false.',
                    ),
                )

    bump = resolve_bump(inputs.messages, parser=grammar)
    if bump is BumpType.NONE:
        logger.info('no_bump_needed', commits=len(inputs.messages))
        return ReleasePlan(bump=bump, prerelease=prerelease, validation=validation)

    result: VersionResult
    if inputs.override:
        result = resolve_override(inputs.override, inputs.tags)
    else:
        current = inputs.current if inputs.current is not None else inputs.tags.latest_version()
        result = calculate_next_version(
            current,
            bump,
            branch=inputs.branch,
            prerelease=prerelease,
            snapshot=inputs.tags,
            latest_release=inputs.latest_release,
        )
    if result.error is not None or result.version is None:
        return ReleasePlan(bump=bump, prerelease=prerelease, validation=validation, error=result.error)

    version = result.version
    tag = format_tag(version, inputs.tag_format or cfg.tag_format)

    changelog = ''
    has_content = False
    wants_changelog = inputs.changelog if inputs.changelog is not None else cfg.changelog
    if wants_changelog and not prerelease:
        section = build_changelog(
            inputs.messages,
            header_label=tag,
            date=inputs.date or datetime.date.today(),
            parser=grammar,
        )
        has_content = section.has_content
        if has_content:
            changelog = render_changelog(section)

    logger.info('release_planned', bump=bump, version=version, tag=tag, prerelease=prerelease)
    return ReleasePlan(
        bump=bump,
        version=version,
        tag=tag,
        prerelease=prerelease,
        should_tag=True,
        validation=validation,
        changelog=changelog,
        changelog_has_content=has_content,
        tag_message=tag_message(tag),
        changelog_commit_message=changelog_commit_message(tag) if has_content else '',
    )


__all__ = [
    'ReleaseInputs',
    'ReleasePlan',
    'changelog_commit_message',
    'commit_range_start',
    'plan_release',
    'tag_message',
]
