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

"""Changelog fragments from Conventional Commits.

The builder re-parses the same commit range used for bump resolution
(a separate pass, nothing is shared) and groups it into four sections::

    ┌──────────────────────┬──────────────────────────────────────────────┐
    │ Section              │ What goes in                                 │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ BREAKING CHANGES     │ ``!`` or ``BREAKING CHANGE:`` commits, only  │
    │                      │ here, never again under their own type       │
    │ Features             │ feat                                         │
    │ Bug Fixes            │ fix                                          │
    │ Other Changes        │ refactor, perf, build, ci, revert, plus the  │
    │                      │ first line of unrecognized commits           │
    └──────────────────────┴──────────────────────────────────────────────┘

docs, style, test and chore commits are dropped, as are merges and any
commit carrying a skip marker (``[skip-ci]``, ``[ci skip]``,
``skip-checks: true``; case-insensitive).

Rendered fragment (the bullet format is a compatibility contract)::

    ## v1.3.0 (2026-10-19)

    ### BREAKING CHANGES

    - **BREAKING CHANGE:** drop Python 3.9
      Python 3.9 reached end of life.

    ### Features

    - **feat:** add login

Usage::

    from semtag.changelog import build_changelog, prepend_changelog, render_changelog

    section = build_changelog(messages, header_label='v1.3.0', date=today)
    if section.has_content:
        text = prepend_changelog(existing, render_changelog(section))
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from dataclasses import dataclass

from semtag.commit_parsing import (
    BREAKING_MARKER,
    DEFAULT_PARSER,
    CommitParser,
    CommitType,
    ParsedCommit,
)
from semtag.logging import get_logger

logger = get_logger(__name__)

# Lower-cased substrings that keep a commit out of release notes.
SKIP_MARKERS: tuple[str, ...] = ('[skip-ci]', '[ci skip]', 'skip-checks: true')

# Types that never show up in a changelog.
DROPPED_TYPES: frozenset[CommitType] = frozenset({
    CommitType.DOCS,
    CommitType.STYLE,
    CommitType.TEST,
    CommitType.CHORE,
})

# Section attribute → heading, in display order.
_SECTION_ORDER: list[tuple[str, str]] = [
    ('breaking_changes', 'BREAKING CHANGES'),
    ('features', 'Features'),
    ('bug_fixes', 'Bug Fixes'),
    ('other_changes', 'Other Changes'),
]


@dataclass(frozen=True)
class ChangelogSection:
    """One release's worth of categorized changelog entries.

    Attributes:
        header_label: Heading text, usually the tag name.
        date: Release date shown next to the heading.
        breaking_changes: Rendered breaking-change bullets.
        features: Rendered ``feat`` bullets.
        bug_fixes: Rendered ``fix`` bullets.
        other_changes: Everything else worth listing.
    """

    header_label: str
    date: datetime.date
    breaking_changes: tuple[str, ...] = ()
    features: tuple[str, ...] = ()
    bug_fixes: tuple[str, ...] = ()
    other_changes: tuple[str, ...] = ()

    @property
    def has_content(self) -> bool:
        """Whether any section has at least one entry."""
        return any(getattr(self, attr) for attr, _ in _SECTION_ORDER)


def should_skip_release_notes(message: str) -> bool:
    """Whether a commit asks to be left out of release notes."""
    lowered = message.lower()
    return any(marker in lowered for marker in SKIP_MARKERS)


def _breaking_entry(cc: ParsedCommit) -> str:
    """``- **BREAKING CHANGE:** subject`` plus the marker text, indented."""
    entry = f'- **BREAKING CHANGE:** {cc.subject}'
    _, marker, detail = cc.raw.strip().partition(BREAKING_MARKER)
    if marker:
        entry += '\n  ' + detail.strip()
    return entry


def _typed_entry(cc: ParsedCommit) -> str:
    """``- **type:** subject``."""
    return f'- **{cc.type.value}:** {cc.subject}'


def build_changelog(
    messages: Iterable[str],
    *,
    header_label: str,
    date: datetime.date,
    parser: CommitParser | None = None,
) -> ChangelogSection:
    """Categorize a commit range into a :class:`ChangelogSection`.

    Args:
        messages: Raw commit messages, in the order they should appear.
        header_label: Heading text (typically the new tag).
        date: Release date.
        parser: Grammar to classify with. Defaults to the shared
            Conventional Commit parser.

    Returns:
        The categorized section; check :attr:`ChangelogSection.has_content`
        before rendering.
    """
    grammar = parser or DEFAULT_PARSER
    buckets: dict[str, list[str]] = {attr: [] for attr, _ in _SECTION_ORDER}
    skipped = 0

    for message in messages:
        if not message.strip() or should_skip_release_notes(message):
            skipped += 1
            continue
        cc = grammar.parse(message)
        if cc.is_merge:
            skipped += 1
            continue

        if not cc.recognized:
            buckets['other_changes'].append(cc.subject)
        elif cc.breaking:
            buckets['breaking_changes'].append(_breaking_entry(cc))
        elif cc.type is CommitType.FEAT:
            buckets['features'].append(_typed_entry(cc))
        elif cc.type is CommitType.FIX:
            buckets['bug_fixes'].append(_typed_entry(cc))
        elif cc.type not in DROPPED_TYPES:
            buckets['other_changes'].append(_typed_entry(cc))

    section = ChangelogSection(
        header_label=header_label,
        date=date,
        **{attr: tuple(entries) for attr, entries in buckets.items()},
    )
    logger.debug(
        'changelog_built',
        header=header_label,
        skipped=skipped,
        **{attr: len(entries) for attr, entries in buckets.items()},
    )
    return section


def render_changelog(section: ChangelogSection) -> str:
    """Render a section as a Markdown fragment.

    Empty sections are omitted; the heading is always rendered.

    Args:
        section: The categorized changelog.

    Returns:
        Markdown ending in a blank line, ready to prepend.
    """
    lines: list[str] = [f'## {section.header_label} ({section.date.isoformat()})', '']
    for attr, heading in _SECTION_ORDER:
        entries: tuple[str, ...] = getattr(section, attr)
        if not entries:
            continue
        lines.append(f'### {heading}')
        lines.append('')
        lines.extend(entries)
        lines.append('')
    return '\n'.join(lines) + '\n'


def prepend_changelog(existing: str, fragment: str) -> str:
    """Put a new fragment in front of existing changelog text."""
    return fragment + existing


__all__ = [
    'DROPPED_TYPES',
    'SKIP_MARKERS',
    'ChangelogSection',
    'build_changelog',
    'prepend_changelog',
    'render_changelog',
    'should_skip_release_notes',
]
