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

r"""Tag name rendering and the tag-list snapshot.

Tag names are rendered from a template with Go-template style
placeholders, so existing ``--tag-format`` values keep working::

    ┌──────────────────┬───────────────────────────────────────────────┐
    │ Placeholder      │ Expands to                                    │
    ├──────────────────┼───────────────────────────────────────────────┤
    │ {{.Major}}       │ major number                                  │
    │ {{.Minor}}       │ minor number                                  │
    │ {{.Patch}}       │ patch number                                  │
    │ {{.Prerelease}}  │ ``-<prerelease>`` or the empty string         │
    └──────────────────┴───────────────────────────────────────────────┘

Anything else in the template, unknown placeholders included, is kept
verbatim.

:class:`TagSnapshot` is the immutable list of existing tag names the
caller reads from the repository once, before any calculation starts.

Usage::

    from semtag.tags import TagSnapshot, format_tag

    format_tag(Version(2, 0, 0, 'rc.1'))                 # 'v2.0.0-rc.1'
    format_tag(Version(2, 0, 0), 'release-{{.Major}}')   # 'release-2'

    snapshot = TagSnapshot.from_names(['v1.0.0', 'v1.1.0-rc.0', 'nightly'])
    snapshot.latest_version()    # Version(1, 1, 0, 'rc.0')
    snapshot.latest_release()    # Version(1, 0, 0)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from semtag.logging import get_logger
from semtag.versions import Version, parse_version

logger = get_logger(__name__)

DEFAULT_TAG_FORMAT = 'v{{.Major}}.{{.Minor}}.{{.Patch}}{{.Prerelease}}'

# Prefix of the tags that carry versions.
VERSION_TAG_PREFIX = 'v'

_PLACEHOLDER_RE = re.compile(r'\{\{\.(Major|Minor|Patch|Prerelease)\}\}')

_GROUP_PATTERNS: dict[str, str] = {
    'Major': r'(?P<major>\d+)',
    'Minor': r'(?P<minor>\d+)',
    'Patch': r'(?P<patch>\d+)',
    'Prerelease': r'(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?',
}


def format_tag(version: Version, tag_format: str = DEFAULT_TAG_FORMAT) -> str:
    """Render a tag name from a template.

    Args:
        version: The version to render.
        tag_format: Template; an empty string selects the default.

    Returns:
        The tag name.

    Examples::

        >>> format_tag(Version(2, 0, 0))
        'v2.0.0'
        >>> format_tag(Version(2, 0, 0, 'rc.1'))
        'v2.0.0-rc.1'
    """
    template = tag_format or DEFAULT_TAG_FORMAT
    prerelease = f'-{version.prerelease}' if version.prerelease else ''
    return (
        template.replace('{{.Major}}', str(version.major))
        .replace('{{.Minor}}', str(version.minor))
        .replace('{{.Patch}}', str(version.patch))
        .replace('{{.Prerelease}}', prerelease)
    )


def _tag_regex(tag_format: str) -> re.Pattern[str]:
    """Turn a tag template into an anchored regex."""
    parts: list[str] = []
    seen: set[str] = set()
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(tag_format):
        parts.append(re.escape(tag_format[pos : m.start()]))
        name = m.group(1)
        if name in seen:
            # Repeated placeholder: must match the same text again.
            parts.append(f'(?P={name.lower()})' if name != 'Prerelease' else r'(?:-(?P=prerelease))?')
        else:
            parts.append(_GROUP_PATTERNS[name])
            seen.add(name)
        pos = m.end()
    parts.append(re.escape(tag_format[pos:]))
    return re.compile('^' + ''.join(parts) + '$')


def parse_tag(tag: str, tag_format: str = DEFAULT_TAG_FORMAT) -> Version | None:
    """Reverse-parse a tag name rendered with ``tag_format``.

    Placeholders missing from the template come back as ``0`` (numbers)
    or ``""`` (pre-release).

    Returns:
        The :class:`Version`, or ``None`` if the tag does not match.

    Examples::

        >>> parse_tag('v1.4.0-feature-x.2')
        Version(major=1, minor=4, patch=0, prerelease='feature-x.2')
        >>> parse_tag('nightly') is None
        True
    """
    m = _tag_regex(tag_format or DEFAULT_TAG_FORMAT).match(tag)
    if m is None:
        return None
    groups = m.groupdict()
    return Version(
        major=int(groups.get('major') or 0),
        minor=int(groups.get('minor') or 0),
        patch=int(groups.get('patch') or 0),
        prerelease=groups.get('prerelease') or '',
    )


@dataclass(frozen=True)
class TagSnapshot:
    """Existing tag names, captured once per run.

    Attributes:
        tags: Tag names in the order the caller listed them.
    """

    tags: tuple[str, ...] = ()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> TagSnapshot:
        """Build a snapshot, dropping blanks and duplicates."""
        seen: dict[str, None] = {}
        for name in names:
            stripped = name.strip()
            if stripped:
                seen.setdefault(stripped, None)
        return cls(tags=tuple(seen))

    def exists(self, tag: str) -> bool:
        """Whether ``tag`` is already present."""
        return tag in self.tags

    def versions(self) -> list[Version]:
        """Versions of all ``v``-prefixed tags that parse as semver.

        Other tags are skipped silently.
        """
        found: list[Version] = []
        for tag in self.tags:
            if not tag.startswith(VERSION_TAG_PREFIX):
                continue
            version = parse_version(tag[len(VERSION_TAG_PREFIX) :])
            if version is None:
                logger.debug('tag_skipped_unparsable', tag=tag)
                continue
            found.append(version)
        return found

    def latest_version(self) -> Version | None:
        """Highest version tag, pre-releases included."""
        return max(self.versions(), default=None)

    def latest_release(self) -> Version | None:
        """Highest version tag without a pre-release suffix."""
        return max((v for v in self.versions() if not v.is_prerelease), default=None)


__all__ = [
    'DEFAULT_TAG_FORMAT',
    'VERSION_TAG_PREFIX',
    'TagSnapshot',
    'format_tag',
    'parse_tag',
]
