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

"""Tests for semtag.release."""

from __future__ import annotations

import datetime

from semtag.commit_parsing import BumpType
from semtag.config import SemtagConfig
from semtag.errors import E
from semtag.release import (
    ReleaseInputs,
    changelog_commit_message,
    commit_range_start,
    plan_release,
    tag_message,
)
from semtag.tags import TagSnapshot
from semtag.versions import Version

DATE = datetime.date(2026, 10, 19)


def _inputs(**overrides: object) -> ReleaseInputs:
    defaults: dict[str, object] = {
        'messages': ('feat: add X', 'fix: typo'),
        'branch': 'main',
        'tags': TagSnapshot.from_names(['v1.2.3']),
        'date': DATE,
    }
    defaults.update(overrides)
    return ReleaseInputs(**defaults)  # type: ignore[arg-type]


class TestHelpers:
    """Tests for the message and range helpers."""

    def test_commit_range_start(self) -> None:
        """0.0.0 scans all history."""
        assert commit_range_start(None) == ''
        assert commit_range_start(Version()) == ''
        assert commit_range_start(Version(1, 2, 3)) == 'v1.2.3'
        assert commit_range_start(Version(1, 2, 3, 'rc.1')) == 'v1.2.3-rc.1'

    def test_tag_message(self) -> None:
        """Tags carry a skip-ci annotation."""
        assert tag_message('v1.2.3') == 'Release v1.2.3 [skip-ci]'

    def test_changelog_commit_message(self) -> None:
        """The changelog commit skips CI and release notes."""
        assert changelog_commit_message('v1.2.3') == 'chore(release): update changelog for v1.2.3 [skip-ci]'


class TestPlanRelease:
    """Tests for plan_release."""

    def test_release(self) -> None:
        """feat on main gives a minor release."""
        plan = plan_release(_inputs())
        assert plan.ok
        assert plan.bump is BumpType.MINOR
        assert plan.version == Version(1, 3, 0)
        assert plan.tag == 'v1.3.0'
        assert plan.should_tag
        assert not plan.prerelease
        assert plan.tag_message == 'Release v1.3.0 [skip-ci]'
        assert plan.changelog == ''

    def test_no_bump(self) -> None:
        """Nothing bump-worthy means nothing to tag."""
        plan = plan_release(_inputs(messages=('docs: a', 'chore: b')))
        assert plan.ok
        assert plan.bump is BumpType.NONE
        assert not plan.should_tag
        assert plan.version is None
        assert plan.tag == ''

    def test_no_bump_ignores_override(self) -> None:
        """An override does not force a tag without bump-worthy commits."""
        plan = plan_release(_inputs(messages=('docs: a',), override='9.9.9'))
        assert not plan.should_tag
        assert plan.version is None

    def test_feature_branch_prerelease(self) -> None:
        """Non-default branches get pre-release versions."""
        plan = plan_release(_inputs(branch='feature/X', tags=TagSnapshot.from_names(['v1.4.0'])))
        assert plan.prerelease
        assert plan.tag == 'v1.4.0-feature-X.0'

    def test_prerelease_increment(self) -> None:
        """The branch counter advances."""
        plan = plan_release(
            _inputs(
                branch='feature/X',
                tags=TagSnapshot.from_names(['v1.4.0', 'v1.4.0-feature-X.0']),
            ),
        )
        assert plan.tag == 'v1.5.0-feature-X.1'

    def test_prerelease_requested_on_main(self) -> None:
        """An explicit request works on the default branch."""
        plan = plan_release(_inputs(prerelease_requested=True))
        assert plan.prerelease
        assert plan.tag == 'v1.2.3-main.0'

    def test_never_mode(self) -> None:
        """prerelease = never keeps feature branches on releases."""
        plan = plan_release(_inputs(branch='feature/X'), SemtagConfig(prerelease='never'))
        assert not plan.prerelease
        assert plan.tag == 'v1.3.0'

    def test_current_from_tags(self) -> None:
        """The highest tag is the current version."""
        plan = plan_release(_inputs(tags=TagSnapshot.from_names(['v0.9.0', 'v1.2.3', 'v1.0.0'])))
        assert plan.version == Version(1, 3, 0)

    def test_fix_on_main_after_feature_prerelease(self) -> None:
        """The highest tag may be another branch's pre-release; patch still increments."""
        plan = plan_release(
            _inputs(messages=('fix: a',), tags=TagSnapshot.from_names(['v1.4.0', 'v1.5.0-feature-X.1'])),
        )
        assert not plan.prerelease
        assert plan.tag == 'v1.5.1'

    def test_explicit_current(self) -> None:
        """An explicit current version wins over tags."""
        plan = plan_release(_inputs(current='2.0.0'))
        assert plan.version == Version(2, 1, 0)

    def test_unparsable_current(self) -> None:
        """A broken current version aborts the plan."""
        plan = plan_release(_inputs(current='two'))
        assert not plan.ok
        assert plan.error is not None
        assert plan.error.code is E.VERSION_INVALID
        assert not plan.should_tag

    def test_override(self) -> None:
        """An override replaces the calculated version."""
        plan = plan_release(_inputs(override='v5.0.0'))
        assert plan.version == Version(5, 0, 0)
        assert plan.tag == 'v5.0.0'

    def test_override_already_tagged(self) -> None:
        """An existing tag aborts the plan."""
        plan = plan_release(_inputs(override='1.2.3'))
        assert plan.error is not None
        assert plan.error.code is E.VERSION_TAG_EXISTS

    def test_invalid_override(self) -> None:
        """An unparsable override aborts the plan."""
        plan = plan_release(_inputs(override='latest'))
        assert plan.error is not None
        assert plan.error.code is E.VERSION_INVALID

    def test_tag_format(self) -> None:
        """Inputs override the configured template."""
        config = SemtagConfig(tag_format='cfg-{{.Major}}.{{.Minor}}.{{.Patch}}')
        assert plan_release(_inputs(), config).tag == 'cfg-1.3.0'
        assert plan_release(_inputs(tag_format='rel-{{.Major}}'), config).tag == 'rel-1'


class TestValidation:
    """Tests for the latest-commit check."""

    def test_valid_latest_commit(self) -> None:
        """A valid latest commit is recorded."""
        plan = plan_release(_inputs(latest_commit='feat: add X'))
        assert plan.validation is not None
        assert plan.validation.valid
        assert plan.ok

    def test_invalid_latest_commit_aborts(self) -> None:
        """An invalid latest commit aborts by default."""
        plan = plan_release(_inputs(latest_commit='wip'))
        assert not plan.ok
        assert plan.error is not None
        assert plan.error.code is E.COMMIT_INVALID_FORMAT
        assert plan.validation is not None
        assert not plan.validation.valid
        assert not plan.should_tag

    def test_invalid_latest_commit_lenient(self) -> None:
        """With validation off the plan proceeds."""
        plan = plan_release(_inputs(latest_commit='wip'), SemtagConfig(validate_latest_commit=False))
        assert plan.ok
        assert plan.validation is not None
        assert not plan.validation.valid
        assert plan.tag == 'v1.3.0'


class TestChangelog:
    """Tests for the changelog part of the plan."""

    def test_rendered_when_enabled(self) -> None:
        """Releases get a fragment headed by the tag."""
        plan = plan_release(_inputs(changelog=True))
        assert plan.changelog_has_content
        assert plan.changelog.startswith('## v1.3.0 (2026-10-19)\n\n### Features\n')
        assert plan.changelog_commit_message == 'chore(release): update changelog for v1.3.0 [skip-ci]'

    def test_config_enables_changelog(self) -> None:
        """The config setting is the default."""
        plan = plan_release(_inputs(), SemtagConfig(changelog=True))
        assert plan.changelog_has_content

    def test_not_for_prereleases(self) -> None:
        """Pre-releases never render a changelog."""
        plan = plan_release(_inputs(branch='feature/X', changelog=True))
        assert plan.prerelease
        assert plan.changelog == ''
        assert not plan.changelog_has_content

    def test_empty_fragment(self) -> None:
        """Bump-worthy but unlisted commits give no fragment."""
        plan = plan_release(_inputs(messages=('fix: a [skip-ci]', 'feat: b [ci skip]'), changelog=True))
        assert plan.should_tag
        assert not plan.changelog_has_content
        assert plan.changelog == ''
        assert plan.changelog_commit_message == ''


class TestAsDict:
    """Tests for the JSON view."""

    def test_keys(self) -> None:
        """Every output is present."""
        data = plan_release(_inputs(latest_commit='feat: add X')).as_dict()
        assert data['bump'] == 'minor'
        assert data['version'] == '1.3.0'
        assert data['tag'] == 'v1.3.0'
        assert data['valid'] is True
        assert data['error'] is None

    def test_error(self) -> None:
        """Errors are serialized with their code."""
        data = plan_release(_inputs(override='nope')).as_dict()
        assert data['error']['code'] == 'ST-VERSION-INVALID'
        assert data['version'] is None
