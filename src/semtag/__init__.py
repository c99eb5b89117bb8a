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

"""semtag: semantic version tags and changelogs from Conventional Commits.

Usage::

    from semtag import ReleaseInputs, TagSnapshot, plan_release

    plan = plan_release(
        ReleaseInputs(
            messages=('feat: add X',),
            branch='main',
            tags=TagSnapshot.from_names(['v1.2.3']),
        ),
    )
    plan.tag  # 'v1.3.0'
"""

from semtag.bump import resolve_bump
from semtag.changelog import build_changelog, prepend_changelog, render_changelog
from semtag.commit_parsing import BumpType, CommitType, parse_commit, validate_commit_message
from semtag.config import SemtagConfig, load_config, parse_config
from semtag.errors import ErrorCode, ErrorInfo, SemtagError
from semtag.release import ReleaseInputs, ReleasePlan, plan_release
from semtag.tags import TagSnapshot, format_tag, parse_tag
from semtag.versioning import calculate_next_version, resolve_override
from semtag.versions import Version

__version__ = '0.1.0'

__all__ = [
    'BumpType',
    'CommitType',
    'ErrorCode',
    'ErrorInfo',
    'ReleaseInputs',
    'ReleasePlan',
    'SemtagConfig',
    'SemtagError',
    'TagSnapshot',
    'Version',
    '__version__',
    'build_changelog',
    'calculate_next_version',
    'format_tag',
    'load_config',
    'parse_commit',
    'parse_config',
    'parse_tag',
    'plan_release',
    'prepend_changelog',
    'render_changelog',
    'resolve_bump',
    'resolve_override',
    'validate_commit_message',
]
