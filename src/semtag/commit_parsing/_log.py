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

"""Splitting raw ``git log`` output into individual commit messages."""

from __future__ import annotations

import re

# Record separator emitted by ``git log --format=%B%x00``.
LOG_SEPARATOR = '\x00'

_BLANK_LINE_RE = re.compile(r'\n\s*\n')


def split_commit_log(text: str, separator: str = LOG_SEPARATOR) -> list[str]:
    """Split ``git log`` output into commit messages, newest first.

    With ``--format=%B%x00`` every message (body included) ends with a
    NUL byte. Output without the separator is split on blank lines, which
    is what plain ``--format=%B`` allows; in that mode a commit body
    separated by an empty line shows up as its own entry.

    Args:
        text: Raw ``git log`` output.
        separator: Record separator to split on when present.

    Returns:
        Stripped, non-empty commit messages.
    """
    if separator and separator in text:
        chunks = text.split(separator)
    else:
        chunks = _BLANK_LINE_RE.split(text)
    return [chunk.strip() for chunk in chunks if chunk.strip()]
