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

"""Tests for semtag.logging."""

from __future__ import annotations

import json
import logging

import pytest
from semtag.commit_parsing import BumpType
from semtag.logging import LOGGER_NAME, configure_logging, get_logger
from semtag.versions import Version


def _semtag_handlers() -> list[logging.Handler]:
    return logging.getLogger(LOGGER_NAME).handlers


def _last_json(err: str) -> dict[str, object]:
    return json.loads(err.strip().splitlines()[-1])


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        ('kwargs', 'level'),
        [
            ({}, logging.INFO),
            ({'verbose': True}, logging.DEBUG),
            ({'quiet': True}, logging.WARNING),
        ],
    )
    def test_levels(self, kwargs: dict[str, bool], level: int) -> None:
        """Verbosity flags set the semtag logger level."""
        configure_logging(**kwargs)
        assert logging.getLogger(LOGGER_NAME).level == level

    def test_reconfigure_replaces_handler(self) -> None:
        """Repeated calls keep exactly one handler."""
        configure_logging(quiet=True)
        configure_logging(verbose=True)
        assert len(_semtag_handlers()) == 1
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_root_logger_untouched(self) -> None:
        """The handler lives on the semtag logger, not the root."""
        configure_logging()
        assert not any(h in logging.root.handlers for h in _semtag_handlers())
        assert logging.getLogger(LOGGER_NAME).propagate is False

    def test_json_lines_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON mode writes one object per line to stderr, never stdout."""
        configure_logging(json_log=True)
        get_logger('semtag.test').info('next_version_calculated', tag='v1.2.3')
        captured = capsys.readouterr()
        assert captured.out == ''
        record = _last_json(captured.err)
        assert record['event'] == 'next_version_calculated'
        assert record['tag'] == 'v1.2.3'
        assert record['level'] == 'info'
        assert record['logger'] == 'semtag.test'
        assert 'timestamp' in record

    def test_engine_values_rendered_plainly(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Enums log by value and versions by their string form."""
        configure_logging(verbose=True, json_log=True)
        get_logger('semtag.test').debug('bump_resolved', bump=BumpType.MINOR, version=Version(1, 3, 0, 'rc.1'))
        record = _last_json(capsys.readouterr().err)
        assert record['bump'] == 'minor'
        assert record['version'] == '1.3.0-rc.1'

    def test_quiet_drops_info(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Quiet mode hides info events."""
        configure_logging(quiet=True, json_log=True)
        get_logger('semtag.test').info('hidden_event')
        assert 'hidden_event' not in capsys.readouterr().err

    def test_follows_current_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Events go to sys.stderr as it is at emit time."""
        configure_logging(json_log=True)
        capsys.readouterr()
        get_logger('semtag.test').warning('prerelease_tag_skipped', tag='v01.0.0-x.1')
        assert 'prerelease_tag_skipped' in capsys.readouterr().err


class TestGetLogger:
    """Tests for get_logger()."""

    def test_default_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The default logger is the semtag logger."""
        configure_logging(json_log=True)
        get_logger().warning('latest_commit_invalid', strict=True)
        assert _last_json(capsys.readouterr().err)['logger'] == LOGGER_NAME
