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

"""Command-line interface for semtag.

The CLI is a thin collaborator around the engine. It never runs git:
commit messages come in on stdin, repository facts come in as flags,
and results go to stdout for the calling script to act on::

    git log --format=%B%x00 v1.2.3..HEAD \
        | semtag next --branch "$BRANCH" --tags "$(git tag)" \
                      --latest-commit "$(git log -1 --format=%B)"

Subcommands::

    semtag validate MESSAGE      Check one commit message (exit 1 if invalid)
    semtag bump                  Print the bump decision for stdin
    semtag next --branch B ...   Print the next tag (or the plan as JSON)
    semtag changelog --header H  Print a Markdown changelog fragment
    semtag explain CODE          Explain an error code
"""

from __future__ import annotations

import argparse
import datetime
import json
import sys
from pathlib import Path

from rich_argparse import RichHelpFormatter

from semtag import __version__
from semtag.bump import resolve_bump
from semtag.changelog import build_changelog, render_changelog
from semtag.commit_parsing import split_commit_log, validate_commit_message
from semtag.config import CONFIG_FILENAME, SemtagConfig, load_config
from semtag.errors import SemtagError, explain, render_error
from semtag.logging import configure_logging, get_logger
from semtag.release import ReleaseInputs, plan_release
from semtag.tags import TagSnapshot

logger = get_logger(__name__)


def _read_messages() -> list[str]:
    """Read a commit log from stdin; nothing when stdin is a terminal."""
    if sys.stdin.isatty():
        return []
    return split_commit_log(sys.stdin.read())


def _load_config(args: argparse.Namespace) -> SemtagConfig:
    """Load the configured or the default ``semtag.toml``."""
    if args.config:
        return load_config(Path(args.config), required=True)
    return load_config(Path(CONFIG_FILENAME))


def _cmd_validate(args: argparse.Namespace) -> int:
    """Handle the ``validate`` subcommand."""
    message = sys.stdin.read() if args.message == '-' else args.message
    result = validate_commit_message(message)
    if not result.valid:
        print(result.message.strip())  # noqa: T201 - CLI output
        return 1
    return 0


def _cmd_bump(args: argparse.Namespace) -> int:
    """Handle the ``bump`` subcommand."""
    print(resolve_bump(_read_messages()).value)  # noqa: T201 - CLI output
    return 0


def _cmd_next(args: argparse.Namespace) -> int:
    """Handle the ``next`` subcommand."""
    config = _load_config(args)
    inputs = ReleaseInputs(
        messages=tuple(_read_messages()),
        branch=args.branch,
        tags=TagSnapshot.from_names(args.tags.split()),
        current=args.current or None,
        latest_commit=args.latest_commit,
        override=args.set_version or '',
        tag_format=args.tag_format or '',
        date=args.date,
        prerelease_requested=args.pre_release,
        changelog=True if args.changelog else None,
    )
    plan = plan_release(inputs, config)

    if args.json:
        print(json.dumps(plan.as_dict(), indent=2))  # noqa: T201 - CLI output
        return 0 if plan.ok else 1

    if plan.error is not None:
        raise SemtagError.from_info(plan.error)
    if not plan.should_tag:
        print('No version bump needed based on commit history.')  # noqa: T201 - CLI output
        return 0
    print(plan.tag)  # noqa: T201 - CLI output
    return 0


def _cmd_changelog(args: argparse.Namespace) -> int:
    """Handle the ``changelog`` subcommand."""
    section = build_changelog(
        _read_messages(),
        header_label=args.header,
        date=args.date or datetime.date.today(),
    )
    if not section.has_content:
        logger.info('changelog_empty', header=args.header)
        return 0
    sys.stdout.write(render_changelog(section))
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def _add_date_argument(parser: argparse.ArgumentParser) -> None:
    """Add the shared ``--date`` option."""
    parser.add_argument(
        '--date',
        type=datetime.date.fromisoformat,
        default=None,
        metavar='YYYY-MM-DD',
        help='Changelog date (default: today).',
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='semtag',
        description='Semantic version tags from Conventional Commits.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true', help='Debug logging.')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Only warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Log one JSON object per line.')
    parser.add_argument(
        '--config',
        metavar='PATH',
        default=None,
        help=f'Config file (default: ./{CONFIG_FILENAME} if present).',
    )

    subparsers = parser.add_subparsers(dest='command')

    validate_parser = subparsers.add_parser(
        'validate',
        help='Check a commit message against Conventional Commits.',
    )
    validate_parser.add_argument('message', help="The commit message, or '-' for stdin.")

    subparsers.add_parser(
        'bump',
        help='Print the bump decision (major, minor, patch, none) for a commit log on stdin.',
    )

    next_parser = subparsers.add_parser(
        'next',
        help='Print the next tag for a commit log on stdin.',
    )
    next_parser.add_argument('--branch', required=True, help='Branch being released.')
    next_parser.add_argument(
        '--pre-release',
        action='store_true',
        help='Force a pre-release version (automatic on non-default branches).',
    )
    next_parser.add_argument(
        '--tags',
        default='',
        help='Existing tag names, whitespace separated (e.g. "$(git tag)").',
    )
    next_parser.add_argument(
        '--current',
        default='',
        help='Current version (default: highest v-prefixed tag).',
    )
    next_parser.add_argument('--set-version', metavar='VERSION', help='Use this version instead of calculating one.')
    next_parser.add_argument(
        '--tag-format',
        default=None,
        help='Tag template with {{.Major}}, {{.Minor}}, {{.Patch}} and {{.Prerelease}} placeholders.',
    )
    next_parser.add_argument('--latest-commit', metavar='MESSAGE', default=None, help='Commit message to validate.')
    next_parser.add_argument(
        '--changelog',
        action='store_true',
        help='Include a changelog fragment in the plan (releases only).',
    )
    _add_date_argument(next_parser)
    next_parser.add_argument('--json', action='store_true', help='Print the whole plan as JSON.')

    changelog_parser = subparsers.add_parser(
        'changelog',
        help='Print a Markdown changelog fragment for a commit log on stdin.',
    )
    changelog_parser.add_argument('--header', required=True, help='Section heading, usually the new tag.')
    _add_date_argument(changelog_parser)

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code (e.g. ST-VERSION-INVALID).',
    )
    explain_parser.add_argument('code', help='Error code.')

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments without the program name (default: ``sys.argv``).

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'validate':
            return _cmd_validate(args)
        if command == 'bump':
            return _cmd_bump(args)
        if command == 'next':
            return _cmd_next(args)
        if command == 'changelog':
            return _cmd_changelog(args)
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except SemtagError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
]
