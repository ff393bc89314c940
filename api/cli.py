#!/usr/bin/env python3
"""CLI for MasterClass certificate management tasks.

Usage:
    python -m cli <command>

Commands:
    check-roster   Load the roster and report its size and duplicate entries
    render         Render a certificate for a name to a PDF file
    issue          Run the full credential check + render pipeline offline
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _roster_source(path: str | None):
    from core.config import get_settings
    from repositories.roster_repository import JsonFileRosterSource

    return JsonFileRosterSource(path or get_settings().roster_file)


def cmd_check_roster(path: str | None) -> int:
    """Load the roster and report problems."""
    from repositories.roster_repository import (
        RosterUnavailableError,
        find_duplicate_credentials,
    )

    source = _roster_source(path)
    try:
        records = source.load()
    except RosterUnavailableError as e:
        logger.error(f"Roster unavailable: {e}")
        return 1

    logger.info(f"Roster {source.path} has {len(records)} participants")

    duplicates = find_duplicate_credentials(records)
    for email, _ in duplicates:
        logger.warning(f"Duplicate credentials for {email}; only the first is used")

    blank_names = [r.email for r in records if not r.name.strip()]
    for email in blank_names:
        logger.warning(f"Participant {email} has an empty name")

    return 0


def cmd_render(name: str, output: str) -> int:
    """Render a certificate for a name, without checking credentials."""
    from rendering.certificates import CertificateRenderError
    from schemas import ParticipantRecord
    from services.certificates_service import render_certificate

    participant = ParticipantRecord(email="", name=name, access_key="")
    try:
        document = render_certificate(participant)
    except CertificateRenderError as e:
        logger.error(f"Rendering failed: {e}")
        return 1

    Path(output).write_bytes(document.content)
    logger.info(f"Wrote {len(document.content)} bytes to {output}")
    return 0


def cmd_issue(email: str, access_key: str, output: str, path: str | None) -> int:
    """Issue a certificate exactly as the API would."""
    from rendering.certificates import CertificateRenderError
    from services.certificates_service import (
        CertificateRequestRejected,
        issue_certificate,
    )

    try:
        document = asyncio.run(
            issue_certificate(email, access_key, _roster_source(path))
        )
    except CertificateRequestRejected as e:
        logger.error(f"Request rejected: {e.reason}")
        return 1
    except CertificateRenderError as e:
        logger.error(f"Rendering failed: {e}")
        return 1

    Path(output).write_bytes(document.content)
    logger.info(f"Wrote {document.filename} ({len(document.content)} bytes) to {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MasterClass Certificates CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check = subparsers.add_parser(
        "check-roster",
        help="Load the roster and report its size and duplicate entries",
    )
    check.add_argument("--path", help="Roster file (defaults to ROSTER_PATH)")

    render = subparsers.add_parser(
        "render",
        help="Render a certificate for a name to a PDF file",
    )
    render.add_argument("--name", required=True)
    render.add_argument("--output", required=True)

    issue = subparsers.add_parser(
        "issue",
        help="Run the full credential check + render pipeline offline",
    )
    issue.add_argument("--email", required=True)
    issue.add_argument("--access-key", required=True)
    issue.add_argument("--output", required=True)
    issue.add_argument("--path", help="Roster file (defaults to ROSTER_PATH)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check-roster":
        return cmd_check_roster(args.path)
    elif args.command == "render":
        return cmd_render(args.name, args.output)
    elif args.command == "issue":
        return cmd_issue(args.email, args.access_key, args.output, args.path)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
