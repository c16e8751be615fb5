# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from hokhub.app import (
    approve_bulk,
    build_moderation_service,
    get_history,
    leaderboard,
    list_contributions_by_submitter,
    list_pending,
    reconcile_sources,
    register_contributor,
    reject_bulk,
    submit_contribution,
)
from hokhub.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from hokhub.domain.moderation import BulkOutcome, ModerationService

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile and moderate Honor of Kings data")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Rebuild the merged store")
    reconcile.add_argument(
        "--snapshot-dir",
        type=Path,
        help="Directory holding the source snapshots (defaults to config)",
    )

    submit = subparsers.add_parser("submit", help="Queue a contribution for review")
    submit.add_argument("type", type=str, help="Contribution type, e.g. add-skin")
    submit.add_argument("payload", type=Path, help="JSON file holding the payload")
    submit.add_argument(
        "--submitter-id",
        type=str,
        help="Contributor id credited when the contribution is approved",
    )

    subparsers.add_parser("pending", help="List pending contributions, newest first")

    contributions = subparsers.add_parser(
        "contributions", help="List one submitter's contributions, newest first"
    )
    contributions.add_argument(
        "--submitter-id", type=str, required=True, help="Contributor id to list"
    )

    approve = subparsers.add_parser("approve", help="Approve pending contributions")
    approve.add_argument("ids", nargs="+", help="Contribution ids, processed in order")

    reject = subparsers.add_parser("reject", help="Reject pending contributions")
    reject.add_argument("ids", nargs="+", help="Contribution ids, processed in order")

    history = subparsers.add_parser("history", help="Show the moderation history")
    history.add_argument("--limit", type=int, default=20, help="Entries to show (%(default)s)")

    contributors = subparsers.add_parser("contributors", help="Contributor ledger commands")
    contributors_sub = contributors.add_subparsers(dest="contributors_command", required=True)
    contributors_add = contributors_sub.add_parser("add", help="Register a contributor")
    contributors_add.add_argument(
        "--display-name",
        type=str,
        required=True,
        help="Display name for the contributor",
    )
    contributors_add.add_argument("--email", type=str, help="Optional email address")
    contributors_top = contributors_sub.add_parser("top", help="Show the leaderboard")
    contributors_top.add_argument("--limit", type=int, default=10, help="Rows (%(default)s)")

    args = parser.parse_args(list(argv))
    limit = getattr(args, "limit", None)
    if limit is not None and limit < 1:
        raise ValueError("--limit must be positive")
    if args.command == "submit":
        args.payload_data = _read_payload(args.payload)
    return args


def _read_payload(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read payload file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Payload file {path} is not valid JSON: {exc}") from exc


def _report_bulk(outcome: BulkOutcome) -> None:
    for item in outcome.results:
        status = "ok" if item.success else f"failed: {item.reason}"
        print(f"{item.contribution_id}\t{status}")
    print(f"{outcome.action}: {outcome.succeeded} succeeded, {outcome.failed} failed")


def _close_notifier(service: ModerationService) -> None:
    close = getattr(service.notifier, "close", None)
    if callable(close):
        close(10.0)


def _run(args: argparse.Namespace) -> int:
    """Execute one command; returns the process exit code."""

    if args.command == "reconcile":
        result = reconcile_sources(snapshot_dir=args.snapshot_dir)
        print(f"Reconciled {len(result.store)} heroes")
        return 0

    if args.command == "contributors":
        if args.contributors_command == "add":
            contributor_id = register_contributor(
                display_name=args.display_name, email=args.email
            )
            print(contributor_id)
        else:
            for rank, standing in enumerate(leaderboard(limit=args.limit), start=1):
                print(
                    f"{rank}. {standing.display_name}\t"
                    f"{standing.total_contributions} contributions\t{standing.score} points"
                )
        return 0

    service = build_moderation_service()
    try:
        if args.command == "submit":
            contribution_id = submit_contribution(
                args.type,
                args.payload_data,
                submitter_id=args.submitter_id,
                service=service,
            )
            print(contribution_id)
            return 0
        if args.command == "pending":
            for contribution in list_pending(service=service):
                print(
                    f"{contribution.contribution_id}\t{contribution.contribution_type}\t"
                    f"{contribution.submitted_at.isoformat()}"
                )
            return 0
        if args.command == "contributions":
            for contribution in list_contributions_by_submitter(
                args.submitter_id, service=service
            ):
                print(
                    f"{contribution.contribution_id}\t{contribution.contribution_type}\t"
                    f"{contribution.status}\t{contribution.submitted_at.isoformat()}"
                )
            return 0
        if args.command in {"approve", "reject"}:
            operation = approve_bulk if args.command == "approve" else reject_bulk
            outcome = operation(args.ids, service=service)
            _report_bulk(outcome)
            return 0 if outcome.failed == 0 else 1
        if args.command == "history":
            for record in get_history(limit=args.limit, service=service):
                print(
                    f"{record.reviewed_at.isoformat()}\t{record.action.outcome}\t"
                    f"{record.contribution_id}\t{record.contribution_type}"
                )
            return 0
    finally:
        _close_notifier(service)
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    try:
        exit_code = _run(parsed_args)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
