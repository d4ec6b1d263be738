"""Operator CLI for the pro manager core.

Reads configuration from the environment (and .env) like the service
does, and talks to the same database.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any, Sequence

from promanager.config import configure_logging, load_config
from promanager.credentials import encrypt_value
from promanager.errors import ManagerError
from promanager.manager import build_manager
from promanager.weeks import week_key_of


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="promanager")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encrypt = subparsers.add_parser(
        "encrypt", help="Encrypt a value for storage as ENC:... (uses CONFIG_SECRET)."
    )
    encrypt.add_argument("value")

    settings = subparsers.add_parser("settings", help="Show or update league settings.")
    settings.add_argument("league_id", type=int)
    settings.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Policy field to update; may be repeated.",
    )

    clauses = subparsers.add_parser("clauses", help="List recorded clauses.")
    group = clauses.add_mutually_exclusive_group()
    group.add_argument("--week", type=int, help="Week key, e.g. 202501.")
    group.add_argument("--user", type=int, help="Clauses claused from this user id.")
    group.add_argument("--date", help="Calendar day, YYYY-MM-DD.")

    quota = subparsers.add_parser("quota", help="Weekly clause counters for a user.")
    quota.add_argument("league_id", type=int)
    quota.add_argument("user_id", type=int)
    quota.add_argument("--week", type=int, help="Week key (defaults to this week).")

    delete_clause = subparsers.add_parser(
        "delete-clause", help="Administratively remove a clause record."
    )
    delete_clause.add_argument("clause_id", type=int)

    return parser


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _parse_assignments(assignments: Sequence[str]) -> dict[str, Any]:
    patch: dict[str, Any] = {}
    for item in assignments:
        if "=" not in item:
            raise ValueError(f"Expected KEY=VALUE, got {item!r}")
        key, value = item.split("=", 1)
        patch[key.strip()] = value.strip()
    return patch


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = load_config()
    configure_logging(config.log_level)

    if args.command == "encrypt":
        print(encrypt_value(args.value, config.config_secret))
        return 0

    manager = build_manager(config)
    try:
        if args.command == "settings":
            if args.assignments:
                changed = manager.update_settings(
                    args.league_id, _parse_assignments(args.assignments)
                )
                _print_json({"updated": changed})
            _print_json(manager.get_settings(args.league_id).to_dict())
        elif args.command == "clauses":
            ledger = manager.ledger
            if args.week is not None:
                records = ledger.by_week(args.week)
            elif args.user is not None:
                records = ledger.by_user(args.user)
            elif args.date is not None:
                records = ledger.by_date(args.date)
            else:
                records = ledger.by_week(week_key_of(None))
            _print_json([asdict(record) for record in records])
        elif args.command == "quota":
            status = manager.quota_status(args.league_id, args.user_id, args.week)
            _print_json(
                {
                    **asdict(status),
                    "remaining_clauses": status.remaining_clauses,
                    "remaining_times_claused": status.remaining_times_claused,
                    "exceeded": status.exceeded,
                }
            )
        elif args.command == "delete-clause":
            _print_json({"deleted": manager.ledger.delete(args.clause_id)})
    except (ManagerError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
