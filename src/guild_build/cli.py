from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional

from guild_build import api
from guild_build.errors import ComparisonError
from guild_build.exporter import build_export, view_to_json, write_csv, write_rows


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="guild-build",
        description="Compare job-role skill profiles across seniority levels.",
    )
    ap.add_argument("--config", default=None, help="Optional YAML/JSON/TOML config override (merged with pyproject.toml).")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log loading/computation steps to stderr.")
    subparsers = ap.add_subparsers(dest="command", required=True)

    roles = subparsers.add_parser("roles", help="List roles, levels and skills of the rating table.")
    roles.add_argument("--json", action="store_true", help="Emit JSON instead of plain text.")
    roles.set_defaults(func=_cmd_roles)

    validate = subparsers.add_parser("validate", help="Check the rating table for structural issues.")
    validate.set_defaults(func=_cmd_validate)

    compare = subparsers.add_parser("compare", help="Compute similarity, radar and trend series.")
    _add_compare_args(compare)
    compare.set_defaults(func=_cmd_compare)

    args = ap.parse_args(argv)
    try:
        return args.func(args)
    except (ComparisonError, ValueError, FileNotFoundError) as e:
        print(str(e), file=sys.stderr)
        return 2


# ---------------- CLI subcommands ----------------


def _add_compare_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--role-a", default=None, help="First role (default: first role in the table).")
    ap.add_argument("--level-a", default=None, help="Level of the first role (default: first level).")
    ap.add_argument("--role-b", default=None, help="Optional role to compare against.")
    ap.add_argument("--level-b", default=None, help="Level of the second role (default: first level).")
    ap.add_argument(
        "--skill",
        dest="skills",
        action="append",
        default=None,
        help="Restrict to this skill (repeatable). Default: all skills.",
    )
    ap.add_argument("--json", action="store_true", help="Emit JSON instead of CSV.")
    ap.add_argument("--output", "-o", default=None, help="Output path (CSV). If omitted, CSV is printed to stdout.")
    ap.epilog = _COMPARE_EPILOG


def _logger(args: argparse.Namespace) -> Optional[Callable[[str], None]]:
    if not args.verbose:
        return None

    def log(msg: str) -> None:
        print(msg, file=sys.stderr)

    return log


def _config_path(args: argparse.Namespace) -> Optional[Path]:
    return Path(args.config) if args.config else None


def _cmd_roles(args: argparse.Namespace) -> int:
    model = api.load_model(config_path=_config_path(args), logger=_logger(args))

    if args.json:
        payload = {
            "roles": list(model.roles),
            "levels": list(model.levels),
            "skills": list(model.skills),
        }
        print(json.dumps(payload, indent=2))
        return 0

    print("roles:  " + ", ".join(model.roles))
    print("levels: " + ", ".join(model.levels))
    print("skills: " + ", ".join(model.skills))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    issues = api.check_table(config_path=_config_path(args), logger=_logger(args))
    if not issues:
        print("ok")
        return 0
    for issue in issues:
        print(issue)
    return 1


def _cmd_compare(args: argparse.Namespace) -> int:
    view = api.compare(
        role_a=args.role_a,
        level_a=args.level_a,
        role_b=args.role_b,
        level_b=args.level_b,
        skills=args.skills,
        config_path=_config_path(args),
        logger=_logger(args),
    )

    if args.json:
        print(json.dumps(view_to_json(view), indent=2))
        return 0

    result = build_export(view)
    out_path = Path(args.output) if args.output else None
    if out_path:
        write_csv(result, out_path)
    else:
        write_rows(result, sys.stdout)
    return 0


_COMPARE_EPILOG = """examples:
  guild-build compare --role-a "Software Engineer" --role-b "Data Scientist" --level-b level_3
  guild-build compare --role-a "Software Engineer" --skill Python --skill Testing --json

stable JSON schema (compare):
  {
    "similarity": <0..100> | "N/A",
    "radar": [{"label", "role", "level", "points": [{"skill", "rating"}]}],
    "trend": [{"label", "role", "points": [{"level", "average": <number> | "N/A"}]}]
  }
"""


if __name__ == "__main__":
    raise SystemExit(main())
