#!/usr/bin/env python3
"""
Maintain the ``generate.ignore`` rule store of a source folder.

Every change is saved immediately.

Usage:
    python run_ignore_rules.py --root ./src list
    python run_ignore_rules.py --root ./src add "Migrations/**"
    python run_ignore_rules.py --root ./src replace "Tests/*" "Tests/**"
    python run_ignore_rules.py --root ./src check Migrations/Init.cs
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from core.errors import GenerationError, ValidationFailure
from core.structured_logging import configure_structured_logging
from extraction.ignore_rules import IgnoreRuleSet

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit generate.ignore rules")
    parser.add_argument("--root", required=True, help="Source folder holding generate.ignore.")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="Print the rules in order.")

    add = commands.add_parser("add", help="Append a rule (duplicates are skipped).")
    add.add_argument("pattern")

    remove = commands.add_parser("remove", help="Delete a rule.")
    remove.add_argument("pattern")

    replace = commands.add_parser("replace", help="Edit a rule in place.")
    replace.add_argument("old_pattern")
    replace.add_argument("new_pattern")

    check = commands.add_parser("check", help="Show which rule, if any, ignores a path.")
    check.add_argument("path")

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Apply one command; returns the process exit code."""
    if not os.path.isdir(args.root):
        raise ValidationFailure(f"Source folder not found: {args.root}")

    rules = IgnoreRuleSet.for_root(args.root)

    if args.command == "list":
        for rule in rules.rules:
            print(rule)
        return 0

    if args.command == "check":
        rule = rules.matching_rule(args.path)
        if rule is None:
            print(f"{args.path}: not ignored")
            return 1
        print(f"{args.path}: ignored by {rule}")
        return 0

    if args.command == "add":
        changed = rules.add_rule(args.pattern)
    elif args.command == "remove":
        changed = rules.remove_rule(args.pattern)
    else:
        changed = rules.replace_rule(args.old_pattern, args.new_pattern)

    if changed:
        rules.save()
    else:
        logger.info("Rule set unchanged")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    configure_structured_logging(logging.INFO)
    try:
        code = run(args)
    except GenerationError as e:
        logger.error(f"{e}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
