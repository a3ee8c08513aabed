#!/usr/bin/env python
"""
Command line front end for fastwild.

    fastwild match TEXT PATTERN [-c]
        Prints True or False; exits with 0 on a match and 1 otherwise.

    fastwild tree ROOT_DIR [OUTPUT_FILE] [-c] [-oj] [-s] [-rr] [--filter-file NAME] [-e PATTERN ...]
        Lists ROOT_DIR, leaving out everything excluded by the filter rules.
"""

import os
import sys
import argparse
from typing import List, Optional

from .core import generate_listing
from .filter_logic import DEFAULT_FILTER_FILE
from .wildcard import matches


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastwild",
        description="Matches text against '?' and '*' wildcard patterns, and lists directory trees filtered by wildcard rules.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    match_cmd = commands.add_parser("match", help="Test whether TEXT matches PATTERN")
    match_cmd.add_argument("text", help="Text to test")
    match_cmd.add_argument("pattern", help="Wildcard pattern ('?' matches one character, '*' any run)")
    match_cmd.add_argument("--casefold", "-c", action="store_true", help="Enable case-insensitive matching")

    tree_cmd = commands.add_parser("tree", help="List a directory, leaving out paths excluded by filter rules")
    tree_cmd.add_argument("root_dir", help="Root directory to be scanned")
    tree_cmd.add_argument("output_file", nargs="?", help="Optional output file (default: stdout)")
    tree_cmd.add_argument("--casefold", "-c", action="store_true", help="Enable case-insensitive matching")
    tree_cmd.add_argument("--json", "-oj", action="store_true", help="Output JSON instead of text")
    tree_cmd.add_argument("--only-structure", "-s", action="store_true", help="Omit the flat file list in the output")
    tree_cmd.add_argument("--relative-root", "-rr", action="store_true", help="Force the root directory name to be '.' instead of basename")
    tree_cmd.add_argument("--filter-file", default=DEFAULT_FILTER_FILE, help=f"Name of the filter rule files (default: {DEFAULT_FILTER_FILE})")
    tree_cmd.add_argument("--exclude", "-e", action="append", default=[], metavar="PATTERN", help="Extra filter rule, applied after those from filter files (repeatable)")
    return parser


def run_match(args: argparse.Namespace) -> int:
    result = matches(args.text, args.pattern, ignore_case=args.casefold)
    print(result)
    return 0 if result else 1


def run_tree(args: argparse.Namespace) -> int:
    root_dir = args.root_dir
    if not os.path.isdir(root_dir):
        print(f"Error: {root_dir} is not a valid directory", file=sys.stderr)
        return 2

    listing = generate_listing(
        root_dir=root_dir,
        casefold=args.casefold,
        json_mode=args.json,
        only_structure=args.only_structure,
        display_actual_root=not args.relative_root,
        filter_file=args.filter_file,
        extra_patterns=args.exclude,
    )
    if args.output_file:
        with open(args.output_file, 'w', encoding='utf-8') as f:
            f.write(listing)
        print(f"Output written to {args.output_file}")
    else:
        print(listing)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "match":
        return run_match(args)
    return run_tree(args)


if __name__ == "__main__":
    sys.exit(main())
