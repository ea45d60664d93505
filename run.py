"""Command line entry point: build a dungeon structure and print it.

Usage (example):
    python run.py dungeons.crypt.main
    python run.py crypt --config-dir assets/structures/crypt.json --json
"""
from __future__ import annotations
import argparse
import json
import logging
import sys

from config import get_log_level, resolve_log_level
from dungeon_engine.bootstrap import load_structure
from dungeon_engine.core.describe import describe_structure, structure_to_dict
from dungeon_engine.core.errors import StructureError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build an abstract dungeon structure from JSON configuration.")
    parser.add_argument("structure", help="dotted config path of the structure to build")
    parser.add_argument("--config-dir", default=None, help="directory (or single JSON file) with structure documents")
    parser.add_argument("--json", action="store_true", help="print the structure as JSON instead of an outline")
    parser.add_argument("--no-schema", action="store_true", help="skip the JSON schema check")
    parser.add_argument("--log-level", default=None, help="logging level (overrides DUNGEON_LOG_LEVEL)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=resolve_log_level(args.log_level) if args.log_level else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        structure = load_structure(
            args.structure,
            config_dir=args.config_dir,
            check_schema=False if args.no_schema else None,
        )
    except (StructureError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(structure_to_dict(structure), indent=2, default=str))
    else:
        for line in describe_structure(structure, args.structure):
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
