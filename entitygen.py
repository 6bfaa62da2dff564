#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from typing import List

from entitygen_lib import ConfigError, GenerationError, generate, load_settings, split_tags


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Generate source files for an entity from templates with {{EntityName}}-style placeholders. "
            "Existing files are never overwritten."
        ),
        epilog=(
            "Examples: entitygen --entity Product | entitygen -e Order -t my-templates | "
            "entitygen -e Invoice -g entity,service | entitygen Order templates entity,service"
        ),
    )
    parser.add_argument(
        "-e",
        "--entity",
        help="Name of the entity to generate (e.g. Product, User)",
    )
    parser.add_argument(
        "-t",
        "--templates",
        help="Path to the templates folder (default: ./templates)",
    )
    parser.add_argument(
        "-g",
        "--tags",
        help=(
            "Comma-separated tags. Only templates with at least one matching tag are generated. "
            "Example: -g entity,service"
        ),
    )
    parser.add_argument(
        "-o",
        "--out",
        help="Base directory the template output paths are relative to (default: current directory)",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML config file (default: ./entitygen.yaml if present)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument(
        "positional",
        nargs="*",
        metavar="ENTITY [TEMPLATES [TAGS]]",
        help="Legacy form: entity name, then optional templates folder and tags",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if len(args.positional) > 3:
        parser.error("at most three positional arguments are accepted: ENTITY [TEMPLATES [TAGS]]")

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    # Named flags win over legacy positionals, which win over the config file
    legacy = list(args.positional) + [None] * (3 - len(args.positional))
    entity_name = args.entity or legacy[0]
    templates_folder = args.templates or legacy[1] or settings.templates
    if args.tags is not None:
        tags = split_tags(args.tags)
    elif legacy[2] is not None:
        tags = split_tags(legacy[2])
    else:
        tags = settings.tags

    if not entity_name or not entity_name.strip():
        print("Error: Entity name is required. Use --help for usage information.", file=sys.stderr)
        return 1

    base_dir = os.path.abspath(args.out or settings.out or os.getcwd())
    templates_dir = os.path.abspath(templates_folder)

    try:
        result = generate(templates_dir, entity_name, base_dir, tags or None)
    except GenerationError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1

    print(f"Generation completed. {result.generated_count} generated, {result.skipped_count} skipped.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
