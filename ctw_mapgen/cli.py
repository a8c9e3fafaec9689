#!/usr/bin/env python3
"""
Generate a Capture the Wool layout from the command line.

Usage:
    ctw-mapgen [--config config.json] [--seed N] [--teams {2,4}]
               [--output layout.json] [--summary]

The config file uses the same camelCase keys as the API. Without --output
the export document is printed to stdout.
"""

import argparse
import json
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from .config import settings
from .core import GeneratorConfig, LayoutGenerationError, generate_layout
from .core.layout_analysis import summarize_layout
from .export import layout_to_dict, write_layout_json
from .utils import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a Capture the Wool map layout")
    parser.add_argument("--config", type=Path, help="JSON generator config (camelCase keys)")
    parser.add_argument("--seed", type=int, help="Override the config seed")
    parser.add_argument("--teams", type=int, choices=[2, 4], help="Override the number of teams")
    parser.add_argument("--output", "-o", type=Path, help="Write the layout JSON here instead of stdout")
    parser.add_argument("--summary", action="store_true", help="Log per-team statistics")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    return parser


def load_config(path: Path = None, seed: int = None, teams: int = None) -> GeneratorConfig:
    """Read a config file (if any) and apply command-line overrides."""
    data = json.loads(path.read_text()) if path else {}
    if seed is not None:
        data["seed"] = seed
    if teams is not None:
        data["numTeams"] = teams
    return GeneratorConfig.model_validate(data)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, settings.log_format)

    try:
        config = load_config(args.config, args.seed, args.teams)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Invalid configuration", error=str(e))
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        layout = generate_layout(config)
    except LayoutGenerationError as e:
        logger.error("Layout generation failed", seed=config.seed, error=str(e))
        print(str(e), file=sys.stderr)
        return 1

    if args.output:
        write_layout_json(layout, args.output)
    else:
        print(json.dumps(layout_to_dict(layout), indent=2))

    if args.summary:
        logger.info("Layout summary", **summarize_layout(layout))

    return 0


if __name__ == "__main__":
    sys.exit(main())
