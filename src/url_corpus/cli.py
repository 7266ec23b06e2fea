#!/usr/bin/env python3
"""
Command-line interface for the URL corpus generator.

Handles:
 1. Argument parsing (profile, count, config path, seed, output override)
 2. Loading the YAML config and validating the selected profile
 3. Invoking core.generate_urls and writing the URL file
 4. Echoing the URLs and a summary line to stdout
 5. Clear exit codes and messages for any failures

Exit codes:
 0  success
 1  configuration, profile or count error (nothing is written)
 2  the URL file could not be written
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from url_corpus.config import load_config, resolve_run, GeneratorConfig
from url_corpus.core import generate_urls
from url_corpus.errors import UrlCorpusError
from url_corpus.io.writer import UrlFileWriter, echo_urls
from url_corpus.logging_utils import configure_logging


# Module-level logger
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("config.yml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-corpus",
        description="Generate a file of synthetic URLs from weighted data sources",
    )
    parser.add_argument(
        "profile",
        nargs="?",
        help="Profile name from the config (defaults.profile when omitted)",
    )
    parser.add_argument(
        "count",
        nargs="?",
        type=int,
        help="Total number of URLs to generate (defaults.count when omitted)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Override RNG seed for a reproducible run (overrides config.seed)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write URLs here instead of config.urlFile",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also append log records to this file",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Entry point for the url-corpus CLI.

    Workflow:
      1. Load and validate configuration via config.load_config()
      2. Resolve profile and count (CLI over defaults) via config.resolve_run()
      3. Build the URL list in memory via core.generate_urls()
      4. Write the URL file, then echo the URLs and the summary line
    """
    args = build_parser().parse_args(argv)

    configure_logging(level=getattr(logging, args.log_level), log_path=args.log_file)
    logger.debug("Arguments: %s", args)

    # Load & validate config
    try:
        cfg: GeneratorConfig = load_config(args.config)
        if args.seed is not None:
            cfg = cfg.model_copy(update={"seed": args.seed})
        if args.output is not None:
            cfg = cfg.model_copy(update={"url_file": args.output})
        plan = resolve_run(cfg, args.profile, args.count)
    except UrlCorpusError as e:
        logger.error("Config error: %s", e)
        print(e)
        sys.exit(1)

    logger.info(
        "Starting generation (profile=%s, count=%d, seed=%s)",
        plan.profile_name,
        plan.count,
        cfg.seed,
    )
    try:
        result = generate_urls(cfg, plan)
    except Exception:
        logger.exception("Generator failed unexpectedly")
        sys.exit(1)

    # Only write once the whole list exists
    try:
        path = UrlFileWriter(cfg.url_file).write(result.urls)
    except OSError as e:
        logger.error("Could not write %s: %s", cfg.url_file, e)
        sys.exit(2)

    echo_urls(result.urls, path)


if __name__ == "__main__":
    main()
