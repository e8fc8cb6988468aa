#!/usr/bin/env python
"""CLI for the Crisis Profiles content pipeline."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from crisis_profiles.config import get_default_config_path, load_config
from crisis_profiles.config.factory import create_from_config
from crisis_profiles.pipeline import apply_process_limit, summarize_results
from crisis_profiles.store import JsonlCrisisStore

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    input: Path
    config: Path
    output: Path | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("input", "config")
    @classmethod
    def must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        return v


def load_inputs(path: Path) -> list[Any]:
    """Read a JSON list of ``{country, region, articles}`` objects.

    Entries are passed through unchanged; the pipeline reads each one
    inside its own per-country guard.
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON list of countries in {path}")
    return raw


async def run(args: CLIArgs) -> int:
    """Execute the batch pipeline with the given configuration.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code: 0 when every country succeeded, 1 otherwise.
    """
    config = load_config(args.config)
    store = JsonlCrisisStore(args.output or config.storage.records_path)
    review_store = (
        JsonlCrisisStore(config.storage.review_path) if config.storage.review_path else None
    )
    pipeline, run_logger = create_from_config(
        config,
        store,
        review_store=review_store,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    countries = apply_process_limit(load_inputs(args.input), config.pipeline.process_limit)

    logger.info(f"Processing {len(countries)} countries from {args.input}")
    logger.info(f"Config: {args.config}")

    results = await pipeline.process_batch(countries)
    summary = summarize_results(results)

    logger.info("\n--- Batch Summary ---")
    logger.info(f"Successful: {summary['successful']}/{summary['total']}")
    if summary["heldForReview"]:
        logger.info(f"Held for review: {summary['heldForReview']}")
    logger.info(f"Input tokens: {summary['inputTokens']:,}")
    logger.info(f"Output tokens: {summary['outputTokens']:,}")
    for result in results:
        status = "ok" if result.success else "FAILED"
        score = f" quality={result.quality_score}" if result.quality_score is not None else ""
        logger.info(f"  {result.country}: {status}{score}")
        for error in result.errors:
            logger.info(f"    error: {error}")

    logger.info(f"\nRecords written to: {store.path}")
    if run_logger and run_logger.last_log_path:
        logger.info(f"Run logs written to: {run_logger.last_log_path.parent}")

    return 0 if summary["failed"] == 0 else 1


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Generate vetted crisis profiles from humanitarian reports."
    )
    parser.add_argument(
        "input",
        type=Path,
        help="JSON file with a list of {country, region, articles} objects",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="JSON Lines file for published records (overrides storage.records_path)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable per-country pipeline logging to JSON files",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            input=ns.input,
            config=config_path,
            output=ns.output,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
