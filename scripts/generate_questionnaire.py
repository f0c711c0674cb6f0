#!/usr/bin/env python3
"""
Generate a medical intake questionnaire with the questionnaire pipeline.

Settings come from QUESTIONNAIRE_* environment variables (a local .env file
is loaded first); command-line flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from pipeline import ValidationExhausted
from questionnaire import (
    PROCESS_FLAG,
    LiteLLMClient,
    Questionnaire,
    build_questionnaire_pipeline,
    load_settings,
)
from questionnaire.steps import QUESTIONNAIRE_KEY

load_dotenv()

logger = logging.getLogger("generate_questionnaire")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--model", help="LiteLLM model name (overrides QUESTIONNAIRE_MODEL)")
    parser.add_argument(
        "--max-attempts",
        type=int,
        help="Validation attempts before giving up (overrides QUESTIONNAIRE_MAX_ATTEMPTS)",
    )
    parser.add_argument(
        "--process",
        action="store_true",
        help="Run the per-question processors after parsing",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    settings = load_settings().with_overrides(
        model=args.model, max_attempts=args.max_attempts
    )

    backend = LiteLLMClient(config=settings.llm)
    builder = build_questionnaire_pipeline(
        backend, max_attempts=settings.max_attempts
    )
    try:
        ctx = await builder.execute_async({PROCESS_FLAG: args.process})
    except ValidationExhausted as exc:
        logger.error("No valid questionnaire after %d attempt(s)", exc.attempts)
        return 1

    questionnaire = ctx.get_as(QUESTIONNAIRE_KEY, Questionnaire)
    if questionnaire is None:
        logger.error("Generation produced no questionnaire")
        return 1
    sys.stdout.write(questionnaire.to_json(indent=2) + "\n")
    logger.info("Backend calls: %d", backend.call_count)
    return 0


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
