"""Convenience script for generating one Scholar Feed article locally."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the scholarfeed package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from scholarfeed.config import AppSettings  # noqa: E402  (import after path setup)
from scholarfeed.errors import ConfigurationError  # noqa: E402
from scholarfeed.services.pipeline import ArticlePipeline  # noqa: E402


def main() -> None:
    """Run the pipeline for the interests given on the command line."""

    parser = argparse.ArgumentParser(description="Summarise a scholarly article matching your interests.")
    parser.add_argument("interests", nargs="+", help="One or more interests, e.g. AI climate")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    interests = list(dict.fromkeys(interest.strip() for interest in args.interests if interest.strip()))
    if not interests:
        logging.error("At least one non-blank interest is required")
        sys.exit(2)

    try:
        pipeline = ArticlePipeline.from_settings(AppSettings.from_env())
    except ConfigurationError as exc:
        logging.error("Scholar Feed is not configured: %s", exc)
        sys.exit(1)

    article = pipeline.run(interests)
    logging.info("Pipeline finished with outcome %s", article.outcome.value)

    print(json.dumps(article.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2))


if __name__ == "__main__":
    main()
