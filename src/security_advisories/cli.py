"""Command-line entrypoint that builds the conflict document from an advisory feed.

Usage:
  security-advisories-build --source feed.jsonl [--output build/composer.json]
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import ConfigError, load_settings
from .core import build_conflict_document, write_conflict_document
from .ingestion import AdvisoryFeedError, load_advisories
from .models import ConstraintMergeError
from .validators.conflict_document import validate_document

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--source", default=None, help="Advisory feed URL or JSONL path")
    parser.add_argument("--output", default=None, help="Where to write the document")
    parser.add_argument("--name", dest="package_name", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = load_settings(args.source, args.output, args.package_name)
        aggregation = load_advisories(settings.source)
        document = build_conflict_document(aggregation.packages, name=settings.package_name)
        validate_document(document)
    except (ConfigError, AdvisoryFeedError, ConstraintMergeError) as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid advisory data: %s", exc)
        return 1

    write_conflict_document(document, settings.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
