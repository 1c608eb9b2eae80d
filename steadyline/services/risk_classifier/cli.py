#!/usr/bin/env python3
"""Command-line interface for the Risk Classifier.

Usage:
    python -m steadyline.services.risk_classifier.cli --help
    python -m steadyline.services.risk_classifier.cli analyze "I feel great today"
    cat messages.txt | python -m steadyline.services.risk_classifier.cli analyze --flagged-only
    python -m steadyline.services.risk_classifier.cli analyze --fail-on-crisis "..."
    python -m steadyline.services.risk_classifier.cli resources --region UK
"""
import argparse
import json
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from .classifier import RiskClassifier
from .config import ClassifierConfig
from .resources import CRISIS_RESOURCES, get_resource

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        description="Steadyline Risk Classifier CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    analyze_parser = subparsers.add_parser("analyze", help="Classify messages")
    analyze_parser.add_argument(
        "messages", nargs="*",
        help="Messages to classify (read from stdin, one per line, if omitted)"
    )
    analyze_parser.add_argument(
        "--flagged-only", action="store_true",
        help="Only print results where isPotentialCrisis is true"
    )
    analyze_parser.add_argument(
        "--fail-on-crisis", action="store_true",
        help="Exit with status 1 if any message is flagged"
    )

    resources_parser = subparsers.add_parser("resources", help="Show crisis resources")
    resources_parser.add_argument(
        "--region",
        help="Region key (US, UK, Canada, Australia, international)"
    )

    return parser


def run_analyze(
    messages: Iterable[str],
    out: TextIO,
    flagged_only: bool = False,
    classifier: Optional[RiskClassifier] = None,
) -> int:
    """Classify messages and write one JSON object per line.

    Returns:
        Number of flagged messages
    """
    classifier = classifier or RiskClassifier(config=ClassifierConfig.from_env())
    flagged = 0
    for message in messages:
        result = classifier.analyze(message)
        if result.is_potential_crisis:
            flagged += 1
        elif flagged_only:
            continue
        out.write(json.dumps({"message": message, **result.to_dict()}) + "\n")
    return flagged


def run_resources(region: Optional[str], out: TextIO) -> None:
    """Write the crisis resource directory, or one region's entry."""
    if region:
        payload = get_resource(region).to_dict()
    else:
        payload = {key: resource.to_dict() for key, resource in CRISIS_RESOURCES.items()}
    out.write(json.dumps(payload, indent=2) + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.command == "analyze":
        if args.messages:
            messages = args.messages
        else:
            messages = [line.rstrip("\n") for line in sys.stdin]
        flagged = run_analyze(messages, sys.stdout, flagged_only=args.flagged_only)
        logger.info("CLI_ANALYZE_COMPLETED", extra={"message_count": len(messages), "flagged": flagged})
        if args.fail_on_crisis and flagged:
            return 1
        return 0

    if args.command == "resources":
        run_resources(args.region, sys.stdout)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(main())
