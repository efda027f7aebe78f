"""Main entry point for the reverse-DNS zone planner.

Usage:
    python -m src.main [MANIFEST]

The manifest path falls back to MANIFEST_PATH. The plan is written to
stdout; logs go to stderr.
"""

import argparse
import logging
import sys
import time

from src.config import Config
from src.services.logger import setup_logging
from src.services.manifest import load_manifest
from src.services.plan_reporter import PlanReporter
from src.services.planner import build_plan


logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reverse-dns-planner",
        description="Plan reverse DNS zones and PTR records from a YAML manifest",
    )
    parser.add_argument(
        "manifest",
        nargs="?",
        help="Path to the manifest (default: $MANIFEST_PATH)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main execution function.

    Args:
        argv: Command-line arguments without the program name; defaults to
            sys.argv[1:]. --help and usage errors exit through argparse.

    Returns:
        int: Exit code (0 for a clean plan, 1 for plan errors or a fatal error).
    """
    start_time = time.time()
    args = parse_arguments(sys.argv[1:] if argv is None else argv)

    try:
        config = Config.from_env(args.manifest)
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(config.verbose)
    logger.info("Starting reverse DNS planner")

    try:
        manifest = load_manifest(config.manifest_path)
        plan = build_plan(manifest, config)

        if config.output_format == "yaml":
            report = PlanReporter.generate_yaml_report(plan)
        else:
            report = PlanReporter.generate_json_report(plan)
        sys.stdout.write(report)
        if not report.endswith("\n"):
            sys.stdout.write("\n")

        duration_sec = time.time() - start_time
        if plan.has_errors:
            logger.error(
                f"Plan has {len(plan.errors)} error(s); see the errors section"
            )
            return 1

        logger.info(f"Plan completed successfully in {duration_sec:.2f} seconds")
        return 0

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
