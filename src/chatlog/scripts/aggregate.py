"""Run one usage aggregation, for use from cron or an external scheduler."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from chatlog.core.errors import ChatlogError
from chatlog.core.logging import configure_logging
from chatlog.core.settings import settings
from chatlog.services.aggregation_worker import run_aggregation

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Aggregate recent messages into a usage range")
    parser.add_argument(
        "--lookback-seconds",
        type=int,
        default=settings.aggregation_lookback_seconds,
        help="Length of the trailing window to aggregate (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    configure_logging()
    try:
        summary = run_aggregation(lookback_seconds=args.lookback_seconds)
    except ChatlogError as exc:
        logger.error("Aggregation failed: %s", exc)
        print(json.dumps({"success": False, "error": {"message": str(exc), "type": type(exc).__name__}}))
        return 1

    print(json.dumps({"success": True, "data": asdict(summary)}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
