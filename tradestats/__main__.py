"""Command-line entry point: ``python -m tradestats report --config run.yaml``."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from tradestats.engine.runner import run_report

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tradestats")
    sub = p.add_subparsers(dest="module", required=True, metavar="<module>")
    report = sub.add_parser(
        "report", help="Round-trip win-rate report for a fill snapshot",
    )
    report.add_argument("--config", required=True, help="Path to YAML config file")
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )
    args = build_parser().parse_args(argv)
    run_id = run_report(args.config)
    log.info("Finished: run_id %s", run_id)


if __name__ == "__main__":
    main()
