"""
Entry point for the UK money calculators.

Usage:
    python main.py                              # launches the web app
    python main.py --cli                        # pick a calculator in the terminal
    python main.py --cli --calculator vat       # run one calculator directly
"""

import argparse

import config as cfg
from logging_config import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(
        description="UK money calculators: tax, property, loans and savings",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--calculator",
        metavar="SLUG",
        help="Calculator to run in terminal mode, e.g. stamp-duty",
    )
    parser.add_argument(
        "--log-level",
        default=cfg.LOG_LEVEL,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        help="Also write log output to this file",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_file)

    if args.cli:
        from cli import run_cli
        run_cli(args.calculator)
    else:
        from app import run_web
        run_web()


if __name__ == "__main__":
    main()
