from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from textual.logging import TextualHandler

from .config import LOG_LEVELS, load_settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="chimptype", description="Terminal typing-speed test.")
    p.add_argument("-c", "--config", type=Path, default=None, help="Path to a JSON config file")
    p.add_argument("-n", "--words", type=int, default=None, help="Number of words per test")
    p.add_argument("-f", "--file", type=str, default=None, help='Language file, e.g. {"words": [...]}')
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (records go to the textual devtools console)",
    )
    args = p.parse_args(argv)
    if args.words is not None and args.words < 1:
        p.error("--words must be at least 1")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings(
        args.config,
        word_count=args.words,
        words_file=args.file,
        log_level=args.log_level,
    )
    # Textual owns the terminal; plain stream handlers would draw over the screen.
    logging.basicConfig(level=settings.log_level, handlers=[TextualHandler()])

    # imported late so --help works without touching the terminal
    from .app import ChimpTypeApp

    ChimpTypeApp(settings).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
