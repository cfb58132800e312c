"""
Application Initialization
==========================
This module builds the window and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line and sets up logging.
2. Instantiates the simulation lifecycle and the Main Window (View).
3. Optionally loads a trace file or the built-in sample before showing it.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from beliefgraph.application import create_app
from beliefgraph.logging_config import setup_logging
from beliefgraph.simulation.lifecycle import LifecycleManager
from beliefgraph.view.main_window import MainWindow


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="beliefgraph",
        description="Animated force-directed view of a reasoning trace.",
    )
    parser.add_argument("path", nargs="?", help="JSON trace: a list of states or an analysis result")
    parser.add_argument("--sample", action="store_true", help="start with the built-in sample trace")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize lifecycle + Main Window
    lifecycle = LifecycleManager()
    window = MainWindow(lifecycle)

    # 4. Initial content
    if args.path:
        window.load_file(args.path)
    elif args.sample:
        window.on_load_sample()

    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
