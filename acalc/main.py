"""Command-line entry point: evaluates an acalc file, a single expression, or runs the interactive shell. Also sets up
the error handling context manager and logging. Installed as the `acalc` console script.
"""

import argparse
import logging

from acalc.lang.error import ErrorHandler
from acalc.lang.session import Session
from acalc.lang.shell import Shell

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(prog="acalc", description="Arithmetic expression interpreter.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    source.add_argument("-c", "--command", metavar="EXPR", help="evaluate a single expression and print its value")
    parser.add_argument("--debug", action="store_true", help="log tokens, syntax trees and results")
    return parser


def main(argv=None):
    """Runs acalc interpreter. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    with ErrorHandler() as error_handler:
        if args.command is not None:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
            error_handler.fatal = True  # a one-off expression has nothing to continue with

            sess.add(args.command, 1)
            sess.run()
            print(sess.pop())

        elif args.file is not None:
            logger.debug("interpreting %s", args.file)
            sess = Session(error_handler, args.file, cmd_line=False, echo=True)
            sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
