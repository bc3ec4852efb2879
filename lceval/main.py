"""Uses the pure lambda calculus evaluator to reduce the programs of a file or to run in command-line mode. Also uses
error handling context manager. Called from the lceval console script.
"""

import argparse

from lceval.lang.error import ErrorHandler
from lceval.lang.session import Session
from lceval.lang.shell import Shell
from lceval.pure.lexical import NormalOrderReducer


def natural(value):
    """argparse type for --max-steps."""
    try:
        number = int(value)
    except ValueError:
        number = -1
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected natural number, got '{value}'")
    return number


def main(argv=None):
    """Runs lceval. Called from the lceval console script."""
    parser = argparse.ArgumentParser(prog="lceval", description="Reduce untyped lambda calculus terms.")
    parser.add_argument("file", help="file to evaluate, one term per line (if empty, goes to command-line mode)",
                        nargs="?")
    parser.add_argument("--max-steps", type=natural, default=NormalOrderReducer.MAX_STEPS,
                        help="reduction steps allowed per term (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every reduction step")
    args = parser.parse_args(argv)

    with ErrorHandler(verbose=args.verbose) as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, max_steps=args.max_steps)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, max_steps=args.max_steps)).cmdloop()


if __name__ == "__main__":
    main()
