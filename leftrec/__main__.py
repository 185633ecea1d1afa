#!/usr/bin/env python3

"""leftrec -- evaluate arithmetic with a left-recursive grammar.

The grammar lives in leftrec.calc; its expr and term rules call
themselves first thing and would recurse forever without the guard.
"""

import argparse
import sys
import time
import traceback

from typing import List, Optional

from leftrec.calc import evaluate
from leftrec.registry import RecursiveIndexes

argparser = argparse.ArgumentParser(prog="leftrec", description="Evaluate an arithmetic expression")
argparser.add_argument("-q", "--quiet", action="store_true", help="Don't print the value")
argparser.add_argument(
    "-v",
    "--verbose",
    action="count",
    default=0,
    help="Print timing stats; repeat to trace guarded rules",
)
argparser.add_argument(
    "--capacity",
    type=int,
    default=64,
    help="Number of recursion flags (a multiple of 64; default 64)",
)
argparser.add_argument("expression", nargs="?", default="-", help="Expression ('-' to use stdin)")


def main(argv: Optional[List[str]] = None) -> None:
    args = argparser.parse_args(argv)
    verbose = args.verbose
    try:
        registry = RecursiveIndexes(args.capacity, verbose=verbose >= 2)
    except ValueError as err:
        argparser.error(str(err))

    if args.expression == "-":
        filename = "<stdin>"
        source = sys.stdin.read()
    else:
        filename = "<string>"
        source = args.expression

    t0 = time.time()
    try:
        value = evaluate(source, registry=registry)
    except SyntaxError as err:
        err.filename = filename
        traceback.print_exception(err.__class__, err, None)
        sys.exit(1)
    except ArithmeticError as err:
        traceback.print_exception(err.__class__, err, None)
        sys.exit(1)
    t1 = time.time()

    if not args.quiet:
        print(value)

    if verbose:
        dt = t1 - t0
        print(f"Total time: {dt:.3f} sec; {len(source)} characters", end="")
        if dt:
            print(f"; {len(source) / dt:.0f} characters/sec")
        else:
            print()
        print("Guarded rules:")
        for name in registry:
            print(f"  {registry.get(name):3}: {name}")


if __name__ == "__main__":
    main()
