from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .errors import InsortError
from .models import CreationPolicy
from .normalize import reconcile

DESCRIPTION = (
    "Utility which sorts the given file in-place and optionally inserts "
    "the given additions into the file"
)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="insort", description=DESCRIPTION)
    ap.add_argument("filename", help="the file to sort and optionally insert additions into")
    ap.add_argument(
        "additions",
        nargs="*",
        help="optional string(s) to insert into the file (strings already in the file will not be inserted)",
    )
    create = ap.add_mutually_exclusive_group()
    create.add_argument("-c", "--create", action="store_true", help="create the file if it does not exist")
    create.add_argument("-n", "--no-create", action="store_true", help="fail if the file does not exist")
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    ap.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    policy = CreationPolicy.from_flags(create=args.create, no_create=args.no_create)
    try:
        reconcile(args.filename, args.additions, policy)
    except (InsortError, OSError, UnicodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
