# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Command-line tool: merge INI files and options, then report.

Usage:
    python -m genro_configtree [files ...] [--get KEY [--type TYPE]]
                               [--keep] [-v] [-- -key value ...]

Examples:
    # Print the merged report of two files
    python -m genro_configtree defaults.ini run.ini

    # Override a value and read it back as an integer
    python -m genro_configtree solver.ini --get solver.maxit --type int -- -solver.maxit 200
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from . import __version__
from .convert import UInt
from .exceptions import ConfigTreeError
from .parsers import read_ini_file, read_options
from .store import ConfigTree

logger = logging.getLogger(__name__)

TYPES = {
    'str': str,
    'int': int,
    'uint': UInt,
    'float': float,
    'bool': bool,
    'list': list[str],
    'ints': list[int],
    'floats': list[float],
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genro_configtree',
        description='Merge INI configuration files and -key value overrides.',
        epilog='Arguments after -- are read as -key value pairs.',
    )
    parser.add_argument('files', nargs='*', help='INI files, read in order')
    parser.add_argument('--get', metavar='KEY', help='print a single value')
    parser.add_argument(
        '--type', choices=sorted(TYPES), default='str',
        help='type used to convert the value printed by --get',
    )
    parser.add_argument(
        '--keep', action='store_true',
        help='later files do not replace values set by earlier ones',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    parser.add_argument('--version', action='version', version=__version__)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool and return the exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    overrides: list[str] = []
    if '--' in argv:
        split = argv.index('--')
        argv, overrides = argv[:split], argv[split + 1:]

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    tree = ConfigTree()
    try:
        for filename in args.files:
            logger.info("Reading %s", filename)
            read_ini_file(filename, tree, overwrite=not args.keep)
        read_options(['genro_configtree', *overrides], tree)
        if args.get is not None:
            print(tree.get(args.get, type_=TYPES[args.type]))
        else:
            tree.report(sys.stdout)
    except ConfigTreeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
