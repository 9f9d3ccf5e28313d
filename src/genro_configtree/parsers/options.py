# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers for command-line options.

Two styles are supported:

- ``read_options``: plain ``-key value`` pairs, e.g.
  ``prog -grid.cells "16 16" -solver.tol 1e-8``
- ``read_named_options``: Python-like named options. Positional arguments
  fill the keywords in order, ``--key=value`` sets a keyword by name.

Example:
    >>> tree = ConfigTree()
    >>> read_named_options(['prog', 'mesh.msh', '--level=3'], tree, ['grid', 'level'])
    >>> tree['grid'], tree['level']
    ('mesh.msh', '3')
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from ..exceptions import HelpRequested, OptionSyntaxError
from ..store import ConfigTree

logger = logging.getLogger(__name__)

HELP_FLAGS = ('-h', '--help')


def read_options(argv: Sequence[str] | None, tree: ConfigTree) -> None:
    """Store every ``-key value`` pair of ``argv`` in ``tree``.

    Args:
        argv: Command line, ``argv[0]`` being the program name. Defaults to
            ``sys.argv``. Arguments not starting with ``-`` are skipped.
        tree: The ConfigTree receiving the values.

    Raises:
        OptionSyntaxError: The last option has no value.
    """
    if argv is None:
        argv = sys.argv
    i = 1
    while i < len(argv):
        opt = argv[i]
        if len(opt) > 1 and opt.startswith('-'):
            if i + 1 >= len(argv):
                raise OptionSyntaxError(
                    f"last option on command line ({opt}) does not have an argument"
                )
            tree[opt[1:]] = argv[i + 1]
            logger.debug("Option %s = %r", opt[1:], argv[i + 1])
            i += 1
        i += 1


def generate_help_string(
    progname: str,
    keywords: Sequence[str],
    required: int,
    help: Sequence[str] | None = None,
) -> str:
    """Build the usage text for ``read_named_options``.

    Required keywords are shown as ``<key>``, optional ones as ``[key]``,
    followed by one ``-key:<TAB>help`` line per non-empty help string.
    """
    usage = [f"Usage: {progname}"]
    for i, keyword in enumerate(keywords):
        usage.append(f"<{keyword}>" if i < required else f"[{keyword}]")
    lines = [' '.join(usage), 'Options:', '-h / --help: this help']
    for keyword, text in zip(keywords, help or ()):
        if text:
            lines.append(f"-{keyword}:\t{text}")
    return '\n'.join(lines) + '\n'


def _already_specified(tree: ConfigTree, key: str) -> bool:
    return tree.has_key(key) and tree[key] != ''


def read_named_options(
    argv: Sequence[str] | None,
    tree: ConfigTree,
    keywords: Sequence[str],
    required: int | None = None,
    allow_more: bool = True,
    overwrite: bool = True,
    help: Sequence[str] | None = None,
) -> None:
    """Read positional and ``--key=value`` options into ``tree``.

    Positional arguments are assigned to the keywords that are still unset,
    in order. ``--key=value`` sets ``key`` directly and marks it as set.

    Args:
        argv: Command line, ``argv[0]`` being the program name. Defaults to
            ``sys.argv``.
        tree: The ConfigTree receiving the values.
        keywords: Ordered keyword names.
        required: How many of the first keywords are required. None means
            all of them.
        allow_more: Accept ``--key=value`` for keys not in ``keywords``.
        overwrite: Accept a value for a key that already has a non-empty
            value in ``tree`` (including one set earlier on the command line).
        help: Help strings, one per keyword, or None.

    Raises:
        HelpRequested: ``-h`` or ``--help`` was given.
        OptionSyntaxError: Missing value, unknown or repeated parameter,
            superfluous positional argument or missing required keyword.
    """
    if argv is None:
        argv = sys.argv
    if required is None:
        required = len(keywords)
    usage = generate_help_string(argv[0] if argv else '', keywords, required, help)
    done = [False] * len(keywords)
    current = 0

    for opt in argv[1:]:
        if opt in HELP_FLAGS:
            raise HelpRequested(usage)

        if opt.startswith('--'):
            key, sep, value = opt[2:].partition('=')
            if not sep:
                raise OptionSyntaxError(f"value missing for parameter {opt}", usage)
            known = key in keywords
            if not allow_more and not known:
                raise OptionSyntaxError(f"unknown parameter {key}", usage)
            if not overwrite and _already_specified(tree, key):
                raise OptionSyntaxError(f"parameter {key} already specified", usage)
            tree[key] = value
            if known:
                done[keywords.index(key)] = True
            continue

        while current < len(done) and done[current]:
            current += 1
        if current >= len(done):
            raise OptionSyntaxError("superfluous unnamed parameter", usage)
        key = keywords[current]
        if not overwrite and _already_specified(tree, key):
            raise OptionSyntaxError(f"parameter {key} already specified", usage)
        tree[key] = opt
        done[current] = True

    missing = [kw for i, kw in enumerate(keywords) if i < required and not done[i]]
    if missing:
        raise OptionSyntaxError(
            "missing parameter(s) ... " + ' '.join(missing), usage
        )
