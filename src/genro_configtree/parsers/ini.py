# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parser for INI-style configuration text.

Files look like this::

    # this file configures fruit colors in fruitsalad

    honeydewmelon = yellow
    fruit.tropicalfruit.orange = orange

    [fruit]
    strawberry = red

    [fruit.pipfruit]
    apple = green/red/yellow
    pear = green

A ``[prefix]`` line applies ``prefix.`` to every following key until the
next ``[prefix]`` line; ``[]`` clears it. Values are trimmed and cut at the
first ``#``, unless they are wrapped in single or double quotes, which
keeps surrounding blanks and lets the value span several lines.

Example:
    >>> tree = ConfigTree()
    >>> read_ini_string('[fruit.pipfruit]\\napple = green', tree)
    >>> tree['fruit.pipfruit.apple']
    'green'
"""

from __future__ import annotations

import logging
import re
from io import StringIO
from pathlib import Path
from typing import Iterable, Iterator

from ..convert import WHITESPACE
from ..exceptions import ConfigFileError, DuplicateKeyError
from ..store import ConfigTree

logger = logging.getLogger(__name__)

QUOTES = ('"', "'")


def _chomp(line: str) -> str:
    return line[:-1] if line.endswith('\n') else line


def _closing_quote(text: str, quote: str, first: bool) -> int:
    """Index of the closing quote in one line of a quoted value, or -1.

    The value ends at a quote that is the last non-blank character of the
    line. On the line holding the opening quote it may also end at a quote
    followed by blanks and a ``#`` comment, so a value whose first line
    contains such a sequence (e.g. ``a" # b``) is cut there; continuation
    lines are only closed by a trailing quote.
    """
    stripped = text.rstrip(WHITESPACE)
    if stripped.endswith(quote):
        return len(stripped) - 1
    if not first:
        return -1
    match = re.search(re.escape(quote) + r'[ \t]*#', text)
    return match.start() if match else -1


def _read_quoted(
    first: str, lines: Iterator[str], quote: str, key: str, srcname: str
) -> str:
    parts: list[str] = []
    text = first
    while True:
        end = _closing_quote(text, quote, first=not parts)
        if end >= 0:
            parts.append(text[:end])
            break
        parts.append(text)
        try:
            text = _chomp(next(lines))
        except StopIteration:
            logger.warning(
                "Unterminated quoted value for key '%s' in %s", key, srcname
            )
            break
    return '\n'.join(parts)


def read_ini_tree(
    source: Iterable[str],
    tree: ConfigTree,
    srcname: str = 'stream',
    overwrite: bool = True,
) -> None:
    """Parse INI lines into ``tree``.

    Args:
        source: Lines to parse: an open text file, a StringIO or any
            iterable of strings.
        tree: The ConfigTree receiving the values.
        srcname: Name of the source used in messages, e.g. "stdin".
        overwrite: Whether to replace values already present in ``tree``.
            If False those keys are left untouched.

    Raises:
        DuplicateKeyError: The same key appears twice in ``source``.
        KeyCollisionError: A key or section is used as both a value and
            a subtree.
    """
    prefix = ''
    keys_in_source: set[str] = set()
    lines = iter(source)

    for raw in lines:
        line = _chomp(raw).lstrip(WHITESPACE)
        if not line or line.startswith('#'):
            continue

        if line.startswith('['):
            line = line.rstrip(WHITESPACE)
            if not line.endswith(']'):
                logger.warning(
                    "Ignoring malformed section line in %s: %s", srcname, line,
                )
                continue
            section = line[1:-1].strip(WHITESPACE)
            prefix = f"{section}." if section else ''
            if section:
                tree.sub(section)
            continue

        mid = line.find('=')
        comment = line.find('#')
        if mid < 0 or 0 <= comment < mid:
            logger.warning(
                "Ignoring line without assignment in %s: %s", srcname, line,
            )
            continue

        key = prefix + line[:mid].strip(WHITESPACE)
        value = line[mid + 1:].lstrip(WHITESPACE)
        if value[:1] in QUOTES:
            value = _read_quoted(value[1:], lines, value[0], key, srcname)
        else:
            value = value.split('#', 1)[0].rstrip(WHITESPACE)

        if key in keys_in_source:
            raise DuplicateKeyError(f"Key '{key}' appears twice in {srcname} !")
        keys_in_source.add(key)

        if overwrite or not tree.has_key(key):
            tree[key] = value
        else:
            logger.debug("Keeping existing value for '%s' from %s", key, srcname)

    logger.debug("Read %d keys from %s", len(keys_in_source), srcname)


def read_ini_string(
    text: str,
    tree: ConfigTree,
    srcname: str = 'string',
    overwrite: bool = True,
) -> None:
    """Parse INI ``text`` into ``tree``. See ``read_ini_tree``."""
    read_ini_tree(StringIO(text), tree, srcname, overwrite)


def read_ini_file(
    path: str | Path,
    tree: ConfigTree,
    overwrite: bool = True,
) -> None:
    """Parse the INI file at ``path`` into ``tree``.

    Raises:
        ConfigFileError: The file cannot be opened.
        DuplicateKeyError: The same key appears twice in the file.
    """
    path = Path(path)
    try:
        handle = path.open(encoding='utf-8')
    except OSError as exc:
        raise ConfigFileError(f"Could not open configuration file {path}") from exc
    with handle:
        read_ini_tree(handle, tree, f"file '{path}'", overwrite)
