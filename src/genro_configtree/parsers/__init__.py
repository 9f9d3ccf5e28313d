# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers for populating a ConfigTree from text and command lines.

Available parsers:
- ini: INI-style files with ``[prefix]`` sections
- options: ``-key value`` pairs and named ``--key=value`` options

Example:
    >>> from genro_configtree.parsers import read_ini_file
    >>> tree = ConfigTree()
    >>> read_ini_file('solver.ini', tree)
    >>> tree.get('solver.maxit', type_=int)
"""

from .ini import read_ini_file, read_ini_string, read_ini_tree
from .options import generate_help_string, read_named_options, read_options

__all__ = [
    'read_ini_file',
    'read_ini_string',
    'read_ini_tree',
    'generate_help_string',
    'read_named_options',
    'read_options',
]
