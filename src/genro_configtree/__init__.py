# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-ConfigTree - Hierarchical configuration store with typed access.

A lightweight, zero-dependency library holding string parameters in a
dotted-path tree, filled from INI text or command lines and read back as
typed values.
"""

__version__ = "0.1.0"

from .convert import (
    Array,
    BitSet,
    UInt,
    get_parser,
    parse_value,
    register_parser,
    split_fields,
)
from .exceptions import (
    ConfigFileError,
    ConfigTreeError,
    DuplicateKeyError,
    ErrorKind,
    HelpRequested,
    KeyCollisionError,
    KeyNotFoundError,
    OptionSyntaxError,
    ValueParseError,
)
from .parsers import (
    generate_help_string,
    read_ini_file,
    read_ini_string,
    read_ini_tree,
    read_named_options,
    read_options,
)
from .store import ConfigTree

__all__ = [
    # Core classes
    "ConfigTree",
    # Conversion
    "Array",
    "BitSet",
    "UInt",
    "get_parser",
    "parse_value",
    "register_parser",
    "split_fields",
    # Parsers
    "read_ini_file",
    "read_ini_string",
    "read_ini_tree",
    "read_options",
    "read_named_options",
    "generate_help_string",
    # Exceptions
    "ErrorKind",
    "ConfigTreeError",
    "KeyNotFoundError",
    "KeyCollisionError",
    "ValueParseError",
    "DuplicateKeyError",
    "ConfigFileError",
    "OptionSyntaxError",
    "HelpRequested",
]
