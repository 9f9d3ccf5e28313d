# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigTree exceptions.

Every exception carries an ``ErrorKind`` so callers can branch on the
category without matching on the concrete class.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Categories of ConfigTree failures."""

    NOT_FOUND = 'not_found'
    COLLISION = 'collision'
    PARSE_FAILURE = 'parse_failure'
    DUPLICATE_KEY = 'duplicate_key'
    IO_FAILURE = 'io_failure'
    OPTION_SYNTAX = 'option_syntax'


class ConfigTreeError(Exception):
    """Base exception for ConfigTree errors."""

    kind: ErrorKind | None = None


class KeyNotFoundError(ConfigTreeError, KeyError):
    """Raised when a value or a required subtree does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ''


class KeyCollisionError(ConfigTreeError):
    """Raised when a key is used both as a value and as a subtree."""

    kind = ErrorKind.COLLISION

    def __init__(self, key: str) -> None:
        super().__init__(f"key {key} occurs as value and as subtree")
        self.key = key


class ValueParseError(ConfigTreeError, ValueError):
    """Raised when a raw string cannot be converted to the requested type."""

    kind = ErrorKind.PARSE_FAILURE

    def __init__(
        self,
        raw: str,
        type_name: str,
        detail: str = '',
        path: str | None = None,
    ) -> None:
        message = f'Cannot parse value "{raw}"'
        if path is not None:
            message += f' for key "{path}"'
        message += f' as a {type_name}'
        if detail:
            message += f' ({detail})'
        super().__init__(message)
        self.raw = raw
        self.type_name = type_name
        self.detail = detail
        self.path = path


class DuplicateKeyError(ConfigTreeError):
    """Raised when the same key appears twice in one INI source."""

    kind = ErrorKind.DUPLICATE_KEY


class ConfigFileError(ConfigTreeError):
    """Raised when a configuration file cannot be opened."""

    kind = ErrorKind.IO_FAILURE


class OptionSyntaxError(ConfigTreeError):
    """Raised on malformed, unknown, repeated or missing command-line options.

    The usage string is appended to the message and kept in ``usage``.
    """

    kind = ErrorKind.OPTION_SYNTAX

    def __init__(self, message: str, usage: str = '') -> None:
        super().__init__(f"{message}\n{usage}" if usage else message)
        self.usage = usage


class HelpRequested(OptionSyntaxError):
    """Raised for ``-h`` / ``--help``; the message is the usage string."""

    def __init__(self, usage: str) -> None:
        ConfigTreeError.__init__(self, usage)
        self.usage = usage
