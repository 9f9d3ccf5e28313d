# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Typed value conversion for ConfigTree.

Raw values are always strings. This module maps a requested result type to
a ``str -> T`` function and applies it with strict whole-string validation.

Supported types:
    - ``str``: trimmed, never fails
    - ``int``, ``UInt``, ``float``: "C locale" numbers, the whole trimmed
      string must be consumed (``'12abc'`` is rejected)
    - ``bool``: yes/true/no/false (any case), otherwise an integer
    - ``list[T]``, ``tuple[T, ...]``: any number of whitespace-separated
      fields, each parsed as ``T``
    - ``tuple[A, B, C]``: exactly one field per position
    - ``Array(T, n)``: exactly ``n`` fields of type ``T``
    - ``BitSet(n)``: exactly ``n`` boolean fields

Anything else falls back to calling the type on a single trimmed token.
New types are added with ``register_parser``.

Example:
    >>> parse_value(' 1 2 3 ', list[int])
    [1, 2, 3]
    >>> parse_value('1 2 3', Array(UInt, 8))
    Traceback (most recent call last):
    ...
    ValueParseError: Cannot parse value "1 2 3" as a Array[UInt, 8] (expected 8 items, got 3)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, NewType, get_args, get_origin

from .exceptions import ValueParseError

WHITESPACE = ' \t\r\n'

UInt = NewType('UInt', int)

ParserFunc = Callable[[str], Any]

_FIELD = re.compile(r'[^ \t\r\n]+')
_INT = re.compile(r'[+-]?[0-9]+')
_UINT = re.compile(r'\+?[0-9]+')
_FLOAT = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')

_TRUE_WORDS = ('yes', 'true')
_FALSE_WORDS = ('no', 'false')

_registry: dict[Any, ParserFunc] = {}


def split_fields(text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty fields."""
    return _FIELD.findall(text)


def type_name(type_: Any) -> str:
    """Return a readable name for a type, descriptor or typing generic."""
    if isinstance(type_, (Array, BitSet)):
        return str(type_)
    if get_origin(type_) is not None:
        return repr(type_).replace('typing.', '')
    name = getattr(type_, '__name__', None)
    if name is not None:
        return name
    return str(type_)


def register_parser(type_: Any, func: ParserFunc | None = None) -> Any:
    """Register ``func`` as the parser for ``type_``.

    Can be used directly or as a decorator::

        @register_parser(Path)
        def _parse_path(text):
            return Path(text.strip())

    A parser receives the raw string and raises ``ValueError`` on failure.
    """
    if func is None:
        def decorator(f: ParserFunc) -> ParserFunc:
            _registry[type_] = f
            return f
        return decorator
    _registry[type_] = func
    return func


def get_parser(type_: Any) -> ParserFunc:
    """Return the ``str -> T`` function for ``type_``."""
    parser = _registry.get(type_)
    if parser is not None:
        return parser

    if isinstance(type_, (Array, BitSet)):
        return type_.parse

    origin = get_origin(type_)
    if origin is list:
        (element,) = get_args(type_) or (str,)
        return _sequence_parser(list, element)
    if origin is tuple:
        args = get_args(type_)
        if len(args) == 2 and args[1] is Ellipsis:
            return _sequence_parser(tuple, args[0])
        return _fixed_parser(args)

    if isinstance(type_, type):
        return lambda text: _parse_with_constructor(text, type_)
    raise TypeError(f"No parser available for {type_name(type_)}")


def parse_value(raw: str, type_: Any, path: str | None = None) -> Any:
    """Convert ``raw`` to ``type_``.

    Raises:
        ValueParseError: The string does not represent a ``type_``.
    """
    parser = get_parser(type_)
    try:
        return parser(raw)
    except ValueParseError as exc:
        raise ValueParseError(raw, type_name(type_), exc.detail, path) from exc
    except ValueError as exc:
        raise ValueParseError(raw, type_name(type_), str(exc), path) from exc


# ==================== Scalar parsers ====================

def _scalar_token(text: str, pattern: re.Pattern[str], what: str) -> str:
    token = text.strip(WHITESPACE)
    if not pattern.fullmatch(token):
        raise ValueError(f"not a valid {what}")
    return token


@register_parser(str)
def parse_str(text: str) -> str:
    return text.strip(WHITESPACE)


@register_parser(int)
def parse_int(text: str) -> int:
    return int(_scalar_token(text, _INT, 'integer'))


@register_parser(UInt)
def parse_uint(text: str) -> int:
    return UInt(int(_scalar_token(text, _UINT, 'unsigned integer')))


@register_parser(float)
def parse_float(text: str) -> float:
    return float(_scalar_token(text, _FLOAT, 'floating point number'))


@register_parser(bool)
def parse_bool(text: str) -> bool:
    """yes/true and no/false in any case, else nonzero integer is True."""
    word = text.strip(WHITESPACE).lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return parse_int(word) != 0


def _parse_with_constructor(text: str, type_: type) -> Any:
    fields = split_fields(text)
    if len(fields) != 1:
        raise ValueError(f"expected a single value, got {len(fields)}")
    try:
        return type_(fields[0])
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ValueError(str(exc) or type(exc).__name__) from exc


# ==================== Composite parsers ====================

def _parse_fields(fields: list[str], elements: list[Any]) -> list[Any]:
    """Parse ``fields[n]`` as ``elements[n]``; the first failure aborts."""
    result = []
    for n, (field, element) in enumerate(zip(fields, elements)):
        try:
            result.append(get_parser(element)(field))
        except ValueError as exc:
            raise ValueError(
                f"item {n} {field!r} is not a {type_name(element)},"
                f" {n} items were extracted successfully"
            ) from exc
    return result


def _sequence_parser(container: type, element: Any) -> ParserFunc:
    def parse(text: str) -> Any:
        fields = split_fields(text)
        return container(_parse_fields(fields, [element] * len(fields)))
    return parse


def _check_arity(fields: list[str], size: int) -> None:
    if len(fields) != size:
        raise ValueError(f"expected {size} items, got {len(fields)}")


def _fixed_parser(elements: tuple[Any, ...]) -> ParserFunc:
    def parse(text: str) -> tuple:
        fields = split_fields(text)
        _check_arity(fields, len(elements))
        return tuple(_parse_fields(fields, list(elements)))
    return parse


@dataclass(frozen=True)
class Array:
    """Fixed-size sequence of ``size`` values of type ``element``.

    Example:
        >>> tree.get('origin', type_=Array(float, 3))
        (0.0, 1.5, -2.0)
    """

    element: Any
    size: int

    def __str__(self) -> str:
        return f"Array[{type_name(self.element)}, {self.size}]"

    def parse(self, text: str) -> tuple:
        fields = split_fields(text)
        _check_arity(fields, self.size)
        return tuple(_parse_fields(fields, [self.element] * self.size))


@dataclass(frozen=True)
class BitSet:
    """Exactly ``size`` boolean flags, returned as a tuple of bools."""

    size: int

    def __str__(self) -> str:
        return f"BitSet[{self.size}]"

    def parse(self, text: str) -> tuple[bool, ...]:
        fields = split_fields(text)
        if len(fields) != self.size:
            raise ValueError(
                f"unmatching size {len(fields)}, expected {self.size}"
            )
        return tuple(_parse_fields(fields, [bool] * self.size))


register_parser(list, _sequence_parser(list, str))
register_parser(tuple, _sequence_parser(tuple, str))
