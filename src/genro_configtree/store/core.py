# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigTree - hierarchical store of string parameters.

This module provides the ConfigTree class, a recursive mapping of leaf
string values and named subtrees addressed by dotted paths.

Key Features:
    - **Dotted paths**: 'fruit.pipfruit.apple' descends one level per segment
    - **Auto-vivification**: writes and ``sub()`` create missing subtrees
    - **Collision checks**: a key is either a value or a subtree, never both
    - **Insertion order**: keys are enumerated and reported in first-seen order
    - **Typed access**: ``get()`` converts raw strings via ``convert``

Example:
    Basic usage::

        tree = ConfigTree()
        tree['fruit.pipfruit.apple'] = 'green/red/yellow'
        tree['grid.cells'] = '16 16 8'

        tree['fruit.pipfruit.apple']              # 'green/red/yellow'
        tree.get('grid.cells', type_=list[int])   # [16, 16, 8]
        tree.sub('fruit').sub_keys()              # ['pipfruit']
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import Any, Iterator, TextIO

from ..convert import parse_value
from ..exceptions import KeyCollisionError, KeyNotFoundError

_MISSING: Any = object()


def _type_of(default: Any) -> Any:
    """Requested type implied by a default value."""
    if isinstance(default, list) and default:
        return list[type(default[0])]
    if isinstance(default, tuple) and default:
        return tuple[type(default[0]), ...]
    return type(default)


class ConfigTree:
    """A hierarchical structure of string parameters.

    Each level holds two mappings keyed by leaf-keys (no dots):
    - values: leaf-key -> string
    - subtrees: leaf-key -> ConfigTree

    A leaf-key never appears in both. Python dicts keep insertion order and
    entries are never removed, so each mapping is also the ordered key list
    used by ``value_keys()``, ``sub_keys()`` and ``report()``.

    Attributes:
        prefix: Dotted path of this node from the root, with a trailing
            dot ('' for the root). Only used in messages and reports.

    Example:
        >>> tree = ConfigTree()
        >>> tree['Foo.peng'] = 'ligapokal'
        >>> tree.has_sub('Foo')
        True
        >>> tree.sub('Foo')['peng']
        'ligapokal'
    """

    __slots__ = ('_values', '_subs', 'prefix')

    def __init__(
        self,
        source: dict | ConfigTree | None = None,
        prefix: str = '',
    ) -> None:
        """Initialize a ConfigTree.

        Args:
            source: Optional initial data. Can be:
                - dict: nested dicts become subtrees, any other value is
                  stored as ``str(value)``
                - ConfigTree: deep copy of another tree
            prefix: Dotted path of this node, set by the parent.

        Example:
            >>> ConfigTree({'x1': 1, 'Foo': {'peng': 'ligapokal'}})
        """
        self._values: dict[str, str] = {}
        self._subs: dict[str, ConfigTree] = {}
        self.prefix = prefix

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: dict | ConfigTree) -> None:
        if isinstance(source, ConfigTree):
            source = source.as_dict()
        elif not isinstance(source, dict):
            raise TypeError(
                f"source must be dict or ConfigTree, not {type(source).__name__}"
            )
        for key, value in source.items():
            if isinstance(value, dict):
                self.sub(key)._load_source(value)
            else:
                self[key] = value

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return (
            f"ConfigTree(prefix={self.prefix!r}, "
            f"values={list(self._values)}, subs={list(self._subs)})"
        )

    def __str__(self) -> str:
        """Return the textual report of the whole tree."""
        buffer = StringIO()
        self.report(buffer)
        return buffer.getvalue()

    def __len__(self) -> int:
        """Return the number of direct values and subtrees."""
        return len(self._values) + len(self._subs)

    def __contains__(self, path: str) -> bool:
        return self.has_key(path)

    def __eq__(self, other: object) -> bool:
        """Structural equality, including key order at every level."""
        if not isinstance(other, ConfigTree):
            return NotImplemented
        return (
            list(self._values.items()) == list(other._values.items())
            and list(self._subs) == list(other._subs)
            and all(self._subs[k] == other._subs[k] for k in self._subs)
        )

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, path: str) -> str:
        """Return the raw string at ``path``.

        Raises:
            KeyNotFoundError: No value at ``path``.
            KeyCollisionError: A segment names the other kind of entry.
        """
        tree, label = self._htraverse(path)
        if tree is None or label not in tree._values:
            if tree is not None:
                tree._check_not_sub(label)
            raise KeyNotFoundError(self._not_found('Key', path))
        return tree._values[label]

    def __setitem__(self, path: str, value: Any) -> None:
        """Store ``str(value)`` at ``path``, creating subtrees as needed."""
        tree, label = self._htraverse(path, autocreate=True)
        tree._check_not_sub(label)
        tree._values[label] = str(value)

    # ==================== Path Utilities ====================

    def _check_not_value(self, label: str) -> None:
        if label in self._values:
            raise KeyCollisionError(label)

    def _check_not_sub(self, label: str) -> None:
        if label in self._subs:
            raise KeyCollisionError(label)

    def _not_found(self, what: str, path: str) -> str:
        return f"{what} '{path}' not found in ConfigTree (prefix {self.prefix})"

    def _child(self, label: str, autocreate: bool) -> ConfigTree | None:
        """Return the subtree ``label``, creating it if requested."""
        self._check_not_value(label)
        child = self._subs.get(label)
        if child is None and autocreate:
            child = ConfigTree(prefix=f"{self.prefix}{label}.")
            self._subs[label] = child
        return child

    def _htraverse(
        self, path: str, autocreate: bool = False
    ) -> tuple[ConfigTree | None, str]:
        """Descend to the parent of the last path segment.

        Args:
            path: Dotted path string.
            autocreate: If True, create missing intermediate subtrees.

        Returns:
            Tuple of (parent_tree, final_label). parent_tree is None when
            a segment is missing and autocreate is False.

        Raises:
            KeyCollisionError: An intermediate segment is a value.
        """
        *parts, label = path.split('.')
        current: ConfigTree | None = self
        for part in parts:
            current = current._child(part, autocreate)
            if current is None:
                break
        return current, label

    # ==================== Core API ====================

    def has_key(self, path: str) -> bool:
        """True if a value exists at exactly ``path``.

        Raises:
            KeyCollisionError: An intermediate segment is a value.
        """
        tree, label = self._htraverse(path)
        return tree is not None and label in tree._values

    def has_sub(self, path: str) -> bool:
        """True if a subtree exists at exactly ``path``.

        Raises:
            KeyCollisionError: An intermediate segment is a value.
        """
        tree, label = self._htraverse(path)
        return tree is not None and label in tree._subs

    def setdefault(self, path: str, default: str = '') -> str:
        """Return the value at ``path``, storing ``default`` first if absent.

        This is the write-oriented accessor: it creates missing subtrees
        along the path and, on first creation, appends the leaf-key to the
        value order.
        """
        tree, label = self._htraverse(path, autocreate=True)
        tree._check_not_sub(label)
        return tree._values.setdefault(label, str(default))

    def sub(self, path: str) -> ConfigTree:
        """Return the subtree at ``path``, creating every missing level.

        Raises:
            KeyCollisionError: A segment along the path is a value.
        """
        tree, label = self._htraverse(path, autocreate=True)
        return tree._child(label, autocreate=True)

    def get_sub(self, path: str, fail_if_missing: bool = False) -> ConfigTree:
        """Return the subtree at ``path`` without creating anything.

        Args:
            path: Dotted path of the subtree.
            fail_if_missing: If True, raise when the subtree is missing;
                otherwise return a new empty tree that is not attached
                to this one.

        Raises:
            KeyNotFoundError: Missing subtree and ``fail_if_missing``.
            KeyCollisionError: A segment along the path is a value.
        """
        tree, label = self._htraverse(path)
        child = tree._child(label, autocreate=False) if tree is not None else None
        if child is not None:
            return child
        if fail_if_missing:
            raise KeyNotFoundError(self._not_found('SubTree', path))
        return ConfigTree(prefix=f"{self.prefix}{path}.")

    def get(
        self,
        path: str,
        default: Any = _MISSING,
        type_: Any = None,
    ) -> Any:
        """Return the value at ``path`` converted to a type.

        Args:
            path: Dotted path of the value.
            default: Returned when ``has_key(path)`` is False, including
                when ``path`` names a subtree. Without it a missing value
                raises.
            type_: Requested type. Defaults to the type of ``default``
                when one is given and not None, otherwise ``str``. A
                non-empty list or tuple default selects ``list[T]`` or
                ``tuple[T, ...]`` with ``T`` the type of its first item.

        Raises:
            KeyNotFoundError: No value and no default.
            KeyCollisionError: An intermediate segment is a value, or,
                without a default, ``path`` names a subtree.
            ValueParseError: The raw string is not a valid ``type_``.

        Example:
            >>> tree.get('x1', type_=int)
            1
            >>> tree.get('missing', 2.5)
            2.5
            >>> tree.get('array', type_=list[int])
            [1, 2, 3, 4, 5, 6, 7, 8]
        """
        if type_ is None:
            type_ = str if default is _MISSING or default is None else _type_of(default)
        if default is not _MISSING and not self.has_key(path):
            return default
        return parse_value(self[path], type_, path=f"{self.prefix}{path}")

    def value_keys(self) -> list[str]:
        """Return direct value keys in first-insertion order."""
        return list(self._values)

    def sub_keys(self) -> list[str]:
        """Return direct subtree keys in first-insertion order."""
        return list(self._subs)

    # ==================== Report ====================

    def report(self, stream: TextIO | None = None, prefix: str = '') -> None:
        """Write every value and subtree to ``stream`` (default stdout).

        Values are written as ``key = "value"``; each subtree is introduced
        by a ``[ full.path ]`` header followed by its own contents. The
        output reads back into an equal tree with ``read_ini_tree``.

        Args:
            stream: Text stream to write to.
            prefix: Prepended to every section header.
        """
        if stream is None:
            stream = sys.stdout
        for key, value in self._values.items():
            stream.write(f'{key} = "{value}"\n')
        for key, child in self._subs.items():
            stream.write(f"[ {prefix}{self.prefix}{key} ]\n")
            child.report(stream, prefix)

    # ==================== Walk ====================

    def walk(self) -> Iterator[tuple[str, str]]:
        """Yield ``(full_path, value)`` for every value, in report order.

        Example:
            >>> for path, value in tree.walk():
            ...     print(path, value)
        """
        for key, value in self._values.items():
            yield f"{self.prefix}{key}", value
        for child in self._subs.values():
            yield from child.walk()

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert to a nested dict of strings (recursive)."""
        result: dict[str, Any] = dict(self._values)
        for key, child in self._subs.items():
            result[key] = child.as_dict()
        return result
