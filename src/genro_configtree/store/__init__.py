# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigTree package - hierarchical store of string parameters.

The package is organized into:
- core: ConfigTree with dotted-path traversal, typed access and reporting

Example:
    >>> from genro_configtree import ConfigTree
    >>> tree = ConfigTree()
    >>> tree['config.name'] = 'MyApp'
    >>> tree['config.name']
    'MyApp'
"""

from .core import ConfigTree

__all__ = ["ConfigTree"]
