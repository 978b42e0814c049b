"""
Location search indexes

- PrefixIndex: autocomplete by name prefix
- NameIndex: exact-name location lookup
"""

from .prefix_index import PrefixIndex
from .name_index import NameIndex

__all__ = [
    "PrefixIndex",
    "NameIndex",
]
