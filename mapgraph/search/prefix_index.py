"""
Prefix index for location-name autocomplete
"""

import bisect
from typing import Dict, List, Optional


class PrefixIndex:
    """
    Maps every prefix of an inserted name to the sorted list of names sharing it

    Lookups are exact and case-sensitive.
    """

    def __init__(self):
        self._buckets: Dict[str, List[str]] = {}

    def add_word(self, name: str) -> None:
        """Register name under each of its non-empty prefixes"""
        for end in range(1, len(name) + 1):
            bucket = self._buckets.setdefault(name[:end], [])
            bisect.insort(bucket, name)

    def lookup(self, prefix: Optional[str]) -> List[str]:
        """
        Names starting with prefix, sorted lexicographically

        Returns an empty list for an unknown, empty or missing prefix.
        """
        if not prefix:
            return []
        return list(self._buckets.get(prefix, ()))

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, prefix) -> bool:
        return prefix in self._buckets
