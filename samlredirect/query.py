"""Ordered query string builder for redirect URLs."""

from __future__ import annotations

from typing import List, Tuple

from .encoding import has_query


class RedirectQuery:
    """Appends already-encoded parameters to a base URL in insertion order.

    The first parameter is joined with ``?`` unless the base URL already has
    a query, every later one with ``&``. Values are never re-encoded.
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self._base_has_query = has_query(base_url)
        self._params: List[Tuple[str, str]] = []

    @property
    def params(self) -> List[Tuple[str, str]]:
        return list(self._params)

    @property
    def separator(self) -> str:
        """Separator placed between the base URL and the first parameter."""
        return "&" if self._base_has_query else "?"

    def add(self, name: str, value: str) -> "RedirectQuery":
        self._params.append((name, value))
        return self

    def query_string(self) -> str:
        """Parameters joined as ``name=value`` pairs, without leading separator."""
        return "&".join(f"{name}={value}" for name, value in self._params)

    def build(self) -> str:
        if not self._params:
            return self.base_url
        return self.base_url + self.separator + self.query_string()
