"""Name search over the loaded corpus."""

import difflib
from typing import Iterable

from atlas.models.search_entry import SearchCorpusEntry


class SearchIndex:
    """Case-insensitive name search over an immutable corpus."""

    def __init__(self, corpus: Iterable[SearchCorpusEntry]):
        """
        Initialize search index.

        Args:
            corpus: Ordered corpus entries; order breaks ranking ties
        """
        self.corpus: tuple[SearchCorpusEntry, ...] = tuple(corpus)
        self._names = [entry.name.casefold() for entry in self.corpus]

    def __len__(self) -> int:
        return len(self.corpus)

    def search(self, query: str, limit: int = 10) -> list[SearchCorpusEntry]:
        """
        Find entries whose name matches a query.

        Exact matches rank first, then prefix matches, then substring matches.
        When nothing matches literally, close spellings are returned instead.

        Args:
            query: Search text
            limit: Maximum number of results

        Returns:
            Matching entries, best first
        """
        needle = (query or "").strip().casefold()
        if not needle or limit <= 0:
            return []

        ranked: list[tuple[int, int]] = []
        for index, name in enumerate(self._names):
            if name == needle:
                ranked.append((0, index))
            elif name.startswith(needle):
                ranked.append((1, index))
            elif needle in name:
                ranked.append((2, index))

        if ranked:
            ranked.sort()
            return [self.corpus[index] for _, index in ranked[:limit]]

        close = difflib.get_close_matches(needle, self._names, n=limit, cutoff=0.6)
        results = []
        seen: set[int] = set()
        for match in close:
            for index, name in enumerate(self._names):
                if name == match and index not in seen:
                    seen.add(index)
                    results.append(self.corpus[index])
        return results[:limit]
