from __future__ import annotations

from typing import Iterable, Iterator

from markupsafe import Markup

from .records import TagEntry


class HeaderSink:
    """
    Keyed `<head>` additions for one page render.
    Last write per key wins; a rewritten key keeps its first position.
    """

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def add(self, key: str, html: str) -> None:
        self._items[key] = html

    def extend(self, entries: Iterable[TagEntry]) -> None:
        for e in entries:
            self.add(e.key, e.html)

    def entries(self) -> list[TagEntry]:
        return [TagEntry(k, v) for k, v in self._items.items()]

    def render(self) -> Markup:
        # Entries are already-escaped markup.
        return Markup("\n".join(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)
