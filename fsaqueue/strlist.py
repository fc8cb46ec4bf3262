"""An ordered list of distinct, non-empty strings."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class StrList:
    """Ordered collection of unique non-empty strings."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: list[str] = []
        for item in items:
            self.add(item)

    def add(self, text: str) -> None:
        """Append a string; raise ValueError if it is empty or already present."""
        if not text:
            raise ValueError("cannot add an empty string")
        if text in self._items:
            raise ValueError(f"cannot add string: [{text}] is already in the list")
        self._items.append(text)

    def remove(self, text: str) -> None:
        """Remove a string; raise ValueError if it is not present."""
        try:
            self._items.remove(text)
        except ValueError:
            raise ValueError(f"[{text}] is not in the list") from None

    def clear(self) -> None:
        """Remove every string."""
        self._items.clear()

    def __contains__(self, text: object) -> bool:
        return text in self._items

    def __getitem__(self, index: int) -> str:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def merge(self, sep: str) -> str:
        """Join all strings with the separator."""
        return sep.join(self._items)

    def split(self, text: str, sep: str) -> None:
        """Replace the contents with the non-empty fields of ``text`` split on ``sep``."""
        if len(sep) != 1:
            raise ValueError("separator must be a single character")
        self.clear()
        for field in text.split(sep):
            if field:
                self.add(field)

    def format(self) -> str:
        """Return one ``item[n]: [s]`` line per string, or a note that the list is empty."""
        if not self._items:
            return "list is empty"
        return "".join(f"item[{pos}]: [{item}]\n" for pos, item in enumerate(self._items))