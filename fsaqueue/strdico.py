"""A string-to-string dictionary parsed from option strings such as
``"id=0,dest=/dev/sda1,mkfs=reiserfs"``."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

_DELIMITERS = ",;\t\n"
_DELIM_RE = re.compile(f"[{re.escape(_DELIMITERS)}]+")
_MAX_FIELD = 1023
_INT_RE = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _tokens(text: str) -> list[str]:
    return [token for token in _DELIM_RE.split(text) if token]


class StrDico:
    """Mapping of string keys to string values, optionally restricted to a set of keys.

    Iteration yields keys, most recently added first.
    """

    def __init__(self, valid_keys: str | Iterable[str] | None = None) -> None:
        self._items: dict[str, str] = {}
        if valid_keys is None:
            self._valid_keys: tuple[str, ...] | None = None
        elif isinstance(valid_keys, str):
            self._valid_keys = tuple(_tokens(valid_keys))
        else:
            self._valid_keys = tuple(valid_keys)

    def parse(self, text: str) -> None:
        """Parse ``key=value`` pairs separated by ``,``, ``;``, tabs or newlines."""
        for token in _tokens(text):
            key, sep, value = token.partition("=")
            if not sep or len(key) > _MAX_FIELD:
                raise ValueError(
                    f'Incorrect syntax in "{token}". Cannot find symbol \'=\' to separate '
                    'the key and the value. expected something like "name1=val1,name2=val2"'
                )
            self.set(key, value[:_MAX_FIELD])

    def set(self, key: str, value: str) -> None:
        """Set the value of a key, checking it against the valid keys if any."""
        if self._valid_keys is not None and key not in self._valid_keys:
            raise ValueError(
                f'unexpected key "{key}". valid keys are "{",".join(self._valid_keys)}"'
            )
        self._items[key] = value

    def get(self, key: str) -> str:
        """Return the value of a key; raise KeyError if it is missing."""
        return self._items[key]

    def get_int(self, key: str) -> int:
        """Return the value of a key as a signed 64-bit decimal integer."""
        text = self.get(key)
        if not text:
            raise ValueError(f'key "{key}" has an empty value. expected a valid number')
        if _INT_RE.fullmatch(text) is None:
            raise ValueError(f'key "{key}" does not contain a valid number: "{text}"')
        number = int(text.lstrip(" \t\n\v\f\r"))
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise ValueError(f'key "{key}" does not contain a valid number: "{text}"')
        return number

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[str]:
        return reversed(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def format(self) -> str:
        """Return one ``item[n]: key=[k] value=[v]`` line per entry."""
        return "".join(
            f"item[{pos}]: key=[{key}] value=[{self._items[key]}]\n"
            for pos, key in enumerate(self)
        )