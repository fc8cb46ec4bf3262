"""Data types shared by the archive queue: item kinds, statuses, payloads and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

MAGIC_SIZE = 4


class ItemType(IntEnum):
    """Kind of item held in the queue."""

    NULL = 0
    BLOCK = 1
    HEADER = 2


class ItemStatus(IntEnum):
    """Processing state of a queue item."""

    NULL = 0
    TODO = 1
    PROGRESS = 2
    DONE = 3


@dataclass
class BlockInfo:
    """A data block as it moves between the reader, the compressor and the writer."""

    data: bytes = b""
    realsize: int = 0
    offset: int = 0
    arcsum: int = 0
    arsize: int = 0
    compalgo: int = 0
    compsize: int = 0
    cryptalgo: int = 0
    fsid: int = 0
    locked: bool = False


@dataclass
class HeadInfo:
    """A header: a magic string identifying its kind, its filesystem and its dictionary."""

    magic: str
    fsid: int = 0
    dico: Any = None

    def __post_init__(self) -> None:
        if isinstance(self.magic, (bytes, bytearray)):
            self.magic = bytes(self.magic).decode("latin-1")
        if len(self.magic) < MAGIC_SIZE:
            raise ValueError(
                f"magic must be at least {MAGIC_SIZE} characters long: {self.magic!r}"
            )
        self.magic = self.magic[:MAGIC_SIZE]


@dataclass
class QueueItem:
    """One entry of the queue: either a block or a header."""

    type: ItemType
    status: ItemStatus
    itemnum: int = 0
    blkinfo: BlockInfo | None = None
    headinfo: HeadInfo | None = field(default=None)

    def is_ready(self) -> bool:
        """Return True if a header, or a block whose processing is done."""
        if self.type is ItemType.HEADER:
            return True
        return self.type is ItemType.BLOCK and self.status is ItemStatus.DONE


class QueueError(Exception):
    """Base class of queue errors."""


class EndOfQueue(QueueError):
    """The queue is closed and holds no more items."""


class ItemNotFound(QueueError, LookupError):
    """No item matches the request."""


class WrongItemType(QueueError):
    """The first item of the queue is not of the expected kind."""