"""A thread-safe FIFO of data blocks and headers shared by the archiving threads.

A reader thread adds blocks and headers, worker threads take blocks that are
still to be processed and put back the processed version, and a writer thread
removes items from the head of the queue once they are ready.
"""

from __future__ import annotations

import dataclasses
import threading
from collections import deque
from typing import Any, Callable

from fsaqueue.qtypes import (
    BlockInfo,
    EndOfQueue,
    HeadInfo,
    ItemNotFound,
    ItemStatus,
    ItemType,
    QueueError,
    QueueItem,
    WrongItemType,
)

_WAIT_SECONDS = 1.0


class ArchiveQueue:
    """Queue of blocks and headers, with a bound on the number of blocks it holds.

    Every item gets a unique number, starting at 1, in the order it was added.
    Adding waits while the queue holds more than ``blkmax`` blocks.
    """

    def __init__(self, blkmax: int) -> None:
        self.blkmax = blkmax
        self._items: deque[QueueItem] = deque()
        self._cond = threading.Condition()
        self._next_itemnum = 1
        self._blkcount = 0
        self._endofqueue = False

    # ---- state helpers (the lock must be held)

    def _locked_at_end(self) -> bool:
        return not self._items and self._endofqueue

    def _head(self) -> QueueItem | None:
        return self._items[0] if self._items else None

    def _wait_for_head(self, ready: Callable[[QueueItem], bool]) -> QueueItem:
        """Wait until the head satisfies ``ready``; raise EndOfQueue at the end."""
        while not self._locked_at_end():
            head = self._head()
            if head is not None and ready(head):
                return head
            self._cond.wait(_WAIT_SECONDS)
        raise EndOfQueue("the queue is closed and empty")

    def _pop_head(self) -> QueueItem:
        item = self._items.popleft()
        if item.type is ItemType.BLOCK:
            self._blkcount -= 1
        self._cond.notify_all()
        return item

    def _append(self, item: QueueItem) -> int:
        with self._cond:
            if self._endofqueue:
                raise EndOfQueue("cannot add an item to a queue that has been closed")
            while self._blkcount > self.blkmax:
                self._cond.wait(_WAIT_SECONDS)
            item.itemnum = self._next_itemnum
            self._next_itemnum += 1
            self._items.append(item)
            if item.type is ItemType.BLOCK:
                self._blkcount += 1
            self._cond.notify_all()
            return item.itemnum

    # ---- whole-queue operations

    def clear(self) -> None:
        """Remove every item."""
        with self._cond:
            self._items.clear()
            self._blkcount = 0
            self._cond.notify_all()

    def set_end_of_queue(self, state: bool = True) -> None:
        """Mark whether the producer has finished adding items."""
        with self._cond:
            self._endofqueue = state
            self._cond.notify_all()

    def at_end(self) -> bool:
        """True when the queue is closed and holds no more items."""
        with self._cond:
            return self._locked_at_end()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def count_status(self, status: ItemStatus | int) -> int:
        """Count the items with a status; ``ItemStatus.NULL`` counts them all."""
        status = ItemStatus(status)
        with self._cond:
            return sum(
                1
                for item in self._items
                if status is ItemStatus.NULL or item.status is status
            )

    def count_items_todo(self) -> int:
        """Count the blocks whose processing is not done."""
        with self._cond:
            return sum(
                1
                for item in self._items
                if item.type is ItemType.BLOCK and item.status is not ItemStatus.DONE
            )

    # ---- adding and modifying

    def add_block(
        self, blkinfo: BlockInfo, status: ItemStatus | int = ItemStatus.TODO
    ) -> int:
        """Append a copy of a block and return its item number."""
        item = QueueItem(
            type=ItemType.BLOCK,
            status=ItemStatus(status),
            blkinfo=dataclasses.replace(blkinfo),
        )
        return self._append(item)

    def add_header(self, dico: Any, magic: str | bytes, fsid: int) -> int:
        """Append a header built from a dictionary, a magic and a filesystem id."""
        return self.add_headinfo(HeadInfo(magic=magic, fsid=fsid, dico=dico))

    def add_headinfo(self, headinfo: HeadInfo) -> int:
        """Append a copy of a header and return its item number; headers are always done."""
        item = QueueItem(
            type=ItemType.HEADER,
            status=ItemStatus.DONE,
            headinfo=dataclasses.replace(headinfo),
        )
        return self._append(item)

    def replace_block(
        self, itemnum: int, blkinfo: BlockInfo, newstatus: ItemStatus | int
    ) -> None:
        """Replace the block of an item and set its status; raise ItemNotFound if absent."""
        newstatus = ItemStatus(newstatus)
        with self._cond:
            for item in self._items:
                if item.itemnum == itemnum:
                    item.status = newstatus
                    item.blkinfo = dataclasses.replace(blkinfo)
                    self._cond.notify_all()
                    return
        raise ItemNotFound(f"no item number {itemnum} in the queue")

    # ---- taking items

    def get_first_block_todo(self) -> tuple[int, BlockInfo]:
        """Wait for a block still to be processed, mark it in progress and return it.

        Raises EndOfQueue once the queue is closed and empty.
        """
        with self._cond:
            while not self._locked_at_end():
                for item in self._items:
                    if item.type is ItemType.BLOCK and item.status is ItemStatus.TODO:
                        item.status = ItemStatus.PROGRESS
                        self._cond.notify_all()
                        assert item.blkinfo is not None
                        return item.itemnum, dataclasses.replace(item.blkinfo)
                self._cond.wait(_WAIT_SECONDS)
            raise EndOfQueue("the queue is closed and empty")

    def dequeue_first(self) -> QueueItem:
        """Wait until the first item is done, remove it and return it."""
        with self._cond:
            head = self._wait_for_head(lambda item: item.status is ItemStatus.DONE)
            if head.type not in (ItemType.BLOCK, ItemType.HEADER):
                raise QueueError(f"invalid item type in queue: type={int(head.type)}")
            return self._pop_head()

    def dequeue_block(self) -> tuple[int, BlockInfo]:
        """Wait until the first item is done and remove it if it is a block.

        Raises WrongItemType, leaving the item in place, if it is a header.
        """
        with self._cond:
            head = self._wait_for_head(lambda item: item.status is ItemStatus.DONE)
            if head.type is not ItemType.BLOCK:
                self._cond.notify_all()
                raise WrongItemType(
                    "wrong type of data in the queue: wanted a block, found a header"
                )
            item = self._pop_head()
            assert item.blkinfo is not None
            return item.itemnum, item.blkinfo

    def dequeue_header(self) -> tuple[int, HeadInfo]:
        """Wait until the first item is done and remove it if it is a header.

        Raises WrongItemType, leaving the item in place, if it is a block.
        """
        with self._cond:
            head = self._wait_for_head(lambda item: item.status is ItemStatus.DONE)
            if head.type is not ItemType.HEADER:
                self._cond.notify_all()
                found = "a block" if head.type is ItemType.BLOCK else "an unknown item"
                raise WrongItemType(
                    f"wrong type of data in the queue: expected a header and found {found}"
                )
            item = self._pop_head()
            assert item.headinfo is not None
            return item.itemnum, item.headinfo

    def check_next_item(self) -> tuple[ItemType, str]:
        """Wait until the first item is done and return its type and magic, without removing it.

        The magic is empty for a block.
        """
        with self._cond:
            head = self._wait_for_head(lambda item: item.status is ItemStatus.DONE)
            if head.type is ItemType.BLOCK:
                return ItemType.BLOCK, ""
            if head.type is ItemType.HEADER:
                assert head.headinfo is not None
                return ItemType.HEADER, head.headinfo.magic
            raise QueueError(f"invalid item type in queue: type={int(head.type)}")

    def destroy_first_item(self) -> QueueItem:
        """Wait until the first item is not being processed, then remove and return it."""
        with self._cond:
            self._wait_for_head(lambda item: item.status is not ItemStatus.PROGRESS)
            return self._pop_head()