# fsaqueue

Building blocks for a multi-threaded archiving pipeline. A reader thread fills
a queue with data blocks and headers. Worker threads take the blocks that are
still to be processed and put back the processed versions. A writer thread
removes items from the front in the order they were added.

## Contents

### `fsaqueue.queue.ArchiveQueue`

A thread-safe queue of blocks and headers. It stops accepting new items while
it holds more than `blkmax` blocks.

- Each item gets a unique item number, starting at 1, in the order it was
  added.
- `add_block(blkinfo, status)` adds a copy of a block. `add_header(dico,
  magic, fsid)` and `add_headinfo(headinfo)` add a header, and a header always
  has the status `DONE`.
- `get_first_block_todo()` waits for a block with the status `TODO`. It marks
  the block `PROGRESS` and returns `(itemnum, blkinfo)`.
  `replace_block(itemnum, blkinfo, newstatus)` stores the processed block.
- `dequeue_first()`, `dequeue_block()` and `dequeue_header()` wait until the
  item at the head is `DONE`, then remove it. `dequeue_block()` and
  `dequeue_header()` raise `WrongItemType` and leave the item in place if the
  head is of the other kind.
- `check_next_item()` waits until the head is `DONE` and returns its type and
  magic without removing it. The magic is empty for a block.
  `destroy_first_item()` removes the head once no worker is processing it.
- `set_end_of_queue(state)` marks that the producer has finished. Once the
  queue is closed and empty, `at_end()` is true and every waiting call raises
  `EndOfQueue`. Adding an item to a closed queue also raises `EndOfQueue`.
- `len(queue)`, `count_status(status)` (with `ItemStatus.NULL` it counts every
  item), `count_items_todo()` and `clear()`.

### `fsaqueue.qtypes`

- `BlockInfo` is a dataclass with the fields `data`, `realsize`, `offset`,
  `arcsum`, `arsize`, `compalgo`, `compsize`, `cryptalgo`, `fsid` and `locked`.
- `HeadInfo` holds `magic`, `fsid` and `dico`. The magic must be at least 4
  characters long, and only the first 4 are kept. A `bytes` magic is decoded
  as Latin-1.
- `QueueItem` and its method `is_ready()`.
- The enums `ItemType` (`NULL`, `BLOCK`, `HEADER`) and `ItemStatus` (`NULL`,
  `TODO`, `PROGRESS`, `DONE`).
- The exceptions `QueueError`, `EndOfQueue`, `ItemNotFound` (also a
  `LookupError`) and `WrongItemType`.

### `fsaqueue.syncthread`

- `SyncState` holds the state that the threads share:
  - a stop flag for the producer, with `set_stop_fill_queue()` and
    `stop_fill_queue`;
  - a counter of secondary threads, with `inc_secthreads()`,
    `dec_secthreads()` and `secthreads`;
  - the `abort()` method and the `aborted` property. `aborted` is also true
    when SIGINT or SIGTERM is pending, where the platform can report that;
  - `interrupted`;
  - a `fsbitmap` byte array that marks which filesystems are wanted.
- `AtomicCounter` is a lock-protected integer counter.

### `fsaqueue.strdico.StrDico`

Parses option strings such as `"id=0,dest=/dev/sda1,mkfs=ext4"`. The separators
are `,`, `;`, tab and newline. It can limit which keys are accepted.

- `get(key)` raises `KeyError` for a missing key.
- `get_int(key)` reads a signed 64-bit decimal number.
- Iterating gives the keys, with the most recently added key first.
- `format()` lists the entries, one line each.

### `fsaqueue.strlist.StrList`

An ordered list of unique, non-empty strings. It has `add`, `remove`, `clear`,
membership tests, indexing, `merge(sep)`, `split(text, sep)` and `format()`.

## Example

```python
import threading

from fsaqueue.queue import ArchiveQueue
from fsaqueue.qtypes import BlockInfo, EndOfQueue, ItemStatus

q = ArchiveQueue(blkmax=8)

def worker():
    while not q.at_end():
        try:
            itemnum, blk = q.get_first_block_todo()
        except EndOfQueue:
            break
        blk.compsize = blk.realsize
        q.replace_block(itemnum, blk, ItemStatus.DONE)

t = threading.Thread(target=worker)
t.start()

q.add_block(BlockInfo(data=b"hello", realsize=5), ItemStatus.TODO)
itemnum, blk = q.dequeue_block()   # (1, BlockInfo(data=b"hello", ...))
q.set_end_of_queue(True)
t.join()
```

Option strings:

```python
from fsaqueue.strdico import StrDico

opts = StrDico("id,dest,mkfs")
opts.parse("id=0,dest=/dev/sda1,mkfs=ext4")
opts.get_int("id")   # 0
opts.get("mkfs")     # "ext4"
```

## What this package does not do

This package only moves and coordinates data between threads. It does not
read or write archive files, serialise headers, compress, encrypt or checksum
blocks, or walk filesystems. The `dico` carried by a header is any object the
caller supplies. The package also provides no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```