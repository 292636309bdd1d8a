"""Element id generation.

Ids combine a per-process prefix with a process-wide monotonic counter,
so they are never reused: not across documents, and not when a pooled
node is handed out again.
"""

from __future__ import annotations

import itertools
import os
import threading
import time

from lightrender.utils.css import to_base36

_counter = itertools.count(1)
_counter_lock = threading.Lock()

# Run-specific prefix: start time in milliseconds plus the pid
RUN_PREFIX = to_base36(int(time.time() * 1000)) + to_base36(os.getpid())


def next_id() -> str:
    with _counter_lock:
        value = next(_counter)
    return f"id-{RUN_PREFIX}-{to_base36(value)}"


class IdGenerator:
    """Per-document id generator backed by the process-wide counter.

    Counts how many ids the owning document handed out, which the
    document exposes for diagnostics.
    """

    __slots__ = ("issued",)

    def __init__(self) -> None:
        self.issued = 0

    def __call__(self) -> str:
        self.issued += 1
        return next_id()
