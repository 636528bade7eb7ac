"""Deferred in-memory message buffer.

Appends are handed to a queue and applied by a background worker thread. A
caller returning from ``append`` has no guarantee that the message is visible
yet, and messages appended from different threads may land in any order
relative to their calls.

Every buffer in the process shares one worker, started on the first append
and kept for the life of the process as a daemon thread.
"""

import queue
import threading
from collections import deque


class _AppendWorker:
    """Single daemon thread applying queued appends for every buffer."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[tuple["MessageBuffer", str]] = queue.SimpleQueue()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    def submit(self, buffer: "MessageBuffer", message: str) -> None:
        self._queue.put((buffer, message))
        self._ensure_started()

    def _ensure_started(self) -> None:
        if self._thread is not None:
            return
        with self._lock:
            if self._thread is not None:
                return
            thread = threading.Thread(target=self._run, name="scopedlog-buffer", daemon=True)
            thread.start()
            self._thread = thread

    def _run(self) -> None:
        while True:
            buffer, message = self._queue.get()
            buffer._apply(message)


_worker = _AppendWorker()


class MessageBuffer:
    """Buffer of emitted messages filled by the shared background worker.

    Args:
        max_size: Maximum number of retained messages. When full, the oldest
            message is evicted. None keeps every message.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._messages: deque[str] = deque(maxlen=max_size)
        self._messages_lock = threading.Lock()
        self._pending = 0
        self._pending_cond = threading.Condition()

    @property
    def max_size(self) -> int | None:
        return self._messages.maxlen

    def append(self, message: str) -> None:
        """Schedule ``message`` to be appended. Returns immediately."""
        with self._pending_cond:
            self._pending += 1
        _worker.submit(self, message)

    def snapshot(self) -> list[str]:
        """Return a copy of the messages applied so far."""
        with self._messages_lock:
            return list(self._messages)

    def clear(self) -> None:
        """Drop every message applied so far."""
        with self._messages_lock:
            self._messages.clear()

    def flush(self, timeout: float | None = None) -> bool:
        """Block until every append scheduled on this buffer has been applied.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Returns:
            True if the pending appends drained, False on timeout.
        """
        with self._pending_cond:
            return self._pending_cond.wait_for(lambda: self._pending == 0, timeout)

    def __len__(self) -> int:
        with self._messages_lock:
            return len(self._messages)

    def _apply(self, message: str) -> None:
        try:
            with self._messages_lock:
                self._messages.append(message)
        finally:
            with self._pending_cond:
                self._pending -= 1
                if self._pending == 0:
                    self._pending_cond.notify_all()
