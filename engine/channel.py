"""
channel.py — Event Channel
===========================
The producer/consumer boundary between a run's worker thread and whoever
renders its events.

  - Strict FIFO: events come out in exactly the order they went in.
  - Bounded (optional): a full channel makes the producer wait, in
    poll-interval slices, so a Stop still gets through while it waits.
  - Closeable: close() never blocks, even on a full channel; consumers
    drain what is left and then stop.
  - Single consumer per channel.
"""

import queue
import threading
from typing import Iterator, Optional

from algorithms.step import StepEvent
from algorithms.instruments import RunCancelled
from engine.signals import RunSignals


class ChannelClosed(RuntimeError):
    """put() after close(): the run is writing into a finished stream."""


_END = object()


class EventChannel:
    def __init__(self, capacity: int = 0, poll_interval: float = 0.05):
        self._queue:  "queue.Queue" = queue.Queue(maxsize=max(0, capacity))
        self._closed: threading.Event = threading.Event()
        self.poll_interval = poll_interval

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------
    def put(self, event: StepEvent, signals: Optional[RunSignals] = None) -> None:
        if self._closed.is_set():
            raise ChannelClosed("event channel is closed")
        while True:
            try:
                self._queue.put(event, timeout=self.poll_interval)
                return
            except queue.Full:
                if signals is not None and signals.cancelled:
                    raise RunCancelled() from None

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        try:
            self._queue.put_nowait(_END)
        except queue.Full:
            # consumers notice the flag on their next empty poll
            pass

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------
    def get(self, timeout: Optional[float] = None) -> Optional[StepEvent]:
        """
        Next event, or None once the channel is closed and drained.
        Raises queue.Empty if `timeout` elapses first.
        """
        while True:
            wait = self.poll_interval if timeout is None else min(timeout, self.poll_interval)
            try:
                item = self._queue.get(timeout=wait)
            except queue.Empty:
                if self._closed.is_set() and self._queue.empty():
                    return None
                if timeout is not None:
                    timeout -= wait
                    if timeout <= 0:
                        raise
                continue
            if item is _END:
                return None
            return item

    def __iter__(self) -> Iterator[StepEvent]:
        while True:
            event = self.get()
            if event is None:
                return
            yield event

    def __len__(self) -> int:
        return self._queue.qsize()
