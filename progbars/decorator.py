"""Decorator base types and width configuration."""

import dataclasses
import enum
import queue
from dataclasses import dataclass, field
from typing import Callable, Optional

from wcwidth import wcswidth, wcwidth

DINDENT_RIGHT = 1 << 0
DEXTRA_SPACE = 1 << 1
DSYNC_WIDTH = 1 << 2
DSYNC_WIDTH_R = DSYNC_WIDTH | DINDENT_RIGHT
DSYNC_SPACE = DSYNC_WIDTH | DEXTRA_SPACE
DSYNC_SPACE_R = DSYNC_WIDTH | DEXTRA_SPACE | DINDENT_RIGHT


class TimeStyle(enum.IntEnum):
    GO = 0
    HHMMSS = 1
    HHMM = 2
    MMSS = 3


@dataclass
class Statistics:
    """State of a bar handed to decorators and fillers."""

    available_width: int = 0
    requested_width: int = 0
    id: int = 0
    total: int = 0
    current: int = 0
    refill: int = 0
    completed: bool = False
    aborted: bool = False


class WidthSync:
    """Rendezvous point: a decorator sends its width, receives the column max."""

    def __init__(self) -> None:
        self._up: queue.Queue = queue.Queue()
        self._down: queue.Queue = queue.Queue()

    def send(self, width: int) -> None:
        self._up.put(width)

    def receive(self) -> int:
        return self._down.get()

    def collect(self, timeout: Optional[float] = None) -> int:
        """Take a width sent by the decorator side."""
        return self._up.get(timeout=timeout)

    def reply(self, width: int) -> None:
        """Hand the synchronized width back to the decorator side."""
        self._down.put(width)


def _text_width(text: str) -> int:
    w = wcswidth(text)
    if w >= 0:
        return w
    return sum(max(0, wcwidth(ch)) for ch in text)


def _fill_left(text: str, width: int) -> str:
    return " " * max(0, width - _text_width(text)) + text


def _fill_right(text: str, width: int) -> str:
    return text + " " * max(0, width - _text_width(text))


@dataclass
class WC:
    """Width ``w`` and config bit set ``c`` of a decorator."""

    w: int = 0
    c: int = 0
    fill: Optional[Callable[[str, int], str]] = field(default=None, repr=False, compare=False)
    wsync: Optional[WidthSync] = field(default=None, repr=False, compare=False)

    def init(self) -> "WC":
        self.fill = _fill_right if self.c & DINDENT_RIGHT else _fill_left
        if self.c & DSYNC_WIDTH:
            self.wsync = WidthSync()
        return dataclasses.replace(self)

    def format(self, text: str) -> tuple[str, int]:
        width = _text_width(text)
        if self.w > width:
            width = self.w
        elif self.c & DEXTRA_SPACE:
            width += 1
        if self.c & DSYNC_WIDTH:
            self.wsync.send(width)
            width = self.wsync.receive()
        fill = self.fill or _fill_left
        return fill(text, width), width

    def sync(self) -> tuple[Optional[WidthSync], bool]:
        enabled = bool(self.c & DSYNC_WIDTH)
        if enabled and self.wsync is None:
            raise RuntimeError("WC is not initialized")
        return self.wsync, enabled


WC_SYNC_WIDTH = WC(c=DSYNC_WIDTH)
WC_SYNC_WIDTH_R = WC(c=DSYNC_WIDTH_R)
WC_SYNC_SPACE = WC(c=DSYNC_SPACE)
WC_SYNC_SPACE_R = WC(c=DSYNC_SPACE_R)


def init_wc(*args: WC) -> WC:
    """Initialize a copy of the last given WC, or of a default one."""
    wc = dataclasses.replace(args[-1]) if args else WC()
    return wc.init()


class Decorator:
    """Base decorator holding an initialized WC."""

    def __init__(self, wc: Optional[WC] = None) -> None:
        self.wc = wc if wc is not None else init_wc()

    def format(self, text: str) -> tuple[str, int]:
        return self.wc.format(text)

    def sync(self) -> tuple[Optional[WidthSync], bool]:
        return self.wc.sync()

    def decor(self, stats: Statistics) -> tuple[str, int]:
        raise NotImplementedError


class FuncDecorator(Decorator):
    """Decorator rendering the string produced by a function of Statistics."""

    def __init__(self, fn: Callable[[Statistics], str], wc: Optional[WC] = None) -> None:
        super().__init__(wc)
        self.fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        return self.format(self.fn(stats))


def from_func(fn: Callable[[Statistics], str], *args: WC) -> Decorator:
    return FuncDecorator(fn, init_wc(*args))


def name(text: str, *args: WC) -> Decorator:
    """Decorator showing fixed text."""
    return from_func(lambda _stats: text, *args)


def unwrap(decorator):
    """Follow ``unwrap()`` through wrapper decorators to the innermost one."""
    while hasattr(decorator, "unwrap"):
        decorator = decorator.unwrap()
    return decorator