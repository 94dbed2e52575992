"""ETA and elapsed time decorators."""

import math
import time
from datetime import timedelta
from typing import Callable, Optional

from progbars.averages import new_median, new_moving_average
from progbars.decorator import WC, Decorator, Statistics, TimeStyle, from_func, init_wc

_SECOND = 10**9
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE

TimeNormalizer = Callable[[timedelta], timedelta]


def _to_ns(duration) -> int:
    """Nanoseconds in a timedelta or in a number of seconds."""
    if isinstance(duration, timedelta):
        return (duration.days * 86400 + duration.seconds) * _SECOND + duration.microseconds * 1000
    return int(round(duration * 1e9))


def _from_ns(ns: int) -> timedelta:
    micros = abs(ns) // 1000
    return timedelta(microseconds=micros if ns >= 0 else -micros)


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def _trem(a: int, b: int) -> int:
    return a - b * _tdiv(a, b)


def _round(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _hms(remaining: timedelta) -> tuple[int, int, int]:
    ns = _to_ns(remaining)
    hours = _trem(_tdiv(ns, _HOUR), 60)
    minutes = _trem(_tdiv(ns, _MINUTE), 60)
    seconds = _trem(_tdiv(ns, _SECOND), 60)
    return hours, minutes, seconds


def _go_style(remaining: timedelta) -> str:
    secs = _tdiv(_to_ns(remaining), _SECOND)
    if secs == 0:
        return "0s"
    sign = "-" if secs < 0 else ""
    hours, rest = divmod(abs(secs), 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def choose_time_producer(style: TimeStyle) -> Callable[[timedelta], str]:
    """Return the function rendering a duration in the given style."""
    if style == TimeStyle.HHMMSS:
        def produce(remaining: timedelta) -> str:
            h, m, s = _hms(remaining)
            return f"{h:02d}:{m:02d}:{s:02d}"
    elif style == TimeStyle.HHMM:
        def produce(remaining: timedelta) -> str:
            h, m, _ = _hms(remaining)
            return f"{h:02d}:{m:02d}"
    elif style == TimeStyle.MMSS:
        def produce(remaining: timedelta) -> str:
            h, m, s = _hms(remaining)
            if h > 0:
                return f"{h:02d}:{m:02d}:{s:02d}"
            return f"{m:02d}:{s:02d}"
    else:
        produce = _go_style
    return produce


class MovingAverageETA(Decorator):
    """ETA from a moving average of per-item durations."""

    def __init__(
        self,
        wc: WC,
        producer: Callable[[timedelta], str],
        average,
        normalizer: Optional[TimeNormalizer] = None,
    ) -> None:
        super().__init__(wc)
        self.producer = producer
        self.average = average
        self.normalizer = normalizer
        self._zdur = 0

    def decor(self, stats: Statistics) -> tuple[str, int]:
        per_item = int(_round(self.average.value()))
        remaining = _from_ns((stats.total - stats.current) * per_item)
        if self.normalizer is not None:
            remaining = self.normalizer(remaining)
        return self.format(self.producer(remaining))

    def ewma_update(self, n: int, dur) -> None:
        """Record that ``n`` items took ``dur`` (timedelta or seconds)."""
        dur_ns = _to_ns(dur)
        if n <= 0:
            self._zdur += dur_ns
            return
        per_item = (self._zdur + dur_ns) / n
        if not math.isfinite(per_item):
            self._zdur += dur_ns
            return
        self._zdur = 0
        self.average.add(per_item)


class AverageETA(Decorator):
    """ETA from the average rate since ``start`` (a time.monotonic() value)."""

    def __init__(
        self,
        wc: WC,
        start: float,
        normalizer: Optional[TimeNormalizer],
        producer: Callable[[timedelta], str],
    ) -> None:
        super().__init__(wc)
        self.start = start
        self.normalizer = normalizer
        self.producer = producer

    def decor(self, stats: Statistics) -> tuple[str, int]:
        remaining = timedelta(0)
        if stats.current != 0:
            elapsed = time.monotonic_ns() - int(round(self.start * 1e9))
            per_item = int(_round(elapsed / stats.current))
            remaining = _from_ns((stats.total - stats.current) * per_item)
            if self.normalizer is not None:
                remaining = self.normalizer(remaining)
        return self.format(self.producer(remaining))

    def average_adjust(self, start: float) -> None:
        self.start = start


def ewma_eta(style: TimeStyle, age: float, *args: WC) -> Decorator:
    """EWMA based ETA; feed it through ``ewma_update``."""
    return ewma_normalized_eta(style, age, None, *args)


def ewma_normalized_eta(
    style: TimeStyle, age: float, normalizer: Optional[TimeNormalizer], *args: WC
) -> Decorator:
    average = new_moving_average() if age == 0 else new_moving_average(age)
    return moving_average_eta(style, average, normalizer, *args)


def moving_average_eta(
    style: TimeStyle, average, normalizer: Optional[TimeNormalizer], *args: WC
) -> Decorator:
    """ETA from ``average``; a three-sample median is used when it is None."""
    if average is None:
        average = new_median()
    return MovingAverageETA(init_wc(*args), choose_time_producer(style), average, normalizer)


def average_eta(style: TimeStyle, *args: WC) -> Decorator:
    return new_average_eta(style, time.monotonic(), None, *args)


def new_average_eta(
    style: TimeStyle, start: float, normalizer: Optional[TimeNormalizer], *args: WC
) -> Decorator:
    return AverageETA(init_wc(*args), start, normalizer, choose_time_producer(style))


def max_tolerate_time_normalizer(max_tolerate) -> TimeNormalizer:
    """Count down smoothly unless the estimate drops by more than ``max_tolerate``."""
    tolerance = _to_ns(max_tolerate)
    normalized = 0
    last_call = 0

    def normalize(remaining: timedelta) -> timedelta:
        nonlocal normalized, last_call
        remaining_ns = _to_ns(remaining)
        diff = normalized - remaining_ns
        if diff <= 0 or diff > tolerance or remaining_ns < _MINUTE:
            normalized = remaining_ns
            last_call = time.monotonic_ns()
            return remaining
        now = time.monotonic_ns()
        normalized -= now - last_call
        last_call = now
        if normalized > 0:
            return _from_ns(normalized)
        return remaining

    return normalize


def fixed_interval_time_normalizer(upd_interval: int) -> TimeNormalizer:
    """Take a fresh estimate only every ``upd_interval`` calls."""
    normalized = 0
    last_call = 0
    count = 0

    def normalize(remaining: timedelta) -> timedelta:
        nonlocal normalized, last_call, count
        remaining_ns = _to_ns(remaining)
        if count == 0 or remaining_ns < _MINUTE:
            count = upd_interval
            normalized = remaining_ns
            last_call = time.monotonic_ns()
            return remaining
        count -= 1
        now = time.monotonic_ns()
        normalized -= now - last_call
        last_call = now
        if normalized > 0:
            return _from_ns(normalized)
        return remaining

    return normalize


def elapsed(style: TimeStyle, *args: WC) -> Decorator:
    return new_elapsed(style, time.monotonic(), *args)


def new_elapsed(style: TimeStyle, start: float, *args: WC) -> Decorator:
    """Time since ``start``, frozen once the bar completes or aborts."""
    producer = choose_time_producer(style)
    msg = ""

    def render(stats: Statistics) -> str:
        nonlocal msg
        if not stats.completed and not stats.aborted:
            msg = producer(_from_ns(time.monotonic_ns() - int(round(start * 1e9))))
        return msg

    return from_func(render, *args)