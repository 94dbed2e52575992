"""Speed decorators."""

import math
import time
from datetime import timedelta
from typing import Callable, Optional

from progbars.averages import new_moving_average
from progbars.decorator import WC, Decorator, Statistics, init_wc
from progbars.units import SizeB1000, SizeB1024, sprintf


def _to_ns(duration) -> int:
    if isinstance(duration, timedelta):
        return (duration.days * 86400 + duration.seconds) * 10**9 + duration.microseconds * 1000
    return int(round(duration * 1e9))


def _round(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _unit_kind(unit) -> Optional[type]:
    if isinstance(unit, type) and issubclass(unit, (SizeB1024, SizeB1000)):
        return unit
    if isinstance(unit, (SizeB1024, SizeB1000)):
        return type(unit)
    return None


class SpeedFormatter:
    """Formats the wrapped value and appends ``/s``."""

    def __init__(self, value) -> None:
        self.value = value

    def format_verb(self, verb: str, precision, space: bool) -> str:
        return self.value.format_verb(verb, precision, space) + "/s"

    def __str__(self) -> str:
        return self.format_verb("s", None, False)


def fmt_as_speed(value) -> SpeedFormatter:
    return SpeedFormatter(value)


def _choose_speed_producer(unit, fmt: str) -> Callable[[float], str]:
    kind = _unit_kind(unit)
    if kind is not None:
        spec = fmt or "% d"

        def produce(speed: float) -> str:
            return sprintf(spec, fmt_as_speed(kind(int(_round(speed)))))

    else:
        spec = fmt or "%f"

        def produce(speed: float) -> str:
            return sprintf(spec, speed)

    return produce


class MovingAverageSpeed(Decorator):
    """Speed from a moving average of per-unit durations."""

    def __init__(self, wc: WC, producer: Callable[[float], str], average) -> None:
        super().__init__(wc)
        self.producer = producer
        self.average = average
        self._zdur = 0

    def decor(self, stats: Statistics) -> tuple[str, int]:
        v = self.average.value()
        text = self.producer(1e9 / v) if v != 0 else self.producer(0)
        return self.format(text)

    def ewma_update(self, n: int, dur) -> None:
        """Record that ``n`` units took ``dur`` (timedelta or seconds)."""
        dur_ns = _to_ns(dur)
        if n <= 0:
            self._zdur += dur_ns
            return
        per_unit = (self._zdur + dur_ns) / n
        if not math.isfinite(per_unit):
            self._zdur += dur_ns
            return
        self._zdur = 0
        self.average.add(per_unit)


class AverageSpeed(Decorator):
    """Average speed since ``start`` (a time.monotonic() value)."""

    def __init__(self, wc: WC, start: float, producer: Callable[[float], str]) -> None:
        super().__init__(wc)
        self.start = start
        self.producer = producer
        self.msg = ""

    def decor(self, stats: Statistics) -> tuple[str, int]:
        if not stats.completed:
            elapsed_ns = max(1, time.monotonic_ns() - int(round(self.start * 1e9)))
            self.msg = self.producer(stats.current / elapsed_ns * 1e9)
        return self.format(self.msg)

    def average_adjust(self, start: float) -> None:
        self.start = start


def ewma_speed(unit, fmt: str, age: float, *args: WC) -> Decorator:
    """EWMA based speed; feed it through ``ewma_update``."""
    average = new_moving_average() if age == 0 else new_moving_average(age)
    return moving_average_speed(unit, fmt, average, *args)


def moving_average_speed(unit, fmt: str, average, *args: WC) -> Decorator:
    return MovingAverageSpeed(init_wc(*args), _choose_speed_producer(unit, fmt), average)


def average_speed(unit, fmt: str, *args: WC) -> Decorator:
    return new_average_speed(unit, fmt, time.monotonic(), *args)


def new_average_speed(unit, fmt: str, start: float, *args: WC) -> Decorator:
    return AverageSpeed(init_wc(*args), start, _choose_speed_producer(unit, fmt))