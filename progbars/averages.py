"""Moving averages used by the EWMA based decorators."""

import threading

AVG_METRIC_AGE = 30.0
DECAY = 2 / (AVG_METRIC_AGE + 1)
WARMUP_SAMPLES = 10


class SimpleEWMA:
    """Exponentially weighted moving average over roughly 30 samples."""

    def __init__(self) -> None:
        self._value = 0.0

    def add(self, value: float) -> None:
        if self._value == 0:
            self._value = value
        else:
            self._value = value * DECAY + self._value * (1 - DECAY)

    def value(self) -> float:
        return self._value

    def set(self, value: float) -> None:
        self._value = value


class VariableEWMA:
    """EWMA with a custom age; reports 0 until it has warmed up."""

    def __init__(self, age: float) -> None:
        self._decay = 2 / (age + 1)
        self._value = 0.0
        self._count = 0

    def add(self, value: float) -> None:
        if self._count < WARMUP_SAMPLES:
            self._count += 1
            self._value += value
        elif self._count == WARMUP_SAMPLES:
            self._count += 1
            self._value = self._value / WARMUP_SAMPLES
            self._value = value * self._decay + self._value * (1 - self._decay)
        else:
            self._value = value * self._decay + self._value * (1 - self._decay)

    def value(self) -> float:
        if self._count <= WARMUP_SAMPLES:
            return 0.0
        return self._value

    def set(self, value: float) -> None:
        self._value = value
        if self._count <= WARMUP_SAMPLES:
            self._count = WARMUP_SAMPLES + 1


class MedianWindow:
    """Median of the last three samples."""

    def __init__(self) -> None:
        self._window = [0.0, 0.0, 0.0]

    def add(self, value: float) -> None:
        self._window = [self._window[1], self._window[2], value]

    def value(self) -> float:
        return sorted(self._window)[1]

    def set(self, value: float) -> None:
        self._window = [value, value, value]


class ThreadSafeMovingAverage:
    """Lock-protected view of another moving average."""

    def __init__(self, average) -> None:
        self._average = average
        self._lock = threading.Lock()

    def add(self, value: float) -> None:
        with self._lock:
            self._average.add(value)

    def value(self) -> float:
        with self._lock:
            return self._average.value()

    def set(self, value: float) -> None:
        with self._lock:
            self._average.set(value)


def new_moving_average(*args: float):
    """Return a SimpleEWMA for the default age, otherwise a VariableEWMA."""
    if not args or args[0] == AVG_METRIC_AGE:
        return SimpleEWMA()
    return VariableEWMA(args[0])


def new_median() -> MedianWindow:
    return MedianWindow()


def new_thread_safe_moving_average(average) -> ThreadSafeMovingAverage:
    """Wrap ``average`` in a lock unless it already is."""
    if isinstance(average, ThreadSafeMovingAverage):
        return average
    return ThreadSafeMovingAverage(average)