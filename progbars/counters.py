"""Counter, total and percentage decorators."""

from typing import Callable, Optional

from progbars.decorator import WC, Decorator, Statistics, from_func
from progbars.percent import percentage as _percentage
from progbars.units import Percent, SizeB1000, SizeB1024, sprintf

_UINT64_MASK = (1 << 64) - 1


def _unit_kind(unit) -> Optional[type]:
    """Return SizeB1024 or SizeB1000 if ``unit`` names one, else None."""
    if isinstance(unit, type) and issubclass(unit, (SizeB1024, SizeB1000)):
        return unit
    if isinstance(unit, (SizeB1024, SizeB1000)):
        return type(unit)
    return None


def _build(
    unit,
    fmt: str,
    sized_default: str,
    plain_default: str,
    values: Callable[[Statistics], tuple],
    wcc: tuple,
) -> Decorator:
    kind = _unit_kind(unit)
    if kind is not None:
        spec = fmt or sized_default

        def render(stats: Statistics) -> str:
            return sprintf(spec, *(kind(v) for v in values(stats)))

    else:
        spec = fmt or plain_default

        def render(stats: Statistics) -> str:
            return sprintf(spec, *values(stats))

    return from_func(render, *wcc)


def counters(unit, pair_fmt: str, *args: WC) -> Decorator:
    """Show current and total, scaled by ``unit`` when it is a size type."""
    return _build(unit, pair_fmt, "% d / % d", "%d / %d", lambda s: (s.current, s.total), args)


def counters_no_unit(pair_fmt: str, *args: WC) -> Decorator:
    return counters(0, pair_fmt, *args)


def counters_kibi_byte(pair_fmt: str, *args: WC) -> Decorator:
    return counters(SizeB1024(0), pair_fmt, *args)


def counters_kilo_byte(pair_fmt: str, *args: WC) -> Decorator:
    return counters(SizeB1000(0), pair_fmt, *args)


def total(unit, fmt: str, *args: WC) -> Decorator:
    """Show the total, scaled by ``unit`` when it is a size type."""
    return _build(unit, fmt, "% d", "%d", lambda s: (s.total,), args)


def total_no_unit(fmt: str, *args: WC) -> Decorator:
    return total(0, fmt, *args)


def total_kibi_byte(fmt: str, *args: WC) -> Decorator:
    return total(SizeB1024(0), fmt, *args)


def total_kilo_byte(fmt: str, *args: WC) -> Decorator:
    return total(SizeB1000(0), fmt, *args)


def current(unit, fmt: str, *args: WC) -> Decorator:
    """Show the current count, scaled by ``unit`` when it is a size type."""
    return _build(unit, fmt, "% d", "%d", lambda s: (s.current,), args)


def current_no_unit(fmt: str, *args: WC) -> Decorator:
    return current(0, fmt, *args)


def current_kibi_byte(fmt: str, *args: WC) -> Decorator:
    return current(SizeB1024(0), fmt, *args)


def current_kilo_byte(fmt: str, *args: WC) -> Decorator:
    return current(SizeB1000(0), fmt, *args)


def inverted_current(unit, fmt: str, *args: WC) -> Decorator:
    """Show what remains (total minus current)."""
    return _build(unit, fmt, "% d", "%d", lambda s: (s.total - s.current,), args)


def inverted_current_no_unit(fmt: str, *args: WC) -> Decorator:
    return inverted_current(0, fmt, *args)


def inverted_current_kibi_byte(fmt: str, *args: WC) -> Decorator:
    return inverted_current(SizeB1024(0), fmt, *args)


def inverted_current_kilo_byte(fmt: str, *args: WC) -> Decorator:
    return inverted_current(SizeB1000(0), fmt, *args)


def percentage(*args: WC) -> Decorator:
    """Percentage decorator with the default ``"% d"`` format."""
    return new_percentage("% d", *args)


def new_percentage(fmt: str, *args: WC) -> Decorator:
    """Percentage decorator with a custom printf-style format."""
    spec = fmt or "% d"

    def render(stats: Statistics) -> str:
        value = _percentage(stats.total & _UINT64_MASK, stats.current & _UINT64_MASK, 100)
        return sprintf(spec, Percent(value))

    return from_func(render, *args)