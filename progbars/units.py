"""Byte size and percentage values with printf-style formatting."""

import re

_SPEC = re.compile(r"%([ +\-#0]*)(\d+)?(?:\.(\d*))?([a-zA-Z%])")

_B1024_UNITS = ((1, "b"), (1 << 10, "KiB"), (1 << 20, "MiB"), (1 << 30, "GiB"), (1 << 40, "TiB"))
_B1000_UNITS = ((1, "b"), (10**3, "KB"), (10**6, "MB"), (10**9, "GB"), (10**12, "TB"))


def _fmt_float(value: float, verb: str, prec: int) -> str:
    if verb in "bxX":
        raise ValueError(f"unsupported verb: {verb!r}")
    if prec < 0:
        text = repr(float(value))
        return text[:-2] if text.endswith(".0") else text
    return f"{value:.{prec}{verb}}"


def _resolve(verb: str, precision):
    if verb in ("f", "e", "E"):
        return verb, 6 if precision is None else precision
    if verb in ("b", "g", "G", "x", "X"):
        return verb, -1 if precision is None else precision
    return "f", 0


def _format_scaled(value: int, units, verb: str, precision, space: bool) -> str:
    verb, prec = _resolve(verb, precision)
    factor, label = units[0]
    for f, lbl in units:
        if value >= f:
            factor, label = f, lbl
    text = _fmt_float(int(value) / factor, verb, prec)
    return f"{text} {label}" if space else f"{text}{label}"


class SizeB1024(int):
    """Byte count shown in multiples of 1024 (b, KiB, MiB, GiB, TiB)."""

    def format_verb(self, verb: str, precision, space: bool) -> str:
        """Render according to a printf verb, precision and space flag."""
        return _format_scaled(int(self), _B1024_UNITS, verb, precision, space)

    def __str__(self) -> str:
        return self.format_verb("s", None, False)


class SizeB1000(int):
    """Byte count shown in multiples of 1000 (b, KB, MB, GB, TB)."""

    def format_verb(self, verb: str, precision, space: bool) -> str:
        """Render according to a printf verb, precision and space flag."""
        return _format_scaled(int(self), _B1000_UNITS, verb, precision, space)

    def __str__(self) -> str:
        return self.format_verb("s", None, False)


class Percent(float):
    """Percentage value rendered with a trailing percent sign."""

    def format_verb(self, verb: str, precision, space: bool) -> str:
        """Render according to a printf verb, precision and space flag."""
        verb, prec = _resolve(verb, precision)
        text = _fmt_float(float(self), verb, prec)
        return f"{text} %" if space else f"{text}%"

    def __str__(self) -> str:
        return self.format_verb("s", None, False)


def _format_plain(value, flags: str, width, precision, verb: str) -> str:
    if verb in ("s", "v"):
        text = str(value)
        if precision is not None and verb == "s":
            text = text[:precision]
    elif verb == "q":
        text = '"' + str(value).replace("\\", "\\\\").replace('"', '\\"') + '"'
    else:
        spec = "%" + flags + (str(width) if width else "")
        if precision is not None:
            spec += "." + str(precision)
        spec += "i" if verb == "d" else verb
        return spec % value
    if width and len(text) < width:
        text = text.ljust(width) if "-" in flags else text.rjust(width)
    return text


def sprintf(fmt: str, *args) -> str:
    """Format ``args`` with a printf-style ``fmt``.

    Values with a ``format_verb`` method format themselves; field width is
    not applied to them.
    """
    out = []
    pos = 0
    remaining = iter(args)
    for m in _SPEC.finditer(fmt):
        out.append(fmt[pos:m.start()])
        pos = m.end()
        flags, width, prec, verb = m.groups()
        if verb == "%":
            out.append("%")
            continue
        try:
            value = next(remaining)
        except StopIteration:
            raise ValueError(f"missing argument for {m.group(0)!r}") from None
        precision = None if prec is None else int(prec or 0)
        if hasattr(value, "format_verb"):
            out.append(value.format_verb(verb, precision, " " in flags))
        else:
            out.append(_format_plain(value, flags, int(width) if width else 0, precision, verb))
    out.append(fmt[pos:])
    return "".join(out)