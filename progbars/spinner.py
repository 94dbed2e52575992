"""Spinner decorator."""

import itertools
from typing import Optional, Sequence

from progbars.decorator import WC, Decorator, from_func

DEFAULT_SPINNER_STYLE = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


def spinner(frames: Optional[Sequence[str]], *args: WC) -> Decorator:
    """Decorator cycling through ``frames`` on each render; defaults when empty."""
    cycle = itertools.cycle(tuple(frames) if frames else DEFAULT_SPINNER_STYLE)

    def _next_frame(_stats) -> str:
        return next(cycle)

    return from_func(_next_frame, *args)