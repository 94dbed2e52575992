"""Decorators that wrap other decorators."""

from typing import Callable, Optional

from progbars.decorator import Decorator, Statistics, WidthSync


class _Wrapper(Decorator):
    """Wrapper that borrows formatting and width sync from the wrapped decorator."""

    def __init__(self, decorator: Decorator) -> None:
        self.decorator = decorator

    def format(self, text: str) -> tuple[str, int]:
        return self.decorator.format(text)

    def sync(self) -> tuple[Optional[WidthSync], bool]:
        return self.decorator.sync()

    def unwrap(self) -> Decorator:
        return self.decorator


class MetaWrapper(_Wrapper):
    """Apply ``fn`` to the wrapped decorator's output, keeping its width."""

    def __init__(self, decorator: Decorator, fn: Callable[[str], str]) -> None:
        super().__init__(decorator)
        self.fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        text, width = self.decorator.decor(stats)
        return self.fn(text), width

    def unwrap(self) -> Decorator:
        return self.decorator


class OnAbortWrapper(_Wrapper):
    """Show ``message`` once the bar is aborted."""

    def __init__(self, decorator: Decorator, message: str) -> None:
        super().__init__(decorator)
        self.message = message

    def decor(self, stats: Statistics) -> tuple[str, int]:
        if stats.aborted:
            return self.format(self.message)
        return self.decorator.decor(stats)

    def unwrap(self) -> Decorator:
        return self.decorator


class OnAbortMetaWrapper(_Wrapper):
    """Apply ``fn`` to the wrapped output once the bar is aborted."""

    def __init__(self, decorator: Decorator, fn: Callable[[str], str]) -> None:
        super().__init__(decorator)
        self.fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        text, width = self.decorator.decor(stats)
        if stats.aborted:
            return self.fn(text), width
        return text, width

    def unwrap(self) -> Decorator:
        return self.decorator


class OnCompleteWrapper(_Wrapper):
    """Show ``message`` once the bar is completed."""

    def __init__(self, decorator: Decorator, message: str) -> None:
        super().__init__(decorator)
        self.message = message

    def decor(self, stats: Statistics) -> tuple[str, int]:
        if stats.completed:
            return self.format(self.message)
        return self.decorator.decor(stats)

    def unwrap(self) -> Decorator:
        return self.decorator


class OnCompleteMetaWrapper(_Wrapper):
    """Apply ``fn`` to the wrapped output once the bar is completed."""

    def __init__(self, decorator: Decorator, fn: Callable[[str], str]) -> None:
        super().__init__(decorator)
        self.fn = fn

    def decor(self, stats: Statistics) -> tuple[str, int]:
        text, width = self.decorator.decor(stats)
        if stats.completed:
            return self.fn(text), width
        return text, width

    def unwrap(self) -> Decorator:
        return self.decorator


def meta(decorator: Optional[Decorator], fn: Callable[[str], str]) -> Optional[Decorator]:
    if decorator is None:
        return None
    return MetaWrapper(decorator, fn)


def on_abort(decorator: Optional[Decorator], message: str) -> Optional[Decorator]:
    if decorator is None:
        return None
    return OnAbortWrapper(decorator, message)


def on_abort_meta(decorator: Optional[Decorator], fn: Callable[[str], str]) -> Optional[Decorator]:
    if decorator is None:
        return None
    return OnAbortMetaWrapper(decorator, fn)


def on_complete(decorator: Optional[Decorator], message: str) -> Optional[Decorator]:
    if decorator is None:
        return None
    return OnCompleteWrapper(decorator, message)


def on_complete_meta(decorator: Optional[Decorator], fn: Callable[[str], str]) -> Optional[Decorator]:
    if decorator is None:
        return None
    return OnCompleteMetaWrapper(decorator, fn)


def on_complete_or_on_abort(decorator: Optional[Decorator], message: str) -> Optional[Decorator]:
    """Show ``message`` on either completion or abort."""
    return on_complete(on_abort(decorator, message), message)


def on_complete_meta_or_on_abort_meta(
    decorator: Optional[Decorator], fn: Callable[[str], str]
) -> Optional[Decorator]:
    """Apply ``fn`` on either completion or abort."""
    return on_complete_meta(on_abort_meta(decorator, fn), fn)


def on_condition(decorator: Optional[Decorator], cond: bool) -> Optional[Decorator]:
    """Return ``decorator`` if ``cond`` holds, else None."""
    return conditional(cond, decorator, None)


def on_predicate(decorator: Optional[Decorator], predicate: Callable[[], bool]) -> Optional[Decorator]:
    """Return ``decorator`` if ``predicate()`` holds, else None."""
    return predicative(predicate, decorator, None)


def conditional(cond: bool, a: Optional[Decorator], b: Optional[Decorator]) -> Optional[Decorator]:
    return a if cond else b


def predicative(
    predicate: Callable[[], bool], a: Optional[Decorator], b: Optional[Decorator]
) -> Optional[Decorator]:
    return a if predicate() else b