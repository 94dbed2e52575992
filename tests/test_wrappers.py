from progbars.decorator import WC, Statistics, name, unwrap
from progbars.wrappers import (
    conditional,
    meta,
    on_abort,
    on_abort_meta,
    on_complete,
    on_complete_meta,
    on_complete_meta_or_on_abort_meta,
    on_complete_or_on_abort,
    on_condition,
    on_predicate,
    predicative,
)


def brackets(text):
    return "[" + text + "]"


def test_meta_applies_fn_and_keeps_width():
    base = name("abc")
    plain, plain_width = base.decor(Statistics())
    text, width = meta(name("abc"), brackets).decor(Statistics())
    assert text == brackets(plain)
    assert width == plain_width


def test_meta_none_decorator():
    assert meta(None, brackets) is None


def test_on_abort_shows_message_only_when_aborted():
    d = on_abort(name("work"), "stop")
    assert d.decor(Statistics())[0] == "work"
    assert d.decor(Statistics(aborted=True))[0] == "stop"
    assert d.decor(Statistics(completed=True))[0] == "work"


def test_on_abort_message_uses_inner_width_config():
    d = on_abort(name("work", WC(w=6)), "stop")
    text, width = d.decor(Statistics(aborted=True))
    assert text == "  stop"
    assert width == 6


def test_on_abort_meta():
    d = on_abort_meta(name("work"), brackets)
    assert d.decor(Statistics())[0] == "work"
    assert d.decor(Statistics(aborted=True))[0] == brackets("work")


def test_on_complete_shows_message_only_when_completed():
    d = on_complete(name("work"), "done")
    assert d.decor(Statistics())[0] == "work"
    assert d.decor(Statistics(completed=True))[0] == "done"
    assert d.decor(Statistics(aborted=True))[0] == "work"


def test_on_complete_meta():
    d = on_complete_meta(name("work"), brackets)
    assert d.decor(Statistics())[0] == "work"
    assert d.decor(Statistics(completed=True))[0] == brackets("work")


def test_on_complete_or_on_abort():
    d = on_complete_or_on_abort(name("work"), "end")
    assert d.decor(Statistics())[0] == "work"
    assert d.decor(Statistics(completed=True))[0] == "end"
    assert d.decor(Statistics(aborted=True))[0] == "end"


def test_on_complete_meta_or_on_abort_meta():
    d = on_complete_meta_or_on_abort_meta(name("work"), brackets)
    assert d.decor(Statistics())[0] == "work"
    assert d.decor(Statistics(completed=True))[0] == brackets("work")
    assert d.decor(Statistics(aborted=True))[0] == brackets("work")


def test_wrappers_with_none_return_none():
    assert on_abort(None, "x") is None
    assert on_abort_meta(None, brackets) is None
    assert on_complete(None, "x") is None
    assert on_complete_meta(None, brackets) is None
    assert on_complete_or_on_abort(None, "x") is None
    assert on_complete_meta_or_on_abort_meta(None, brackets) is None


def test_unwrap_reaches_innermost():
    inner = name("work")
    d = meta(on_complete_or_on_abort(inner, "end"), brackets)
    assert unwrap(d) is inner
    assert d.unwrap().unwrap().unwrap() is inner


def test_wrapper_sync_delegates():
    inner = name("work")
    assert on_complete(inner, "done").sync() == inner.sync()


def test_on_condition():
    d = name("x")
    assert on_condition(d, True) is d
    assert on_condition(d, False) is None


def test_on_predicate():
    d = name("x")
    assert on_predicate(d, lambda: True) is d
    assert on_predicate(d, lambda: False) is None


def test_conditional_and_predicative():
    a, b = name("a"), name("b")
    assert conditional(True, a, b) is a
    assert conditional(False, a, b) is b
    assert predicative(lambda: True, a, b) is a
    assert predicative(lambda: False, a, b) is b