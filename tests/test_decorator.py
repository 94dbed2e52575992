import threading

import pytest

from progbars.decorator import (
    DEXTRA_SPACE,
    DINDENT_RIGHT,
    DSYNC_WIDTH,
    WC,
    WC_SYNC_SPACE,
    WC_SYNC_WIDTH,
    WC_SYNC_WIDTH_R,
    Statistics,
    from_func,
    init_wc,
    name,
    unwrap,
)


@pytest.mark.parametrize(
    "dec,want",
    [
        (lambda: name("Test"), "Test"),
        (lambda: name("Test", WC(w=4)), "Test"),
        (lambda: name("Test", WC(w=10)), "      Test"),
        (lambda: name("Test", WC(w=10, c=DINDENT_RIGHT)), "Test      "),
    ],
)
def test_name_decorator(dec, want):
    got, _ = dec().decor(Statistics())
    assert got == want


def test_extra_space_and_width():
    text, width = name("ab", WC(c=DEXTRA_SPACE | DINDENT_RIGHT)).decor(Statistics())
    assert (text, width) == ("ab ", 3)


def test_wide_characters_width():
    _, width = name("日本").decor(Statistics())
    assert width == 4


def test_uninitialized_sync_raises():
    with pytest.raises(RuntimeError):
        WC(c=DSYNC_WIDTH).sync()


def test_init_wc_does_not_touch_global():
    wc = init_wc(WC_SYNC_WIDTH)
    ch, ok = wc.sync()
    assert ok and ch is not None
    assert WC_SYNC_WIDTH.wsync is None


def _run_column(texts, wc):
    decs = [from_func(lambda _s, t=t: t, wc) for t in texts]
    results = [None] * len(decs)

    def work(i):
        results[i] = decs[i].decor(Statistics())[0]

    threads = [threading.Thread(target=work, args=(i,)) for i in range(len(decs))]
    for t in threads:
        t.start()
    syncs = [d.sync()[0] for d in decs]
    widest = max(s.collect(timeout=5) for s in syncs)
    for s in syncs:
        s.reply(widest)
    for t in threads:
        t.join(5)
    return results


@pytest.mark.parametrize(
    "wc,texts,want",
    [
        (WC_SYNC_WIDTH, ["8 %", "9 %"], ["8 %", "9 %"]),
        (WC_SYNC_WIDTH, ["9 %", "10 %"], [" 9 %", "10 %"]),
        (WC_SYNC_WIDTH, ["9 %", "100 %"], ["  9 %", "100 %"]),
        (WC_SYNC_WIDTH_R, ["9 %", "10 %"], ["9 % ", "10 %"]),
        (WC_SYNC_WIDTH_R, ["9 %", "100 %"], ["9 %  ", "100 %"]),
        (WC_SYNC_SPACE, ["8 %", "9 %"], [" 8 %", " 9 %"]),
        (WC_SYNC_SPACE, ["9 %", "10 %"], ["  9 %", " 10 %"]),
        (WC_SYNC_SPACE, ["9 %", "100 %"], ["   9 %", " 100 %"]),
    ],
)
def test_width_sync(wc, texts, want):
    assert _run_column(texts, wc) == want


def test_unwrap_follows_chain():
    inner = name("x")

    class Wrap:
        def __init__(self, d):
            self.d = d

        def unwrap(self):
            return self.d

    assert unwrap(Wrap(Wrap(inner))) is inner
    assert unwrap(inner) is inner