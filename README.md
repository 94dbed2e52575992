# progbars

Building blocks for progress bars in a terminal: decorators that turn a bar's
statistics into text, human-readable byte size and percentage formatting,
ETA, elapsed time and speed estimates, moving averages, and the priority
ordering and column-width synchronisation used when several bars are shown
together.

## Installation

```
pip install progbars
```

To run the test suite:

```
pip install "progbars[test]"
pytest
```

## Decorators

A decorator's `decor(stats)` takes a `progbars.decorator.Statistics` snapshot
(`total`, `current`, `completed`, `aborted`, ...) and returns the text to show
together with its visual width.

```python
from progbars.decorator import Statistics, WC, DINDENT_RIGHT, name, from_func
from progbars.counters import counters_kibi_byte, percentage
from progbars.wrappers import on_complete

stats = Statistics(total=100, current=42)

name("Download", WC(w=10)).decor(stats)                  # ("  Download", 10)
name("Download", WC(w=10, c=DINDENT_RIGHT)).decor(stats) # ("Download  ", 10)
percentage().decor(stats)                                # ("42 %", 4)
on_complete(name("working"), "done").decor(stats)        # ("working", 7)
from_func(lambda s: f"{s.current}/{s.total}").decor(stats)
```

`WC` holds a minimum width `w` and a bit set `c` of layout flags:
`DINDENT_RIGHT`, `DEXTRA_SPACE`, `DSYNC_WIDTH` and the combinations
`DSYNC_WIDTH_R`, `DSYNC_SPACE`, `DSYNC_SPACE_R`. Ready-made configurations
are `WC_SYNC_WIDTH`, `WC_SYNC_WIDTH_R`, `WC_SYNC_SPACE` and `WC_SYNC_SPACE_R`.
Text width is measured with `wcwidth`, so wide characters count correctly.

Available decorators:

- `progbars.decorator`: `name`, `from_func` (and the `FuncDecorator` class).
- `progbars.counters`: `counters`, `total`, `current`, `inverted_current`,
  each with `_no_unit`, `_kibi_byte` and `_kilo_byte` variants, plus
  `percentage` and `new_percentage`.
- `progbars.wrappers`: `meta`, `on_abort`, `on_abort_meta`, `on_complete`,
  `on_complete_meta`, `on_complete_or_on_abort`,
  `on_complete_meta_or_on_abort_meta`, and the selectors `on_condition`,
  `on_predicate`, `conditional`, `predicative`. `progbars.decorator.unwrap`
  follows wrappers to the innermost decorator.
- `progbars.spinner`: `spinner(frames)`, cycling through the given frames or
  a default braille set when `frames` is empty.
- `progbars.eta`: `average_eta`, `new_average_eta`, `ewma_eta`,
  `ewma_normalized_eta`, `moving_average_eta`, `elapsed`, `new_elapsed`, with
  `TimeStyle` (`GO`, `HHMMSS`, `HHMM`, `MMSS`) and the normalisers
  `max_tolerate_time_normalizer` and `fixed_interval_time_normalizer`.
- `progbars.speed`: `average_speed`, `new_average_speed`, `ewma_speed`,
  `moving_average_speed`, and `fmt_as_speed`.

Start times given to the `new_*` functions are `time.monotonic()` values.
EWMA based decorators are fed through `ewma_update(n, dur)`, where `dur` is
a `timedelta` or a number of seconds:

```python
from progbars.decorator import Statistics, TimeStyle
from progbars.eta import ewma_eta

eta = ewma_eta(TimeStyle.HHMMSS, 0)
eta.ewma_update(1, 0.5)                        # one item took half a second
eta.decor(Statistics(total=10, current=4))     # ("00:00:03", 8)
```

## Sizes and percentages

`progbars.units` has `SizeB1024`, `SizeB1000` and `Percent`, and a
printf-style `sprintf` that lets these values format themselves:

```python
from progbars.units import SizeB1024, SizeB1000, Percent, sprintf

sprintf("%d", SizeB1024(12345678))      # "12MiB"
sprintf("% .2f", SizeB1000(12345678))   # "12.35 MB"
sprintf("%.1f", Percent(10.5))          # "10.5%"
```

`progbars.percent` has the plain helpers `percentage`, `percentage_round`
and `check_requested_width`.

## Moving averages

`progbars.averages` provides `SimpleEWMA`, `VariableEWMA` (reports 0 until
it has seen ten samples), `MedianWindow` (median of the last three samples)
and `ThreadSafeMovingAverage`, with the factories `new_moving_average`,
`new_median` and `new_thread_safe_moving_average`.

## Ordering bars and synchronising widths

`progbars.queue.PriorityQueue` is a heap of items with writable `priority`
and `index` attributes; the highest priority pops first, and `fix(index)`
restores order after a priority change.

`progbars.widthsync.HeapManager` is a thread-safe owner of such a heap:
`push`, `items`, `drain`, `fix` (immediate or lazy), `state` and `end`.
Its `sync(drop)` starts, for each column of sync-enabled decorators, a thread
running `max_width_distributor`, which gathers every decorator's width and
hands back the column maximum; `sync_width` does the same for a matrix you
build yourself. Setting the `drop` event abandons an unfinished round.

## What this package does not do

There is no progress container or bar object here: nothing draws bars to a
terminal, refreshes them, reads terminal size, or wraps readers and writers
to count bytes. The package supplies the decorators, formatting, estimates
and ordering pieces that such a renderer would use.