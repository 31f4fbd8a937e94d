import pytest

from unstructbench.timer import Timer, TimerStats, collect_stats, format_stats


def _clock(*values):
    it = iter(values)
    return lambda: next(it)


def test_timer_tick_tock_uses_clock():
    timer = Timer(clock=_clock(2.0, 5.0))
    timer.tick()
    assert timer.tock() == 3.0
    assert timer.elapsed == 3.0


def test_timer_tock_without_tick_raises():
    with pytest.raises(RuntimeError):
        Timer().tock()


def test_timer_context_manager():
    with Timer(clock=_clock(10.0, 10.5)) as timer:
        pass
    assert timer.elapsed == 0.5


def test_real_clock_elapsed_nonnegative():
    timer = Timer()
    timer.tick()
    assert timer.tock() >= 0.0


def test_collect_stats_bounds():
    stats = collect_stats([1.0, 2.0, 3.0, 10.0])
    assert stats.min == 1.0
    assert stats.max == 10.0
    assert stats.min <= stats.mean <= stats.max
    assert stats.std > 0


def test_collect_stats_identical_values_zero_std():
    stats = collect_stats([4.0, 4.0, 4.0])
    assert stats == TimerStats(min=4.0, max=4.0, mean=4.0, std=0.0)


def test_collect_stats_empty_raises():
    with pytest.raises(ValueError):
        collect_stats([])


def test_format_stats():
    line = format_stats("Grid", TimerStats(min=1.0, max=2.0, mean=1.5, std=0.25))
    assert line == "Grid timer seconds mean = 1.50, min = 1.00, max = 2.00, std = 0.250"