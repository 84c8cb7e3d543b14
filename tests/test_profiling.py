import pytest

from vgengine.profiling import MAX_U64, Profiler, ProfilerError, ProfilerRegistry


def make_clocks(cycles, times):
    cycle_iter = iter(cycles)
    time_iter = iter(times)
    return (lambda: next(cycle_iter)), (lambda: next(time_iter))


def test_register_same_name_returns_same_index():
    reg = ProfilerRegistry()
    first = reg.register("render")
    other = reg.register("update")
    assert reg.register("render") == first
    assert other != first
    assert len(reg) == 2
    assert reg[other].name == "update"


def test_register_beyond_capacity_raises():
    reg = ProfilerRegistry(capacity=2)
    reg.register("a")
    reg.register("b")
    with pytest.raises(ProfilerError):
        reg.register("c")


def test_new_profiler_initial_extremes():
    reg = ProfilerRegistry()
    p = reg[reg.register("x")]
    assert p.min_cycles == MAX_U64
    assert p.count == 0
    assert p.avg_cycles() == 0
    assert p.avg_time() == 0.0


def test_push_pop_measures_difference():
    c_start, c_end = 1000, 1750
    t_start, t_end = 4.0, 6.5
    cycle_clock, time_clock = make_clocks([c_start, c_end], [t_start, t_end])
    reg = ProfilerRegistry(cycle_clock=cycle_clock, time_clock=time_clock)
    idx = reg.register("scope")
    reg.push(idx)
    p = reg.pop()
    assert p is reg[idx]
    assert p.cycle_diff == c_end - c_start
    assert p.time_diff == t_end - t_start
    assert p.count == 1
    assert p.min_cycles == p.max_cycles == p.cycle_diff


def test_record_tracks_min_max_and_average():
    p = Profiler("p")
    samples = [(10, 1.0), (30, 3.0), (20, 2.0)]
    for cycles, ms in samples:
        p.record(cycles, ms)
    assert p.min_cycles == min(c for c, _ in samples)
    assert p.max_cycles == max(c for c, _ in samples)
    assert p.min_time == min(t for _, t in samples)
    assert p.max_time == max(t for _, t in samples)
    assert p.total_cycles == sum(c for c, _ in samples)
    assert p.avg_cycles() == p.total_cycles // p.count
    assert p.avg_time() == pytest.approx(p.total_time / p.count)
    assert p.cycle_diff == samples[-1][0]


def test_pop_empty_stack_raises():
    reg = ProfilerRegistry()
    with pytest.raises(ProfilerError):
        reg.pop_index()
    with pytest.raises(ProfilerError):
        reg.pop()


def test_push_unknown_index_raises():
    reg = ProfilerRegistry()
    with pytest.raises(ProfilerError):
        reg.push(0)
    reg.register("a")
    with pytest.raises(ProfilerError):
        reg.push_index(-1)


def test_stack_overflow_raises():
    reg = ProfilerRegistry(capacity=1)
    idx = reg.register("a")
    reg.push_index(idx)
    with pytest.raises(ProfilerError):
        reg.push_index(idx)


def test_nested_stack_is_lifo():
    reg = ProfilerRegistry()
    a = reg.register("a")
    b = reg.register("b")
    reg.push_index(a)
    reg.push_index(b)
    assert reg.pop_index() == b
    assert reg.pop_index() == a


def test_profile_context_manager_counts_and_unwinds():
    reg = ProfilerRegistry()
    for _ in range(3):
        with reg.profile("loop") as p:
            assert reg.depth == 1
    assert p.count == 3
    assert reg.depth == 0


def test_profile_pops_on_exception():
    reg = ProfilerRegistry()
    with pytest.raises(KeyError):
        with reg.profile("fail"):
            raise KeyError("boom")
    assert reg.depth == 0
    assert reg[reg.register("fail")].count == 1