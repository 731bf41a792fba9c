import pytest

from mlq_sim.disciplines import Discipline, select
from mlq_sim.errors import ConfigurationError
from mlq_sim.task import NEVER_SCHEDULED, ProcessSpec, ProcessState


def _state(pid, arrival, burst, priority=0, *, remaining=None, last=NEVER_SCHEDULED):
    state = ProcessState.from_spec(ProcessSpec(pid, arrival, burst, priority), band=0)
    if remaining is not None:
        state.remaining_time = remaining
    state.last_scheduled_time = last
    return state


def test_empty_ready_set_selects_nothing():
    for discipline in Discipline:
        assert select(discipline, []) is None


def test_fcfs_prefers_earliest_arrival_then_lowest_pid():
    ready = [_state(3, 1, 4), _state(2, 0, 9), _state(1, 1, 1)]
    assert select(Discipline.FCFS, ready).pid == 2
    assert select(Discipline.FCFS, ready[::2]).pid == 1


def test_priority_lower_value_wins_with_arrival_and_pid_tiebreaks():
    ready = [_state(1, 2, 3, priority=2), _state(2, 1, 3, priority=1), _state(3, 0, 3, priority=1)]
    assert select(Discipline.PRIORITY, ready).pid == 3
    ready = [_state(4, 0, 3, priority=1), _state(3, 0, 3, priority=1)]
    assert select(Discipline.PRIORITY, ready).pid == 3


def test_sjf_orders_on_remaining_time_not_burst():
    long_but_nearly_done = _state(1, 0, 10, remaining=1)
    short = _state(2, 0, 2)
    assert select(Discipline.SJF, [short, long_but_nearly_done]).pid == 1


def test_sjf_tie_on_remaining_falls_back_to_arrival():
    assert select(Discipline.SJF, [_state(1, 3, 2), _state(2, 1, 2)]).pid == 2


def test_round_robin_favours_never_scheduled_and_least_recent():
    ran_at_zero = _state(1, 0, 5, last=0)
    never_ran = _state(2, 0, 5)
    assert select(Discipline.ROUND_ROBIN, [ran_at_zero, never_ran]).pid == 2
    assert select(Discipline.ROUND_ROBIN, [_state(1, 0, 5, last=4), _state(2, 0, 5, last=3)]).pid == 2


def test_selection_has_no_side_effects():
    ready = [_state(1, 0, 3), _state(2, 0, 2)]
    before = [(p.remaining_time, p.last_scheduled_time, p.time_slice_remaining) for p in ready]
    for discipline in Discipline:
        select(discipline, ready)
    assert [(p.remaining_time, p.last_scheduled_time, p.time_slice_remaining) for p in ready] == before


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", Discipline.FCFS), ("rr", Discipline.ROUND_ROBIN), ("Round Robin", Discipline.ROUND_ROBIN), ("sjf", Discipline.SJF)],
)
def test_parse_accepts_codes_and_names(raw, expected):
    assert Discipline.parse(raw) is expected


def test_unknown_codes_are_rejected():
    with pytest.raises(ConfigurationError):
        Discipline.from_code(4)
    with pytest.raises(ConfigurationError):
        Discipline.parse("lottery")


def test_labels_match_report_names():
    assert [d.label for d in Discipline] == ["FCFS", "Priority", "SJF", "Round Robin"]
