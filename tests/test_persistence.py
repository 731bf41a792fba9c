import pytest

from conftest import make_engine
from mlq_sim import Discipline, SchedulingEngine, persistence
from mlq_sim.errors import ConfigurationError, PersistenceError


def test_loads_assigns_pids_in_file_order(sample_text):
    wl = persistence.loads(sample_text)
    assert [s.pid for s in wl.specs] == [1, 2, 3, 4]
    assert [(s.arrival_time, s.burst_time, s.priority) for s in wl.specs][1] == (1, 3, 1)
    assert wl.time_quantum == 2
    assert wl.disciplines == (Discipline.ROUND_ROBIN, Discipline.PRIORITY, Discipline.SJF, Discipline.FCFS)


def test_dumps_writes_one_field_group_per_line(sample_text):
    assert persistence.dumps(persistence.loads(sample_text)) == sample_text


def test_tokens_may_span_lines():
    wl = persistence.loads("1 3\n0\n2 5 0 0 0 0")
    assert wl.specs[0].burst_time == 2
    assert wl.time_quantum == 3


@pytest.mark.parametrize(
    "text",
    [
        "",
        "2\n2\n0 abc 1\n1 2 1\n0 0 0 0\n",
        "2\n2\n0 3 1\n",
        "1\n2\n0 3 1\n0 0 0\n",
        "1\n2\n0 3 1\n0 0 0 0 7\n",
        "x\n",
    ],
)
def test_malformed_text_raises_persistence_error(text):
    with pytest.raises(PersistenceError):
        persistence.loads(text)


@pytest.mark.parametrize(
    "text",
    [
        "0\n2\n0 0 0 0\n",
        "1\n2\n0 0 1\n0 0 0 0\n",
        "1\n2\n0 3 1\n0 5 0 0\n",
        "1\n0\n0 3 1\n3 0 0 0\n",
    ],
)
def test_invalid_values_raise_configuration_error(text):
    with pytest.raises(ConfigurationError):
        persistence.loads(text)


def test_write_then_read(tmp_path, sample_text):
    path = tmp_path / "data.txt"
    wl = persistence.loads(sample_text)
    persistence.write_workload(path, wl)
    assert persistence.read_workload(path) == wl


def test_read_missing_file(tmp_path):
    with pytest.raises(PersistenceError):
        persistence.read_workload(tmp_path / "missing.txt")


class TestEngineBoundary:
    def test_load_replaces_state_and_resets(self, tmp_path, sample_text):
        path = tmp_path / "data.txt"
        path.write_text(sample_text)
        engine = make_engine([(0, 1)])
        engine.run()
        assert engine.load(path) is True
        assert engine.current_time == 0
        assert [p.pid for p in engine.processes] == [1, 2, 3, 4]
        assert engine.queues.time_quantum == 2

    def test_malformed_burst_leaves_state_unchanged(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("2\n2\n0 abc 1\n1 2 1\n0 0 0 0\n")
        engine = make_engine([(0, 3), (1, 2)])
        engine.start()
        engine.tick()
        before = engine.snapshot()
        assert engine.load(path) is False
        assert engine.snapshot() == before
        assert engine.tick().pid == 1

    @pytest.mark.parametrize("text", ["1\n2\n0 3 1\n0 0 9 0\n", "1\n2\n0 -1 1\n0 0 0 0\n"])
    def test_configuration_errors_are_reported_as_failure(self, tmp_path, text):
        path = tmp_path / "bad.txt"
        path.write_text(text)
        engine = SchedulingEngine()
        assert engine.load(path) is False
        assert engine.workload is None

    def test_missing_file(self, tmp_path):
        assert SchedulingEngine().load(tmp_path / "nope.txt") is False

    def test_save_round_trips_loaded_file(self, tmp_path, sample_text):
        src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
        src.write_text(sample_text)
        engine = SchedulingEngine()
        assert engine.load(src)
        engine.run()
        assert engine.save(dst)
        assert dst.read_text() == sample_text

    def test_save_without_workload_fails(self, tmp_path):
        assert SchedulingEngine().save(tmp_path / "out.txt") is False

    def test_save_refuses_custom_band_layout(self, tmp_path):
        engine = make_engine([(0, 1), (0, 1)], bands=[0, 0])
        assert engine.save(tmp_path / "out.txt") is False
        assert not (tmp_path / "out.txt").exists()
