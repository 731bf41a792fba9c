from mlq_sim.__main__ import main


def test_runs_file_and_prints_report(tmp_path, sample_text, capsys):
    path = tmp_path / "data.txt"
    path.write_text(sample_text)
    assert main([str(path), "--trace", "--compare"]) == 0
    out = capsys.readouterr().out
    assert "Simulating 4 processes" in out
    assert "0:P1" in out
    assert "Average Waiting Time:" in out
    assert "Round Robin" in out


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "could not load" in capsys.readouterr().err


def test_generate_writes_workload_then_runs(tmp_path, capsys):
    path = tmp_path / "generated.txt"
    saved = tmp_path / "copy.txt"
    assert main([str(path), "--generate", "5", "--seed", "1", "--save", str(saved)]) == 0
    assert path.read_text() == saved.read_text()
    assert "Simulating 5 processes" in capsys.readouterr().out


def test_compare_without_round_robin_quantum(tmp_path, capsys):
    path = tmp_path / "data.txt"
    path.write_text("2\n0\n0 3 1\n1 2 1\n0 0 0 0\n")
    assert main([str(path), "--compare"]) == 0
    out = capsys.readouterr().out
    assert "SJF" in out
    assert "Round Robin" not in out
