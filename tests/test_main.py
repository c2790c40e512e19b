import os

import main
from evosim.charts import final_charts
from evosim.config import CFG
from evosim.sim import Simulation


def test_final_charts_written(tmp_path):
    sim = Simulation(CFG(N0=12, N_FOOD=20, GEN_TICKS=15, SEED=1))
    sim.run(3)
    paths = final_charts(sim, str(tmp_path))
    assert len(paths) == 7
    assert all(os.path.exists(p) for p in paths)


def test_final_charts_without_history(tmp_path):
    assert final_charts(Simulation(CFG(N0=5, SEED=1)), str(tmp_path)) == []


def test_headless_run_saves_snapshot(tmp_path):
    path = tmp_path / "out.json"
    code = main.run(["--headless", "-g", "1", "--seed", "3", "--charts", "", "--save", str(path)])
    assert code == 0
    assert path.exists()


def test_headless_run_exports_history(tmp_path):
    path = tmp_path / "history.csv"
    assert main.run(["--headless", "-g", "1", "--seed", "3", "--charts", "", "--export", str(path)]) == 0
    header, row = path.read_text().splitlines()
    assert header.startswith("generation,agent_count")
    assert row.startswith("1,")


def test_load_failure_returns_error(tmp_path):
    code = main.run(["--headless", "-g", "1", "--charts", "", "--load", str(tmp_path / "missing.json")])
    assert code == 1
