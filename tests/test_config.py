from scheduler_sim.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("SCHEDULER_SIM_DEFAULT_QUANTUM", raising=False)
    monkeypatch.delenv("SCHEDULER_SIM_STARVATION_FACTOR", raising=False)
    monkeypatch.delenv("SCHEDULER_SIM_LOG_LEVEL", raising=False)
    s = Settings(_env_file=None)
    assert s.DEFAULT_QUANTUM == 2
    assert s.STARVATION_FACTOR == 3
    assert s.LOG_LEVEL == "WARNING"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCHEDULER_SIM_DEFAULT_QUANTUM", "4")
    monkeypatch.setenv("SCHEDULER_SIM_STARVATION_FACTOR", "2.5")
    monkeypatch.setenv("SCHEDULER_SIM_LOG_LEVEL", "DEBUG")
    s = Settings(_env_file=None)
    assert s.DEFAULT_QUANTUM == 4
    assert s.STARVATION_FACTOR == 2.5
    assert s.LOG_LEVEL == "DEBUG"
