"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch, tmp_path):
    """Isolate tests from the developer's .env, FIT_* variables and logging."""
    from atlas_fit.config.settings import reset_settings
    from atlas_fit.scoring.config import reset_scoring_config
    from atlas_fit.utils.logging import reset_logging

    monkeypatch.chdir(tmp_path)
    for var in ("FIT_PROFILE_PATH", "FIT_RANK_MIN_SCORE", "FIT_RANK_LIMIT"):
        monkeypatch.delenv(var, raising=False)

    reset_settings()
    reset_scoring_config()
    reset_logging()
    yield
    reset_settings()
    reset_scoring_config()
    reset_logging()


@pytest.fixture
def west_coast_van_profile() -> dict:
    """Driver who runs dry vans on the West Coast with no mileage limit."""
    return {
        "driver_id": "drv-001",
        "preferred_equipment": ["Dry Van"],
        "preferred_regions": ["West Coast"],
        "avoid_states": [],
        "max_distance": None,
        "home_base": None,
    }


@pytest.fixture
def california_van_load() -> dict:
    """Short in-state dry van load."""
    return {
        "load_id": "L-100",
        "equipment_type": "Dry Van",
        "origin_state": "CA",
        "dest_state": "CA",
        "miles": 300,
    }
