from __future__ import annotations

import os
import random
from pathlib import Path

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg", force=True)

from hybrid_rota.config import Config  # noqa: E402

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


@pytest.fixture
def small_cfg(tmp_path: Path) -> Config:
    """Two weeks of Monday..Friday, outputs redirected to a temp dir."""
    return Config(
        WEEKS=2,
        WORKDAYS=list(WEEKDAYS),
        DAYS_AT_WORK=3,
        MIN_OFFICE_ATTENDANCE=1,
        SEED=7,
        TIME_LIMIT_SEC=5.0,
        NUM_PARALLEL_WORKERS=1,
        LOG_SOLUTIONS_FREQUENCY_SECONDS=0.0,
        OUTPUT_DIR=str(tmp_path / "outputs"),
    )
