import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from guild_build.levels import SCHEME_NUMBERED  # noqa: E402
from guild_build.ratings import RatingTable, load_rating_table  # noqa: E402


@pytest.fixture(scope="session")
def project_root() -> Path:
    return ROOT


@pytest.fixture(scope="session")
def data_dir(project_root: Path) -> Path:
    return project_root / "data"


@pytest.fixture(scope="session")
def ratings_path(data_dir: Path) -> Path:
    path = data_dir / "job_roles.json"
    if not path.exists():
        pytest.skip("sample rating table missing")
    return path


@pytest.fixture(scope="session")
def sample_table(ratings_path: Path) -> RatingTable:
    return load_rating_table(ratings_path, levels=SCHEME_NUMBERED.levels)


@pytest.fixture()
def tiny_table() -> RatingTable:
    return RatingTable.from_mapping(
        {
            "A": {"L1": {"x": 10, "y": 20}},
            "B": {"L1": {"x": 30, "y": 20}},
        },
        levels=["L1"],
    )
