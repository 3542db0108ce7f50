"""Default marks for tests under `tests/functional/`."""

from pathlib import Path

import pytest
from click.testing import CliRunner

# pylint: disable=unused-argument
# pylint: disable=redefined-outer-name

FUNCTIONAL_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "functional"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `functional` marks to items in `tests/functional/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if FUNCTIONAL_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.functional)


@pytest.fixture
def runner(tmp_path: Path):
    """CliRunner pointed at a fresh SQLite file with cheap bcrypt."""
    return CliRunner(
        env={
            "METRIQ_DB_URL": f"sqlite:///{tmp_path / 'metriq.db'}",
            "METRIQ_BCRYPT_ROUNDS": "4",
            "METRIQ_LOG_PATH": str(tmp_path / "latest.log"),
        }
    )
