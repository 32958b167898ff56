import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[1]
src_dir = repo_root / "src"
# make the src/ layout importable when the package is not installed
if src_dir.exists() and str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

_HASHIT_ENV = (
    "HASHIT_FORMAT",
    "HASHIT_UPPERCASE",
    "HASHIT_COLOR",
    "HASHIT_QUIET",
    "HASHIT_WORKERS",
)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temp dir and start with no HASHIT_* variables.

    Each variable is set then deleted so monkeypatch also removes anything
    a `.env` file loads during the test.
    """
    data_home = tmp_path / "data"
    monkeypatch.setenv("APPDATA", str(data_home))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    for var in _HASHIT_ENV:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
