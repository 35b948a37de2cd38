import pathlib

from scc.version import read_version


def test_version_file_exists():
    root = pathlib.Path(__file__).resolve().parents[1]
    version_path = root / "VERSION"
    assert version_path.exists(), "VERSION file must exist"
    assert version_path.read_text(encoding="utf-8").strip() != "", "VERSION must not be empty"


def test_read_version_matches_file():
    root = pathlib.Path(__file__).resolve().parents[1]
    assert read_version() == (root / "VERSION").read_text(encoding="utf-8").strip()
