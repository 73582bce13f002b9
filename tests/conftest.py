import sys
from pathlib import Path

import pytest


def pytest_configure():
    """
    Ensure the project's src/ directory is on sys.path so tests can import 'epubsmith'.
    """
    project_root = Path(__file__).resolve().parents[1]
    src_path = project_root / "src"
    src_str = str(src_path)
    if src_path.exists() and src_str not in sys.path:
        sys.path.insert(0, src_str)


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    p = tmp_path / "src_images" / "figure.png"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(PNG_BYTES)
    return p


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch):
    """Keep a stray epubsmith.ini in the working directory from leaking into tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("EPUBSMITH_NAV_TITLE", "EPUBSMITH_EPUB_VERSION", "EPUBSMITH_DEBUG"):
        monkeypatch.delenv(name, raising=False)
