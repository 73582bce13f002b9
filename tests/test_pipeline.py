import json
import warnings
import zipfile
from pathlib import Path

import pytest

from epubsmith.book import discover_title, load_book
from epubsmith.cli import main
from epubsmith.config import AppConfig
from epubsmith.pipeline import run_build
from epubsmith.utils.errors import BookDefinitionError, GenerationFailed


def _write_book(root: Path, **overrides) -> Path:
    (root / "text").mkdir(parents=True, exist_ok=True)
    (root / "text" / "one.html").write_text("<h1>The Beginning</h1><p>Once.</p>", encoding="utf-8")
    definition = {
        "metadata": {
            "title": "Sample",
            "language": "en",
            "identifier": "urn:uuid:1234",
            "author": "Writer",
            "subjects": ["Testing"],
        },
        "chapters": [
            {"filename": "one.xhtml", "source": "text/one.html"},
            {"filename": "two.xhtml", "title": "Second", "content": "<p>Twice.</p>"},
        ],
    }
    definition.update(overrides)
    path = root / "book.json"
    path.write_text(json.dumps(definition), encoding="utf-8")
    return path


def test_load_book_resolves_paths_and_titles(tmp_path: Path):
    book = load_book(_write_book(tmp_path, images=[{"id": "fig", "path": "img/fig.png"}]))
    assert book.metadata.title == "Sample"
    assert book.metadata.subjects == ["Testing"]
    assert [c.title for c in book.chapters] == ["The Beginning", "Second"]
    assert book.chapters[0].content.startswith("<h1>")
    assert book.images[0].path == str(tmp_path / "img" / "fig.png")


def test_discover_title_fallbacks():
    assert discover_title("<title>Doc</title><h1>Heading</h1>") == "Doc"
    assert discover_title("<p>No heading here</p>") is None


def test_chapter_title_falls_back_to_filename(tmp_path: Path):
    path = _write_book(tmp_path, chapters=[{"filename": "prologue.xhtml", "content": "<p>x</p>"}])
    assert load_book(path).chapters[0].title == "prologue"


@pytest.mark.parametrize(
    "overrides",
    [
        {"metadata": {"title": "No language", "identifier": "x"}},
        {"metadata": {"title": "T", "language": "en", "identifier": "x", "colour": "red"}},
        {"metadata": {"title": "T", "language": "en", "identifier": "x", "subjects": "not-a-list"}},
        {"chapters": []},
        {"chapters": [{"title": "no filename"}]},
        {"chapters": [{"filename": "a.xhtml", "source": "missing.html"}]},
        {"images": [{"id": "only-id"}]},
    ],
)
def test_malformed_definitions_are_rejected(tmp_path: Path, overrides):
    with pytest.raises(BookDefinitionError):
        load_book(_write_book(tmp_path, **overrides))


def test_invalid_json_is_rejected(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(BookDefinitionError):
        load_book(bad)


def test_run_build_writes_epub_and_status(tmp_path: Path):
    book = _write_book(tmp_path)
    out = tmp_path / "out" / "sample.epub"
    out.parent.mkdir()
    status = tmp_path / "status.jsonl"

    result = run_build(AppConfig.from_env_and_ini(None), str(book), str(out), status_file=status)
    assert Path(result).exists()
    with zipfile.ZipFile(result) as zf:
        assert "OEBPS/Text/one.xhtml" in zf.namelist()
        assert "OEBPS/Text/two.xhtml" in zf.namelist()

    events = [json.loads(l) for l in status.read_text(encoding="utf-8").splitlines() if l.strip()]
    stages = [e["stage"] for e in events]
    assert stages == ["build_start", "book_loaded", "build_done"]
    assert events[1]["chapters"] == 2


def test_run_build_records_failure(tmp_path: Path):
    book = _write_book(tmp_path, images=[{"id": "scan", "path": "scan.bmp"}])
    (tmp_path / "scan.bmp").write_bytes(b"BM")
    out = tmp_path / "fail.epub"
    status = tmp_path / "status.jsonl"

    with pytest.raises(GenerationFailed):
        run_build(AppConfig.from_env_and_ini(None), str(book), str(out), status_file=status)

    assert not out.exists()
    events = [json.loads(l) for l in status.read_text(encoding="utf-8").splitlines() if l.strip()]
    assert events[-1]["stage"] == "build_failed"
    assert events[-1]["kind"] == "GenerationFailed"


def test_cli_build_and_exit_codes(tmp_path: Path):
    book = _write_book(tmp_path)
    out = tmp_path / "cli.epub"
    assert main(["build", str(book), str(out), "--nav-title", "Contents"]) == 0
    assert out.exists()

    assert main(["build", str(book), str(tmp_path / "wrong.zip")]) == 1
    assert main(["build", str(tmp_path / "missing.json"), str(tmp_path / "x.epub")]) == 1
    assert main([]) == 1


def test_cli_init_config(tmp_path: Path):
    target = tmp_path / "my.ini"
    assert main(["init-config", str(target)]) == 0
    assert target.exists()
    assert main(["init-config", str(target)]) == 1
    assert main(["init-config", str(target), "--force"]) == 0


def test_discover_title_on_filename_like_markup_is_silent():
    """Inline content that looks like a file name must not trigger bs4's locator warning."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        assert discover_title("chapter1.html") is None
    assert [w.category.__name__ for w in caught if "Locator" in w.category.__name__] == []
