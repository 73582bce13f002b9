import json
import logging
import time
from pathlib import Path
from typing import Optional

from epubsmith.book import load_book
from epubsmith.config import AppConfig
from epubsmith.epub.builder import EPUBBuilder
from epubsmith.utils.errors import EpubsmithError

logger = logging.getLogger("epubsmith.pipeline")


def _status_writer(status_file: Optional[Path]):
    def _status(event: str, **extras):
        if not status_file:
            return
        try:
            status_file.parent.mkdir(parents=True, exist_ok=True)
            with status_file.open("a", encoding="utf-8") as f:
                payload = {"t": time.time(), "event": "pipeline_stage", "stage": event}
                if extras:
                    payload.update(extras)
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")
        except OSError as e:
            logger.debug(f"Could not write status event {event!r}: {e}")
    return _status


def run_build(
    cfg: AppConfig,
    book_file: str,
    output_epub: str,
    status_file: Optional[Path] = None,
) -> str:
    """
    Load a book definition and package it as an EPUB.
    Returns output_epub path.
    """
    _status = _status_writer(status_file)
    _status("build_start", input=str(book_file), output=str(output_epub))

    try:
        book = load_book(book_file)
        _status(
            "book_loaded",
            chapters=len(book.chapters),
            images=len(book.images),
            stylesheets=len(book.stylesheets),
        )

        builder = EPUBBuilder(
            fmt=cfg.format_config(),
            nav_title=cfg.package.nav_title,
            compress=cfg.package.compress,
        )
        result = builder.generate(
            output_epub,
            book.metadata,
            book.chapters,
            images=book.images,
            stylesheets=book.stylesheets,
        )
    except EpubsmithError as e:
        _status("build_failed", error=str(e), kind=type(e).__name__)
        raise

    _status("build_done", path=result)
    return result
