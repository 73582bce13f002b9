from __future__ import annotations

import logging
from typing import List, Sequence

from epubsmith.epub.metadata import COVER_ID
from epubsmith.epub.resources import (
    CSS_MEDIA_TYPE,
    STYLES_DIR,
    TEXT_DIR,
    XHTML_MEDIA_TYPE,
    locate_cover,
    locate_image,
    locate_stylesheet,
)
from epubsmith.models import Chapter, ImageResource, ManifestEntry, Metadata, SpineEntry, StylesheetResource
from epubsmith.utils.errors import DuplicateResourceError, UnsafeResourcePath

logger = logging.getLogger("epubsmith.epub.manifest")

NAV_ID = "nav"
STYLE_ID = "style"
DEFAULT_STYLESHEET_HREF = f"{STYLES_DIR}/style.css"
SPINE_TOC = NAV_ID


def chapter_id(index: int) -> str:
    """Manifest id for the chapter at zero-based position `index`."""
    return f"chapter{index + 1}"


def chapter_href(chapter: Chapter) -> str:
    return f"{TEXT_DIR}/{chapter.filename}"


def _check_filename(filename: str) -> None:
    # a bare file name: no directories, no drive, no parent references
    if filename in ("", ".", "..") or "/" in filename or "\\" in filename or ":" in filename:
        raise UnsafeResourcePath(filename)


def _check_unique(entries: Sequence[ManifestEntry]) -> None:
    seen_ids = set()
    seen_hrefs = set()
    for entry in entries:
        if entry.id in seen_ids:
            raise DuplicateResourceError("id", entry.id)
        if entry.href in seen_hrefs:
            raise DuplicateResourceError("href", entry.href)
        seen_ids.add(entry.id)
        seen_hrefs.add(entry.href)


def build_manifest(
    metadata: Metadata,
    chapters: Sequence[Chapter],
    images: Sequence[ImageResource] = (),
    stylesheets: Sequence[StylesheetResource] = (),
    nav_href: str = "nav.xhtml",
) -> List[ManifestEntry]:
    """
    Lists every member of the package, in manifest order:
    nav, cover (if any), default stylesheet, chapters, images, extra stylesheets.

    Caller supplied ids must not collide with each other or with the reserved
    ids (nav, cover-image, style, chapterN); collisions raise DuplicateResourceError.
    Chapter filenames must be bare names, otherwise UnsafeResourcePath is raised.
    """
    entries: List[ManifestEntry] = [ManifestEntry(NAV_ID, nav_href, XHTML_MEDIA_TYPE, "nav")]

    if metadata.has_cover:
        cover = locate_cover(metadata.cover)
        entries.append(ManifestEntry(COVER_ID, cover.href, cover.media_type, "cover-image"))

    entries.append(ManifestEntry(STYLE_ID, DEFAULT_STYLESHEET_HREF, CSS_MEDIA_TYPE))

    for index, chapter in enumerate(chapters):
        _check_filename(chapter.filename)
        entries.append(ManifestEntry(chapter_id(index), chapter_href(chapter), XHTML_MEDIA_TYPE))

    for image in images:
        located = locate_image(image.path)
        entries.append(ManifestEntry(image.id, located.href, located.media_type))

    for stylesheet in stylesheets:
        located = locate_stylesheet(stylesheet.path)
        entries.append(ManifestEntry(stylesheet.id, located.href, located.media_type))

    _check_unique(entries)
    logger.debug(f"Manifest built with {len(entries)} entries")
    return entries


def build_spine(chapters: Sequence[Chapter]) -> List[SpineEntry]:
    return [SpineEntry(chapter_id(index)) for index in range(len(chapters))]
