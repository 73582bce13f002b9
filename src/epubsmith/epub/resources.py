from __future__ import annotations

from pathlib import PurePath
from typing import NamedTuple

from epubsmith.utils.errors import UnsupportedImageFormat

IMAGES_DIR = "Images"
STYLES_DIR = "Styles"
TEXT_DIR = "Text"
CSS_MEDIA_TYPE = "text/css"
XHTML_MEDIA_TYPE = "application/xhtml+xml"

IMAGE_MEDIA_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
}


class Located(NamedTuple):
    href: str
    media_type: str


def extension_of(path: str) -> str:
    """Lower-cased extension without the dot ('' when there is none)."""
    return PurePath(path).suffix.lower().lstrip(".")


def media_type_for(path: str) -> str:
    ext = extension_of(path)
    try:
        return IMAGE_MEDIA_TYPES[ext]
    except KeyError:
        raise UnsupportedImageFormat(str(path), ext) from None


def locate_image(path: str) -> Located:
    return Located(f"{IMAGES_DIR}/{PurePath(path).name}", media_type_for(path))


def locate_stylesheet(path: str) -> Located:
    return Located(f"{STYLES_DIR}/{PurePath(path).name}", CSS_MEDIA_TYPE)


def locate_cover(path: str) -> Located:
    """
    The cover always lands at Images/cover.<ext>, whatever the source name,
    so a package can hold at most one cover entry.
    """
    media_type = media_type_for(path)
    return Located(f"{IMAGES_DIR}/cover.{extension_of(path)}", media_type)


def archive_path(href: str, content_dir: str = "OEBPS") -> str:
    """Maps a package-relative href to its name inside the ZIP archive."""
    return f"{content_dir}/{href}"
