"""
Loads a book definition file (JSON) into the in-memory objects EPUBBuilder
consumes.

Layout:

    {
      "metadata": {"title": "...", "language": "en", "identifier": "...", ...},
      "chapters": [{"filename": "ch1.xhtml", "title": "...", "source": "ch1.html"},
                   {"filename": "ch2.xhtml", "content": "<p>inline</p>"}],
      "images": [{"id": "fig1", "path": "img/fig1.png"}],
      "stylesheets": [{"id": "extra", "path": "css/extra.css"}]
    }

Relative paths (chapter sources, images, stylesheets, cover) are resolved
against the directory holding the definition file.
"""

import json
import logging
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from epubsmith.models import Chapter, ImageResource, Metadata, StylesheetResource
from epubsmith.utils.errors import BookDefinitionError

logger = logging.getLogger("epubsmith.book")

_REQUIRED_METADATA = ("title", "language", "identifier")
_LIST_METADATA = {
    "subjects",
    "access_modes",
    "accessibility_features",
    "accessibility_hazards",
    "conforms_to",
}


@dataclass
class BookDefinition:
    metadata: Metadata
    chapters: List[Chapter] = field(default_factory=list)
    images: List[ImageResource] = field(default_factory=list)
    stylesheets: List[StylesheetResource] = field(default_factory=list)


def discover_title(markup: str) -> Optional[str]:
    """First <title> or <h1> text in a chapter's markup, if any."""
    with warnings.catch_warnings():
        # short inline markup like "intro.html" is content here, not a file name
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(markup, "lxml")
    for tag in ("title", "h1"):
        node = soup.find(tag)
        if node is not None:
            text = node.get_text(" ", strip=True)
            if text:
                return text
    return None


def _resolve(base: Path, value: str) -> str:
    p = Path(value)
    return str(p if p.is_absolute() else base / p)


def _parse_metadata(raw: Dict[str, Any], base: Path) -> Metadata:
    missing = [k for k in _REQUIRED_METADATA if not raw.get(k)]
    if missing:
        raise BookDefinitionError(f"metadata is missing required field(s): {', '.join(missing)}")

    known = {f.name for f in fields(Metadata)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise BookDefinitionError(f"unknown metadata field(s): {', '.join(unknown)}")

    values = dict(raw)
    for name in _LIST_METADATA:
        if name in values and not isinstance(values[name], list):
            raise BookDefinitionError(f"metadata.{name} must be a list")
    sufficient = values.get("access_mode_sufficient", [])
    if not isinstance(sufficient, list) or not all(isinstance(c, list) for c in sufficient):
        raise BookDefinitionError("metadata.access_mode_sufficient must be a list of lists")
    if values.get("cover"):
        values["cover"] = _resolve(base, values["cover"])
    return Metadata(**values)


def _parse_chapter(raw: Dict[str, Any], index: int, base: Path) -> Chapter:
    if not isinstance(raw, dict):
        raise BookDefinitionError(f"chapters[{index}] must be an object")
    filename = raw.get("filename")
    if not filename:
        raise BookDefinitionError(f"chapters[{index}] has no filename")

    if "source" in raw:
        source = Path(_resolve(base, raw["source"]))
        try:
            content = source.read_text(encoding="utf-8")
        except OSError as e:
            raise BookDefinitionError(f"chapters[{index}]: cannot read {source}: {e}") from e
    else:
        content = raw.get("content", "")

    title = raw.get("title") or discover_title(content) or Path(filename).stem
    return Chapter(filename=filename, title=title, content=content)


def _parse_resources(raw: Any, key: str, cls, base: Path) -> list:
    if not isinstance(raw, list):
        raise BookDefinitionError(f"{key} must be a list")
    out = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not item.get("id") or not item.get("path"):
            raise BookDefinitionError(f"{key}[{i}] needs both 'id' and 'path'")
        out.append(cls(id=item["id"], path=_resolve(base, item["path"])))
    return out


def load_book(path: Union[str, Path]) -> BookDefinition:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise BookDefinitionError(f"Cannot read book definition {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise BookDefinitionError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("metadata"), dict):
        raise BookDefinitionError(f"{path}: top level must be an object with a 'metadata' object")

    base = path.parent
    chapters_raw = data.get("chapters", [])
    if not isinstance(chapters_raw, list) or not chapters_raw:
        raise BookDefinitionError(f"{path}: at least one chapter is required")

    book = BookDefinition(
        metadata=_parse_metadata(data["metadata"], base),
        chapters=[_parse_chapter(c, i, base) for i, c in enumerate(chapters_raw)],
        images=_parse_resources(data.get("images", []), "images", ImageResource, base),
        stylesheets=_parse_resources(data.get("stylesheets", []), "stylesheets", StylesheetResource, base),
    )
    logger.debug(
        f"Loaded {path}: {len(book.chapters)} chapters, {len(book.images)} images, "
        f"{len(book.stylesheets)} stylesheets"
    )
    return book
