from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Callable, List, Optional


CHAPTER_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops" xml:lang="{lang}" lang="{lang}">
<head>
<title>{title}</title>
<link rel="stylesheet" type="text/css" href="../Styles/style.css"/>
</head>
<body>
{body}
</body>
</html>
"""


@dataclass
class Metadata:
    """
    Publication metadata. title, language and identifier are required; every
    other scalar is optional and None (or an empty string) means "absent".
    publication_date is passed through as given, even when empty.
    """
    title: str
    language: str
    identifier: str
    author: Optional[str] = None
    description: Optional[str] = None
    publisher: Optional[str] = None
    publication_date: str = ""
    subjects: List[str] = field(default_factory=list)
    # schema.org accessibility
    access_modes: List[str] = field(default_factory=list)
    access_mode_sufficient: List[List[str]] = field(default_factory=list)
    accessibility_features: List[str] = field(default_factory=list)
    accessibility_hazards: List[str] = field(default_factory=list)
    accessibility_summary: Optional[str] = None
    # EPUB Accessibility 1.1 certification
    certified_by: Optional[str] = None
    certifier_credential: Optional[str] = None
    certifier_report: Optional[str] = None
    conforms_to: List[str] = field(default_factory=list)
    cover: Optional[str] = None

    @property
    def has_cover(self) -> bool:
        return bool(self.cover)


@dataclass
class Chapter:
    """
    One content document. filename must be unique within a book; it becomes
    the archive name under Text/.
    """
    filename: str
    title: str
    content: str = ""
    renderer: Optional[Callable[[str], str]] = None

    def render(self, language: str) -> str:
        """Returns the complete XHTML document for this chapter."""
        if self.renderer is not None:
            return self.renderer(language)
        return CHAPTER_TEMPLATE.format(
            lang=escape(language, quote=True),
            title=escape(self.title),
            body=self.content,
        )


@dataclass(frozen=True)
class ImageResource:
    id: str
    path: str


@dataclass(frozen=True)
class StylesheetResource:
    id: str
    path: str


@dataclass(frozen=True)
class ManifestEntry:
    id: str
    href: str
    media_type: str
    properties: Optional[str] = None


@dataclass(frozen=True)
class SpineEntry:
    idref: str
