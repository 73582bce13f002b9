from __future__ import annotations

from typing import Sequence

from lxml import etree

from epubsmith.epub.manifest import chapter_href
from epubsmith.models import Chapter, Metadata

XHTML_NS = "http://www.w3.org/1999/xhtml"
OPS_NS = "http://www.idpf.org/2007/ops"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

DEFAULT_NAV_TITLE = "Table of Contents"


def _x(tag: str) -> str:
    return f"{{{XHTML_NS}}}{tag}"


def build_navigation(metadata: Metadata, chapters: Sequence[Chapter], title: str = DEFAULT_NAV_TITLE) -> bytes:
    """
    Builds nav.xhtml: one toc list entry per chapter, in reading order, each
    pointing at the same href the manifest declares for that chapter.
    """
    html = etree.Element(_x("html"), nsmap={None: XHTML_NS, "epub": OPS_NS})
    html.set(XML_LANG, metadata.language)
    html.set("lang", metadata.language)

    head = etree.SubElement(html, _x("head"))
    etree.SubElement(head, _x("title")).text = title

    body = etree.SubElement(html, _x("body"))
    nav = etree.SubElement(body, _x("nav"))
    nav.set(f"{{{OPS_NS}}}type", "toc")
    nav.set("id", "toc")
    etree.SubElement(nav, _x("h1")).text = title

    ol = etree.SubElement(nav, _x("ol"))
    for chapter in chapters:
        li = etree.SubElement(ol, _x("li"))
        a = etree.SubElement(li, _x("a"), href=chapter_href(chapter))
        a.text = chapter.title

    return etree.tostring(
        html,
        xml_declaration=True,
        encoding="UTF-8",
        doctype="<!DOCTYPE html>",
        pretty_print=True,
    )
