from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from lxml import etree

from epubsmith.config import FormatConfig
from epubsmith.epub.manifest import SPINE_TOC, build_manifest, build_spine
from epubsmith.epub.metadata import BOOK_ID, MetadataDeclaration, render_metadata
from epubsmith.models import Chapter, ImageResource, Metadata, StylesheetResource

OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

METADATA_NSMAP = {
    "dc": DC_NS,
    "dcterms": "http://purl.org/dc/terms/",
    "schema": "http://schema.org/",
    "a11y": "http://www.idpf.org/epub/vocab/package/a11y/#",
}


def _opf(tag: str) -> str:
    return f"{{{OPF_NS}}}{tag}"


def _qualify(tag: str) -> str:
    prefix, _, local = tag.rpartition(":")
    if prefix == "dc":
        return f"{{{DC_NS}}}{local}"
    return _opf(local)


def _append_declaration(parent: etree._Element, decl: MetadataDeclaration) -> None:
    el = etree.SubElement(parent, _qualify(decl.tag))
    for name, value in decl.attrs.items():
        el.set(name, value)
    if decl.text is not None:
        el.text = decl.text


def assemble_package(
    metadata: Metadata,
    chapters: Sequence[Chapter],
    images: Sequence[ImageResource] = (),
    stylesheets: Sequence[StylesheetResource] = (),
    fmt: Optional[FormatConfig] = None,
    modified: Optional[datetime] = None,
) -> bytes:
    """
    Serializes content.opf: <metadata>, <manifest> and <spine>, in that order.
    """
    fmt = fmt or FormatConfig()

    package = etree.Element(_opf("package"), nsmap={None: OPF_NS})
    package.set("version", fmt.version)
    package.set("unique-identifier", BOOK_ID)
    package.set(XML_LANG, metadata.language)

    metadata_el = etree.SubElement(package, _opf("metadata"), nsmap=METADATA_NSMAP)
    for decl in render_metadata(metadata, modified):
        _append_declaration(metadata_el, decl)

    manifest_el = etree.SubElement(package, _opf("manifest"))
    for entry in build_manifest(metadata, chapters, images, stylesheets, nav_href=fmt.nav_file):
        item = etree.SubElement(manifest_el, _opf("item"))
        item.set("id", entry.id)
        item.set("href", entry.href)
        item.set("media-type", entry.media_type)
        if entry.properties:
            item.set("properties", entry.properties)

    spine_el = etree.SubElement(package, _opf("spine"))
    spine_el.set("toc", SPINE_TOC)
    for ref in build_spine(chapters):
        etree.SubElement(spine_el, _opf("itemref")).set("idref", ref.idref)

    return etree.tostring(package, xml_declaration=True, encoding="UTF-8", pretty_print=True)
