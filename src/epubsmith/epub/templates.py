"""Fixed documents written into every package. Nothing here depends on the book."""

from __future__ import annotations

from functools import lru_cache

PACKAGE_MEDIA_TYPE = "application/oebps-package+xml"

_CONTAINER_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
    <rootfiles>
        <rootfile full-path="{full_path}" media-type="{media_type}"/>
    </rootfiles>
</container>
"""


@lru_cache(maxsize=None)
def container_xml(package_path: str = "OEBPS/content.opf") -> str:
    return _CONTAINER_TEMPLATE.format(full_path=package_path, media_type=PACKAGE_MEDIA_TYPE)


DEFAULT_STYLESHEET = """body {
    font-family: Georgia, serif;
    line-height: 1.6;
    margin: 1em;
    color: #333;
}

h1, h2, h3, h4, h5, h6 {
    font-family: "Helvetica Neue", Arial, sans-serif;
    color: #222;
    margin-top: 1.5em;
    margin-bottom: 0.5em;
}

h1 {
    font-size: 2em;
    border-bottom: 2px solid #333;
    padding-bottom: 0.3em;
}

h2 {
    font-size: 1.5em;
}

p {
    margin-bottom: 1em;
    text-align: justify;
}

blockquote {
    margin: 1em 2em;
    padding: 0.5em 1em;
    border-left: 3px solid #ccc;
    font-style: italic;
}

code {
    font-family: "Courier New", monospace;
    background-color: #f5f5f5;
    padding: 0.2em;
    border-radius: 3px;
}

pre {
    background-color: #f5f5f5;
    padding: 1em;
    border-radius: 5px;
    overflow-x: auto;
}

img {
    max-width: 100%;
    height: auto;
}
"""
