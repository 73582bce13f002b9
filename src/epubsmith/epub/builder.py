import logging
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from epubsmith.config import FormatConfig
from epubsmith.epub.manifest import DEFAULT_STYLESHEET_HREF, chapter_href
from epubsmith.epub.navigation import DEFAULT_NAV_TITLE, build_navigation
from epubsmith.epub.package import assemble_package
from epubsmith.epub.resources import archive_path, locate_cover, locate_image, locate_stylesheet
from epubsmith.epub.templates import DEFAULT_STYLESHEET, container_xml
from epubsmith.models import Chapter, ImageResource, Metadata, StylesheetResource
from epubsmith.utils.errors import ArchiveCreateFailed, GenerationFailed
from epubsmith.utils.io import discard_partial_file, read_source_bytes

logger = logging.getLogger("epubsmith.epub.builder")


class EPUBBuilder:
    """
    Writes a complete EPUB 3 container from in-memory book data.

    generate() is all-or-nothing: if any step after the archive is opened
    fails, the partially written file is removed and GenerationFailed is raised
    with the original exception as its cause.
    """
    def __init__(
        self,
        fmt: Optional[FormatConfig] = None,
        nav_title: str = DEFAULT_NAV_TITLE,
        compress: bool = True,
    ):
        self.fmt = fmt or FormatConfig()
        self.nav_title = nav_title
        self.compression = zipfile.ZIP_DEFLATED if compress else zipfile.ZIP_STORED

    def _path(self, href: str) -> str:
        return archive_path(href, self.fmt.content_dir)

    def generate(
        self,
        destination: Union[str, Path],
        metadata: Metadata,
        chapters: Sequence[Chapter],
        images: Sequence[ImageResource] = (),
        stylesheets: Sequence[StylesheetResource] = (),
        modified: Optional[datetime] = None,
    ) -> str:
        """Builds the EPUB at `destination` and returns its path."""
        destination = Path(destination)
        chapters = list(chapters)
        images = list(images)
        stylesheets = list(stylesheets)

        try:
            zf = zipfile.ZipFile(destination, "w", compression=self.compression)
        except OSError as e:
            raise ArchiveCreateFailed(f"Could not create archive: {destination} ({e})", e) from e

        try:
            with zf:
                self._write_mimetype(zf)
                zf.writestr(self.fmt.container_path, container_xml(self.fmt.package_path))

                logger.debug("Writing package document")
                package = assemble_package(metadata, chapters, images, stylesheets, self.fmt, modified)
                zf.writestr(self.fmt.package_path, package)

                logger.debug("Writing navigation document")
                nav = build_navigation(metadata, chapters, self.nav_title)
                zf.writestr(self._path(self.fmt.nav_file), nav)

                for chapter in chapters:
                    zf.writestr(self._path(chapter_href(chapter)), chapter.render(metadata.language))
                logger.debug(f"Wrote {len(chapters)} chapters")

                zf.writestr(self._path(DEFAULT_STYLESHEET_HREF), DEFAULT_STYLESHEET)

                for image in images:
                    self._copy_resource(zf, image.path, locate_image(image.path).href)
                for stylesheet in stylesheets:
                    self._copy_resource(zf, stylesheet.path, locate_stylesheet(stylesheet.path).href)

                if metadata.has_cover:
                    self._copy_resource(zf, metadata.cover, locate_cover(metadata.cover).href)
        except Exception as e:
            try:
                discard_partial_file(destination)
            except OSError as cleanup_error:
                logger.error(f"Could not remove partial archive {destination}: {cleanup_error}")
            raise GenerationFailed(f"Error generating EPUB {destination}: {e}", e) from e

        logger.info(f"EPUB file saved to: {destination}")
        return str(destination)

    def _write_mimetype(self, zf: zipfile.ZipFile) -> None:
        # Must be the first member and stored uncompressed
        zf.writestr("mimetype", self.fmt.mimetype, compress_type=zipfile.ZIP_STORED)

    def _copy_resource(self, zf: zipfile.ZipFile, source: str, href: str) -> None:
        data = read_source_bytes(source)
        zf.writestr(self._path(href), data)
        logger.debug(f"Copied {source} -> {href}")
