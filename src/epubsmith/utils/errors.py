from typing import Optional


class EpubsmithError(Exception):
    """Base exception for epubsmith."""


class ConfigError(EpubsmithError):
    """Configuration related errors."""


class BookDefinitionError(EpubsmithError):
    """Malformed or incomplete book definition file."""


class EPUBError(EpubsmithError):
    """EPUB package assembly related errors."""


class UnsupportedImageFormat(EPUBError):
    """An image or cover path has an extension with no known media type."""

    def __init__(self, path: str, extension: str):
        super().__init__(f"Unsupported image format '{extension or '(none)'}': {path}")
        self.path = path
        self.extension = extension


class SourceResourceUnreadable(EPUBError):
    """A resource source file could not be read while copying it into the archive."""

    def __init__(self, path: str, reason: str = ""):
        msg = f"Cannot read source resource: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.path = path


class DuplicateResourceError(EPUBError):
    """Two manifest entries would share the same id or href."""

    def __init__(self, kind: str, value: str):
        super().__init__(f"Duplicate manifest {kind}: {value}")
        self.kind = kind
        self.value = value


class GenerationFailed(EPUBError):
    """EPUB generation aborted; the partially written archive has been removed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ArchiveCreateFailed(GenerationFailed):
    """The destination archive could not be opened for writing."""


class UnsafeResourcePath(EPUBError):
    """A chapter filename would place its document outside the Text/ folder."""

    def __init__(self, filename: str):
        super().__init__(f"Chapter filename must be a plain relative name: {filename!r}")
        self.filename = filename
