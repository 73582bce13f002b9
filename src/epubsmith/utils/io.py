import logging
from pathlib import Path
from typing import Union

from epubsmith.utils.errors import SourceResourceUnreadable

logger = logging.getLogger("epubsmith.io")


def read_source_bytes(path: Union[str, Path]) -> bytes:
    """
    Reads a resource file that is about to be copied into an archive.
    Any OS level failure is reported as SourceResourceUnreadable.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise SourceResourceUnreadable(str(path), e.strerror or str(e)) from e


def discard_partial_file(path: Union[str, Path]) -> bool:
    """
    Removes a partially written output file. Returns True if a file was removed.
    """
    target = Path(path)
    if not target.exists():
        return False
    target.unlink()
    logger.warning(f"Removed partially written file: {target}")
    return True
