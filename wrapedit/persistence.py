"""Reading and writing documents.

Failures are reported through result objects rather than exceptions; the
buffer is never touched by a failed load or save.
"""

import errno
import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    ERROR = "error"


class SaveStatus(Enum):
    SAVED = "saved"
    NOTHING_TO_WRITE = "nothing_to_write"
    ERROR = "error"


@dataclass
class LoadResult:
    status: LoadStatus
    text: str = ""
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED


@dataclass
class SaveResult:
    status: SaveStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status is SaveStatus.SAVED


def load_document(filename: str) -> LoadResult:
    """Read a document as text.

    Args:
        filename: Path to file to load

    Returns:
        LOADED with the text, NOT_FOUND for a missing file (a new
        document), or ERROR with a message
    """
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        logger.info("%s does not exist, starting an empty document", filename)
        return LoadResult(LoadStatus.NOT_FOUND)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load %s: %s", filename, e)
        return LoadResult(
            LoadStatus.ERROR,
            message=EditorConstants.LOAD_ERROR_MESSAGE.format(filename, e),
        )
    logger.info("Loaded %d characters from %s", len(text), filename)
    return LoadResult(LoadStatus.LOADED, text=text)


def save_document(filename: str, text: str) -> SaveResult:
    """Save text to a file atomically.

    The content goes to a temporary file in the same directory first and
    is then renamed over the target, so a failed save leaves the previous
    file intact.

    Args:
        filename: Path to save file to
        text: Document content, hard newlines as ``\\n``

    Returns:
        SAVED, NOTHING_TO_WRITE for an empty document, or ERROR
    """
    if not text:
        return SaveResult(SaveStatus.NOTHING_TO_WRITE, EditorConstants.NOTHING_TO_WRITE_MESSAGE)

    dir_name = os.path.dirname(filename) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=dir_name,
            prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
            suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
            delete=False,
        ) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())  # Ensure data is written to disk

        # Atomic rename
        os.replace(temp_filename, filename)
    except OSError as e:
        if isinstance(e, PermissionError):
            reason = "Permission denied"
        elif e.errno == errno.ENOSPC:
            reason = "No space left on device"
        else:
            reason = e.strerror or str(e)
        logger.warning("Could not save %s: %s", filename, e)
        _remove_quietly(temp_filename)
        return SaveResult(SaveStatus.ERROR, EditorConstants.SAVE_ERROR_MESSAGE.format(filename, reason))

    logger.info("Saved %d characters to %s", len(text), filename)
    return SaveResult(SaveStatus.SAVED, EditorConstants.SAVED_MESSAGE.format(filename))


def _remove_quietly(filename: Optional[str]) -> None:
    """Delete a leftover temporary file, ignoring a file already gone."""
    if filename is None:
        return
    try:
        os.remove(filename)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove temporary file %s: %s", filename, e)
