"""Reading .properties content from files and streams."""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from ..config import DEFAULT_CHARSET
from ..entries import Entry, EntryParser
from ..errors import PropertiesIOError

logger = logging.getLogger(__name__)

Source = Union[str, Path, BinaryIO]


def read_text(source: Source, charset: str = DEFAULT_CHARSET) -> str:
    """Read and decode the whole content of a .properties source.

    Line endings are kept exactly as they are in the source.

    Args:
        source: Path to a file or a binary stream. A stream is left open.
        charset: Encoding of the content.

    Returns:
        The decoded text.

    Raises:
        PropertiesIOError: If the source cannot be read or decoded.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        logger.debug("Reading %s (%s)", path, charset)
        try:
            with open(path, "r", encoding=charset, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise PropertiesIOError(f"Error reading {path}: {e}", path) from e

    try:
        wrapper = io.TextIOWrapper(source, encoding=charset, newline="")
    except LookupError as e:
        raise PropertiesIOError(f"Unknown charset {charset!r}") from e
    try:
        return wrapper.read()
    except (OSError, UnicodeDecodeError) as e:
        raise PropertiesIOError(f"Error reading properties stream: {e}") from e
    finally:
        wrapper.detach()


def read_entries(source: Source, charset: str = DEFAULT_CHARSET) -> list[Entry]:
    """Read a .properties source and parse it into entries.

    Args:
        source: Path to a file or a binary stream.
        charset: Encoding of the content.

    Returns:
        List of entries in file order.
    """
    return EntryParser().parse_text(read_text(source, charset))
