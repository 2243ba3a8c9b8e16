"""Writing .properties entries to files and streams."""

import io
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import DEFAULT_CHARSET, UnicodeHandling, WriteOptions, is_unicode_charset
from ..entries import Entry, check_entry
from ..errors import PropertiesIOError
from ..escaping import escape_unicode, unescape_unicode_only

logger = logging.getLogger(__name__)

Target = Union[str, Path, BinaryIO]


class PropertiesWriter:
    """Writes entries to a file or binary stream in a given charset.

    Non-ASCII characters are written according to the unicode handling:

    - ESCAPE, or a charset that cannot represent all of unicode: every
      character above 0x7f is written as a ``\\uXXXX`` escape.
    - UNICODE and BY_CHARSET with a unicode charset: existing ``\\uXXXX``
      escapes of non-ASCII characters are written as real characters.
    - DO_NOTHING with a unicode charset: entries are written as they are.

    Line endings are never translated. Use as a context manager to make
    sure the output is closed.

    A path target is owned by the writer and closed by ``close()``, missing
    parent directories are created. A stream target is flushed and left
    open.
    """

    def __init__(
        self,
        target: Target,
        charset: str = DEFAULT_CHARSET,
        unicode_handling: UnicodeHandling = UnicodeHandling.DO_NOTHING
    ):
        """Initialize the writer and open the target.

        Args:
            target: Path of the file to write, or a binary stream.
            charset: Encoding of the output.
            unicode_handling: How to write non-ASCII characters.

        Raises:
            PropertiesIOError: If the charset is unknown or the target file
                cannot be opened.
        """
        self.charset = charset
        self.unicode_handling = unicode_handling
        self.path: Optional[Path] = None
        self._stream = None

        if isinstance(target, (str, Path)):
            self.path = Path(target)

        try:
            unicode_capable = is_unicode_charset(charset)
        except LookupError as e:
            raise PropertiesIOError(f"Unknown charset {charset!r}", self.path) from e
        self._escape_unicode = (
            unicode_handling == UnicodeHandling.ESCAPE or not unicode_capable
        )
        self._expand_unicode = unicode_capable and unicode_handling in (
            UnicodeHandling.UNICODE,
            UnicodeHandling.BY_CHARSET,
        )

        if self.path is not None:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._stream = open(self.path, "w", encoding=charset, newline="")
            except OSError as e:
                raise PropertiesIOError(f"Error opening {self.path}: {e}", self.path) from e
        else:
            self._stream = io.TextIOWrapper(target, encoding=charset, newline="")

    def __enter__(self) -> "PropertiesWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.flush()
        finally:
            self.close()

    def convert(self, text: str) -> str:
        """Apply the unicode handling to the text of an entry."""
        if self._escape_unicode:
            return escape_unicode(text)
        if self._expand_unicode:
            return unescape_unicode_only(text, min_codepoint=0x80)
        return text

    def write_entry(self, entry: Entry) -> None:
        """Write a single entry.

        Raises:
            TypeError: If the entry is of an unknown type.
            PropertiesIOError: If writing fails.
        """
        text = self.convert(check_entry(entry).to_text())
        if self._stream is None:
            raise PropertiesIOError("Writer is already closed", self.path)
        try:
            self._stream.write(text)
        except (OSError, UnicodeEncodeError) as e:
            raise PropertiesIOError(f"Error writing properties: {e}", self.path) from e

    def write_entries(self, entries: Iterable[Entry]) -> None:
        for entry in entries:
            self.write_entry(entry)

    def write_document(self, document) -> None:
        """Write all entries of a PropertiesDocument in order."""
        self.write_entries(document.entries)

    def flush(self) -> None:
        """Push all written text to the target.

        Raises:
            PropertiesIOError: If the writer is closed or the data cannot be
                written.
        """
        if self._stream is None:
            raise PropertiesIOError("Writer is already closed", self.path)
        try:
            self._stream.flush()
        except OSError as e:
            raise PropertiesIOError(f"Error writing properties: {e}", self.path) from e

    def close(self) -> None:
        """Release the output.

        Call ``flush()`` first: errors while closing are logged, not raised.
        Leaving a ``with`` block without an exception does both.
        """
        if self._stream is None:
            return

        stream, self._stream = self._stream, None
        try:
            if self.path is not None:
                stream.close()
            else:
                stream.flush()
                stream.detach()
        except (OSError, ValueError) as e:
            logger.warning("Error closing properties output: %s", e)


def write_entries(
    target: Target,
    entries: Iterable[Entry],
    options: Optional[WriteOptions] = None
) -> None:
    """Write entries to a file or stream, replacing any previous content.

    Args:
        target: Path of the file to write, or a binary stream.
        entries: Entries to write in order.
        options: Charset and unicode handling to use.
    """
    options = options or WriteOptions()
    with PropertiesWriter(target, options.charset, options.unicode_handling) as writer:
        writer.write_entries(entries)
    logger.debug("Wrote properties to %s", target)
