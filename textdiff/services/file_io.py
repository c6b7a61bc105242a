"""
File I/O service for reading diff inputs and writing exports.

Text is decoded without newline translation so that ``\\r\\n`` endings
reach the tokenizer unchanged.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import chardet


@dataclass
class FileContent:
    """Decoded text plus how it was decoded."""
    content: str
    encoding: str
    bom: bool
    size: int


@dataclass
class ReadResult:
    """Result of a file read operation."""
    success: bool
    content: Optional[FileContent] = None
    error: Optional[str] = None
    is_binary: bool = False


@dataclass
class WriteResult:
    """Result of a file write operation."""
    success: bool
    bytes_written: int = 0
    error: Optional[str] = None


class FileIOService:
    """Reads text inputs and writes exports without raising for I/O failures."""

    # Leading magic bytes of formats that are never diffable text
    BINARY_SIGNATURES = (
        b'\x89PNG',
        b'\xff\xd8\xff',
        b'GIF8',
        b'PK\x03\x04',
        b'\x1f\x8b',
        b'%PDF',
        b'\x7fELF',
    )

    BOMS = (
        (b'\xef\xbb\xbf', 'utf-8-sig'),
        (b'\xff\xfe', 'utf-16'),
        (b'\xfe\xff', 'utf-16'),
    )

    # Control bytes other than \t \n \v \f \r
    CONTROL_BYTES = frozenset(range(9)) | frozenset(range(14, 32))

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        fallback_encoding: str = 'latin-1',
        binary_check_size: int = 8192,
        min_confidence: float = 0.7
    ):
        self.default_encoding = default_encoding
        self.fallback_encoding = fallback_encoding
        self.binary_check_size = binary_check_size
        self.min_confidence = min_confidence

    def read_file(
        self,
        path: Path | str,
        encoding: Optional[str] = None,
        max_text_size: int = 50 * 1024 * 1024
    ) -> ReadResult:
        """
        Read a text file.

        Args:
            path: Path to the file
            encoding: Force specific encoding (auto-detect if None)
            max_text_size: Largest file, in bytes, accepted as text

        Returns:
            ReadResult with content or error information
        """
        path = Path(path)

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")
        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            size = path.stat().st_size
            if size > max_text_size:
                limit_mb = max_text_size / (1024 * 1024)
                return ReadResult(
                    success=False,
                    error=f"File too large for text comparison: {path} "
                          f"({size / (1024 * 1024):.2f} MB, limit {limit_mb:.2f} MB)"
                )
            raw = path.read_bytes()
        except PermissionError:
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            logging.error(f"FileIOService - Failed to read {path}: {e}")
            return ReadResult(success=False, error=f"OS error: {e}")

        return self.decode(raw, encoding, source=str(path))

    def decode(
        self,
        raw: bytes,
        encoding: Optional[str] = None,
        source: str = "<bytes>"
    ) -> ReadResult:
        """
        Decode raw bytes as text.

        A byte order mark wins over ``encoding``. Without one, binary data
        is rejected and the encoding is guessed with chardet when not given.
        Bytes that do not decode fall back to ``fallback_encoding`` with
        replacement characters.
        """
        bom_encoding = self._bom_encoding(raw)

        if bom_encoding is None and self._is_binary(raw[:self.binary_check_size]):
            return ReadResult(success=False, is_binary=True,
                              error=f"File appears to be binary: {source}")

        chosen = bom_encoding or encoding or self._detect_encoding(raw)
        try:
            text = raw.decode(chosen)
        except (UnicodeDecodeError, LookupError):
            logging.debug(f"FileIOService - {source} does not decode as {chosen}, "
                          f"using {self.fallback_encoding}")
            chosen = self.fallback_encoding
            text = raw.decode(chosen, errors='replace')

        return ReadResult(
            success=True,
            content=FileContent(content=text, encoding=chosen,
                                bom=bom_encoding is not None, size=len(raw))
        )

    def write_file(
        self,
        path: Path | str,
        content: str,
        encoding: str = 'utf-8',
        atomic: bool = True
    ) -> WriteResult:
        """
        Write text to ``path``, creating parent directories.

        With ``atomic`` the data goes to a temporary file in the same
        directory which then replaces the target.
        """
        path = Path(path)

        try:
            data = content.encode(encoding)
            path.parent.mkdir(parents=True, exist_ok=True)

            if not atomic:
                path.write_bytes(data)
                return WriteResult(success=True, bytes_written=len(data))

            fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, 'wb') as handle:
                    handle.write(data)
                os.replace(temp_name, path)
            except OSError:
                Path(temp_name).unlink(missing_ok=True)
                raise

            return WriteResult(success=True, bytes_written=len(data))

        except PermissionError:
            return WriteResult(success=False, error=f"Permission denied: {path}")
        except (OSError, UnicodeEncodeError) as e:
            logging.error(f"FileIOService - Failed to write {path}: {e}")
            return WriteResult(success=False, error=f"Write error: {e}")

    def _bom_encoding(self, raw: bytes) -> Optional[str]:
        for marker, name in self.BOMS:
            if raw.startswith(marker):
                return name
        return None

    def _is_binary(self, head: bytes) -> bool:
        """Guess from the first bytes whether data is binary."""
        if not head:
            return False
        if b'\x00' in head or head.startswith(self.BINARY_SIGNATURES):
            return True

        control = sum(1 for byte in head if byte in self.CONTROL_BYTES)
        return control / len(head) > 0.3

    def _detect_encoding(self, raw: bytes) -> str:
        if not raw:
            return self.default_encoding

        guess = chardet.detect(raw)
        name = guess.get('encoding')
        if not name or (guess.get('confidence') or 0) <= self.min_confidence:
            return self.default_encoding

        # chardet reports plain 7-bit input as ascii
        name = name.lower()
        return self.default_encoding if name == 'ascii' else name
