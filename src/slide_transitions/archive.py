"""In-memory access to the entries of a ZIP container (a .pptx is one).

Bytes in, bytes out: nothing in here touches the disk or the network. The
`Package` keeps every entry in its original order alongside the metadata we
need to write it back out unchanged, so the only difference between input
and output is the entries we explicitly overwrite (and the compressed layout).
"""

from __future__ import annotations

import codecs
import io
import logging
import lzma
import zipfile
import zlib
from dataclasses import dataclass, field
from enum import Enum

from slide_transitions.errors import (
    CorruptArchiveError,
    EntryNotFoundError,
    SerializationError,
)
from slide_transitions.internals.constants import DEFAULT_COMPRESSION_LEVEL

log = logging.getLogger("slide_transitions")

# Everything zipfile (and the codecs underneath it) raises for damaged input
_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    EOFError,
    NotImplementedError,
    RuntimeError,  # encrypted entries
    OSError,
    ValueError,
)

# What zipfile and the compressors can raise while re-packing
_WRITE_ERRORS = (
    zipfile.LargeZipFile,
    zlib.error,
    lzma.LZMAError,
    ValueError,
    OSError,
    RuntimeError,
)


# region Compression
class Compression(Enum):
    """Compression schemes available when re-packing a package."""

    DEFLATED = "deflated"
    STORED = "stored"
    BZIP2 = "bzip2"
    LZMA = "lzma"

    @property
    def zip_constant(self) -> int:
        """The matching zipfile.ZIP_* constant."""
        return {
            Compression.DEFLATED: zipfile.ZIP_DEFLATED,
            Compression.STORED: zipfile.ZIP_STORED,
            Compression.BZIP2: zipfile.ZIP_BZIP2,
            Compression.LZMA: zipfile.ZIP_LZMA,
        }[self]


# Inclusive level bounds; schemes missing from here ignore the level.
_LEVEL_BOUNDS: dict[Compression, tuple[int, int]] = {
    Compression.DEFLATED: (0, 9),
    Compression.BZIP2: (1, 9),
}


@dataclass(frozen=True)
class SerializeOptions:
    """How to compress entries when re-packing. Defaults to DEFLATE level 6."""

    compression: Compression = Compression.DEFLATED
    level: int | None = DEFAULT_COMPRESSION_LEVEL

    def __post_init__(self) -> None:
        if not isinstance(self.compression, Compression):
            raise ValueError(
                f"compression must be a Compression enum, got {type(self.compression).__name__}"
            )
        if self.level is None:
            return
        bounds = _LEVEL_BOUNDS.get(self.compression)
        if bounds is None:
            return
        low, high = bounds
        if not low <= self.level <= high:
            raise ValueError(
                f"Compression level {self.level} is out of range for "
                f"{self.compression.value} ({low}-{high})"
            )


# endregion


# region Package
@dataclass
class _Entry:
    info: zipfile.ZipInfo
    data: bytes
    # Remembered on first text read so writes re-encode the same way
    encoding: str | None = None
    modified: bool = False


@dataclass
class Package:
    """An opened archive: entry path -> content, in the archive's own order.

    Build one with `load_package()`. Entries can be overwritten but never added
    or removed.
    """

    _entries: dict[str, _Entry] = field(default_factory=dict, repr=False)
    comment: bytes = b""

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        """Entry paths in archive order."""
        return list(self._entries)

    def list_entries(self) -> set[str]:
        """All entry paths."""
        return set(self._entries)

    def has_entry(self, path: str) -> bool:
        """True if the package holds an entry at `path`."""
        return path in self._entries

    def modified_entries(self) -> list[str]:
        """Paths overwritten since load, in archive order."""
        return [name for name, entry in self._entries.items() if entry.modified]

    def read_bytes(self, path: str) -> bytes:
        return self._get(path).data

    def read_text(self, path: str) -> str:
        """Decode an entry as text.

        UTF-16 is picked up from its byte order mark, everything else is read as
        UTF-8. A UTF-8 BOM stays in the returned string so writing the text back
        produces the same bytes.
        """
        entry = self._get(path)
        if entry.encoding is None:
            entry.encoding = _detect_encoding(entry.data)
        return entry.data.decode(entry.encoding)

    def text_encoding(self, path: str) -> str:
        """The encoding `read_text` and `write_text` use for this entry."""
        entry = self._get(path)
        return entry.encoding or _detect_encoding(entry.data)

    def write_text(self, path: str, text: str) -> None:
        """Overwrite an existing entry with new text."""
        entry = self._get(path)
        encoding = self.text_encoding(path)
        entry.data = text.encode(encoding)
        entry.encoding = encoding
        entry.modified = True

    def _get(self, path: str) -> _Entry:
        if not self.has_entry(path):
            raise EntryNotFoundError(path)
        return self._entries[path]


def _detect_encoding(raw: bytes) -> str:
    # The BOM is kept as a character, not consumed, so round trips are exact.
    if raw.startswith(codecs.BOM_UTF16_LE):
        return "utf-16-le"
    if raw.startswith(codecs.BOM_UTF16_BE):
        return "utf-16-be"
    return "utf-8"


# endregion


# region load_package
def load_package(data: bytes) -> Package:
    """Read a ZIP blob fully into memory.

    Raises:
        CorruptArchiveError: If the blob isn't a ZIP container, an entry can't be
            decompressed, or two entries share a name.
    """
    try:
        zf = zipfile.ZipFile(io.BytesIO(data))
    except _READ_ERRORS as e:
        log.error(f"Input is not a readable ZIP container: {e}")
        raise CorruptArchiveError(f"Not a valid ZIP container: {e}") from e

    entries: dict[str, _Entry] = {}
    with zf:
        for info in zf.infolist():
            if info.filename in entries:
                log.error(f"Duplicate entry name in archive: {info.filename}")
                raise CorruptArchiveError(
                    f"Archive contains more than one entry named '{info.filename}'"
                )
            try:
                raw = zf.read(info)
            except _READ_ERRORS as e:
                log.error(f"Could not read entry {info.filename}: {e}")
                raise CorruptArchiveError(
                    f"Entry '{info.filename}' could not be read: {e}"
                ) from e
            entries[info.filename] = _Entry(info=info, data=raw)
        comment = zf.comment

    log.debug(f"Loaded package with {len(entries)} entries.")
    return Package(_entries=entries, comment=comment)


# endregion


# region serialize_package
def serialize_package(
    package: Package, options: SerializeOptions | None = None
) -> bytes:
    """Write every entry back into a new ZIP blob, in the original order.

    Names, timestamps, permission bits and comments are carried over; the
    compression comes from `options`.

    Raises:
        SerializationError: If zipfile fails to write any entry.
    """
    options = options or SerializeOptions()
    buffer = io.BytesIO()
    compress_type = options.compression.zip_constant

    try:
        with zipfile.ZipFile(
            buffer, "w", compression=compress_type, compresslevel=options.level
        ) as zf:
            zf.comment = package.comment
            for entry in package._entries.values():
                zf.writestr(
                    _clone_info(entry.info),
                    entry.data,
                    compress_type=compress_type,
                    compresslevel=options.level,
                )
    except _WRITE_ERRORS as e:
        log.error(f"Failed to re-pack archive: {e}")
        raise SerializationError(f"Could not re-pack archive: {e}") from e

    output = buffer.getvalue()
    log.debug(
        f"Serialized {len(package)} entries ({options.compression.value}, level {options.level}) "
        f"into {len(output)} bytes."
    )
    return output


def _clone_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    """Fresh ZipInfo with the metadata worth keeping. Sizes, offsets and extra
    fields are recomputed by zipfile on write."""
    clone = zipfile.ZipInfo(info.filename, date_time=info.date_time)
    clone.external_attr = info.external_attr
    clone.create_system = info.create_system
    clone.comment = info.comment
    return clone


# endregion
