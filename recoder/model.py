# recoder/model.py

from __future__ import annotations
import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass
class FileTask:
    """One file discovered by the walker."""
    path: Path
    size: int         # size in bytes at discovery time
    mode: int         # POSIX permission bits only
    _content: bytes | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_path(cls, path: Path) -> FileTask:
        st = os.stat(path)
        return cls(path=Path(path), size=st.st_size, mode=stat.S_IMODE(st.st_mode))

    def read_bytes(self) -> bytes:
        """Read the file content once and cache it for later stages."""
        if self._content is None:
            self._content = self.path.read_bytes()
        return self._content


@dataclass(frozen=True)
class EncodingCandidate:
    """A named source encoding tried by the engine."""
    name: str         # label shown to the user (e.g. "CP1251")
    codec: str        # Python codec name
    wide: bool = False   # 16-bit code units (UTF-16 family)
    lossy: bool = False  # undefined bytes become U+FFFD instead of failing


class OutcomeKind(Enum):
    SKIPPED_EMPTY = "[SKIPPED - EMPTY]"
    SKIPPED_TOO_LARGE = "[SKIPPED - TOO LARGE]"
    SKIPPED_ALREADY_UTF8 = "[SKIPPED - ALREADY UTF-8]"
    CONVERTED = "[OK]"
    FAILED = "[FAILED]"

    @property
    def tag(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConversionOutcome:
    """Result of processing a single FileTask."""
    kind: OutcomeKind
    encoding: str | None = None  # candidate name when converted
    detail: str = ""             # last rejection reason when failed

    @classmethod
    def converted(cls, encoding: str) -> ConversionOutcome:
        return cls(OutcomeKind.CONVERTED, encoding=encoding)

    @classmethod
    def failed(cls, detail: str = "") -> ConversionOutcome:
        return cls(OutcomeKind.FAILED, detail=detail)

    @property
    def tag(self) -> str:
        return self.kind.tag


@dataclass
class ReportRow:
    """Represents a row in the conversion report CSV."""
    path: str
    size_bytes: int
    mode: str         # octal permission bits, e.g. "644"
    outcome: str      # bracketed status tag
    encoding: str
    detail: str
