# recoder/engine.py

"""
Encoding trial engine: try each candidate encoding in order and rewrite the
file as UTF-8 with the first one that decodes cleanly.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Sequence

from .bom import has_utf8_bom, strip_utf8_bom
from .model import ConversionOutcome, EncodingCandidate, FileTask
from .rewrite import safe_rewrite

logger = logging.getLogger(__name__)

Rewriter = Callable[[Path, bytes, int], Path]

# Order matters: strict multi-byte encodings first, then Cyrillic pages,
# then the Western pages. ISO-8859-1 maps every byte and must stay near
# the end.
CANDIDATES: tuple[EncodingCandidate, ...] = (
    EncodingCandidate("UTF-8", "utf-8"),
    EncodingCandidate("UTF-16LE", "utf-16-le", wide=True),
    EncodingCandidate("UTF-16BE", "utf-16-be", wide=True),
    EncodingCandidate("KOI8-R", "koi8-r", lossy=True),
    EncodingCandidate("KOI8-U", "koi8-u", lossy=True),
    EncodingCandidate("CP1251", "cp1251", lossy=True),
    EncodingCandidate("CP1252", "cp1252", lossy=True),
    EncodingCandidate("WINDOWS-1252", "windows-1252", lossy=True),
    EncodingCandidate("ISO-8859-1", "iso-8859-1", lossy=True),
    EncodingCandidate("ISO-8859-5", "iso-8859-5", lossy=True),
)

_OPPOSITE_BOM = {
    "utf-16-le": b"\xFE\xFF",
    "utf-16-be": b"\xFF\xFE",
}


class CandidateRejected(ValueError):
    """The byte stream is structurally invalid for a candidate encoding."""


def decode_candidate(data: bytes, cand: EncodingCandidate) -> str:
    """Decode `data` with one candidate.

    Lossy code pages replace undefined bytes with U+FFFD. Anything that
    breaks the encoding's structure raises.

    Raises:
        UnicodeDecodeError: Malformed, truncated or surrogate-broken input.
        CandidateRejected: Wrong-endian BOM for UTF-16, or NUL in the text.
    """
    if cand.wide:
        wrong_bom = _OPPOSITE_BOM.get(cand.codec)
        if wrong_bom and data.startswith(wrong_bom):
            raise CandidateRejected("byte-order mark of the opposite endianness")
        text = data.decode(cand.codec)
        if "\x00" in text:
            raise CandidateRejected("NUL character in text")
        return text[1:] if text.startswith("\ufeff") else text

    if b"\x00" in data:
        raise CandidateRejected("NUL byte in 8-bit text")
    return data.decode(cand.codec, errors="replace" if cand.lossy else "strict")


def transcode(data: bytes, cand: EncodingCandidate) -> bytes:
    """Decode with `cand` and re-encode as UTF-8."""
    return decode_candidate(data, cand).encode("utf-8")


def convert_file(
    task: FileTask,
    candidates: Sequence[EncodingCandidate] = CANDIDATES,
    rewriter: Rewriter = safe_rewrite,
) -> ConversionOutcome:
    """Try each candidate in order and rewrite the file with the first that works.

    A UTF-8 BOM is removed once from the working copy before the loop, so
    every candidate sees the stripped bytes. A candidate fails when its
    decoder rejects the stream or when the rewrite raises `OSError`.

    Args:
        task (FileTask): File to convert.
        candidates (Sequence[EncodingCandidate]): Encodings in priority order.
        rewriter (Rewriter): Writes the payload in place, keeping permissions.

    Returns:
        ConversionOutcome: Converted(name) for the first accepted candidate,
        otherwise Failed with the last rejection reason.
    """
    data = task.read_bytes()
    if has_utf8_bom(data):
        logger.debug("%s: UTF-8 BOM detected, removing", task.path)
        data = strip_utf8_bom(data)

    last_error = "no candidate encodings"
    for cand in candidates:
        logger.debug("%s: trying %s", task.path, cand.name)
        try:
            payload = transcode(data, cand)
        except (UnicodeDecodeError, CandidateRejected) as exc:
            last_error = f"{cand.name}: {exc}"
            logger.debug("%s: %s rejected (%s)", task.path, cand.name, exc)
            continue

        try:
            rewriter(task.path, payload, task.mode)
        except OSError as exc:
            last_error = f"{cand.name}: {type(exc).__name__}: {exc}"
            logger.debug("%s: rewrite as %s failed (%s)", task.path, cand.name, exc)
            continue

        return ConversionOutcome.converted(cand.name)

    return ConversionOutcome.failed(last_error)
