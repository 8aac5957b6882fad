# recoder/charset.py

from __future__ import annotations
from typing import Callable, Optional

import chardet

from .bom import has_utf8_bom

# A sniffer maps raw file content to a best-guess charset label.
Sniffer = Callable[[bytes], Optional[str]]

UTF8 = "utf-8"

# --- sniffers -------------------------------------------------------------------


def _is_utf16le_bom(head: bytes) -> bool:
    return head.startswith(b"\xFF\xFE")


def _is_utf16be_bom(head: bytes) -> bool:
    return head.startswith(b"\xFE\xFF")


def _is_strict_utf8(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def _guess(data: bytes) -> str | None:
    """Ask chardet for a label, normalized to lower case."""
    enc = chardet.detect(data).get("encoding")
    return enc.lower() if enc else None


# --- public API -----------------------------------------------------------------


def sniff_charset(data: bytes) -> str | None:
    """Guess the charset of `data` from its content.

    Only BOM-less, NUL-free, strictly valid UTF-8 (plain ASCII included)
    is labelled "utf-8". A UTF-8 BOM yields "utf-8-sig" so the caller can
    tell the two apart.
    """
    if has_utf8_bom(data):
        return "utf-8-sig"
    if _is_utf16le_bom(data):
        return "utf-16le"
    if _is_utf16be_bom(data):
        return "utf-16be"

    if b"\x00" in data:
        guess = _guess(data)
        return guess if guess and guess != UTF8 else "binary"

    if _is_strict_utf8(data):
        return UTF8

    guess = _guess(data)
    return guess if guess != UTF8 else None
