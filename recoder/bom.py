# recoder/bom.py

from __future__ import annotations

UTF8_BOM = b"\xEF\xBB\xBF"


def has_utf8_bom(data: bytes) -> bool:
    """Return True if `data` starts with the UTF-8 byte-order mark.

    Inputs shorter than the mark simply compare unequal.
    """
    return data[:3] == UTF8_BOM


def strip_utf8_bom(data: bytes) -> bytes:
    """Drop exactly one leading UTF-8 BOM, if present."""
    return data[3:] if has_utf8_bom(data) else data
