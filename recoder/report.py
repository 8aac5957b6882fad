# recoder/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .model import ConversionOutcome, FileTask, ReportRow


def format_status(path: Path | str, outcome: ConversionOutcome) -> str:
    """Return the one-line status printed for each file."""
    return f"Converting {str(path):<50} {outcome.tag}"


def hexdump(data: bytes, lines: int = 5, width: int = 16) -> str:
    """Render the head of `data` like `hexdump -C`, limited to `lines` rows."""
    out = []
    for offset in range(0, min(len(data), lines * width), width):
        chunk = data[offset:offset + width]
        hexes = " ".join(f"{b:02x}" for b in chunk)
        if len(chunk) > 8:
            hexes = hexes[:23] + " " + hexes[23:]
        text = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk)
        out.append(f"{offset:08x}  {hexes:<49} |{text}|")
    return "\n".join(out)


def make_row(task: FileTask, outcome: ConversionOutcome) -> ReportRow:
    return ReportRow(
        path=str(task.path),
        size_bytes=task.size,
        mode=f"{task.mode:o}",
        outcome=outcome.tag,
        encoding=outcome.encoding or "",
        detail=outcome.detail,
    )


def write_csv(out_path: Path, rows: Iterable[ReportRow]) -> None:
    """Write conversion results to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        rows (Iterable[ReportRow]): Sequence of per-file result rows.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["path", "size_bytes", "mode", "outcome", "encoding", "detail"])
        for r in rows:
            writer.writerow([
                r.path,
                r.size_bytes,
                r.mode,
                r.outcome,
                r.encoding,
                r.detail,
            ])
