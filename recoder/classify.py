# recoder/classify.py

from __future__ import annotations
import logging

from .charset import UTF8, Sniffer, sniff_charset
from .model import ConversionOutcome, FileTask, OutcomeKind

logger = logging.getLogger(__name__)

MAX_SIZE = 10 * 1024 * 1024  # 10 MiB


def classify(task: FileTask, sniffer: Sniffer = sniff_charset) -> ConversionOutcome | None:
    """Decide whether a file is skipped before any encoding trial.

    Checks run in order (empty, too large, already UTF-8) and the first
    match wins. Content is only read for the UTF-8 check. A UTF-8 file
    with a BOM is not skipped here; the engine normalizes it.

    Args:
        task (FileTask): File under consideration.
        sniffer (Sniffer): Maps content to a charset label.

    Returns:
        ConversionOutcome | None: The skip outcome, or None to convert.
    """
    if task.size == 0:
        return ConversionOutcome(OutcomeKind.SKIPPED_EMPTY)
    if task.size > MAX_SIZE:
        return ConversionOutcome(OutcomeKind.SKIPPED_TOO_LARGE)

    charset = sniffer(task.read_bytes())
    logger.debug("%s: detected charset %s", task.path, charset)
    if charset == UTF8:
        return ConversionOutcome(OutcomeKind.SKIPPED_ALREADY_UTF8)
    return None
