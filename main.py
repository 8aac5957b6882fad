# main.py

"""
Orchestrator: read params (JSON + CLI), walk files, skip or convert each one
to UTF-8 in place, print a status line per file, optionally write a CSV report.
"""
from __future__ import annotations
import argparse
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from recoder.classify import classify
from recoder.engine import convert_file
from recoder.model import ConversionOutcome, FileTask, OutcomeKind, ReportRow
from recoder.report import format_status, hexdump, make_row, write_csv
from recoder.walk import iter_files

logger = logging.getLogger("recoder")

DEFAULT_INPUT = "./input"

_stop_signal: Optional[int] = None


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        description="Recursively convert legacy/Windows-encoded text files to UTF-8 in place."
    )
    p.add_argument("input", nargs="?", help=f"Directory to process (default: {DEFAULT_INPUT}).")
    p.add_argument("debug", nargs="?", help="Pass 'true' to print debug diagnostics to stderr.")
    p.add_argument("--report", type=str, help="Optional path to a CSV report of every file.")
    p.add_argument("--config", type=str, help="Optional JSON config (arguments override).")
    return p.parse_args(argv)


def _get_effective_config(args: argparse.Namespace) -> Tuple[Dict[str, Any], Path]:
    """Load CLI + JSON configuration, giving precedence to CLI arguments."""
    script_dir = Path(__file__).parent
    default_config_path = script_dir / "params.json"
    config_path = Path(args.config) if args.config else default_config_path
    cfg = load_config(config_path if config_path.exists() else None)
    return cfg, config_path


def _resolve_settings(args: argparse.Namespace, cfg: Dict[str, Any]) -> Tuple[Path, bool, Path | None]:
    """Resolve the input directory, debug flag and report path."""
    input_path = Path(args.input or cfg.get("input") or DEFAULT_INPUT)
    debug_value = args.debug if args.debug is not None else cfg.get("debug", False)
    debug = str(debug_value).lower() == "true"
    report = args.report or cfg.get("report")
    return input_path, debug, Path(report) if report else None


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def _request_stop(signum, frame) -> None:
    """Finish the current file, then stop. A second signal aborts at once."""
    global _stop_signal
    if _stop_signal is not None:
        raise KeyboardInterrupt
    _stop_signal = signum


def _install_signal_handlers() -> Dict[int, Any]:
    """Install the stop handlers and return the previous ones."""
    global _stop_signal
    _stop_signal = None
    previous = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        previous[signum] = signal.signal(signum, _request_stop)
    return previous


def _restore_signal_handlers(previous: Dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def process_file(fp: Path) -> Tuple[ConversionOutcome, ReportRow]:
    """Classify and, unless skipped, convert a single file.

    Errors never escape: a file that cannot be stat-ed or read is Failed.
    """
    try:
        task = FileTask.from_path(fp)
    except OSError as exc:
        outcome = ConversionOutcome.failed(f"{type(exc).__name__}: {exc}")
        return outcome, ReportRow(str(fp), 0, "", outcome.tag, "", outcome.detail)

    try:
        outcome = classify(task)
        if outcome is None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s: first bytes\n%s", fp, hexdump(task.read_bytes()))
            outcome = convert_file(task)
    except OSError as exc:
        outcome = ConversionOutcome.failed(f"{type(exc).__name__}: {exc}")

    if outcome.kind is OutcomeKind.FAILED and logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s: conversion failed: %s", fp, outcome.detail)
        try:
            head = task.path.read_bytes()[:80]
        except OSError as exc:
            logger.debug("%s: cannot dump file: %s", fp, exc)
        else:
            logger.debug("%s: first bytes of file\n%s", fp, hexdump(head))
    return outcome, make_row(task, outcome)


def main(argv: Sequence[str] | None = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    cfg, _config_path = _get_effective_config(args)
    input_path, debug, report_path = _resolve_settings(args, cfg)
    _configure_logging(debug)

    if not input_path.is_dir():
        print(f"[ERR] Directory '{input_path}' does not exist.", file=sys.stderr)
        return 1

    rows: List[ReportRow] = []
    counts: Dict[OutcomeKind, int] = {kind: 0 for kind in OutcomeKind}

    previous_handlers = _install_signal_handlers()
    try:
        for fp in iter_files(input_path):
            if _stop_signal is not None:
                break
            outcome, row = process_file(fp)
            counts[outcome.kind] += 1
            rows.append(row)
            print(format_status(fp, outcome), flush=True)
    finally:
        _restore_signal_handlers(previous_handlers)

    if report_path:
        write_csv(report_path, rows)

    if _stop_signal is not None:
        print(f"[WARN] Interrupted by signal {_stop_signal}; stopped before the next file.", file=sys.stderr)
        return 128 + _stop_signal

    logger.debug("Summary: %s", ", ".join(f"{k.tag} {n}" for k, n in counts.items()))
    print("\nConversion complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
