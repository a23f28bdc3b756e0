"""Batch driver over a reducibility summary table."""

from __future__ import annotations
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .checker import CheckReport, check_file
from .configuration import ConfigurationError

logger = logging.getLogger(__name__)

# Summary status of configurations that need a contraction check.
CONTRACTION_STATUS = "C"


@dataclass(frozen=True, slots=True)
class SummaryRow:
    """One line of the summary table: file, status, cut size, edge ids."""
    file: str
    status: str
    csize: str
    edge_ids: tuple[int, ...]

    @property
    def stem(self) -> str:
        return Path(self.file).stem


def parse_edge_ids(text: str) -> tuple[int, ...]:
    """Parse a '"e1+e2+..."' contraction field."""
    text = text.strip().strip('"')
    if not text:
        return ()
    try:
        return tuple(int(tok) for tok in text.split("+"))
    except ValueError as exc:
        raise ConfigurationError(f"invalid contraction field {text!r}") from exc


def read_summary(path: Path | str) -> list[SummaryRow]:
    """
    Read a summary CSV.

    Rows are `file,status,csize,"e1+e2+..."`, optionally under a header
    line starting with "file". The edge-id field is parsed only for rows
    with status C; other rows keep an empty tuple.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If a C row is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Summary file not found: {path}")

    rows = []
    with open(path, newline="") as f:
        for lineno, record in enumerate(csv.reader(f), start=1):
            if not record or (lineno == 1 and record[0].strip() == "file"):
                continue
            if len(record) < 4:
                if len(record) >= 2 and record[1].strip() == CONTRACTION_STATUS:
                    raise ConfigurationError(f"{path}:{lineno}: expected 4 fields, got {len(record)}")
                continue
            file, status, csize, conts = (field.strip() for field in record[:4])
            edge_ids = parse_edge_ids(conts) if status == CONTRACTION_STATUS else ()
            rows.append(SummaryRow(file=file, status=status, csize=csize, edge_ids=edge_ids))
    return rows


def run_summary(
    confdir: Path | str,
    summary: Path | str,
    progress_callback: Callable[[int, int, CheckReport], None] | None = None
) -> list[CheckReport]:
    """
    Check every contraction row of a summary table.

    For each row with status C, checks `<confdir>/<stem>.conf` with the
    row's edge ids. Stops at the first failing configuration.

    Args:
        confdir: Directory holding the .conf files
        summary: Summary CSV path
        progress_callback: Called as (index, total, report) after each check

    Returns:
        Reports in table order
    """
    confdir = Path(confdir)
    rows = [row for row in read_summary(summary) if row.status == CONTRACTION_STATUS]
    logger.debug("%d configurations to check", len(rows))

    reports = []
    for i, row in enumerate(rows, start=1):
        report = check_file(confdir / f"{row.stem}.conf", row.edge_ids)
        reports.append(report)
        if progress_callback:
            progress_callback(i, len(rows), report)
    return reports
