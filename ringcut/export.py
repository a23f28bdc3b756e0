"""Export of check results to JSON and CSV."""

from __future__ import annotations
import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from .checker import CheckReport, Finding


def finding_to_dict(finding: Finding) -> dict[str, Any]:
    """Serializable form of a finding, including its report line."""
    return {
        "kind": finding.kind,
        "tag": finding.tag,
        "label": finding.label,
        "vertices": list(finding.vertices),
        "cut_size": finding.cut_size,
        "message": str(finding),
    }


def report_to_dict(report: CheckReport) -> dict[str, Any]:
    return {
        "source": report.source,
        "n": report.n,
        "r": report.r,
        "contraction": [list(e) for e in report.contraction],
        "erased": {str(c): list(vs) for c, vs in report.erased.items()},
        "dangerous": report.dangerous,
        "findings": [finding_to_dict(f) for f in report.findings],
    }


def export_findings_json(
    reports: Iterable[CheckReport],
    path: Path | str,
    metadata: dict[str, Any] | None = None
) -> Path:
    """
    Save check reports to a JSON file.

    Args:
        reports: Reports to save
        path: Output path
        metadata: Additional metadata to include

    Returns:
        Path where the reports were saved
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    reports = list(reports)
    data = {
        "metadata": {
            "configurations": len(reports),
            "dangerous": sum(1 for r in reports if r.dangerous),
            "saved_at": datetime.now().isoformat(),
            **(metadata or {})
        },
        "reports": [report_to_dict(r) for r in reports]
    }

    with open(path, "w") as f:
        json.dump(data, f, indent=2)

    return path


def export_findings_csv(reports: Iterable[CheckReport], path: Path | str) -> Path:
    """
    Export one row per finding to CSV.

    Configurations without findings get a single row with an empty kind so
    that every checked configuration appears in the table.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["source", "kind", "tag", "label", "cut_size", "vertices", "message"])
        for report in reports:
            if not report.findings:
                writer.writerow([report.source, "", "", "", "", "", ""])
                continue
            for finding in report.findings:
                writer.writerow([
                    report.source,
                    finding.kind,
                    finding.tag,
                    finding.label,
                    finding.cut_size,
                    " ".join(str(v) for v in finding.vertices),
                    str(finding),
                ])

    return path
