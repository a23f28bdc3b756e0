"""Tests for JSON and CSV export of check reports."""

import csv
import json

from ringcut.checker import CheckReport, Finding
from ringcut.export import export_findings_csv, export_findings_json, report_to_dict


def make_report(source, findings=()):
    return CheckReport(
        source=source,
        n=8,
        r=6,
        contraction=((0, 6),),
        erased={6: (7,), 7: ()},
        findings=tuple(findings),
    )


DANGEROUS = make_report("a.conf", [
    Finding("pattern", "6cut-1", "24", (0, 3), 6, "a.conf"),
    Finding("bridge", "bridge", "general", (1, 4), 7, "a.conf"),
])
SAFE = make_report("b.conf")


class TestJsonExport:
    """JSON output."""

    def test_structure(self, tmp_path):
        path = export_findings_json([DANGEROUS, SAFE], tmp_path / "out" / "findings.json")
        assert path.exists()

        with open(path) as f:
            data = json.load(f)
        assert data["metadata"]["configurations"] == 2
        assert data["metadata"]["dangerous"] == 1
        assert "saved_at" in data["metadata"]
        assert [r["source"] for r in data["reports"]] == ["a.conf", "b.conf"]

    def test_extra_metadata(self, tmp_path):
        path = export_findings_json([SAFE], tmp_path / "f.json", metadata={"summary": "s.csv"})
        with open(path) as f:
            assert json.load(f)["metadata"]["summary"] == "s.csv"

    def test_report_dict(self):
        data = report_to_dict(DANGEROUS)
        assert data["contraction"] == [[0, 6]]
        assert data["erased"] == {"6": [7], "7": []}
        assert data["dangerous"] is True
        assert data["findings"][0]["message"] == "6cut-1 (24) (0, 3) is dangerous in a.conf"
        assert data["findings"][1]["vertices"] == [1, 4]


class TestCsvExport:
    """CSV output."""

    def test_rows(self, tmp_path):
        path = export_findings_csv([DANGEROUS, SAFE], tmp_path / "findings.csv")
        with open(path, newline="") as f:
            rows = list(csv.reader(f))

        assert rows[0] == ["source", "kind", "tag", "label", "cut_size", "vertices", "message"]
        assert len(rows) == 4
        assert rows[1][:6] == ["a.conf", "pattern", "6cut-1", "24", "6", "0 3"]
        assert rows[2][1] == "bridge"
        assert rows[3] == ["b.conf", "", "", "", "", "", ""]
