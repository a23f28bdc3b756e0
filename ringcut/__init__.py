"""Small-cycle checks for ring-bounded planar configurations under edge contraction."""

from .configuration import Configuration, ConfigurationError, read_conf, parse_conf, edges_from_ids
from .distances import INF, apsp, shortest_paths, representatives, equivalence_classes
from .paths import MAX_PATH_EDGES, all_paths
from .oracle import CUT_SIZES, CycleOracle, is_forbidden_cut
from .contraction import ContractionResult, apply_contraction, check_degree7
from .checker import Finding, CheckReport, check_configuration, check_file
from .export import export_findings_json, export_findings_csv
from .batch import read_summary, run_summary

__all__ = [
    "Configuration",
    "ConfigurationError",
    "read_conf",
    "parse_conf",
    "edges_from_ids",
    "INF",
    "apsp",
    "shortest_paths",
    "representatives",
    "equivalence_classes",
    "MAX_PATH_EDGES",
    "all_paths",
    "CUT_SIZES",
    "CycleOracle",
    "is_forbidden_cut",
    "ContractionResult",
    "apply_contraction",
    "check_degree7",
    "Finding",
    "CheckReport",
    "check_configuration",
    "check_file",
    "export_findings_json",
    "export_findings_csv",
    "read_summary",
    "run_summary",
]
