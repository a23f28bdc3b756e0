"""
Driver: contract, enumerate boundary patterns, report dangerous ones.

Every finding is logged at INFO as it is found, so a run produces the
familiar grep-able report stream; the same findings are also returned.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from .configuration import Configuration, Edge, edges_from_ids, read_conf
from .contraction import (
    ContractionResult,
    apply_contraction,
    check_degree7,
    forbidden_vertex_size,
    forbidden_vertex_size_pair,
)
from .oracle import CUT_SIZES, CycleOracle
from .patterns import PATTERN_RULES, ChainCheck, PairCheck, PatternRule, find_ring_tuples, shapes_in_use
from .reduction import ring_quadruples

logger = logging.getLogger(__name__)

DEGREE7_TAG = "7cut-16"
DEGREE7_LABEL = "degree 7 in 7-cycle"


@dataclass(frozen=True, slots=True)
class Finding:
    """
    One dangerous situation.

    Attributes:
        kind: "pattern", "bridge" or "degree7"
        tag: Case name ("6cut-4", ...); "bridge" for contractible loops
        label: Pattern label; "general" for contractible loops
        vertices: Ring vertices in report order
        cut_size: Length of the surrounding cycle
        source: Name of the configuration
    """
    kind: str
    tag: str
    label: str
    vertices: tuple[int, ...]
    cut_size: int
    source: str

    def __str__(self) -> str:
        if self.kind == "bridge":
            pairs = ", ".join(
                f"{self.vertices[i]},{self.vertices[i + 1]}-contractible"
                for i in range(0, len(self.vertices), 2)
            )
            return f"dangerous: may be a bridge by {pairs} in {self.cut_size}-cycle, {self.label}"
        if self.kind == "degree7":
            return f"{self.tag} ({self.label}) is dangerous in {self.source}"
        vs = ", ".join(str(v) for v in self.vertices)
        return f"{self.tag} ({self.label}) ({vs}) is dangerous in {self.source}"


@dataclass(frozen=True, slots=True)
class CheckReport:
    """Outcome of checking one configuration under one contraction."""
    source: str
    n: int
    r: int
    contraction: tuple[Edge, ...]
    erased: dict[int, tuple[int, ...]]
    findings: tuple[Finding, ...]

    @property
    def dangerous(self) -> bool:
        return len(self.findings) > 0


def _report(finding: Finding) -> Finding:
    logger.info("%s", finding)
    return finding


def contractible_loop_findings(oracle: CycleOracle, result: ContractionResult, source: str) -> list[Finding]:
    """
    Ring pairs and quadruples whose contractible outer paths could form a bridge.

    A p-q outer path of length at most 1 - dist_contracted(p, q) that the
    oracle cannot exclude is reported; so are two contractible outer paths
    whose lower-bound lengths plus the contracted chords between them add up
    to at most 1.
    """
    conf = oracle.conf
    r = conf.r
    dc = result.dist_contracted
    findings = []
    for c in CUT_SIZES:
        for p in range(r):
            for q in range(r):
                if p == q or q == (p + 1) % r:
                    continue
                for pathlen in range(0, 2 - int(dc[p, q])):
                    if not oracle.check_short_cycle(p, q, pathlen, c):
                        findings.append(_report(Finding("bridge", "bridge", "general", (p, q), c, source)))

        length = oracle.length[c]
        for p1, q1, p2, q2 in ring_quadruples(r):
            inside = int(dc[q1, p2]) + int(dc[q2, p1])
            if inside + length[p1, q1] + length[p2, q2] <= 1:
                findings.append(_report(Finding("bridge", "bridge", "general", (p1, q1, p2, q2), c, source)))
            if inside + length[p1, q1] + length[q2, p2] <= 1:
                findings.append(_report(Finding("bridge", "bridge", "general", (p1, q1, q2, p2), c, source)))
    return findings


def _excluded_by_size(rule: PatternRule, result: ContractionResult, vs: Sequence[int]) -> bool:
    check = rule.check
    if check is None:
        return False
    if isinstance(check, ChainCheck):
        return forbidden_vertex_size(result, [vs[i] for i in check.order], check.k, rule.cut_size, check.rev)
    assert isinstance(check, PairCheck)
    return forbidden_vertex_size_pair(
        result,
        [vs[i] for i in check.first],
        [vs[i] for i in check.second],
        check.k1,
        check.k2,
        rule.cut_size,
    )


def evaluate_rule(
    rule: PatternRule,
    oracle: CycleOracle,
    result: ContractionResult,
    tuples: Iterable[tuple[int, ...]],
    source: str
) -> list[Finding]:
    """
    Apply one catalogue rule to every matching ring tuple.

    A tuple is dangerous when the pattern passes every pairwise cycle check
    and the rule's vertex-size check (if any) does not exclude it.
    """
    findings = []
    for vs in tuples:
        ordered = tuple(vs[i] for i in rule.order)
        if not oracle.is_valid(ordered, rule.lengths, rule.one_edge):
            continue
        if _excluded_by_size(rule, result, vs):
            continue
        findings.append(_report(Finding("pattern", rule.tag, rule.label, ordered, rule.cut_size, source)))
    return findings


def check_configuration(conf: Configuration, edges: Iterable[Edge], source: str = "<memory>") -> CheckReport:
    """
    Run the full check of one configuration under one contraction.

    Args:
        conf: The configuration
        edges: Contraction edges
        source: Name used in the report lines

    Returns:
        CheckReport with every dangerous finding

    Raises:
        ConfigurationError: If a contraction edge is not in the graph
    """
    logger.info("filename: %s", source)
    edges = tuple(edges)
    oracle = CycleOracle(conf)
    result = apply_contraction(oracle, edges)

    tuples = {}
    for shape in shapes_in_use():
        tuples[shape.name] = find_ring_tuples(result.dist_contracted, conf.r, shape)
        logger.debug("%s: %d tuples", shape.name, len(tuples[shape.name]))

    findings = contractible_loop_findings(oracle, result, source)
    for rule in PATTERN_RULES:
        findings.extend(evaluate_rule(rule, oracle, result, tuples[rule.shape], source))
    logger.debug("%d rules evaluated", len(PATTERN_RULES))

    if not check_degree7(result):
        findings.append(_report(Finding("degree7", DEGREE7_TAG, DEGREE7_LABEL, (), 7, source)))

    erased = {c: tuple(int(v) for v in np.flatnonzero(result.erased(c))) for c in CUT_SIZES}
    return CheckReport(
        source=source,
        n=conf.n,
        r=conf.r,
        contraction=edges,
        erased=erased,
        findings=tuple(findings),
    )


def check_file(path: Path | str, edge_ids: Sequence[int]) -> CheckReport:
    """
    Check a .conf file under a contraction given by dual edge ids.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file or an edge id is invalid
    """
    conf = read_conf(path)
    edges = edges_from_ids(conf, edge_ids)
    return check_configuration(conf, edges, source=str(path))
