"""Audit helpers that validate the structural invariants of a distance matrix."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from . import ops
from .errors import InvalidInputError
from .shapes import as_matrix


@dataclass
class AuditIssue:
    """Represents a single finding produced by :func:`audit_distance_matrix`."""

    severity: str
    message: str
    context: Dict[str, object] = field(default_factory=dict)


@dataclass
class AuditReport:
    """Aggregated result of auditing a distance matrix."""

    issues: List[AuditIssue] = field(default_factory=list)
    warnings: List[AuditIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.issues

    def add_issue(self, severity: str, message: str, **context: object) -> None:
        issue = AuditIssue(severity=severity, message=message, context=context)
        if severity == "error":
            self.issues.append(issue)
        else:
            self.warnings.append(issue)


def audit_distance_matrix(
    distances: Sequence[Sequence[Optional[float]]],
    points: Optional[Sequence[Sequence[float]]] = None,
    *,
    tolerance: float = 1e-9,
) -> AuditReport:
    """Check ``distances`` against the layout produced by :func:`vecmat.ops.dist_matrix`.

    When ``points`` is given every upper-triangle entry is also recomputed and
    compared within ``tolerance``. Malformed input is reported, never raised.
    """

    report = AuditReport()
    n = len(distances)
    if n == 0:
        report.add_issue("warning", "distance matrix is empty")

    rows: Optional[List[List[float]]] = None
    if points is not None:
        try:
            rows = as_matrix(points).tolist()
        except InvalidInputError as exc:
            report.add_issue("error", "points are not a valid matrix", reason=str(exc))
        else:
            if len(rows) != n:
                report.add_issue("error", "row count does not match points", rows=n, points=len(rows))
                rows = None

    checked = 0
    for i, row in enumerate(distances):
        if not isinstance(row, (list, tuple)) or len(row) != n:
            length = len(row) if isinstance(row, (list, tuple)) else None
            report.add_issue("error", "distance matrix is not square", row=i, length=length, expected=n)
            continue
        for j, value in enumerate(row):
            if j <= i:
                if value is not None:
                    report.add_issue("error", "entry on or below the diagonal is set", row=i, column=j, value=value)
                continue
            if value is None:
                report.add_issue("error", "upper triangle entry is unset", row=i, column=j)
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                report.add_issue("error", "distance is not a finite number", row=i, column=j, value=value)
                continue
            if value < 0:
                report.add_issue("error", "distance is negative", row=i, column=j, value=value)
                continue
            checked += 1
            if rows is not None:
                expected = ops.dist(rows[i], rows[j])
                if abs(value - expected) > tolerance:
                    report.add_issue(
                        "error",
                        "distance disagrees with points",
                        row=i,
                        column=j,
                        value=value,
                        expected=expected,
                    )

    report.stats["checked_pairs"] = checked
    return report
