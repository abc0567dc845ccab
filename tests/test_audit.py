from __future__ import annotations

import random

from vecmat import ops
from vecmat.audit import audit_distance_matrix


def _points(seed: int = 4, count: int = 5) -> list[list[float]]:
    rng = random.Random(seed)
    return [[rng.gauss(0, 1) for _ in range(3)] for _ in range(count)]


def _messages(report) -> list[str]:
    return [issue.message for issue in report.issues]


def test_audit_passes_for_consistent_matrix():
    points = _points()
    report = audit_distance_matrix(ops.dist_matrix(points), points)
    assert report.succeeded
    assert report.stats["checked_pairs"] == 10
    assert isinstance(report.stats["checked_pairs"], int)


def test_audit_detects_lower_triangle_value():
    table = ops.dist_matrix(_points())
    table[3][1] = 0.0
    report = audit_distance_matrix(table)
    assert not report.succeeded
    assert "entry on or below the diagonal is set" in _messages(report)


def test_audit_detects_negative_and_unset_entries():
    table = ops.dist_matrix(_points())
    table[0][2] = -1.0
    table[1][4] = None
    report = audit_distance_matrix(table)
    assert "distance is negative" in _messages(report)
    assert "upper triangle entry is unset" in _messages(report)


def test_audit_detects_disagreement_with_points():
    points = _points()
    table = ops.dist_matrix(points)
    table[1][2] += 0.5
    report = audit_distance_matrix(table, points)
    assert _messages(report) == ["distance disagrees with points"]
    assert report.issues[0].context["row"] == 1
    assert report.issues[0].context["column"] == 2


def test_audit_detects_non_square_and_row_count_mismatch():
    points = _points(count=3)
    table = ops.dist_matrix(points)
    table[1] = table[1][:2]
    report = audit_distance_matrix(table, points[:2])
    assert "distance matrix is not square" in _messages(report)
    assert "row count does not match points" in _messages(report)


def test_audit_reports_invalid_points_instead_of_raising():
    report = audit_distance_matrix(ops.dist_matrix([[0, 0], [1, 1]]), [[0, 0], [1]])
    assert _messages(report) == ["points are not a valid matrix"]


def test_audit_warns_on_empty_matrix():
    report = audit_distance_matrix([])
    assert report.succeeded
    assert report.warnings[0].message == "distance matrix is empty"
