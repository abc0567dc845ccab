"""Vector and matrix utilities for Ward hierarchical clustering."""

from .audit import AuditIssue, AuditReport, audit_distance_matrix
from .errors import DimensionMismatchError, EmptyInputError, InvalidInputError, InvalidShapeError
from .ops import dist, dist_matrix, dot, ess, gather, mean, sub
from .shapes import Matrix, Vector, as_operand
from .ward import Merge, WardClustering, WardResult, nearest_pair

__all__ = [
    "AuditIssue",
    "AuditReport",
    "DimensionMismatchError",
    "EmptyInputError",
    "InvalidInputError",
    "InvalidShapeError",
    "Matrix",
    "Merge",
    "Vector",
    "WardClustering",
    "WardResult",
    "as_operand",
    "audit_distance_matrix",
    "dist",
    "dist_matrix",
    "dot",
    "ess",
    "gather",
    "mean",
    "nearest_pair",
    "sub",
]
