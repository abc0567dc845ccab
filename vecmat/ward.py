"""Ward minimum-variance agglomerative clustering built on :mod:`vecmat.ops`."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from . import ops
from .errors import EmptyInputError
from .shapes import as_matrix

logger = logging.getLogger(__name__)


@dataclass
class Merge:
    """A single agglomeration step.

    Singletons carry the ids ``0..n-1`` of their rows; the cluster created by
    the k-th merge gets id ``n + k``.
    """

    left: int
    right: int
    cost: float
    size: int
    cluster_id: int


@dataclass
class WardResult:
    """Linkage and flat assignment produced by :meth:`WardClustering.fit`."""

    merges: List[Merge]
    labels: List[int]
    clusters: Dict[int, List[int]]
    points: List[List[float]] = field(repr=False)

    @property
    def total_ess(self) -> float:
        return sum(_squared_error(ops.gather(self.points, members)) for members in self.clusters.values())


def nearest_pair(distances: ops.DistanceMatrix) -> Tuple[int, int, float]:
    """Return ``(i, j, distance)`` for the closest pair of a :func:`vecmat.ops.dist_matrix` table.

    Only the upper triangle is read. Ties go to the lowest ``(i, j)``.
    """

    best: Optional[Tuple[int, int, float]] = None
    for i, row in enumerate(distances):
        for j in range(i + 1, len(row)):
            value = row[j]
            if value is None:
                continue
            if best is None or value < best[2]:
                best = (i, j, value)
    if best is None:
        raise EmptyInputError("distance matrix holds no pairs")
    return best


class WardClustering:
    """Bottom-up clustering that always merges the pair with the smallest Ward cost.

    The cost of merging clusters ``A`` and ``B`` is the growth of the total
    error sum of squares, ``SSE(A + B) - SSE(A) - SSE(B)`` with
    ``SSE(C) = ess(C) * |C|``, which equals
    ``|A| * |B| / (|A| + |B|) * ||c_A - c_B||**2`` for centroids ``c_A`` and
    ``c_B``. Ties go to the lowest ``(left, right)`` cluster id pair.
    """

    def __init__(self, n_clusters: int = 1):
        if n_clusters < 1:
            raise ValueError("n_clusters must be at least 1")
        self.n_clusters = n_clusters

    def fit(self, points: Sequence[Sequence[float]]) -> WardResult:
        matrix = as_matrix(points)
        n = matrix.n_rows
        if not n:
            raise EmptyInputError("cannot cluster a matrix without rows")
        if self.n_clusters > n:
            raise ValueError(f"cannot form {self.n_clusters} clusters from {n} points")

        rows = matrix.tolist()
        active: Dict[int, List[int]] = {idx: [idx] for idx in range(n)}
        centroids: Dict[int, List[float]] = {idx: row[:] for idx, row in enumerate(rows)}
        costs = _singleton_costs(ops.dist_matrix(rows))
        merges: List[Merge] = []
        logger.debug("ward clustering %d points into %d clusters", n, self.n_clusters)

        while len(active) > self.n_clusters:
            cost, left, right = min((value, a, b) for (a, b), value in costs.items())
            left_members = active.pop(left)
            right_members = active.pop(right)
            left_centroid = centroids.pop(left)
            right_centroid = centroids.pop(right)
            for pair in [pair for pair in costs if left in pair or right in pair]:
                del costs[pair]

            cluster_id = n + len(merges)
            members = sorted(left_members + right_members)
            size = len(members)
            centroid = [
                (len(left_members) * a + len(right_members) * b) / size
                for a, b in zip(left_centroid, right_centroid)
            ]
            for other, other_members in active.items():
                costs[(other, cluster_id)] = _ward_cost(size, centroid, len(other_members), centroids[other])
            active[cluster_id] = members
            centroids[cluster_id] = centroid

            merges.append(Merge(left=left, right=right, cost=cost, size=size, cluster_id=cluster_id))
            logger.debug(
                "merge %d: %d + %d -> %d (size=%d, cost=%.6g)",
                len(merges),
                left,
                right,
                cluster_id,
                size,
                cost,
            )

        labels, clusters = _flat_assignment(n, active)
        return WardResult(merges=merges, labels=labels, clusters=clusters, points=rows)


def _singleton_costs(distances: ops.DistanceMatrix) -> Dict[Tuple[int, int], float]:
    costs: Dict[Tuple[int, int], float] = {}
    for i, row in enumerate(distances):
        for j in range(i + 1, len(row)):
            distance = row[j]
            if distance is not None:
                costs[(i, j)] = distance * distance / 2.0
    return costs


def _ward_cost(size_a: int, centroid_a: List[float], size_b: int, centroid_b: List[float]) -> float:
    diff = ops.sub(centroid_a, centroid_b)
    return size_a * size_b / (size_a + size_b) * ops.dot(diff, diff)


def _squared_error(rows: List[List[float]]) -> float:
    return ops.ess(rows) * len(rows)


def _flat_assignment(n: int, active: Dict[int, List[int]]) -> Tuple[List[int], Dict[int, List[int]]]:
    owner = {member: cid for cid, members in active.items() for member in members}
    label_of: Dict[int, int] = {}
    labels: List[int] = []
    clusters: Dict[int, List[int]] = {}
    for idx in range(n):
        cid = owner[idx]
        if cid not in label_of:
            label_of[cid] = len(label_of)
            clusters[label_of[cid]] = []
        label = label_of[cid]
        labels.append(label)
        clusters[label].append(idx)
    return labels, clusters
