import math
from typing import Sequence

import networkx as nx
import numpy as np
import torch


class DistanceMat:
    """
    Immutable symmetric distance table between nodes 0..n-1.

    The table is validated once at construction: it must be a non-empty square
    matrix of finite, non-negative values with a zero diagonal and d[i][j] == d[j][i].
    """

    def __init__(self, distances):
        mat = np.array(distances, dtype=np.float64)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1] or mat.shape[0] == 0:
            raise ValueError(f"Distance table must be a non-empty square matrix, got shape {mat.shape}.")
        if not np.isfinite(mat).all():
            raise ValueError("Distance table contains non-finite values.")
        if (mat < 0).any():
            raise ValueError("Distance table contains negative distances.")
        if not np.array_equal(mat, mat.T):
            raise ValueError("Distance table is not symmetric.")
        if np.any(np.diag(mat) != 0):
            raise ValueError("Distance table has a nonzero diagonal.")
        mat.flags.writeable = False
        self._distances = mat
        self._tensors = {}

    @classmethod
    def from_graph(cls, graph: nx.Graph, weight: str = "weight", nodelist=None) -> "DistanceMat":
        # Matrix index i is the i-th node of nodelist (graph.nodes() order by default).
        nodes = list(graph.nodes()) if nodelist is None else list(nodelist)
        idx_map = {node: i for i, node in enumerate(nodes)}
        mat = np.full((len(nodes), len(nodes)), np.inf)
        np.fill_diagonal(mat, 0.0)
        for u, v, w in graph.edges(data=weight, default=1.0):
            if u == v or u not in idx_map or v not in idx_map:
                continue
            mat[idx_map[u], idx_map[v]] = w
            if not graph.is_directed():
                mat[idx_map[v], idx_map[u]] = w
        return cls(mat)

    @classmethod
    def from_coordinates(cls, points: Sequence[Sequence[float]]) -> "DistanceMat":
        n = len(points)
        mat = [[0.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1, n):
                d = math.dist(points[i], points[j])
                mat[i][j] = d
                mat[j][i] = d
        return cls(mat)

    @property
    def distances(self) -> np.ndarray:
        return self._distances

    def n_units(self) -> int:
        return self._distances.shape[0]

    def __len__(self) -> int:
        return self.n_units()

    def get_distance(self, route: Sequence[int]) -> float:
        """
        Round-trip length of `route`: every consecutive pair plus the closing leg
        from the last node back to the first.

        Repeated or missing nodes are not rejected, the pairs are summed as given.
        """
        idx = np.asarray(route, dtype=np.intp)
        if idx.ndim != 1 or idx.size == 0:
            raise IndexError("Cannot compute the distance of an empty route.")
        n = self.n_units()
        if idx.min() < 0 or idx.max() >= n:
            raise IndexError(f"Route contains a node outside [0, {n}).")
        total = self._distances[idx[-1], idx[0]]
        total += self._distances[idx[:-1], idx[1:]].sum()
        return float(total)

    def as_tensor(self, device="cpu") -> torch.Tensor:
        key = str(device)
        if key not in self._tensors:
            self._tensors[key] = torch.as_tensor(self._distances.copy(), dtype=torch.float64, device=device)
        return self._tensors[key]

    def __repr__(self) -> str:
        return f"DistanceMat(n={self.n_units()})"
