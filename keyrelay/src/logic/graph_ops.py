import numpy as np
from scipy.sparse import csr_matrix, csgraph
from typing import Tuple, List, Dict

from keyrelay.src.logic.keypad_types import Coord


def grid_to_adjacency(occupancy: np.ndarray) -> Tuple[csr_matrix, List[Coord], Dict[Coord, int]]:
    """
    Converts a boolean occupancy grid to a sparse adjacency matrix.
    Returns:
        - adj_matrix: scipy.sparse.csr_matrix (symmetric, unit weights)
        - nodes: List of (x, y) coordinates corresponding to matrix indices
        - node_to_idx: Dict mapping (x, y) to matrix index
    """
    height, width = occupancy.shape
    nodes = []
    node_to_idx = {}

    # Row-major so node order is stable across builds
    for y in range(height):
        for x in range(width):
            if occupancy[y, x]:
                node_to_idx[(x, y)] = len(nodes)
                nodes.append((x, y))

    n_nodes = len(nodes)
    if n_nodes == 0:
        return csr_matrix((0, 0)), [], {}

    # Build edges (4-connectivity); each edge is met from both ends
    data = []
    row_ind = []
    col_ind = []

    for idx, (x, y) in enumerate(nodes):
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            n_idx = node_to_idx.get((nx, ny))
            if n_idx is not None:
                row_ind.append(idx)
                col_ind.append(n_idx)
                data.append(1)

    adj_matrix = csr_matrix((data, (row_ind, col_ind)), shape=(n_nodes, n_nodes))
    adj_matrix.sort_indices()
    return adj_matrix, nodes, node_to_idx


def count_components(adj: csr_matrix) -> int:
    """Number of 4-connected components in the grid graph."""
    if adj.shape[0] == 0:
        return 0
    n_components = csgraph.connected_components(adj, directed=False, return_labels=False)
    return int(n_components)


def all_pairs_hops(adj: csr_matrix) -> np.ndarray:
    """
    Unweighted BFS distance between every pair of nodes.
    Unreachable pairs are np.inf.
    """
    if adj.shape[0] == 0:
        return np.zeros((0, 0))
    return csgraph.shortest_path(adj, directed=False, unweighted=True)


def enumerate_shortest_paths(
    adj: csr_matrix,
    hops: np.ndarray,
    start: int,
    goal: int
) -> List[List[int]]:
    """
    Every minimal-length node path from start to goal (both inclusive).

    Walks only along edges that bring the goal exactly one hop closer, so each
    emitted path has hops[start, goal] edges and no tie is dropped.
    Returns an empty list when goal is unreachable.
    """
    if not np.isfinite(hops[start, goal]):
        return []

    indices = adj.indices
    indptr = adj.indptr

    def get_neighbors(u):
        return indices[indptr[u]:indptr[u + 1]]

    paths: List[List[int]] = []

    def dfs(u: int, path: List[int]):
        if u == goal:
            paths.append(list(path))
            return
        remaining = hops[u, goal]
        for v in get_neighbors(u):
            if hops[v, goal] == remaining - 1:
                path.append(int(v))
                dfs(int(v), path)
                path.pop()

    dfs(start, [start])
    return paths
