"""Cycle search over the product composition graph.

Nodes are product ids; an edge ``a -> b`` means ``b`` is a source of
``a``.  Adjacency is pulled from the store one breadth-first layer at a
time, so the walk costs one query per level instead of one per node and
never recurses on the call stack.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional, Sequence

from modules.products.exceptions import SourceGraphTooDeep

EdgeLoader = Callable[[Sequence[int]], Mapping[int, Sequence[int]]]


def find_cycle(
    roots: Sequence[int],
    load_edges: EdgeLoader,
    max_depth: int,
) -> Optional[List[int]]:
    """Return a path from a root back to any root, or ``None``.

    Every node reachable from ``roots`` is expanded at most once.  A root
    counts as reached only through an edge, so a root reached from itself
    or from another root is reported; shared sub-sources (diamonds) are
    not.

    Raises:
        SourceGraphTooDeep: if the walk finds products nested more than
            ``max_depth`` levels below the roots.
    """
    root_set = set(roots)
    parent: Dict[int, Optional[int]] = {root: None for root in roots}
    frontier: List[int] = list(dict.fromkeys(roots))
    depth = 0

    while frontier:
        edges = load_edges(frontier)
        next_frontier: List[int] = []
        for node in frontier:
            for source_id in edges.get(node, ()):
                if source_id in root_set:
                    return _path_to(parent, node) + [source_id]
                if source_id in parent:
                    continue
                parent[source_id] = node
                next_frontier.append(source_id)
        depth += 1
        if next_frontier and depth > max_depth:
            raise SourceGraphTooDeep(max_depth)
        frontier = next_frontier

    return None


def _path_to(parent: Mapping[int, Optional[int]], node: int) -> List[int]:
    path = [node]
    while parent[path[-1]] is not None:
        path.append(parent[path[-1]])
    path.reverse()
    return path
