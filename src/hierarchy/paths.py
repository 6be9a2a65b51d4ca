"""
Canonical single-inheritance path selection.

For a node with several direct parents, the canonical path is the longest
chain of non-deprecated ancestors down from a root. Candidates are visited
in lexical (N3) order and the first strictly longest one wins, so the
result does not depend on the order the store enumerates edges in.
"""

import logging
from typing import Dict, List, Set, Tuple

from rdflib.term import Node

from .accessor import GraphAccessor
from .kinds import HierarchyKind

logger = logging.getLogger(__name__)

Path = Tuple[Node, ...]


class CanonicalPathSelector:
    """Longest ancestor path computation for one hierarchy kind."""

    def __init__(self, accessor: GraphAccessor, kind: HierarchyKind):
        self.accessor = accessor
        self.kind = kind

    def candidates(self, node: Node) -> List[Node]:
        """Eligible direct parents of `node`: of this kind, not deprecated, lexically ordered."""
        eligible = [
            parent for parent in self.kind.parents(self.accessor, node)
            if not self.kind.is_deprecated(self.accessor, parent)
        ]
        return sorted(eligible, key=lambda n: n.n3())

    def longest_ancestor_path(self, node: Node) -> List[Node]:
        """Longest ancestor chain from a root down to (excluding) `node`.

        Returns an empty list when `node` is itself a root sentinel, has no
        eligible parents or one of them is a root sentinel. Parents already
        on the chain being built are skipped, so is-a cycles terminate.
        """
        if self.kind.is_root(node):
            return []
        path, _ = self._longest_path(node, {node}, {})
        return list(path)

    def _longest_path(self,
                      node: Node,
                      on_stack: Set[Node],
                      memo: Dict[Node, Path]) -> Tuple[Path, bool]:
        """Return (path, complete); complete is False if a cycle cut the search short.

        Only complete results are memoized, since a path computed with part
        of a cycle excluded is only valid for that recursion stack.
        """
        if node in memo:
            return memo[node], True

        candidates = self.candidates(node)
        if not candidates or any(self.kind.is_root(c) for c in candidates):
            memo[node] = ()
            return (), True

        complete = True
        best_parent = None
        best_path: Path = ()
        for candidate in candidates:
            if candidate in on_stack:
                logger.debug(f"Skipping {candidate} as parent of {node}: is-a cycle")
                complete = False
                continue

            on_stack.add(candidate)
            candidate_path, candidate_complete = self._longest_path(candidate, on_stack, memo)
            on_stack.discard(candidate)
            complete = complete and candidate_complete

            if best_parent is None or len(candidate_path) > len(best_path):
                best_parent = candidate
                best_path = candidate_path

        path = best_path + (best_parent,) if best_parent is not None else ()
        if complete:
            memo[node] = path
        return path, complete
