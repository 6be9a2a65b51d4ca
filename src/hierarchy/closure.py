"""
Transitive closures over the is-a relation.

The is-a graph is not guaranteed to be acyclic, so every closure is an
iterative worklist expansion guarded by a visited set. A start node is
part of its own closure only when it is reachable from itself through a
cycle. Start nodes outside the hierarchy kind have empty closures, which
keeps ancestors and descendants inverse-consistent.
"""

import logging
from typing import Callable, FrozenSet, Iterable, Set

from rdflib.term import Node

from .accessor import GraphAccessor
from .kinds import HierarchyKind

logger = logging.getLogger(__name__)


def transitive_closure(starts: Iterable[Node],
                       neighbours: Callable[[Node], Iterable[Node]]) -> FrozenSet[Node]:
    """All nodes reachable from `starts` by following `neighbours` one or more times.

    Args:
        starts: Seed nodes; a seed is only included if reached again via an edge
        neighbours: Function returning the direct neighbours of a node

    Returns:
        Frozen set of reached nodes, independent of neighbour enumeration order
    """
    visited: Set[Node] = set()
    worklist = []
    for start in starts:
        worklist.extend(neighbours(start))

    while worklist:
        node = worklist.pop()
        if node in visited:
            continue
        visited.add(node)
        worklist.extend(n for n in neighbours(node) if n not in visited)

    return frozenset(visited)


class ClosureEngine:
    """Ancestors, descendants and transitive types for one hierarchy kind."""

    def __init__(self, accessor: GraphAccessor, kind: HierarchyKind):
        self.accessor = accessor
        self.kind = kind

    def _parents(self, node: Node) -> Set[Node]:
        return self.kind.parents(self.accessor, node)

    def _children(self, node: Node) -> Set[Node]:
        return self.kind.children(self.accessor, node)

    def _is_member(self, node: Node) -> bool:
        if self.kind.accepts(self.accessor, node):
            return True
        logger.debug(f"{node} is not a {self.kind.name.value} node, closure is empty")
        return False

    def ancestors(self, node: Node) -> FrozenSet[Node]:
        """All transitive super-types of `node`; empty if `node` is not of this kind."""
        if not self._is_member(node):
            return frozenset()
        result = transitive_closure([node], self._parents)
        if node in result:
            logger.debug(f"{node} is its own ancestor (is-a cycle)")
        return result

    def descendants(self, node: Node) -> FrozenSet[Node]:
        """All transitive sub-types of `node`; empty if `node` is not of this kind."""
        if not self._is_member(node):
            return frozenset()
        result = transitive_closure([node], self._children)
        if node in result:
            logger.debug(f"{node} is its own descendant (is-a cycle)")
        return result

    def transitive_types(self, instance: Node) -> FrozenSet[Node]:
        """Direct rdf:types of `instance` plus all their ancestors."""
        direct_types = {t for t in self.accessor.direct_types(instance) if self.kind.accepts(self.accessor, t)}
        return frozenset(direct_types) | transitive_closure(direct_types, self._parents)

    def transitive_instances(self, node: Node) -> FrozenSet[Node]:
        """Instances typed with `node` or with any of its descendants."""
        instances = set(self.accessor.typed_instances(node))
        for descendant in self.descendants(node):
            instances |= self.accessor.typed_instances(descendant)
        return frozenset(instances)
