"""
Class and shape hierarchies over a triple store.

A Hierarchy binds the generic closure and path algorithms to one node kind
(ontology classes or SHACL node shapes).
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Set

from rdflib.term import Node

from .accessor import GraphAccessor
from .closure import ClosureEngine, transitive_closure
from .config import HierarchyConfig
from .domain import HierarchyKindName, HierarchyStats
from .kinds import HierarchyKind
from .paths import CanonicalPathSelector
from .store import TripleStore
from .vocabulary import OWL

logger = logging.getLogger(__name__)


class Hierarchy:
    """Derived is-a relationships of one node kind."""

    def __init__(self, store: TripleStore, kind: HierarchyKind):
        self.store = store
        self.kind = kind
        self.accessor = GraphAccessor(store)
        self.closure = ClosureEngine(self.accessor, kind)
        self.paths = CanonicalPathSelector(self.accessor, kind)

    def direct_parents(self, node: Node) -> Set[Node]:
        return self.kind.parents(self.accessor, node)

    def direct_children(self, node: Node) -> Set[Node]:
        return self.kind.children(self.accessor, node)

    def ancestors(self, node: Node) -> FrozenSet[Node]:
        return self.closure.ancestors(node)

    def descendants(self, node: Node) -> FrozenSet[Node]:
        return self.closure.descendants(node)

    def transitive_types(self, instance: Node) -> FrozenSet[Node]:
        return self.closure.transitive_types(instance)

    def transitive_instances(self, node: Node) -> FrozenSet[Node]:
        return self.closure.transitive_instances(node)

    def longest_ancestor_path(self, node: Node) -> List[Node]:
        return self.paths.longest_ancestor_path(node)

    def is_root(self, node: Node) -> bool:
        return self.kind.is_root(node)

    def is_deprecated(self, node: Node) -> bool:
        return self.kind.is_deprecated(self.accessor, node)

    def is_member(self, node: Node) -> bool:
        return self.kind.accepts(self.accessor, node)

    def contains(self, node: Node) -> bool:
        """Check whether `node` is a member declared or linked by an is-a edge in the store."""
        if not self.is_member(node):
            return False
        if any(self.accessor.has_type(node, t) for t in self.kind.declared_types):
            return True
        return bool(self.accessor.direct_parents(node, self.kind.is_a)
                    or self.accessor.direct_children(node, self.kind.is_a))

    def _property_types(self, node: Node) -> FrozenSet[Node]:
        # Property types are classes, so the kind's member filter does not apply
        direct_types = self.accessor.direct_types(node)
        return frozenset(direct_types) | transitive_closure(
            direct_types, lambda t: self.accessor.direct_parents(t, self.kind.is_a)
        )

    def is_object_property(self, node: Node) -> bool:
        """Check whether owl:ObjectProperty is among the transitive types of `node`."""
        return OWL.ObjectProperty in self._property_types(node)

    def is_data_property(self, node: Node) -> bool:
        """Check whether owl:DatatypeProperty is among the transitive types of `node`."""
        return OWL.DatatypeProperty in self._property_types(node)

    def flatten(self) -> Dict[Node, List[Node]]:
        """Map every member node to its canonical path (single-inheritance view)."""
        members = sorted(self.kind.members(self.accessor), key=lambda n: n.n3())
        flattened = {member: self.longest_ancestor_path(member) for member in members}
        logger.info(f"Flattened {len(flattened)} {self.kind.name.value} nodes")
        return flattened

    def get_stats(self, flattened: Optional[Dict[Node, List[Node]]] = None) -> HierarchyStats:
        """Statistics about the flattened hierarchy."""
        if flattened is None:
            flattened = self.flatten()

        return HierarchyStats(
            total_nodes=len(flattened),
            root_nodes=sum(1 for path in flattened.values() if not path),
            deprecated_nodes=sum(1 for node in flattened if self.is_deprecated(node)),
            max_depth=max((len(path) for path in flattened.values()), default=0),
            multi_parent_nodes=sum(1 for node in flattened if len(self.paths.candidates(node)) > 1),
        )


def class_hierarchy(store: TripleStore, config: Optional[HierarchyConfig] = None) -> Hierarchy:
    """Hierarchy of ontology classes."""
    config = config or HierarchyConfig()
    return Hierarchy(store, config.kind(HierarchyKindName.CLASS))


def shape_hierarchy(store: TripleStore, config: Optional[HierarchyConfig] = None) -> Hierarchy:
    """Hierarchy of SHACL node shapes."""
    config = config or HierarchyConfig()
    return Hierarchy(store, config.kind(HierarchyKindName.SHAPE))
