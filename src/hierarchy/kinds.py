"""
Node kinds the hierarchy algorithms are parameterized with.

A kind fixes the is-a predicate, which nodes take part in traversal, the
root sentinels at which canonical paths end and the deprecation
annotation. Ontology classes and SHACL node shapes share the predicate
and roots but differ in which nodes are members.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Set

from rdflib import Literal, URIRef
from rdflib.term import Node

from .accessor import GraphAccessor
from .domain import HierarchyKindName
from .vocabulary import OWL, RDFS, SH, TOP_THINGS


@dataclass(frozen=True)
class HierarchyKind:
    """Parameters of one is-a hierarchy."""

    name: HierarchyKindName
    is_a: URIRef = RDFS.subClassOf
    roots: FrozenSet[Node] = TOP_THINGS
    deprecation: URIRef = OWL.deprecated
    named_only: bool = True                                          # blank nodes never participate
    member_types: FrozenSet[URIRef] = field(default_factory=frozenset)   # node must carry one of these; empty = any
    excluded_types: FrozenSet[URIRef] = field(default_factory=frozenset)
    declared_types: FrozenSet[URIRef] = field(default_factory=frozenset)  # types enumerated by members()

    def accepts(self, accessor: GraphAccessor, node: Node) -> bool:
        """Check whether a node is of this kind and may take part in traversal."""
        if isinstance(node, Literal):
            return False
        if self.named_only and not isinstance(node, URIRef):
            return False
        if self.member_types and not any(accessor.has_type(node, t) for t in self.member_types):
            return False
        return not any(accessor.has_type(node, t) for t in self.excluded_types)

    def parents(self, accessor: GraphAccessor, node: Node) -> Set[Node]:
        """Direct super-types of `node` that are of this kind."""
        return {p for p in accessor.direct_parents(node, self.is_a) if self.accepts(accessor, p)}

    def children(self, accessor: GraphAccessor, node: Node) -> Set[Node]:
        """Direct sub-types of `node` that are of this kind."""
        return {c for c in accessor.direct_children(node, self.is_a) if self.accepts(accessor, c)}

    def is_root(self, node: Node) -> bool:
        return node in self.roots

    def is_deprecated(self, accessor: GraphAccessor, node: Node) -> bool:
        return accessor.is_deprecated(node, self.deprecation)

    def members(self, accessor: GraphAccessor) -> Set[Node]:
        """All nodes of this kind in the store, root sentinels excluded.

        Members are the instances of the declared types plus, when the kind
        has no member type filter, every subject of an is-a edge.
        """
        candidates = set()
        for declared_type in self.declared_types:
            candidates |= accessor.typed_instances(declared_type)
        if not self.member_types:
            candidates |= set(accessor.store.subjects(self.is_a, None))
        return {n for n in candidates if self.accepts(accessor, n) and not self.is_root(n)}

    def with_roots(self, roots: Iterable[Node]) -> "HierarchyKind":
        return replace(self, roots=frozenset(roots))

    def with_deprecation(self, predicate: URIRef) -> "HierarchyKind":
        return replace(self, deprecation=predicate)


# Named classes; OWL restrictions and SHACL node shapes are not classes here
CLASS_KIND = HierarchyKind(
    name=HierarchyKindName.CLASS,
    excluded_types=frozenset({OWL.Restriction, SH.NodeShape}),
    declared_types=frozenset({OWL.Class, RDFS.Class}),
)

# Only sh:NodeShape nodes; rdfs:subClassOf edges to anything else are dropped
SHAPE_KIND = HierarchyKind(
    name=HierarchyKindName.SHAPE,
    member_types=frozenset({SH.NodeShape}),
    declared_types=frozenset({SH.NodeShape}),
)

KINDS = {
    HierarchyKindName.CLASS: CLASS_KIND,
    HierarchyKindName.SHAPE: SHAPE_KIND,
}
