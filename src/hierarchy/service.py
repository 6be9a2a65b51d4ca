"""
High-level hierarchy service providing the public interface for hierarchy operations.

Callers pass IRIs as strings and pick the hierarchy kind by name; closures
are returned as lists sorted by N3 form so results are stable.
"""

import logging
from typing import Dict, List, Optional, Union

from rdflib import BNode, URIRef
from rdflib.term import Node

from .adapters import Hierarchy
from .config import HierarchyConfig
from .domain import HierarchyKindName, HierarchyStats, NodeHierarchy
from .store import RdflibTripleStore, TripleStore

logger = logging.getLogger(__name__)

KindArg = Union[str, HierarchyKindName]


def _sorted(nodes) -> List[Node]:
    return sorted(nodes, key=lambda n: n.n3())


def _render(node: Node) -> str:
    return node.n3() if isinstance(node, BNode) else str(node)


class HierarchyService:
    """High-level interface for derived class and shape hierarchies."""

    def __init__(self, store: Optional[TripleStore] = None, config: Optional[HierarchyConfig] = None):
        """Initialize the hierarchy service.

        Args:
            store: Optional triple store. If None, creates an empty in-memory one.
            config: Optional configuration. If None, uses the defaults.
        """
        self.store = store if store is not None else RdflibTripleStore()
        self.config = config or HierarchyConfig()
        self._hierarchies = {
            name: Hierarchy(self.store, self.config.kind(name)) for name in HierarchyKindName
        }

    def get_hierarchy(self, kind: KindArg = HierarchyKindName.CLASS) -> Hierarchy:
        """Return the hierarchy for a kind name ("class" or "shape").

        Raises:
            ValueError: If the kind is unknown
        """
        try:
            name = HierarchyKindName(kind)
        except ValueError:
            raise ValueError(f"Unknown hierarchy kind: {kind}") from None
        return self._hierarchies[name]

    @staticmethod
    def _node(iri: str) -> Node:
        """Parse an IRI string; '_:id' denotes a blank node.

        Raises:
            ValueError: If the IRI is empty
        """
        iri = iri.strip()
        if not iri:
            raise ValueError("IRI must not be empty")
        if iri.startswith("_:"):
            return BNode(iri[2:])
        return URIRef(iri)

    def ancestors(self, iri: str, kind: KindArg = HierarchyKindName.CLASS) -> List[Node]:
        """All transitive super-types of the node."""
        return _sorted(self.get_hierarchy(kind).ancestors(self._node(iri)))

    def descendants(self, iri: str, kind: KindArg = HierarchyKindName.CLASS) -> List[Node]:
        """All transitive sub-types of the node."""
        return _sorted(self.get_hierarchy(kind).descendants(self._node(iri)))

    def transitive_types(self, iri: str, kind: KindArg = HierarchyKindName.CLASS) -> List[Node]:
        """Direct rdf:types of an instance plus all their ancestors."""
        return _sorted(self.get_hierarchy(kind).transitive_types(self._node(iri)))

    def typed_instances(self,
                        iri: str,
                        kind: KindArg = HierarchyKindName.CLASS,
                        transitive: bool = False) -> List[Node]:
        """Instances of a class or shape.

        Args:
            iri: IRI of the class or shape
            kind: Hierarchy kind
            transitive: Also include instances of all descendants

        Returns:
            Instances sorted by N3 form
        """
        hierarchy = self.get_hierarchy(kind)
        node = self._node(iri)
        if transitive:
            return _sorted(hierarchy.transitive_instances(node))
        return _sorted(hierarchy.accessor.typed_instances(node))

    def longest_ancestor_path(self, iri: str, kind: KindArg = HierarchyKindName.CLASS) -> List[Node]:
        """Canonical single-inheritance chain from a root down to (excluding) the node."""
        return self.get_hierarchy(kind).longest_ancestor_path(self._node(iri))

    def flatten(self, kind: KindArg = HierarchyKindName.CLASS) -> Dict[Node, List[Node]]:
        """Map every class or shape to its canonical path."""
        return self.get_hierarchy(kind).flatten()

    def get_stats(self, kind: KindArg = HierarchyKindName.CLASS) -> HierarchyStats:
        return self.get_hierarchy(kind).get_stats()

    def describe(self, iri: str, kind: KindArg = HierarchyKindName.CLASS) -> NodeHierarchy:
        """Summarize the hierarchy around one node.

        Args:
            iri: IRI of the class or shape
            kind: Hierarchy kind

        Returns:
            NodeHierarchy with parents, children, closures and canonical path

        Raises:
            ValueError: If the node is not a known member of the hierarchy
        """
        hierarchy = self.get_hierarchy(kind)
        node = self._node(iri)
        if not hierarchy.contains(node):
            raise ValueError(f"{hierarchy.kind.name.value.capitalize()} not found: {iri}")

        path = hierarchy.longest_ancestor_path(node)
        logger.debug(f"Describing {iri}: canonical path of length {len(path)}")

        return NodeHierarchy(
            iri=_render(node),
            kind=hierarchy.kind.name,
            labels=hierarchy.accessor.label_map(node),
            deprecated=hierarchy.is_deprecated(node),
            direct_parents=[_render(n) for n in _sorted(hierarchy.direct_parents(node))],
            direct_children=[_render(n) for n in _sorted(hierarchy.direct_children(node))],
            ancestors=[_render(n) for n in _sorted(hierarchy.ancestors(node))],
            descendants=[_render(n) for n in _sorted(hierarchy.descendants(node))],
            canonical_path=[_render(n) for n in path],
            canonical_parent=_render(path[-1]) if path else None,
        )
