"""
SHACL node and property shape wrappers.

Thin views over a TripleStore: every getter reads the store and every
setter writes to it, nothing is cached on the wrapper. Super/sub shape
navigation goes through the shape Hierarchy, so only sh:NodeShape nodes
are ever returned.
"""

from typing import List, Optional, Union

from rdflib import BNode, Literal, URIRef
from rdflib.term import Node

from .accessor import GraphAccessor
from .adapters import Hierarchy, shape_hierarchy
from .store import TripleStore
from .vocabulary import RDF, RDFS, SH, SH_CLASS, SH_IN, XSD


def _sorted(nodes) -> List[Node]:
    return sorted(nodes, key=lambda n: n.n3())


class Shape:
    """Shared functionality of node and property shapes."""

    def __init__(self, store: TripleStore, node: Node):
        self.store = store
        self.node = node
        self.accessor = GraphAccessor(store)

    def __eq__(self, other) -> bool:
        return isinstance(other, Shape) and self.node == other.node

    def __hash__(self) -> int:
        return hash(self.node)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.node.n3()})"

    @property
    def is_deprecated(self) -> bool:
        return self.accessor.is_deprecated(self.node)

    @property
    def node_kind(self) -> Optional[URIRef]:
        """The sh:nodeKind of this shape, if any."""
        kinds = _sorted(k for k in self.store.objects(self.node, SH.nodeKind) if isinstance(k, URIRef))
        return kinds[0] if kinds else None

    @node_kind.setter
    def node_kind(self, value: Optional[URIRef]):
        self.store.retract_all(self.node, SH.nodeKind)
        if value is not None:
            self.store.assert_triple(self.node, SH.nodeKind, value)

    def add_label(self, language: str, value: str) -> None:
        self.store.assert_annotation(self.node, RDFS.label, value, lang=language)

    def add_comment(self, language: str, value: str) -> None:
        self.store.assert_annotation(self.node, RDFS.comment, value, lang=language)


class NodeShape(Shape):
    """A SHACL node shape identified by an IRI."""

    def __init__(self, store: TripleStore, iri: URIRef, hierarchy: Optional[Hierarchy] = None):
        super().__init__(store, iri)
        self.hierarchy = hierarchy if hierarchy is not None else shape_hierarchy(store)

    @property
    def iri(self) -> URIRef:
        return self.node

    @property
    def is_deprecated(self) -> bool:
        """Deprecation by the hierarchy's configured predicate."""
        return self.hierarchy.is_deprecated(self.node)

    def _wrap(self, nodes) -> List["NodeShape"]:
        return [NodeShape(self.store, node, self.hierarchy) for node in _sorted(nodes)]

    @property
    def property_shapes(self) -> List["PropertyShape"]:
        return [PropertyShape(self.store, node) for node in _sorted(self.store.objects(self.node, SH.property))]

    @property
    def direct_super_shapes(self) -> List["NodeShape"]:
        return self._wrap(self.hierarchy.direct_parents(self.node))

    @property
    def transitive_super_shapes(self) -> List["NodeShape"]:
        return self._wrap(self.hierarchy.ancestors(self.node))

    @property
    def direct_sub_shapes(self) -> List["NodeShape"]:
        return self._wrap(self.hierarchy.direct_children(self.node))

    @property
    def transitive_sub_shapes(self) -> List["NodeShape"]:
        return self._wrap(self.hierarchy.descendants(self.node))

    @property
    def longest_super_shapes_path(self) -> List[Node]:
        """Longest inheritance path from a root shape down to (excluding) this shape."""
        return self.hierarchy.longest_ancestor_path(self.node)

    @property
    def is_top_thing(self) -> bool:
        """Whether this shape is a root sentinel such as owl:Thing or rdfs:Resource."""
        return self.hierarchy.is_root(self.node)

    def add_super_class(self, super_class: Union["NodeShape", URIRef]) -> None:
        """Assert that this shape is an rdfs:subClassOf another shape or IRI."""
        target = super_class.node if isinstance(super_class, NodeShape) else super_class
        self.store.assert_triple(self.node, RDFS.subClassOf, target)

    def create_property_shape(self, path: URIRef) -> "PropertyShape":
        """Create a property shape on this node shape with a single-predicate path."""
        property_node = BNode()
        self.store.assert_triple(property_node, RDF.type, SH.PropertyShape)
        self.store.assert_triple(property_node, SH.path, path)
        self.store.assert_triple(self.node, SH.property, property_node)
        return PropertyShape(self.store, property_node)


class PropertyShape(Shape):
    """A SHACL property shape, usually a blank node."""

    @property
    def path(self) -> Node:
        """The sh:path of this property shape.

        Raises:
            ValueError: If no sh:path is asserted
        """
        paths = _sorted(self.store.objects(self.node, SH.path))
        if not paths:
            raise ValueError(f"Property shape {self.node} has no sh:path")
        return paths[0]

    @property
    def datatype(self) -> Optional[URIRef]:
        datatypes = _sorted(d for d in self.store.objects(self.node, SH.datatype) if isinstance(d, URIRef))
        return datatypes[0] if datatypes else None

    @property
    def classes(self) -> List[URIRef]:
        return _sorted(c for c in self.store.objects(self.node, SH_CLASS) if isinstance(c, URIRef))

    @property
    def in_values(self) -> List[Node]:
        """Members of all sh:in lists asserted on this shape."""
        values = []
        for head in self.store.objects(self.node, SH_IN):
            values.extend(self.store.list_items(head))
        return values

    @property
    def names(self) -> List[Literal]:
        return self.accessor.literals(self.node, SH.name)

    @property
    def descriptions(self) -> List[Literal]:
        return self.accessor.literals(self.node, SH.description)

    @property
    def min_count(self) -> Optional[int]:
        """sh:minCount, or None if it is absent or asserted more than once.

        Raises:
            MalformedLiteralError: If a value is not an integer
        """
        return self.accessor.single_integer(self.node, SH.minCount)

    @min_count.setter
    def min_count(self, value: Optional[int]):
        self._set_count(SH.minCount, value)

    @property
    def max_count(self) -> Optional[int]:
        """sh:maxCount, or None if it is absent or asserted more than once.

        Raises:
            MalformedLiteralError: If a value is not an integer
        """
        return self.accessor.single_integer(self.node, SH.maxCount)

    @max_count.setter
    def max_count(self, value: Optional[int]):
        self._set_count(SH.maxCount, value)

    def _set_count(self, predicate: URIRef, value: Optional[int]) -> None:
        # Setting replaces every existing value; None only retracts
        self.store.retract_all(self.node, predicate)
        if value is not None:
            self.store.assert_annotation(self.node, predicate, str(value), datatype=XSD.integer)

    def add_in(self, value: Node) -> None:
        """Append a value to the sh:in list, creating the list if needed."""
        heads = [head for head in self.store.objects(self.node, SH_IN) if head != RDF.nil]
        if heads:
            self.store.append_to_list(_sorted(heads)[0], [value])
            return

        self.store.retract_all(self.node, SH_IN)
        head = self.store.assert_list([value])
        self.store.assert_triple(self.node, SH_IN, head)

    def add_datatype(self, datatype: URIRef) -> None:
        """Add an sh:datatype; existing ones are kept."""
        self.store.assert_triple(self.node, SH.datatype, datatype)

    def add_class(self, cls: URIRef) -> None:
        """Add an sh:class; existing ones are kept."""
        self.store.assert_triple(self.node, SH_CLASS, cls)

    def add_name(self, language: str, value: str) -> None:
        self.store.assert_annotation(self.node, SH.name, value, lang=language)

    def add_node(self, node_shape: URIRef) -> None:
        self.store.assert_triple(self.node, SH.node, node_shape)

    def add_description(self, language: str, value: str) -> None:
        self.store.assert_annotation(self.node, SH.description, value, lang=language)


def node_shapes(store: TripleStore, hierarchy: Optional[Hierarchy] = None) -> List[NodeShape]:
    """All named node shapes in the store."""
    hierarchy = hierarchy if hierarchy is not None else shape_hierarchy(store)
    subjects = [s for s in store.subjects(RDF.type, SH.NodeShape) if isinstance(s, URIRef)]
    return [NodeShape(store, s, hierarchy) for s in _sorted(subjects)]


def create_node_shape(store: TripleStore, iri: URIRef, hierarchy: Optional[Hierarchy] = None) -> NodeShape:
    """Declare `iri` as a sh:NodeShape and return its wrapper."""
    store.assert_triple(iri, RDF.type, SH.NodeShape)
    return NodeShape(store, iri, hierarchy)
