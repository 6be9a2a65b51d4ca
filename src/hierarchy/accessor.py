"""
Graph accessor translating hierarchy questions into triple-pattern lookups.

Every method is a pure read against the TripleStore. A missing edge or
annotation is an empty result, never an error; only an unreachable store
raises (StoreUnavailableError, from the store itself).
"""

import logging
from typing import Dict, List, Optional, Set

from rdflib import Literal, URIRef
from rdflib.term import Node

from .domain import MalformedLiteralError
from .store import TripleStore
from .vocabulary import OWL, RDF, RDFS, SH, SKOS

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1")
_FALSE_VALUES = ("false", "0")


def parse_boolean(literal: Literal) -> bool:
    """Parse the lexical form of a literal as an xsd:boolean.

    Raises:
        MalformedLiteralError: If the value is not one of true/false/1/0
    """
    lexical = str(literal).strip().lower()
    if lexical in _TRUE_VALUES:
        return True
    if lexical in _FALSE_VALUES:
        return False
    raise MalformedLiteralError(str(literal), "boolean")


def parse_integer(literal: Literal) -> int:
    """Parse the lexical form of a literal as an integer.

    Raises:
        MalformedLiteralError: If the value is not an integer
    """
    try:
        return int(str(literal).strip())
    except ValueError as e:
        raise MalformedLiteralError(str(literal), "integer") from e


class GraphAccessor:
    """Direct (one-step) edge and annotation queries over a TripleStore."""

    def __init__(self, store: TripleStore):
        self.store = store

    # Is-a edges

    def direct_parents(self, node: Node, predicate: URIRef = RDFS.subClassOf) -> Set[Node]:
        """All nodes that `node` directly declares as super-type via `predicate`."""
        return {obj for obj in self.store.objects(node, predicate) if not isinstance(obj, Literal)}

    def direct_children(self, node: Node, predicate: URIRef = RDFS.subClassOf) -> Set[Node]:
        """All nodes that directly declare `node` as super-type via `predicate`."""
        return set(self.store.subjects(predicate, node))

    def direct_types(self, instance: Node) -> Set[Node]:
        """All nodes asserted as rdf:type of `instance`."""
        return self.direct_parents(instance, RDF.type)

    def typed_instances(self, node: Node) -> Set[Node]:
        """All nodes whose rdf:type includes `node`."""
        return self.direct_children(node, RDF.type)

    # Type checks

    def has_type(self, node: Node, rdf_type: URIRef) -> bool:
        return self.store.contains(node, RDF.type, rdf_type)

    def is_owl_class(self, node: Node) -> bool:
        return self.has_type(node, OWL.Class)

    def is_rdfs_class(self, node: Node) -> bool:
        return self.has_type(node, RDFS.Class)

    def is_class(self, node: Node) -> bool:
        """Check whether a node is declared an RDFS or OWL class."""
        return self.is_rdfs_class(node) or self.is_owl_class(node)

    def is_node_shape(self, node: Node) -> bool:
        return self.has_type(node, SH.NodeShape)

    # Annotations

    def literals(self, node: Node, predicate: URIRef) -> List[Literal]:
        """All literal values of `predicate` on `node`; non-literal objects are skipped."""
        return [obj for obj in self.store.objects(node, predicate) if isinstance(obj, Literal)]

    def labels(self, node: Node) -> List[Literal]:
        return self.literals(node, RDFS.label)

    def comments(self, node: Node) -> List[Literal]:
        return self.literals(node, RDFS.comment)

    def definitions(self, node: Node) -> List[Literal]:
        return self.literals(node, SKOS.definition)

    def label_map(self, node: Node) -> Dict[str, str]:
        """Map language tag -> rdfs:label; untagged labels are keyed by ''."""
        labels = {}
        for label in self.labels(node):
            labels[label.language or ""] = str(label)
        return labels

    def is_deprecated(self, node: Node, predicate: URIRef = OWL.deprecated) -> bool:
        """Check whether `node` carries a true-valued deprecation annotation.

        Every asserted value is parsed, so a malformed one is reported even
        when another value is true.

        Raises:
            MalformedLiteralError: If a deprecation value is not a boolean
        """
        values = [parse_boolean(literal) for literal in self.literals(node, predicate)]
        return any(values)

    def single_integer(self, node: Node, predicate: URIRef) -> Optional[int]:
        """Return the integer value of a single-valued annotation.

        Returns:
            The value if exactly one is asserted, None if none or several are
            (several values mean the source data is malformed)

        Raises:
            MalformedLiteralError: If any asserted value is not an integer
        """
        values = [parse_integer(literal) for literal in self.literals(node, predicate)]
        if len(values) == 1:
            return values[0]
        if len(values) > 1:
            logger.warning(f"{node} has {len(values)} values for {predicate}, expected exactly one")
        return None

    # Properties

    def properties_through_domain(self, node: Node) -> Set[URIRef]:
        """Named properties that have `node` as their rdfs:domain."""
        return {prop for prop in self.store.subjects(RDFS.domain, node) if isinstance(prop, URIRef)}

    def ranges(self, node: Node) -> Set[URIRef]:
        """Named rdfs:range values of a property."""
        return {obj for obj in self.store.objects(node, RDFS.range) if isinstance(obj, URIRef)}
