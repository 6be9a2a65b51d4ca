"""
Triple store collaborator used by the hierarchy module.

The hierarchy algorithms depend only on the narrow TripleStore interface.
RdflibTripleStore implements it over an rdflib Graph, which may itself be
backed by any rdflib store plugin (in-memory, SPARQL endpoint, ...).
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.collection import Collection
from rdflib.term import Node

from .domain import StoreUnavailableError
from .vocabulary import CC, DC, OWL, RDF, RDFS, SH, SKOS

logger = logging.getLogger(__name__)


class TripleStore(ABC):
    """Read/write interface the hierarchy layer needs from a triple store."""

    @abstractmethod
    def objects(self, subject: Node, predicate: URIRef) -> List[Node]:
        """Return all objects of triples matching (subject, predicate, ?)."""
        pass

    @abstractmethod
    def subjects(self, predicate: URIRef, obj: Optional[Node]) -> List[Node]:
        """Return all subjects of triples matching (?, predicate, obj); obj None matches any."""
        pass

    @abstractmethod
    def contains(self, subject: Node, predicate: URIRef, obj: Node) -> bool:
        """Check whether the exact triple is asserted."""
        pass

    @abstractmethod
    def assert_triple(self, subject: Node, predicate: URIRef, obj: Node) -> None:
        pass

    @abstractmethod
    def retract_triple(self, subject: Node, predicate: URIRef, obj: Node) -> None:
        pass

    @abstractmethod
    def list_items(self, head: Node) -> List[Node]:
        """Decode the RDF list starting at head."""
        pass

    @abstractmethod
    def assert_list(self, items: Iterable[Node]) -> Node:
        """Encode items as a new RDF list and return its head."""
        pass

    @abstractmethod
    def append_to_list(self, head: Node, items: Iterable[Node]) -> None:
        pass

    def assert_annotation(self,
                          subject: Node,
                          predicate: URIRef,
                          value,
                          lang: Optional[str] = None,
                          datatype: Optional[URIRef] = None) -> Literal:
        """Assert a literal-valued annotation and return the literal."""
        literal = Literal(value, lang=lang, datatype=datatype)
        self.assert_triple(subject, predicate, literal)
        return literal

    def retract_all(self, subject: Node, predicate: URIRef) -> None:
        """Retract every (subject, predicate, ?) triple."""
        for obj in self.objects(subject, predicate):
            self.retract_triple(subject, predicate, obj)


class RdflibTripleStore(TripleStore):
    """TripleStore over an rdflib Graph."""

    def __init__(self, graph: Optional[Graph] = None):
        """Initialize the store.

        Args:
            graph: Optional rdflib graph. If None, creates a new in-memory one.
        """
        self.graph = graph if graph is not None else Graph()
        self._init_namespaces()

    def _init_namespaces(self):
        """Bind the prefixes used by the hierarchy vocabulary."""
        self.graph.bind("owl", OWL)
        self.graph.bind("rdfs", RDFS)
        self.graph.bind("sh", SH)
        self.graph.bind("skos", SKOS)
        self.graph.bind("dc", DC)
        self.graph.bind("cc", CC)

    def __len__(self) -> int:
        try:
            return len(self.graph)
        except Exception as e:
            raise StoreUnavailableError(f"Could not count triples: {e}") from e

    def objects(self, subject: Node, predicate: URIRef) -> List[Node]:
        try:
            return list(self.graph.objects(subject, predicate))
        except Exception as e:
            raise StoreUnavailableError(
                f"Could not read objects of ({subject}, {predicate}): {e}"
            ) from e

    def subjects(self, predicate: URIRef, obj: Optional[Node]) -> List[Node]:
        try:
            return list(self.graph.subjects(predicate, obj))
        except Exception as e:
            raise StoreUnavailableError(
                f"Could not read subjects of ({predicate}, {obj}): {e}"
            ) from e

    def contains(self, subject: Node, predicate: URIRef, obj: Node) -> bool:
        try:
            return (subject, predicate, obj) in self.graph
        except Exception as e:
            raise StoreUnavailableError(
                f"Could not test ({subject}, {predicate}, {obj}): {e}"
            ) from e

    def assert_triple(self, subject: Node, predicate: URIRef, obj: Node) -> None:
        try:
            self.graph.add((subject, predicate, obj))
        except Exception as e:
            raise StoreUnavailableError(
                f"Could not assert ({subject}, {predicate}, {obj}): {e}"
            ) from e

    def retract_triple(self, subject: Node, predicate: URIRef, obj: Node) -> None:
        try:
            self.graph.remove((subject, predicate, obj))
        except Exception as e:
            raise StoreUnavailableError(
                f"Could not retract ({subject}, {predicate}, {obj}): {e}"
            ) from e

    def list_items(self, head: Node) -> List[Node]:
        try:
            return list(Collection(self.graph, head))
        except Exception as e:
            raise StoreUnavailableError(f"Could not read RDF list {head}: {e}") from e

    def assert_list(self, items: Iterable[Node]) -> Node:
        items = list(items)
        if not items:
            return RDF.nil

        head = BNode()
        try:
            Collection(self.graph, head, items)
        except Exception as e:
            raise StoreUnavailableError(f"Could not assert RDF list: {e}") from e
        logger.debug(f"Asserted RDF list {head} with {len(items)} items")
        return head

    def append_to_list(self, head: Node, items: Iterable[Node]) -> None:
        try:
            collection = Collection(self.graph, head)
            for item in items:
                collection.append(item)
        except Exception as e:
            raise StoreUnavailableError(f"Could not append to RDF list {head}: {e}") from e
