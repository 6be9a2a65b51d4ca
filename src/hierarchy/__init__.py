"""
Hierarchy Module

This module derives transitive relationships (ancestors, descendants,
typed instances) and canonical single-inheritance paths from class and
SHACL shape hierarchies held in an RDF triple store.

Public Interface:
- HierarchyService: High-level service for all hierarchy operations
- HierarchyConfig: Configuration (roots, deprecation predicate, log level)
- RdflibTripleStore: Triple store over an rdflib Graph
- Errors: HierarchyError, StoreUnavailableError, MalformedLiteralError

Private Components:
- GraphAccessor, ClosureEngine, CanonicalPathSelector, Hierarchy
- SHACL shape wrappers
"""

from .config import HierarchyConfig, configure_logging
from .domain import HierarchyError, MalformedLiteralError, StoreUnavailableError
from .service import HierarchyService
from .store import RdflibTripleStore, TripleStore

__all__ = [
    "HierarchyService",
    "HierarchyConfig",
    "configure_logging",
    "RdflibTripleStore",
    "TripleStore",
    "HierarchyError",
    "StoreUnavailableError",
    "MalformedLiteralError",
]
