"""
Domain models for the hierarchy module.

These models describe the derived views over an is-a graph (closures,
canonical paths, per-node summaries) and the errors raised while
computing them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class HierarchyError(Exception):
    """Base class for all hierarchy errors."""


class StoreUnavailableError(HierarchyError):
    """The triple store could not answer a query.

    Propagated to the caller as-is; the hierarchy layer never retries.
    """


class MalformedLiteralError(HierarchyError):
    """A literal expected to be an integer or boolean failed to parse."""

    def __init__(self, value: str, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(f"Literal {value!r} is not a valid {expected}")


class HierarchyKindName(str, Enum):
    """Node kinds the hierarchy can be computed for."""
    CLASS = "class"    # ontology classes (rdfs:subClassOf between named classes)
    SHAPE = "shape"    # SHACL node shapes (rdfs:subClassOf between sh:NodeShape nodes)


@dataclass
class HierarchyStats:
    """Statistics about one flattened hierarchy."""

    total_nodes: int
    root_nodes: int                     # nodes with an empty canonical path
    deprecated_nodes: int
    max_depth: int                      # length of the longest canonical path
    multi_parent_nodes: int             # nodes with more than one eligible direct parent


class NodeHierarchy(BaseModel):
    """Hierarchy summary of a single node, with IRIs rendered as strings."""

    iri: str = Field(..., description="IRI (or blank node N3 form) of the node")
    kind: HierarchyKindName = Field(..., description="Hierarchy kind the summary was computed for")
    labels: Dict[str, str] = Field(default_factory=dict, description="language -> rdfs:label")
    deprecated: bool = Field(False, description="Whether the node is flagged deprecated")

    direct_parents: List[str] = Field(default_factory=list, description="Eligible direct super-types")
    direct_children: List[str] = Field(default_factory=list, description="Eligible direct sub-types")
    ancestors: List[str] = Field(default_factory=list, description="Transitive super-types, sorted")
    descendants: List[str] = Field(default_factory=list, description="Transitive sub-types, sorted")
    canonical_path: List[str] = Field(
        default_factory=list,
        description="Longest ancestor chain from the root down to (excluding) the node",
    )
    canonical_parent: Optional[str] = Field(
        None, description="Last element of the canonical path, the single-inheritance parent"
    )
