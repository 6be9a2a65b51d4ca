"""
Vocabulary terms and IRI helpers used across the hierarchy module.

The W3C vocabularies come straight from rdflib; only the few terms rdflib
does not ship (Creative Commons) are declared here.
"""

from urllib.parse import urlsplit

from rdflib import Namespace, URIRef
from rdflib.namespace import DC, OWL, RDF, RDFS, SH, SKOS, XSD

CC = Namespace("http://creativecommons.org/ns#")
XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema#"

# SHACL terms whose local names clash with Python keywords
SH_CLASS = SH["class"]
SH_IN = SH["in"]

# Universal roots: reaching one of these ends ancestor path construction
TOP_THINGS = frozenset({OWL.Thing, RDFS.Resource})

__all__ = [
    "CC", "DC", "OWL", "RDF", "RDFS", "SH", "SKOS", "XSD",
    "XSD_NAMESPACE", "SH_CLASS", "SH_IN", "TOP_THINGS",
    "local_name", "namespace_of", "is_xsd_type",
]


def local_name(iri: URIRef) -> str:
    """Return the local part of an IRI.

    Hash IRIs yield the fragment, everything else the last path segment:
    ``https://w3id.org/rec#Building`` -> ``Building`` and
    ``https://w3id.org/rec/Refrigerator`` -> ``Refrigerator``.
    """
    parts = urlsplit(str(iri))
    if parts.fragment:
        return parts.fragment
    return parts.path.rsplit("/", 1)[-1]


def namespace_of(iri: URIRef) -> URIRef:
    """Return the namespace IRI of a hash or slash IRI.

    Raises:
        ValueError: If the IRI has no namespace/local name separator
    """
    parts = urlsplit(str(iri))
    if parts.netloc:
        base = f"{parts.scheme}://{parts.netloc}{parts.path}"
    else:
        base = f"{parts.scheme}:{parts.path}"

    if parts.fragment:
        return URIRef(base + "#")

    # TODO: URN namespaces (urn:x:y) are not split on ':' yet
    if base.count("/") >= 3:
        return URIRef(base[: base.rindex("/") + 1])

    raise ValueError(f"The IRI {iri} doesn't contain a namespace/local name separator.")


def is_xsd_type(iri: URIRef) -> bool:
    """Check whether an IRI is in the XML Schema namespace."""
    return str(iri).startswith(XSD_NAMESPACE)
