"""
Unit test for the HierarchyService.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m hierarchy.test_service

Or from the project root:
    pytest src/hierarchy/test_service.py
"""

import pytest
from rdflib import BNode, Graph, URIRef

from .domain import HierarchyKindName, NodeHierarchy
from .service import HierarchyService
from .store import RdflibTripleStore
from .vocabulary import OWL, RDFS

ANIMALS_TTL = """
@prefix ex: <https://example.org/animals/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix sh: <http://www.w3.org/ns/shacl#> .

ex:Animal a owl:Class ; rdfs:subClassOf owl:Thing ; rdfs:label "Animal"@en .
ex:Mammal a owl:Class ; rdfs:subClassOf ex:Animal .
ex:Dog a owl:Class ; rdfs:subClassOf ex:Mammal, ex:Pet ; rdfs:label "Dog"@en, "Pes"@cs .
ex:Cat a owl:Class ; rdfs:subClassOf ex:Mammal .
ex:Pet a owl:Class .

ex:fido a ex:Dog .
ex:tom a ex:Cat .

ex:AnimalShape a sh:NodeShape .
ex:DogShape a sh:NodeShape ; rdfs:subClassOf ex:AnimalShape .
"""

EX = "https://example.org/animals/"


def build_service() -> HierarchyService:
    graph = Graph()
    graph.parse(data=ANIMALS_TTL, format="turtle")
    return HierarchyService(RdflibTripleStore(graph))


def test_describe():
    """Test the per-node summary."""
    print("Testing describe...")

    service = build_service()
    summary = service.describe(EX + "Dog")

    assert isinstance(summary, NodeHierarchy)
    assert summary.iri == EX + "Dog"
    assert summary.kind == HierarchyKindName.CLASS
    assert summary.labels == {"en": "Dog", "cs": "Pes"}
    assert not summary.deprecated
    assert summary.direct_parents == [EX + "Mammal", EX + "Pet"]
    assert summary.direct_children == []
    assert set(summary.ancestors) == {EX + "Animal", EX + "Mammal", EX + "Pet", str(OWL.Thing)}
    assert summary.descendants == []
    assert summary.canonical_path == [EX + "Animal", EX + "Mammal"]
    assert summary.canonical_parent == EX + "Mammal"

    root = service.describe(EX + "Animal")
    assert root.canonical_path == []
    assert root.canonical_parent is None
    assert set(root.descendants) == {EX + "Mammal", EX + "Dog", EX + "Cat"}

    print("✓ Describe working correctly")


def test_describe_unknown_raises():
    """Test that describing a node outside the hierarchy fails."""
    print("Testing describe of unknown node...")

    service = build_service()

    with pytest.raises(ValueError, match="Class not found"):
        service.describe(EX + "Unicorn")
    with pytest.raises(ValueError, match="Class not found"):
        service.describe(EX + "DogShape")
    with pytest.raises(ValueError, match="Shape not found"):
        service.describe(EX + "Dog", kind="shape")

    print("✓ Unknown node handled correctly")


def test_bad_arguments():
    """Test kind and IRI validation."""
    print("Testing argument validation...")

    service = build_service()

    with pytest.raises(ValueError, match="Unknown hierarchy kind"):
        service.ancestors(EX + "Dog", kind="property")
    with pytest.raises(ValueError, match="must not be empty"):
        service.ancestors("  ")

    print("✓ Argument validation working correctly")


def test_closures():
    """Test sorted ancestors, descendants and transitive types."""
    print("Testing closures...")

    service = build_service()

    assert set(service.ancestors(EX + "Cat")) == {URIRef(EX + "Mammal"), URIRef(EX + "Animal"), OWL.Thing}
    assert service.descendants(EX + "Mammal") == [URIRef(EX + "Cat"), URIRef(EX + "Dog")]
    assert set(service.transitive_types(EX + "fido")) == {
        URIRef(EX + "Dog"), URIRef(EX + "Mammal"), URIRef(EX + "Pet"), URIRef(EX + "Animal"), OWL.Thing,
    }

    # Parsers rename blank nodes, so the anonymous class is asserted directly.
    # Blank nodes are not named classes: both directions of the closure skip it.
    service.store.assert_triple(BNode("anon"), RDFS.subClassOf, URIRef(EX + "Animal"))
    assert service.ancestors("_:anon") == []
    assert BNode("anon") not in service.descendants(EX + "Animal")
    assert EX + "Mammal" in service.describe(EX + "Animal").descendants

    print("✓ Closures working correctly")


def test_typed_instances():
    """Test direct and transitive instance lookups."""
    print("Testing typed instances...")

    service = build_service()

    assert service.typed_instances(EX + "Mammal") == []
    assert service.typed_instances(EX + "Mammal", transitive=True) == [URIRef(EX + "fido"), URIRef(EX + "tom")]
    assert service.typed_instances(EX + "Dog") == [URIRef(EX + "fido")]

    print("✓ Typed instances working correctly")


def test_flatten_and_stats():
    """Test the flattened class hierarchy and its statistics."""
    print("Testing flatten and stats...")

    service = build_service()
    flattened = service.flatten()

    assert flattened == {
        URIRef(EX + "Animal"): [],
        URIRef(EX + "Cat"): [URIRef(EX + "Animal"), URIRef(EX + "Mammal")],
        URIRef(EX + "Dog"): [URIRef(EX + "Animal"), URIRef(EX + "Mammal")],
        URIRef(EX + "Mammal"): [URIRef(EX + "Animal")],
        URIRef(EX + "Pet"): [],
    }

    stats = service.get_stats()
    assert stats.total_nodes == 5
    assert stats.root_nodes == 2
    assert stats.deprecated_nodes == 0
    assert stats.max_depth == 2
    assert stats.multi_parent_nodes == 1

    print("✓ Flatten and stats working correctly")


def test_shape_kind():
    """Test the service on the shape hierarchy."""
    print("Testing shape kind...")

    service = build_service()

    assert service.flatten(kind="shape") == {
        URIRef(EX + "AnimalShape"): [],
        URIRef(EX + "DogShape"): [URIRef(EX + "AnimalShape")],
    }
    assert service.ancestors(EX + "DogShape", kind=HierarchyKindName.SHAPE) == [URIRef(EX + "AnimalShape")]

    summary = service.describe(EX + "DogShape", kind="shape")
    assert summary.direct_parents == [EX + "AnimalShape"]
    assert summary.canonical_parent == EX + "AnimalShape"

    print("✓ Shape kind working correctly")


def run_all_tests():
    """Run all test functions."""
    print("=" * 50)
    print("Running HierarchyService Tests")
    print("=" * 50)

    test_functions = [
        test_describe,
        test_describe_unknown_raises,
        test_bad_arguments,
        test_closures,
        test_typed_instances,
        test_flatten_and_stats,
        test_shape_kind,
    ]

    passed = 0
    failed = 0

    for test_func in test_functions:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"✗ {test_func.__name__} FAILED: {e}")
            failed += 1

    print("=" * 50)
    print(f"Test Results: {passed} passed, {failed} failed")
    print("=" * 50)

    return failed == 0


def main():
    """Main function to run the tests."""
    success = run_all_tests()
    if success:
        print("All tests passed!")
        return 0
    else:
        print("Some tests failed!")
        return 1


if __name__ == "__main__":
    exit(main())
