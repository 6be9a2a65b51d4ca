"""
Unit test for class and shape hierarchies.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m hierarchy.test_adapters

Or from the project root:
    pytest src/hierarchy/test_adapters.py
"""

from rdflib import BNode, Literal, Namespace

from .adapters import class_hierarchy, shape_hierarchy
from .config import HierarchyConfig
from .domain import HierarchyKindName, HierarchyStats
from .store import RdflibTripleStore
from .vocabulary import OWL, RDF, RDFS, SH

EX = Namespace("https://example.org/animals/")


def build_store() -> RdflibTripleStore:
    store = RdflibTripleStore()
    for cls in (EX.Animal, EX.Mammal, EX.Dog, EX.Cat, EX.Pet):
        store.assert_triple(cls, RDF.type, OWL.Class)
    store.assert_triple(EX.Dog, RDFS.subClassOf, EX.Mammal)
    store.assert_triple(EX.Dog, RDFS.subClassOf, EX.Pet)
    store.assert_triple(EX.Mammal, RDFS.subClassOf, EX.Animal)
    store.assert_triple(EX.Cat, RDFS.subClassOf, EX.Mammal)
    store.assert_triple(EX.Animal, RDFS.subClassOf, OWL.Thing)
    return store


def test_factories_pick_kind():
    """Test that the factories bind the right kind."""
    print("Testing hierarchy factories...")

    store = build_store()

    assert class_hierarchy(store).kind.name == HierarchyKindName.CLASS
    assert shape_hierarchy(store).kind.name == HierarchyKindName.SHAPE
    assert class_hierarchy(store).is_root(OWL.Thing)
    assert not class_hierarchy(store).is_root(EX.Animal)

    print("✓ Hierarchy factories working correctly")


def test_configured_roots():
    """Test that configured root sentinels end canonical paths."""
    print("Testing configured roots...")

    store = build_store()
    config = HierarchyConfig(class_roots=(str(EX.Mammal),))
    hierarchy = class_hierarchy(store, config)

    assert hierarchy.is_root(EX.Mammal)
    assert not hierarchy.is_root(OWL.Thing)
    assert hierarchy.longest_ancestor_path(EX.Cat) == []
    assert hierarchy.longest_ancestor_path(EX.Dog) == []
    # owl:Thing is an ordinary class once it is no longer a root
    assert hierarchy.longest_ancestor_path(EX.Animal) == [OWL.Thing]

    print("✓ Configured roots working correctly")


def test_configured_deprecation_predicate():
    """Test a custom deprecation annotation."""
    print("Testing configured deprecation predicate...")

    store = build_store()
    store.assert_triple(EX.Mammal, EX.retired, Literal(True))
    config = HierarchyConfig(deprecation_predicate=str(EX.retired))

    assert class_hierarchy(store, config).longest_ancestor_path(EX.Dog) == [EX.Pet]
    assert class_hierarchy(store).longest_ancestor_path(EX.Dog) == [EX.Animal, EX.Mammal]

    print("✓ Configured deprecation predicate working correctly")


def test_flatten():
    """Test the single-inheritance view of a class hierarchy."""
    print("Testing flatten...")

    hierarchy = class_hierarchy(build_store())
    flattened = hierarchy.flatten()

    assert flattened == {
        EX.Animal: [],
        EX.Cat: [EX.Animal, EX.Mammal],
        EX.Dog: [EX.Animal, EX.Mammal],
        EX.Mammal: [EX.Animal],
        EX.Pet: [],
    }
    assert OWL.Thing not in flattened

    print("✓ Flatten working correctly")


def test_flatten_shapes_only_contains_shapes():
    """Test that shape flattening ignores plain classes."""
    print("Testing shape flatten...")

    store = build_store()
    store.assert_triple(EX.DogShape, RDF.type, SH.NodeShape)
    store.assert_triple(EX.PetShape, RDF.type, SH.NodeShape)
    store.assert_triple(EX.DogShape, RDFS.subClassOf, EX.PetShape)
    store.assert_triple(EX.DogShape, RDFS.subClassOf, EX.Dog)

    assert shape_hierarchy(store).flatten() == {
        EX.DogShape: [EX.PetShape],
        EX.PetShape: [],
    }

    # The class view does not pick the shapes up through their subClassOf edges
    classes = class_hierarchy(store)
    assert EX.DogShape not in classes.flatten()
    assert not classes.contains(EX.DogShape)
    assert classes.get_stats().total_nodes == 5

    print("✓ Shape flatten working correctly")


def test_stats():
    """Test hierarchy statistics."""
    print("Testing stats...")

    store = build_store()
    store.assert_triple(EX.Pet, OWL.deprecated, Literal(True))
    stats = class_hierarchy(store).get_stats()

    assert isinstance(stats, HierarchyStats)
    assert stats.total_nodes == 5
    assert stats.root_nodes == 2
    assert stats.deprecated_nodes == 1
    assert stats.max_depth == 2
    # Pet is deprecated, so Dog has a single eligible parent
    assert stats.multi_parent_nodes == 0

    print("✓ Stats working correctly")


def test_contains():
    """Test hierarchy membership of declared, linked and unknown nodes."""
    print("Testing contains...")

    store = build_store()
    store.assert_triple(EX.Orphan, RDF.type, RDFS.Class)
    restriction = BNode()
    store.assert_triple(restriction, RDF.type, OWL.Restriction)
    hierarchy = class_hierarchy(store)

    assert hierarchy.contains(EX.Dog)
    assert hierarchy.contains(EX.Orphan)
    assert not hierarchy.contains(EX.Unicorn)
    assert not hierarchy.contains(restriction)
    assert not shape_hierarchy(store).contains(EX.Dog)

    print("✓ Contains working correctly")


def test_property_kinds():
    """Test object/datatype property detection through transitive types."""
    print("Testing property kinds...")

    store = build_store()
    store.assert_triple(EX.hasOwner, RDF.type, OWL.ObjectProperty)
    store.assert_triple(EX.weight, RDF.type, OWL.DatatypeProperty)
    store.assert_triple(EX.ownedBy, RDF.type, EX.OwnershipProperty)
    store.assert_triple(EX.OwnershipProperty, RDFS.subClassOf, OWL.ObjectProperty)
    hierarchy = class_hierarchy(store)

    assert hierarchy.is_object_property(EX.hasOwner)
    assert not hierarchy.is_data_property(EX.hasOwner)
    assert hierarchy.is_data_property(EX.weight)
    assert hierarchy.is_object_property(EX.ownedBy)
    assert not hierarchy.is_object_property(EX.Dog)

    # Property types are read the same way whatever the hierarchy kind
    shapes = shape_hierarchy(store)
    assert shapes.is_object_property(EX.hasOwner)
    assert shapes.is_object_property(EX.ownedBy)
    assert shapes.is_data_property(EX.weight)

    print("✓ Property kinds working correctly")


def run_all_tests():
    """Run all test functions."""
    print("=" * 50)
    print("Running Hierarchy Tests")
    print("=" * 50)

    test_functions = [
        test_factories_pick_kind,
        test_configured_roots,
        test_configured_deprecation_predicate,
        test_flatten,
        test_flatten_shapes_only_contains_shapes,
        test_stats,
        test_contains,
        test_property_kinds,
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
