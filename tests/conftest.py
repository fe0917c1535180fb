"""Common test fixtures: an in-memory store and a wizarding-world rule table."""

from dataclasses import dataclass

import pytest

from tree_seeder import DocumentStore, EntityDescriptor, MemoryDocumentStore, ReferenceRules, model
from tree_seeder.tree import NodeBuilder


@dataclass
class Realm:
    """Collections, rules and node builders for the elder/mage/dragon fixture world."""

    store: DocumentStore
    elders: EntityDescriptor
    mages: EntityDescriptor
    dragons: EntityDescriptor
    goldbars: EntityDescriptor
    wands: EntityDescriptor
    rules: ReferenceRules
    elder: NodeBuilder
    mage: NodeBuilder
    dragon: NodeBuilder
    goldbar: NodeBuilder
    wand: NodeBuilder

    @property
    def collections(self) -> list[str]:
        return ["elders", "mages", "dragons", "goldbars", "wands"]


def build_realm(store: DocumentStore) -> Realm:
    elders = store.collection("elders", {"name": None, "mages": [], "wand": {"wandId": None}})
    mages = store.collection("mages", {"name": None, "element": None, "wands": []})
    dragons = store.collection("dragons", {"name": None, "age": 100, "mageId": None, "goldbars": []})
    goldbars = store.collection("goldbars", {"weightInKg": 1, "dragonId": None, "mageId": None})
    wands = store.collection("wands", {"wood": None})

    rules = ReferenceRules.declare({
        elders: [("mages[]", mages), ("wand.wandId", wands)],
        mages: [("elderId", elders), ("wands[].wandId", wands)],
        dragons: [("mageId", mages), ("goldbars[]", goldbars)],
        goldbars: [("mageId", mages), ("dragonId", dragons)],
    })

    return Realm(
        store=store,
        elders=elders,
        mages=mages,
        dragons=dragons,
        goldbars=goldbars,
        wands=wands,
        rules=rules,
        elder=model(elders, rules),
        mage=model(mages, rules),
        dragon=model(dragons, rules),
        goldbar=model(goldbars, rules),
        wand=model(wands, rules),
    )


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def realm(store: MemoryDocumentStore) -> Realm:
    return build_realm(store)


@pytest.fixture
def realm_factory():
    """Build the fixture world on a store other than the default one."""
    return build_realm
