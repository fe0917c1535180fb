#!/usr/bin/env python3
"""Fixture tree showcase. Runs standalone without external services.

Demonstrates:
  - Declaring collections and reference rules
  - Composing a fixture tree with model() and patch()
  - seed(), documents() and cleanup() on MemoryDocumentStore
  - The seeded() context manager on LocalDocumentStore

Usage:
  python examples/showcase.py
"""

import asyncio
from pathlib import Path
from tempfile import TemporaryDirectory

from tree_seeder import (
    DocumentStore,
    LocalDocumentStore,
    MemoryDocumentStore,
    NodeBuilder,
    ReferenceRules,
    cleanup,
    documents,
    model,
    patch,
    seed,
    seeded,
)

# ---------------------------------------------------------------------------
# Fixture world
# ---------------------------------------------------------------------------


def build_world(store: DocumentStore) -> tuple[NodeBuilder, NodeBuilder, NodeBuilder]:
    elders = store.collection("elders", {"name": None, "mages": [], "wand": {"wandId": None}})
    mages = store.collection("mages", {"name": None, "wands": []})
    wands = store.collection("wands", {"wood": "oak"})

    rules = ReferenceRules.declare({
        elders: [("mages[]", mages), ("wand.wandId", wands)],
        mages: [("elderId", elders), ("wands[].wandId", wands)],
    })
    return model(elders, rules), model(mages, rules), model(wands, rules)


# ---------------------------------------------------------------------------
# 1. MemoryDocumentStore: seed, inspect, clean up
# ---------------------------------------------------------------------------


async def demo_memory_store() -> None:
    """Seed a small tree, print the exported snapshot and clean it up."""
    print("\n=== MemoryDocumentStore Demo ===\n")

    store = MemoryDocumentStore()
    elder, mage, wand = build_world(store)

    template = elder(
        wand(),
        patch(mage(wand(), wand()), {"name": "Morgana"}),
        mage(),
    )
    root = await seed(template)

    tree = documents(root)
    print(f"elder {tree.identity[:8]} mages={[m[:8] for m in tree.record['mages']]}")
    for child in tree.children:
        print(f"  {child.collection_name:<6} {child.identity[:8]} {child.record}")

    for name in store.collection_names():
        print(f"{name}: {await store.count(name)} record(s)")

    await cleanup(root)
    remaining = [await store.count(name) for name in store.collection_names()]
    print(f"After cleanup: {sum(remaining)} record(s)")


# ---------------------------------------------------------------------------
# 2. LocalDocumentStore: seeded() context manager
# ---------------------------------------------------------------------------


async def demo_local_store(base_path: Path) -> None:
    """Seed onto disk for the duration of a block."""
    print("\n=== LocalDocumentStore Demo ===\n")

    store = LocalDocumentStore(base_path)
    elder, mage, wand = build_world(store)

    async with seeded(elder(mage(wand()))) as root:
        for path in sorted(base_path.rglob("*.json")):
            print(f"  {path.relative_to(base_path)}")
        print(f"Seeded tree rooted at {root.identity[:8]}")

    print(f"Files left after seeded(): {len(list(base_path.rglob('*.json')))}")


async def run_demos() -> None:
    await demo_memory_store()
    with TemporaryDirectory() as tmp:
        await demo_local_store(Path(tmp))


def main() -> None:
    asyncio.run(run_demos())
    print("\nAll demos completed successfully.")


if __name__ == "__main__":
    main()
