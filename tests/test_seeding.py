"""Tests for seed(), persist(), cleanup() and seeded()."""

import asyncio

import pytest

from tree_seeder import (
    LocalDocumentStore,
    MemoryDocumentStore,
    ReferenceRules,
    SeedingRequiredError,
    cleanup,
    documents,
    iter_nodes,
    materialize,
    model,
    patch,
    persist,
    seed,
    seeded,
)


class FlakyStore(MemoryDocumentStore):
    """Memory store whose writes and deletes fail for one collection."""

    def __init__(self, failing: str) -> None:
        super().__init__()
        self.failing = failing
        self.fail_deletes = False

    async def write_record(self, collection, identity, data):
        if collection == self.failing:
            raise RuntimeError(f"write to {collection} rejected")
        await super().write_record(collection, identity, data)

    async def remove_record(self, collection, identity):
        if self.fail_deletes and collection == self.failing:
            raise RuntimeError(f"delete from {collection} rejected")
        await super().remove_record(collection, identity)


async def _counts(store: MemoryDocumentStore, names: list[str]) -> dict[str, int]:
    return {name: await store.count(name) for name in names}


class TestSeedSingleNode:
    @pytest.mark.asyncio
    async def test_childless_node(self, realm):
        root = await seed(realm.elder())

        assert await _counts(realm.store, realm.collections) == {
            "elders": 1,
            "mages": 0,
            "dragons": 0,
            "goldbars": 0,
            "wands": 0,
        }
        stored = await realm.store.get("elders", root.identity)
        assert stored == {"_id": root.identity, "name": None, "mages": [], "wand": {"wandId": None}}

    @pytest.mark.asyncio
    async def test_rejects_materialized_input(self, realm):
        with pytest.raises(TypeError):
            await seed(materialize(realm.elder()))  # type: ignore[arg-type]


class TestSeedReferences:
    @pytest.mark.asyncio
    async def test_mutual_scalar_rule(self, realm):
        root = await seed(realm.elder(realm.mage()))
        mage_id = root.children[0].identity

        elder = await realm.store.get("elders", root.identity)
        mage = await realm.store.get("mages", mage_id)
        assert elder is not None and mage is not None
        assert elder["mages"] == [mage_id]
        assert mage["elderId"] == root.identity

    @pytest.mark.asyncio
    async def test_one_directional_rule(self, store: MemoryDocumentStore):
        owners = store.collection("owners")
        pets = store.collection("pets")
        rules = ReferenceRules.declare({pets: [("ownerId", owners)]})
        root = await seed(model(owners, rules)(model(pets, rules)()))

        owner = await store.get("owners", root.identity)
        pet = await store.get("pets", root.children[0].identity)
        assert owner == {"_id": root.identity}
        assert pet == {"_id": root.children[0].identity, "ownerId": root.identity}

    @pytest.mark.asyncio
    async def test_big_tree(self, realm):
        root = await seed(
            realm.elder(
                realm.wand(),
                realm.mage(
                    realm.wand(),
                    realm.wand(),
                    realm.dragon(
                        realm.goldbar(),
                        realm.goldbar(),
                    ),
                    realm.dragon(),
                ),
                realm.mage(),
            )
        )
        store = realm.store
        elder_wand, first_mage, second_mage = root.children
        first_wand, second_wand, hoarding_dragon, lonely_dragon = first_mage.children

        assert await _counts(store, realm.collections) == {
            "elders": 1,
            "mages": 2,
            "dragons": 2,
            "goldbars": 2,
            "wands": 3,
        }

        elder = await store.get("elders", root.identity)
        assert elder is not None
        assert elder["mages"] == [first_mage.identity, second_mage.identity]
        assert elder["wand"]["wandId"] == elder_wand.identity

        for mage_node, wand_nodes in ((first_mage, [first_wand, second_wand]), (second_mage, [])):
            mage = await store.get("mages", mage_node.identity)
            assert mage is not None
            assert mage["elderId"] == root.identity
            assert [entry["wandId"] for entry in mage["wands"]] == [wand.identity for wand in wand_nodes]

        hoard = await store.get("dragons", hoarding_dragon.identity)
        lonely = await store.get("dragons", lonely_dragon.identity)
        assert hoard is not None and lonely is not None
        assert hoard["mageId"] == lonely["mageId"] == first_mage.identity
        assert hoard["goldbars"] == [goldbar.identity for goldbar in hoarding_dragon.children]
        assert lonely["goldbars"] == []

        for goldbar_node in hoarding_dragon.children:
            goldbar = await store.get("goldbars", goldbar_node.identity)
            assert goldbar is not None
            assert goldbar["dragonId"] == hoarding_dragon.identity
            assert goldbar["weightInKg"] == 1

        for wand_node in (elder_wand, first_wand, second_wand):
            assert await store.get("wands", wand_node.identity) == {"_id": wand_node.identity, "wood": None}

    @pytest.mark.asyncio
    async def test_seeding_same_template_twice(self, realm):
        template = realm.elder(realm.wand(), realm.mage(realm.wand()))
        first = await seed(template)
        second = await seed(template)

        first_ids = {node.identity for node in iter_nodes(first)}
        second_ids = {node.identity for node in iter_nodes(second)}
        assert first_ids.isdisjoint(second_ids)

        for run in (first, second):
            elder = await realm.store.get("elders", run.identity)
            assert elder is not None
            assert elder["wand"]["wandId"] == run.children[0].identity
            assert elder["mages"] == [run.children[1].identity]

        assert await realm.store.count("elders") == 2
        assert await realm.store.count("wands") == 4


class TestSeedPatches:
    @pytest.mark.asyncio
    async def test_patch_fields(self, store: MemoryDocumentStore):
        wizards = store.collection(
            "people",
            {"firstName": "John", "lastName": "Doe", "age": 50, "stats": {"hp": 100, "magic": 3}, "beasts": []},
        )
        wizard = model(wizards)

        root = await seed(
            patch(
                wizard(),
                {
                    "firstName": "Merlin",
                    "lastName": "The Wizard",
                    "stats.hp": 50,
                    "beasts.0.name": "Elvarg",
                    "beasts.1.power": 5,
                },
            )
        )

        wiz = await store.get("people", root.identity)
        assert wiz == {
            "_id": root.identity,
            "firstName": "Merlin",
            "lastName": "The Wizard",
            "age": 50,
            "stats": {"hp": 50, "magic": 3},
            "beasts": [{"name": "Elvarg"}, {"power": 5}],
        }

    @pytest.mark.asyncio
    async def test_patch_and_reference_coexist(self, realm):
        root = await seed(realm.elder(patch(realm.mage(), {"name": "Morgana", "element": "fire"})))
        mage = await realm.store.get("mages", root.children[0].identity)
        assert mage is not None
        assert mage["name"] == "Morgana"
        assert mage["element"] == "fire"
        assert mage["elderId"] == root.identity

    @pytest.mark.asyncio
    async def test_reference_applied_after_patch(self, realm):
        root = await seed(realm.elder(realm.mage(), patch(realm.mage(), {"elderId": "overridden"})))
        for mage_node in root.children:
            assert mage_node.record.get("elderId") == root.identity

    @pytest.mark.asyncio
    async def test_patch_appends_after_patched_list(self, realm):
        root = await seed(patch(realm.elder(realm.mage()), {"mages": ["preexisting"]}))
        assert root.record.get("mages") == ["preexisting", root.children[0].identity]


class TestPersist:
    @pytest.mark.asyncio
    async def test_requires_materialized_tree(self, realm):
        with pytest.raises(SeedingRequiredError):
            await persist(realm.elder())

    @pytest.mark.asyncio
    async def test_persists_every_node(self, realm):
        root = materialize(realm.mage(realm.wand(), realm.dragon(realm.goldbar())))
        await persist(root)
        for node in iter_nodes(root):
            assert await realm.store.get(node.collection_name, node.identity) is not None

    @pytest.mark.asyncio
    async def test_failure_propagates_without_rollback(self, realm_factory):
        store = FlakyStore(failing="goldbars")
        realm = realm_factory(store)

        with pytest.raises(RuntimeError, match="write to goldbars rejected"):
            await seed(realm.elder(realm.mage(realm.dragon(realm.goldbar())), realm.wand()))

        # Saves already in flight are neither cancelled nor undone
        await asyncio.sleep(0.01)
        assert await store.count("elders") == 1
        assert await store.count("goldbars") == 0


class TestCleanup:
    @pytest.mark.asyncio
    async def test_cleanup_big_tree(self, realm):
        root = await seed(
            realm.elder(
                realm.wand(),
                realm.mage(realm.wand(), realm.wand(), realm.dragon(realm.goldbar(), realm.goldbar()), realm.dragon()),
                realm.mage(),
            )
        )

        await cleanup(root)

        for name in realm.collections:
            assert await realm.store.find(name) == []

    @pytest.mark.asyncio
    async def test_cleanup_only_touches_own_tree(self, realm):
        kept = await seed(realm.elder(realm.mage()))
        removed = await seed(realm.elder(realm.mage()))

        await cleanup(removed)

        assert [data["_id"] for data in await realm.store.find("elders")] == [kept.identity]
        assert [data["_id"] for data in await realm.store.find("mages")] == [kept.children[0].identity]

    @pytest.mark.asyncio
    async def test_requires_materialized_tree(self, realm):
        with pytest.raises(SeedingRequiredError):
            await cleanup(realm.elder())

    @pytest.mark.asyncio
    async def test_failure_propagates_without_retry(self, realm_factory):
        store = FlakyStore(failing="wands")
        realm = realm_factory(store)
        root = materialize(realm.elder(realm.wand(), realm.mage()))
        for node in (root, root.children[1]):
            await node.record.save()

        store.fail_deletes = True
        with pytest.raises(RuntimeError, match="delete from wands rejected"):
            await cleanup(root)

        await asyncio.sleep(0.01)
        assert await store.count("elders") == 0
        assert await store.count("mages") == 0


class TestSeeded:
    @pytest.mark.asyncio
    async def test_seeds_and_cleans_up(self, realm):
        async with seeded(realm.elder(realm.mage())) as root:
            assert await realm.store.count("elders") == 1
            assert documents(root).children[0].record["elderId"] == root.identity

        assert await realm.store.count("elders") == 0
        assert await realm.store.count("mages") == 0

    @pytest.mark.asyncio
    async def test_cleans_up_when_block_raises(self, realm):
        with pytest.raises(KeyError):
            async with seeded(realm.elder(realm.wand())):
                raise KeyError("boom")

        assert await realm.store.count("elders") == 0
        assert await realm.store.count("wands") == 0


class TestLocalStoreRoundTrip:
    @pytest.mark.asyncio
    async def test_seed_and_cleanup_on_disk(self, tmp_path, realm_factory):
        store = LocalDocumentStore(tmp_path)
        realm = realm_factory(store)

        root = await seed(realm.elder(realm.mage(realm.wand())))
        mage_id = root.children[0].identity
        assert (tmp_path / "mages" / f"{mage_id}.json").exists()
        mage = await store.get("mages", mage_id)
        assert mage is not None
        assert mage["elderId"] == root.identity

        await cleanup(root)
        assert list((tmp_path / "mages").glob("*.json")) == []
