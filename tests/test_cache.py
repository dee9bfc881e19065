import pytest

from campadmin.data import cache as cache_module
from campadmin.data.cache import QueryCache
from campadmin.services.undo import UndoRegistry
from campadmin.core.errors import UndoExpired
from campadmin.models.toast import Toast


async def test_fetch_loads_once():
    cache = QueryCache()
    calls = []

    async def loader():
        calls.append(1)
        return ["a"]

    assert await cache.fetch(("site-classes", "cg1"), loader) == ["a"]
    assert await cache.fetch(("site-classes", "cg1"), loader) == ["a"]
    assert len(calls) == 1


def test_invalidate_by_prefix():
    cache = QueryCache()
    cache.set(("site-classes", "cg1"), 1)
    cache.set(("site-classes", "cg2"), 2)
    cache.set(("sites", "cg1"), 3)

    assert cache.invalidate(("site-classes", "cg1")) == 1
    assert cache.get(("site-classes", "cg1")) is None
    assert cache.get(("site-classes", "cg2")) == 2

    assert cache.invalidate(("site-classes",)) == 1
    assert len(cache) == 1


def test_entries_expire_after_ttl(monkeypatch):
    now = [100.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
    cache = QueryCache(ttl_seconds=30)
    cache.set(("sites", "cg1"), "cached")

    now[0] = 129.0
    assert cache.get(("sites", "cg1")) == "cached"
    now[0] = 131.0
    assert cache.get(("sites", "cg1")) is None


async def test_undo_runs_once():
    registry = UndoRegistry()
    ran = []

    async def action():
        ran.append(1)
        return Toast(title="Undone")

    undo_id = registry.register(action)
    assert undo_id in registry
    assert (await registry.run(undo_id)).title == "Undone"
    assert undo_id not in registry
    with pytest.raises(UndoExpired):
        await registry.run(undo_id)
    assert ran == [1]


def test_undo_registry_drops_oldest_when_full():
    registry = UndoRegistry(max_pending=2)

    async def action():
        return Toast(title="Undone")

    first = registry.register(action)
    second = registry.register(action)
    third = registry.register(action)

    assert first not in registry
    assert second in registry and third in registry
    assert len(registry) == 2
