# mypy: allow-untyped-defs

import threading

import pytest  # type: ignore

from leftrec.registry import CapacityError, RecursiveIndexes, current_registry, use_registry


def test_ids_in_first_seen_order():
    indexes = RecursiveIndexes()
    assert indexes.get("expr") == 0
    assert indexes.get("term") == 1
    assert indexes.get("expr") == 0
    assert indexes.get("factor") == 2
    assert indexes.get("term") == 1
    assert len(indexes) == 3
    assert list(indexes) == ["expr", "term", "factor"]
    assert "term" in indexes
    assert "atom" not in indexes


def test_distinct_ids_up_to_capacity():
    indexes = RecursiveIndexes()
    ids = [indexes.get(f"rule{i}") for i in range(64)]
    assert ids == list(range(64))
    assert [indexes.get(f"rule{i}") for i in range(64)] == ids


def test_capacity_exhausted():
    indexes = RecursiveIndexes(64)
    for i in range(64):
        indexes.get(f"rule{i}")
    with pytest.raises(CapacityError) as excinfo:
        indexes.get("rule64")
    assert excinfo.value.capacity == 64
    assert "64" in str(excinfo.value)
    # Nothing was recorded, and old ids still work.
    assert "rule64" not in indexes
    assert len(indexes) == 64
    assert indexes.get("rule63") == 63
    with pytest.raises(CapacityError):
        indexes.get("rule64")


def test_wider_capacity():
    indexes = RecursiveIndexes(128)
    assert [indexes.get(i) for i in range(128)] == list(range(128))
    with pytest.raises(CapacityError):
        indexes.get(128)


def test_bad_capacity():
    with pytest.raises(ValueError):
        RecursiveIndexes(65)


def test_new_info_matches_capacity():
    assert RecursiveIndexes(256).new_info().capacity == 256


def test_use_registry_restores(registry):
    assert current_registry() is registry
    mine = RecursiveIndexes(128)
    with use_registry(mine) as installed:
        assert installed is mine
        assert current_registry() is mine
        with use_registry() as fresh:
            assert fresh is not mine
            assert current_registry() is fresh
        assert current_registry() is mine
    assert current_registry() is registry


def test_registry_per_thread(registry):
    registry.get("main")
    seen = {}

    def work(name):
        indexes = current_registry()
        indexes.get(name)
        seen[name] = indexes

    threads = [threading.Thread(target=work, args=(name,)) for name in ("a", "b")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert seen["a"] is not seen["b"]
    assert registry not in seen.values()
    # Each thread assigned its first id independently.
    assert seen["a"].get("a") == 0
    assert seen["b"].get("b") == 0
    assert "a" not in registry


def test_current_registry_is_lazy_and_stable():
    with use_registry() as indexes:
        assert current_registry() is current_registry() is indexes
