import threading

from clawmark.storage import InMemoryStore


def test_put_if_absent_never_overwrites():
    store = InMemoryStore()
    assert store.put_if_absent("a", 1) is True
    assert store.put_if_absent("a", 2) is False
    assert store.get("a") == 1


def test_update_returns_none_for_missing_key():
    store = InMemoryStore()
    calls = []
    assert store.update("missing", lambda v: calls.append(v) or v) is None
    assert calls == []


def test_delete_if_only_removes_matching_value():
    store = InMemoryStore()
    store.put("a", "old")
    assert store.delete_if("a", lambda v: v == "new") is False
    assert store.delete_if("a", lambda v: v == "old") is True
    assert "a" not in store


def test_items_preserve_insertion_order():
    store = InMemoryStore()
    for key in ["c", "a", "b"]:
        store.put(key, key.upper())
    store.put("c", "C2")
    assert store.items() == [("c", "C2"), ("a", "A"), ("b", "B")]
    assert list(store) == ["c", "a", "b"]


def test_concurrent_updates_are_not_lost():
    store = InMemoryStore()
    store.put("counter", 0)

    def bump():
        for _ in range(1000):
            store.update("counter", lambda v: v + 1)

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.get("counter") == 8000
