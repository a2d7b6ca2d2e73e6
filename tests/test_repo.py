import threading

from grimoire.repo import Repo


def test_add_and_get():
    repo = Repo()
    repo.add("a", 1)
    assert repo.has("a")
    assert repo.get("a") == 1
    assert "a" in repo


def test_add_does_not_overwrite():
    repo = Repo()
    repo.add("a", 1)
    repo.add("a", 2)
    assert repo.get("a") == 1
    assert len(repo) == 1


def test_get_missing_returns_none():
    repo = Repo()
    assert repo.get("missing") is None
    assert not repo.has("missing")


def test_all_and_slice():
    repo = Repo()
    repo.add("a", 1)
    repo.add("b", 2)
    assert repo.all() == {"a": 1, "b": 2}
    assert sorted(repo.slice()) == [1, 2]


def test_all_is_a_snapshot():
    repo = Repo()
    repo.add("a", 1)
    snapshot = repo.all()
    snapshot["b"] = 2
    assert not repo.has("b")


def test_use_passes_value_and_returns_result():
    repo = Repo()
    repo.add("a", 10)
    assert repo.use("a", lambda v: v * 2) == 20
    assert repo.use("missing", lambda v: v) is None


def test_iterate_visits_all_and_allows_delete():
    repo = Repo()
    for key in "abc":
        repo.add(key, key.upper())
    seen = {}

    def handler(key, value):
        seen[key] = value
        repo.delete(key)

    repo.iterate(handler)
    assert seen == {"a": "A", "b": "B", "c": "C"}
    assert len(repo) == 0


def test_delete_and_clear():
    repo = Repo()
    repo.add("a", 1)
    repo.add("b", 2)
    repo.delete("a")
    repo.delete("nope")
    assert repo.all() == {"b": 2}
    repo.clear()
    assert repo.all() == {}
    repo.add("b", 3)
    assert repo.get("b") == 3


def test_concurrent_adds():
    repo = Repo()

    def worker(start):
        for i in range(start, start + 500):
            repo.add(i, i)

    threads = [threading.Thread(target=worker, args=(n * 500,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(repo) == 2000
    assert sorted(repo.slice()) == list(range(2000))