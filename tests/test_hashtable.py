import pytest

from petnet.hashtable import HashTable


def _constant_hash(key):
    return 7


def test_insert_and_search():
    table = HashTable()
    table.insert("a", 1)
    table.insert("b", 2)
    assert table.search("a") == 1
    assert table.search("b") == 2
    assert table.search("c") is None
    assert len(table) == 2


def test_contains_and_iter():
    table = HashTable()
    for key in range(10):
        table.insert(key, key * 2)
    assert 3 in table
    assert 42 not in table
    assert sorted(table) == list(range(10))


def test_default_capacity_is_smallest_prime():
    assert HashTable().capacity == 53


def test_min_size_picks_next_larger_prime():
    assert HashTable(min_size=53).capacity == 97
    assert HashTable(min_size=52).capacity == 53


def test_min_size_too_large():
    with pytest.raises(ValueError):
        HashTable(min_size=(1 << 30) + 1)


def test_expansion_keeps_all_entries():
    table = HashTable()
    for key in range(200):
        table.insert(key, str(key))
    assert len(table) == 200
    assert table.capacity > 53
    assert all(table.search(key) == str(key) for key in range(200))
    assert sorted(table.items()) == [(key, str(key)) for key in range(200)]


def test_expands_after_load_limit():
    table = HashTable()
    for key in range(35):
        table.insert(key, key)
    assert table.capacity == 53
    table.insert(35, 35)
    assert table.capacity == 97


def test_duplicate_keys_newest_found_first():
    table = HashTable()
    table.insert("k", "old")
    table.insert("k", "new")
    assert len(table) == 2
    assert table.search("k") == "new"
    assert table.remove("k") == "new"
    assert table.search("k") == "old"


def test_chain_order_newest_first_with_colliding_hashes():
    table = HashTable(hash_fn=_constant_hash)
    for key in ("x", "y", "z"):
        table.insert(key, key.upper())
    assert list(table) == ["z", "y", "x"]
    assert table.search("x") == "X"


def test_custom_eq_fn():
    table = HashTable(hash_fn=lambda k: len(k), eq_fn=lambda a, b: a.lower() == b.lower())
    table.insert("Host", 1)
    assert table.search("HOST") == 1
    assert "host" in table


def test_change_replaces_and_frees_old_value():
    freed = []
    table = HashTable(val_free_fn=freed.append)
    table.insert("a", "first")
    table.change("a", "second")
    assert table.search("a") == "second"
    assert freed == ["first"]


def test_change_missing_key():
    table = HashTable()
    with pytest.raises(KeyError):
        table.change("missing", 1)


def test_remove_returns_value_and_frees_key():
    freed_keys = []
    table = HashTable(key_free_fn=freed_keys.append)
    table.insert("a", 1)
    assert table.remove("a") == 1
    assert freed_keys == ["a"]
    assert len(table) == 0
    assert table.remove("a") is None


def test_conditional_remove():
    table = HashTable()
    table.insert("a", 5)
    assert table.remove("a", cond=lambda v: v > 10) is None
    assert table.search("a") == 5
    assert table.remove("a", cond=lambda v: v == 5) == 5
    assert "a" not in table


def test_inc_and_dec():
    table = HashTable()
    table.insert("count", 10)
    table.inc("count", 5)
    assert table.search("count") == 15
    table.dec("count", 3)
    assert table.search("count") == 12


def test_inc_dec_missing_key():
    table = HashTable()
    with pytest.raises(KeyError):
        table.inc("nope", 1)
    with pytest.raises(KeyError):
        table.dec("nope", 1)


def test_remove_where():
    freed_keys = []
    table = HashTable(key_free_fn=freed_keys.append)
    for key in range(20):
        table.insert(key, key)
    removed = table.remove_where(lambda k, v: v % 2 == 0)
    assert removed == 10
    assert len(table) == 10
    assert sorted(table) == list(range(1, 20, 2))
    assert sorted(freed_keys) == list(range(0, 20, 2))


def test_clear_frees_keys_and_values():
    freed_keys = []
    freed_values = []
    table = HashTable(val_free_fn=freed_values.append, key_free_fn=freed_keys.append)
    table.insert("a", 1)
    table.insert("b", 2)
    table.clear()
    assert len(table) == 0
    assert table.items() == []
    assert sorted(freed_keys) == ["a", "b"]
    assert sorted(freed_values) == [1, 2]