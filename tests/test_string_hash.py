import pytest

from vosutils.string_hash import StringHashTable, fnv1a_index


def test_fnv1a_empty_key_is_offset_basis():
    assert fnv1a_index("", 2**32) == 2166136261


def test_fnv1a_single_char():
    assert fnv1a_index("a", 2**32) == 0xE40C292C


@pytest.mark.parametrize("key", ["", "list", "clear", "history", "ünïcode"])
@pytest.mark.parametrize("size", [1, 7, 32])
def test_index_within_table(key, size):
    index = fnv1a_index(key, size)
    assert 0 <= index < size


def test_index_rejects_non_positive_size():
    with pytest.raises(ValueError):
        fnv1a_index("x", 0)


def test_table_rejects_non_positive_size():
    with pytest.raises(ValueError):
        StringHashTable(0)


def test_insert_and_find_round_trip():
    table = StringHashTable(8)
    table.insert("alpha", 1)
    table.insert("beta", [2, 3])
    assert table.find("alpha") == 1
    assert table.find("beta") == [2, 3]
    assert len(table) == 2


def test_insert_replaces_existing_value():
    table = StringHashTable(8)
    table.insert("key", "old")
    table.insert("key", "new")
    assert table.find("key") == "new"
    assert len(table) == 1


def test_find_missing_raises_key_error():
    table = StringHashTable(4)
    with pytest.raises(KeyError):
        table.find("missing")


def test_delete_removes_key():
    table = StringHashTable(4)
    table.insert("gone", 5)
    table.delete("gone")
    assert "gone" not in table
    with pytest.raises(KeyError):
        table.find("gone")


def test_delete_missing_raises_key_error():
    table = StringHashTable(4)
    with pytest.raises(KeyError):
        table.delete("nothing")


def test_single_bucket_keeps_insertion_order():
    table = StringHashTable(1)
    for name in ["c", "a", "b"]:
        table.insert(name, name.upper())
    assert table.keys() == ["c", "a", "b"]
    assert [table.find(k) for k in table.keys()] == ["C", "A", "B"]


def test_keys_cover_all_inserted():
    table = StringHashTable(5)
    names = [f"cmd{i}" for i in range(20)]
    for name in names:
        table.insert(name, None)
    assert sorted(table.keys()) == sorted(names)


def test_contains_and_clear():
    table = StringHashTable(3)
    table.insert("x", 1)
    assert "x" in table
    assert 42 not in table
    table.clear()
    assert len(table) == 0
    assert table.keys() == []


def test_non_string_key_rejected():
    table = StringHashTable(3)
    with pytest.raises(TypeError):
        table.insert(1, "value")