import copy

import pytest

from luaconf import ConfigValue, ConfigValueType, LuaConfContractViolation


def test_default_is_nil():
    v = ConfigValue()
    assert v.type is ConfigValueType.NIL
    assert v.is_nil
    assert v == None  # noqa: E711


@pytest.mark.parametrize(
    "data,vtype,accessor",
    [
        ("I am a string!", ConfigValueType.STRING, "as_string"),
        (171.171, ConfigValueType.NUMBER, "as_number"),
        (True, ConfigValueType.BOOLEAN, "as_boolean"),
    ]
)
def test_scalar_construction(data, vtype, accessor):
    v = ConfigValue(data)
    assert v.type is vtype
    assert getattr(v, accessor)() == data
    assert v == data


def test_ints_are_numbers_not_booleans():
    for n in (1, 0):
        v = ConfigValue(n)
        assert v.is_number
        assert v == n
        assert isinstance(v.as_number(), float)
    assert ConfigValue(True).is_boolean


def test_string_with_backslash():
    s = "I am a string \\ and I have an embedded backslash!"
    v = ConfigValue(s)
    assert v.is_string
    assert v.as_string() == s


@pytest.mark.parametrize(
    "data,accessor",
    [
        ("xyz", "as_number"),
        (1.5, "as_string"),
        (True, "as_number"),
        (None, "as_boolean"),
        ([1], "as_map"),
        ({"a": 1}, "as_list"),
    ]
)
def test_wrong_accessor_is_contract_violation(data, accessor):
    with pytest.raises(LuaConfContractViolation):
        getattr(ConfigValue(data), accessor)()


def test_equality_with_foreign_types_is_false():
    string_value = ConfigValue("xyz")
    number_value = ConfigValue(123)
    boolean_value = ConfigValue(True)

    assert string_value == "xyz"
    assert string_value != "abc"
    assert number_value == 123
    assert number_value != 999
    assert boolean_value == True  # noqa: E712
    assert boolean_value != False  # noqa: E712

    assert (ConfigValue("x") == 5) is False
    assert string_value != 123
    assert string_value != False  # noqa: E712
    assert number_value != "xyz"
    assert number_value != True  # noqa: E712
    assert boolean_value != "xyz"
    assert boolean_value != 1
    assert boolean_value != 0
    assert ConfigValue(1) != ConfigValue(True)
    assert (string_value == object()) is False
    assert (ConfigValue() == 0) is False


def test_map_construction_and_access():
    c = ConfigValue({"x": 1, "y": "yay!", "z": False})
    assert c.is_map
    assert len(c) == 3
    assert c["x"] == 1
    assert c["y"] == "yay!"
    assert c["z"] == False  # noqa: E712
    assert set(c) == {"x", "y", "z"}
    assert "x" in c and "w" not in c and 1 not in c


def test_list_construction_and_access():
    c = ConfigValue([-8.2, True, "bab!"])
    assert c.is_list
    assert len(c) == 3
    assert c[0] == -8.2
    assert c[1] == True  # noqa: E712
    assert c[2] == "bab!"
    assert [v.to_python() for v in c] == [-8.2, True, "bab!"]
    assert "bab!" in c


def test_make_list_and_write():
    c = ConfigValue()
    c.make_list()
    c[0] = -987.6
    c[1] = True
    c[2] = "abc"
    assert c == ConfigValue([-987.6, True, "abc"])


def test_make_map_and_write():
    c = ConfigValue()
    c.make_map()
    c["A"] = -987.6
    c["b"] = True
    c["cee"] = "abc"
    assert c.is_map
    assert c == ConfigValue({"A": -987.6, "b": True, "cee": "abc"})


def test_write_past_end_grows_list_with_nils():
    c = ConfigValue([])
    c[3] = "last"
    assert len(c) == 4
    assert all(c[i].is_nil for i in range(3))
    assert c[3] == "last"


def test_get_or_insert_grows_and_inserts():
    lst = ConfigValue([])
    slot = lst.get_or_insert(2)
    assert slot.is_nil and len(lst) == 3
    slot.assign(5)
    assert lst[2] == 5

    mp = ConfigValue({})
    entry = mp.get_or_insert("new")
    assert entry.is_nil
    assert "new" in mp
    entry.assign("filled")
    assert mp["new"] == "filled"
    assert mp.get_or_insert("new") is entry


def test_read_only_access_never_fabricates():
    lst = ConfigValue([1])
    with pytest.raises(LuaConfContractViolation, match="Out-of-bounds"):
        lst[1]
    assert len(lst) == 1

    mp = ConfigValue({"a": 1})
    with pytest.raises(LuaConfContractViolation, match="not found"):
        mp.get("b")
    assert "b" not in mp


@pytest.mark.parametrize(
    "data,index",
    [
        ([1, 2], -1),
        ([1, 2], "a"),
        ([1, 2], True),
        ([1, 2], 1.0),
        ({"a": 1}, 0),
        ("scalar", 0),
        (None, "a"),
    ]
)
def test_invalid_indexing_is_contract_violation(data, index):
    v = ConfigValue(data)
    with pytest.raises(LuaConfContractViolation):
        v.get(index)
    with pytest.raises(LuaConfContractViolation):
        v.get_or_insert(index)


def test_length_of_scalar_is_contract_violation():
    with pytest.raises(LuaConfContractViolation):
        len(ConfigValue(3))
    with pytest.raises(LuaConfContractViolation):
        iter(ConfigValue("s"))


@pytest.mark.parametrize(
    "data,expected",
    [
        ([1], False),
        ([], True),
        ({"a": 1}, False),
        ({}, True),
        ("", False),
        (None, False),
    ]
)
def test_is_empty_table(data, expected):
    assert ConfigValue(data).is_empty_table is expected


def test_empty_map_and_list_differ_but_are_both_empty_tables():
    empty_map, empty_list = ConfigValue({}), ConfigValue([])
    assert empty_map != empty_list
    assert empty_map.is_empty_table and empty_list.is_empty_table


def test_copy_construction_is_deep():
    src = ConfigValue({"inner": {"list": [1, 2]}, "n": 1})
    dup = ConfigValue(src)
    assert dup == src

    dup["inner"]["list"][0] = "changed"
    dup["inner"]["extra"] = True
    assert src["inner"]["list"][0] == 1
    assert "extra" not in src["inner"]

    src["n"] = 2
    assert dup["n"] == 1


@pytest.mark.parametrize("copier", [ConfigValue.copy, copy.copy, copy.deepcopy])
def test_every_copy_path_is_deep(copier):
    src = ConfigValue([[1], {"k": "v"}])
    dup = copier(src)
    dup[0][0] = 99
    dup[1]["k"] = "w"
    assert src == ConfigValue([[1], {"k": "v"}])


def test_assign_deep_copies_containers():
    inner = ConfigValue([1, 2])
    holder = ConfigValue()
    holder.assign(inner)
    holder[0] = "x"
    assert inner[0] == 1

    raw = {"a": [1]}
    v = ConfigValue(raw)
    raw["a"].append(2)
    assert len(v["a"]) == 1


def test_item_assignment_copies_the_value():
    shared = ConfigValue({"k": 1})
    root = ConfigValue({})
    root["one"] = shared
    root["two"] = shared
    root["one"]["k"] = 2
    assert root["two"]["k"] == 1
    assert shared["k"] == 1


def test_assign_self_containing_value():
    v = ConfigValue([1])
    v.assign([v, v])
    assert v == ConfigValue([[1], [1]])


def test_adopt_keeps_the_container():
    items = [ConfigValue(1)]
    v = ConfigValue().adopt(items)
    items.append(ConfigValue(2))
    assert len(v) == 2

    entries = {"a": ConfigValue("x")}
    m = ConfigValue().adopt(entries)
    entries["a"].assign("y")
    assert m["a"] == "y"


@pytest.mark.parametrize("container", [[1, 2], {"a": 1}, {1: ConfigValue()}, ("tuple",), "str"])
def test_adopt_rejects_foreign_data(container):
    with pytest.raises(LuaConfContractViolation):
        ConfigValue().adopt(container)


def test_adopt_rejects_cycles():
    v = ConfigValue([])
    with pytest.raises(LuaConfContractViolation):
        v.adopt([ConfigValue(1), v])
    outer = ConfigValue([])
    with pytest.raises(LuaConfContractViolation):
        outer.adopt([ConfigValue().adopt([outer])])


@pytest.mark.parametrize("data", [object(), {1: "int key"}, b"bytes", 10 ** 400])
def test_unsupported_payloads(data):
    with pytest.raises(LuaConfContractViolation):
        ConfigValue(data)


def test_to_python_round_trips_plain_data():
    data = {"a": [1.0, "two", None, True], "b": {"c": {}}}
    assert ConfigValue(data).to_python() == data


def test_map_views_are_read_only():
    v = ConfigValue({"a": 1})
    view = v.as_map()
    with pytest.raises(TypeError):
        view["b"] = ConfigValue(2)
    assert isinstance(ConfigValue([1]).as_list(), tuple)


def test_delete_entries():
    v = ConfigValue({"a": 1, "b": 2})
    del v["a"]
    assert list(v.keys()) == ["b"]
    lst = ConfigValue([1, 2, 3])
    del lst[0]
    assert lst == ConfigValue([2, 3])
    with pytest.raises(LuaConfContractViolation):
        del lst[5]


@pytest.mark.parametrize(
    "data,truthy",
    [
        (None, False),
        (False, False),
        (True, True),
        (0, True),
        ("", True),
        ([], True),
        ({}, True),
    ]
)
def test_truthiness_follows_the_scripting_language(data, truthy):
    assert bool(ConfigValue(data)) is truthy


def test_values_are_unhashable():
    with pytest.raises(TypeError):
        hash(ConfigValue(1))


def test_repr():
    assert repr(ConfigValue()) == "ConfigValue(nil)"
    assert repr(ConfigValue("s")) == "ConfigValue('s')"
