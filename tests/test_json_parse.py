import pytest

from petnet.json_parse import parse, unescape_string
from petnet.json_tree import JsonError, JsonType


def to_py(node):
    if node.type is JsonType.OBJECT:
        return {child.key: to_py(child) for child in node}
    if node.type is JsonType.ARRAY:
        return [to_py(child) for child in node]
    return node.value


def test_object_members_and_types():
    root = parse('{"name": "petnet", "port": 53, "up": true, "down": false, "none": null}')
    assert root.type is JsonType.OBJECT
    assert root.is_root
    assert len(root) == 5
    assert root.get("name").type is JsonType.STRING
    assert root.get("name").value == "petnet"
    assert root.get("port").type is JsonType.INTEGER
    assert root.get("port").value == 53
    assert root.get("up").value is True
    assert root.get("down").value is False
    assert root.get("none").type is JsonType.NULL


def test_nested_array_keeps_order_and_parents():
    root = parse('{"list": [3, "x", [1, 2], {"k": 4}]}')
    items = root.get("list")
    assert items.type is JsonType.ARRAY
    assert items.parent is root
    assert to_py(items) == [3, "x", [1, 2], {"k": 4}]
    assert all(child.key is None for child in items)


def test_empty_containers():
    assert len(parse("{}")) == 0
    assert len(parse("[]")) == 0
    assert to_py(parse("[ ]")) == []


def test_string_escapes():
    root = parse(r'"a\nb\"c\\d\/e\tf"')
    assert root.value == 'a\nb"c\\d/e\tf'


def test_unknown_escape_is_kept():
    assert parse(r'"\u0041"').value == "\\u0041"


def test_unescape_string_stops_at_quote():
    assert unescape_string('abc"rest') == "abc"
    assert unescape_string(r'x\"y"') == 'x"y'


def test_unescape_string_without_closing_quote():
    with pytest.raises(JsonError):
        unescape_string("abc")


def test_hex_and_octal_integers():
    assert parse("0x1F").value == 0x1F
    assert parse("-0x10").value == -0x10
    assert parse("010").value == 0o10


def test_doubles():
    node = parse("1.5")
    assert node.type is JsonType.DOUBLE
    assert node.value == 1.5
    assert parse("2e3").value == 2e3
    assert parse("-0.25").value == -0.25
    assert parse("010.5").value == 10.5


def test_comments_are_skipped():
    root = parse('// leading\n{ /* before key */ "a": /* before value */ 1, // tail\n "b": 2}')
    assert to_py(root) == {"a": 1, "b": 2}


def test_commas_are_optional():
    assert to_py(parse("[1 2 3]")) == [1, 2, 3]
    assert to_py(parse('{"a": 1 "b": 2}')) == {"a": 1, "b": 2}


def test_key_without_value_is_dropped():
    root = parse('{"a":}')
    assert root.type is JsonType.OBJECT
    assert len(root) == 0


def test_trailing_text_is_ignored():
    assert parse("7 garbage").value == 7


def test_bytes_input():
    assert to_py(parse(b'{"k": [true]}')) == {"k": [True]}


def test_nul_ends_the_text():
    assert to_py(parse("[1]\0junk")) == [1]
    with pytest.raises(JsonError):
        parse('"ab\0cd"')


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "[1",
        '{"a" 1}',
        '{"a": 1',
        "tru",
        "fals",
        "nul",
        '"abc',
        "/* open",
        "// no newline",
        "/x",
        "-",
        "]",
        "99999999999999999999",
        "1e999",
        "@",
        '{a: 1}',
    ],
)
def test_invalid_text_raises(text):
    with pytest.raises(JsonError):
        parse(text)


def test_serialize_then_parse_round_trip():
    original = parse('{"s": "q\\"x", "n": -4, "d": 0.5, "b": true, "z": null, "a": [1, {"k": "v"}]}')
    again = parse(original.serialize())
    assert to_py(again) == to_py(original)
    assert again.serialize() == original.serialize()


def test_serialized_layout():
    assert parse('{"a": [1, "x"]}').serialize() == '{\n\t"a": [\n\t\t1,\n\t\t"x"\n\t]\n}'