import math

import pytest

from lootview.data import ron
from lootview.data.ron import RonStruct, RonSyntaxError, RonTuple, RonUnit


def test_loads_anonymous_struct_with_list() -> None:
    value = ron.loads('(loot: [(1.0, Item("a.b"))])')
    assert value == RonStruct(None, {"loot": [RonTuple(None, (1.0, RonTuple("Item", ("a.b",))))]})


def test_loads_unit_variant_and_named_struct() -> None:
    assert ron.loads("Nothing") == RonUnit("Nothing")
    assert ron.loads('ItemDef(name: "Apple", kind: Food)') == RonStruct(
        "ItemDef", {"name": "Apple", "kind": RonUnit("Food")}
    )


def test_loads_skips_comments_and_trailing_commas() -> None:
    text = """
    // Leading comment
    [
        (2, Nothing), /* block /* nested */ comment */
        (0.5, Item("x")),
    ]
    """
    value = ron.loads(text)
    assert value == [RonTuple(None, (2, RonUnit("Nothing"))), RonTuple(None, (0.5, RonTuple("Item", ("x",))))]


def test_loads_numbers() -> None:
    assert ron.loads("[1, -2, 3.5, 1e3, .25, 1_000, 0x1F]") == [1, -2, 3.5, 1000.0, 0.25, 1000, 31]
    assert math.isinf(ron.loads("inf"))


def test_loads_string_escapes() -> None:
    assert ron.loads(r'"a\"b\\c\n\u{263A}"') == 'a"b\\c\n☺'
    assert ron.loads('r#"raw "quoted" text"#') == 'raw "quoted" text'


def test_loads_booleans_and_empty_tuple() -> None:
    assert ron.loads("(true, false, ())") == RonTuple(None, (True, False, RonTuple(None, ())))


def test_syntax_error_reports_position() -> None:
    with pytest.raises(RonSyntaxError) as excinfo:
        ron.loads("[\n  (1.0, Item(\"x\")\n")
    assert excinfo.value.line >= 2


def test_rejects_trailing_characters() -> None:
    with pytest.raises(RonSyntaxError):
        ron.loads("Nothing Nothing")


def test_rejects_unterminated_string() -> None:
    with pytest.raises(RonSyntaxError):
        ron.loads('"abc')


def test_rejects_duplicate_struct_field() -> None:
    with pytest.raises(RonSyntaxError):
        ron.loads("(a: 1, a: 2)")


def test_dumps_reads_back() -> None:
    value = [RonTuple(None, (0.1, RonTuple("ItemQuantity", ('say "hi"', 1, 3)))), RonTuple(None, (1.0, RonUnit("Nothing")))]
    text = ron.dumps(value, indent="    ")
    assert text.startswith("[\n    (0.1, ItemQuantity(")
    assert ron.loads(text) == value
