"""Tests for the tab indentation post-processor."""

from tinyjson_core import dumps, loads
from tinyjson_core.indent import apply_indented_formatting

from models import Nullables, SimpleObject


def test_object_members_on_own_lines():
    assert apply_indented_formatting('{"id":5,"a":null,"b":null}') == (
        '{\n\t"id":5,\n\t"a":null,\n\t"b":null\n}'
    )

def test_objects_inside_array():
    assert apply_indented_formatting('{"a":[{"x":1},{"y":2}]}') == (
        '{\n\t"a":[\n\t\t{\n\t\t\t"x":1\n\t\t},\n\t\t{\n\t\t\t"y":2\n\t\t}\n\t]\n}'
    )

def test_scalar_array_stays_inline():
    assert apply_indented_formatting("[1,2]") == "[1,2\n]"

def test_nested_arrays():
    assert apply_indented_formatting("[[1],[2]]") == "[[1\n\t],\n\t[2\n\t]\n]"

def test_quoted_brackets_untouched():
    assert apply_indented_formatting('{"k":"{[,]}"}') == '{\n\t"k":"{[,]}"\n}'

def test_escaped_quote_inside_string():
    assert apply_indented_formatting('{"k":"a\\"{"}') == '{\n\t"k":"a\\"{"\n}'

def test_unbalanced_closers_do_not_go_negative():
    assert apply_indented_formatting("]}") == "\n]\n}"

def test_dumps_indent_flag():
    assert dumps(Nullables(id=5), include_nulls=True, indent=True) == (
        '{\n\t"id":5,\n\t"a":null,\n\t"b":null\n}'
    )

def test_indented_text_parses_back():
    item = SimpleObject(a=1, b=2.5, c="x y", d=[1, 2])
    assert loads(dumps(item, indent=True), SimpleObject) == item
