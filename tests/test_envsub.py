import pytest

from waddle.envsub import SubstitutionError, interpolate


def test_plain_variable():
    assert interpolate("$NAME", {"NAME": "foo"}) == "foo"


def test_braced_variable_inside_text():
    assert interpolate("x_${NAME}_y", {"NAME": "foo"}) == "x_foo_y"


def test_unset_variable_expands_to_empty():
    assert interpolate("[$MISSING]", {}) == "[]"
    assert interpolate("[${MISSING}]", {}) == "[]"


def test_text_without_references_is_unchanged():
    text = "SELECT * FROM users WHERE id = 1;"
    assert interpolate(text, {"users": "x"}) == text


def test_lone_dollar_kept():
    assert interpolate("price $ 5", {}) == "price $ 5"
    assert interpolate("$1, $2", {}) == "$1, $2"


def test_double_dollar_escapes():
    assert interpolate("cost $$5", {}) == "cost $5"


def test_colon_dash_default_for_unset_and_empty():
    assert interpolate("${A:-dflt}", {}) == "dflt"
    assert interpolate("${A:-dflt}", {"A": ""}) == "dflt"
    assert interpolate("${A:-dflt}", {"A": "val"}) == "val"


def test_dash_default_only_for_unset():
    assert interpolate("${A-dflt}", {}) == "dflt"
    assert interpolate("${A-dflt}", {"A": ""}) == ""


def test_nested_default():
    assert interpolate("${A:-$B}", {"B": "bee"}) == "bee"
    assert interpolate("${A:-${B}}", {"B": "bee"}) == "bee"


def test_question_mark_raises_for_unset():
    with pytest.raises(SubstitutionError, match=r"\$SOME_VAR: required env var not set"):
        interpolate("${SOME_VAR?required env var not set}", {})


def test_question_mark_accepts_empty_value():
    assert interpolate("${A?boom}", {"A": ""}) == ""


def test_colon_question_mark_raises_for_empty():
    with pytest.raises(SubstitutionError, match=r"\$A: boom"):
        interpolate("${A:?boom}", {"A": ""})
    assert interpolate("${A:?boom}", {"A": "ok"}) == "ok"


def test_substring():
    assert interpolate("${A:1:2}", {"A": "hello"}) == "el"
    assert interpolate("${A:0}", {"A": "hello"}) == "hello"


def test_unterminated_brace_raises():
    with pytest.raises(SubstitutionError):
        interpolate("${A", {"A": "x"})


def test_invalid_identifier_raises():
    with pytest.raises(SubstitutionError):
        interpolate("${1abc}", {})