"""Tests for the reader stack machine."""

import io
import logging

import pytest

from acon import (
    DuplicateKey,
    Empty,
    ExcessiveClosingDelimiter,
    UnterminatedNesting,
    VArray,
    VString,
    VTable,
    WrongClosingDelimiterKind,
    load,
    parse,
    parse_lines,
)
from acon.reader import split_lines


# ---------------------------------------------------------------------------
# split_lines
# ---------------------------------------------------------------------------

def test_split_lines_trailing_newline():
    assert split_lines("a\nb\n") == ["a", "b"]

def test_split_lines_crlf():
    assert split_lines("a\r\nb\r\n") == ["a", "b"]

def test_split_lines_keeps_inner_blank_lines():
    assert split_lines("a\n\n\nb") == ["a", "", "", "b"]

def test_split_lines_empty():
    assert split_lines("") == []


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

def test_empty_input_is_empty_table():
    assert parse("") == VTable()

def test_key_value():
    doc = parse("key value")
    assert doc == VTable({"key": VString("value")})

def test_value_whitespace_normalised():
    doc = parse("  key    some   spaced\tvalue   ")
    assert doc["key"] == VString("some spaced value")

def test_key_without_value():
    assert parse("flag")["flag"] == VString("")

def test_delimiter_after_first_word_is_text():
    assert parse("key { not [ a ] delimiter $")["key"] == VString("{ not [ a ] delimiter $")

def test_hash_is_an_ordinary_key():
    doc = parse("# a comment\nkey value")
    assert doc["#"] == VString("a comment")
    assert doc["key"] == VString("value")

def test_blank_lines_in_table_ignored():
    doc = parse("\n\na 1\n   \n\nb 2\n")
    assert doc.keys() == ["a", "b"]

def test_crlf_input():
    doc = parse("a 1\r\nb 2\r\n")
    assert doc["a"] == VString("1")
    assert doc["b"] == VString("2")

def test_escape_sequences_kept_verbatim():
    doc = parse("key(32)with(46)dots value(10)here")
    assert doc["key(32)with(46)dots"] == VString("value(10)here")


# ---------------------------------------------------------------------------
# Tables and arrays
# ---------------------------------------------------------------------------

def test_named_table():
    doc = parse("{ t\n k v\n }")
    assert doc.path("t.k") == VString("v")

def test_unnamed_table_uses_empty_key():
    doc = parse("{\nk v\n}")
    assert doc[""] == VTable({"k": VString("v")})

def test_extra_words_after_name_ignored():
    doc = parse("{ t ignored words\nk v\n}")
    assert doc.path("t.k") == VString("v")

def test_array_elements_are_whole_lines():
    doc = parse("[ a\n  hello    world  \n key value\n#\n]")
    assert doc["a"] == VArray([
        VString("hello world"),
        VString("key value"),
        VString("#"),
    ])

def test_blank_lines_in_array_are_elements():
    doc = parse("[ a\n\n\n$")
    assert doc.path("a.0") == VString("")
    assert doc.path("a.1") == VString("")
    assert doc.path("a.2") is Empty

def test_whitespace_only_line_in_array_is_empty_element():
    doc = parse("[ a\n x\n \t \n]")
    assert doc["a"] == VArray([VString("x"), VString("")])

def test_unnamed_table_in_array_appended_directly():
    doc = parse("[ list\n{\nk v\n}\n]")
    assert doc.path("list.0.k") == VString("v")

def test_named_table_in_array_is_wrapped():
    doc = parse("[ list\n{ item\nk v\n}\n]")
    assert doc["list"].items[0] == VTable({"item": VTable({"k": VString("v")})})
    assert doc.path("list.0.item.k") == VString("v")

def test_named_array_in_array_is_wrapped():
    doc = parse("[ outer\n[ inner\nx\n]\n[\ny\n]\n]")
    assert doc.path("outer.0.inner.0") == VString("x")
    assert doc.path("outer.1.0") == VString("y")

def test_same_name_allowed_twice_in_array():
    doc = parse("[ list\n{ item\n}\n{ item\n}\n]")
    assert len(doc["list"]) == 2

def test_nested_message_example():
    text = "\n".join([
        "[",
        "\t{ message",
        "\t\trecipient me",
        "\t\tsender you",
        "\t\t[ content",
        "\t\t\tHey what is this ACON thingy all about?",
        "\t\t]",
        "\t}",
        "\t{ message",
        "\t\tsender me",
        "\t\trecipient you",
        "\t\t[ content",
        "\t\t\tACON means Awk-Compatible Object Notation.",
        "\t\t\tACON allows just that!",
        "\t\t]",
        "\t}",
        "]",
    ])
    doc = parse(text)
    second = doc.get("").as_array().items[1].as_table()
    assert second.get("message").as_table().get("recipient").as_string() == VString("you")
    assert doc.path(".1.message.recipient") == VString("you")
    assert doc.path(".0.message.content.0") == VString("Hey what is this ACON thingy all about?")


# ---------------------------------------------------------------------------
# Super-delimiter $
# ---------------------------------------------------------------------------

def test_dollar_closes_everything():
    text = "\n".join([
        "{ table",
        "\t{ table",
        "\t\t{ table",
        "\t\t\t[ array",
        "\t\t\t\t{ table",
        "\t\t\t\t\tkey value",
        "",
        "$ This word as the first word on a line closes all nestings",
        "",
        "[ reason",
        "\tI want to get rid of it all.",
        "]",
    ])
    doc = parse(text)
    assert doc.path("table.table.table.array.0.table.key") == VString("value")
    assert doc.path("reason.0") == VString("I want to get rid of it all.")

def test_dollar_equivalent_to_explicit_closers():
    explicit = parse("{ a\n[ b\n{ c\nk v\n}\n]\n}")
    closed = parse("{ a\n[ b\n{ c\nk v\n$")
    assert explicit == closed

def test_dollar_in_array_appends_nothing():
    doc = parse("[ array\n\n\n\n$")
    assert doc.path("array.2") == VString("")
    assert len(doc["array"]) == 3

def test_dollar_at_root_is_noop():
    doc = parse("a 1\n$\nb 2")
    assert doc == VTable({"a": VString("1"), "b": VString("2")})


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_duplicate_keys():
    with pytest.raises(DuplicateKey) as ei:
        parse("key value1\nkey2 value2\nkey value3\nkey2 value4")
    assert ei.value == DuplicateKey("key", 3)

def test_duplicate_keys_with_leading_blank_line():
    with pytest.raises(DuplicateKey) as ei:
        parse("\nkey value1\nkey2 value2\nkey value3\nkey2 value4\n")
    assert ei.value.line == 4

def test_duplicate_key_table_name():
    with pytest.raises(DuplicateKey) as ei:
        parse("key value1\nkey2 value2\n{ key\n}\nkey2 value4")
    assert ei.value == DuplicateKey("key", 4)

def test_duplicate_key_array_name():
    with pytest.raises(DuplicateKey) as ei:
        parse("key value1\nkey2 value2\n[ key\n]\nkey2 value4")
    assert ei.value == DuplicateKey("key", 4)

def test_duplicate_key_nested():
    text = "{ key\n{ key\nkey value\n[\n]\nkey value\n}\n}"
    with pytest.raises(DuplicateKey) as ei:
        parse(text)
    assert ei.value == DuplicateKey("key", 6)

def test_duplicate_unnamed_frames():
    with pytest.raises(DuplicateKey) as ei:
        parse("{\n}\n[\n]")
    assert ei.value == DuplicateKey("", 4)

def test_duplicate_detected_by_dollar():
    text = "{ table\nkey value\n\n$\n{ table\n\n$"
    with pytest.raises(DuplicateKey) as ei:
        parse(text)
    assert ei.value == DuplicateKey("table", 7)

def test_excessive_closing_table():
    with pytest.raises(ExcessiveClosingDelimiter) as ei:
        parse("{ t\n}\n}")
    assert ei.value.line == 3

def test_excessive_closing_at_start():
    with pytest.raises(ExcessiveClosingDelimiter) as ei:
        parse("}")
    assert ei.value.line == 1

def test_array_closer_on_root_is_wrong_kind():
    with pytest.raises(WrongClosingDelimiterKind) as ei:
        parse("a 1\n]")
    assert ei.value == WrongClosingDelimiterKind("}", "]", 2)

def test_table_closed_with_bracket():
    with pytest.raises(WrongClosingDelimiterKind) as ei:
        parse("{ t\nk v\n]")
    assert ei.value == WrongClosingDelimiterKind("}", "]", 3)

def test_array_closed_with_brace():
    with pytest.raises(WrongClosingDelimiterKind) as ei:
        parse("[ a\nv\n}")
    assert ei.value == WrongClosingDelimiterKind("]", "}", 3)

def test_unterminated_array():
    with pytest.raises(UnterminatedNesting) as ei:
        parse("[ a\n v")
    assert ei.value.nesting == "array"
    assert ei.value.name == "a"
    assert ei.value.opened_on == 1
    assert ei.value.line is None

def test_unterminated_table():
    with pytest.raises(UnterminatedNesting) as ei:
        parse("{ t\n k v")
    assert ei.value == UnterminatedNesting("table", "t", 1)

def test_unterminated_reports_innermost():
    with pytest.raises(UnterminatedNesting) as ei:
        parse("{ a\nx 1\n[ b\nv")
    assert ei.value == UnterminatedNesting("array", "b", 3)

def test_failure_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="acon.reader"):
        with pytest.raises(ExcessiveClosingDelimiter):
            parse("}")
    assert "parse failed" in caplog.text


# ---------------------------------------------------------------------------
# parse_lines / load
# ---------------------------------------------------------------------------

def test_parse_lines_accepts_line_terminators():
    doc = parse_lines(["{ t\n", "k v\n", "}\n"])
    assert doc.path("t.k") == VString("v")

def test_load_stream():
    doc = load(io.StringIO("[ a\nx\n\n]\n"))
    assert doc["a"] == VArray([VString("x"), VString("")])

def test_parse_is_deterministic():
    text = "b 2\n{ t\n[ a\nx\n]\n}\na 1"
    assert parse(text) == parse(text)
