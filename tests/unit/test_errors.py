import io
import sys

import pytest

import json_parser as jp


def test_trailing_characters_after_root_value():
    with pytest.raises(jp.TrailingCharacters) as ei:
        jp.parse("{} extra")
    assert ei.value.position == 3
    assert "extra data after root value at offset 3" in str(ei.value)


def test_comma_after_bare_root_value_is_trailing():
    with pytest.raises(jp.TrailingCharacters):
        jp.parse("1,")


def test_bare_word_is_invalid_number_or_constant():
    with pytest.raises(jp.InvalidNumberOrConstant) as ei:
        jp.parse("abc")
    assert ei.value.position == 0
    assert "'abc'" in str(ei.value)


@pytest.mark.parametrize("text", ["tru", "nul", "True", "1.2.3", "-", "12abc", "[1, 2x]"])
def test_malformed_tokens(text):
    with pytest.raises(jp.InvalidNumberOrConstant):
        jp.parse(text)


def test_invalid_token_position_inside_array():
    with pytest.raises(jp.InvalidNumberOrConstant) as ei:
        jp.parse("[1, bad]")
    assert ei.value.position == 4


def test_missing_colon():
    with pytest.raises(jp.MissingColon) as ei:
        jp.parse('{"a" 1}')
    assert ei.value.position == 5


@pytest.mark.parametrize("text", ["", "   ", "[", "[1,", '{"a":', '{"a": 1', '"open', '{"a'])
def test_unexpected_end_of_input(text):
    with pytest.raises(jp.UnexpectedEndOfInput):
        jp.parse(text)


def test_end_of_input_position_is_input_length():
    with pytest.raises(jp.UnexpectedEndOfInput) as ei:
        jp.parse("[1, ")
    assert ei.value.position == 4


@pytest.mark.parametrize("text", ["]", "}", "[1}", '{"a": ]}', "[,1]", "{1: 2}", '{"a": 1 "b": 2}', "[1 2]"])
def test_unexpected_character(text):
    with pytest.raises(jp.UnexpectedCharacter):
        jp.parse(text)


def test_nesting_too_deep():
    with pytest.raises(jp.NestingTooDeep):
        jp.parse("[" * 10 + "]" * 10, max_depth=5)
    assert jp.parse("[" * 5 + "]" * 5, max_depth=5) is not None


def test_nesting_past_recursion_limit_is_nesting_too_deep():
    depth = sys.getrecursionlimit() * 3
    with pytest.raises(jp.NestingTooDeep):
        jp.parse("[" * depth + "]" * depth, max_depth=depth * 2)


def test_parse_errors_are_syntax_errors():
    with pytest.raises(SyntaxError):
        jp.parse("[1, 2")


def test_missing_file_propagates_os_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        jp.parse_file(str(tmp_path / "absent.json"))


def test_stream_read_errors_propagate():
    class BrokenStream(io.StringIO):
        def read(self, size=-1):
            raise OSError("device gone")

    with pytest.raises(OSError, match="device gone"):
        jp.parse_stream(BrokenStream())
