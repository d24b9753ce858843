# json_parser.py
# Character-driven JSON parser building a hash-table-backed value tree
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT ON ONE CHARACTER OF LOOKAHEAD
# =============================================================================
#
# There is no token stream. Each rule asks the scanner for the next
# significant character and the value dispatcher picks a rule from that one
# character:
#
#   "       -> string rule
#   [       -> array rule
#   {       -> object rule
#   ] or }  -> NO_VALUE, the closing delimiter the enclosing rule waits for
#   other   -> number-or-constant rule
#
# Numbers, booleans and null share one rule. It collects characters up to the
# next delimiter and classifies the text afterwards: 32-bit integer first,
# then decimal, then the literals true/false/null.
#
# Objects are stored in json_hash.HashTable, arrays in a tuple.
#
# Known simplifications:
# 1. Strings keep escape sequences verbatim. A backslash only stops the
#    following quote from closing the string; \n, \uXXXX and the rest are not
#    decoded or validated.
# 2. Numbers are checked loosely. Anything Decimal-shaped becomes a real.
# 3. A trailing comma before ] or } is accepted.
#
# Depth guard stops runaway nesting before Python's recursion limit does.
# =============================================================================

import argparse
import io
import re
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional, TextIO, Union

from json_hash import HashTable
from json_scanner import END_OF_INPUT, Scanner, is_whitespace
from json_values import (
    INT_MAX,
    INT_MIN,
    JSONArray,
    JSONConstant,
    JSONInteger,
    JSONObject,
    JSONReal,
    JSONString,
    Value,
    dump,
    dumps,
)

__all__ = [
    "DEPTH_LIMIT_DEFAULT",
    "NO_VALUE",
    "InvalidNumberOrConstant",
    "JSONParseError",
    "MissingColon",
    "NestingTooDeep",
    "TrailingCharacters",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "dump",
    "dumps",
    "parse",
    "parse_file",
    "parse_stream",
]

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256        # deepest accepted nesting of arrays and objects

_CLOSERS    = "]}"
_DELIMITERS = ",:" + _CLOSERS    # end a bare token without being part of it

_CONSTANTS = {
    "true":  JSONConstant.TRUE,
    "false": JSONConstant.FALSE,
    "null":  JSONConstant.NULL,
}

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class JSONParseError(SyntaxError):
    """
    Base parse failure: a message and the character offset it was found at.

    Subclasses name the rule that failed so callers can tell them apart
    without matching on message text.
    """
    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at offset {position}")
        self.message = message
        self.position = position


class UnexpectedEndOfInput(JSONParseError):
    pass


class UnexpectedCharacter(JSONParseError):
    pass


class InvalidNumberOrConstant(JSONParseError):
    pass


class MissingColon(JSONParseError):
    pass


class TrailingCharacters(JSONParseError):
    pass


class NestingTooDeep(JSONParseError):
    pass


# ---------------------------------------------------------------------------
# SENTINEL
# ---------------------------------------------------------------------------
class _NoValue:
    """Returned by the dispatcher when it meets the expected closing delimiter."""

    def __repr__(self):
        return "NO_VALUE"


NO_VALUE = _NoValue()

# ---------------------------------------------------------------------------
# CORE VALUE DISPATCH
# ---------------------------------------------------------------------------
def _parse_value(scanner: Scanner, ch: str, depth: int, max_depth: int,
                 closer: Optional[str] = None) -> Union[Value, _NoValue]:
    """
    Run the rule selected by lookahead `ch`.

    `closer` is the delimiter the enclosing container accepts in place of a
    value. Any other closing delimiter here is out of place.
    """
    if ch == END_OF_INPUT:
        raise UnexpectedEndOfInput("unexpected end of input", scanner.offset)
    if ch == '"':
        return _parse_string(scanner)
    if ch == "[":
        return _parse_array(scanner, depth + 1, max_depth)
    if ch == "{":
        return _parse_object(scanner, depth + 1, max_depth)
    if ch in _CLOSERS:
        if ch == closer:
            return NO_VALUE
        raise UnexpectedCharacter(f"unexpected '{ch}' - value expected", scanner.offset)
    if ch in _DELIMITERS:
        raise UnexpectedCharacter(f"unexpected '{ch}' - value expected", scanner.offset)
    return _parse_number_or_constant(scanner, ch)


def _check_depth(scanner: Scanner, depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise NestingTooDeep(f"nesting deeper than {max_depth}", scanner.offset)

# ---------------------------------------------------------------------------
# STRING RULE
# ---------------------------------------------------------------------------
def _parse_string(scanner: Scanner) -> JSONString:
    """
    Collect characters after an opening quote up to the closing one.

    The closing quote is dropped. Escapes are tracked only to find that
    quote; the payload keeps them as written.
    """
    chars: List[str] = []
    escaped = False
    while True:
        ch = scanner.read()
        if ch == END_OF_INPUT:
            raise UnexpectedEndOfInput("unterminated string", scanner.offset)
        if ch == '"' and not escaped:
            return JSONString("".join(chars))
        escaped = ch == "\\" and not escaped
        chars.append(ch)

# ---------------------------------------------------------------------------
# ARRAY RULE
# ---------------------------------------------------------------------------
def _parse_array(scanner: Scanner, depth: int, max_depth: int) -> JSONArray:
    _check_depth(scanner, depth, max_depth)
    items: List[Value] = []
    while True:
        value = _parse_value(scanner, scanner.next_non_whitespace(), depth, max_depth, "]")
        if value is NO_VALUE:
            break
        items.append(value)
        ch = scanner.next_non_whitespace()
        if ch == "]":
            break
        if ch == END_OF_INPUT:
            raise UnexpectedEndOfInput("unterminated array", scanner.offset)
        if ch != ",":
            raise UnexpectedCharacter(f"unexpected '{ch}' - expected ',' or ']'", scanner.offset)
    return JSONArray(items)

# ---------------------------------------------------------------------------
# OBJECT RULE
# ---------------------------------------------------------------------------
def _parse_object(scanner: Scanner, depth: int, max_depth: int) -> JSONObject:
    """
    Parse `"key" : value` pairs into a fresh HashTable until `}`.

    A repeated key overwrites the earlier value.
    """
    _check_depth(scanner, depth, max_depth)
    table: HashTable = HashTable()
    while True:
        ch = scanner.next_non_whitespace()
        if ch == "}":
            break
        if ch == END_OF_INPUT:
            raise UnexpectedEndOfInput("unterminated object", scanner.offset)
        if ch != '"':
            raise UnexpectedCharacter(f"unexpected '{ch}' - expected string key", scanner.offset)
        key = _parse_string(scanner)
        if scanner.next_non_whitespace() != ":":
            raise MissingColon("expected ':' after object key", scanner.offset)
        table.set(key, _parse_value(scanner, scanner.next_non_whitespace(), depth, max_depth))

        ch = scanner.next_non_whitespace()
        if ch == "}":
            break
        if ch == END_OF_INPUT:
            raise UnexpectedEndOfInput("unterminated object", scanner.offset)
        if ch != ",":
            raise UnexpectedCharacter(f"unexpected '{ch}' - expected ',' or '}}'", scanner.offset)
    return JSONObject(table)

# ---------------------------------------------------------------------------
# NUMBER-OR-CONSTANT RULE
# ---------------------------------------------------------------------------
def _parse_number_or_constant(scanner: Scanner, ch: str) -> Value:
    """
    Collect a bare token starting at `ch` and classify it.

    The token ends at whitespace, end of input, or one of `, : ] }`; that
    delimiter is handed back to the scanner for the enclosing rule.
    """
    start = scanner.offset
    chars = [ch]
    ch = scanner.read()
    while ch != END_OF_INPUT and not is_whitespace(ch) and ch not in _DELIMITERS:
        chars.append(ch)
        ch = scanner.read()
    scanner.unread(ch)
    text = "".join(chars)

    if _INTEGER.fullmatch(text):
        number = int(text)
        if INT_MIN <= number <= INT_MAX:
            return JSONInteger(number)
    if _DECIMAL.fullmatch(text):
        try:
            return JSONReal(Decimal(text))
        except InvalidOperation:
            pass
    if text in _CONSTANTS:
        return _CONSTANTS[text]
    raise InvalidNumberOrConstant(f"invalid number or constant '{text}'", start)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse_stream(stream: TextIO, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Value:
    """
    Parse exactly one JSON value from an open text stream.

    Everything after the value must be whitespace. The stream is left open;
    read errors propagate as they are.
    """
    scanner = Scanner(stream)
    try:
        result = _parse_value(scanner, scanner.next_non_whitespace(), 0, max_depth)
    except RecursionError:
        raise NestingTooDeep("nesting exceeds the interpreter recursion limit",
                             scanner.offset) from None
    if scanner.next_non_whitespace() != END_OF_INPUT:
        raise TrailingCharacters("extra data after root value", scanner.offset)
    return result


def parse(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Value:
    """Parse JSON text held in memory."""
    return parse_stream(io.StringIO(text), max_depth=max_depth)


def parse_file(path: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT,
               encoding: str = "utf-8") -> Value:
    """Open `path`, parse it, and close it again whether or not parsing succeeds."""
    with open(path, "r", encoding=encoding, newline="") as stream:
        return parse_stream(stream, max_depth=max_depth)

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Command-line validator.

    Exit codes: 0 parsed, 1 JSON syntax error, 2 file could not be read or
    decoded.
    """
    ap = argparse.ArgumentParser(description="hashjson validator")
    ap.add_argument("file", help="JSON file to verify")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--print", dest="echo", action="store_true",
                    help="write the parsed value back out instead of OK")
    args = ap.parse_args(argv)

    try:
        value = parse_file(args.file, max_depth=args.max_depth)
    except JSONParseError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    except (OSError, UnicodeError) as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 2

    if args.echo:
        dump(value, sys.stdout)
    else:
        print("OK")
    return 0

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
def main() -> int:
    return _cli(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
