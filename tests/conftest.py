"""
Pytest configuration and shared fixtures for bencodec tests.

Provides immutable test data fixtures built from the BEP 3 examples and the
malformed inputs each decode error kind must catch.
"""

from dataclasses import dataclass

import pytest

from bencodec import ErrorKind
from bencodec import Value
from bencodec import ValueType


@dataclass(frozen=True)
class BencodeTestCase:
    """
    Immutable container for bencode test case data.

    Holds the encoded input and either the expected tree or the expected
    failure kind and position.
    """

    description: str
    input_data: bytes
    expected_value: Value | None = None
    expected_kind: ErrorKind | None = None
    expected_pos: int = 0


def s(data: bytes) -> Value:
    return Value(ValueType.STRING, data)


def i(n: int) -> Value:
    return Value(ValueType.INTEGER, n)


def lst(*items: Value) -> Value:
    return Value(ValueType.LIST, items)


def dct(*pairs: tuple[Value, Value]) -> Value:
    return Value(ValueType.DICTIONARY, pairs)


@pytest.fixture
def valid_cases() -> list[BencodeTestCase]:
    """
    Provides well-formed encodings with their hand-built trees.
    """
    return [
        BencodeTestCase("string", b"4:spam", s(b"spam")),
        BencodeTestCase("empty string", b"0:", s(b"")),
        BencodeTestCase("integer", b"i4e", i(4)),
        BencodeTestCase("negative integer", b"i-4e", i(-4)),
        BencodeTestCase("zero", b"i0e", i(0)),
        BencodeTestCase("leading zeros", b"i003e", i(3)),
        BencodeTestCase("empty list", b"le", lst()),
        BencodeTestCase(
            "list of strings", b"l4:spam4:eggse", lst(s(b"spam"), s(b"eggs"))
        ),
        BencodeTestCase("empty dictionary", b"de", dct()),
        BencodeTestCase(
            "dictionary",
            b"d3:cow3:moo4:spam4:eggse",
            dct((s(b"cow"), s(b"moo")), (s(b"spam"), s(b"eggs"))),
        ),
        BencodeTestCase(
            "dictionary holding a list",
            b"d4:spaml1:a1:bee",
            dct((s(b"spam"), lst(s(b"a"), s(b"b")))),
        ),
        BencodeTestCase(
            "nested containers",
            b"lli1ei2eedee",
            lst(lst(i(1), i(2)), dct()),
        ),
    ]


@pytest.fixture
def fail_cases() -> list[BencodeTestCase]:
    """
    Provides malformed encodings with the error kind and byte offset each
    must be rejected with.
    """
    return [
        BencodeTestCase(
            "empty input", b"", expected_kind=ErrorKind.UNEXPECTED_END_OF_INPUT
        ),
        BencodeTestCase(
            "negative zero",
            b"i-0e",
            expected_kind=ErrorKind.NEGATIVE_ZERO_OCCURRED,
        ),
        BencodeTestCase(
            "unterminated integer",
            b"i42",
            expected_kind=ErrorKind.INTEGER_SUFFIX_EXPECTED,
            expected_pos=3,
        ),
        BencodeTestCase(
            "integer closed by colon",
            b"i42:",
            expected_kind=ErrorKind.INTEGER_SUFFIX_EXPECTED,
            expected_pos=3,
        ),
        BencodeTestCase(
            "integer without digits",
            b"ie",
            expected_kind=ErrorKind.UNSIGNED_INTEGER_EXPECTED,
            expected_pos=1,
        ),
        BencodeTestCase(
            "short string",
            b"10:abc",
            expected_kind=ErrorKind.UNEXPECTED_END_OF_INPUT,
            expected_pos=6,
        ),
        BencodeTestCase(
            "string length without colon",
            b"4spam",
            expected_kind=ErrorKind.COLON_EXPECTED,
            expected_pos=1,
        ),
        BencodeTestCase(
            "unknown prefix",
            b"x",
            expected_kind=ErrorKind.UNRECOGNIZED_PREFIX,
        ),
        BencodeTestCase(
            "list as dictionary key",
            b"dle1:ae",
            expected_kind=ErrorKind.DICTIONARY_KEY_MUST_BE_STRING,
            expected_pos=1,
        ),
        BencodeTestCase(
            "unclosed dictionary",
            b"d3:cow3:moo",
            expected_kind=ErrorKind.EXPECTED_DICTIONARY_KEY_OR_TERMINATOR,
            expected_pos=11,
        ),
        BencodeTestCase(
            "unclosed list",
            b"l4:spam",
            expected_kind=ErrorKind.UNEXPECTED_END_OF_INPUT,
            expected_pos=7,
        ),
    ]
