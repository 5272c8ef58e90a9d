"""
Strict bencode decoding with a queryable value tree and JSON rendering.

Decodes the length-prefixed binary encoding used by BitTorrent metainfo files
into immutable `Value` trees, and renders those trees as JSON text.
"""

import io
import logging
import os
import time
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import IO
from typing import Any, TypeAlias

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

Position: TypeAlias = int

# Anything the construction helpers accept
Bencodable = Any
ValueData = (
    bytes | int | tuple["Value", ...] | tuple[tuple["Value", "Value"], ...]
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
# Declared string lengths are unsigned 64-bit
LENGTH_MAX = 2**64 - 1
_INDEX_DIGITS_MAX = len(str(LENGTH_MAX))

DEFAULT_CHUNK_SIZE = 64 * 1024

_INTEGER_PREFIX = ord("i")
_LIST_PREFIX = ord("l")
_DICTIONARY_PREFIX = ord("d")
_TERMINATOR = ord("e")
_MINUS = ord("-")
_COLON = ord(":")
_DIGIT_0 = ord("0")
_DIGIT_9 = ord("9")

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "BENCODEC_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one decoder production or writer call."""

    production: str
    call_count: int = 0
    total_time_ns: int = 0
    byte_count: int = 0

    def record(self, duration_ns: int, size: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.byte_count += size

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Times the enclosed block under a production name."""

        def __init__(self, production: str, size: int = 0):
            self.production = production
            self.size = size
            self.started_ns = 0

        def __enter__(self) -> "ProfileContext":
            self.started_ns = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            elapsed = time.perf_counter_ns() - self.started_ns
            stats = _hot_path_stats.setdefault(
                self.production, HotPathStats(self.production)
            )
            stats.record(elapsed, self.size)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the statistics keyed by production."""
        return dict(_hot_path_stats)

    def clear_hot_path_stats() -> None:
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, production: str, size: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class ErrorKind(Enum):
    """Closed set of reasons a decode can fail."""

    UNSIGNED_INTEGER_EXPECTED = "Unsigned integer expected"
    COLON_EXPECTED = "Expecting ':' after string length"
    UNEXPECTED_END_OF_INPUT = "Unexpected end of input"
    NEGATIVE_ZERO_OCCURRED = "Negative zero is not a valid integer"
    INTEGER_SUFFIX_EXPECTED = "Expecting 'e' after integer"
    UNRECOGNIZED_PREFIX = "Unrecognized value prefix"
    DICTIONARY_KEY_MUST_BE_STRING = "Dictionary key must be a string"
    EXPECTED_DICTIONARY_KEY_OR_TERMINATOR = (
        "Expecting dictionary key or 'e' terminator"
    )
    INTEGER_OVERFLOW = "Integer out of 64-bit range"
    INPUT_TOO_LARGE = "Input exceeds maximum size"
    TRAILING_DATA = "Extra data"


class DecodeError(ValueError):
    """
    Signals malformed bencoded input.

    Carries the failure `kind` for programmatic branching and the byte offset
    `pos` at which the parser gave up.
    """

    def __init__(self, kind: ErrorKind, pos: Position = 0) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError("kind must be an ErrorKind")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.kind = kind
        self.pos = pos
        self.msg = kind.value

        super().__init__(f"{self.msg} at byte {pos}")


class ValueType(Enum):
    """The four variants a decoded node can take."""

    STRING = "string"
    INTEGER = "integer"
    LIST = "list"
    DICTIONARY = "dictionary"


_PAYLOAD_TYPES: dict[ValueType, type] = {
    ValueType.STRING: bytes,
    ValueType.INTEGER: int,
    ValueType.LIST: tuple,
    ValueType.DICTIONARY: tuple,
}


@dataclass(frozen=True)
class Value:
    """
    One node of a decoded bencode tree.

    `data` holds raw bytes for strings, an int for integers, a tuple of child
    nodes for lists and a tuple of (key, value) node pairs for dictionaries.
    Dictionary pairs keep their encoding order; keys are neither sorted nor
    deduplicated, so lookups resolve to the first matching pair.

    Queries never raise for the wrong variant: text and lookup answer None,
    key and entry iteration come back empty.
    """

    type: ValueType
    data: ValueData

    def __post_init__(self) -> None:
        if not isinstance(self.type, ValueType):
            raise TypeError("type must be a ValueType")
        expected = _PAYLOAD_TYPES[self.type]
        if not isinstance(self.data, expected) or isinstance(self.data, bool):
            raise TypeError(
                f"{self.type.value} node requires {expected.__name__} data, "
                f"not {type(self.data).__name__}"
            )
        if self.type is ValueType.INTEGER and not (
            INT64_MIN <= self.data <= INT64_MAX  # type: ignore[operator]
        ):
            raise OverflowError(
                f"{self.data} does not fit in a signed 64-bit integer"
            )
        if self.type is ValueType.LIST:
            for item in self.data:  # type: ignore[union-attr]
                if not isinstance(item, Value):
                    raise TypeError(
                        "list items must be Value nodes, "
                        f"not {type(item).__name__}"
                    )
        elif self.type is ValueType.DICTIONARY:
            for pair in self.data:  # type: ignore[union-attr]
                if not _is_entry(pair):
                    raise TypeError(
                        "dictionary items must be (string node, Value) pairs"
                    )

    def __len__(self) -> int:
        if self.type is ValueType.INTEGER:
            return 1
        return len(self.data)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator["Value"]:
        return self.values()

    def is_empty(self) -> bool:
        return len(self) == 0

    def as_lossy_text(self) -> str | None:
        """Decodes a string node as UTF-8, replacing invalid sequences."""
        if self.type is not ValueType.STRING:
            return None
        return self.data.decode("utf-8", errors="replace")  # type: ignore[union-attr]

    def keys(self) -> Iterator["Value"]:
        if self.type is ValueType.DICTIONARY:
            for key, _ in self.data:  # type: ignore[union-attr]
                yield key

    def values(self) -> Iterator["Value"]:
        """Yields child values; a string or integer yields itself once."""
        if self.type is ValueType.LIST:
            yield from self.data  # type: ignore[misc]
        elif self.type is ValueType.DICTIONARY:
            for _, value in self.data:  # type: ignore[union-attr]
                yield value
        else:
            yield self

    def entries(self) -> Iterator[tuple["Value", "Value"]]:
        if self.type is ValueType.DICTIONARY:
            yield from self.data  # type: ignore[misc]

    def lookup(self, key: "str | bytes | int | Value") -> "Value | None":
        """
        Finds a dictionary value by key or a list element by index.

        Dictionary keys match on exact bytes (text keys are UTF-8 encoded) and
        the first matching pair wins. List indices must be non-negative ints,
        integer nodes or ASCII decimal text. Returns None when nothing matches
        or the key cannot apply to this node.
        """
        if self.type is ValueType.DICTIONARY:
            needle = _key_bytes(key)
            if needle is None:
                return None
            for candidate, value in self.data:  # type: ignore[union-attr]
                if candidate.data == needle:
                    return value
            return None
        if self.type is ValueType.LIST:
            index = _list_index(key)
            if index is None or index >= len(self.data):  # type: ignore[arg-type]
                return None
            return self.data[index]  # type: ignore[index,return-value]
        return None

    def to_python(self) -> Any:
        """
        Converts the tree to bytes, int, list and dict objects.

        Dictionary keys become bytes; on duplicate keys the first occurrence
        is kept, consistent with `lookup`.
        """
        if self.type is ValueType.LIST:
            return [item.to_python() for item in self.data]  # type: ignore[union-attr]
        if self.type is ValueType.DICTIONARY:
            result: dict[bytes, Any] = {}
            for key, value in self.data:  # type: ignore[union-attr]
                if key.data not in result:
                    result[key.data] = value.to_python()
            return result
        return self.data


def _is_entry(pair: Any) -> bool:
    return (
        isinstance(pair, tuple)
        and len(pair) == 2
        and isinstance(pair[0], Value)
        and pair[0].type is ValueType.STRING
        and isinstance(pair[1], Value)
    )


def _key_bytes(key: Any) -> bytes | None:
    if isinstance(key, Value):
        return key.data if key.type is ValueType.STRING else None  # type: ignore[return-value]
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, bytes | bytearray | memoryview):
        return bytes(key)
    return None


def _list_index(key: Any) -> int | None:
    if isinstance(key, Value):
        key = key.data if key.type is ValueType.INTEGER else None
    elif isinstance(key, str | bytes):
        # No list can be longer than LENGTH_MAX, so longer digit runs miss.
        if not (
            key.isdigit() and key.isascii() and len(key) <= _INDEX_DIGITS_MAX
        ):
            return None
        key = int(key)
    if isinstance(key, bool) or not isinstance(key, int) or key < 0:
        return None
    return key


def lossy_keys(value: Value) -> Iterator[str]:
    """Yields the lossy text of each dictionary key, in encoding order."""
    for key in value.keys():
        text = key.as_lossy_text()
        if text is not None:
            yield text


def integer(n: int) -> Value:
    """Builds an integer node, rejecting values outside the 64-bit range."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"integer requires int, not {type(n).__name__}")
    return Value(ValueType.INTEGER, n)


def string(s: str | bytes | bytearray | memoryview) -> Value:
    """Builds a string node; text is stored as UTF-8."""
    if isinstance(s, str):
        return Value(ValueType.STRING, s.encode("utf-8"))
    if isinstance(s, bytes | bytearray | memoryview):
        return Value(ValueType.STRING, bytes(s))
    raise TypeError(f"string requires str or bytes, not {type(s).__name__}")


def list_of(items: Iterable[Bencodable]) -> Value:
    return Value(ValueType.LIST, tuple(to_value(item) for item in items))


def dictionary(
    pairs: Mapping[Any, Bencodable] | Iterable[tuple[Any, Bencodable]],
) -> Value:
    """
    Builds a dictionary node keeping the given pair order.

    Keys may be text, bytes or string nodes. Pairs are not sorted into
    canonical order and duplicates are kept.
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    converted = []
    for key, item in items:
        if isinstance(key, Value):
            if key.type is not ValueType.STRING:
                raise TypeError("dictionary keys must be string nodes")
            key_node = key
        else:
            key_node = string(key)
        converted.append((key_node, to_value(item)))
    return Value(ValueType.DICTIONARY, tuple(converted))


def to_value(obj: Bencodable) -> Value:
    """Converts a native Python object into a value tree."""
    if isinstance(obj, Value):
        return obj
    elif isinstance(obj, int) and not isinstance(obj, bool):
        return integer(obj)
    elif isinstance(obj, str | bytes | bytearray | memoryview):
        return string(obj)
    elif isinstance(obj, Mapping):
        return dictionary(obj)
    elif isinstance(obj, list | tuple):
        return list_of(obj)
    else:
        msg = f"Object of type {type(obj).__name__} is not bencodable"
        raise TypeError(msg)


class BufferCursor:
    """
    Single-byte lookahead over an in-memory buffer.

    Tracks an absolute position and refuses to consume past `limit` bytes
    counted from `start`.
    """

    def __init__(
        self, data: bytes, start: Position = 0, limit: int | None = None
    ):
        self.data = data
        self.pos = start
        self.start = start
        self.length = len(data)
        self.limit = limit

    def _check_limit(self, count: int) -> None:
        consumed = self.pos - self.start
        if self.limit is not None and consumed + count > self.limit:
            raise DecodeError(
                ErrorKind.INPUT_TOO_LARGE, self.start + self.limit
            )

    def peek(self) -> int | None:
        """Returns current byte without advancing, None at end of input."""
        return self.data[self.pos] if self.pos < self.length else None

    def advance(self) -> int | None:
        """Returns current byte and advances position."""
        byte = self.peek()
        if byte is not None:
            self._check_limit(1)
            self.pos += 1
        return byte

    def read(self, count: int) -> bytes:
        """Consumes up to `count` bytes; shorter only at end of input."""
        self._check_limit(count)
        chunk = self.data[self.pos : self.pos + count]
        self.pos += len(chunk)
        return chunk


class StreamCursor:
    """
    Single-byte lookahead over a binary stream.

    Bytes are pulled from `fp` on demand, so decoding stops exactly after the
    last byte of a value. Bulk reads go through bounded chunks: a declared
    length larger than the stream only reads what the stream holds.
    """

    def __init__(
        self,
        fp: IO[bytes],
        limit: int | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.fp = fp
        self.pos = 0
        self.limit = limit
        self.chunk_size = chunk_size
        self._lookahead: int | None = None
        self._peeked = False

    def _check_limit(self, count: int) -> None:
        if self.limit is not None and self.pos + count > self.limit:
            raise DecodeError(ErrorKind.INPUT_TOO_LARGE, self.limit)

    def peek(self) -> int | None:
        """Returns current byte without advancing, None at end of stream."""
        if not self._peeked:
            chunk = self.fp.read(1)
            self._lookahead = chunk[0] if chunk else None
            self._peeked = True
        return self._lookahead

    def advance(self) -> int | None:
        """Returns current byte and advances position."""
        byte = self.peek()
        if byte is not None:
            self._check_limit(1)
            self.pos += 1
            self._peeked = False
        return byte

    def read(self, count: int) -> bytes:
        """Consumes up to `count` bytes; shorter only at end of stream."""
        self._check_limit(count)
        if count == 0:
            return b""

        buf = bytearray()
        if self._peeked:
            self._peeked = False
            if self._lookahead is None:
                return b""
            buf.append(self._lookahead)

        while len(buf) < count:
            chunk = self.fp.read(min(self.chunk_size, count - len(buf)))
            if not chunk:
                break
            buf += chunk

        self.pos += len(buf)
        return bytes(buf)


Cursor: TypeAlias = BufferCursor | StreamCursor


@dataclass(frozen=True)
class DecodeConfig:
    """
    Configures decoding behavior with immutable settings.

    `strict` rejects bytes left over after the top-level value. `max_size`
    caps the number of bytes a decode may consume; set it whenever the input
    is untrusted, since a declared string length is otherwise honored as is.
    """

    strict: bool = True
    max_size: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        if self.max_size is not None:
            if isinstance(self.max_size, bool) or not isinstance(
                self.max_size, int
            ):
                raise TypeError("max_size must be an integer or None")
            if self.max_size < 0:
                raise ValueError("max_size must be non-negative")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON rendering with immutable settings.

    `escape=False` writes string bytes verbatim between quotes. With
    `ensure_ascii`, strings are decoded lossily and every non-ASCII character
    is written as a \\u escape. The two cannot be combined, since verbatim
    bytes are not guaranteed to be ASCII.
    """

    escape: bool = True
    ensure_ascii: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.escape, bool):
            raise TypeError("escape must be a boolean")
        if not isinstance(self.ensure_ascii, bool):
            raise TypeError("ensure_ascii must be a boolean")
        if self.ensure_ascii and not self.escape:
            raise ValueError("ensure_ascii requires escape=True")


class BencodeParser:
    """
    Recursive descent parser over a byte cursor.

    The leading byte alone selects the production, so no backtracking is
    needed. Each production consumes exactly its own bytes and leaves the
    cursor on the byte that follows.
    """

    def __init__(self, cursor: Cursor, config: DecodeConfig):
        self.cursor = cursor
        self.config = config

    def _fail(
        self, kind: ErrorKind, pos: Position | None = None
    ) -> DecodeError:
        return DecodeError(kind, self.cursor.pos if pos is None else pos)

    def parse_value(self) -> Value:
        """Parses any value based on its leading byte."""
        prefix = self.cursor.peek()
        if prefix is None:
            raise self._fail(ErrorKind.UNEXPECTED_END_OF_INPUT)

        if prefix == _INTEGER_PREFIX:
            return self.parse_integer()
        elif prefix == _LIST_PREFIX:
            return self.parse_list()
        elif prefix == _DICTIONARY_PREFIX:
            return self.parse_dictionary()
        elif _DIGIT_0 <= prefix <= _DIGIT_9:
            return self.parse_string()
        else:
            raise self._fail(ErrorKind.UNRECOGNIZED_PREFIX)

    def parse_document(self) -> Value:
        """Parses the top-level value, rejecting leftovers in strict mode."""
        value = self.parse_value()
        if self.config.strict and self.cursor.peek() is not None:
            raise self._fail(ErrorKind.TRAILING_DATA)
        return value

    def _parse_unsigned(self, maximum: int) -> int:
        """Accumulates ASCII digits into a magnitude of at most `maximum`."""
        start = self.cursor.pos
        magnitude = 0
        while True:
            byte = self.cursor.peek()
            if byte is None or not _DIGIT_0 <= byte <= _DIGIT_9:
                break
            magnitude = magnitude * 10 + (byte - _DIGIT_0)
            if magnitude > maximum:
                raise self._fail(ErrorKind.INTEGER_OVERFLOW, start)
            self.cursor.advance()

        if self.cursor.pos == start:
            raise self._fail(ErrorKind.UNSIGNED_INTEGER_EXPECTED)
        return magnitude

    def parse_string(self) -> Value:
        """Parses `<length>:<bytes>` without inspecting the content."""
        with ProfileContext("parse_string"):
            length = self._parse_unsigned(LENGTH_MAX)

            if self.cursor.peek() != _COLON:
                raise self._fail(ErrorKind.COLON_EXPECTED)
            self.cursor.advance()

            data = self.cursor.read(length)
            if len(data) < length:
                raise self._fail(ErrorKind.UNEXPECTED_END_OF_INPUT)
            return Value(ValueType.STRING, data)

    def parse_integer(self) -> Value:
        """Parses `i[-]<digits>e` into a signed 64-bit integer."""
        with ProfileContext("parse_integer"):
            start = self.cursor.pos
            self.cursor.advance()

            negative = self.cursor.peek() == _MINUS
            if negative:
                self.cursor.advance()

            maximum = -INT64_MIN if negative else INT64_MAX
            magnitude = self._parse_unsigned(maximum)
            if negative and magnitude == 0:
                raise self._fail(ErrorKind.NEGATIVE_ZERO_OCCURRED, start)

            if self.cursor.peek() != _TERMINATOR:
                raise self._fail(ErrorKind.INTEGER_SUFFIX_EXPECTED)
            self.cursor.advance()

            number = -magnitude if negative else magnitude
            return Value(ValueType.INTEGER, number)

    def parse_list(self) -> Value:
        """Parses `l<values>e`."""
        with ProfileContext("parse_list"):
            self.cursor.advance()
            items: list[Value] = []

            while True:
                byte = self.cursor.peek()
                if byte is None:
                    raise self._fail(ErrorKind.UNEXPECTED_END_OF_INPUT)
                if byte == _TERMINATOR:
                    self.cursor.advance()
                    break
                items.append(self.parse_value())

            return Value(ValueType.LIST, tuple(items))

    def parse_dictionary(self) -> Value:
        """Parses `d<key value ...>e`; keys must decode to strings."""
        with ProfileContext("parse_dictionary"):
            self.cursor.advance()
            pairs: list[tuple[Value, Value]] = []

            while True:
                byte = self.cursor.peek()
                if byte is None:
                    raise self._fail(
                        ErrorKind.EXPECTED_DICTIONARY_KEY_OR_TERMINATOR
                    )
                if byte == _TERMINATOR:
                    self.cursor.advance()
                    break

                key_pos = self.cursor.pos
                key = self.parse_value()
                if key.type is not ValueType.STRING:
                    raise self._fail(
                        ErrorKind.DICTIONARY_KEY_MUST_BE_STRING, key_pos
                    )
                pairs.append((key, self.parse_value()))

            return Value(ValueType.DICTIONARY, tuple(pairs))


def _decode(cursor: Cursor, config: DecodeConfig) -> Value:
    with ProfileContext("decode"):
        try:
            return BencodeParser(cursor, config).parse_document()
        except DecodeError as exc:
            logger.debug("decode failed: %s", exc)
            raise


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, str):
        raise TypeError("the bencoded object must be bytes-like, not str")
    if isinstance(data, bytes):
        return data
    if isinstance(data, bytearray | memoryview):
        return bytes(data)
    raise TypeError(
        f"the bencoded object must be bytes-like, not {type(data).__name__}"
    )


def loads(data: bytes | bytearray | memoryview, **kwargs: Any) -> Value:
    """
    Decodes one bencoded value from an in-memory buffer.

    Raises DecodeError on the first grammar violation; no partial tree is
    returned.
    """
    buffer = _as_bytes(data)
    config = DecodeConfig(**kwargs)
    logger.debug("decoding %d bytes", len(buffer))
    return _decode(BufferCursor(buffer, limit=config.max_size), config)


def load(fp: IO[bytes], **kwargs: Any) -> Value:
    """
    Decodes one bencoded value from a binary stream, reading lazily.

    With strict=False the stream is left positioned right after the value.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")
    if isinstance(fp, io.TextIOBase):
        raise TypeError("fp must be opened in binary mode")

    config = DecodeConfig(**kwargs)
    logger.debug("decoding from stream %r", fp)
    return _decode(StreamCursor(fp, limit=config.max_size), config)


def decode_from(
    data: bytes | bytearray | memoryview,
    start: Position = 0,
    max_size: int | None = None,
) -> tuple[Position, Value]:
    """
    Decodes the value starting at `start` and returns the offset after it.

    Bytes following the value are left alone, so concatenated values can be
    walked by feeding the returned offset back in.
    """
    buffer = _as_bytes(data)
    if not 0 <= start <= len(buffer):
        raise ValueError("start must lie within the buffer")

    config = DecodeConfig(strict=False, max_size=max_size)
    cursor = BufferCursor(buffer, start, config.max_size)
    value = _decode(cursor, config)
    return cursor.pos, value


def _build_byte_escapes() -> list[bytes]:
    table = [bytes([byte]) for byte in range(256)]
    for byte in range(0x20):
        table[byte] = b"\\u%04x" % byte
    table[ord('"')] = b'\\"'
    table[ord("\\")] = b"\\\\"
    table[ord("\b")] = b"\\b"
    table[ord("\f")] = b"\\f"
    table[ord("\n")] = b"\\n"
    table[ord("\r")] = b"\\r"
    table[ord("\t")] = b"\\t"
    return table


_BYTE_ESCAPES = _build_byte_escapes()
_ASCII_LIMIT = 127


def _escape_ascii(text: str) -> bytes:
    """Escapes text into pure ASCII, using surrogate pairs above U+FFFF."""
    result = []
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            high = 0xD800 | (code >> 10)
            low = 0xDC00 | (code & 0x3FF)
            result.append(f"\\u{high:04x}\\u{low:04x}")
        elif code > _ASCII_LIMIT:
            result.append(f"\\u{code:04x}")
        else:
            result.append(_BYTE_ESCAPES[code].decode("ascii"))
    return "".join(result).encode("ascii")


def _write_string(data: bytes, fp: IO[bytes], config: EncodeConfig) -> None:
    """Writes string bytes as a quoted JSON string."""
    with ProfileContext("write_string", len(data)):
        if not config.escape:
            body = data
        elif config.ensure_ascii:
            body = _escape_ascii(data.decode("utf-8", errors="replace"))
        else:
            body = b"".join(_BYTE_ESCAPES[byte] for byte in data)
        fp.write(b'"')
        fp.write(body)
        fp.write(b'"')


def _write_value(value: Value, fp: IO[bytes], config: EncodeConfig) -> None:
    if value.type is ValueType.STRING:
        _write_string(value.data, fp, config)  # type: ignore[arg-type]
    elif value.type is ValueType.INTEGER:
        fp.write(b"%d" % value.data)
    elif value.type is ValueType.LIST:
        fp.write(b"[")
        for index, item in enumerate(value.values()):
            if index:
                fp.write(b",")
            _write_value(item, fp, config)
        fp.write(b"]")
    else:
        fp.write(b"{")
        for index, (key, item) in enumerate(value.entries()):
            if index:
                fp.write(b",")
            _write_value(key, fp, config)
            fp.write(b":")
            _write_value(item, fp, config)
        fp.write(b"}")


def dump(value: Value, fp: IO[bytes], **kwargs: Any) -> None:
    """
    Renders a value tree as compact JSON onto a binary sink.

    Errors raised by the sink propagate unchanged.
    """
    if not isinstance(value, Value):
        raise TypeError(
            f"Object of type {type(value).__name__} is not a bencode Value"
        )
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    config = EncodeConfig(**kwargs)
    with ProfileContext("dump"):
        _write_value(value, fp, config)


def dumps(value: Value, **kwargs: Any) -> bytes:
    """Renders a value tree as compact JSON bytes."""
    buf = io.BytesIO()
    dump(value, buf, **kwargs)
    logger.debug("rendered %d bytes of JSON", buf.tell())
    return buf.getvalue()


__all__ = [
    "BencodeParser",
    "BufferCursor",
    "DecodeConfig",
    "DecodeError",
    "EncodeConfig",
    "ErrorKind",
    "HotPathStats",
    "StreamCursor",
    "Value",
    "ValueType",
    "clear_hot_path_stats",
    "decode_from",
    "dictionary",
    "dump",
    "dumps",
    "get_hot_path_stats",
    "integer",
    "list_of",
    "load",
    "loads",
    "lossy_keys",
    "string",
    "to_value",
]
