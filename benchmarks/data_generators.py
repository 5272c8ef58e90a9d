"""
Test data generators for bencode benchmarks.

Builds the same documents in three shapes so libraries can be compared on
equal content:
- bencoded bytes for bencodec decoding
- JSON text for the JSON library baselines
- native objects for rendering baselines
"""

import io
import json
import random
import string
from typing import Any

# Constants for random data generation
_INT_TYPE = 1
_STRING_TYPE = 2
_ESCAPE_PROBABILITY = 0.3
_PIECE_HASH_SIZE = 20


def generate_document(data_type: str) -> dict[str, Any] | list[Any]:
    """Generates a native document of the given type."""
    generators = {
        "small_metainfo": _generate_small_metainfo,
        "large_metainfo": _generate_large_metainfo,
        "mixed_list": _generate_mixed_list,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    random.seed(data_type)
    return generators[data_type]()


def generate_bencoded(data_type: str) -> bytes:
    """Generates the bencoded form of a document."""
    buf = io.BytesIO()
    _bencode(generate_document(data_type), buf)
    return buf.getvalue()


def generate_json(data_type: str) -> str:
    """Generates the JSON form of a document."""
    return json.dumps(generate_document(data_type), separators=(",", ":"))


def _bencode(obj: Any, buf: io.BytesIO) -> None:
    # Fixture encoder; keys are written in the order given.
    if isinstance(obj, int):
        buf.write(b"i%de" % obj)
    elif isinstance(obj, str):
        raw = obj.encode("utf-8")
        buf.write(b"%d:" % len(raw))
        buf.write(raw)
    elif isinstance(obj, list):
        buf.write(b"l")
        for item in obj:
            _bencode(item, buf)
        buf.write(b"e")
    elif isinstance(obj, dict):
        buf.write(b"d")
        for key, value in obj.items():
            _bencode(key, buf)
            _bencode(value, buf)
        buf.write(b"e")
    else:
        raise TypeError(type(obj))


def _generate_small_metainfo() -> dict[str, Any]:
    """Generates a single-file metainfo dictionary (< 1KB)."""
    return {
        "announce": "udp://tracker.example.org:1337/announce",
        "comment": "Small sample",
        "creation date": 1608033138,
        "info": {
            "length": 36947471188,
            "name": "sample.iso",
            "piece length": 262144,
            "pieces": _random_hashes(8),
        },
    }


def _generate_large_metainfo() -> dict[str, Any]:
    """Generates a multi-file metainfo dictionary (> 10KB)."""
    files = [
        {
            "length": random.randint(1, 2**40),
            "path": [_random_string(8), _random_string(12) + ".bin"],
        }
        for _ in range(150)
    ]
    return {
        "announce": f"http://{_random_string(10)}.example.net/announce",
        "announce-list": [
            [f"udp://{_random_string(8)}.example.org:{port}/announce"]
            for port in range(6881, 6891)
        ],
        "created by": "bencodec benchmarks",
        "creation date": random.randint(10**9, 2 * 10**9),
        "info": {
            "files": files,
            "name": _random_string(16),
            "piece length": 2**20,
            "pieces": _random_hashes(200),
        },
    }


def _generate_mixed_list() -> list[Any]:
    """Generates a large list of integers, strings and small dictionaries."""
    items: list[Any] = []
    for index in range(200):
        choice = random.randint(1, 3)
        if choice == _INT_TYPE:
            items.append(random.randint(-(2**40), 2**40))
        elif choice == _STRING_TYPE:
            items.append(_random_string(random.randint(5, 30)))
        else:
            items.append({"index": index, "value": _random_string(10)})
    return items


def _generate_nested_structure() -> dict[str, Any]:
    """Generates deeply nested dictionaries and lists."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "level": depth,
            "nested": create_nested_dict(depth - 1),
        }

    return create_nested_dict(7)


def _generate_string_heavy() -> dict[str, Any]:
    """Generates strings full of characters JSON has to escape."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(
                    random.choice(['"', "\\", "\b", "\f", "\n", "\r", "\t"])
                )
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "mixed": {
            f"key_{index}": create_escaped_string() for index in range(20)
        },
        "strings": [create_escaped_string() for _ in range(100)],
        "unicode": [f"café €{index}" for index in range(50)],
    }


def _random_hashes(count: int) -> str:
    """Generates a printable stand-in for concatenated SHA-1 piece hashes."""
    return _random_string(_PIECE_HASH_SIZE * count)


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
